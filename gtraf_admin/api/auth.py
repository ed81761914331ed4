from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession
from gtraf_admin.schemas.auth import TokenOut, CurrentUser
from gtraf_admin.schemas.reservation import EMAIL_PATTERN
from gtraf_admin.db.session import get_db
from gtraf_admin.core.security import authenticate, create_access_token, get_current_user, MIN_PASSWORD_LENGTH
from gtraf_admin.core.audit_log import log_login
from gtraf_admin.services.api_client import GtrafApiClient, get_api_client

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenOut)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db),
    client: GtrafApiClient = Depends(get_api_client),
):
    email = form_data.username.strip()
    if not EMAIL_PATTERN.match(email):
        raise HTTPException(status_code=422, detail="Invalid email")
    if len(form_data.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=422,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )

    user = await authenticate(email, form_data.password, client)
    if not user:
        raise HTTPException(status_code=400, detail="Invalid credentials")

    await log_login(db, user["id"], email)

    token = create_access_token(user["id"], user["email"])
    return {"access_token": token, "user": user}


@router.get("/me", response_model=CurrentUser)
async def me(current_user: CurrentUser = Depends(get_current_user)):
    return current_user
