import logging
from datetime import datetime, timezone, timedelta
from typing import Optional
from jose import jwt, JWTError
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from passlib.context import CryptContext
from gtraf_admin.core.config import settings
from gtraf_admin.schemas.auth import CurrentUser
from gtraf_admin.services.api_client import GtrafApiClient, UpstreamError

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")

JWT_ALGORITHM = "HS256"
MIN_PASSWORD_LENGTH = 6

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False

def create_access_token(subject: str, email: Optional[str] = None, expires_minutes: int | None = None) -> str:
    expires = expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    expire_dt = datetime.now(timezone.utc) + timedelta(minutes=expires)
    to_encode = {"sub": str(subject), "email": email, "exp": expire_dt}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=JWT_ALGORITHM)

async def authenticate(email: str, password: str, client: GtrafApiClient) -> Optional[dict]:
    """Return the user document for valid credentials, None otherwise.

    A locally configured admin is checked first; any other account is
    checked by the upstream login endpoint.
    """
    if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD_HASH and email == settings.ADMIN_EMAIL:
        if verify_password(password, settings.ADMIN_PASSWORD_HASH):
            return {"id": "admin", "email": email}
        return None

    try:
        result = await client.login(email, password)
    except UpstreamError as e:
        if e.status_code is None:
            raise
        logger.info(f"Upstream login refused for {email}: {e.message}")
        return None

    user = result.get("user") or {}
    return {**user, "id": str(user.get("id") or email), "email": user.get("email") or email}

async def get_current_user(token: str = Depends(oauth2_scheme)) -> CurrentUser:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[JWT_ALGORITHM])
        user_id = payload.get("sub")
        if user_id is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return CurrentUser(id=user_id, email=payload.get("email"))
