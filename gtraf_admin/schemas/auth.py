from pydantic import BaseModel
from typing import Optional


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: Optional[dict] = None


class CurrentUser(BaseModel):
    id: str
    email: Optional[str] = None
