from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from gtraf_admin.core.enums import ProjectType, Budget
from gtraf_admin.schemas.reservation import EMAIL_PATTERN


class DevisCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    email: str
    phone: Optional[str] = None
    project_type: ProjectType
    budget: Optional[Budget] = None
    message: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def email_format(cls, value: str) -> str:
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Invalid email")
        return value

    @field_validator("phone", "budget", mode="before")
    @classmethod
    def blank_as_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class DevisOut(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    project_type: Optional[str] = None
    budget: Optional[str] = None
    message: Optional[str] = None
    created_at: Optional[str] = None
