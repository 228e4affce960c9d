from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, TypeAdapter, ValidationError

from .base import PatchModel, RecordResponse


class UserCreate(BaseModel):
    """User creation payload (first external login or admin provisioning)"""
    external_id: Optional[str] = Field(None, description="External identity provider subject id")
    email: EmailStr = Field(..., description="User email address")
    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    picture: Optional[str] = Field(None, description="Avatar URL")
    is_admin: bool = Field(default=False, description="Administrator flag")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "external_id": "108234567890123456789",
                "email": "user@example.com",
                "name": "John Doe",
                "picture": "https://example.com/avatar.png",
                "is_admin": False
            }
        }
    )


class UserUpdate(PatchModel):
    """User update model (partial updates allowed, closed field set)"""
    non_nullable = ("email", "name", "is_admin", "is_active")

    external_id: Optional[str] = Field(None, description="External identity provider subject id")
    email: Optional[EmailStr] = Field(None, description="User email address")
    name: Optional[str] = Field(None, min_length=1, max_length=255, description="Display name")
    picture: Optional[str] = Field(None, description="Avatar URL")
    is_admin: Optional[bool] = Field(None, description="Administrator flag")
    is_active: Optional[bool] = Field(None, description="Account active status")
    last_login: Optional[datetime] = Field(None, description="Last login timestamp")


class UserSummary(RecordResponse):
    """User listing entry without the external identity column"""
    id: int
    email: str
    name: str
    picture: Optional[str] = None
    is_admin: bool
    is_active: bool
    created_at: datetime
    last_login: Optional[datetime] = None


class UserResponse(UserSummary):
    """Full user record"""
    external_id: Optional[str] = None


_email_adapter = TypeAdapter(EmailStr)


def normalize_email(email: str) -> Optional[str]:
    """Apply the same normalization EmailStr applies on create; None if invalid"""
    try:
        return _email_adapter.validate_python(email)
    except ValidationError:
        return None
