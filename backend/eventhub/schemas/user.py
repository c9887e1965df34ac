"""
Pydantic schemas for user-related request/response validation.
"""

from typing import Optional
from pydantic import EmailStr, Field, field_validator

from eventhub.schemas.base import CamelModel, PatchModel

# bcrypt only hashes the first 72 bytes and newer releases reject anything longer
PASSWORD_MAX_BYTES = 72


def check_password_bytes(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
    return value


class UserCreate(CamelModel):
    # No is_admin here: the flag can never be set at registration
    username: str = Field(..., min_length=3, max_length=100, pattern=r"^[a-zA-Z0-9_]+$")
    password: str = Field(..., min_length=8, max_length=72)
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=255)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return check_password_bytes(value)


class UserLogin(CamelModel):
    username: str
    password: str


class UserUpdate(PatchModel):
    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    password: Optional[str] = Field(None, min_length=8, max_length=72)
    is_admin: Optional[bool] = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: Optional[str]) -> Optional[str]:
        return check_password_bytes(value)


class ProfileUpdate(PatchModel):
    """Self-service subset of UserUpdate; the admin flag is not part of it."""

    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    password: Optional[str] = Field(None, min_length=8, max_length=72)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: Optional[str]) -> Optional[str]:
        return check_password_bytes(value)


class AdminFlagUpdate(CamelModel):
    is_admin: bool = Field(..., strict=True)


class UserResponse(CamelModel):
    id: int
    username: str
    email: str
    name: str
    is_admin: bool


class SessionResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
