"""Pydantic schemas for authentication endpoints."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints, field_validator

# Usernames end up in email subject lines, so control characters are refused.
Username = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50, pattern=r"^[^\x00-\x1f\x7f]+$")
]


class SocialMedia(BaseModel):
    instagram: str | None = None
    facebook: str | None = None
    twitter: str | None = None


class ContactInfo(BaseModel):
    phone: str | None = None
    website: str | None = None
    social_media: SocialMedia | None = None


class RegisterRequest(BaseModel):
    username: Username
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=6, max_length=255)
    bio: str | None = Field(default=None, max_length=500)


class LoginRequest(BaseModel):
    email: str
    password: str


class ForgotPasswordRequest(BaseModel):
    email: str


class ResetPasswordRequest(BaseModel):
    email: str
    code: str = Field(pattern=r"^\d{6}$")
    password: str = Field(min_length=6, max_length=255)


class ProfileUpdateRequest(BaseModel):
    """Partial profile update. Omitted fields are left alone; username cannot be cleared."""

    username: Username | None = None
    bio: str | None = Field(default=None, max_length=500)
    contact_info: ContactInfo | None = None

    @field_validator("username")
    @classmethod
    def username_not_null(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("username cannot be null")
        return v


class UserProfile(BaseModel):
    """Public view of an account. Never carries the password hash or one-time secrets."""

    id: int
    username: str
    email: str
    role: str
    is_active: bool
    is_email_verified: bool
    bio: str | None = None
    profile_image: str | None = None
    contact_info: ContactInfo | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class RegisterResponse(BaseModel):
    success: bool = True
    message: str
    data: UserProfile


class LoginData(BaseModel):
    token: str
    user: UserProfile


class LoginResponse(BaseModel):
    success: bool = True
    data: LoginData


class ProfileResponse(BaseModel):
    success: bool = True
    data: UserProfile
