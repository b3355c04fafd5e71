"""Pydantic schemas for admin endpoints."""

from pydantic import BaseModel


class UserStatus(BaseModel):
    id: int
    username: str
    email: str
    is_active: bool

    model_config = {"from_attributes": True}


class UserStatusResponse(BaseModel):
    success: bool = True
    message: str
    data: UserStatus
