"""Pydantic schemas for artwork endpoints."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints, field_validator

from app.models.artwork import ArtworkStatus

# Columns that may be left out of an update but never set to null.
REQUIRED_ON_UPDATE = ("title", "size", "status", "sold")


class ArtworkUpdate(BaseModel):
    """Editable artwork fields. Ownership and stored files are not editable here."""

    title: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)] | None = None
    description: str | None = None
    size: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)] | None = None
    media: str | None = Field(default=None, max_length=100)
    print_number: str | None = Field(default=None, max_length=50)
    inventory_number: str | None = Field(default=None, max_length=50)
    status: ArtworkStatus | None = None
    price: float | None = Field(default=None, ge=0)
    location: str | None = Field(default=None, max_length=255)
    notes: str | None = None
    sold: bool | None = None
    category_id: int | None = None
    tags: list[str] | None = None

    @field_validator(*REQUIRED_ON_UPDATE)
    @classmethod
    def not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class ArtistSummary(BaseModel):
    id: int
    username: str
    email: str
    profile_image: str | None = None

    model_config = {"from_attributes": True}


class ArtworkOut(BaseModel):
    id: int
    title: str
    description: str | None
    thumbnail: str | None
    images: list[str] | None
    size: str
    media: str | None
    print_number: str | None
    inventory_number: str | None
    status: str
    price: float | None
    location: str | None
    notes: str | None
    sold: bool
    tags: list[str] | None
    artist_id: int
    category_id: int | None
    artist: ArtistSummary | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ArtworkResponse(BaseModel):
    success: bool = True
    data: ArtworkOut


class ArtworkListResponse(BaseModel):
    success: bool = True
    data: list[ArtworkOut]
