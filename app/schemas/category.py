"""Pydantic schemas for category endpoints."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints, field_validator

CategoryName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]


class CategoryCreate(BaseModel):
    name: CategoryName
    description: str | None = Field(default=None, max_length=200)


class CategoryUpdate(BaseModel):
    name: CategoryName | None = None
    description: str | None = Field(default=None, max_length=200)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("name cannot be null")
        return v


class CategoryOut(BaseModel):
    id: int
    name: str
    description: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class CategoryResponse(BaseModel):
    success: bool = True
    message: str | None = None
    data: CategoryOut


class CategoryListResponse(BaseModel):
    success: bool = True
    data: list[CategoryOut]
