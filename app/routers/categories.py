"""Category API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import CurrentUser, require_super_admin
from app.schemas.category import (
    CategoryCreate,
    CategoryListResponse,
    CategoryOut,
    CategoryResponse,
    CategoryUpdate,
)
from app.schemas.common import MessageResponse
from app.services.category import get_category_service

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("/", response_model=CategoryListResponse)
def list_categories(db: Session = Depends(get_db)) -> CategoryListResponse:
    """List all categories by name."""
    service = get_category_service()
    return CategoryListResponse(data=[CategoryOut.model_validate(c) for c in service.list_categories(db)])


@router.post("/", response_model=CategoryResponse, status_code=201)
def create_category(
    body: CategoryCreate,
    _admin: CurrentUser = Depends(require_super_admin),
    db: Session = Depends(get_db),
) -> CategoryResponse:
    service = get_category_service()
    category = service.create_category(db, body.name, body.description)
    return CategoryResponse(message="Category created successfully", data=CategoryOut.model_validate(category))


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    body: CategoryUpdate,
    _admin: CurrentUser = Depends(require_super_admin),
    db: Session = Depends(get_db),
) -> CategoryResponse:
    service = get_category_service()
    category = service.update_category(db, category_id, body.model_dump(exclude_unset=True))
    return CategoryResponse(message="Category updated successfully", data=CategoryOut.model_validate(category))


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: int,
    _admin: CurrentUser = Depends(require_super_admin),
    db: Session = Depends(get_db),
) -> MessageResponse:
    service = get_category_service()
    service.delete_category(db, category_id)
    return MessageResponse(message="Category deleted successfully")
