"""Super admin API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import CurrentUser, require_super_admin
from app.schemas.admin import UserStatus, UserStatusResponse
from app.schemas.common import MessageResponse
from app.services.admin import AdminService, get_admin_service
from app.services.artwork import ArtworkService, get_artwork_service

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.put("/users/{user_id}/toggle-status", response_model=UserStatusResponse)
def toggle_user_status(
    user_id: int,
    _admin: CurrentUser = Depends(require_super_admin),
    db: Session = Depends(get_db),
    service: AdminService = Depends(get_admin_service),
) -> UserStatusResponse:
    """Activate or deactivate an artist account."""
    user = service.toggle_status(db, user_id)
    return UserStatusResponse(
        message=f"User {'activated' if user.is_active else 'deactivated'} successfully",
        data=UserStatus.model_validate(user),
    )


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    _admin: CurrentUser = Depends(require_super_admin),
    db: Session = Depends(get_db),
    service: AdminService = Depends(get_admin_service),
) -> MessageResponse:
    """Delete an account and everything it owns."""
    service.delete_user(db, user_id)
    return MessageResponse(message="User deleted successfully")


@router.delete("/artworks/{artwork_id}", response_model=MessageResponse)
def delete_artwork(
    artwork_id: int,
    admin: CurrentUser = Depends(require_super_admin),
    db: Session = Depends(get_db),
    service: ArtworkService = Depends(get_artwork_service),
) -> MessageResponse:
    """Delete any artwork."""
    service.delete_artwork(db, artwork_id, admin)
    return MessageResponse(message="Artwork deleted successfully")
