"""Super admin account management."""

import logging

from sqlalchemy.orm import Session

from app.exceptions import NotFound, ValidationError
from app.models.artwork import Artwork
from app.models.user import Role, User
from app.services.storage import ImageStorage, get_image_storage

logger = logging.getLogger("atelier")


class AdminService:
    """Activation toggling and account deletion."""

    def __init__(self, storage: ImageStorage) -> None:
        self.storage = storage

    def _get_user(self, db: Session, user_id: int) -> User:
        user = db.get(User, user_id)
        if not user:
            raise NotFound("User not found")
        return user

    def toggle_status(self, db: Session, user_id: int) -> User:
        """Flip is_active on an artist account."""
        user = self._get_user(db, user_id)
        if user.role != Role.ARTIST:
            raise ValidationError("Can only toggle status of artist accounts")

        user.is_active = not user.is_active
        db.commit()
        db.refresh(user)
        logger.info("User %d %s", user.id, "activated" if user.is_active else "deactivated")
        return user

    def delete_user(self, db: Session, user_id: int) -> None:
        """Delete an account together with its artworks and their image files."""
        user = self._get_user(db, user_id)

        files: list[str] = []
        for artwork in db.query(Artwork).filter(Artwork.artist_id == user.id).all():
            files.extend(artwork.stored_files)

        db.delete(user)
        db.commit()
        self.storage.delete_many(files)
        logger.info("User %d deleted with %d stored files", user_id, len(files))


def get_admin_service() -> AdminService:
    """Build the admin service around the shared image storage."""
    return AdminService(get_image_storage())
