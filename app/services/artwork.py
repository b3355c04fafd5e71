"""Artwork listings: creation with image uploads, reads, and owner-guarded changes."""

import logging

from fastapi import UploadFile
from sqlalchemy.orm import Session, joinedload

from app.dependencies import CurrentUser, check_ownership
from app.exceptions import NotFound, ValidationError
from app.models.artwork import Artwork, ArtworkStatus
from app.models.category import Category
from app.services.storage import MAX_IMAGES_PER_ARTWORK, ImageStorage, get_image_storage

logger = logging.getLogger("atelier")


class ArtworkService:
    """Handles artwork CRUD and the image files that belong to each artwork."""

    def __init__(self, storage: ImageStorage) -> None:
        self.storage = storage

    async def create_artwork(
        self,
        db: Session,
        artist_id: int,
        fields: dict,
        thumbnail: UploadFile | None = None,
        images: list[UploadFile] | None = None,
    ) -> Artwork:
        """Store the uploads and create the artwork. Files are removed again if the insert fails."""
        images = images or []
        if len(images) > MAX_IMAGES_PER_ARTWORK:
            raise ValidationError(f"At most {MAX_IMAGES_PER_ARTWORK} images per artwork")
        self._check_category(db, fields.get("category_id"))

        stored: list[str] = []
        try:
            thumbnail_name = await self.storage.store(thumbnail, "thumbnail") if thumbnail else None
            if thumbnail_name:
                stored.append(thumbnail_name)
            for image in images:
                stored.append(await self.storage.store(image, "images"))

            artwork = Artwork(
                artist_id=artist_id,
                thumbnail=thumbnail_name,
                images=stored[1:] if thumbnail_name else stored,
                **fields,
            )
            db.add(artwork)
            db.commit()
        except Exception:
            db.rollback()
            self.storage.delete_many(stored)
            raise

        db.refresh(artwork)
        logger.info("Artwork %d created by user %d", artwork.id, artist_id)
        return artwork

    def get_artwork(self, db: Session, artwork_id: int) -> Artwork:
        artwork = db.query(Artwork).options(joinedload(Artwork.artist)).filter(Artwork.id == artwork_id).first()
        if not artwork:
            raise NotFound("Artwork not found")
        return artwork

    def list_artworks(self, db: Session) -> list[Artwork]:
        """All artworks, newest first."""
        return db.query(Artwork).options(joinedload(Artwork.artist)).order_by(Artwork.created_at.desc()).all()

    def list_artist_artworks(self, db: Session, artist_id: int) -> list[Artwork]:
        """Artworks of one artist, newest first."""
        return (
            db.query(Artwork)
            .options(joinedload(Artwork.artist))
            .filter(Artwork.artist_id == artist_id)
            .order_by(Artwork.created_at.desc())
            .all()
        )

    def update_artwork(self, db: Session, artwork_id: int, actor: CurrentUser, changes: dict) -> Artwork:
        artwork = self.get_artwork(db, artwork_id)
        check_ownership(actor, artwork.artist_id)
        if "category_id" in changes:
            self._check_category(db, changes["category_id"])
        if "status" in changes and "sold" not in changes:
            changes = {**changes, "sold": changes["status"] == ArtworkStatus.SOLD}

        for field, value in changes.items():
            setattr(artwork, field, value)
        db.commit()
        db.refresh(artwork)
        return artwork

    def delete_artwork(self, db: Session, artwork_id: int, actor: CurrentUser) -> None:
        """Delete an artwork and its image files."""
        artwork = self.get_artwork(db, artwork_id)
        check_ownership(actor, artwork.artist_id)

        files = artwork.stored_files
        db.delete(artwork)
        db.commit()
        self.storage.delete_many(files)
        logger.info("Artwork %d deleted by user %d", artwork_id, actor.user_id)

    @staticmethod
    def _check_category(db: Session, category_id: int | None) -> None:
        if category_id is not None and not db.get(Category, category_id):
            raise ValidationError("Category does not exist")


def get_artwork_service() -> ArtworkService:
    """Build the artwork service around the shared image storage."""
    return ArtworkService(get_image_storage())
