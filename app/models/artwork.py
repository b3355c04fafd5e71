"""Artwork model."""

from datetime import datetime
from enum import StrEnum

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from app.database import Base


class ArtworkStatus(StrEnum):
    AVAILABLE = "available"
    ON_HOLD = "on_hold"
    ON_EXHIBIT = "on_exhibit"
    SOLD = "sold"


class Artwork(Base):
    """Artwork listing owned by an artist."""

    __tablename__ = "artworks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    artist_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    thumbnail = Column(String(500), nullable=True)
    images = Column(JSON, nullable=True)  # list of stored filenames
    size = Column(String(50), nullable=False)
    media = Column(String(100), nullable=True)
    print_number = Column(String(50), nullable=True)
    inventory_number = Column(String(50), nullable=True)
    status = Column(String(32), nullable=False, default=ArtworkStatus.AVAILABLE.value)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    location = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    sold = Column(Boolean, nullable=False, default=False, index=True)
    tags = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    artist = relationship("User", back_populates="artworks")
    category = relationship("Category")

    @property
    def stored_files(self) -> list[str]:
        """Every image filename this artwork references."""
        files = [self.thumbnail] if self.thumbnail else []
        files.extend(self.images or [])
        return files
