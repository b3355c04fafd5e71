"""User model."""

from datetime import datetime
from enum import StrEnum

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from app.database import Base


class Role(StrEnum):
    ARTIST = "artist"
    SUPER_ADMIN = "super_admin"


class User(Base):
    """Artist or super admin account."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=Role.ARTIST.value, index=True)
    is_active = Column(Boolean, nullable=False, default=False, index=True)
    is_email_verified = Column(Boolean, nullable=False, default=False)
    bio = Column(Text, nullable=True)
    profile_image = Column(String(500), nullable=True)
    contact_info = Column(JSON, nullable=True)  # {"phone", "website", "social_media": {...}}

    email_verification_token = Column(String(255), nullable=True, index=True)
    email_verification_expires_at = Column(DateTime, nullable=True)
    reset_password_code = Column(String(6), nullable=True)
    reset_password_expires_at = Column(DateTime, nullable=True)
    reset_password_attempts = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
    last_login_at = Column(DateTime, nullable=True)

    artworks = relationship("Artwork", back_populates="artist", cascade="all, delete-orphan", passive_deletes=True)
