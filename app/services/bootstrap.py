"""Startup seeding of the super admin account."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import Settings
from app.models.user import Role, User
from app.services.auth import normalize_email
from app.services.passwords import hash_password

logger = logging.getLogger("atelier")


def seed_super_admin(db: Session, settings: Settings) -> User | None:
    """Create the configured super admin unless an account with that email already exists.

    Safe to run from several instances at once: the unique email constraint lets exactly one
    insert win and the others fall back to the existing row.
    """
    if not settings.SUPER_ADMIN_EMAIL or not settings.SUPER_ADMIN_PASSWORD:
        logger.info("Super admin credentials not provided; skipping seed")
        return None

    email = normalize_email(settings.SUPER_ADMIN_EMAIL)
    existing = db.query(User).filter(User.email == email).first()
    if existing:
        if existing.role != Role.SUPER_ADMIN:
            logger.warning("Super admin email %s belongs to a %s account; not seeding", email, existing.role)
        else:
            logger.info("Super admin already exists")
        return existing

    admin = User(
        username=settings.SUPER_ADMIN_USERNAME,
        email=email,
        password_hash=hash_password(settings.SUPER_ADMIN_PASSWORD),
        role=Role.SUPER_ADMIN.value,
        is_active=True,
        is_email_verified=True,
        bio="System Administrator",
    )
    db.add(admin)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Super admin created concurrently by another instance")
        return db.query(User).filter(User.email == email).first()

    db.refresh(admin)
    logger.info("Super admin %s created", email)
    return admin
