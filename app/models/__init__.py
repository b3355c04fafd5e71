"""SQLAlchemy models. Importing this package registers every table with Base.metadata."""

from app.models.artwork import Artwork, ArtworkStatus
from app.models.category import Category
from app.models.user import Role, User

__all__ = ["Artwork", "ArtworkStatus", "Category", "Role", "User"]
