"""API routers."""

from app.routers.admin import router as admin_router
from app.routers.artworks import router as artworks_router
from app.routers.auth import router as auth_router
from app.routers.categories import router as categories_router
from app.routers.contact import router as contact_router

__all__ = ["auth_router", "artworks_router", "categories_router", "admin_router", "contact_router"]
