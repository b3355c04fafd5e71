"""Authentication and authorization dependencies for FastAPI routes."""

from collections.abc import Callable
from dataclasses import dataclass

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.exceptions import Forbidden, Unauthorized
from app.models.user import Role, User
from app.services.jwt import get_jwt_service


@dataclass
class CurrentUser:
    """Authenticated user context."""

    user_id: int
    email: str
    username: str
    role: str

    @property
    def is_super_admin(self) -> bool:
        return self.role == Role.SUPER_ADMIN


def get_bearer_token(request: Request) -> str | None:
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[7:].strip() or None
    return None


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
) -> CurrentUser:
    """Resolve the Bearer token to an account. Raises Unauthorized (401) if missing or invalid."""
    token = get_bearer_token(request)
    if not token:
        raise Unauthorized("Not authenticated")

    user_id = get_jwt_service().verify_token(token)

    user = db.get(User, user_id)
    if not user:
        raise Unauthorized("User no longer exists")

    return CurrentUser(user_id=user.id, email=user.email, username=user.username, role=user.role)


def require_role(role: Role) -> Callable[[CurrentUser], CurrentUser]:
    """Build a dependency that admits only authenticated users holding `role`."""

    def dependency(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role != role:
            raise Forbidden(f"Role '{role.value}' required")
        return user

    return dependency


require_super_admin = require_role(Role.SUPER_ADMIN)


def check_ownership(actor: CurrentUser, owner_id: int) -> None:
    """Allow the resource owner or any super admin. Raises Forbidden otherwise."""
    if actor.user_id != owner_id and not actor.is_super_admin:
        raise Forbidden("Not authorized to modify this artwork")
