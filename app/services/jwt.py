"""JWT Token Service."""

from datetime import datetime, timedelta

from jose import JWTError, jwt

from app.config import Settings, get_settings
from app.exceptions import ConfigurationError, InvalidToken


class JWTService:
    """Issues and verifies stateless session tokens."""

    def __init__(self, settings: Settings) -> None:
        if not settings.JWT_SECRET_KEY:
            raise ConfigurationError("JWT_SECRET_KEY is not set")
        self.secret_key = settings.JWT_SECRET_KEY
        self.algorithm = settings.JWT_ALGORITHM
        self.expire_minutes = settings.JWT_EXPIRE_MINUTES

    def create_token(self, user_id: int) -> str:
        """Create a signed token for the given user, valid for the configured TTL."""
        expire = datetime.utcnow() + timedelta(minutes=self.expire_minutes)
        payload = {
            "sub": str(user_id),
            "exp": expire,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> int:
        """Return the user id a token was issued for.

        Raises InvalidToken on a bad signature, a malformed token or subject, or an expired token.
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            raise InvalidToken() from None

        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            raise InvalidToken("Invalid token payload") from None


_jwt_service: JWTService | None = None


def get_jwt_service() -> JWTService:
    """Get singleton JWT service instance."""
    global _jwt_service
    if _jwt_service is None:
        _jwt_service = JWTService(get_settings())
    return _jwt_service
