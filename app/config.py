"""Configuration settings for Atelier."""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from app.exceptions import ConfigurationError

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings. Built once from the environment and never mutated."""

    # Database
    DATABASE_URL: str = "sqlite:///./atelier.db"

    # JWT
    JWT_SECRET_KEY: str = ""
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 7 * 24 * 60

    # Links in outgoing mail point at the frontend
    FRONTEND_URL: str = "http://localhost:3000"

    # Mail
    MAIL_BACKEND: str = "console"
    MAIL_FROM: str = "no-reply@atelier.local"
    SMTP_HOST: str = "localhost"
    SMTP_PORT: int = 25
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_USE_TLS: bool = False

    # Bootstrap admin
    SUPER_ADMIN_EMAIL: str = ""
    SUPER_ADMIN_PASSWORD: str = ""
    SUPER_ADMIN_USERNAME: str = "Super Admin"

    # Upload
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_SIZE_MB: int = 10

    # Password reset
    RESET_CODE_MAX_ATTEMPTS: int = 5

    # Application
    APP_ENV: str = "development"
    DEBUG: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from environment variables (and .env)."""
        return cls(
            DATABASE_URL=os.getenv("DATABASE_URL", cls.DATABASE_URL),
            JWT_SECRET_KEY=os.getenv("JWT_SECRET_KEY", ""),
            JWT_ALGORITHM=os.getenv("JWT_ALGORITHM", cls.JWT_ALGORITHM),
            JWT_EXPIRE_MINUTES=int(os.getenv("JWT_EXPIRE_MINUTES", str(cls.JWT_EXPIRE_MINUTES))),
            FRONTEND_URL=os.getenv("FRONTEND_URL", cls.FRONTEND_URL).rstrip("/"),
            MAIL_BACKEND=os.getenv("MAIL_BACKEND", cls.MAIL_BACKEND).lower(),
            MAIL_FROM=os.getenv("MAIL_FROM", cls.MAIL_FROM),
            SMTP_HOST=os.getenv("SMTP_HOST", cls.SMTP_HOST),
            SMTP_PORT=int(os.getenv("SMTP_PORT", str(cls.SMTP_PORT))),
            SMTP_USERNAME=os.getenv("SMTP_USERNAME", ""),
            SMTP_PASSWORD=os.getenv("SMTP_PASSWORD", ""),
            SMTP_USE_TLS=os.getenv("SMTP_USE_TLS", "false").lower() == "true",
            SUPER_ADMIN_EMAIL=os.getenv("SUPER_ADMIN_EMAIL", ""),
            SUPER_ADMIN_PASSWORD=os.getenv("SUPER_ADMIN_PASSWORD", ""),
            SUPER_ADMIN_USERNAME=os.getenv("SUPER_ADMIN_USERNAME", cls.SUPER_ADMIN_USERNAME),
            UPLOAD_DIR=os.getenv("UPLOAD_DIR", cls.UPLOAD_DIR),
            MAX_UPLOAD_SIZE_MB=int(os.getenv("MAX_UPLOAD_SIZE_MB", str(cls.MAX_UPLOAD_SIZE_MB))),
            RESET_CODE_MAX_ATTEMPTS=int(os.getenv("RESET_CODE_MAX_ATTEMPTS", str(cls.RESET_CODE_MAX_ATTEMPTS))),
            APP_ENV=os.getenv("APP_ENV", cls.APP_ENV),
            DEBUG=os.getenv("DEBUG", "false").lower() == "true",
        )

    def validate(self) -> list[str]:
        """Validate settings and return list of warnings.

        Raises ConfigurationError for settings the app cannot run without.
        """
        if not self.JWT_SECRET_KEY:
            raise ConfigurationError("JWT_SECRET_KEY is not set")
        if self.MAIL_BACKEND not in ("console", "smtp"):
            raise ConfigurationError(f"Unknown MAIL_BACKEND '{self.MAIL_BACKEND}'")

        warnings = []
        if len(self.JWT_SECRET_KEY) < 32:
            warnings.append("JWT_SECRET_KEY is shorter than 32 characters")
        if self.MAIL_BACKEND == "console":
            warnings.append("MAIL_BACKEND is 'console' - emails are logged, not delivered")
        if bool(self.SUPER_ADMIN_EMAIL) != bool(self.SUPER_ADMIN_PASSWORD):
            warnings.append("SUPER_ADMIN_EMAIL and SUPER_ADMIN_PASSWORD must both be set to seed an admin")
        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
