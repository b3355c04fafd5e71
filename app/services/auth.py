"""Account lifecycle: registration, email verification, login and password reset."""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.exceptions import (
    ConflictError,
    DeliveryError,
    EmailNotVerified,
    InvalidCredentials,
    InvalidOrExpired,
    NotFound,
    PendingActivation,
)
from app.models.user import Role, User
from app.services.codes import RESET_CODE_TTL, issue_email_verification_token, issue_reset_code
from app.services.jwt import JWTService, get_jwt_service
from app.services.mail import MailSender, get_mail_sender, render_email
from app.services.passwords import hash_password, verify_password

logger = logging.getLogger("atelier")

PROFILE_FIELDS = ("username", "bio", "contact_info")


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass
class LoginResult:
    """Session token plus the account it was issued for."""

    token: str
    user: User


class AuthService:
    """Handles registration, verification, login and password reset."""

    def __init__(self, settings: Settings, jwt_service: JWTService, mail_sender: MailSender) -> None:
        self.settings = settings
        self.jwt_service = jwt_service
        self.mail_sender = mail_sender

    def get_user_by_email(self, db: Session, email: str) -> User | None:
        return db.query(User).filter(User.email == normalize_email(email)).first()

    def register(self, db: Session, username: str, email: str, password: str, bio: str | None = None) -> User:
        """Create an unverified, inactive artist and email them a verification link.

        The row is only committed once the email has been handed to the mail transport;
        a DeliveryError rolls the insert back so the account never becomes visible.
        """
        email = normalize_email(email)
        if self.get_user_by_email(db, email):
            raise ConflictError("User already exists")

        token, expires_at = issue_email_verification_token()
        user = User(
            username=username.strip(),
            email=email,
            password_hash=hash_password(password),
            bio=bio,
            role=Role.ARTIST.value,
            is_active=False,
            is_email_verified=False,
            email_verification_token=token,
            email_verification_expires_at=expires_at,
        )
        db.add(user)
        try:
            db.flush()
        except IntegrityError:
            db.rollback()
            raise ConflictError("User already exists") from None

        body = render_email(
            "verify_email.txt",
            username=user.username,
            verification_url=f"{self.settings.FRONTEND_URL}/verify-email/{token}",
        )
        try:
            self.mail_sender.send(user.email, "Email Verification - Atelier", body)
        except DeliveryError:
            db.rollback()
            logger.warning("Registration for %s rolled back: verification email failed", email)
            raise DeliveryError("Registration failed. Please try again.") from None

        db.commit()
        db.refresh(user)
        logger.info("Registered artist %s (id=%d)", user.email, user.id)
        return user

    def verify_email(self, db: Session, token: str) -> User:
        """Mark the account owning a live verification token as verified and burn the token."""
        user = (
            db.query(User)
            .filter(
                User.email_verification_token == token,
                User.email_verification_expires_at > datetime.utcnow(),
            )
            .first()
        )
        if not user:
            raise InvalidOrExpired("Invalid or expired verification token")

        user.is_email_verified = True
        user.email_verification_token = None
        user.email_verification_expires_at = None
        db.commit()
        logger.info("Email verified for user %d", user.id)
        return user

    def login(self, db: Session, email: str, password: str) -> LoginResult:
        """Check credentials and account state, then issue a session token."""
        user = self.get_user_by_email(db, email)
        if not user:
            raise InvalidCredentials()

        if not verify_password(password, user.password_hash):
            raise InvalidCredentials()

        if not user.is_email_verified:
            raise EmailNotVerified()

        if user.role == Role.ARTIST and not user.is_active:
            raise PendingActivation()

        user.last_login_at = datetime.utcnow()
        db.commit()

        return LoginResult(token=self.jwt_service.create_token(user.id), user=user)

    def request_password_reset(self, db: Session, email: str) -> None:
        """Store a fresh reset code for the account and email it.

        If delivery fails the code is cleared again so no usable code is left behind.
        """
        user = self.get_user_by_email(db, email)
        if not user:
            raise NotFound("There is no user with that email")

        code, expires_at = issue_reset_code()
        user.reset_password_code = code
        user.reset_password_expires_at = expires_at
        user.reset_password_attempts = 0
        db.commit()

        body = render_email("reset_code.txt", code=code, ttl_minutes=int(RESET_CODE_TTL.total_seconds() // 60))
        try:
            self.mail_sender.send(user.email, "Password Reset Code - Atelier", body)
        except DeliveryError:
            self._clear_reset_code(user)
            db.commit()
            logger.warning("Reset code for user %d cleared: email could not be sent", user.id)
            raise

        logger.info("Password reset code issued for user %d", user.id)

    def reset_password(self, db: Session, email: str, code: str, new_password: str) -> User:
        """Replace the password if (email, code) matches a live reset code.

        Each wrong guess counts against the code; after RESET_CODE_MAX_ATTEMPTS the code is burnt.
        """
        user = self.get_user_by_email(db, email)
        if not user or not user.reset_password_code:
            raise InvalidOrExpired("Invalid or expired reset code")

        if not user.reset_password_expires_at or user.reset_password_expires_at <= datetime.utcnow():
            self._clear_reset_code(user)
            db.commit()
            raise InvalidOrExpired("Invalid or expired reset code")

        if not secrets.compare_digest(user.reset_password_code.encode(), code.encode()):
            user.reset_password_attempts = (user.reset_password_attempts or 0) + 1
            if user.reset_password_attempts >= self.settings.RESET_CODE_MAX_ATTEMPTS:
                logger.warning(
                    "Reset code for user %d locked after %d failed attempts", user.id, user.reset_password_attempts
                )
                self._clear_reset_code(user)
            db.commit()
            raise InvalidOrExpired("Invalid or expired reset code")

        user.password_hash = hash_password(new_password)
        self._clear_reset_code(user)
        db.commit()
        logger.info("Password reset for user %d", user.id)
        return user

    def update_profile(self, db: Session, user: User, changes: dict) -> User:
        """Apply self-service profile changes. Only PROFILE_FIELDS are writable."""
        for field, value in changes.items():
            if field in PROFILE_FIELDS:
                setattr(user, field, value)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def _clear_reset_code(user: User) -> None:
        user.reset_password_code = None
        user.reset_password_expires_at = None
        user.reset_password_attempts = 0


def get_auth_service(mail_sender: MailSender = Depends(get_mail_sender)) -> AuthService:
    """Build the auth service for a request."""
    return AuthService(get_settings(), get_jwt_service(), mail_sender)
