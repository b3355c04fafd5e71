"""Tests for AuthService state transitions."""

from datetime import datetime, timedelta

import pytest
from sqlalchemy.orm import Session

from app.config import Settings
from app.exceptions import (
    ConflictError,
    DeliveryError,
    EmailNotVerified,
    InvalidCredentials,
    InvalidOrExpired,
    NotFound,
    PendingActivation,
)
from app.models.user import User
from app.services.auth import AuthService
from app.services.jwt import get_jwt_service
from app.services.passwords import verify_password


class TestRegister:
    """Tests for AuthService.register."""

    def test_new_account_state(self, auth_service: AuthService, db_session: Session):
        """A new account is an unverified, inactive artist with a hashed password."""
        user = auth_service.register(db_session, "alice", " Alice@X.com ", "secret1", bio="hello")
        assert user.id is not None
        assert user.email == "alice@x.com"
        assert user.role == "artist"
        assert user.is_active is False
        assert user.is_email_verified is False
        assert user.bio == "hello"
        assert user.password_hash != "secret1"
        assert verify_password("secret1", user.password_hash)
        assert user.email_verification_token
        assert user.email_verification_expires_at > datetime.utcnow() + timedelta(hours=23)

    def test_duplicate_email_conflicts(self, auth_service: AuthService, db_session: Session):
        """Emails are unique regardless of case."""
        auth_service.register(db_session, "alice", "alice@x.com", "secret1")
        with pytest.raises(ConflictError):
            auth_service.register(db_session, "alice", "ALICE@x.com", "secret2")
        assert db_session.query(User).count() == 1

    def test_duplicate_insert_race_conflicts(self, auth_service: AuthService, db_session: Session, monkeypatch):
        """When the pre-check misses a concurrent insert, the unique constraint still wins."""
        auth_service.register(db_session, "alice", "alice@x.com", "secret1")
        monkeypatch.setattr(auth_service, "get_user_by_email", lambda db, email: None)
        with pytest.raises(ConflictError):
            auth_service.register(db_session, "alice", "alice@x.com", "secret2")
        assert db_session.query(User).count() == 1

    def test_delivery_failure_leaves_no_account(self, auth_service: AuthService, db_session: Session, mail_sender):
        """A failed verification email rolls the insert back."""
        mail_sender.fail = True
        with pytest.raises(DeliveryError):
            auth_service.register(db_session, "alice", "alice@x.com", "secret1")
        assert db_session.query(User).count() == 0


class TestVerifyEmail:
    """Tests for AuthService.verify_email."""

    def test_token_is_single_use(self, auth_service: AuthService, db_session: Session, mail_sender):
        """A verification token is cleared once used."""
        auth_service.register(db_session, "alice", "alice@x.com", "secret1")
        token = mail_sender.last_verification_token()

        user = auth_service.verify_email(db_session, token)
        assert user.is_email_verified is True
        assert user.email_verification_token is None

        with pytest.raises(InvalidOrExpired):
            auth_service.verify_email(db_session, token)

    def test_expired_token(self, auth_service: AuthService, db_session: Session, mail_sender):
        """An expired verification token is refused."""
        user = auth_service.register(db_session, "alice", "alice@x.com", "secret1")
        user.email_verification_expires_at = datetime.utcnow() - timedelta(seconds=1)
        db_session.commit()

        with pytest.raises(InvalidOrExpired):
            auth_service.verify_email(db_session, mail_sender.last_verification_token())


class TestLogin:
    """Tests for AuthService.login."""

    def test_unknown_email_and_wrong_password_share_error(self, auth_service: AuthService, db_session, user_factory):
        """Both credential failures carry the same message."""
        user_factory(email="a@x.com")
        with pytest.raises(InvalidCredentials) as unknown:
            auth_service.login(db_session, "b@x.com", "password123")
        with pytest.raises(InvalidCredentials) as wrong:
            auth_service.login(db_session, "a@x.com", "wrong")
        assert unknown.value.message == wrong.value.message

    def test_password_checked_before_account_state(self, auth_service: AuthService, db_session, user_factory):
        """Account state is only revealed once the password matched."""
        user_factory(email="a@x.com", verified=False, active=False)
        with pytest.raises(InvalidCredentials):
            auth_service.login(db_session, "a@x.com", "wrong")
        with pytest.raises(EmailNotVerified):
            auth_service.login(db_session, "a@x.com", "password123")

    def test_inactive_artist_pending(self, auth_service: AuthService, db_session, user_factory):
        """A verified but inactive artist is pending activation."""
        user_factory(email="a@x.com", verified=True, active=False)
        with pytest.raises(PendingActivation):
            auth_service.login(db_session, "a@x.com", "password123")

    def test_token_identifies_account(self, auth_service: AuthService, db_session, user_factory):
        """The issued token resolves to the account and login time is recorded."""
        user, _ = user_factory(email="a@x.com")
        result = auth_service.login(db_session, "a@x.com", "password123")
        assert get_jwt_service().verify_token(result.token) == user.id
        assert result.user.last_login_at is not None


class TestPasswordReset:
    """Tests for the reset-code flow in AuthService."""

    def test_unknown_email(self, auth_service: AuthService, db_session):
        """A reset request for an unknown email is NotFound."""
        with pytest.raises(NotFound):
            auth_service.request_password_reset(db_session, "nobody@x.com")

    def test_code_format_and_expiry(self, auth_service: AuthService, db_session, user_factory, mail_sender):
        """The emailed code is six digits and expires within ten minutes."""
        user, _ = user_factory(email="a@x.com")
        auth_service.request_password_reset(db_session, "a@x.com")
        code = mail_sender.last_reset_code()
        assert len(code) == 6 and code.isdigit()
        assert user.reset_password_code == code
        assert user.reset_password_expires_at <= datetime.utcnow() + timedelta(minutes=10)

    def test_reset_replaces_password_once(self, auth_service: AuthService, db_session, user_factory, mail_sender):
        """A successful reset replaces the hash and burns the code."""
        user, _ = user_factory(email="a@x.com")
        auth_service.request_password_reset(db_session, "a@x.com")
        code = mail_sender.last_reset_code()

        auth_service.reset_password(db_session, "a@x.com", code, "newpass")
        assert verify_password("newpass", user.password_hash)
        assert user.reset_password_code is None
        assert user.reset_password_expires_at is None

        with pytest.raises(InvalidOrExpired):
            auth_service.reset_password(db_session, "a@x.com", code, "again1")

    def test_code_bound_to_email(self, auth_service: AuthService, db_session, user_factory, mail_sender):
        """A code only works for the account it was issued to."""
        user_factory(email="a@x.com")
        user_factory(email="b@x.com")
        auth_service.request_password_reset(db_session, "a@x.com")
        code = mail_sender.last_reset_code()
        with pytest.raises(InvalidOrExpired):
            auth_service.reset_password(db_session, "b@x.com", code, "newpass")

    def test_code_locked_after_failed_attempts(self, db_session, user_factory, mail_sender):
        """Too many wrong codes invalidate the live code."""
        settings = Settings(JWT_SECRET_KEY="unused", RESET_CODE_MAX_ATTEMPTS=3)
        service = AuthService(settings, get_jwt_service(), mail_sender)
        user, _ = user_factory(email="a@x.com")
        service.request_password_reset(db_session, "a@x.com")
        code = mail_sender.last_reset_code()
        wrong = "000000" if code != "000000" else "111111"

        for _ in range(3):
            with pytest.raises(InvalidOrExpired):
                service.reset_password(db_session, "a@x.com", wrong, "newpass")

        assert user.reset_password_code is None
        with pytest.raises(InvalidOrExpired):
            service.reset_password(db_session, "a@x.com", code, "newpass")

    def test_new_request_resets_attempts(self, auth_service: AuthService, db_session, user_factory, mail_sender):
        """A fresh reset request starts the attempt count over."""
        user, _ = user_factory(email="a@x.com")
        auth_service.request_password_reset(db_session, "a@x.com")
        code = mail_sender.last_reset_code()
        wrong = "000000" if code != "000000" else "111111"
        with pytest.raises(InvalidOrExpired):
            auth_service.reset_password(db_session, "a@x.com", wrong, "newpass")
        assert user.reset_password_attempts == 1

        auth_service.request_password_reset(db_session, "a@x.com")
        assert user.reset_password_attempts == 0

    def test_delivery_failure_clears_code(self, auth_service: AuthService, db_session, user_factory, mail_sender):
        """A failed reset email clears the code and expiry."""
        user, _ = user_factory(email="a@x.com")
        mail_sender.fail = True
        with pytest.raises(DeliveryError):
            auth_service.request_password_reset(db_session, "a@x.com")
        assert user.reset_password_code is None
        assert user.reset_password_expires_at is None
