"""Pytest configuration and fixtures."""

import os
import re
import tempfile
from dataclasses import dataclass

# Settings are read once and cached, so the environment must be in place before app imports.
os.environ["JWT_SECRET_KEY"] = "test-secret-key-0123456789abcdef0123456789"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="atelier-test-")
os.environ["MAIL_BACKEND"] = "console"
os.environ["SUPER_ADMIN_EMAIL"] = ""
os.environ["SUPER_ADMIN_PASSWORD"] = ""

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.config import Settings, get_settings  # noqa: E402
from app.database import Base, get_db  # noqa: E402
from app.exceptions import DeliveryError  # noqa: E402
from app.models import Artwork, Role, User  # noqa: E402
from app.services.admin import AdminService, get_admin_service  # noqa: E402
from app.services.artwork import ArtworkService, get_artwork_service  # noqa: E402
from app.services.auth import AuthService  # noqa: E402
from app.services.bootstrap import seed_super_admin  # noqa: E402
from app.services.jwt import get_jwt_service  # noqa: E402
from app.services.mail import MailSender, get_mail_sender  # noqa: E402
from app.services.passwords import hash_password  # noqa: E402
from app.services.storage import ImageStorage  # noqa: E402


@dataclass
class SentMail:
    to_address: str
    subject: str
    body: str


class FakeMailSender(MailSender):
    """Records messages instead of sending them. Set `fail` to simulate a transport outage."""

    def __init__(self) -> None:
        self.sent: list[SentMail] = []
        self.fail = False

    def send(self, to_address: str, subject: str, body: str) -> None:
        if self.fail:
            raise DeliveryError()
        self.sent.append(SentMail(to_address, subject, body))

    def last_verification_token(self) -> str:
        match = re.search(r"/verify-email/([0-9a-f]+)", self.sent[-1].body)
        assert match, "no verification link in last message"
        return match.group(1)

    def last_reset_code(self) -> str:
        match = re.search(r"Your reset code is: (\d{6})", self.sent[-1].body)
        assert match, "no reset code in last message"
        return match.group(1)


@pytest.fixture(name="db_session")
def db_session_fixture():
    """Create an in-memory SQLite database for tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(name="mail_sender")
def mail_sender_fixture() -> FakeMailSender:
    return FakeMailSender()


@pytest.fixture(name="image_storage")
def image_storage_fixture(tmp_path) -> ImageStorage:
    """Image storage rooted in a per-test directory with a 1MB limit."""
    return ImageStorage(Settings(JWT_SECRET_KEY="unused", UPLOAD_DIR=str(tmp_path), MAX_UPLOAD_SIZE_MB=1))


@pytest.fixture(name="auth_service")
def auth_service_fixture(mail_sender: FakeMailSender) -> AuthService:
    return AuthService(get_settings(), get_jwt_service(), mail_sender)


@pytest.fixture(name="client")
def client_fixture(db_session: Session, mail_sender: FakeMailSender, image_storage: ImageStorage):
    """Create a test client with overridden DB, mail and storage dependencies and disabled rate limiting."""
    from app.rate_limit import limiter
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mail_sender] = lambda: mail_sender
    app.dependency_overrides[get_artwork_service] = lambda: ArtworkService(image_storage)
    app.dependency_overrides[get_admin_service] = lambda: AdminService(image_storage)
    limiter.enabled = False
    with TestClient(app) as c:
        yield c
    limiter.enabled = True
    app.dependency_overrides.clear()


@pytest.fixture(name="user_factory")
def user_factory_fixture(db_session: Session):
    """Create accounts directly in the database and return (user, auth headers)."""

    def create(
        email: str = "artist@example.com",
        password: str = "password123",
        username: str = "Artist",
        role: Role = Role.ARTIST,
        active: bool = True,
        verified: bool = True,
    ) -> tuple[User, dict]:
        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            role=role.value,
            is_active=active,
            is_email_verified=verified,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        token = get_jwt_service().create_token(user.id)
        return user, {"Authorization": f"Bearer {token}"}

    return create


@pytest.fixture(name="test_artist")
def test_artist_fixture(user_factory) -> tuple[User, dict]:
    """An active, verified artist and their auth headers."""
    return user_factory()


@pytest.fixture(name="test_admin")
def test_admin_fixture(db_session: Session) -> tuple[User, dict]:
    """The seeded super admin and their auth headers."""
    settings = Settings(
        JWT_SECRET_KEY="unused",
        SUPER_ADMIN_EMAIL="admin@example.com",
        SUPER_ADMIN_PASSWORD="adminpass123",
    )
    admin = seed_super_admin(db_session, settings)
    token = get_jwt_service().create_token(admin.id)
    return admin, {"Authorization": f"Bearer {token}"}


@pytest.fixture(name="artwork_factory")
def artwork_factory_fixture(db_session: Session):
    """Create artworks directly in the database."""

    def create(artist: User, title: str = "Blue Hour", **fields) -> Artwork:
        artwork = Artwork(artist_id=artist.id, title=title, size=fields.pop("size", "30x40cm"), **fields)
        db_session.add(artwork)
        db_session.commit()
        db_session.refresh(artwork)
        return artwork

    return create
