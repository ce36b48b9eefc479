"""Shared pytest fixtures configured to use SQLite in-memory for tests."""

import io
import logging
import os
import tempfile

# Settings are read once at import time; point them at throwaway places first
_TMP_ROOT = tempfile.mkdtemp(prefix="notekeep-tests-")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_DIR", os.path.join(_TMP_ROOT, "logs"))
os.environ.setdefault("UPLOAD_DIR", os.path.join(_TMP_ROOT, "uploads"))

import pytest  # noqa: E402
from fastapi import UploadFile  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from starlette.datastructures import Headers  # noqa: E402

from notekeep.core.models.note import Note  # noqa: E402
from notekeep.core.models.user import User  # noqa: E402
from notekeep.core.storage import ImageStorage  # noqa: E402
from notekeep.database import Database, get_db_session  # noqa: E402
from notekeep.main import app  # noqa: E402
from notekeep.middleware.auth import get_image_storage  # noqa: E402
from notekeep.security.jwt import create_access_token  # noqa: E402
from notekeep.security.password import hash_password  # noqa: E402

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
async def test_database():
    """Fresh in-memory database with all tables, one per test."""
    database = Database(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,  # keep the same memory DB across connections
        connect_args={"check_same_thread": False},
    )
    await database.create_all()
    try:
        yield database
    finally:
        await database.dispose()


@pytest.fixture
async def test_session(test_database):
    """Database session shared by the test body and the app under test."""
    async with test_database.session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def image_storage(tmp_path):
    """Image storage rooted in the test's temporary directory."""
    return ImageStorage(
        root=tmp_path / "uploads",
        max_bytes=2 * 1024 * 1024,
        allowed_types=["image/jpeg", "image/png", "image/webp"],
    )


@pytest.fixture
def test_app(test_session, image_storage):
    """App with the database session and image storage overridden."""

    async def _override_get_db():
        yield test_session

    app.dependency_overrides[get_db_session] = _override_get_db
    app.dependency_overrides[get_image_storage] = lambda: image_storage
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(test_app):
    """Create async test client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def test_user_data():
    """Sample user data for testing."""
    return {"name": "Test User", "email": "test@example.com", "password": "TestPassword123!"}


@pytest.fixture
async def test_user(test_session, test_user_data):
    """Create a test user in the database."""
    user = User(
        name=test_user_data["name"],
        email=test_user_data["email"],
        password_hash=hash_password(test_user_data["password"]),
    )
    test_session.add(user)
    await test_session.commit()
    await test_session.refresh(user)
    return user


@pytest.fixture
async def other_user(test_session):
    """A second account, for ownership checks."""
    user = User(name="Mallory", email="mallory@example.com", password_hash=hash_password("pw"))
    test_session.add(user)
    await test_session.commit()
    await test_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(test_user):
    """Create authentication headers with a valid JWT token."""
    access_token = create_access_token({"sub": str(test_user.id)})
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
async def test_note(test_session, test_user):
    """Create a test note in the database."""
    note = Note(owner_id=test_user.id, title="Test Note", body="Some body")
    test_session.add(note)
    await test_session.commit()
    await test_session.refresh(note)
    return note


@pytest.fixture
def make_upload():
    """Factory for in-memory uploads as FastAPI hands them to services."""

    def _make(data: bytes = PNG_BYTES, content_type: str = "image/png", filename: str = "pic.png"):
        return UploadFile(
            file=io.BytesIO(data),
            filename=filename,
            headers=Headers({"content-type": content_type}),
        )

    return _make
