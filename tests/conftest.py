"""Shared fixtures and utilities for tests."""

import os

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-key-min-32-chars-long-for-security")
os.environ.setdefault("JWT_ALGORITHM", "HS256")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_S3_BUCKET", "test-bucket")
os.environ.setdefault("CELERY_BROKER_URL", "memory://")
os.environ.setdefault("CELERY_RESULT_BACKEND", "cache+memory://")
os.environ.setdefault("JSON_LOGS", "false")

from typing import Any, Optional, Union

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import database.models  # noqa: F401
from api.dependencies import get_db, get_mail_dispatcher, get_media_storage
from api.main import app
from core.config import StorageConfig
from core.integrations.mailer import MailDispatcher
from core.storage.s3 import S3Storage, StoredObject
from database.engine import Base

DEFAULT_PASSWORD = "Secret123!"


class RecordingMailDispatcher(MailDispatcher):
    """Keeps every email in memory instead of enqueueing it."""

    def __init__(self):
        self.outbox: list[dict[str, Any]] = []
        self.otps: dict[str, str] = {}
        self.reset_tokens: dict[str, str] = {}

    async def dispatch(self, to, subject, body, html=True):
        self.outbox.append({"to": to, "subject": subject, "body": body, "html": html})
        return None

    async def send_otp(self, to, otp, valid_minutes):
        self.otps[to] = otp
        return await super().send_otp(to, otp, valid_minutes)

    async def send_password_reset(self, to, token, valid_minutes):
        self.reset_tokens[to] = token
        return await super().send_password_reset(to, token, valid_minutes)


class InMemoryStorage(S3Storage):
    """Object store double that records uploads and deletes."""

    def __init__(self):
        super().__init__(
            StorageConfig(
                aws_access_key_id="testing",
                aws_secret_access_key="testing",
                region="us-east-1",
                bucket="test-bucket",
            )
        )
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.calls: list[tuple[str, str]] = []

    async def upload(self, file_data: Union[bytes, Any], key: str, content_type: Optional[str] = None) -> StoredObject:
        self.calls.append(("upload", key))
        self.objects[key] = file_data if isinstance(file_data, bytes) else file_data.read()
        return StoredObject(key=key, url=self.public_url(key))

    async def delete(self, key: str) -> bool:
        self.calls.append(("delete", key))
        self.deleted.append(key)
        self.objects.pop(key, None)
        return True


@pytest_asyncio.fixture
async def db_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def mailer():
    return RecordingMailDispatcher()


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest_asyncio.fixture
async def client(session_factory, mailer, storage):
    """HTTP client against the app with database, mail and storage overridden."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mail_dispatcher] = lambda: mailer
    app.dependency_overrides[get_media_storage] = lambda: storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def registration(
    email: str,
    role: str,
    name: str = "Test User",
    password: str = DEFAULT_PASSWORD,
    gender: str = "Female",
) -> dict[str, Any]:
    return {
        "name": name,
        "email": email,
        "phone": "9876543210",
        "gender": gender,
        "role": role,
        "password": password,
    }


@pytest.fixture
def create_principal(client, mailer):
    """
    Register and verify a principal.

    Returns a coroutine function giving ``(principal_id, token)``.
    """

    async def _create(kind: str, email: str, role: Optional[str] = None, name: str = "Test User", verify: bool = True):
        role = role or ("Casting Director" if kind == "hirers" else "Actor")
        response = await client.post(f"/api/{kind}/register", json=registration(email, role, name=name))
        assert response.status_code == 201, response.text
        data = response.json()
        if not verify:
            return data["user_id"], data["token"]

        response = await client.post(
            f"/api/{kind}/verify-otp",
            json={"otp": mailer.otps[email]},
            headers=auth(data["token"]),
        )
        assert response.status_code == 200, response.text
        return data["user_id"], response.json()["token"]

    return _create


@pytest_asyncio.fixture
async def hirer(create_principal):
    return await create_principal("hirers", "hirer.a@example.com", name="Hirer A")


@pytest_asyncio.fixture
async def talent(create_principal):
    return await create_principal("talents", "talent.b@example.com", name="Talent B")


@pytest_asyncio.fixture
async def other_talent(create_principal):
    return await create_principal("talents", "talent.c@example.com", name="Talent C")
