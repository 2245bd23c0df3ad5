"""Shared test fixtures for the task list service."""

import os

# Configure before any app imports trigger Settings() validation.
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-for-unit-tests-0123456789")
os.environ.setdefault("SESSION_SECRET_KEY", "test-session-secret-for-unit-tests-012345")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import uuid  # noqa: E402
from collections.abc import AsyncGenerator, Callable, Iterable  # noqa: E402
from datetime import UTC, datetime  # noqa: E402
from types import SimpleNamespace  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import fakeredis.aioredis  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.core.permission_resolver import PermissionResolver  # noqa: E402
from app.main import app  # noqa: E402
from app.models.permission import PermissionKind  # noqa: E402
from app.providers import get_permission_repository, get_role_repository  # noqa: E402
from tests.helpers.token_factory import create_access_token  # noqa: E402

_NOW = datetime.now(UTC)

# ---------------------------------------------------------------------------
# Fake Redis (drop-in async replacement)
# ---------------------------------------------------------------------------


def _make_fake_redis():
    """Create a fakeredis instance that behaves like redis.asyncio.Redis."""
    return fakeredis.aioredis.FakeRedis(decode_responses=True)


# ---------------------------------------------------------------------------
# Mock DB session
# ---------------------------------------------------------------------------


def _make_mock_session():
    """Create a mock async DB session that answers ``SELECT 1``."""
    session = AsyncMock()
    result_mock = MagicMock()
    result_mock.scalar.return_value = 1
    session.execute.return_value = result_mock
    session.close = AsyncMock()
    return session


def _make_mock_session_factory():
    """Return a callable that mimics ``async_sessionmaker().__call__()``."""
    mock_session = _make_mock_session()
    factory = MagicMock()
    ctx = AsyncMock()
    ctx.__aenter__.return_value = mock_session
    factory.return_value = ctx
    return factory, mock_session


# ---------------------------------------------------------------------------
# Mock ORM model factories
# ---------------------------------------------------------------------------


def _make_role_model(**overrides):
    """Return a SimpleNamespace that looks like a Role ORM instance."""
    data = {
        "id": str(uuid.uuid4()),
        "user_id": str(uuid.uuid4()),
        "name": "User",
        "description": None,
        "created_at": _NOW,
        "updated_at": _NOW,
    }
    data.update(overrides)
    return SimpleNamespace(**data)


def _make_task_model(**overrides):
    """Return a SimpleNamespace that looks like a Task ORM instance."""
    data = {
        "id": str(uuid.uuid4()),
        "title": "Write the quarterly report",
        "description": None,
        "completed": False,
        "owner_id": None,
        "created_at": _NOW,
        "updated_at": _NOW,
    }
    data.update(overrides)
    return SimpleNamespace(**data)


# ---------------------------------------------------------------------------
# Mock role/permission stores
# ---------------------------------------------------------------------------


def make_stores(
    role_name: str | None, kinds: Iterable[PermissionKind | str] = ()
) -> tuple[AsyncMock, AsyncMock]:
    """Build role and permission repository mocks for a single user.

    ``role_name=None`` models a user with no role assigned.
    """
    granted = {PermissionKind(k) for k in kinds}
    role = _make_role_model(name=role_name) if role_name is not None else None

    roles = AsyncMock()
    roles.get_by_user_id.return_value = role

    permissions = AsyncMock()
    permissions.exists.side_effect = lambda role_id, kind: role is not None and kind in granted
    permissions.list_kinds.side_effect = lambda role_id: [
        k for k in PermissionKind if k in granted
    ]
    return roles, permissions


def make_resolver(role_name: str | None, kinds: Iterable[PermissionKind | str] = ()):
    """Build a PermissionResolver over mocked stores."""
    roles, permissions = make_stores(role_name, kinds)
    return PermissionResolver(roles, permissions)


# ---------------------------------------------------------------------------
# HTTP client fixtures (FastAPI app with mocked infra)
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture()
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the FastAPI app.

    Infrastructure (DB, Redis) is mocked so tests run without devstack.
    """
    session_factory, _ = _make_mock_session_factory()
    fake_redis = _make_fake_redis()

    app.state.engine = MagicMock()
    app.state.session_factory = session_factory
    app.state.redis = fake_redis

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    await fake_redis.aclose()


@pytest_asyncio.fixture()
async def grant_access() -> AsyncGenerator[Callable[..., None], None]:
    """Set the caller's role and permissions for the next requests.

    Usage::

        grant_access("User", ["Create", "Retrieve"])
        grant_access(None)  # no role assigned
    """

    def _grant(role_name: str | None, kinds: Iterable[PermissionKind | str] = ()) -> None:
        roles, permissions = make_stores(role_name, kinds)
        app.dependency_overrides[get_role_repository] = lambda: roles
        app.dependency_overrides[get_permission_repository] = lambda: permissions

    yield _grant
    app.dependency_overrides.pop(get_role_repository, None)
    app.dependency_overrides.pop(get_permission_repository, None)


# ---------------------------------------------------------------------------
# Auth helpers: generate JWT tokens directly (no login endpoint needed)
# ---------------------------------------------------------------------------


def _auth_headers(username: str = "user", user_id: str | None = None) -> dict[str, str]:
    """Return Authorization header dict with a valid JWT."""
    token = create_access_token(
        user_id=user_id or str(uuid.uuid4()),
        username=username,
        email=f"{username}@example.com",
    )
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture()
async def auth_client(client) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client carrying a valid bearer token; access is set via ``grant_access``."""
    client.headers.update(_auth_headers("demo"))
    yield client
    client.headers.pop("Authorization", None)


# ---------------------------------------------------------------------------
# Factory helpers (payload dicts for HTTP requests)
# ---------------------------------------------------------------------------


def make_task_payload(**overrides) -> dict:
    """Build a valid task creation payload."""
    data = {"title": "Buy milk", "description": "Semi-skimmed", "completed": False}
    data.update(overrides)
    return data
