"""Real database integration tests using testcontainers.

These tests use a real PostgreSQL container instead of mocked repositories,
verifying the uniqueness constraints and cascades that the role model
relies on.

Requires Docker to be running. Tests are skipped if Docker is unavailable.

Run with: pytest tests/integration/test_db_integration.py -v -s
"""

import asyncio
import subprocess
import uuid

import pytest
from sqlalchemy import func, select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

try:
    from testcontainers.postgres import PostgresContainer

    _HAS_TESTCONTAINERS = True
except ImportError:
    _HAS_TESTCONTAINERS = False

from app.core.permission_resolver import PermissionResolver
from app.models import Base, Permission, PermissionKind, Role, User
from app.repositories.permission_repository import (
    DuplicatePermissionError,
    PermissionRepository,
)
from app.repositories.role_repository import (
    DuplicateRoleError,
    RoleRepository,
    UserNotFoundError,
)
from app.schemas.role import RoleUpdate

pytestmark = [
    pytest.mark.asyncio,
    pytest.mark.skipif(not _HAS_TESTCONTAINERS, reason="testcontainers not installed"),
]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def postgres_container():
    """Start a real PostgreSQL container for the test module."""
    try:
        result = subprocess.run(["docker", "info"], capture_output=True, timeout=10)
    except (FileNotFoundError, subprocess.TimeoutExpired):
        pytest.skip("Docker is not available")
    if result.returncode != 0:
        pytest.skip("Docker is not available")

    with PostgresContainer("postgres:16-alpine") as pg:
        yield pg


@pytest.fixture(scope="module")
def async_db_url(postgres_container):
    """Convert the container's sync DB URL to async (asyncpg)."""
    sync_url = postgres_container.get_connection_url()
    return sync_url.replace("psycopg2", "asyncpg").replace(
        "postgresql://", "postgresql+asyncpg://"
    )


@pytest.fixture(scope="module")
def _create_tables(async_db_url):
    """Create all tables in the test database (module scope)."""

    async def _setup():
        engine = create_async_engine(async_db_url)
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        await engine.dispose()

    asyncio.run(_setup())


@pytest.fixture()
async def db_session(async_db_url, _create_tables):
    """Provide a real async DB session. Each test gets a fresh session."""
    engine = create_async_engine(async_db_url)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        yield session

    await engine.dispose()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _create_user(session: AsyncSession) -> User:
    suffix = uuid.uuid4().hex[:10]
    user = User(username=f"user_{suffix}", email=f"{suffix}@example.com")
    session.add(user)
    await session.flush()
    return user


async def _permission_count(session: AsyncSession, role_id: str) -> int:
    result = await session.execute(
        select(func.count()).select_from(Permission).where(Permission.role_id == role_id)
    )
    return result.scalar_one()


# ---------------------------------------------------------------------------
# Tests: RoleRepository with real DB
# ---------------------------------------------------------------------------


class TestRoleRepositoryRealDB:
    async def test_create_and_get_role(self, db_session):
        user = await _create_user(db_session)
        repo = RoleRepository(db_session)

        created = await repo.create(user.id, "User", "Regular task-list user")
        await db_session.commit()

        fetched = await repo.get_by_user_id(user.id)
        assert fetched is not None
        assert fetched.id == created.id
        assert fetched.name == "User"

    async def test_unassigned_user_has_no_role(self, db_session):
        user = await _create_user(db_session)
        assert await RoleRepository(db_session).get_by_user_id(user.id) is None

    async def test_second_role_for_user_rejected(self, db_session):
        user = await _create_user(db_session)
        await db_session.commit()
        repo = RoleRepository(db_session)

        await repo.create(user.id, "User")
        await db_session.commit()

        with pytest.raises(DuplicateRoleError):
            await repo.create(user.id, "Administrator")

    async def test_unknown_user_rejected(self, db_session):
        with pytest.raises(UserNotFoundError):
            await RoleRepository(db_session).create(str(uuid.uuid4()), "User")

    async def test_update_role_name(self, db_session):
        user = await _create_user(db_session)
        repo = RoleRepository(db_session)
        await repo.create(user.id, "User")
        await db_session.commit()

        updated = await repo.update(user.id, RoleUpdate(name="Administrator"))
        await db_session.commit()

        assert updated is not None
        assert updated.name == "Administrator"

    async def test_role_user_id_is_unique_at_db_level(self, db_session):
        user = await _create_user(db_session)
        db_session.add_all([Role(user_id=user.id, name="A"), Role(user_id=user.id, name="B")])

        with pytest.raises(IntegrityError):
            await db_session.flush()

        await db_session.rollback()


# ---------------------------------------------------------------------------
# Tests: PermissionRepository with real DB
# ---------------------------------------------------------------------------


class TestPermissionRepositoryRealDB:
    async def _role(self, db_session) -> Role:
        user = await _create_user(db_session)
        role = await RoleRepository(db_session).create(user.id, "User")
        await db_session.commit()
        return role

    async def test_grant_and_exists(self, db_session):
        role = await self._role(db_session)
        repo = PermissionRepository(db_session)

        await repo.grant(role.id, PermissionKind.CREATE)
        await db_session.commit()

        assert await repo.exists(role.id, PermissionKind.CREATE) is True
        assert await repo.exists(role.id, PermissionKind.DELETE) is False

    async def test_kind_stored_as_its_string_value(self, db_session):
        role = await self._role(db_session)
        await PermissionRepository(db_session).grant(role.id, PermissionKind.RETRIEVE)
        await db_session.commit()

        result = await db_session.execute(
            text("SELECT kind FROM permissions WHERE role_id = :role_id"),
            {"role_id": role.id},
        )
        assert result.scalar_one() == "Retrieve"

    async def test_duplicate_grant_rejected(self, db_session):
        role = await self._role(db_session)
        repo = PermissionRepository(db_session)
        await repo.grant(role.id, PermissionKind.UPDATE)
        await db_session.commit()

        with pytest.raises(DuplicatePermissionError):
            await repo.grant(role.id, PermissionKind.UPDATE)

    async def test_revoke(self, db_session):
        role = await self._role(db_session)
        repo = PermissionRepository(db_session)
        await repo.grant(role.id, PermissionKind.DELETE)
        await db_session.commit()

        assert await repo.revoke(role.id, PermissionKind.DELETE) is True
        assert await repo.revoke(role.id, PermissionKind.DELETE) is False
        assert await repo.list_kinds(role.id) == []


# ---------------------------------------------------------------------------
# Tests: cascades
# ---------------------------------------------------------------------------


class TestCascadesRealDB:
    async def test_deleting_role_deletes_its_permissions(self, db_session):
        user = await _create_user(db_session)
        role = await RoleRepository(db_session).create(user.id, "User")
        permissions = PermissionRepository(db_session)
        for kind in (PermissionKind.CREATE, PermissionKind.RETRIEVE):
            await permissions.grant(role.id, kind)
        await db_session.commit()
        role_id = role.id

        assert await RoleRepository(db_session).delete(user.id) is True
        await db_session.commit()

        assert await _permission_count(db_session, role_id) == 0

    async def test_deleting_user_deletes_their_role(self, db_session):
        user = await _create_user(db_session)
        role = await RoleRepository(db_session).create(user.id, "User")
        await PermissionRepository(db_session).grant(role.id, PermissionKind.CREATE)
        await db_session.commit()
        user_id, role_id = user.id, role.id

        await db_session.execute(text("DELETE FROM users WHERE id = :id"), {"id": user_id})
        await db_session.commit()
        db_session.expunge_all()

        assert await RoleRepository(db_session).get_by_user_id(user_id) is None
        assert await _permission_count(db_session, role_id) == 0


# ---------------------------------------------------------------------------
# Tests: PermissionResolver with real DB
# ---------------------------------------------------------------------------


class TestPermissionResolverRealDB:
    async def test_resolver_against_real_stores(self, db_session):
        user = await _create_user(db_session)
        role = await RoleRepository(db_session).create(user.id, "User")
        permissions = PermissionRepository(db_session)
        for kind in (PermissionKind.CREATE, PermissionKind.RETRIEVE):
            await permissions.grant(role.id, kind)
        await db_session.commit()

        resolver = PermissionResolver(RoleRepository(db_session), permissions)

        assert await resolver.has_role(user.id, "User") is True
        assert await resolver.is_admin(user.id) is False
        assert await resolver.has_permission(user.id, "Create") is True
        assert await resolver.has_permission(user.id, PermissionKind.UPDATE) is False
        assert await resolver.permissions_of(user.id) == frozenset(
            {PermissionKind.CREATE, PermissionKind.RETRIEVE}
        )

    async def test_user_without_role_has_nothing(self, db_session):
        user = await _create_user(db_session)
        await db_session.commit()
        resolver = PermissionResolver(RoleRepository(db_session), PermissionRepository(db_session))

        for kind in PermissionKind:
            assert await resolver.has_permission(user.id, kind) is False
        assert await resolver.is_admin(user.id) is False
        assert await resolver.permissions_of(user.id) == frozenset()
