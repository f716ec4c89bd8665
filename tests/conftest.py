"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from helpdesk.core.database import Base, get_db

# Import all models to ensure they're registered with Base.metadata
from helpdesk.core.permissions.models import AuthorizationConfig, Role  # noqa: F401
from helpdesk.core.permissions.vocabulary import Permission, normalize_permissions
from helpdesk.main import create_app
from helpdesk.modules.users.models import User
from tests.factories.token import create_access_token
from tests.factories.user import UserFactory


# In-memory database shared by every connection of the test engine
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine():
    """Create test database engine with a fresh schema."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db(engine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a transactional database session for tests.

    Each test runs in its own transaction that is rolled back
    after the test completes, ensuring test isolation.
    """
    session_factory = async_sessionmaker(
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with engine.connect() as conn:
        await conn.begin()

        async with session_factory(bind=conn) as session:
            yield session

        await conn.rollback()


@pytest.fixture
async def app(db: AsyncSession):
    """Create test application instance."""
    application = create_app()

    # Override database dependency
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    application.dependency_overrides[get_db] = override_get_db

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


# ============================================================
# User and Role Fixtures
# ============================================================


async def create_user(db: AsyncSession, *roles: Role, **kwargs) -> User:
    """Persist a user holding the given roles."""
    user = UserFactory.build(**kwargs)
    user.roles.extend(roles)
    db.add(user)
    await db.flush()
    return user


async def create_role(
    db: AsyncSession,
    name: str,
    permissions: list[str] | None = None,
    is_default: bool = False,
) -> Role:
    """Persist a role directly, bypassing the service."""
    role = Role(
        name=name,
        permissions=normalize_permissions(permissions or []),
        is_default=is_default,
    )
    db.add(role)
    await db.flush()
    await db.refresh(role, attribute_names=["created_at", "updated_at"])
    return role


def bearer(user: User) -> dict[str, str]:
    """Authorization header for a user."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def make_user(db: AsyncSession):
    """Factory fixture persisting a user with the given roles."""

    async def _make(*roles: Role, **kwargs) -> User:
        return await create_user(db, *roles, **kwargs)

    return _make


@pytest.fixture
def make_role(db: AsyncSession):
    """Factory fixture persisting a role."""

    async def _make(
        name: str,
        permissions: list[str] | None = None,
        is_default: bool = False,
    ) -> Role:
        return await create_role(db, name, permissions, is_default)

    return _make


@pytest.fixture
def auth_headers():
    """Build the Authorization header for a user."""
    return bearer


@pytest.fixture
async def role_admin(db: AsyncSession) -> Role:
    """Role holding every role administration permission."""
    return await create_role(
        db,
        "role-admin",
        [
            Permission.ROLE_CREATE,
            Permission.ROLE_READ,
            Permission.ROLE_UPDATE,
            Permission.ROLE_DELETE,
        ],
    )


@pytest.fixture
async def admin(db: AsyncSession, role_admin: Role) -> User:
    """User allowed to administer roles."""
    return await create_user(db, role_admin)


@pytest.fixture
async def user(db: AsyncSession) -> User:
    """User without any role."""
    return await create_user(db)


@pytest.fixture
async def admin_client(app, admin: User) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client authenticated as the role administrator."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=bearer(admin),
    ) as client:
        yield client
