from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from tutelage_api.core.auth.models import UserRole
from tutelage_api.core.auth.service import AuthService
from tutelage_api.core.database import get_db
from tutelage_api.core.database.base import Base
from tutelage_api.main import app
from tutelage_api.modules.resources.models import Video
from tutelage_api.modules.resources.registry import ResourceRegistry, build_default_registry

# In-memory SQLite, one fresh database per test
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Get test database session."""
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def registry() -> ResourceRegistry:
    return build_default_registry()


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Get test HTTP client with overridden database dependency."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def auth_headers(db_session: AsyncSession) -> dict[str, str]:
    """Bearer header of a freshly created editor account."""
    auth = AuthService(db_session)
    await auth.create_user(
        email="editor@tutelage.io",
        password="Pass12345",
        name="Content Editor",
        role=UserRole.MAIN_MANAGER,
    )
    await db_session.commit()
    _, token = await auth.authenticate("editor@tutelage.io", "Pass12345")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def video(db_session: AsyncSession) -> Video:
    video = Video(title="Present perfect in 5 minutes")
    db_session.add(video)
    await db_session.commit()
    return video
