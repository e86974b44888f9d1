import httpx
import pytest
from asgi_lifespan import LifespanManager
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.main import app
from app.auth import deps as auth_deps
from app.core.db import Base, get_session
from app.core.rate_limit import SlidingWindowRateLimiter, get_rate_limiter
from app.llm.base import get_model_provider
from app.models import models  # noqa: F401
from app.storage import blob
from tests.fixtures import DummyS3, FakeProvider, outfit_json


@pytest.fixture(autouse=True)
def override_auth():
    app.dependency_overrides[auth_deps.get_current_user_id] = lambda: "test-user"
    yield
    app.dependency_overrides.pop(auth_deps.get_current_user_id, None)


@pytest.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    await engine.dispose()


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def provider():
    return FakeProvider(outfit_json(["1", "2"]))


@pytest.fixture
def s3(monkeypatch):
    dummy = DummyS3()
    monkeypatch.setattr(blob, "storage_client", lambda: dummy)
    return dummy


@pytest.fixture
async def client(session_factory, provider, s3):
    async def _session():
        async with session_factory() as session:
            yield session

    limiter = SlidingWindowRateLimiter()
    app.dependency_overrides[get_session] = _session
    app.dependency_overrides[get_rate_limiter] = lambda: limiter
    app.dependency_overrides[get_model_provider] = lambda: provider
    async with LifespanManager(app):
        async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    for dep in (get_session, get_rate_limiter, get_model_provider):
        app.dependency_overrides.pop(dep, None)
