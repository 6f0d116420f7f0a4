from collections.abc import AsyncGenerator, Generator
from uuid import UUID, uuid4

import jwt
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError

from app.config import Settings
from app.dependencies import get_redis, get_settings
from app.feed_weights.store import WeightStore
from app.main import app

TEST_JWT_SECRET = "personalization-test-secret-0123456789abcdef"


class FakeRedis:
    """In-memory stand-in for the two async Redis commands the store uses."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.set_calls: list[tuple[str, str]] = []
        self.fail_reads = False
        self.fail_writes = False

    async def get(self, key: str) -> str | None:
        if self.fail_reads:
            raise RedisConnectionError("redis unavailable")
        return self.data.get(key)

    async def set(self, key: str, value: str) -> bool:
        self.set_calls.append((key, value))
        if self.fail_writes:
            raise RedisConnectionError("redis unavailable")
        self.data[key] = value
        return True


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def store(fake_redis: FakeRedis, user_id: UUID) -> WeightStore:
    return WeightStore(redis=fake_redis, user_id=user_id)


@pytest.fixture
def auth_headers(user_id: UUID) -> dict[str, str]:
    token = jwt.encode({"sub": str(user_id)}, TEST_JWT_SECRET, algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def overrides(fake_redis: FakeRedis) -> Generator[None, None, None]:
    app.dependency_overrides[get_redis] = lambda: fake_redis
    app.dependency_overrides[get_settings] = lambda: Settings(jwt_secret=TEST_JWT_SECRET)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client(overrides: None) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest_asyncio.fixture
async def async_client(overrides: None) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
