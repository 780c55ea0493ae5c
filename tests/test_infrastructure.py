"""Tests for the Mongo connection state machine, index setup and rate limiting."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from redis.exceptions import RedisError

from api.middleware.rate_limit_middleware import FixedWindowRateLimiter, RateLimitMiddleware
from common.exceptions.base_exception import ConflictException, ServiceUnavailableException
from infrastructure.database.mongodb import connection as connection_module
from infrastructure.database.mongodb.connection import ConnectionState, MongoDBConnection
from infrastructure.database.mongodb.repository import MongoRepository
from infrastructure.setup.initial_setup import run_initial_setup


@pytest.fixture(autouse=True)
def reset_connection():
    MongoDBConnection._client = None
    MongoDBConnection._db = None
    MongoDBConnection._state = ConnectionState.UNINITIALIZED
    MongoDBConnection._lock = None
    yield
    MongoDBConnection._client = None
    MongoDBConnection._db = None
    MongoDBConnection._state = ConnectionState.UNINITIALIZED
    MongoDBConnection._lock = None


def fake_motor_client(ping=None):
    client = MagicMock()

    async def slow_ping(*args, **kwargs):
        await asyncio.sleep(0.01)
        return {"ok": 1}

    client.admin.command = AsyncMock(side_effect=ping or slow_ping)
    client.__getitem__.return_value = "database-handle"
    return client


class TestConnectionStateMachine:
    async def test_concurrent_callers_share_one_client(self) -> None:
        client = fake_motor_client()
        with patch.object(connection_module, "AsyncIOMotorClient", return_value=client) as factory:
            results = await asyncio.gather(*[MongoDBConnection.connect() for _ in range(10)])

        assert factory.call_count == 1
        assert set(results) == {"database-handle"}
        assert MongoDBConnection.state() is ConnectionState.READY

    async def test_failed_connect_resets_state(self) -> None:
        client = fake_motor_client(ping=ConnectionError("refused"))
        with patch.object(connection_module, "AsyncIOMotorClient", return_value=client):
            with pytest.raises(ServiceUnavailableException):
                await MongoDBConnection.connect()

        assert MongoDBConnection.state() is ConnectionState.UNINITIALIZED

    async def test_retry_after_failure(self) -> None:
        broken = fake_motor_client(ping=ConnectionError("refused"))
        healthy = fake_motor_client()
        with patch.object(connection_module, "AsyncIOMotorClient", side_effect=[broken, healthy]):
            with pytest.raises(ServiceUnavailableException):
                await MongoDBConnection.connect()
            assert await MongoDBConnection.connect() == "database-handle"

    def test_get_db_before_connect(self) -> None:
        with pytest.raises(ServiceUnavailableException):
            MongoDBConnection.get_db()

    async def test_disconnect(self) -> None:
        client = fake_motor_client()
        with patch.object(connection_module, "AsyncIOMotorClient", return_value=client):
            await MongoDBConnection.connect()
        await MongoDBConnection.disconnect()

        client.close.assert_called_once()
        assert MongoDBConnection.state() is ConnectionState.UNINITIALIZED


class TestInitialSetup:
    async def test_seeds_languages_once(self, db) -> None:
        await run_initial_setup(db)
        await run_initial_setup(db)

        languages = await MongoRepository(db, "languages").find({})
        assert sorted(language["code"] for language in languages) == ["bn", "en"]

    async def test_unique_indexes(self, db) -> None:
        await run_initial_setup(db)
        pages = MongoRepository(db, "pages")

        await pages.insert_one({"key": "home"})
        with pytest.raises(ConflictException):
            await pages.insert_one({"key": "home"})


class FakeRedis:
    def __init__(self):
        self.counters = {}
        self.expiry = {}

    async def incr(self, key):
        self.counters[key] = self.counters.get(key, 0) + 1
        return self.counters[key]

    async def expire(self, key, seconds):
        self.expiry[key] = seconds


class TestRateLimiting:
    async def test_fixed_window(self) -> None:
        redis = FakeRedis()
        limiter = FixedWindowRateLimiter(redis, limit=2, window=60)

        assert [await limiter.hit("1.2.3.4") for _ in range(3)] == [True, True, False]
        assert await limiter.hit("5.6.7.8") is True
        assert redis.expiry == {"rate-limit:1.2.3.4": 60, "rate-limit:5.6.7.8": 60}

    def _app(self, redis_factory) -> FastAPI:
        app = FastAPI()
        app.add_middleware(RateLimitMiddleware, limit=2, window=60, redis_factory=redis_factory)

        @app.get("/ping")
        async def ping():
            return {"ok": True}

        @app.get("/health")
        async def health():
            return {"ok": True}

        return app

    def test_third_request_is_rejected(self) -> None:
        redis = FakeRedis()

        async def factory():
            return redis

        client = TestClient(self._app(factory))
        statuses = [client.get("/ping").status_code for _ in range(3)]

        assert statuses == [200, 200, 429]
        response = client.get("/ping")
        assert response.json()["error_code"] == "RATE_LIMITED"
        assert response.headers["Retry-After"] == "60"

    def test_health_is_exempt(self) -> None:
        redis = FakeRedis()

        async def factory():
            return redis

        client = TestClient(self._app(factory))
        assert all(client.get("/health").status_code == 200 for _ in range(5))

    def test_fails_open_without_redis(self) -> None:
        async def factory():
            raise RedisError("connection refused")

        client = TestClient(self._app(factory))
        assert client.get("/ping").status_code == 200
