"""Redis connection for the asset metadata store."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional, Protocol

import redis.asyncio as redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class HasDatabaseSettings(Protocol):
    database_url: str


class DatabaseClient:
    """Owns one pooled async Redis client, created on first use.

    Redis needs no schema, so there is nothing to migrate at startup.
    """

    def __init__(self, settings: HasDatabaseSettings):
        self.database_url = settings.database_url
        self._redis: Optional[redis.Redis] = None

    @property
    def redis(self) -> redis.Redis:
        if self._redis is None:
            self._redis = redis.from_url(self.database_url, decode_responses=True)
        return self._redis

    @asynccontextmanager
    async def get_connection(self) -> AsyncGenerator[redis.Redis, None]:
        yield self.redis

    async def ping(self) -> bool:
        try:
            return bool(await self.redis.ping())
        except RedisError as e:
            logger.warning("Redis at %s is unreachable: %s", self.database_url, e)
            return False

    async def close(self) -> None:
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None


_db_client: Optional[DatabaseClient] = None


def get_database_client(settings: HasDatabaseSettings) -> DatabaseClient:
    """Process-wide database client."""
    global _db_client
    if _db_client is None:
        _db_client = DatabaseClient(settings)
    return _db_client
