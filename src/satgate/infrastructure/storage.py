"""Key-value storage seam for asset metadata, with a Redis implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from .database import DatabaseClient

# SET NX and ZADD must land together or not at all
INSERT_INDEXED_SCRIPT = """
if redis.call('SET', KEYS[1], ARGV[1], 'NX') then
    redis.call('ZADD', KEYS[2], ARGV[3], ARGV[2])
    return 1
end
return 0
"""


class KeyValueStore(ABC):
    """Write-once documents plus score-ordered indexes over them."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    async def get_many(self, keys: Sequence[str]) -> List[Optional[str]]:
        pass

    @abstractmethod
    async def insert(self, key: str, value: str) -> bool:
        """Store ``value`` unless ``key`` is taken; False when it was."""

    @abstractmethod
    async def insert_indexed(
        self, key: str, value: str, index: str, member: str, score: float
    ) -> bool:
        """Atomically ``insert`` and add ``member`` to ``index``.

        Nothing is written when ``key`` is taken.
        """

    @abstractmethod
    async def index_range(self, index: str, offset: int, count: int) -> List[str]:
        """Members of ``index`` by descending score, ``count`` from ``offset``."""


class RedisKeyValueStore(KeyValueStore):
    """KeyValueStore over Redis strings and sorted sets."""

    def __init__(self, db_client: DatabaseClient):
        self._db_client = db_client

    async def get(self, key: str) -> Optional[str]:
        async with self._db_client.get_connection() as conn:
            return await conn.get(key)

    async def get_many(self, keys: Sequence[str]) -> List[Optional[str]]:
        if not keys:
            return []
        async with self._db_client.get_connection() as conn:
            return await conn.mget(list(keys))

    async def insert(self, key: str, value: str) -> bool:
        async with self._db_client.get_connection() as conn:
            # SET NX keeps the first writer
            return bool(await conn.set(key, value, nx=True))

    async def insert_indexed(
        self, key: str, value: str, index: str, member: str, score: float
    ) -> bool:
        async with self._db_client.get_connection() as conn:
            result = await conn.eval(
                INSERT_INDEXED_SCRIPT, 2, key, index, value, member, repr(score)
            )
        return int(result) == 1

    async def index_range(self, index: str, offset: int, count: int) -> List[str]:
        if count <= 0:
            return []
        async with self._db_client.get_connection() as conn:
            return await conn.zrevrange(index, offset, offset + count - 1)
