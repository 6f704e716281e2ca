"""
Redis key/value storage.

Values are plain strings under the configured key prefix. `set_many` runs in a
MULTI/EXEC pipeline so both credentials are applied together or not at all.

**Security Note**: include TLS parameters in REDIS_URL when Redis is reached
over an untrusted network, and never log the connection URL.
"""

from typing import Mapping, Optional

import structlog
from redis.asyncio import Redis

from safezone.domain.interfaces.storage import IKeyValueStorage

logger = structlog.get_logger(__name__)


class RedisStorage(IKeyValueStorage):
    def __init__(self, redis: Redis):
        self._redis = redis

    @classmethod
    def from_url(cls, url: str) -> "RedisStorage":
        redis = Redis.from_url(url, encoding="utf-8", decode_responses=True)
        logger.debug("Redis connection created")
        return cls(redis)

    async def get(self, key: str) -> Optional[str]:
        return await self._redis.get(key)

    async def set(self, key: str, value: str) -> None:
        await self._redis.set(key, value)

    async def delete(self, key: str) -> None:
        await self._redis.delete(key)

    async def set_many(self, values: Mapping[str, str]) -> None:
        async with self._redis.pipeline(transaction=True) as pipe:
            for key, value in values.items():
                pipe.set(key, value)
            await pipe.execute()

    async def close(self) -> None:
        await self._redis.aclose()
        logger.debug("Redis connection closed")
