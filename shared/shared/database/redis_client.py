from typing import Any

import redis.asyncio as redis

RedisClient = redis.Redis


def get_redis_client(redis_url: str, **kwargs: Any) -> redis.Redis:
    """Build an async client that returns str values (decode_responses=True)."""
    kwargs.setdefault("encoding", "utf-8")
    return redis.from_url(redis_url, decode_responses=True, **kwargs)


async def close_redis_client(client: redis.Redis) -> None:
    await client.aclose()
