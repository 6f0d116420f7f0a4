from shared.database.redis_client import RedisClient, close_redis_client, get_redis_client

__all__ = [
    "RedisClient",
    "close_redis_client",
    "get_redis_client",
]
