from uuid import UUID

import jwt
from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from redis.asyncio import Redis

from app.config import Settings
from app.exceptions import UnauthorizedError
from app.feed_weights.store import WeightStore

_bearer = HTTPBearer(auto_error=False)


def get_settings() -> Settings:
    return Settings()


def get_redis(request: Request) -> Redis:
    return request.app.state.redis


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Security(_bearer),
    settings: Settings = Depends(get_settings),
) -> UUID:
    if credentials is None:
        raise UnauthorizedError()
    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
        return UUID(str(payload["sub"]))
    except (jwt.PyJWTError, KeyError, ValueError):
        raise UnauthorizedError("Invalid or expired token")


def get_weight_store(
    user_id: UUID = Depends(get_current_user),
    redis: Redis = Depends(get_redis),
) -> WeightStore:
    """Per-request store bound to the caller's own feed-weights record."""
    return WeightStore(redis=redis, user_id=user_id)
