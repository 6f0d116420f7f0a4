"""Redis persistence for a user's feed weights.

Key schema
----------
feed:{user_id}:algorithm-settings   JSON object   no TTL   {"family": 40, "communities": 30, ...}

Reads never fail: a missing, unreadable or corrupt record yields the default
distribution, and a partial one is filled per category from the default,
then rescaled to total 100 if the filled record does not.
Writes raise PersistenceWriteFailed so the caller can decide how to degrade.
"""

import json
import logging
from uuid import UUID

from redis.asyncio import Redis
from redis.exceptions import RedisError

from app.feed_weights.constants import CATEGORY_ORDER, TOTAL_PERCENT
from app.feed_weights.exceptions import PersistenceReadCorrupt, PersistenceWriteFailed
from app.feed_weights.weights import FeedWeights, is_valid_percent

logger = logging.getLogger(__name__)


def weights_key(user_id: UUID) -> str:
    return f"feed:{user_id}:algorithm-settings"


def decode_weights(raw: str | bytes) -> tuple[FeedWeights, list[str]]:
    """Parse a stored payload, repairing missing or unusable categories.

    Returns the weights and the names of the categories that were filled from
    the default. Raises PersistenceReadCorrupt when the payload is not a JSON
    object, or when what survives repair leaves nothing to redistribute.
    """
    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as exc:
        raise PersistenceReadCorrupt(f"Stored feed weights are not valid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise PersistenceReadCorrupt(
            f"Stored feed weights must be a JSON object, got {type(parsed).__name__}."
        )

    filled = [c.value for c in CATEGORY_ORDER if not is_valid_percent(parsed.get(c.value))]
    weights = FeedWeights.repaired(parsed)
    if not weights.has_redistributable_mass:
        raise PersistenceReadCorrupt("Stored feed weights put all mass on one category.")
    return weights, filled


def encode_weights(weights: FeedWeights) -> str:
    return json.dumps(weights.as_dict())


class WeightStore:
    """Load/save pair over one Redis key, bound to a single user."""

    def __init__(self, redis: Redis, user_id: UUID) -> None:
        self._redis = redis
        self.user_id = user_id
        self.key = weights_key(user_id)

    async def load(self) -> FeedWeights:
        try:
            raw = await self._redis.get(self.key)
        except RedisError as exc:
            logger.warning("Feed weights read failed for %s, using defaults: %s", self.key, exc)
            return FeedWeights.default()
        if raw is None:
            return FeedWeights.default()

        try:
            weights, filled = decode_weights(raw)
        except PersistenceReadCorrupt as exc:
            logger.warning("Discarding stored feed weights for %s: %s", self.key, exc)
            return FeedWeights.default()

        if filled:
            logger.warning(
                "Filled feed weight categories %s for %s from defaults",
                ", ".join(filled),
                self.key,
            )
        if weights.total != TOTAL_PERCENT:
            logger.warning(
                "Stored feed weights for %s total %s, rescaling to %s",
                self.key,
                weights.total,
                TOTAL_PERCENT,
            )
            weights = weights.normalized()
        return weights

    async def save(self, weights: FeedWeights) -> None:
        """Overwrite the stored record. Raises PersistenceWriteFailed on Redis errors."""
        try:
            await self._redis.set(self.key, encode_weights(weights))
        except RedisError as exc:
            raise PersistenceWriteFailed(self.key) from exc
