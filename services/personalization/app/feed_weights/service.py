"""Feed-weights service: orchestration over the engine and store, no FastAPI imports.

Every mutation is computed in memory first and only then persisted. A failed
write is logged and reported back as persisted=False; the new distribution is
still returned so the caller can keep using it for the session.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from app.feed_weights import redistribution
from app.feed_weights.constants import Category
from app.feed_weights.exceptions import PersistenceWriteFailed
from app.feed_weights.redistribution import BoostRejection, BoostResult
from app.feed_weights.store import WeightStore
from app.feed_weights.weights import FeedWeights

logger = logging.getLogger(__name__)


async def _persist(store: WeightStore, weights: FeedWeights) -> bool:
    try:
        await store.save(weights)
    except PersistenceWriteFailed as exc:
        logger.warning("%s Keeping in-memory weights for user %s.", exc, store.user_id)
        return False
    return True


async def get_weights(store: WeightStore) -> FeedWeights:
    return await store.load()


async def boost_category(store: WeightStore, category: Category) -> tuple[BoostResult, bool]:
    """Boost one category and persist the result.

    Returns (result, persisted). Nothing is written unless result.ok.
    """
    current = await store.load()
    result = redistribution.boost(current, category)

    if not result.ok:
        if result.reason is BoostRejection.LIMIT_REACHED:
            logger.warning(
                "Boost of %s for user %s skipped: already at ceiling", category.value, store.user_id
            )
        else:
            logger.warning(
                "Boost of %s for user %s rejected: %s", category.value, store.user_id, result.detail
            )
        return result, False

    persisted = await _persist(store, result.weights)
    logger.info(
        "Boosted %s for user %s: %s", category.value, store.user_id, result.weights.as_dict()
    )
    return result, persisted


async def reset_weights(store: WeightStore) -> tuple[FeedWeights, bool]:
    weights = redistribution.reset()
    persisted = await _persist(store, weights)
    logger.info("Reset feed weights for user %s", store.user_id)
    return weights, persisted


async def replace_weights(
    store: WeightStore, data: Mapping[str, Any]
) -> tuple[FeedWeights, bool]:
    """Validate and store a complete distribution. Raises InvalidDistribution."""
    weights = redistribution.replace(data)
    persisted = await _persist(store, weights)
    return weights, persisted
