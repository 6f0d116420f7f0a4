"""Feed-weights controller: converts service results to Pydantic responses,
catches domain exceptions and maps them to HTTPExceptions.
"""

from app.exceptions import UnprocessableError
from app.feed_weights import service
from app.feed_weights.constants import Category
from app.feed_weights.exceptions import InvalidDistribution
from app.feed_weights.schemas import (
    BoostResponse,
    FeedWeightsIn,
    FeedWeightsOut,
    FeedWeightsResponse,
    FeedWeightsSavedResponse,
)
from app.feed_weights.store import WeightStore


async def get_weights(store: WeightStore) -> FeedWeightsResponse:
    weights = await service.get_weights(store)
    return FeedWeightsResponse.from_weights(weights)


async def boost_category(category: Category, store: WeightStore) -> BoostResponse:
    result, persisted = await service.boost_category(store, category)
    return BoostResponse(
        ok=result.ok,
        reason=result.reason,
        message=result.message,
        detail=result.detail,
        weights=(
            FeedWeightsOut.model_validate(result.weights.as_dict())
            if result.weights is not None
            else None
        ),
        persisted=persisted,
    )


async def reset_weights(store: WeightStore) -> FeedWeightsSavedResponse:
    weights, persisted = await service.reset_weights(store)
    base = FeedWeightsResponse.from_weights(weights)
    return FeedWeightsSavedResponse(**base.model_dump(), persisted=persisted)


async def replace_weights(body: FeedWeightsIn, store: WeightStore) -> FeedWeightsSavedResponse:
    try:
        weights, persisted = await service.replace_weights(store, body.model_dump())
    except InvalidDistribution as exc:
        raise UnprocessableError(str(exc))
    base = FeedWeightsResponse.from_weights(weights)
    return FeedWeightsSavedResponse(**base.model_dump(), persisted=persisted)
