from fastapi import APIRouter, Depends

from app.dependencies import get_weight_store
from app.feed_weights import controller
from app.feed_weights.schemas import (
    BoostRequest,
    BoostResponse,
    FeedWeightsIn,
    FeedWeightsResponse,
    FeedWeightsSavedResponse,
)
from app.feed_weights.store import WeightStore

router = APIRouter(prefix="/feed-weights", tags=["Feed Weights"])


@router.get(
    "",
    response_model=FeedWeightsResponse,
    summary="Current feed weights",
    description=(
        "Returns the caller's feed distribution across family, communities, trending "
        "and chronological. Falls back to 40/30/20/10 when nothing valid is stored. "
        "Requires authentication."
    ),
)
async def get_weights(
    store: WeightStore = Depends(get_weight_store),
) -> FeedWeightsResponse:
    return await controller.get_weights(store)


@router.post(
    "/boost",
    response_model=BoostResponse,
    summary="Quick adjustment: show more of one category",
    description=(
        "Raises the category by 10 points (capped at 70) and takes the points from the "
        "other three in proportion to their size, never below 5. "
        "Returns ok=false with reason='limit-reached' when the category is already at 70; "
        "nothing is saved in that case. "
        "Requires authentication."
    ),
)
async def boost_category(
    body: BoostRequest,
    store: WeightStore = Depends(get_weight_store),
) -> BoostResponse:
    return await controller.boost_category(body.category, store)


@router.post(
    "/reset",
    response_model=FeedWeightsSavedResponse,
    summary="Restore default feed weights",
    description="Saves the 40/30/20/10 default distribution. Requires authentication.",
)
async def reset_weights(
    store: WeightStore = Depends(get_weight_store),
) -> FeedWeightsSavedResponse:
    return await controller.reset_weights(store)


@router.put(
    "",
    response_model=FeedWeightsSavedResponse,
    summary="Replace feed weights",
    description=(
        "Saves a complete distribution. All four categories are required, each at least 5, "
        "totalling exactly 100. Returns 422 otherwise. "
        "Requires authentication."
    ),
)
async def replace_weights(
    body: FeedWeightsIn,
    store: WeightStore = Depends(get_weight_store),
) -> FeedWeightsSavedResponse:
    return await controller.replace_weights(body, store)
