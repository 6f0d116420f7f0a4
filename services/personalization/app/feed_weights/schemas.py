"""Feed-weights domain Pydantic V2 schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from app.feed_weights.constants import (
    CATEGORY_LABELS,
    CATEGORY_ORDER,
    QUICK_ADJUST_LABELS,
    Category,
)
from app.feed_weights.redistribution import BoostRejection
from app.feed_weights.weights import FeedWeights


class FeedWeightsOut(BaseModel):
    """Four integer percentages, one per category."""

    family: int
    communities: int
    trending: int
    chronological: int


class CategoryInfo(BaseModel):
    key: Category
    label: str = Field(description="Display label for the distribution bar.")
    quick_label: str = Field(description="Short label for the quick-adjust button.")
    percentage: int


class FeedWeightsResponse(BaseModel):
    """Current distribution plus per-category display metadata, in display order."""

    weights: FeedWeightsOut
    categories: list[CategoryInfo]

    @classmethod
    def from_weights(cls, weights: FeedWeights) -> FeedWeightsResponse:
        return cls(
            weights=FeedWeightsOut.model_validate(weights.as_dict()),
            categories=[
                CategoryInfo(
                    key=c,
                    label=CATEGORY_LABELS[c],
                    quick_label=QUICK_ADJUST_LABELS[c],
                    percentage=weights[c],
                )
                for c in CATEGORY_ORDER
            ],
        )


class FeedWeightsSavedResponse(FeedWeightsResponse):
    persisted: bool = Field(
        description="False when the write to storage failed; the weights still apply for this session.",
    )


class BoostRequest(BaseModel):
    category: Category = Field(description="Category to show more of.")


class BoostResponse(BaseModel):
    """Result of a quick adjustment.

    ok=false with reason='limit-reached' is informational: the category is
    already at its 70% ceiling and nothing changed.
    """

    ok: bool
    reason: BoostRejection | None = None
    message: str | None = Field(default=None, description="User-facing confirmation or notice.")
    detail: str | None = None
    weights: FeedWeightsOut | None = None
    persisted: bool = False


class FeedWeightsIn(BaseModel):
    """Complete distribution for an explicit save. Must total 100, each category >= 5."""

    model_config = ConfigDict(extra="forbid")

    family: int = Field(..., ge=0, le=100)
    communities: int = Field(..., ge=0, le=100)
    trending: int = Field(..., ge=0, le=100)
    chronological: int = Field(..., ge=0, le=100)
