"""Quick-adjust redistribution. Pure functions, no I/O, no framework imports.

Boosting a category:
  target  += 10, capped at 70
  others  -= their share of what the target gained, in proportion to their
             current size, rounded half-up and floored at 5
  drift   =  100 - new total, added entirely to the target

The target always ends between its input value and 70. If the drift pushes
it past 70 the overflow goes to the largest other category; if floor bumps
would pull it below its input value, the shortfall comes from the largest
other categories, never below 5. Inputs must total 100.

Example (defaults, boost family):
  family 40 → 50, others lose 10 split 30:20:10 of 60
  communities 30 - 5.00 = 25, trending 20 - 3.33 = 17, chronological 10 - 1.67 = 8
  total 100, no drift.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from app.feed_weights.constants import (
    BOOST_STEP,
    CATEGORY_CEILING,
    CATEGORY_FLOOR,
    CATEGORY_ORDER,
    QUICK_ADJUST_LABELS,
    TOTAL_PERCENT,
    Category,
)
from app.feed_weights.exceptions import InvalidDistribution
from app.feed_weights.weights import FeedWeights


class BoostRejection(str, enum.Enum):
    LIMIT_REACHED = "limit-reached"
    INVALID_INPUT = "invalid-input"


@dataclass(frozen=True)
class BoostResult:
    """Outcome of a boost request.

    ok=True            weights is the new distribution.
    LIMIT_REACHED      weights is the unchanged input; informational, not an error.
    INVALID_INPUT      weights is None; detail says what was wrong.
    """

    ok: bool
    weights: FeedWeights | None
    category: Category | None = None
    reason: BoostRejection | None = None
    detail: str | None = None

    @property
    def message(self) -> str | None:
        if self.category is None:
            return None
        label = QUICK_ADJUST_LABELS[self.category]
        if self.ok:
            return f"Showing more {label} content"
        if self.reason is BoostRejection.LIMIT_REACHED:
            return f"{label} is already at the {CATEGORY_CEILING}% maximum"
        return None


def round_half_up(value: float) -> int:
    """Round x.5 away from zero for positive values (built-in round() is banker's)."""
    return math.floor(value + 0.5)


def _move_points(updated: dict[Category, int], others: list[Category], amount: int) -> None:
    """Give (amount > 0) or take (amount < 0) points across others.

    Points go to, or come from, the largest categories first; category order
    breaks ties. Nothing is taken below CATEGORY_FLOOR.
    """
    # sorted() is stable, so equal values keep category order.
    for c in sorted(others, key=lambda c: -updated[c]):
        if amount == 0:
            return
        if amount > 0:
            updated[c] += amount
            return
        taken = min(-amount, max(updated[c] - CATEGORY_FLOOR, 0))
        updated[c] -= taken
        amount += taken


def apply_boost(weights: FeedWeights, category: Category) -> FeedWeights | None:
    """Shift BOOST_STEP points toward category. Returns None when already at the ceiling.

    Expects a record totalling 100. The boosted category ends between its
    current value and the ceiling; when drift would push it outside that
    range the difference is moved to or from the other categories.

    Raises InvalidDistribution when the other three categories are all zero,
    since there is nothing to take the boost from.
    """
    current = weights[category]
    new_target = min(current + BOOST_STEP, CATEGORY_CEILING)
    added = new_target - current
    if added <= 0:
        return None

    others = [c for c in CATEGORY_ORDER if c != category]
    others_total = sum(weights[c] for c in others)
    if others_total == 0:
        raise InvalidDistribution(
            f"No weight outside {category.value} to redistribute."
        )

    updated: dict[Category, int] = {category: new_target}
    for c in others:
        ratio = weights[c] / others_total
        updated[c] = max(round_half_up(weights[c] - added * ratio), CATEGORY_FLOOR)

    updated[category] += TOTAL_PERCENT - sum(updated.values())

    if updated[category] > CATEGORY_CEILING:
        _move_points(updated, others, updated[category] - CATEGORY_CEILING)
        updated[category] = CATEGORY_CEILING
    elif updated[category] < current:
        # Floors raised small categories by more than the boost freed.
        _move_points(updated, others, updated[category] - current)
        updated[category] = current

    return weights.with_values(updated)


def boost(current: Mapping[Any, Any] | FeedWeights, target: Category | str) -> BoostResult:
    """Validate input and boost target. Never raises; rejections come back in the result.

    The input must hold all four categories as non-negative integers totalling
    100. The ceiling check runs on the input exactly as given.
    """
    try:
        weights = FeedWeights.from_mapping(current)
    except InvalidDistribution as exc:
        return BoostResult(
            ok=False, weights=None, reason=BoostRejection.INVALID_INPUT, detail=str(exc)
        )
    try:
        category = Category(target)
    except ValueError:
        return BoostResult(
            ok=False,
            weights=None,
            reason=BoostRejection.INVALID_INPUT,
            detail=f"Unknown feed category: {target!r}.",
        )
    if weights.total != TOTAL_PERCENT:
        return BoostResult(
            ok=False,
            weights=None,
            category=category,
            reason=BoostRejection.INVALID_INPUT,
            detail=f"Feed weights must total {TOTAL_PERCENT}, got {weights.total}.",
        )

    try:
        boosted = apply_boost(weights, category)
    except InvalidDistribution as exc:
        return BoostResult(
            ok=False,
            weights=None,
            category=category,
            reason=BoostRejection.INVALID_INPUT,
            detail=str(exc),
        )

    if boosted is None:
        return BoostResult(
            ok=False,
            weights=weights,
            category=category,
            reason=BoostRejection.LIMIT_REACHED,
        )
    return BoostResult(ok=True, weights=boosted, category=category)


def reset() -> FeedWeights:
    return FeedWeights.default()


def replace(data: Mapping[Any, Any]) -> FeedWeights:
    """Validate a complete client-supplied distribution for an explicit save.

    Raises InvalidDistribution unless every category is an integer at or above
    the floor and the four values total exactly 100.
    """
    weights = FeedWeights.from_mapping(data)
    below_floor = [c.value for c in CATEGORY_ORDER if weights[c] < CATEGORY_FLOOR]
    if below_floor:
        raise InvalidDistribution(
            f"Categories below the {CATEGORY_FLOOR}% floor: {', '.join(below_floor)}."
        )
    if weights.total != TOTAL_PERCENT:
        raise InvalidDistribution(
            f"Feed weights must total {TOTAL_PERCENT}, got {weights.total}."
        )
    return weights
