"""FeedWeights value object. No I/O, no framework imports.

A FeedWeights record always carries all four categories as non-negative
integers. It does not enforce the sum-to-100 rule itself: the redistribution
engine guarantees it after every boost, and replace() checks it on explicit
saves. The store rescales repaired records that do not total 100 before
handing them out.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from app.feed_weights.constants import (
    CATEGORY_ORDER,
    DEFAULT_WEIGHT_VALUES,
    TOTAL_PERCENT,
    Category,
)
from app.feed_weights.exceptions import InvalidDistribution


def is_valid_percent(value: Any) -> bool:
    """True for a non-negative int. bool is rejected even though it subclasses int."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


@dataclass(frozen=True)
class FeedWeights:
    family: int
    communities: int
    trending: int
    chronological: int

    def __getitem__(self, category: Category | str) -> int:
        return getattr(self, Category(category).value)

    @property
    def total(self) -> int:
        return self.family + self.communities + self.trending + self.chronological

    @property
    def has_redistributable_mass(self) -> bool:
        """True when every category has non-zero mass among the other three.

        That holds as long as at least two categories are non-zero.
        """
        return sum(1 for c in CATEGORY_ORDER if self[c] > 0) >= 2

    def as_dict(self) -> dict[str, int]:
        return {c.value: self[c] for c in CATEGORY_ORDER}

    def with_values(self, updates: Mapping[Category, int]) -> FeedWeights:
        return replace(self, **{Category(k).value: v for k, v in updates.items()})

    def normalized(self) -> FeedWeights:
        """Rescale to sum to exactly 100 using largest-remainder rounding.

        Integer arithmetic only. Leftover points go to the largest fractional
        parts, ties in category order. An all-zero record becomes the default.
        """
        total = self.total
        if total == TOTAL_PERCENT:
            return self
        if total == 0:
            return FeedWeights.default()

        floors: dict[Category, int] = {}
        remainders: dict[Category, int] = {}
        for c in CATEGORY_ORDER:
            floors[c], remainders[c] = divmod(self[c] * TOTAL_PERCENT, total)

        leftover = TOTAL_PERCENT - sum(floors.values())
        order = sorted(CATEGORY_ORDER, key=lambda c: (-remainders[c], CATEGORY_ORDER.index(c)))
        for c in order[:leftover]:
            floors[c] += 1
        return self.with_values(floors)

    @classmethod
    def default(cls) -> FeedWeights:
        return cls(**{c.value: v for c, v in DEFAULT_WEIGHT_VALUES.items()})

    @classmethod
    def from_mapping(cls, data: Mapping[Any, Any] | FeedWeights) -> FeedWeights:
        """Strict factory: every category present, no unknown keys, integer values >= 0.

        Raises InvalidDistribution and builds nothing on the first violation.
        """
        if isinstance(data, FeedWeights):
            data = data.as_dict()
        if not isinstance(data, Mapping):
            raise InvalidDistribution(
                "Feed weights must be a mapping of category to percentage."
            )

        values: dict[Category, int] = {}
        for key, value in data.items():
            try:
                category = Category(key)
            except ValueError:
                raise InvalidDistribution(f"Unknown feed category: {key!r}.") from None
            if not is_valid_percent(value):
                raise InvalidDistribution(
                    f"{category.value} must be a non-negative integer, got {value!r}."
                )
            values[category] = value

        missing = [c.value for c in CATEGORY_ORDER if c not in values]
        if missing:
            raise InvalidDistribution(f"Missing feed categories: {', '.join(missing)}.")
        return cls(**{c.value: values[c] for c in CATEGORY_ORDER})

    @classmethod
    def repaired(cls, data: Mapping[str, Any]) -> FeedWeights:
        """Lenient factory for stored records.

        Missing or unusable values are taken from the default distribution;
        unknown keys are ignored.
        """
        defaults = DEFAULT_WEIGHT_VALUES
        return cls(
            **{
                c.value: data[c.value] if is_valid_percent(data.get(c.value)) else defaults[c]
                for c in CATEGORY_ORDER
            }
        )


DEFAULT_FEED_WEIGHTS = FeedWeights.default()
