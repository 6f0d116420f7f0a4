import pytest

from app.feed_weights.constants import Category
from app.feed_weights.exceptions import InvalidDistribution
from app.feed_weights.weights import DEFAULT_FEED_WEIGHTS, FeedWeights


def test_default_distribution() -> None:
    assert DEFAULT_FEED_WEIGHTS.as_dict() == {
        "family": 40,
        "communities": 30,
        "trending": 20,
        "chronological": 10,
    }
    assert DEFAULT_FEED_WEIGHTS.total == 100


def test_lookup_by_category_or_name() -> None:
    assert DEFAULT_FEED_WEIGHTS[Category.TRENDING] == 20
    assert DEFAULT_FEED_WEIGHTS["chronological"] == 10


def test_from_mapping_accepts_enum_keys() -> None:
    weights = FeedWeights.from_mapping(
        {Category.FAMILY: 25, Category.COMMUNITIES: 25, Category.TRENDING: 25, Category.CHRONOLOGICAL: 25}
    )
    assert weights == FeedWeights(25, 25, 25, 25)


@pytest.mark.parametrize(
    "data, fragment",
    [
        ({"family": 40, "communities": 30, "trending": 20}, "Missing feed categories: chronological"),
        ({"family": 40, "communities": 30, "trending": 20, "chronological": 10, "news": 0}, "Unknown"),
        ({"family": "40", "communities": 30, "trending": 20, "chronological": 10}, "family"),
        ({"family": 40.0, "communities": 30, "trending": 20, "chronological": 10}, "family"),
        ({"family": 40, "communities": -5, "trending": 45, "chronological": 20}, "communities"),
        ({"family": True, "communities": 30, "trending": 20, "chronological": 10}, "family"),
    ],
)
def test_from_mapping_rejects_malformed(data: dict, fragment: str) -> None:
    with pytest.raises(InvalidDistribution, match=fragment):
        FeedWeights.from_mapping(data)


def test_from_mapping_rejects_non_mapping() -> None:
    with pytest.raises(InvalidDistribution):
        FeedWeights.from_mapping([40, 30, 20, 10])  # type: ignore[arg-type]


def test_repaired_fills_missing_and_unusable_values() -> None:
    weights = FeedWeights.repaired({"family": 55, "communities": "lots", "chronological": 5, "extra": 1})
    assert weights.as_dict() == {
        "family": 55,
        "communities": 30,
        "trending": 20,
        "chronological": 5,
    }


def test_normalized_keeps_records_that_total_100() -> None:
    weights = FeedWeights(70, 10, 10, 10)
    assert weights.normalized() is weights


def test_normalized_uses_largest_remainder() -> None:
    # 50/30/20/20 of 120 → 41.67 / 25.00 / 16.67 / 16.67
    weights = FeedWeights(50, 30, 20, 20).normalized()
    assert weights.as_dict() == {
        "family": 42,
        "communities": 25,
        "trending": 17,
        "chronological": 16,
    }
    assert weights.total == 100


def test_normalized_all_zero_becomes_default() -> None:
    assert FeedWeights(0, 0, 0, 0).normalized() == DEFAULT_FEED_WEIGHTS


@pytest.mark.parametrize(
    "weights, expected",
    [
        (FeedWeights(40, 30, 20, 10), True),
        (FeedWeights(95, 0, 0, 5), True),
        (FeedWeights(100, 0, 0, 0), False),
        (FeedWeights(0, 0, 0, 0), False),
    ],
)
def test_has_redistributable_mass(weights: FeedWeights, expected: bool) -> None:
    assert weights.has_redistributable_mass is expected
