import enum


class Category(str, enum.Enum):
    FAMILY = "family"
    COMMUNITIES = "communities"
    TRENDING = "trending"
    CHRONOLOGICAL = "chronological"


# Display order for bars and quick-adjust buttons; also the tie-break order.
CATEGORY_ORDER: tuple[Category, ...] = (
    Category.FAMILY,
    Category.COMMUNITIES,
    Category.TRENDING,
    Category.CHRONOLOGICAL,
)

CATEGORY_LABELS: dict[Category, str] = {
    Category.FAMILY: "Family & Friends",
    Category.COMMUNITIES: "Communities",
    Category.TRENDING: "Trending",
    Category.CHRONOLOGICAL: "Chronological",
}

# Shorter labels used on the quick-adjust buttons and in boost confirmations.
QUICK_ADJUST_LABELS: dict[Category, str] = {
    Category.FAMILY: "Family",
    Category.COMMUNITIES: "Communities",
    Category.TRENDING: "Trending",
    Category.CHRONOLOGICAL: "Explore",
}

TOTAL_PERCENT: int = 100
BOOST_STEP: int = 10
CATEGORY_CEILING: int = 70   # no boost may push a category above this
CATEGORY_FLOOR: int = 5      # reduced categories never drop below this

DEFAULT_WEIGHT_VALUES: dict[Category, int] = {
    Category.FAMILY: 40,
    Category.COMMUNITIES: 30,
    Category.TRENDING: 20,
    Category.CHRONOLOGICAL: 10,
}
