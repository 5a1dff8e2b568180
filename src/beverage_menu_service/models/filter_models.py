"""Filter selection models and the static cuisine taxonomy.

Filter selections are plain data owned by the caller. Nothing here is
persisted: a browse session starts from the defaults every time.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from beverage_menu_service.models.beverage_models import (
    PROFILE_SCALE_MAX,
    PROFILE_SCALE_MIN,
    BeverageCategory,
    DietaryTag,
)

ALL = "all"

Range = tuple[int, int]
FULL_RANGE: Range = (PROFILE_SCALE_MIN, PROFILE_SCALE_MAX)


class FlavorDimension(str, Enum):
    """Enumeration of flavor profile dimensions."""

    BODY = "body"
    SWEETNESS = "sweetness"
    TANNINS = "tannins"
    ACIDITY = "acidity"


class FlavorRangeFilters(BaseModel):
    """Inclusive (min, max) selection per flavor dimension.

    Both bounds lie on the 1-5 scale and min never exceeds max.
    """

    model_config = ConfigDict(frozen=True)

    body: Range = FULL_RANGE
    sweetness: Range = FULL_RANGE
    tannins: Range = FULL_RANGE
    acidity: Range = FULL_RANGE

    @model_validator(mode="after")
    def validate_ranges(self) -> "FlavorRangeFilters":
        """Validate that every range is ordered and on the scale."""
        for dimension in FlavorDimension:
            low, high = self.range_for(dimension)
            if not PROFILE_SCALE_MIN <= low <= high <= PROFILE_SCALE_MAX:
                raise ValueError(
                    f"{dimension.value} range must satisfy "
                    f"{PROFILE_SCALE_MIN} <= min <= max <= {PROFILE_SCALE_MAX}, got ({low}, {high})"
                )
        return self

    def range_for(self, dimension: FlavorDimension) -> Range:
        """Return the selected range for a dimension."""
        value: Range = getattr(self, dimension.value)
        return value

    def with_range(self, dimension: FlavorDimension, value: Range) -> "FlavorRangeFilters":
        """Return a copy with one dimension replaced (validated)."""
        data = self.model_dump()
        data[dimension.value] = value
        return FlavorRangeFilters(**data)

    @property
    def is_default(self) -> bool:
        """Whether no dimension has been narrowed."""
        return all(self.range_for(d) == FULL_RANGE for d in FlavorDimension)

    @property
    def has_active_filters(self) -> bool:
        return not self.is_default


DEFAULT_FLAVOR_FILTERS = FlavorRangeFilters()


class CuisineCategory(BaseModel):
    """Cuisine category used to match free-text food pairings."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    keywords: tuple[str, ...] = ()


CUISINE_CATEGORIES: tuple[CuisineCategory, ...] = (
    CuisineCategory(id=ALL, label="All"),
    CuisineCategory(
        id="seafood",
        label="Seafood",
        keywords=(
            "seafood", "fish", "salmon", "tuna", "lobster", "crab", "shrimp", "oyster",
            "scallop", "mussel", "clam", "shellfish", "sushi", "sashimi", "grilled fish",
            "raw fish", "prawn", "calamari", "squid", "octopus",
        ),
    ),
    CuisineCategory(
        id="steak",
        label="Steak & Beef",
        keywords=(
            "steak", "beef", "ribeye", "tenderloin", "filet", "prime rib", "wagyu", "burger",
            "brisket", "roast beef", "veal", "beef tenderloin", "sirloin", "strip", "t-bone",
            "porterhouse", "short rib", "oxtail",
        ),
    ),
    CuisineCategory(
        id="poultry",
        label="Poultry",
        keywords=(
            "chicken", "poultry", "turkey", "duck", "goose", "quail", "game bird", "fowl",
            "roast chicken", "grilled chicken", "fried chicken", "rotisserie",
        ),
    ),
    CuisineCategory(
        id="lamb",
        label="Lamb & Game",
        keywords=(
            "lamb", "lamb rack", "lamb chop", "lamb shank", "game", "venison", "boar",
            "rabbit", "bison", "elk", "game meat", "mutton", "goat",
        ),
    ),
    CuisineCategory(
        id="pasta",
        label="Pasta & Italian",
        keywords=(
            "pasta", "spaghetti", "lasagna", "risotto", "gnocchi", "ravioli", "fettuccine",
            "penne", "linguine", "carbonara", "bolognese", "italian", "pizza", "marinara",
            "alfredo", "pesto", "light pasta",
        ),
    ),
    CuisineCategory(
        id="vegetarian",
        label="Vegetarian",
        keywords=(
            "vegetarian", "vegetable", "salad", "vegan", "greens", "mushroom", "truffle",
            "asparagus", "artichoke", "eggplant", "zucchini", "summer salad", "garden",
            "plant-based", "roasted vegetables", "grilled vegetables",
        ),
    ),
    CuisineCategory(
        id="cheese",
        label="Cheese",
        keywords=(
            "cheese", "goat cheese", "aged cheese", "blue cheese", "brie", "camembert",
            "parmesan", "cheddar", "gruyere", "manchego", "fromage", "charcuterie",
            "cheese board", "strong cheese",
        ),
    ),
    CuisineCategory(
        id="soup",
        label="Soups & Stews",
        keywords=(
            "soup", "stew", "broth", "bisque", "chowder", "consomme", "ramen", "pho",
            "bouillabaisse", "goulash", "curry",
        ),
    ),
    CuisineCategory(
        id="appetizer",
        label="Appetizers",
        keywords=(
            "appetizer", "starter", "tapas", "bruschetta", "crostini", "canapé",
            "hors d'oeuvre", "small plate", "caviar", "pate", "terrine", "ceviche",
        ),
    ),
    CuisineCategory(
        id="dessert",
        label="Desserts",
        keywords=(
            "dessert", "chocolate", "cake", "pastry", "fruit", "tart", "pie", "crème brûlée",
            "tiramisu", "mousse", "ice cream", "sweet", "dark chocolate", "berry", "celebration",
        ),
    ),
)


class PriceRange(str, Enum):
    """Catalog price buckets."""

    ALL = "all"
    BUDGET = "$"
    MODERATE = "$$"
    PREMIUM = "$$$"

    @property
    def bounds(self) -> tuple[float, float | None]:
        """Inclusive lower bound and exclusive upper bound (None = unbounded)."""
        return _PRICE_BOUNDS[self]


_PRICE_BOUNDS: dict[PriceRange, tuple[float, float | None]] = {
    PriceRange.ALL: (0, None),
    PriceRange.BUDGET: (0, 10),
    PriceRange.MODERATE: (10, 20),
    PriceRange.PREMIUM: (20, None),
}


class CatalogQuery(BaseModel):
    """Owner catalog search selection."""

    search: str = ""
    category: BeverageCategory | Literal["all"] = ALL
    beverage_type: str = ALL
    price_range: PriceRange = PriceRange.ALL
    dietary_tags: list[DietaryTag] = Field(default_factory=list)
