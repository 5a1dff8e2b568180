"""Beverage data models.

These models represent the beverage catalog of a restaurant as supplied by the
hosted backend. Field names are snake_case in Python and camelCase on the wire
(``inStock``, ``foodPairings``...) so cached payloads keep the same shape as the
remote records.
"""

from abc import abstractmethod
from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BeverageCategory(str, Enum):
    """Enumeration of beverage categories, in menu display order."""

    WINE = "wine"
    BEER = "beer"
    SPIRIT = "spirit"
    COCKTAIL = "cocktail"
    NON_ALCOHOLIC = "non-alcoholic"


class DietaryTag(str, Enum):
    """Enumeration of dietary tags an item can carry."""

    VEGAN = "vegan"
    ORGANIC = "organic"
    LOW_SULFITE = "low-sulfite"
    GLUTEN_FREE = "gluten-free"
    NATURAL = "natural"
    BIODYNAMIC = "biodynamic"


CATEGORY_TITLES: dict[BeverageCategory, str] = {
    BeverageCategory.WINE: "Wines",
    BeverageCategory.BEER: "Beers",
    BeverageCategory.SPIRIT: "Spirits & Liquors",
    BeverageCategory.COCKTAIL: "Cocktails",
    BeverageCategory.NON_ALCOHOLIC: "Non-Alcoholic",
}

PROFILE_SCALE_MIN = 1
PROFILE_SCALE_MAX = 5
PROFILE_NEUTRAL = 3


class CamelModel(BaseModel):
    """Base model serialising field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FlavorProfile(CamelModel):
    """Four-dimensional wine flavor profile on a 1-5 scale.

    Dimensions missing from older records default to the neutral value 3.
    Out-of-scale values are kept as-is rather than rejected.
    """

    body: int = Field(default=PROFILE_NEUTRAL, description="Light (1) to full (5)")
    sweetness: int = Field(default=PROFILE_NEUTRAL, description="Dry (1) to sweet (5)")
    tannins: int = Field(default=PROFILE_NEUTRAL, description="Soft (1) to bold (5)")
    acidity: int = Field(default=PROFILE_NEUTRAL, description="Low (1) to crisp (5)")

    @property
    def is_within_scale(self) -> bool:
        """Whether every dimension lies inside the 1-5 scale."""
        return all(
            PROFILE_SCALE_MIN <= value <= PROFILE_SCALE_MAX
            for value in (self.body, self.sweetness, self.tannins, self.acidity)
        )


class BeerProfile(CamelModel):
    """Beer taste profile on a 1-5 scale."""

    bitterness: int = PROFILE_NEUTRAL
    maltiness: int = PROFILE_NEUTRAL
    hoppy: int = PROFILE_NEUTRAL
    body: int = PROFILE_NEUTRAL


class SpiritProfile(CamelModel):
    """Spirit taste profile on a 1-5 scale."""

    smoothness: int = PROFILE_NEUTRAL
    complexity: int = PROFILE_NEUTRAL
    sweetness: int = PROFILE_NEUTRAL
    intensity: int = PROFILE_NEUTRAL


class BeverageBase(CamelModel):
    """Fields shared by every beverage variant."""

    id: str = Field(..., description="Unique identifier for the beverage")
    name: str = Field(..., description="Display name")
    price: float = Field(..., description="Price in the restaurant's currency", ge=0)
    featured: bool = Field(default=False, description="Staff pick flag")
    image_url: str | None = Field(None, description="URL to beverage image")
    dietary_tags: list[DietaryTag] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    @abstractmethod
    def is_available_for_sale(self) -> bool:
        """Normalized availability flag, whatever the variant calls it."""

    @property
    def pairing_terms(self) -> list[str]:
        """Free-text food pairings used for cuisine matching."""
        return []


class StockedBeverage(BeverageBase):
    """Variant whose availability is tracked through ``in_stock``."""

    in_stock: bool = Field(default=True, description="Whether the item is in stock")
    quantity: int = Field(default=0, ge=0)

    @property
    def is_available_for_sale(self) -> bool:
        return self.in_stock


class Wine(StockedBeverage):
    """Wine list entry."""

    category: Literal["wine"] = "wine"
    producer: str = ""
    type: str = Field(default="red", description="red, white, rose, sparkling, dessert, fortified")
    vintage: int | None = None
    region: str = ""
    country: str = ""
    grape: str = ""
    alcohol_content: float | None = None
    glass_price: float | None = Field(None, ge=0)
    tasting_notes: str = ""
    food_pairings: list[str] = Field(default_factory=list)
    flavor_profile: FlavorProfile | None = None

    @property
    def pairing_terms(self) -> list[str]:
        return self.food_pairings


class Beer(StockedBeverage):
    """Beer list entry."""

    category: Literal["beer"] = "beer"
    brewery: str = ""
    type: str = "lager"
    style: str = ""
    abv: float | None = None
    ibu: int | None = None
    origin: str = ""
    serving_size: str = ""
    description: str = ""
    food_pairings: list[str] = Field(default_factory=list)
    beer_profile: BeerProfile | None = None

    @property
    def pairing_terms(self) -> list[str]:
        return self.food_pairings


class Spirit(StockedBeverage):
    """Spirit list entry."""

    category: Literal["spirit"] = "spirit"
    brand: str = ""
    type: str = "whiskey"
    origin: str = ""
    age: str | None = None
    abv: float | None = None
    shot_price: float | None = Field(None, ge=0)
    description: str = ""
    mixers: list[str] = Field(default_factory=list)
    spirit_profile: SpiritProfile | None = None


class Cocktail(BeverageBase):
    """Cocktail list entry.

    Cocktails are made to order, so availability is ``is_available`` rather
    than a stock flag.
    """

    category: Literal["cocktail"] = "cocktail"
    type: str = "signature"
    base_spirit: str = ""
    ingredients: list[str] = Field(default_factory=list)
    garnish: str = ""
    glass_type: str = ""
    description: str = ""
    is_signature: bool = False
    is_available: bool = Field(default=True, description="Whether the bar can serve it")

    @property
    def is_available_for_sale(self) -> bool:
        return self.is_available


class NonAlcoholicBeverage(StockedBeverage):
    """Non-alcoholic list entry."""

    category: Literal["non-alcoholic"] = "non-alcoholic"
    brand: str | None = None
    type: str = "other"
    description: str = ""
    serving_size: str = ""
    calories: int | None = None
    ingredients: list[str] = Field(default_factory=list)


Beverage = Annotated[
    Union[Wine, Beer, Spirit, Cocktail, NonAlcoholicBeverage],
    Field(discriminator="category"),
]


class BeverageCollections(CamelModel):
    """The five independent beverage collections of one restaurant."""

    wines: list[Wine] = Field(default_factory=list)
    beers: list[Beer] = Field(default_factory=list)
    spirits: list[Spirit] = Field(default_factory=list)
    cocktails: list[Cocktail] = Field(default_factory=list)
    non_alcoholic: list[NonAlcoholicBeverage] = Field(default_factory=list)

    def by_category(self) -> dict[BeverageCategory, list[BeverageBase]]:
        """Return the collections keyed by category, in display order."""
        return {
            BeverageCategory.WINE: list(self.wines),
            BeverageCategory.BEER: list(self.beers),
            BeverageCategory.SPIRIT: list(self.spirits),
            BeverageCategory.COCKTAIL: list(self.cocktails),
            BeverageCategory.NON_ALCOHOLIC: list(self.non_alcoholic),
        }

    def find(self, beverage_id: str) -> BeverageBase | None:
        """Return the item with the given id from any collection."""
        for items in self.by_category().values():
            for item in items:
                if item.id == beverage_id:
                    return item
        return None

    def available_only(self) -> "BeverageCollections":
        """Return a copy holding only items available for sale."""
        return BeverageCollections(
            wines=[w for w in self.wines if w.is_available_for_sale],
            beers=[b for b in self.beers if b.is_available_for_sale],
            spirits=[s for s in self.spirits if s.is_available_for_sale],
            cocktails=[c for c in self.cocktails if c.is_available_for_sale],
            non_alcoholic=[n for n in self.non_alcoholic if n.is_available_for_sale],
        )


class RestaurantMeta(CamelModel):
    """Restaurant display metadata shown on the customer menu."""

    name: str = Field(..., description="Restaurant display name")
    cuisine_type: str = ""
    cover_image_url: str | None = None
