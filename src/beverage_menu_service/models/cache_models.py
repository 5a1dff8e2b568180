"""Offline menu cache models.

The snapshot is stored as one JSON object under a single storage key, with the
cache timestamp duplicated under a second key so the age can be computed
without decoding the full payload.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from beverage_menu_service.models.beverage_models import (
    Beer,
    BeverageCollections,
    CamelModel,
    Cocktail,
    NonAlcoholicBeverage,
    RestaurantMeta,
    Spirit,
    Wine,
)


class CacheState(str, Enum):
    """Enumeration of offline cache states."""

    EMPTY = "empty"
    POPULATED = "populated"
    POPULATED_AND_STALE = "populated-and-stale"


class OfflineMenuCache(CamelModel):
    """Snapshot of the last successfully fetched customer menu."""

    wines: list[Wine] = Field(default_factory=list)
    beers: list[Beer] = Field(default_factory=list)
    spirits: list[Spirit] = Field(default_factory=list)
    cocktails: list[Cocktail] = Field(default_factory=list)
    non_alcoholic: list[NonAlcoholicBeverage] = Field(default_factory=list)
    restaurant_name: str = Field(..., description="Restaurant display name")
    restaurant_cuisine: str = ""
    restaurant_cover_image: str | None = None
    cached_at: datetime = Field(..., description="When the snapshot was taken")

    @field_validator("cached_at")
    @classmethod
    def validate_cached_at(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @classmethod
    def from_menu(
        cls,
        collections: BeverageCollections,
        restaurant: RestaurantMeta,
        cached_at: datetime,
    ) -> "OfflineMenuCache":
        """Build a snapshot from live collections and restaurant metadata."""
        return cls(
            wines=list(collections.wines),
            beers=list(collections.beers),
            spirits=list(collections.spirits),
            cocktails=list(collections.cocktails),
            non_alcoholic=list(collections.non_alcoholic),
            restaurant_name=restaurant.name,
            restaurant_cuisine=restaurant.cuisine_type,
            restaurant_cover_image=restaurant.cover_image_url,
            cached_at=cached_at,
        )

    @property
    def collections(self) -> BeverageCollections:
        return BeverageCollections(
            wines=list(self.wines),
            beers=list(self.beers),
            spirits=list(self.spirits),
            cocktails=list(self.cocktails),
            non_alcoholic=list(self.non_alcoholic),
        )

    @property
    def restaurant(self) -> RestaurantMeta:
        return RestaurantMeta(
            name=self.restaurant_name,
            cuisine_type=self.restaurant_cuisine,
            cover_image_url=self.restaurant_cover_image,
        )

    def to_storage_payload(self) -> dict[str, Any]:
        """Convert to the persisted JSON object.

        Returns:
            dict: camelCase keys, ISO-8601 ``cachedAt``
        """
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_storage_payload(cls, payload: dict[str, Any]) -> "OfflineMenuCache":
        """Create a snapshot from the persisted JSON object.

        Args:
            payload: Decoded JSON object

        Returns:
            OfflineMenuCache: Parsed snapshot
        """
        return cls.model_validate(payload)


class CachedMenuRead(BaseModel):
    """Result of reading the offline cache: snapshot plus its age."""

    snapshot: OfflineMenuCache
    age: str = Field(..., description="Relative age, e.g. '2 days ago'")

    @property
    def label(self) -> str:
        """Display label, e.g. 'Cached 2 days ago'."""
        if self.age == "Just now":
            return "Cached just now"
        return f"Cached {self.age}"
