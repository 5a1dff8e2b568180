"""Wishlist models."""

from datetime import UTC, datetime

from pydantic import Field, field_validator

from beverage_menu_service.models.beverage_models import BeverageCategory, CamelModel


class WishlistItem(CamelModel):
    """A beverage a customer wants to remember.

    Display fields are copied from the beverage when the entry is created, so
    the entry outlives the beverage it points to.
    """

    id: str = Field(..., description="Unique wishlist entry identifier")
    beverage_id: str = Field(..., description="Identifier of the referenced beverage")
    beverage_name: str
    beverage_category: BeverageCategory
    beverage_type: str = ""
    producer: str = ""
    price: float = Field(..., ge=0)
    restaurant_name: str = ""
    notes: str = ""
    added_at: datetime

    @field_validator("added_at")
    @classmethod
    def validate_added_at(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v
