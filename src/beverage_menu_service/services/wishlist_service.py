"""Wishlist management."""

import logging
import uuid
from collections.abc import Callable
from datetime import UTC, datetime

from beverage_menu_service.models.beverage_models import (
    Beer,
    BeverageBase,
    BeverageCategory,
    NonAlcoholicBeverage,
    Spirit,
    Wine,
)
from beverage_menu_service.models.wishlist_models import WishlistItem
from beverage_menu_service.repositories.wishlist_repository import WishlistRepository

logger = logging.getLogger(__name__)


def _producer_of(beverage: BeverageBase) -> str:
    if isinstance(beverage, Wine):
        return beverage.producer
    if isinstance(beverage, Beer):
        return beverage.brewery
    if isinstance(beverage, Spirit | NonAlcoholicBeverage):
        return beverage.brand or ""
    return ""


class WishlistService:
    """Service for the customer's wishlist.

    Every mutation writes the whole list back to storage. If the write fails
    the in-memory list is left as it was and the caller gets False/None.
    """

    def __init__(
        self,
        repository: WishlistRepository,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        """Initialize the WishlistService.

        Args:
            repository: Repository persisting the wishlist
            clock: Source of the current time
        """
        self.repository = repository
        self.clock = clock
        self._items: list[WishlistItem] = []

    async def restore(self) -> None:
        """Load the stored wishlist into memory."""
        self._items = await self.repository.load_items()

    async def _commit(self, items: list[WishlistItem]) -> bool:
        if not await self.repository.save_items(items):
            logger.error("Wishlist change not persisted, keeping previous list")
            return False
        self._items = items
        return True

    async def add(
        self,
        beverage: BeverageBase,
        notes: str = "",
        restaurant_name: str = "",
    ) -> WishlistItem | None:
        """Add a beverage to the wishlist.

        Args:
            beverage: Beverage to remember; its display fields are copied
            notes: Free-text notes
            restaurant_name: Where the beverage was seen

        Returns:
            The new WishlistItem, or None if it could not be saved
        """
        item = WishlistItem(
            id=f"wishlist_{uuid.uuid4().hex[:12]}",
            beverage_id=beverage.id,
            beverage_name=beverage.name,
            beverage_category=BeverageCategory(beverage.category),  # type: ignore[attr-defined]
            beverage_type=getattr(beverage, "type", ""),
            producer=_producer_of(beverage),
            price=beverage.price,
            restaurant_name=restaurant_name,
            notes=notes,
            added_at=self.clock(),
        )

        if not await self._commit([*self._items, item]):
            return None
        return item

    async def remove(self, item_id: str) -> bool:
        """Remove one entry by its wishlist id."""
        return await self._commit([item for item in self._items if item.id != item_id])

    async def remove_by_beverage_id(self, beverage_id: str) -> bool:
        """Remove every entry pointing at a beverage."""
        return await self._commit([item for item in self._items if item.beverage_id != beverage_id])

    async def update_notes(self, item_id: str, notes: str) -> WishlistItem | None:
        """Replace the notes of an entry.

        Returns:
            The updated WishlistItem, or None if not found or not saved
        """
        existing = self.get_item(item_id)
        if existing is None:
            return None

        updated = existing.model_copy(update={"notes": notes})
        items = [updated if item.id == item_id else item for item in self._items]

        if not await self._commit(items):
            return None
        return updated

    async def clear(self) -> bool:
        """Remove every entry."""
        return await self._commit([])

    def get_item(self, item_id: str) -> WishlistItem | None:
        return next((item for item in self._items if item.id == item_id), None)

    def get_item_for_beverage(self, beverage_id: str) -> WishlistItem | None:
        return next((item for item in self._items if item.beverage_id == beverage_id), None)

    def is_in_wishlist(self, beverage_id: str) -> bool:
        return self.get_item_for_beverage(beverage_id) is not None

    def list_items(self) -> list[WishlistItem]:
        """Return all entries, newest first."""
        return sorted(self._items, key=lambda item: item.added_at, reverse=True)

    @property
    def count(self) -> int:
        return len(self._items)
