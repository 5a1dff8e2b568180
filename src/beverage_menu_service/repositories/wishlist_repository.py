"""Repository for the persisted wishlist."""

import json
import logging

from pydantic import TypeAdapter, ValidationError

from beverage_menu_service.models.wishlist_models import WishlistItem
from beverage_menu_service.repositories.key_value_store import KeyValueStore, StorageError

logger = logging.getLogger(__name__)

WISHLIST_KEY = "wishlist"

_items_adapter = TypeAdapter(list[WishlistItem])


class WishlistRepository:
    """Stores the whole wishlist as one JSON array."""

    def __init__(self, store: KeyValueStore) -> None:
        """Initialize repository.

        Args:
            store: Key-value store holding the wishlist
        """
        self.store = store

    async def load_items(self) -> list[WishlistItem]:
        """Load all wishlist entries.

        Returns:
            list: Stored entries (empty list if none stored or unreadable)
        """
        try:
            raw = await self.store.get(WISHLIST_KEY)
        except StorageError as e:
            logger.error(f"Failed to load wishlist: {e}")
            return []

        if raw is None:
            return []

        try:
            return _items_adapter.validate_python(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Discarding unreadable wishlist payload: {e}")
            return []

    async def save_items(self, items: list[WishlistItem]) -> bool:
        """Replace the stored wishlist.

        Args:
            items: Entries to store

        Returns:
            bool: True if save succeeded, False otherwise
        """
        payload = _items_adapter.dump_json(items, by_alias=True).decode()

        try:
            await self.store.set(WISHLIST_KEY, payload)
            return True

        except StorageError as e:
            logger.error(f"Failed to save wishlist: {e}")
            return False
