"""Repository for the persisted offline menu snapshot.

Following the storage error policy of the service, failures are logged and
reported through simple return values (None/False) rather than raised.
"""

import json
import logging
from datetime import UTC, datetime

from pydantic import ValidationError

from beverage_menu_service.models.cache_models import OfflineMenuCache
from beverage_menu_service.repositories.key_value_store import KeyValueStore, StorageError

logger = logging.getLogger(__name__)

OFFLINE_CACHE_KEY = "offline_cache"
CACHE_TIMESTAMP_KEY = "cache_timestamp"


class OfflineCacheRepository:
    """Typed access to the offline snapshot and its timestamp.

    The snapshot lives under ``offline_cache`` as a JSON object; the ISO-8601
    timestamp is duplicated under ``cache_timestamp`` for cheap age lookups.
    The ``cachedAt`` inside the snapshot is the authoritative copy.
    """

    def __init__(self, store: KeyValueStore) -> None:
        """Initialize repository.

        Args:
            store: Key-value store holding the snapshot
        """
        self.store = store

    async def load(self) -> OfflineMenuCache | None:
        """Load the persisted snapshot.

        Returns:
            OfflineMenuCache if present and decodable, None otherwise
        """
        try:
            raw = await self.store.get(OFFLINE_CACHE_KEY)
        except StorageError as e:
            logger.error(f"Failed to load offline cache: {e}")
            return None

        if raw is None:
            return None

        try:
            return OfflineMenuCache.from_storage_payload(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Discarding unreadable offline cache payload: {e}")
            return None

    async def load_timestamp(self) -> datetime | None:
        """Load the cache timestamp without decoding the snapshot.

        Returns:
            Timezone-aware datetime if present and parseable, None otherwise
        """
        try:
            raw = await self.store.get(CACHE_TIMESTAMP_KEY)
        except StorageError as e:
            logger.error(f"Failed to load cache timestamp: {e}")
            return None

        if raw is None:
            return None

        try:
            timestamp = datetime.fromisoformat(raw)
        except ValueError as e:
            logger.error(f"Discarding unreadable cache timestamp '{raw}': {e}")
            return None

        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=UTC)
        return timestamp

    async def save(self, snapshot: OfflineMenuCache) -> bool:
        """Persist a snapshot, overwriting any previous one.

        If the snapshot lands but its timestamp does not, the previous
        timestamp is removed so it cannot be paired with the new snapshot.

        Args:
            snapshot: Snapshot to save

        Returns:
            bool: True if both keys were written, False otherwise
        """
        payload = snapshot.to_storage_payload()

        try:
            await self.store.set(OFFLINE_CACHE_KEY, json.dumps(payload))
        except StorageError as e:
            logger.error(f"Failed to save offline cache: {e}")
            return False

        try:
            await self.store.set(CACHE_TIMESTAMP_KEY, payload["cachedAt"])
            return True

        except StorageError as e:
            logger.error(f"Failed to save cache timestamp: {e}")
            await self._remove_stale_timestamp()
            return False

    async def _remove_stale_timestamp(self) -> None:
        try:
            await self.store.remove(CACHE_TIMESTAMP_KEY)
        except StorageError as e:
            logger.error(f"Failed to remove stale cache timestamp: {e}")

    async def clear(self) -> bool:
        """Delete the snapshot and its timestamp.

        Returns:
            bool: True if both keys were removed, False otherwise
        """
        try:
            await self.store.remove(OFFLINE_CACHE_KEY)
            await self.store.remove(CACHE_TIMESTAMP_KEY)
            return True

        except StorageError as e:
            logger.error(f"Failed to clear offline cache: {e}")
            return False
