"""Offline cache of the last successfully fetched menu."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from beverage_menu_service.models.beverage_models import BeverageCollections, RestaurantMeta
from beverage_menu_service.models.cache_models import CachedMenuRead, CacheState, OfflineMenuCache
from beverage_menu_service.observability.metrics import record_cache_write
from beverage_menu_service.repositories.offline_cache_repository import OfflineCacheRepository

logger = logging.getLogger(__name__)

JUST_NOW = "Just now"


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count != 1 else ''} ago"


def format_cache_age(cached_at: datetime, now: datetime) -> str:
    """Format the age of a snapshot, largest unit first.

    Args:
        cached_at: When the snapshot was taken
        now: Current time

    Returns:
        str: "N days ago", "N hours ago", "N minutes ago" or "Just now"
    """
    minutes = int((now - cached_at).total_seconds() // 60)
    hours = minutes // 60
    days = hours // 24

    if days > 0:
        return _plural(days, "day")
    if hours > 0:
        return _plural(hours, "hour")
    if minutes > 0:
        return _plural(minutes, "minute")
    return JUST_NOW


class OfflineCacheService:
    """Keeps the offline menu snapshot in memory and in durable storage.

    The snapshot never expires: it is replaced by the next write or removed
    by an explicit clear. Storage failures never reach callers; on a failed
    write the in-memory snapshot is still updated so the current session keeps
    working, it just will not survive a restart.
    """

    def __init__(
        self,
        repository: OfflineCacheRepository,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the OfflineCacheService.

        Args:
            repository: Repository persisting the snapshot
            clock: Source of the current time (timezone-aware)
        """
        self.repository = repository
        self.clock = clock
        self._snapshot: OfflineMenuCache | None = None
        self._cached_at: datetime | None = None

    @property
    def has_cache(self) -> bool:
        return self._snapshot is not None

    @property
    def last_cache_time(self) -> datetime | None:
        return self._cached_at

    async def restore(self) -> None:
        """Hydrate the in-memory state from storage, e.g. at startup.

        The age comes from the snapshot's own ``cached_at``. A separately
        stored timestamp that disagrees with it is left over from an earlier
        snapshot and is ignored.
        """
        snapshot = await self.repository.load()
        if snapshot is None:
            return

        timestamp = await self.repository.load_timestamp()
        if timestamp is not None and timestamp != snapshot.cached_at:
            logger.warning(
                f"Ignoring stale cache timestamp {timestamp.isoformat()}, snapshot was taken at "
                f"{snapshot.cached_at.isoformat()}"
            )

        self._snapshot = snapshot
        self._cached_at = snapshot.cached_at
        logger.info("Loaded cached menu data")

    async def write(
        self,
        collections: BeverageCollections,
        restaurant: RestaurantMeta,
    ) -> OfflineMenuCache:
        """Replace the snapshot with freshly fetched data.

        Args:
            collections: Collections to cache
            restaurant: Restaurant display metadata

        Returns:
            OfflineMenuCache: The new snapshot
        """
        snapshot = OfflineMenuCache.from_menu(collections, restaurant, cached_at=self.clock())

        self._snapshot = snapshot
        self._cached_at = snapshot.cached_at

        persisted = await self.repository.save(snapshot)
        record_cache_write(persisted)

        if persisted:
            logger.info("Menu data cached successfully")
        else:
            logger.warning("Menu snapshot kept in memory only; it will not survive a restart")

        return snapshot

    def get_cache_age(self, now: datetime | None = None) -> str | None:
        """Return the relative age of the snapshot, or None when empty."""
        if self._cached_at is None:
            return None
        return format_cache_age(self._cached_at, now or self.clock())

    def read(self, now: datetime | None = None) -> CachedMenuRead | None:
        """Return the snapshot with its age label, or None when empty."""
        age = self.get_cache_age(now)
        if self._snapshot is None or age is None:
            return None
        return CachedMenuRead(snapshot=self._snapshot, age=age)

    def state(self, is_online: bool) -> CacheState:
        """Combine cache presence with connectivity."""
        if self._snapshot is None:
            return CacheState.EMPTY
        if is_online:
            return CacheState.POPULATED
        return CacheState.POPULATED_AND_STALE

    async def clear(self) -> None:
        """Drop the snapshot from memory and storage."""
        self._snapshot = None
        self._cached_at = None

        if await self.repository.clear():
            logger.info("Offline cache cleared")
        else:
            logger.warning("Offline cache cleared in memory only")
