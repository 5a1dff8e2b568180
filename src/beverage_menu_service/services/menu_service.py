"""Menu read path: live data when online, the offline snapshot otherwise."""

import logging
from dataclasses import dataclass, field
from enum import Enum

from beverage_menu_service.models.beverage_models import (
    BeverageBase,
    BeverageCollections,
    RestaurantMeta,
    Wine,
)
from beverage_menu_service.models.filter_models import (
    ALL,
    DEFAULT_FLAVOR_FILTERS,
    FlavorRangeFilters,
)
from beverage_menu_service.observability import traced
from beverage_menu_service.observability.metrics import record_flavor_matches, record_menu_load
from beverage_menu_service.services.beverage_source_client import BeverageSourceClient
from beverage_menu_service.services.connectivity import ConnectivityMonitor
from beverage_menu_service.services.cuisine_matcher import CuisineMatcher
from beverage_menu_service.services.flavor_filter import filter_wines
from beverage_menu_service.services.menu_aggregator import (
    CategorySelection,
    MenuAggregator,
    MenuView,
)
from beverage_menu_service.services.offline_cache_service import OfflineCacheService

logger = logging.getLogger(__name__)

NO_CACHED_DATA_MESSAGE = "No cached data available"
OFFLINE_BANNER = "You're offline. Showing cached menu."


class MenuSource(str, Enum):
    """Where a loaded menu came from."""

    LIVE = "live"
    CACHED = "cached"
    UNAVAILABLE = "unavailable"


@dataclass
class MenuLoadResult:
    """Outcome of loading a restaurant's menu.

    Attributes:
        source: Live data, the offline snapshot, or nothing
        collections: Beverage collections (None when unavailable)
        restaurant: Restaurant metadata (None when unavailable)
        cache_label: "Cached <age>" when serving the snapshot
        banner: Offline banner text when serving the snapshot while offline
        message: Error text when nothing could be loaded
    """

    source: MenuSource
    collections: BeverageCollections | None = None
    restaurant: RestaurantMeta | None = None
    cache_label: str | None = None
    banner: str | None = None
    message: str | None = None

    @property
    def is_available(self) -> bool:
        return self.collections is not None


@dataclass
class MenuQuery:
    """Customer browse selection applied to a loaded menu."""

    category: CategorySelection | str = ALL
    cuisine_id: str = ALL
    flavor_filters: FlavorRangeFilters = DEFAULT_FLAVOR_FILTERS
    wine_type: str = ALL


@dataclass
class FilteredMenu:
    """Menu view after filtering, with the number of wines left.

    ``wines_by_type`` groups the remaining wines that are for sale by their
    type, in the order each type first appears.
    """

    view: MenuView
    wine_match_count: int
    wines_by_type: dict[str, list[Wine]] = field(default_factory=dict)


@dataclass
class BeverageLookup:
    """A single beverage found on a loaded menu."""

    beverage: BeverageBase | None
    restaurant_name: str


def group_wines_by_type(wines: list[Wine]) -> dict[str, list[Wine]]:
    groups: dict[str, list[Wine]] = {}
    for wine in wines:
        if not wine.is_available_for_sale:
            continue
        groups.setdefault(wine.type, []).append(wine)
    return groups


class MenuService:
    """Loads menus and turns them into filtered customer views."""

    def __init__(
        self,
        source_client: BeverageSourceClient,
        offline_cache_service: OfflineCacheService,
        connectivity: ConnectivityMonitor,
        aggregator: MenuAggregator | None = None,
        cuisine_matcher: CuisineMatcher | None = None,
    ) -> None:
        """Initialize the MenuService.

        Args:
            source_client: Client for the hosted backend
            offline_cache_service: Offline snapshot holder
            connectivity: Current online/offline state
            aggregator: Menu aggregator (defaults to a new instance)
            cuisine_matcher: Cuisine matcher (defaults to the permissive matcher)
        """
        self.source_client = source_client
        self.offline_cache_service = offline_cache_service
        self.connectivity = connectivity
        self.aggregator = aggregator or MenuAggregator()
        self.cuisine_matcher = cuisine_matcher or CuisineMatcher()
        self._last_loaded: dict[str, MenuLoadResult] = {}

    @traced("load_menu")
    async def load_menu(self, restaurant_id: str) -> MenuLoadResult:
        """Load a restaurant's menu.

        When online, the live collections are fetched and the snapshot is
        rewritten with their available-only subsets. When offline, or when the
        live fetch fails, the snapshot is served instead.

        Args:
            restaurant_id: The restaurant to load

        Returns:
            MenuLoadResult describing the data and where it came from
        """
        result: MenuLoadResult | None = None
        if self.connectivity.is_online:
            result = await self._load_live(restaurant_id)
            if result is None:
                logger.warning(f"Live menu fetch failed for restaurant {restaurant_id}, falling back to cache")

        if result is None:
            result = self._load_cached()

        if result.is_available:
            self._last_loaded[restaurant_id] = result

        record_menu_load(result.source.value)
        return result

    async def find_beverage(self, restaurant_id: str, beverage_id: str) -> BeverageLookup | None:
        """Look up one beverage on a restaurant's menu.

        The collections of the last successful load for the restaurant are
        reused, so neither the backend nor the offline snapshot is touched
        again. A restaurant that has not been loaded yet is loaded once.

        Args:
            restaurant_id: The restaurant whose menu is searched
            beverage_id: Id of the beverage in any category

        Returns:
            BeverageLookup (with ``beverage`` None if not on the menu), or None
            if no menu data is available for the restaurant
        """
        result = self._last_loaded.get(restaurant_id)
        if result is None:
            result = await self.load_menu(restaurant_id)

        if result.collections is None:
            return None

        return BeverageLookup(
            beverage=result.collections.find(beverage_id),
            restaurant_name=result.restaurant.name if result.restaurant else "",
        )

    async def _load_live(self, restaurant_id: str) -> MenuLoadResult | None:
        collections = await self.source_client.get_collections(restaurant_id)
        if collections is None:
            return None

        restaurant = await self.source_client.get_restaurant(restaurant_id)
        if restaurant is None:
            return None

        await self.offline_cache_service.write(collections.available_only(), restaurant)

        logger.info(f"Loaded live menu for restaurant {restaurant_id}")
        return MenuLoadResult(source=MenuSource.LIVE, collections=collections, restaurant=restaurant)

    def _load_cached(self) -> MenuLoadResult:
        cached = self.offline_cache_service.read()
        if cached is None:
            logger.warning(NO_CACHED_DATA_MESSAGE)
            return MenuLoadResult(source=MenuSource.UNAVAILABLE, message=NO_CACHED_DATA_MESSAGE)

        return MenuLoadResult(
            source=MenuSource.CACHED,
            collections=cached.snapshot.collections,
            restaurant=cached.snapshot.restaurant,
            cache_label=cached.label,
            banner=OFFLINE_BANNER if self.connectivity.is_offline else None,
        )

    def build_view(self, collections: BeverageCollections, query: MenuQuery) -> FilteredMenu:
        """Apply wine type, flavor and cuisine filters to the wines, then aggregate.

        Only the wine list is filtered; the other categories pass through.

        Args:
            collections: Beverage collections of a loaded menu
            query: Category toggle, wine type, cuisine and flavor selection

        Returns:
            FilteredMenu: The aggregated view and the number of matching wines

        Raises:
            ValueError: If the category is unknown
        """
        wines = collections.wines
        if query.wine_type != ALL:
            wines = [wine for wine in wines if wine.type == query.wine_type]

        wines = filter_wines(wines, query.flavor_filters)
        wines = self.cuisine_matcher.filter_items(wines, query.cuisine_id)

        filtered = collections.model_copy(update={"wines": wines})
        view = self.aggregator.aggregate(filtered, query.category)

        if query.flavor_filters.has_active_filters:
            record_flavor_matches(len(wines))

        return FilteredMenu(view=view, wine_match_count=len(wines), wines_by_type=group_wines_by_type(wines))
