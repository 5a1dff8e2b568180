"""Unit tests for MenuService."""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from beverage_menu_service.models.beverage_models import BeverageCategory, BeverageCollections, RestaurantMeta
from beverage_menu_service.models.filter_models import FlavorRangeFilters
from beverage_menu_service.repositories.key_value_store import InMemoryKeyValueStore
from beverage_menu_service.repositories.offline_cache_repository import OfflineCacheRepository
from beverage_menu_service.services.beverage_source_client import BeverageSourceClient
from beverage_menu_service.services.connectivity import ConnectivityMonitor
from beverage_menu_service.services.cuisine_matcher import CuisineMatcher
from beverage_menu_service.services.menu_service import (
    NO_CACHED_DATA_MESSAGE,
    OFFLINE_BANNER,
    MenuQuery,
    MenuService,
    MenuSource,
)
from beverage_menu_service.services.offline_cache_service import OfflineCacheService


class MutableClock:
    """Clock that tests can move forward."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.mark.unit
class TestLoadMenu:
    """Test suite for MenuService.load_menu."""

    @pytest.fixture
    def clock(self, fixed_now: datetime) -> MutableClock:
        """Create a movable clock."""
        return MutableClock(fixed_now)

    @pytest.fixture
    def source_client(self, collections: BeverageCollections, restaurant: RestaurantMeta) -> MagicMock:
        """Create a source client returning the shared collections."""
        client = MagicMock(spec=BeverageSourceClient)
        client.get_collections = AsyncMock(return_value=collections)
        client.get_restaurant = AsyncMock(return_value=restaurant)
        return client

    @pytest.fixture
    def cache_service(self, memory_store: InMemoryKeyValueStore, clock: MutableClock) -> OfflineCacheService:
        """Create an offline cache over an in-memory store."""
        return OfflineCacheService(repository=OfflineCacheRepository(memory_store), clock=clock)

    @pytest.fixture
    def connectivity(self) -> ConnectivityMonitor:
        """Create an online connectivity monitor."""
        return ConnectivityMonitor()

    @pytest.fixture
    def service(
        self,
        source_client: MagicMock,
        cache_service: OfflineCacheService,
        connectivity: ConnectivityMonitor,
    ) -> MenuService:
        """Create a MenuService with real cache and mocked source."""
        return MenuService(
            source_client=source_client,
            offline_cache_service=cache_service,
            connectivity=connectivity,
        )

    @pytest.mark.asyncio
    async def test_online_load_returns_live_data(
        self, service: MenuService, collections: BeverageCollections, mock_restaurant_id: str
    ) -> None:
        """Test that an online load serves the fetched collections."""
        result = await service.load_menu(mock_restaurant_id)

        assert result.source is MenuSource.LIVE
        assert result.collections == collections
        assert result.banner is None
        assert result.cache_label is None

    @pytest.mark.asyncio
    async def test_online_load_caches_available_items(
        self, service: MenuService, cache_service: OfflineCacheService, mock_restaurant_id: str
    ) -> None:
        """Test that the snapshot only holds items available for sale."""
        await service.load_menu(mock_restaurant_id)

        cached = cache_service.read()
        assert cached is not None
        assert [w.id for w in cached.snapshot.wines] == ["wine_1", "wine_2", "wine_3", "wine_4"]
        assert [c.id for c in cached.snapshot.cocktails] == ["cocktail_1", "cocktail_2", "cocktail_3"]

    @pytest.mark.asyncio
    async def test_offline_serves_cache_with_banner(
        self,
        service: MenuService,
        connectivity: ConnectivityMonitor,
        clock: MutableClock,
        mock_restaurant_id: str,
    ) -> None:
        """Test the offline path after a successful online load."""
        await service.load_menu(mock_restaurant_id)
        connectivity.set_online(False)
        clock.now += timedelta(days=2)

        result = await service.load_menu(mock_restaurant_id)

        assert result.source is MenuSource.CACHED
        assert result.banner == OFFLINE_BANNER
        assert result.cache_label == "Cached 2 days ago"
        assert result.restaurant is not None
        assert result.restaurant.name == "Harbor Bistro"
        service.source_client.get_collections.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_offline_without_cache_is_unavailable(
        self, service: MenuService, connectivity: ConnectivityMonitor, mock_restaurant_id: str
    ) -> None:
        """Test the offline path with nothing cached."""
        connectivity.set_online(False)

        result = await service.load_menu(mock_restaurant_id)

        assert result.source is MenuSource.UNAVAILABLE
        assert result.message == NO_CACHED_DATA_MESSAGE
        assert result.is_available is False

    @pytest.mark.asyncio
    async def test_failed_fetch_falls_back_to_cache(
        self, service: MenuService, source_client: MagicMock, mock_restaurant_id: str
    ) -> None:
        """Test that an online fetch failure serves the snapshot without a banner."""
        await service.load_menu(mock_restaurant_id)
        source_client.get_collections.return_value = None

        result = await service.load_menu(mock_restaurant_id)

        assert result.source is MenuSource.CACHED
        assert result.banner is None
        assert result.cache_label == "Cached just now"

    @pytest.mark.asyncio
    async def test_missing_restaurant_is_a_failed_fetch(
        self, service: MenuService, source_client: MagicMock, cache_service: OfflineCacheService
    ) -> None:
        """Test that a missing restaurant record does not overwrite the cache."""
        source_client.get_restaurant.return_value = None

        result = await service.load_menu("rest_missing")

        assert result.source is MenuSource.UNAVAILABLE
        assert cache_service.has_cache is False


    @pytest.mark.asyncio
    async def test_find_beverage_reuses_loaded_menu(
        self, service: MenuService, source_client: MagicMock, mock_restaurant_id: str
    ) -> None:
        """Test that looking up a beverage after a load does not fetch again."""
        await service.load_menu(mock_restaurant_id)

        lookup = await service.find_beverage(mock_restaurant_id, "cocktail_2")

        assert lookup is not None
        assert lookup.beverage is not None
        assert lookup.beverage.name == "Smoked Old Fashioned"
        assert lookup.restaurant_name == "Harbor Bistro"
        source_client.get_collections.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_find_beverage_loads_unseen_restaurant_once(
        self, service: MenuService, source_client: MagicMock, mock_restaurant_id: str
    ) -> None:
        """Test that the first lookup loads the menu and later ones reuse it."""
        first = await service.find_beverage(mock_restaurant_id, "wine_1")
        missing = await service.find_beverage(mock_restaurant_id, "not_on_menu")

        assert first is not None
        assert first.beverage is not None
        assert missing is not None
        assert missing.beverage is None
        source_client.get_collections.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_find_beverage_without_any_menu(
        self, service: MenuService, connectivity: ConnectivityMonitor, mock_restaurant_id: str
    ) -> None:
        """Test that a lookup with nothing loadable reports no data."""
        connectivity.set_online(False)

        assert await service.find_beverage(mock_restaurant_id, "wine_1") is None


@pytest.mark.unit
class TestBuildView:
    """Test suite for MenuService.build_view."""

    @pytest.fixture
    def service(self) -> MenuService:
        """Create a MenuService with mocked collaborators."""
        return MenuService(
            source_client=MagicMock(spec=BeverageSourceClient),
            offline_cache_service=MagicMock(spec=OfflineCacheService),
            connectivity=ConnectivityMonitor(),
        )

    def test_default_query_shows_everything_available(
        self, service: MenuService, collections: BeverageCollections
    ) -> None:
        """Test that default filters leave the menu untouched."""
        filtered = service.build_view(collections, MenuQuery())

        assert filtered.view.total_count == 10
        assert filtered.wine_match_count == 5

    def test_flavor_filters_only_narrow_wines(self, service: MenuService, collections: BeverageCollections) -> None:
        """Test that flavor filters apply to wines and leave other categories alone."""
        filtered = service.build_view(collections, MenuQuery(flavor_filters=FlavorRangeFilters(body=(2, 4))))

        wine_section = filtered.view.sections[0]
        assert [w.id for w in wine_section.items] == ["wine_1", "wine_3"]
        assert filtered.view.counts[BeverageCategory.COCKTAIL] == 3
        assert filtered.wine_match_count == 3

    def test_cuisine_and_flavor_combined(self, service: MenuService, collections: BeverageCollections) -> None:
        """Test combining a cuisine selection with flavor ranges."""
        query = MenuQuery(cuisine_id="seafood", flavor_filters=FlavorRangeFilters(acidity=(4, 5)))

        filtered = service.build_view(collections, query)

        assert [w.id for w in filtered.view.sections[0].items] == ["wine_1"]

    def test_featured_follows_filtered_wines(self, service: MenuService, collections: BeverageCollections) -> None:
        """Test that highlights are taken from the filtered wine list."""
        filtered = service.build_view(collections, MenuQuery(cuisine_id="steak"))

        assert [item.id for item in filtered.view.featured] == ["wine_2", "cocktail_1", "cocktail_2"]

    def test_strict_matcher_hides_wines_for_unknown_cuisine(self, collections: BeverageCollections) -> None:
        """Test the strict unknown-cuisine toggle through the service."""
        service = MenuService(
            source_client=MagicMock(spec=BeverageSourceClient),
            offline_cache_service=MagicMock(spec=OfflineCacheService),
            connectivity=ConnectivityMonitor(),
            cuisine_matcher=CuisineMatcher(strict_unknown_cuisine=True),
        )

        filtered = service.build_view(collections, MenuQuery(cuisine_id="martian"))

        assert filtered.view.counts[BeverageCategory.WINE] == 0

    def test_category_toggle(self, service: MenuService, collections: BeverageCollections) -> None:
        """Test that the category toggle reaches the aggregator."""
        filtered = service.build_view(collections, MenuQuery(category="beer"))

        assert [s.category for s in filtered.view.visible_sections] == [BeverageCategory.BEER]

    def test_wine_type_narrows_wines(self, service: MenuService, collections: BeverageCollections) -> None:
        """Test that a wine type selection keeps only wines of that type."""
        filtered = service.build_view(collections, MenuQuery(wine_type="red"))

        assert [w.id for w in filtered.view.sections[0].items] == ["wine_2", "wine_4"]
        assert filtered.wine_match_count == 3
        assert [item.id for item in filtered.view.featured] == ["wine_2", "cocktail_1", "cocktail_2"]

    def test_wines_grouped_by_type(self, service: MenuService, collections: BeverageCollections) -> None:
        """Test grouping of the remaining wines for sale by type."""
        groups = service.build_view(collections, MenuQuery()).wines_by_type

        assert list(groups) == ["white", "red", "dessert"]
        assert [w.id for w in groups["red"]] == ["wine_2", "wine_4"]
