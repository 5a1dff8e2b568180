"""FastAPI application for the customer menu and owner catalog endpoints."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field, ValidationError

from beverage_menu_service.models.beverage_models import (
    BeverageBase,
    BeverageCollections,
    DietaryTag,
    RestaurantMeta,
)
from beverage_menu_service.models.cache_models import CacheState
from beverage_menu_service.models.filter_models import (
    ALL,
    CatalogQuery,
    CuisineCategory,
    FlavorDimension,
    FlavorRangeFilters,
    PriceRange,
    Range,
)
from beverage_menu_service.models.wishlist_models import WishlistItem
from beverage_menu_service.services.catalog_search import search_catalog
from beverage_menu_service.services.connectivity import ConnectivityMonitor
from beverage_menu_service.services.menu_aggregator import parse_category
from beverage_menu_service.services.menu_service import (
    NO_CACHED_DATA_MESSAGE,
    BeverageLookup,
    MenuLoadResult,
    MenuSource,
    MenuQuery,
    MenuService,
)
from beverage_menu_service.services.offline_cache_service import OfflineCacheService
from beverage_menu_service.services.wishlist_service import WishlistService

logger = logging.getLogger(__name__)

CACHED_CATALOG_NOTE = "Offline: showing the cached menu, which only holds items that were in stock"


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


class ConnectivityStatus(BaseModel):
    """Request and response model for the connectivity flag."""

    online: bool


class MenuSectionResponse(BaseModel):
    """One category section of the customer menu."""

    category: str
    title: str
    count: int
    items: list[dict[str, Any]]


class MenuResponse(BaseModel):
    """Response model for the customer menu."""

    restaurant_id: str
    source: str
    restaurant: RestaurantMeta | None = None
    cache_label: str | None = None
    banner: str | None = None
    category: str
    sections: list[MenuSectionResponse]
    featured: list[dict[str, Any]]
    show_featured: bool
    counts: dict[str, int]
    total_count: int
    is_empty: bool
    wine_type: str
    wine_match_count: int
    wines_by_type: dict[str, list[dict[str, Any]]]
    has_active_flavor_filters: bool


class CatalogEntryResponse(BaseModel):
    """One row of the owner catalog."""

    id: str
    category: str
    name: str
    item: dict[str, Any]


class CatalogResponse(BaseModel):
    """Response model for catalog searches."""

    restaurant_id: str
    source: str
    total: int
    entries: list[CatalogEntryResponse]
    note: str | None = None


class CacheResponse(BaseModel):
    """Response model for the offline snapshot."""

    state: str
    label: str
    age: str
    restaurant: RestaurantMeta
    counts: dict[str, int]


class WishlistAddRequest(BaseModel):
    """Request model for adding a beverage to the wishlist."""

    restaurant_id: str
    beverage_id: str
    notes: str = ""


class WishlistNotesRequest(BaseModel):
    """Request model for updating wishlist notes."""

    notes: str = Field(..., description="Replacement notes")


class WishlistResponse(BaseModel):
    """Response model for the wishlist."""

    count: int
    items: list[WishlistItem]


def parse_range(value: str) -> Range:
    """Parse a "lo-hi" query value into a range.

    Raises:
        ValueError: If the value is not two integers separated by "-"
    """
    low, sep, high = value.partition("-")
    if not sep:
        raise ValueError(f"Range must look like 'min-max', got '{value}'")
    return int(low), int(high)


def _dump(item: BeverageBase) -> dict[str, Any]:
    return item.model_dump(mode="json", by_alias=True)


def create_app(
    menu_service: MenuService,
    offline_cache_service: OfflineCacheService,
    wishlist_service: WishlistService,
    connectivity: ConnectivityMonitor,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        menu_service: Service loading and filtering menus
        offline_cache_service: Offline snapshot holder
        wishlist_service: Service managing the wishlist
        connectivity: Current online/offline state

    Returns:
        Configured FastAPI application
    """
    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        # Hydrate the offline snapshot and wishlist from storage
        await offline_cache_service.restore()
        await wishlist_service.restore()
        yield

    app = FastAPI(
        title="Beverage Menu Service API",
        description="Customer beverage menu with flavor and cuisine filtering and offline fallback",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Store services in app state for access in route handlers
    app.state.menu_service = menu_service
    app.state.offline_cache_service = offline_cache_service
    app.state.wishlist_service = wishlist_service
    app.state.connectivity = connectivity

    async def load_or_503(restaurant_id: str) -> tuple[MenuLoadResult, BeverageCollections]:
        result: MenuLoadResult = await app.state.menu_service.load_menu(restaurant_id)
        if result.collections is None:
            raise HTTPException(status_code=503, detail=result.message or NO_CACHED_DATA_MESSAGE)
        return result, result.collections

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint.

        Returns:
            Health status indicating service is running
        """
        return HealthResponse(status="healthy")

    @app.get("/cuisines", response_model=list[CuisineCategory], tags=["Menu"])
    async def list_cuisines() -> list[CuisineCategory]:
        """List the cuisine categories available for pairing filters."""
        categories: list[CuisineCategory] = app.state.menu_service.cuisine_matcher.list_categories()
        return categories

    @app.get("/connectivity", response_model=ConnectivityStatus, tags=["Connectivity"])
    async def get_connectivity() -> ConnectivityStatus:
        return ConnectivityStatus(online=app.state.connectivity.is_online)

    @app.put("/connectivity", response_model=ConnectivityStatus, tags=["Connectivity"])
    async def set_connectivity(status: ConnectivityStatus) -> ConnectivityStatus:
        """Report a network status change from the host platform."""
        app.state.connectivity.set_online(status.online)
        return ConnectivityStatus(online=app.state.connectivity.is_online)

    @app.get("/restaurants/{restaurant_id}/menu", response_model=MenuResponse, tags=["Menu"])
    async def get_menu(
        restaurant_id: str,
        category: str = ALL,
        cuisine: str = ALL,
        wine_type: str = ALL,
        body: str | None = None,
        sweetness: str | None = None,
        tannins: str | None = None,
        acidity: str | None = None,
    ) -> MenuResponse:
        """Get the customer menu for a restaurant.

        Args:
            restaurant_id: The restaurant to show
            category: "all" or a single category
            cuisine: Cuisine category id for wine pairings
            wine_type: Wine type to show ("red", "white"...), or "all"
            body: Body range as "min-max"
            sweetness: Sweetness range as "min-max"
            tannins: Tannins range as "min-max"
            acidity: Acidity range as "min-max"

        Returns:
            Filtered menu with its data source and cache label

        Raises:
            HTTPException: 422 on bad filters, 503 if no data can be shown
        """
        requested = {
            FlavorDimension.BODY: body,
            FlavorDimension.SWEETNESS: sweetness,
            FlavorDimension.TANNINS: tannins,
            FlavorDimension.ACIDITY: acidity,
        }

        try:
            selection = parse_category(category)
            ranges = {d.value: parse_range(v) for d, v in requested.items() if v is not None}
            flavor_filters = FlavorRangeFilters(**ranges)
        except (ValueError, ValidationError) as e:
            raise HTTPException(status_code=422, detail=str(e)) from e

        result, collections = await load_or_503(restaurant_id)

        query = MenuQuery(
            category=selection,
            cuisine_id=cuisine,
            flavor_filters=flavor_filters,
            wine_type=wine_type,
        )
        filtered = app.state.menu_service.build_view(collections, query)
        view = filtered.view

        return MenuResponse(
            restaurant_id=restaurant_id,
            source=result.source.value,
            restaurant=result.restaurant,
            cache_label=result.cache_label,
            banner=result.banner,
            category=str(getattr(view.category, "value", view.category)),
            sections=[
                MenuSectionResponse(
                    category=section.category.value,
                    title=section.title,
                    count=section.count,
                    items=[_dump(item) for item in section.items],
                )
                for section in view.visible_sections
            ],
            featured=[_dump(item) for item in view.featured] if view.show_featured else [],
            show_featured=view.show_featured,
            counts={c.value: n for c, n in view.counts.items()},
            total_count=view.total_count,
            is_empty=view.is_empty,
            wine_type=wine_type,
            wine_match_count=filtered.wine_match_count,
            wines_by_type={
                wine_kind: [_dump(wine) for wine in wines]
                for wine_kind, wines in filtered.wines_by_type.items()
            },
            has_active_flavor_filters=flavor_filters.has_active_filters,
        )

    @app.get("/restaurants/{restaurant_id}/catalog", response_model=CatalogResponse, tags=["Catalog"])
    async def get_catalog(
        restaurant_id: str,
        q: str = "",
        category: str = ALL,
        beverage_type: str = Query(ALL, alias="type"),
        price: str = PriceRange.ALL.value,
        dietary: list[str] = Query([]),
    ) -> CatalogResponse:
        """Search the owner catalog of a restaurant.

        Served from the offline snapshot, the catalog only holds items that
        were in stock when it was cached; ``note`` says so.

        Raises:
            HTTPException: 422 on bad filters, 503 if no data can be shown
        """
        try:
            query = CatalogQuery(
                search=q,
                category=parse_category(category),
                beverage_type=beverage_type,
                price_range=PriceRange(price),
                dietary_tags=[DietaryTag(tag) for tag in dietary],
            )
        except (ValueError, ValidationError) as e:
            raise HTTPException(status_code=422, detail=str(e)) from e

        result, collections = await load_or_503(restaurant_id)

        entries = search_catalog(collections, query)

        return CatalogResponse(
            restaurant_id=restaurant_id,
            source=result.source.value,
            total=len(entries),
            note=CACHED_CATALOG_NOTE if result.source == MenuSource.CACHED else None,
            entries=[
                CatalogEntryResponse(
                    id=entry.id,
                    category=entry.category.value,
                    name=entry.name,
                    item=_dump(entry.item),
                )
                for entry in entries
            ],
        )

    @app.get("/cache", response_model=CacheResponse, tags=["Offline Cache"])
    async def get_cache() -> CacheResponse:
        """Describe the offline snapshot.

        Raises:
            HTTPException: If no snapshot exists
        """
        cached = app.state.offline_cache_service.read()
        if cached is None:
            raise HTTPException(status_code=404, detail=NO_CACHED_DATA_MESSAGE)

        state: CacheState = app.state.offline_cache_service.state(app.state.connectivity.is_online)
        collections = cached.snapshot.collections

        return CacheResponse(
            state=state.value,
            label=cached.label,
            age=cached.age,
            restaurant=cached.snapshot.restaurant,
            counts={c.value: len(items) for c, items in collections.by_category().items()},
        )

    @app.delete("/cache", status_code=204, tags=["Offline Cache"])
    async def clear_cache() -> None:
        """Drop the offline snapshot."""
        await app.state.offline_cache_service.clear()

    @app.get("/wishlist", response_model=WishlistResponse, tags=["Wishlist"])
    async def get_wishlist() -> WishlistResponse:
        items: list[WishlistItem] = app.state.wishlist_service.list_items()
        return WishlistResponse(count=len(items), items=items)

    @app.post("/wishlist", response_model=WishlistItem, status_code=201, tags=["Wishlist"])
    async def add_to_wishlist(request: WishlistAddRequest) -> WishlistItem:
        """Add a beverage from a restaurant's menu to the wishlist.

        Raises:
            HTTPException: 404 if the beverage is not on the menu, 503 if no menu
                data is available, 500 if not saved
        """
        lookup: BeverageLookup | None = await app.state.menu_service.find_beverage(
            request.restaurant_id, request.beverage_id
        )
        if lookup is None:
            raise HTTPException(status_code=503, detail=NO_CACHED_DATA_MESSAGE)

        beverage = lookup.beverage
        if beverage is None:
            raise HTTPException(status_code=404, detail=f"Beverage '{request.beverage_id}' not found")

        item: WishlistItem | None = await app.state.wishlist_service.add(
            beverage, notes=request.notes, restaurant_name=lookup.restaurant_name
        )
        if item is None:
            raise HTTPException(status_code=500, detail="Failed to save wishlist")

        logger.info(f"Added beverage {beverage.id} to wishlist")
        return item

    @app.patch("/wishlist/{item_id}", response_model=WishlistItem, tags=["Wishlist"])
    async def update_wishlist_notes(item_id: str, request: WishlistNotesRequest) -> WishlistItem:
        """Replace the notes of a wishlist entry.

        Raises:
            HTTPException: 404 if the entry does not exist, 500 if not saved
        """
        if app.state.wishlist_service.get_item(item_id) is None:
            raise HTTPException(status_code=404, detail=f"Wishlist item '{item_id}' not found")

        item: WishlistItem | None = await app.state.wishlist_service.update_notes(item_id, request.notes)
        if item is None:
            raise HTTPException(status_code=500, detail="Failed to save wishlist")
        return item

    @app.delete("/wishlist/{item_id}", status_code=204, tags=["Wishlist"])
    async def remove_from_wishlist(item_id: str) -> None:
        """Remove a wishlist entry.

        Raises:
            HTTPException: 404 if the entry does not exist, 500 if not saved
        """
        if app.state.wishlist_service.get_item(item_id) is None:
            raise HTTPException(status_code=404, detail=f"Wishlist item '{item_id}' not found")

        if not await app.state.wishlist_service.remove(item_id):
            raise HTTPException(status_code=500, detail="Failed to save wishlist")

    @app.delete("/wishlist", status_code=204, tags=["Wishlist"])
    async def clear_wishlist() -> None:
        if not await app.state.wishlist_service.clear():
            raise HTTPException(status_code=500, detail="Failed to save wishlist")

    return app
