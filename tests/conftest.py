"""Shared pytest fixtures and configuration for all tests."""

import os
from datetime import UTC, datetime

import pytest

# Keep src.main from building the real application at import time
os.environ.setdefault("ENVIRONMENT", "test")

from beverage_menu_service.models.beverage_models import (  # noqa: E402
    Beer,
    BeverageCollections,
    Cocktail,
    DietaryTag,
    FlavorProfile,
    NonAlcoholicBeverage,
    RestaurantMeta,
    Spirit,
    Wine,
)
from beverage_menu_service.repositories.key_value_store import InMemoryKeyValueStore  # noqa: E402


@pytest.fixture
def mock_restaurant_id() -> str:
    """Fixture providing a standard test restaurant ID."""
    return "rest_123456"


@pytest.fixture
def fixed_now() -> datetime:
    """Fixture providing a fixed, timezone-aware current time."""
    return datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def restaurant() -> RestaurantMeta:
    """Fixture providing restaurant display metadata."""
    return RestaurantMeta(name="Harbor Bistro", cuisine_type="Seafood", cover_image_url=None)


@pytest.fixture
def wines() -> list[Wine]:
    """Fixture providing wines with varied profiles, pairings and stock."""
    return [
        Wine(
            id="wine_1",
            name="Coastal Chardonnay",
            producer="Seaside Cellars",
            type="white",
            region="Sonoma",
            grape="Chardonnay",
            price=14.0,
            quantity=12,
            featured=True,
            food_pairings=["Grilled SALMON", "Lobster"],
            flavor_profile=FlavorProfile(body=3, sweetness=2, tannins=1, acidity=4),
            dietary_tags=[DietaryTag.VEGAN],
        ),
        Wine(
            id="wine_2",
            name="Old Vine Cabernet",
            producer="Ridge Hill",
            type="red",
            region="Napa",
            grape="Cabernet Sauvignon",
            price=42.0,
            quantity=6,
            featured=True,
            food_pairings=["Ribeye steak", "Aged cheddar"],
            flavor_profile=FlavorProfile(body=5, sweetness=1, tannins=5, acidity=3),
        ),
        Wine(
            id="wine_3",
            name="Late Harvest Riesling",
            producer="Mosel Estate",
            type="dessert",
            price=9.0,
            quantity=4,
            featured=True,
            food_pairings=["Fruit tart"],
            flavor_profile=FlavorProfile(body=2, sweetness=5, tannins=1, acidity=5),
        ),
        Wine(
            id="wine_4",
            name="House Red",
            producer="Valley Co-op",
            price=8.0,
            quantity=20,
            food_pairings=["Pizza"],
            flavor_profile=None,
        ),
        Wine(
            id="wine_5",
            name="Sold Out Syrah",
            producer="Ridge Hill",
            price=30.0,
            in_stock=False,
            featured=True,
            food_pairings=["Lamb chop"],
            flavor_profile=FlavorProfile(body=4, sweetness=1, tannins=4, acidity=3),
        ),
    ]


@pytest.fixture
def collections(wines: list[Wine]) -> BeverageCollections:
    """Fixture providing a full set of beverage collections."""
    return BeverageCollections(
        wines=wines,
        beers=[
            Beer(id="beer_1", name="Harbor IPA", brewery="Dockside", type="ipa", style="West Coast", price=7.0),
            Beer(id="beer_2", name="Winter Stout", brewery="Dockside", type="stout", price=8.0, in_stock=False),
        ],
        spirits=[
            Spirit(id="spirit_1", name="Highland 12", brand="Glen Test", type="whiskey", origin="Scotland", price=16.0),
        ],
        cocktails=[
            Cocktail(id="cocktail_1", name="Sea Breeze", base_spirit="vodka", price=13.0, featured=True),
            Cocktail(id="cocktail_2", name="Smoked Old Fashioned", base_spirit="bourbon", price=15.0, featured=True),
            Cocktail(id="cocktail_3", name="Negroni", base_spirit="gin", price=12.0, featured=True),
            Cocktail(id="cocktail_4", name="Retired Punch", price=11.0, featured=True, is_available=False),
        ],
        non_alcoholic=[
            NonAlcoholicBeverage(
                id="na_1",
                name="Sparkling Lemonade",
                type="soda",
                price=5.0,
                dietary_tags=[DietaryTag.VEGAN, DietaryTag.GLUTEN_FREE],
            ),
        ],
    )


@pytest.fixture
def empty_collections() -> BeverageCollections:
    """Fixture providing collections with no items at all."""
    return BeverageCollections()


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    """Fixture providing an empty in-memory key-value store."""
    return InMemoryKeyValueStore()
