"""Client for the hosted backend's REST API holding the beverage catalog."""

import logging
import time
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from beverage_menu_service.models.beverage_models import (
    Beer,
    BeverageCollections,
    Cocktail,
    NonAlcoholicBeverage,
    RestaurantMeta,
    Spirit,
    Wine,
)
from beverage_menu_service.observability.metrics import record_source_fetch

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

COLLECTION_TABLES: dict[str, tuple[str, type[BaseModel]]] = {
    "wines": ("wines", Wine),
    "beers": ("beers", Beer),
    "spirits": ("spirits", Spirit),
    "cocktails": ("cocktails", Cocktail),
    "non_alcoholic": ("non_alcoholic_beverages", NonAlcoholicBeverage),
}


class BeverageSourceClient:
    """HTTP client for reading a restaurant's beverages from the hosted backend.

    Rows are read from the backend's table REST endpoints
    (``/rest/v1/<table>?restaurant_id=eq.<id>``) with the project API key.
    Expected failures are logged and reported as None.
    """

    def __init__(self, base_url: str, api_key: str, timeout_seconds: float = 10.0) -> None:
        """Initialize the client.

        Args:
            base_url: Base URL of the hosted backend (e.g., "https://xyz.example.co")
            api_key: Project API key sent with every request
            timeout_seconds: Per-request timeout
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    async def _get_rows(self, table: str, params: dict[str, str]) -> list[dict[str, Any]] | None:
        url = f"{self.base_url}/rest/v1/{table}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.get(url, headers=self._headers(), params=params)
                response.raise_for_status()
                rows: list[dict[str, Any]] = response.json()
                return rows

        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            logger.error(f"Failed to fetch {table}: {e}")
            return None

    async def get_collection(self, restaurant_id: str, table: str, model: type[M]) -> list[M] | None:
        """Fetch one beverage table for a restaurant.

        Args:
            restaurant_id: The restaurant to fetch for
            table: Backend table name
            model: Model each row is parsed into

        Returns:
            List of parsed items, empty list if none exist, or None on failure
        """
        rows = await self._get_rows(
            table, {"select": "*", "restaurant_id": f"eq.{restaurant_id}", "order": "created_at"}
        )
        if rows is None:
            return None

        try:
            return [model.model_validate(row) for row in rows]
        except ValidationError as e:
            logger.error(f"Unexpected {table} row shape for restaurant {restaurant_id}: {e}")
            return None

    async def get_collections(self, restaurant_id: str) -> BeverageCollections | None:
        """Fetch all five beverage collections for a restaurant.

        All fetches must succeed for data to be returned.

        Args:
            restaurant_id: The restaurant to fetch for

        Returns:
            BeverageCollections, or None if any fetch fails
        """
        start = time.monotonic()
        collections: dict[str, list[Any]] = {}

        for field_name, (table, model) in COLLECTION_TABLES.items():
            items = await self.get_collection(restaurant_id, table, model)
            if items is None:
                record_source_fetch(time.monotonic() - start, success=False)
                return None
            collections[field_name] = items

        record_source_fetch(time.monotonic() - start, success=True)
        return BeverageCollections(**collections)

    async def get_restaurant(self, restaurant_id: str) -> RestaurantMeta | None:
        """Fetch restaurant display metadata.

        Returns:
            RestaurantMeta, or None if not found or on failure
        """
        rows = await self._get_rows(
            "restaurants",
            {"select": "name,cuisine_type,cover_image_url", "id": f"eq.{restaurant_id}"},
        )
        if not rows:
            return None

        try:
            return RestaurantMeta.model_validate(rows[0])
        except ValidationError as e:
            logger.error(f"Unexpected restaurant row shape for {restaurant_id}: {e}")
            return None
