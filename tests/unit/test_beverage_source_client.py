"""Unit tests for BeverageSourceClient."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from beverage_menu_service.models.beverage_models import BeverageCollections, RestaurantMeta, Wine
from beverage_menu_service.services.beverage_source_client import BeverageSourceClient


def _response(rows: list[dict]) -> MagicMock:
    response = MagicMock()
    response.status_code = 200
    response.json.return_value = rows
    return response


@pytest.mark.unit
class TestBeverageSourceClient:
    """Test suite for BeverageSourceClient."""

    @pytest.fixture
    def client(self) -> BeverageSourceClient:
        """Create a client with test configuration."""
        return BeverageSourceClient(base_url="https://backend.test/", api_key="test-anon-key")

    def test_client_initialization(self, client: BeverageSourceClient) -> None:
        """Test that the trailing slash is dropped from the base URL."""
        assert client.base_url == "https://backend.test"
        assert client.api_key == "test-anon-key"

    @pytest.mark.asyncio
    async def test_get_collection_success(self, client: BeverageSourceClient) -> None:
        """Test fetching and parsing one table."""
        rows = [
            {"id": "wine_1", "restaurant_id": "rest_1", "name": "Chablis", "price": 18, "in_stock": True},
            {"id": "wine_2", "restaurant_id": "rest_1", "name": "Barolo", "price": 60, "in_stock": False},
        ]

        with patch("httpx.AsyncClient.get", new_callable=AsyncMock, return_value=_response(rows)):
            wines = await client.get_collection("rest_1", "wines", Wine)

        assert wines is not None
        assert [w.id for w in wines] == ["wine_1", "wine_2"]
        assert wines[1].in_stock is False

    @pytest.mark.asyncio
    async def test_get_collection_request_shape(self, client: BeverageSourceClient) -> None:
        """Test URL, filter and authentication headers of a table request."""
        mock_get = AsyncMock(return_value=_response([]))

        with patch("httpx.AsyncClient.get", mock_get):
            await client.get_collection("rest_1", "wines", Wine)

        mock_get.assert_called_once()
        assert mock_get.call_args.args[0] == "https://backend.test/rest/v1/wines"
        call_kwargs = mock_get.call_args.kwargs
        assert call_kwargs["params"]["restaurant_id"] == "eq.rest_1"
        assert call_kwargs["headers"]["apikey"] == "test-anon-key"
        assert call_kwargs["headers"]["Authorization"] == "Bearer test-anon-key"

    @pytest.mark.asyncio
    async def test_get_collection_api_error(self, client: BeverageSourceClient) -> None:
        """Test that HTTP errors return None."""
        response = MagicMock()
        response.status_code = 500
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "Server error", request=MagicMock(), response=response
        )

        with patch("httpx.AsyncClient.get", new_callable=AsyncMock, return_value=response):
            assert await client.get_collection("rest_1", "wines", Wine) is None

    @pytest.mark.asyncio
    async def test_get_collection_network_error(self, client: BeverageSourceClient) -> None:
        """Test that network errors return None."""
        with patch(
            "httpx.AsyncClient.get",
            new_callable=AsyncMock,
            side_effect=httpx.RequestError("Connection failed", request=MagicMock()),
        ):
            assert await client.get_collection("rest_1", "wines", Wine) is None

    @pytest.mark.asyncio
    async def test_get_collection_bad_rows(self, client: BeverageSourceClient) -> None:
        """Test that rows failing validation return None."""
        with patch("httpx.AsyncClient.get", new_callable=AsyncMock, return_value=_response([{"id": "x"}])):
            assert await client.get_collection("rest_1", "wines", Wine) is None

    @pytest.mark.asyncio
    async def test_get_collections_fetches_every_table(self, client: BeverageSourceClient) -> None:
        """Test that all five tables are read into BeverageCollections."""
        mock_get = AsyncMock(return_value=_response([]))

        with patch("httpx.AsyncClient.get", mock_get):
            collections = await client.get_collections("rest_1")

        assert collections == BeverageCollections()
        urls = [call.args[0] for call in mock_get.call_args_list]
        assert urls == [
            "https://backend.test/rest/v1/wines",
            "https://backend.test/rest/v1/beers",
            "https://backend.test/rest/v1/spirits",
            "https://backend.test/rest/v1/cocktails",
            "https://backend.test/rest/v1/non_alcoholic_beverages",
        ]

    @pytest.mark.asyncio
    async def test_get_collections_fails_when_any_table_fails(self, client: BeverageSourceClient) -> None:
        """Test that a single failed table fails the whole fetch."""
        with patch.object(client, "get_collection", AsyncMock(side_effect=[[], [], None])):
            assert await client.get_collections("rest_1") is None

    @pytest.mark.asyncio
    async def test_get_restaurant(self, client: BeverageSourceClient) -> None:
        """Test fetching restaurant metadata."""
        rows = [{"name": "Harbor Bistro", "cuisine_type": "Seafood", "cover_image_url": None}]

        with patch("httpx.AsyncClient.get", new_callable=AsyncMock, return_value=_response(rows)):
            restaurant = await client.get_restaurant("rest_1")

        assert restaurant == RestaurantMeta(name="Harbor Bistro", cuisine_type="Seafood")

    @pytest.mark.asyncio
    async def test_get_restaurant_not_found(self, client: BeverageSourceClient) -> None:
        """Test that an unknown restaurant returns None."""
        with patch("httpx.AsyncClient.get", new_callable=AsyncMock, return_value=_response([])):
            assert await client.get_restaurant("rest_missing") is None
