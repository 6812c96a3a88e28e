"""
Unit tests for the meal API client.

aiohttp is patched at ClientSession.get; responses are MagicMocks
with an AsyncMock json().
"""

import asyncio
import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from meal_browser.domain.catalog.ports import IMealCatalogGateway
from meal_browser.domain.shared.errors import (
    ExternalServiceError,
    InvalidPayloadError,
    MealNotFoundError,
    NetworkError,
    RequestTimeoutError,
)
from meal_browser.infrastructure.meal_api.api_client import MealApiClient

BASE_URL = "http://meals.test:8080"


def make_response(status: int = 200, payload: Any = None) -> MagicMock:
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=payload)
    return response


class TestMealApiClient:
    """Test meal API client."""

    @pytest.fixture
    def client(self) -> MealApiClient:
        return MealApiClient(BASE_URL, api_key="secret", timeout_seconds=5)

    async def test_fetch_meals_by_diet_success(
        self,
        client: MealApiClient,
        sample_meal_records: list[dict[str, Any]],
    ) -> None:
        with patch("aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.return_value = make_response(
                payload=sample_meal_records
            )

            async with client:
                meals = await client.fetch_meals_by_diet(2)

            assert [m.name for m in meals] == ["Spaghetti Carbonara", "Taco Tuesday"]
            assert meals[0].calories == 720
            url = mock_get.call_args.args[0]
            assert url == f"{BASE_URL}/api/diets/2/meals"

    async def test_fetch_categories_success(self, client: MealApiClient) -> None:
        with patch("aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.return_value = make_response(
                payload=[{"id": 10, "name": "Taco"}, {"id": 11, "name": "Salat"}]
            )

            async with client:
                categories = await client.fetch_categories()

            assert [c.id for c in categories] == [10, 11]
            assert mock_get.call_args.args[0] == f"{BASE_URL}/api/categories"

    async def test_fetch_diets_success(self, client: MealApiClient) -> None:
        with patch("aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.return_value = make_response(
                payload=[{"id": 1, "name": "Vegan", "description": "Plants only"}]
            )

            async with client:
                diets = await client.fetch_diets()

            assert diets[0].name == "Vegan"
            assert mock_get.call_args.args[0] == f"{BASE_URL}/api/diets"

    async def test_fetch_meal_by_id_success(self, client: MealApiClient) -> None:
        with patch("aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.return_value = make_response(
                payload={
                    "id": 2,
                    "name": "Taco Tuesday",
                    "prepTime": 15,
                    "kcal": 650,
                    "ingredients": [{"id": 1, "name": "Tortilla", "allergens": []}],
                    "category": [{"id": 10, "name": "Taco"}],
                    "recipe": "Warm the tortillas.",
                }
            )

            async with client:
                detail = await client.fetch_meal_by_id(2)

            assert detail.name == "Taco Tuesday"
            assert detail.categories[0].name == "Taco"
            assert mock_get.call_args.args[0] == f"{BASE_URL}/api/meals/2"

    async def test_fetch_meal_by_id_not_found(self, client: MealApiClient) -> None:
        with patch("aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.return_value = make_response(status=404)

            async with client:
                with pytest.raises(MealNotFoundError) as exc_info:
                    await client.fetch_meal_by_id(999)

            assert "999" in str(exc_info.value)
            assert exc_info.value.status == 404

    @pytest.mark.parametrize("status", [301, 400, 401, 404, 500, 503])
    async def test_non_2xx_raises_network_error(self, client: MealApiClient, status: int) -> None:
        with patch("aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.return_value = make_response(status=status)

            async with client:
                with pytest.raises(NetworkError) as exc_info:
                    await client.fetch_meals_by_diet(2)

            assert str(exc_info.value) == f"HTTP {status}"
            assert exc_info.value.status == status

    async def test_invalid_json_raises_invalid_payload(self, client: MealApiClient) -> None:
        response = make_response()
        response.json = AsyncMock(side_effect=json.JSONDecodeError("Expecting value", "", 0))

        with patch("aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.return_value = response

            async with client:
                with pytest.raises(InvalidPayloadError):
                    await client.fetch_categories()

    async def test_wrong_shape_raises_invalid_payload(self, client: MealApiClient) -> None:
        with patch("aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.return_value = make_response(
                payload={"meals": []}
            )

            async with client:
                with pytest.raises(InvalidPayloadError):
                    await client.fetch_meals_by_diet(2)

    async def test_timeout_raises_request_timeout(self, client: MealApiClient) -> None:
        with patch("aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.side_effect = asyncio.TimeoutError()

            async with client:
                with pytest.raises(RequestTimeoutError) as exc_info:
                    await client.fetch_categories()

            assert isinstance(exc_info.value, NetworkError)

    async def test_client_error_raises_network_error(self, client: MealApiClient) -> None:
        with patch("aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.side_effect = aiohttp.ClientConnectionError(
                "Connection refused"
            )

            async with client:
                with pytest.raises(NetworkError) as exc_info:
                    await client.fetch_meals_by_diet(2)

            assert "Connection refused" in str(exc_info.value)
            assert isinstance(exc_info.value.__cause__, aiohttp.ClientError)

    async def test_not_initialized_raises(self, client: MealApiClient) -> None:
        with pytest.raises(ExternalServiceError, match="async with"):
            await client.fetch_categories()

    async def test_headers_sent_on_session(self) -> None:
        """Session carries the JSON and X-API-Key headers."""
        with patch("aiohttp.ClientSession") as mock_session_class:
            mock_session = AsyncMock()
            mock_session.close = AsyncMock()
            mock_session_class.return_value = mock_session

            async with MealApiClient(BASE_URL, api_key="secret"):
                mock_session_class.assert_called_once_with(
                    headers={
                        "Accept": "application/json",
                        "Content-Type": "application/json",
                        "X-API-Key": "secret",
                    }
                )

            mock_session.close.assert_awaited_once()

    async def test_context_manager_session_lifecycle(self, client: MealApiClient) -> None:
        assert client._session is None

        async with client:
            assert client._session is not None

        assert client._session is None

    async def test_custom_timeout_used(self, client: MealApiClient) -> None:
        with patch("aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.return_value = make_response(payload=[])

            async with client:
                await client.fetch_categories()

            timeout = mock_get.call_args.kwargs["timeout"]
            assert timeout.total == 5

    def test_base_url_trailing_slash_stripped(self) -> None:
        assert MealApiClient(f"{BASE_URL}/").base_url == BASE_URL

    def test_implements_gateway_port(self, client: MealApiClient) -> None:
        assert isinstance(client, IMealCatalogGateway)


class TestFromEnv:
    """Test MealApiClient.from_env configuration."""

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MEAL_API_URL", "https://api.example.org/")
        monkeypatch.setenv("MEAL_API_KEY", "k3y")
        monkeypatch.setenv("MEAL_API_TIMEOUT_S", "2.5")

        client = MealApiClient.from_env()

        assert client.base_url == "https://api.example.org"
        assert client.api_key == "k3y"
        assert client.timeout_seconds == 2.5

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("MEAL_API_URL", "MEAL_API_KEY", "MEAL_API_TIMEOUT_S"):
            monkeypatch.delenv(name, raising=False)

        client = MealApiClient.from_env()

        assert client.base_url == "http://localhost:8080"
        assert client.api_key == ""
        assert client.timeout_seconds == 10.0

    @pytest.mark.parametrize("raw", ["abc", "0", "-3"])
    def test_invalid_timeout_falls_back(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv("MEAL_API_TIMEOUT_S", raw)

        assert MealApiClient.from_env().timeout_seconds == 10.0
