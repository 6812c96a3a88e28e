"""
Meal API client.

Handles HTTP requests to the diet/meal backend.
No retries: a failed call raises NetworkError and the caller decides.
"""

import asyncio
from typing import Any, Callable, Optional

import aiohttp
import structlog

from meal_browser.domain.catalog.mapper import CatalogMapper
from meal_browser.domain.catalog.models import Category, Diet, Meal, MealDetail
from meal_browser.domain.shared.errors import (
    ExternalServiceError,
    InvalidPayloadError,
    MealNotFoundError,
    NetworkError,
    RequestTimeoutError,
)
from meal_browser.infrastructure import config

logger = structlog.get_logger(__name__)


class MealApiClient:
    """Meal API client.

    Implements IMealCatalogGateway.
    """

    API_PREFIX = "/api"

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout_seconds: float = config.DEFAULT_TIMEOUT_S,
    ) -> None:
        """Initialize API client.

        Args:
            base_url: API root, e.g. http://localhost:8080
            api_key: Static key sent as X-API-Key
            timeout_seconds: Request timeout
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self._session: Optional[aiohttp.ClientSession] = None

    @classmethod
    def from_env(cls) -> "MealApiClient":
        """Build a client from MEAL_API_URL / MEAL_API_KEY / MEAL_API_TIMEOUT_S."""
        return cls(
            base_url=config.get_api_url(),
            api_key=config.get_api_key(),
            timeout_seconds=config.get_request_timeout(),
        )

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "X-API-Key": self.api_key,
        }

    async def __aenter__(self) -> "MealApiClient":
        """Async context manager entry."""
        self._session = aiohttp.ClientSession(headers=self.headers)
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        if self._session:
            await self._session.close()
            self._session = None

    async def fetch_diets(self) -> list[Diet]:
        """Fetch all available diets.

        Raises:
            NetworkError: If the request fails or returns non-2xx
        """
        data = await self._get_json("/diets", operation="fetch_diets")
        return CatalogMapper.parse_diets(data)

    async def fetch_meals_by_diet(self, diet_id: int) -> list[Meal]:
        """Fetch the meals of a diet.

        Args:
            diet_id: Diet identifier

        Returns:
            Meals in API order

        Raises:
            NetworkError: If the request fails or returns non-2xx
            InvalidPayloadError: If the body is not a list of meals

        Example:
            >>> async def test():
            ...     async with MealApiClient("http://localhost:8080") as client:
            ...         return await client.fetch_meals_by_diet(3)
        """
        data = await self._get_json(
            f"/diets/{diet_id}/meals",
            operation="fetch_meals_by_diet",
            diet_id=diet_id,
        )
        meals = CatalogMapper.parse_meals(data)
        logger.debug("Fetched meals", diet_id=diet_id, count=len(meals))
        return meals

    async def fetch_categories(self) -> list[Category]:
        """Fetch the global category list.

        Raises:
            NetworkError: If the request fails or returns non-2xx
        """
        data = await self._get_json("/categories", operation="fetch_categories")
        categories = CatalogMapper.parse_categories(data)
        logger.debug("Fetched categories", count=len(categories))
        return categories

    async def fetch_meal_by_id(self, meal_id: int) -> MealDetail:
        """Fetch a single meal with ingredients, categories and recipe.

        Raises:
            MealNotFoundError: If the API answers 404
            NetworkError: If the request fails or returns non-2xx
        """
        data = await self._get_json(
            f"/meals/{meal_id}",
            operation="fetch_meal_by_id",
            not_found=lambda: MealNotFoundError(f"Meal {meal_id} not found", status=404),
            meal_id=meal_id,
        )
        return CatalogMapper.parse_meal_detail(data)

    async def _get_json(
        self,
        path: str,
        operation: str,
        not_found: Optional[Callable[[], NetworkError]] = None,
        **log_fields: Any,
    ) -> Any:
        if not self._session:
            msg = "Client not initialized, use async with"
            raise ExternalServiceError(msg)

        url = f"{self.base_url}{self.API_PREFIX}{path}"

        try:
            async with self._session.get(
                url,
                timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
            ) as response:
                if response.status == 404 and not_found is not None:
                    raise not_found()

                if not 200 <= response.status < 300:
                    raise NetworkError(f"HTTP {response.status}", status=response.status)

                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    msg = f"Meal API returned invalid JSON: {e}"
                    raise InvalidPayloadError(msg, status=response.status) from e

        except NetworkError as e:
            logger.error(
                "Meal API request failed",
                operation=operation,
                url=url,
                error=str(e),
                status=e.status,
                **log_fields,
            )
            raise

        except asyncio.TimeoutError as e:
            logger.error("Meal API timeout", operation=operation, url=url, **log_fields)
            msg = f"Meal API timeout after {self.timeout_seconds}s"
            raise RequestTimeoutError(msg) from e

        except aiohttp.ClientError as e:
            logger.error(
                "Meal API client error",
                operation=operation,
                url=url,
                error=str(e),
                **log_fields,
            )
            raise NetworkError(f"Network error: {e}") from e
