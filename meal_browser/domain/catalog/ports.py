"""
Ports (Interfaces) for meal list dependencies.

The meal list orchestrator depends on this protocol, not on the
HTTP client, so tests and other transports can stand in for it.

Design Pattern: Ports & Adapters (Hexagonal Architecture)
"""

from typing import Protocol, runtime_checkable

from meal_browser.domain.catalog.models import Category, Meal


@runtime_checkable
class IMealCatalogGateway(Protocol):
    """
    Port for the remote meal catalog.

    Both calls are independent; no ordering is guaranteed between them.
    """

    async def fetch_meals_by_diet(self, diet_id: int) -> list[Meal]:
        """
        Fetch the meals of a diet.

        Args:
            diet_id: Diet identifier

        Returns:
            Meals in API order

        Raises:
            NetworkError: On transport or HTTP failure
        """
        ...

    async def fetch_categories(self) -> list[Category]:
        """
        Fetch the global category list.

        Returns:
            Categories in API order

        Raises:
            NetworkError: On transport or HTTP failure
        """
        ...
