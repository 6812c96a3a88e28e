"""
Shared fixtures for meal browser tests.

Catalog samples mirror the meal API's demo data.
"""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from meal_browser.application.meal_list.orchestrator import MealListOrchestrator
from meal_browser.domain.catalog.models import Category, Meal
from meal_browser.infrastructure.meal_api.api_client import MealApiClient


# ═══════════════════════════════════════════════════════════
# DOMAIN MODEL FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def sample_meals() -> list[Meal]:
    """Meals of diet 2, in API order."""
    return [
        Meal(
            id=1,
            name="Spaghetti Carbonara",
            description="Pasta with bacon, egg and parmesan",
            prep_time=20,
            calories=720,
            diet_id=2,
        ),
        Meal(id=2, name="Taco Tuesday", description="Tacos with all the toppings", diet_id=2),
        Meal(id=3, name="Grillet Laks", prep_time=25, calories=540, diet_id=2),
        Meal(id=4, name="Kylling Tikka Masala", prep_time=45, calories=810, diet_id=2),
        Meal(id=5, name="Caesar Salat", prep_time=15, calories=430, diet_id=2),
    ]


@pytest.fixture
def sample_categories() -> list[Category]:
    """Global category list, in API order."""
    return [
        Category(id=10, name="Taco"),
        Category(id=11, name="Salat"),
        Category(id=12, name="Laks"),
        Category(id=13, name="Pasta"),
    ]


@pytest.fixture
def sample_meal_records() -> list[dict[str, Any]]:
    """Raw meal list payload as sent by the API."""
    return [
        {
            "id": 1,
            "name": "Spaghetti Carbonara",
            "description": "Pasta with bacon, egg and parmesan",
            "prepTime": 20,
            "calories": 720,
            "dietId": 2,
        },
        {
            "id": 2,
            "name": "Taco Tuesday",
            "description": "Tacos with all the toppings",
            "dietId": 2,
        },
    ]


# ═══════════════════════════════════════════════════════════
# MOCK GATEWAY FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def mock_gateway(
    sample_meals: list[Meal],
    sample_categories: list[Category],
) -> AsyncMock:
    """Mock meal API client.

    Default behavior: returns the sample meals and categories.
    Override return_value / side_effect in tests.
    """
    gateway = AsyncMock(spec=MealApiClient)
    gateway.fetch_meals_by_diet.return_value = sample_meals
    gateway.fetch_categories.return_value = sample_categories
    return gateway


@pytest.fixture
def orchestrator(mock_gateway: AsyncMock) -> MealListOrchestrator:
    """Orchestrator wired to the mock gateway."""
    return MealListOrchestrator(gateway=mock_gateway)
