"""
Meal API data mapper.

Transforms meal API JSON records to catalog domain models.
"""

from typing import Any, Callable, TypeVar

from pydantic import ValidationError as PydanticValidationError

from meal_browser.domain.catalog.models import (
    Allergen,
    Category,
    Diet,
    Ingredient,
    Meal,
    MealDetail,
)
from meal_browser.domain.shared.errors import InvalidPayloadError

T = TypeVar("T")


def _require_list(data: Any, what: str) -> list[Any]:
    if not isinstance(data, list):
        raise InvalidPayloadError(f"Expected a list of {what}, got {type(data).__name__}")
    return data


def _require_dict(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise InvalidPayloadError(f"Expected a {what} object, got {type(data).__name__}")
    return data


def _build(factory: Callable[..., T], what: str, **fields: Any) -> T:
    try:
        return factory(**fields)
    except PydanticValidationError as e:
        raise InvalidPayloadError(f"Invalid {what} record: {e.errors()[0]['msg']}") from e


def _calories(record: dict[str, Any]) -> Any:
    # Older API versions send "kcal" instead of "calories"
    calories = record.get("calories")
    return calories if calories is not None else record.get("kcal")


class CatalogMapper:
    """Maps meal API data to catalog domain models."""

    @staticmethod
    def parse_diet(data: Any) -> Diet:
        record = _require_dict(data, "diet")
        return _build(
            Diet,
            "diet",
            id=record.get("id"),
            name=record.get("name"),
            description=record.get("description") or "",
            picture=record.get("picture"),
        )

    @staticmethod
    def parse_diets(data: Any) -> list[Diet]:
        return [CatalogMapper.parse_diet(item) for item in _require_list(data, "diets")]

    @staticmethod
    def parse_meal(data: Any) -> Meal:
        """Parse a single meal list record.

        Args:
            data: Raw JSON record

        Returns:
            Parsed Meal

        Raises:
            InvalidPayloadError: If the record is not an object or fails validation

        Example:
            >>> meal = CatalogMapper.parse_meal(
            ...     {"id": 1, "name": "Taco Tuesday", "kcal": 650, "dietId": 2}
            ... )
            >>> assert meal.calories == 650
        """
        record = _require_dict(data, "meal")
        return _build(
            Meal,
            "meal",
            id=record.get("id"),
            name=record.get("name"),
            description=record.get("description") or "",
            prep_time=record.get("prepTime"),
            calories=_calories(record),
            diet_id=record.get("dietId"),
        )

    @staticmethod
    def parse_meals(data: Any) -> list[Meal]:
        return [CatalogMapper.parse_meal(item) for item in _require_list(data, "meals")]

    @staticmethod
    def parse_category(data: Any) -> Category:
        record = _require_dict(data, "category")
        return _build(Category, "category", id=record.get("id"), name=record.get("name"))

    @staticmethod
    def parse_categories(data: Any) -> list[Category]:
        return [
            CatalogMapper.parse_category(item) for item in _require_list(data, "categories")
        ]

    @staticmethod
    def parse_meal_detail(data: Any) -> MealDetail:
        """Parse the meal detail response.

        The detail endpoint nests ingredients (with allergens) and
        categories; the category list is sent under "category".
        """
        record = _require_dict(data, "meal")

        ingredients = []
        for item in _require_list(record.get("ingredients") or [], "ingredients"):
            raw = _require_dict(item, "ingredient")
            allergens = tuple(
                _build(Allergen, "allergen", id=a.get("id"), name=a.get("name"))
                for a in (
                    _require_dict(x, "allergen")
                    for x in _require_list(raw.get("allergens") or [], "allergens")
                )
            )
            ingredients.append(
                _build(
                    Ingredient,
                    "ingredient",
                    id=raw.get("id"),
                    name=raw.get("name"),
                    allergens=allergens,
                )
            )

        categories = record.get("category", record.get("categories")) or []

        return _build(
            MealDetail,
            "meal",
            id=record.get("id"),
            name=record.get("name"),
            prep_time=record.get("prepTime"),
            calories=_calories(record),
            diet_id=record.get("dietId"),
            recipe=record.get("recipe") or "",
            ingredients=tuple(ingredients),
            categories=tuple(CatalogMapper.parse_categories(categories)),
        )
