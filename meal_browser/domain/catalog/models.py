"""
Catalog domain models.

Diets, meals and categories as returned by the meal API.
All models are immutable: a refetch replaces them wholesale.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

NOT_AVAILABLE = "N/A"


def _format_number(value: Optional[float]) -> str:
    if value is None:
        return NOT_AVAILABLE
    if float(value).is_integer():
        return str(int(value))
    return str(value)


class Diet(BaseModel):
    """
    Named grouping of meals (e.g. vegan, omnivore).

    Example:
        >>> diet = Diet(id=1, name="Vegan", description="No animal products")
        >>> assert diet.picture is None
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Diet identifier")
    name: str = Field(..., min_length=1, description="Display name")
    description: str = Field(default="", description="Free text description")
    picture: Optional[str] = Field(None, description="Picture URL")


class Category(BaseModel):
    """
    Named tag used to filter meals.

    Example:
        >>> category = Category(id=10, name="Taco")
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Category identifier")
    name: str = Field(..., min_length=1, description="Display name")


class Meal(BaseModel):
    """
    Single dish as listed for a diet.

    prep_time and calories are optional; the *_display helpers
    render a missing value as "N/A".

    Example:
        >>> meal = Meal(id=1, name="Spaghetti Carbonara", diet_id=2)
        >>> assert meal.prep_time_display == "N/A"
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Meal identifier")
    name: str = Field(..., min_length=1, description="Display name")
    description: str = Field(default="", description="Free text description")
    prep_time: Optional[float] = Field(None, ge=0, description="Preparation time in minutes")
    calories: Optional[float] = Field(None, ge=0, description="Energy in kcal")
    diet_id: Optional[int] = Field(None, description="Owning diet")

    @field_validator("name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        """Reject whitespace-only names."""
        if not v.strip():
            raise ValueError("Meal name cannot be empty or whitespace")
        return v

    @property
    def prep_time_display(self) -> str:
        """Preparation time as text, "N/A" when unknown."""
        return _format_number(self.prep_time)

    @property
    def calories_display(self) -> str:
        """Calorie count as text, "N/A" when unknown."""
        return _format_number(self.calories)


class Allergen(BaseModel):
    """Allergen carried by an ingredient."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str


class Ingredient(BaseModel):
    """Ingredient of a meal with its allergens."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    allergens: tuple[Allergen, ...] = ()


class MealDetail(BaseModel):
    """
    Full meal record returned by the meal detail endpoint.

    Example:
        >>> detail = MealDetail(
        ...     id=2,
        ...     name="Taco Tuesday",
        ...     ingredients=(
        ...         Ingredient(id=1, name="Lefse", allergens=(Allergen(id=3, name="Gluten"),)),
        ...     ),
        ... )
        >>> assert detail.allergen_names == ["Gluten"]
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: str = Field(..., min_length=1)
    prep_time: Optional[float] = Field(None, ge=0)
    calories: Optional[float] = Field(None, ge=0)
    diet_id: Optional[int] = None
    recipe: str = ""
    ingredients: tuple[Ingredient, ...] = ()
    categories: tuple[Category, ...] = ()

    @property
    def prep_time_display(self) -> str:
        return _format_number(self.prep_time)

    @property
    def calories_display(self) -> str:
        return _format_number(self.calories)

    @property
    def allergen_names(self) -> list[str]:
        """Allergen names across all ingredients, first occurrence order."""
        seen: list[str] = []
        for ingredient in self.ingredients:
            for allergen in ingredient.allergens:
                if allergen.name not in seen:
                    seen.append(allergen.name)
        return seen
