"""
Meal list filter engine.

Pure functions: given the loaded meals and categories plus the
current FilterCriteria, compute the filtered meal and category lists.

Two stages, combined with AND:
1. Text query: case-insensitive substring match on names. Applies to
   both meals and categories.
2. Category selection: a meal matches a selected category when the
   category's name is a case-insensitive substring of the meal's name.
   Meals carry no category ids, so this name heuristic is the join.
   Multiple selected categories are OR'ed. Applies to meals only.

Both stages are stable filters: output order is input order.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field

from meal_browser.domain.catalog.models import Category, Meal


class FilterCriteria(BaseModel):
    """
    Current search text and selected category ids.

    Immutable; mutators return a new instance.

    Example:
        >>> criteria = FilterCriteria().with_query("taco").toggled(10)
        >>> assert criteria.selected_category_ids == frozenset({10})
        >>> assert criteria.toggled(10).selected_category_ids == frozenset()
    """

    model_config = ConfigDict(frozen=True)

    query: str = Field(default="", description="Free text search")
    selected_category_ids: frozenset[int] = Field(
        default_factory=frozenset, description="Selected category ids"
    )

    @property
    def normalized_query(self) -> str:
        """Trimmed, lower-cased query ("" means no text filter)."""
        return self.query.strip().lower()

    @property
    def is_empty(self) -> bool:
        return not self.normalized_query and not self.selected_category_ids

    def with_query(self, query: str) -> FilterCriteria:
        return self.model_copy(update={"query": query})

    def toggled(self, category_id: int) -> FilterCriteria:
        """Add category_id if absent, else remove it."""
        ids = set(self.selected_category_ids)
        if category_id in ids:
            ids.remove(category_id)
        else:
            ids.add(category_id)
        return self.model_copy(update={"selected_category_ids": frozenset(ids)})


class DerivedView(BaseModel):
    """Filtered meal and category lists shown to the user."""

    model_config = ConfigDict(frozen=True)

    filtered_meals: tuple[Meal, ...] = ()
    filtered_categories: tuple[Category, ...] = ()

    @property
    def meal_ids(self) -> list[int]:
        return [meal.id for meal in self.filtered_meals]

    @property
    def category_ids(self) -> list[int]:
        return [category.id for category in self.filtered_categories]


def _name_contains(name: str, needle: str) -> bool:
    return needle in name.lower()


def selected_category_names(
    categories: Iterable[Category],
    selected_ids: frozenset[int],
) -> list[str]:
    """Lower-cased names of the selected categories that are loaded.

    Ids without a loaded category are ignored.
    """
    return [c.name.lower() for c in categories if c.id in selected_ids]


def matches_query(name: str, query: str) -> bool:
    """True when normalized query is empty or contained in name."""
    return not query or _name_contains(name, query)


def matches_any_category(meal: Meal, category_names: Sequence[str]) -> bool:
    """True when category_names is empty or one of them is in the meal name."""
    if not category_names:
        return True
    return any(_name_contains(meal.name, name) for name in category_names)


def apply_filters(
    meals: Sequence[Meal],
    categories: Sequence[Category],
    criteria: FilterCriteria,
) -> DerivedView:
    """Compute the derived view.

    Args:
        meals: Loaded meals (empty if not loaded or failed)
        categories: Loaded categories (empty if not loaded or failed)
        criteria: Current filter criteria

    Returns:
        DerivedView with order-preserving subsets of meals/categories

    Example:
        >>> meals = [
        ...     Meal(id=1, name="Spaghetti Carbonara"),
        ...     Meal(id=2, name="Taco Tuesday"),
        ... ]
        >>> categories = [Category(id=10, name="Taco")]
        >>> view = apply_filters(meals, categories, FilterCriteria().toggled(10))
        >>> assert view.meal_ids == [2]
    """
    query = criteria.normalized_query
    # Selection resolves against the unfiltered categories
    category_names = selected_category_names(categories, criteria.selected_category_ids)

    filtered_meals = tuple(
        meal
        for meal in meals
        if matches_query(meal.name, query) and matches_any_category(meal, category_names)
    )
    filtered_categories = tuple(c for c in categories if matches_query(c.name, query))

    return DerivedView(
        filtered_meals=filtered_meals,
        filtered_categories=filtered_categories,
    )
