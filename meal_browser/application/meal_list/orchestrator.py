"""
Meal List Orchestrator.

Owns the load lifecycle of a diet's meals and the category list,
the current filter criteria, and the derived (filtered) view.

Every mutating event (load resolution, set_query, toggle_category,
clear_filters, close) ends with an explicit, synchronous recompute of
the view through the filter engine. Nothing is recomputed lazily.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import structlog

from meal_browser.application.meal_list.load_state import (
    CatalogCollection,
    LoadFailure,
    LoadState,
)
from meal_browser.domain.catalog.filtering import (
    DerivedView,
    FilterCriteria,
    apply_filters,
)
from meal_browser.domain.catalog.models import Category, Meal
from meal_browser.domain.catalog.ports import IMealCatalogGateway
from meal_browser.domain.shared.errors import NetworkError, ValidationError

logger = structlog.get_logger(__name__)


class MealListOrchestrator:
    """
    Loads meals and categories and keeps the filtered view in sync.

    Responsibilities:
    - Track an independent LoadState for meals and for categories
    - Replace a collection wholesale on every successful load
    - Treat a failed collection as empty until a retry succeeds
    - Recompute the derived view after every event

    Concurrency contract:
    Single event loop, no internal locking. At most one load per
    collection may be in flight; the caller must not start an
    overlapping load. If it does, the last resolution wins.

    Example:
        >>> orchestrator = MealListOrchestrator(gateway=api_client)
        >>> await orchestrator.load(diet_id=3)
        >>> orchestrator.set_query("taco")
        >>> orchestrator.toggle_category(10)
        >>> [meal.name for meal in orchestrator.filtered_meals]
    """

    def __init__(self, gateway: IMealCatalogGateway) -> None:
        """
        Initialize orchestrator with its gateway.

        Args:
            gateway: Remote meal catalog (HTTP client or test double)
        """
        self.gateway = gateway
        self._diet_id: Optional[int] = None
        self._meals: tuple[Meal, ...] = ()
        self._categories: tuple[Category, ...] = ()
        self._states: dict[CatalogCollection, LoadState] = {
            CatalogCollection.MEALS: LoadState.idle(),
            CatalogCollection.CATEGORIES: LoadState.idle(),
        }
        self._criteria = FilterCriteria()
        self._view = DerivedView()

    # ═══════════════════════════════════════════════════════════
    # READ SIDE
    # ═══════════════════════════════════════════════════════════

    @property
    def diet_id(self) -> Optional[int]:
        """Diet of the most recent load() call."""
        return self._diet_id

    @property
    def meals_state(self) -> LoadState:
        return self._states[CatalogCollection.MEALS]

    @property
    def categories_state(self) -> LoadState:
        return self._states[CatalogCollection.CATEGORIES]

    @property
    def meals(self) -> tuple[Meal, ...]:
        """Loaded meals, empty unless the meals state is LOADED."""
        return self._meals if self.meals_state.is_loaded else ()

    @property
    def categories(self) -> tuple[Category, ...]:
        """Loaded categories, empty unless the categories state is LOADED."""
        return self._categories if self.categories_state.is_loaded else ()

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @property
    def view(self) -> DerivedView:
        return self._view

    @property
    def filtered_meals(self) -> tuple[Meal, ...]:
        return self._view.filtered_meals

    @property
    def filtered_categories(self) -> tuple[Category, ...]:
        return self._view.filtered_categories

    @property
    def failures(self) -> tuple[LoadFailure, ...]:
        """Failed collections with their reasons, meals first."""
        return tuple(
            LoadFailure(collection=collection, reason=state.reason or "")
            for collection, state in self._states.items()
            if state.is_failed
        )

    # ═══════════════════════════════════════════════════════════
    # LOAD LIFECYCLE
    # ═══════════════════════════════════════════════════════════

    async def load(self, diet_id: int) -> None:
        """
        Load a diet's meals and the categories.

        Both collections switch to LOADING before this coroutine first
        suspends, so scheduling it with asyncio.create_task() and
        reading the states right away already shows LOADING.

        Network failures never raise: they end up in meals_state /
        categories_state and in failures.

        Args:
            diet_id: Diet whose meals to load

        Raises:
            Exception: Any non-network error from the gateway, after
                both fetches have settled and the failing collection
                is back to IDLE
        """
        self._diet_id = diet_id
        self._begin(CatalogCollection.MEALS)
        self._begin(CatalogCollection.CATEGORIES)

        logger.info("Loading meal list", diet_id=diet_id)

        results = await asyncio.gather(
            self._fetch_meals(diet_id),
            self._fetch_categories(),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result

    async def retry(self, collection: CatalogCollection) -> None:
        """
        Re-issue the load of one collection, keeping the criteria.

        Args:
            collection: MEALS (for the last loaded diet) or CATEGORIES

        Raises:
            ValidationError: If meals are retried before any load()
        """
        collection = CatalogCollection(collection)
        logger.info("Retrying load", collection=collection.value, diet_id=self._diet_id)

        if collection is CatalogCollection.MEALS:
            if self._diet_id is None:
                raise ValidationError("No diet has been loaded yet, call load() first")
            self._begin(collection)
            await self._fetch_meals(self._diet_id)
        else:
            self._begin(collection)
            await self._fetch_categories()

    def close(self) -> None:
        """Discard loaded collections and reset both states to IDLE."""
        self._meals = ()
        self._categories = ()
        for collection in CatalogCollection:
            self._states[collection] = LoadState.idle()
        self._recompute()

    def _begin(self, collection: CatalogCollection) -> None:
        if self._states[collection].is_loading:
            logger.warning(
                "Overlapping load started, last resolution wins",
                collection=collection.value,
            )
        self._states[collection] = LoadState.loading()
        self._recompute()

    async def _fetch_meals(self, diet_id: int) -> None:
        try:
            meals = await self.gateway.fetch_meals_by_diet(diet_id)
        except NetworkError as e:
            self._fail(CatalogCollection.MEALS, e)
            return
        except Exception:
            self._abort(CatalogCollection.MEALS)
            raise

        self._meals = tuple(meals)
        self._states[CatalogCollection.MEALS] = LoadState.loaded()
        logger.info("Meals loaded", diet_id=diet_id, count=len(self._meals))
        self._recompute()

    async def _fetch_categories(self) -> None:
        try:
            categories = await self.gateway.fetch_categories()
        except NetworkError as e:
            self._fail(CatalogCollection.CATEGORIES, e)
            return
        except Exception:
            self._abort(CatalogCollection.CATEGORIES)
            raise

        self._categories = tuple(categories)
        self._states[CatalogCollection.CATEGORIES] = LoadState.loaded()
        logger.info("Categories loaded", count=len(self._categories))
        self._recompute()

    def _abort(self, collection: CatalogCollection) -> None:
        if collection is CatalogCollection.MEALS:
            self._meals = ()
        else:
            self._categories = ()
        self._states[collection] = LoadState.idle()
        logger.error("Load aborted by unexpected error", collection=collection.value)
        self._recompute()

    def _fail(self, collection: CatalogCollection, error: NetworkError) -> None:
        if collection is CatalogCollection.MEALS:
            self._meals = ()
        else:
            self._categories = ()
        self._states[collection] = LoadState.failed(error.reason or type(error).__name__)
        logger.warning(
            "Load failed",
            collection=collection.value,
            reason=error.reason,
            status=error.status,
        )
        self._recompute()

    # ═══════════════════════════════════════════════════════════
    # FILTER EVENTS
    # ═══════════════════════════════════════════════════════════

    def set_query(self, text: str) -> None:
        """Replace the search text and recompute (no debounce)."""
        self._criteria = self._criteria.with_query(text)
        self._recompute()

    def toggle_category(self, category_id: int) -> None:
        """
        Select category_id if unselected, else unselect it.

        Ids that are neither loaded nor currently selected are ignored.
        """
        selected = category_id in self._criteria.selected_category_ids
        known = any(c.id == category_id for c in self.categories)
        if not selected and not known:
            logger.debug("Ignoring unknown category", category_id=category_id)
            return

        self._criteria = self._criteria.toggled(category_id)
        self._recompute()

    def clear_filters(self) -> None:
        """Reset query and selection; the view becomes the loaded collections."""
        self._criteria = FilterCriteria()
        self._recompute()

    def _recompute(self) -> None:
        self._view = apply_filters(self.meals, self.categories, self._criteria)
