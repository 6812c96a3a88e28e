#!/usr/bin/env python3
"""
Browse the meals of a diet from the command line.

Loads meals and categories, applies an optional search text and
category selection, and prints the filtered lists.

Usage:
    python -m meal_browser.scripts.browse_meals --list-diets
    python -m meal_browser.scripts.browse_meals --diet 3 --query taco --category 10
    python -m meal_browser.scripts.browse_meals --meal 42
    browse-meals --diet 3   (installed entry point)
"""

import argparse
import asyncio
import sys
from typing import Optional, Sequence

import structlog
from dotenv import load_dotenv

from meal_browser.application.meal_list.orchestrator import MealListOrchestrator
from meal_browser.domain.catalog.models import MealDetail
from meal_browser.domain.shared.errors import NetworkError
from meal_browser.infrastructure import config
from meal_browser.infrastructure.logging_config import configure_logging
from meal_browser.infrastructure.meal_api.api_client import MealApiClient

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse diets and meals")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--list-diets", action="store_true", help="List available diets")
    group.add_argument("--diet", type=int, help="Diet id whose meals to list")
    group.add_argument("--meal", type=int, help="Show a single meal")
    parser.add_argument("--query", default="", help="Search text")
    parser.add_argument(
        "--category",
        type=int,
        action="append",
        default=[],
        help="Category id to filter by (repeatable)",
    )
    return parser


def render_meal_list(orchestrator: MealListOrchestrator) -> list[str]:
    """Lines describing the orchestrator's current view."""
    lines = []
    for failure in orchestrator.failures:
        lines.append(f"⚠️  Could not load {failure.collection.value}: {failure.reason}")

    selected = orchestrator.criteria.selected_category_ids
    lines.append("Categories:")
    for category in orchestrator.filtered_categories:
        marker = "[x]" if category.id in selected else "[ ]"
        lines.append(f"  {marker} {category.id}: {category.name}")

    lines.append("Meals:")
    if not orchestrator.filtered_meals:
        lines.append("  (no meals)")
    for meal in orchestrator.filtered_meals:
        lines.append(
            f"  {meal.id}: {meal.name} "
            f"({meal.prep_time_display} min, {meal.calories_display} kcal)"
        )
    return lines


def render_meal_detail(meal: MealDetail) -> list[str]:
    lines = [
        meal.name,
        f"Prep time: {meal.prep_time_display} min",
        f"Calories: {meal.calories_display} kcal",
    ]
    if meal.categories:
        lines.append("Categories: " + ", ".join(c.name for c in meal.categories))
    if meal.ingredients:
        lines.append("Ingredients:")
        lines.extend(f"  • {ingredient.name}" for ingredient in meal.ingredients)
    if meal.allergen_names:
        lines.append("Allergens: " + ", ".join(meal.allergen_names))
    if meal.recipe:
        lines.extend(["Recipe:", meal.recipe])
    return lines


async def run(args: argparse.Namespace, client: MealApiClient) -> int:
    if args.list_diets:
        diets = await client.fetch_diets()
        for diet in diets:
            print(f"{diet.id}: {diet.name} - {diet.description}")
        return 0

    if args.meal is not None:
        detail = await client.fetch_meal_by_id(args.meal)
        print("\n".join(render_meal_detail(detail)))
        return 0

    orchestrator = MealListOrchestrator(gateway=client)
    await orchestrator.load(args.diet)
    orchestrator.set_query(args.query)
    for category_id in args.category:
        orchestrator.toggle_category(category_id)

    print("\n".join(render_meal_list(orchestrator)))
    failed = bool(orchestrator.failures)
    orchestrator.close()
    return 1 if failed else 0


async def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    async with MealApiClient.from_env() as client:
        try:
            return await run(args, client)
        except NetworkError as e:
            logger.error("❌ Request failed", reason=e.reason)
            return 1


def cli() -> None:
    load_dotenv()
    configure_logging(config.get_log_level())

    exit_code = asyncio.run(main())
    sys.exit(exit_code)


if __name__ == "__main__":
    cli()
