#!/usr/bin/env python3
"""
Recipe Detail View
Builds the serving-adjusted recipe detail: scaled ingredient lines, ordered
instructions and nutrition values, with text, Markdown and JSON output.
"""

import json
import math
from dataclasses import dataclass, asdict, field
from typing import Dict, List, Optional, Any

from quantity_scaler import QuantityScaler
from recipe_models import Recipe, CookingStep, DEFAULT_SERVINGS


class ServingsSelector:
    """Target serving count chosen with a stepper control."""

    def __init__(self, base_servings: Optional[int] = None):
        self.base_servings = base_servings or DEFAULT_SERVINGS
        self.current = self.base_servings

    def set(self, servings: int) -> int:
        self.current = max(1, int(servings))
        return self.current

    def increment(self) -> int:
        return self.set(self.current + 1)

    def decrement(self) -> int:
        return self.set(self.current - 1)

    def adjust(self, multiplier: float) -> int:
        """Multiply the current servings, rounding half up, never below 1."""
        return self.set(int(math.floor(self.current * multiplier + 0.5)))

    def reset(self) -> int:
        return self.set(self.base_servings)


@dataclass
class ScaledIngredientLine:
    """Ingredient with its amount scaled for display."""
    id: str
    name: str
    original_amount: str
    amount: Optional[str]
    unit: Optional[str]
    display_text: str


@dataclass
class NutritionRow:
    """Scaled nutrition value."""
    key: str
    value: float
    display: str


@dataclass
class RecipeDetailView:
    """Recipe detail for one serving selection."""
    recipe_id: Optional[str]
    name: str
    description: Optional[str]
    base_servings: int
    target_servings: int
    scaling_factor: float
    cook_time: int
    prep_time: Optional[int]
    difficulty: str
    category: Optional[str]
    ingredients: List[ScaledIngredientLine] = field(default_factory=list)
    steps: List[CookingStep] = field(default_factory=list)
    nutrition: List[NutritionRow] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def ingredient_display_text(amount: Optional[str], unit: Optional[str], name: str) -> str:
    """Render "{amount} {unit} {name}", omitting missing parts."""
    if not amount:
        return name
    unit_part = f"{unit} " if unit else ""
    return f"{amount} {unit_part}{name}"


class RecipeDetailRenderer:
    """Builds detail views for a recipe at a target serving count."""

    def render(self, recipe: Recipe, target_servings: Optional[int] = None) -> RecipeDetailView:
        """
        Build the detail view.

        Amounts are always scaled from the recipe's own amounts, never from a
        previously rendered view.

        Args:
            recipe: Recipe as stored in the catalog
            target_servings: Servings to display, defaults to the recipe's servings

        Returns:
            Detail view
        """
        selector = ServingsSelector(recipe.servings)
        if target_servings is not None:
            selector.set(target_servings)

        # Nutrition falls back to a base of 1 serving
        scaler = QuantityScaler(recipe.servings, selector.current)
        nutrition_scaler = QuantityScaler(recipe.servings or 1, selector.current)

        ingredients = []
        for ingredient in recipe.ingredients:
            amount = scaler.scale_amount(ingredient.amount)
            ingredients.append(ScaledIngredientLine(
                id=ingredient.id,
                name=ingredient.name,
                original_amount=ingredient.amount,
                amount=amount,
                unit=ingredient.unit,
                display_text=ingredient_display_text(amount, ingredient.unit, ingredient.name)
            ))

        nutrition = [
            NutritionRow(
                key=key,
                value=nutrition_scaler.scale_nutrition(value),
                display=nutrition_scaler.format_nutrition(key, value)
            )
            for key, value in (recipe.nutrition or {}).items()
        ]

        return RecipeDetailView(
            recipe_id=recipe.id,
            name=recipe.name,
            description=recipe.description,
            base_servings=recipe.servings,
            target_servings=selector.current,
            scaling_factor=scaler.ratio,
            cook_time=recipe.cook_time,
            prep_time=recipe.prep_time,
            difficulty=recipe.difficulty,
            category=recipe.category,
            ingredients=ingredients,
            steps=recipe.sorted_steps(),
            nutrition=nutrition,
            tags=list(recipe.tags)
        )


def format_view(view: RecipeDetailView, output_format: str = "text") -> str:
    """Format a detail view as text, markdown or json."""
    if output_format == "json":
        return json.dumps(view.to_dict(), indent=2, ensure_ascii=False)
    if output_format == "markdown":
        return _format_view_as_markdown(view)
    return _format_view_as_text(view)


def _format_view_as_text(view: RecipeDetailView) -> str:
    lines = []

    lines.append(view.name)
    lines.append("=" * len(view.name))
    if view.description:
        lines.append(view.description)
    lines.append(f"Servings: {view.target_servings} (recipe serves {view.base_servings})")
    lines.append(f"Cook time: {view.cook_time}m | Difficulty: {view.difficulty}")
    lines.append("")

    lines.append("Ingredients:")
    lines.append("-" * 20)
    for ingredient in view.ingredients:
        lines.append(f"• {ingredient.display_text}")
    lines.append("")

    if view.steps:
        lines.append("Instructions:")
        lines.append("-" * 20)
        for step in view.steps:
            duration = f" ({_format_minutes(step.duration)} min)" if step.duration else ""
            lines.append(f"{step.step_number}. {step.description}{duration}")
        lines.append("")

    if view.nutrition:
        lines.append("Nutrition:")
        lines.append("-" * 20)
        for row in view.nutrition:
            lines.append(f"• {row.key}: {row.display}")

    return "\n".join(lines).rstrip() + "\n"


def _format_view_as_markdown(view: RecipeDetailView) -> str:
    lines = []

    lines.append(f"# {view.name}")
    if view.scaling_factor != 1.0:
        lines.append(f"*Scaled from {view.base_servings} to {view.target_servings} servings*")
    lines.append("")

    lines.append("## Ingredients")
    lines.append("")
    for ingredient in view.ingredients:
        lines.append(f"- {ingredient.display_text}")
    lines.append("")

    if view.steps:
        lines.append("## Instructions")
        lines.append("")
        for step in view.steps:
            lines.append(f"{step.step_number}. {step.description}")
        lines.append("")

    if view.nutrition:
        lines.append("## Nutrition")
        lines.append("")
        lines.append("| Nutrient | Amount |")
        lines.append("| --- | --- |")
        for row in view.nutrition:
            lines.append(f"| {row.key} | {row.display} |")

    return "\n".join(lines).rstrip() + "\n"


def _format_minutes(minutes: float) -> str:
    return str(int(minutes)) if float(minutes).is_integer() else f"{minutes:g}"


def main():
    """Render a catalog recipe for a serving count."""
    import argparse
    import sys

    from app_config import load_config
    from error_handling import RecipeAppError
    from recipe_catalog import RecipeCatalog

    parser = argparse.ArgumentParser(description='Show a recipe scaled to a serving count')
    parser.add_argument('--recipe-id', '-r', required=True, help='Recipe ID')
    parser.add_argument('--servings', '-s', type=int, help='Target servings')
    parser.add_argument('--catalog', '-c', help='Recipe catalog JSON file')
    parser.add_argument('--config', help='Configuration file (JSON)')
    parser.add_argument('--format', choices=['text', 'markdown', 'json'], default='text', help='Output format')
    parser.add_argument('--output', '-o', help='Output file')

    args = parser.parse_args()

    config = load_config(args.config)
    if args.catalog:
        config['catalog_path'] = args.catalog

    try:
        catalog = RecipeCatalog(config)
        catalog.load()
        recipe = catalog.get_recipe(args.recipe_id)
    except RecipeAppError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    view = RecipeDetailRenderer().render(recipe, args.servings)
    output = format_view(view, args.format)

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(output)
        print(f"Recipe written to {args.output}")
    else:
        print(output, end="")

    return 0


if __name__ == "__main__":
    exit(main())
