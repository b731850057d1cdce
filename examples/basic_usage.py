#!/usr/bin/env python3
"""
Recipe Assistant - Basic Usage Examples
Demonstrates amount scaling, recipe detail rendering and cooking mode.
"""

import sys
from pathlib import Path

# Add src to path
sys.path.append(str(Path(__file__).parent.parent / 'src'))

from cooking_session import CookingSession
from quantity_scaler import format_nutrition_value, scale_amount
from recipe_catalog import RecipeCatalog
from recipe_detail import RecipeDetailRenderer, format_view

CATALOG_PATH = Path(__file__).parent.parent / 'data' / 'recipes.json'


def example_1_scale_amounts():
    """Example 1: Scaling individual amounts."""
    print("🔸 Example 1: Scaling Amounts (4 → 6 servings)")
    print("-" * 50)

    for amount in ["2", "1/2", "2 1/4", "10-12", "to taste"]:
        print(f"   {amount!r:>12} → {scale_amount(amount, 4, 6)!r}")

    print(f"   calories 350 → {format_nutrition_value('calories', 350, 4, 6)}")


def example_2_recipe_detail():
    """Example 2: Rendering a catalog recipe for a different serving count."""
    print("\n🔸 Example 2: Recipe Detail")
    print("-" * 50)

    catalog = RecipeCatalog({'catalog_path': str(CATALOG_PATH)})
    catalog.load()

    view = RecipeDetailRenderer().render(catalog.get_recipe("2"), 6)
    print(format_view(view, "text"))


def example_3_cooking_mode():
    """Example 3: Stepping through cooking mode."""
    print("\n🔸 Example 3: Cooking Mode")
    print("-" * 50)

    catalog = RecipeCatalog({'catalog_path': str(CATALOG_PATH)})
    catalog.load()

    session = CookingSession(catalog.get_recipe("1"))
    while True:
        summary = session.summary()
        minutes = summary['timer']['duration_seconds'] / 60
        print(f"   Step {summary['step_number']}/{summary['step_count']}: "
              f"{summary['description']} ({minutes:g} min)")
        if not session.next_step():
            break


def main():
    """Run all examples."""
    example_1_scale_amounts()
    example_2_recipe_detail()
    example_3_cooking_mode()


if __name__ == "__main__":
    main()
