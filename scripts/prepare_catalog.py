#!/usr/bin/env python3
"""
Catalog preparation script for the recipe assistant.
Validates recipe catalog files and audits ingredient amounts that will not
scale with the serving count.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Tuple

# Add src to path
sys.path.append(str(Path(__file__).parent.parent / 'src'))

from error_handling import RecipeAppError
from quantity_scaler import RANGE_PATTERN, parse_number, scale_range
from recipe_catalog import RecipeCatalog
from recipe_models import Ingredient, Recipe


def validate_catalog(catalog_path: str) -> bool:
    """Validate catalog structure and print a summary."""
    print(f"🔍 Validating catalog at {catalog_path}...")

    catalog = RecipeCatalog({'log_level': 'WARNING'})
    try:
        recipes = catalog.load(catalog_path)
    except RecipeAppError as e:
        print(f"❌ {e.message}")
        if e.details.get('messages'):
            print(json.dumps(e.details['messages'], indent=2))
        return False

    ingredient_count = sum(len(recipe.ingredients) for recipe in recipes)
    step_count = sum(len(recipe.steps) for recipe in recipes)

    print("Catalog Summary:")
    print(f"  Recipes: {len(recipes)}")
    print(f"  Ingredients: {ingredient_count}")
    print(f"  Steps: {step_count}")
    print(f"  Categories: {', '.join(catalog.categories()) or '-'}")
    print(f"  Without nutrition: {sum(1 for recipe in recipes if not recipe.nutrition)}")

    ids = [recipe.id for recipe in recipes]
    duplicates = sorted({recipe_id for recipe_id in ids if ids.count(recipe_id) > 1})
    if duplicates:
        print(f"⚠️  Duplicate recipe IDs: {', '.join(duplicates)}")
        return False

    print("✅ Catalog looks good")
    return True


def is_scalable(amount: str) -> bool:
    """True when the amount is a quantity or a range of quantities."""
    if RANGE_PATTERN.search(amount):
        return scale_range(amount, 1.0) is not None
    return parse_number(amount) is not None


def unscalable_amounts(recipes: List[Recipe]) -> List[Tuple[Recipe, Ingredient]]:
    """Ingredients whose amount passes through scaling unchanged."""
    return [
        (recipe, ingredient)
        for recipe in recipes
        for ingredient in recipe.ingredients
        if not is_scalable(ingredient.amount)
    ]


def audit_amounts(catalog_path: str) -> int:
    """List ingredient amounts that pass through unscaled."""
    print(f"📋 Auditing ingredient amounts in {catalog_path}...")

    catalog = RecipeCatalog({'log_level': 'WARNING'})
    recipes = catalog.load(catalog_path)

    unscaled = unscalable_amounts(recipes)
    for recipe, ingredient in unscaled:
        print(f"  [{recipe.id}] {recipe.name}: {ingredient.name} = {ingredient.amount!r}")

    print(f"{len(unscaled)} amount(s) will not scale")
    return len(unscaled)


def main():
    """Main function for catalog preparation."""
    parser = argparse.ArgumentParser(description='Recipe Catalog Preparation')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    validate_parser = subparsers.add_parser('validate', help='Validate a catalog file')
    validate_parser.add_argument('catalog_path', help='Catalog JSON file')

    audit_parser = subparsers.add_parser('audit', help='List amounts that will not scale')
    audit_parser.add_argument('catalog_path', help='Catalog JSON file')

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command == 'validate':
            if not validate_catalog(args.catalog_path):
                return 1

        elif args.command == 'audit':
            audit_amounts(args.catalog_path)

    except RecipeAppError as e:
        print(f"❌ Error: {e.message}")
        return 1

    print("✅ Task completed successfully!")
    return 0


if __name__ == "__main__":
    exit(main())
