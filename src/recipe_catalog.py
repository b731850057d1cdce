#!/usr/bin/env python3
"""
Recipe Catalog
Static JSON recipe catalog with search and filtering, user-created recipes
and favorites persisted between runs.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Any
import logging

from app_config import setup_logging
from error_handling import CatalogLoadError, RecipeNotFoundError, RecipeValidationError
from recipe_models import Recipe, RecipeFilter, dump_recipe, load_recipes


class RecipeCatalog:
    """In-memory recipe catalog."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize recipe catalog.

        Args:
            config: Configuration dictionary (catalog_path, favorites_path,
                custom_recipes_path)
        """
        self.config = config or {}
        self.logger = self._setup_logging()

        self.catalog_path = self.config.get('catalog_path')
        self.favorites_path = self.config.get('favorites_path')
        self.custom_recipes_path = self.config.get('custom_recipes_path')

        self.recipes: List[Recipe] = []
        self.favorites: List[str] = []

        if self.favorites_path:
            self._load_favorites()

    def _setup_logging(self) -> logging.Logger:
        """Setup logging for catalog."""
        return setup_logging('recipe_catalog', self.config.get('log_level', 'INFO'))

    def load(self, catalog_path: Optional[str] = None) -> List[Recipe]:
        """
        Load recipes from a JSON catalog file.

        The file holds a list of recipe records, or an object with a
        "recipes" list.

        Args:
            catalog_path: Catalog file, defaults to the configured path

        Returns:
            Loaded recipes
        """
        path = catalog_path or self.catalog_path
        if not path:
            raise CatalogLoadError("No catalog path configured")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise CatalogLoadError(f"Catalog not found: {path}", details={'path': str(path)}) from e
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogLoadError(f"Failed to read catalog {path}: {e}", details={'path': str(path)}) from e

        records = data.get('recipes', []) if isinstance(data, dict) else data
        if not isinstance(records, list):
            raise CatalogLoadError(f"Catalog {path} does not contain a recipe list", details={'path': str(path)})

        recipes = load_recipes(records)
        for index, recipe in enumerate(recipes, 1):
            if not recipe.id:
                recipe.id = str(index)

        self.recipes = recipes + self._load_custom_recipes(recipes)
        self.catalog_path = path
        self._prune_favorites()
        self.logger.info(f"Loaded {len(self.recipes)} recipes and {len(self.favorites)} favorites")
        return list(self.recipes)

    def all_recipes(self) -> List[Recipe]:
        return list(self.recipes)

    def custom_recipes(self) -> List[Recipe]:
        return [recipe for recipe in self.recipes if recipe.is_custom]

    def find_recipe(self, recipe_id: str) -> Optional[Recipe]:
        """Find recipe by ID."""
        recipe_id = str(recipe_id)
        for recipe in self.recipes:
            if recipe.id == recipe_id:
                return recipe
        return None

    def get_recipe(self, recipe_id: str) -> Recipe:
        """Get recipe by ID or raise RecipeNotFoundError."""
        recipe = self.find_recipe(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(str(recipe_id))
        return recipe

    def filter_recipes(self, filters: Optional[RecipeFilter] = None,
                       search: Optional[str] = None) -> List[Recipe]:
        """
        Filter recipes by search text, category, difficulty, cook time and tags.

        Args:
            filters: Filter options
            search: Search text, overrides filters.search when given

        Returns:
            Matching recipes in catalog order
        """
        filters = filters or RecipeFilter()
        query = search if search is not None else filters.search
        results = list(self.recipes)

        if query and query.strip():
            query = query.strip().lower()
            results = [
                recipe for recipe in results
                if query in recipe.name.lower()
                or (recipe.description and query in recipe.description.lower())
                or any(query in tag.lower() for tag in recipe.tags)
            ]

        if filters.category:
            results = [recipe for recipe in results if recipe.category == filters.category]

        if filters.difficulty:
            results = [recipe for recipe in results if recipe.difficulty == filters.difficulty]

        if filters.max_cook_time:
            results = [recipe for recipe in results if recipe.cook_time <= filters.max_cook_time]

        if filters.tags:
            results = [
                recipe for recipe in results
                if any(tag in recipe.tags for tag in filters.tags)
            ]

        return results

    def categories(self) -> List[str]:
        """Distinct recipe categories."""
        return sorted({recipe.category for recipe in self.recipes if recipe.category})

    def add_custom_recipe(self, recipe: Recipe) -> Recipe:
        """
        Add a user-created recipe.

        Args:
            recipe: Validated recipe

        Returns:
            Stored recipe with its assigned ID
        """
        recipe.id = self._next_id()
        recipe.is_custom = True
        now = datetime.now().isoformat()
        recipe.created_at = recipe.created_at or now
        recipe.updated_at = now

        self.recipes.append(recipe)
        self._save_custom_recipes()
        self.logger.info(f"Added custom recipe: {recipe.name} (ID: {recipe.id})")
        return recipe

    def update_custom_recipe(self, recipe_id: str, recipe: Recipe) -> Recipe:
        """Replace a user-created recipe."""
        existing = self._get_custom_recipe(recipe_id)

        recipe.id = existing.id
        recipe.is_custom = True
        recipe.created_at = existing.created_at
        recipe.updated_at = datetime.now().isoformat()

        index = self.recipes.index(existing)
        self.recipes[index] = recipe
        self._save_custom_recipes()
        self.logger.info(f"Updated recipe: {recipe.name}")
        return recipe

    def delete_custom_recipe(self, recipe_id: str) -> None:
        """Delete a user-created recipe and drop it from favorites."""
        existing = self._get_custom_recipe(recipe_id)
        self.recipes.remove(existing)
        self._save_custom_recipes()

        if existing.id in self.favorites:
            self.favorites.remove(existing.id)
            self._save_favorites()

        self.logger.info(f"Deleted recipe: {existing.id}")

    def toggle_favorite(self, recipe_id: str) -> bool:
        """
        Toggle a recipe's favorite flag.

        Returns:
            True when the recipe is now a favorite
        """
        recipe = self.get_recipe(recipe_id)

        if recipe.id in self.favorites:
            self.favorites.remove(recipe.id)
            is_favorite = False
        else:
            self.favorites.append(recipe.id)
            is_favorite = True

        self._save_favorites()
        self.logger.info(f"{'Added to' if is_favorite else 'Removed from'} favorites: {recipe.id}")
        return is_favorite

    def is_favorite(self, recipe_id: str) -> bool:
        return str(recipe_id) in self.favorites

    def favorite_recipes(self) -> List[Recipe]:
        return [recipe for recipe in self.recipes if recipe.id in self.favorites]

    def _get_custom_recipe(self, recipe_id: str) -> Recipe:
        recipe = self.get_recipe(recipe_id)
        if not recipe.is_custom:
            raise RecipeValidationError(
                f"Recipe {recipe_id} is part of the catalog and cannot be modified",
                {'id': ['Only custom recipes can be modified']}
            )
        return recipe

    def _next_id(self) -> str:
        numeric_ids = [int(recipe.id) for recipe in self.recipes if recipe.id and recipe.id.isdigit()]
        return str(max(numeric_ids, default=0) + 1)

    def _load_favorites(self):
        path = Path(self.favorites_path)
        if not path.exists():
            return

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logger.warning(f"Failed to load favorites from {path}: {e}")
            return

        if isinstance(data, list):
            self.favorites = [str(recipe_id) for recipe_id in data]
        else:
            self.logger.warning(f"Ignoring malformed favorites file {path}")

    def _save_favorites(self):
        if not self.favorites_path:
            return

        path = Path(self.favorites_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.favorites, f, indent=2)

    def _prune_favorites(self):
        """Drop favorites whose recipe no longer exists."""
        known_ids = {recipe.id for recipe in self.recipes}
        stale = [recipe_id for recipe_id in self.favorites if recipe_id not in known_ids]
        if not stale:
            return

        self.favorites = [recipe_id for recipe_id in self.favorites if recipe_id in known_ids]
        self.logger.warning(f"Dropped favorites for missing recipes: {', '.join(stale)}")
        self._save_favorites()

    def _load_custom_recipes(self, catalog_recipes: List[Recipe]) -> List[Recipe]:
        if not self.custom_recipes_path:
            return []

        path = Path(self.custom_recipes_path)
        if not path.exists():
            return []

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logger.warning(f"Failed to load custom recipes from {path}: {e}")
            return []

        if not isinstance(data, list):
            self.logger.warning(f"Ignoring malformed custom recipes file {path}")
            return []

        catalog_ids = {recipe.id for recipe in catalog_recipes}
        custom = []
        for recipe in load_recipes(data):
            if not recipe.id or recipe.id in catalog_ids:
                self.logger.warning(f"Skipping custom recipe {recipe.name}: id {recipe.id} is taken")
                continue
            recipe.is_custom = True
            custom.append(recipe)
        return custom

    def _save_custom_recipes(self):
        if not self.custom_recipes_path:
            return

        path = Path(self.custom_recipes_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump([dump_recipe(recipe) for recipe in self.custom_recipes()], f, indent=2)
