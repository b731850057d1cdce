#!/usr/bin/env python3
"""
Test Suite for the Recipe Catalog
"""

import json
import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.append(str(Path(__file__).parent.parent / "src"))

from error_handling import CatalogLoadError, RecipeNotFoundError, RecipeValidationError
from recipe_catalog import RecipeCatalog
from recipe_models import RecipeFilter, load_recipe


def _names(recipes):
    return [recipe.name for recipe in recipes]


class TestLoading:

    def test_loads_sample_catalog(self, catalog):
        assert len(catalog.recipes) == 5
        assert catalog.get_recipe("2").name == "Classic Margherita Pizza"

    def test_accepts_plain_list(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([{"name": "Toast", "cook_time": 3}]))

        catalog = RecipeCatalog({'catalog_path': str(path)})
        recipes = catalog.load()

        assert recipes[0].id == "1"
        assert recipes[0].servings == 4

    def test_missing_file(self, tmp_path):
        catalog = RecipeCatalog({'catalog_path': str(tmp_path / "missing.json")})
        with pytest.raises(CatalogLoadError):
            catalog.load()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(CatalogLoadError):
            RecipeCatalog().load(str(path))

    def test_invalid_record(self, tmp_path):
        path = tmp_path / "invalid.json"
        path.write_text(json.dumps([{"name": "No cook time"}]))
        with pytest.raises(RecipeValidationError):
            RecipeCatalog().load(str(path))

    def test_unknown_recipe(self, catalog):
        assert catalog.find_recipe("999") is None
        with pytest.raises(RecipeNotFoundError):
            catalog.get_recipe("999")


class TestFiltering:

    def test_search_matches_name_description_and_tags(self, catalog):
        assert _names(catalog.filter_recipes(search="PIZZA")) == ["Classic Margherita Pizza"]
        assert _names(catalog.filter_recipes(search="chewy")) == ["Chocolate Chip Cookies"]
        assert _names(catalog.filter_recipes(search="asian")) == ["Beef Stir Fry"]

    def test_blank_search_returns_everything(self, catalog):
        assert len(catalog.filter_recipes(search="   ")) == 5

    def test_category_and_difficulty(self, catalog):
        filters = RecipeFilter(category="Dinner", difficulty="medium")
        assert _names(catalog.filter_recipes(filters)) == [
            "Spaghetti Carbonara", "Classic Margherita Pizza"
        ]

    def test_max_cook_time(self, catalog):
        assert _names(catalog.filter_recipes(RecipeFilter(max_cook_time=12))) == [
            "Chocolate Chip Cookies", "Avocado Toast"
        ]

    def test_tags_match_any(self, catalog):
        filters = RecipeFilter(tags=["Quick", "Baking"])
        assert _names(catalog.filter_recipes(filters)) == [
            "Classic Margherita Pizza", "Chocolate Chip Cookies", "Avocado Toast"
        ]

    def test_categories(self, catalog):
        assert catalog.categories() == ["Breakfast", "Dessert", "Dinner"]


class TestCustomRecipes:

    def _custom(self):
        return load_recipe({
            "name": "Lemonade",
            "cook_time": 0,
            "servings": 6,
            "ingredients": [{"name": "Lemons", "amount": "6"}],
        })

    def test_add_assigns_next_id(self, catalog):
        recipe = catalog.add_custom_recipe(self._custom())

        assert recipe.id == "6"
        assert recipe.is_custom
        assert recipe.created_at is not None
        assert catalog.custom_recipes() == [recipe]

    def test_update_keeps_id(self, catalog):
        added = catalog.add_custom_recipe(self._custom())
        replacement = self._custom()
        replacement.name = "Pink Lemonade"

        updated = catalog.update_custom_recipe(added.id, replacement)

        assert updated.id == added.id
        assert catalog.get_recipe(added.id).name == "Pink Lemonade"

    def test_catalog_recipes_are_read_only(self, catalog):
        with pytest.raises(RecipeValidationError):
            catalog.delete_custom_recipe("1")
        with pytest.raises(RecipeValidationError):
            catalog.update_custom_recipe("1", self._custom())

    def test_delete_removes_favorite(self, catalog):
        added = catalog.add_custom_recipe(self._custom())
        catalog.toggle_favorite(added.id)

        catalog.delete_custom_recipe(added.id)

        assert catalog.find_recipe(added.id) is None
        assert not catalog.is_favorite(added.id)


class TestFavorites:

    def test_toggle(self, catalog):
        assert catalog.toggle_favorite("3") is True
        assert catalog.is_favorite("3")
        assert _names(catalog.favorite_recipes()) == ["Chocolate Chip Cookies"]

        assert catalog.toggle_favorite("3") is False
        assert catalog.favorite_recipes() == []

    def test_toggle_unknown_recipe(self, catalog):
        with pytest.raises(RecipeNotFoundError):
            catalog.toggle_favorite("42")

    def test_favorites_persist(self, tmp_path, catalog_path):
        config = {'catalog_path': catalog_path, 'favorites_path': str(tmp_path / "favs" / "favorites.json")}

        first = RecipeCatalog(config)
        first.load()
        first.toggle_favorite("1")
        first.toggle_favorite("4")

        second = RecipeCatalog(config)
        second.load()
        assert _names(second.favorite_recipes()) == ["Spaghetti Carbonara", "Avocado Toast"]

    def test_malformed_favorites_file_ignored(self, tmp_path, catalog_path):
        path = tmp_path / "favorites.json"
        path.write_text("oops")

        catalog = RecipeCatalog({'catalog_path': catalog_path, 'favorites_path': str(path)})
        assert catalog.favorites == []

    def test_stale_favorites_dropped_on_load(self, tmp_path, catalog_path):
        path = tmp_path / "favorites.json"
        path.write_text(json.dumps(["2", "99"]))

        catalog = RecipeCatalog({'catalog_path': catalog_path, 'favorites_path': str(path)})
        catalog.load()

        assert catalog.favorites == ["2"]
        assert json.loads(path.read_text()) == ["2"]


class TestPersistenceAcrossRuns:

    def _custom(self, name):
        return load_recipe({
            "name": name,
            "cook_time": 5,
            "servings": 2,
            "ingredients": [{"name": "Milk", "amount": "1", "unit": "cup"}],
        })

    def test_custom_recipes_survive_restart(self, tmp_path, catalog_path):
        config = {
            'catalog_path': catalog_path,
            'favorites_path': str(tmp_path / "favorites.json"),
            'custom_recipes_path': str(tmp_path / "custom_recipes.json"),
        }

        first = RecipeCatalog(config)
        first.load()
        shake = first.add_custom_recipe(self._custom("Milkshake"))
        first.toggle_favorite(shake.id)

        second = RecipeCatalog(config)
        second.load()
        restored = second.get_recipe(shake.id)
        assert restored.name == "Milkshake"
        assert restored.is_custom
        assert second.is_favorite(shake.id)

        latte = second.add_custom_recipe(self._custom("Latte"))
        assert latte.id != shake.id
        assert not second.is_favorite(latte.id)
        assert second.favorites == [shake.id]

    def test_new_recipe_does_not_inherit_old_favorite(self, tmp_path, catalog_path):
        config = {'catalog_path': catalog_path, 'favorites_path': str(tmp_path / "favorites.json")}

        first = RecipeCatalog(config)
        first.load()
        first.toggle_favorite(first.add_custom_recipe(self._custom("Milkshake")).id)

        second = RecipeCatalog(config)
        second.load()
        latte = second.add_custom_recipe(self._custom("Latte"))

        assert not second.is_favorite(latte.id)
        assert second.favorites == []

    def test_deleted_custom_recipe_stays_deleted(self, tmp_path, catalog_path):
        config = {
            'catalog_path': catalog_path,
            'custom_recipes_path': str(tmp_path / "custom_recipes.json"),
        }

        first = RecipeCatalog(config)
        first.load()
        shake = first.add_custom_recipe(self._custom("Milkshake"))
        first.delete_custom_recipe(shake.id)

        second = RecipeCatalog(config)
        second.load()
        assert second.custom_recipes() == []

    def test_custom_recipe_with_catalog_id_skipped(self, tmp_path, catalog_path):
        path = tmp_path / "custom_recipes.json"
        path.write_text(json.dumps([{"id": "1", "name": "Impostor", "cook_time": 1}]))

        catalog = RecipeCatalog({'catalog_path': catalog_path, 'custom_recipes_path': str(path)})
        catalog.load()

        assert catalog.get_recipe("1").name == "Spaghetti Carbonara"
        assert catalog.custom_recipes() == []
