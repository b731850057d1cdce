#!/usr/bin/env python3
"""
Test Suite for the Serving-Scaled Recipe Detail View
"""

import json
import sys
from pathlib import Path

# Add src to path
sys.path.append(str(Path(__file__).parent.parent / "src"))

from recipe_detail import (
    RecipeDetailRenderer, ServingsSelector, format_view, ingredient_display_text, main
)
from recipe_models import load_recipe


class TestServingsSelector:

    def test_starts_at_recipe_servings(self):
        assert ServingsSelector(6).current == 6

    def test_defaults_when_recipe_has_no_servings(self):
        assert ServingsSelector(0).current == 4
        assert ServingsSelector(None).current == 4

    def test_stepper_never_goes_below_one(self):
        selector = ServingsSelector(2)
        assert selector.decrement() == 1
        assert selector.decrement() == 1
        assert selector.increment() == 2
        assert selector.set(-5) == 1

    def test_adjust_by_multiplier(self):
        selector = ServingsSelector(3)
        assert selector.adjust(1.5) == 5
        assert selector.adjust(0.1) == 1
        assert selector.reset() == 3


class TestRenderer:

    def test_doubles_pizza(self, catalog):
        view = RecipeDetailRenderer().render(catalog.get_recipe("2"), 8)

        assert view.scaling_factor == 2
        assert [line.display_text for line in view.ingredients] == [
            "2 ball Pizza dough",
            "1 cup Tomato sauce",
            "16 oz Fresh mozzarella",
            "20-24 leaves Fresh basil leaves",
            "4 tbsp Olive oil",
            "a pinch Salt",
        ]
        assert {row.key: row.display for row in view.nutrition} == {
            "calories": "640cal",
            "protein": "30g",
            "carbs": "70g",
            "fat": "24g",
            "sodium": "1280mg",
        }

    def test_always_scales_from_base_amounts(self, catalog):
        recipe = catalog.get_recipe("1")
        renderer = RecipeDetailRenderer()

        renderer.render(recipe, 8)
        view = renderer.render(recipe, 4)

        assert view.ingredients[0].amount == "400"
        assert recipe.ingredients[0].amount == "200"

    def test_default_servings_leave_amounts_unscaled(self, catalog):
        view = RecipeDetailRenderer().render(catalog.get_recipe("3"))

        assert view.target_servings == 24
        assert view.ingredients[0].amount == "2.25"
        assert view.ingredients[2].amount == "0.75"

    def test_target_servings_clamped(self, catalog):
        view = RecipeDetailRenderer().render(catalog.get_recipe("4"), 0)
        assert view.target_servings == 1
        assert view.ingredients[0].display_text == "2 slices Bread slices"

    def test_steps_sorted(self, catalog):
        view = RecipeDetailRenderer().render(catalog.get_recipe("3"), 12)
        assert [step.step_number for step in view.steps] == [1, 2, 3, 4]

    def test_unknown_nutrition_key(self):
        recipe = load_recipe({
            "name": "Broth", "cook_time": 60, "servings": 2,
            "nutrition": {"cholesterol": 15},
        })
        view = RecipeDetailRenderer().render(recipe, 3)
        assert view.nutrition[0].display == "23"

    def test_display_text_without_amount_or_unit(self):
        assert ingredient_display_text(None, "cup", "Water") == "Water"
        assert ingredient_display_text("3", None, "Eggs") == "3 Eggs"


class TestFormatting:

    def test_text(self, catalog):
        view = RecipeDetailRenderer().render(catalog.get_recipe("1"), 4)
        output = format_view(view, "text")

        assert "Servings: 4 (recipe serves 2)" in output
        assert "• 400 g Spaghetti" in output
        assert "• to taste Black pepper" in output
        assert "1. Boil pasta until al dente. (10 min)" in output
        assert "• calories: 1200cal" in output

    def test_markdown(self, catalog):
        view = RecipeDetailRenderer().render(catalog.get_recipe("1"), 1)
        output = format_view(view, "markdown")

        assert output.startswith("# Spaghetti Carbonara")
        assert "*Scaled from 2 to 1 servings*" in output
        assert "- 100 g Spaghetti" in output
        assert "| fat | 10g |" in output

    def test_json(self, catalog):
        view = RecipeDetailRenderer().render(catalog.get_recipe("5"), 2)
        data = json.loads(format_view(view, "json"))

        assert data["target_servings"] == 2
        assert data["ingredients"][3]["amount"] == "1.5-2"


class TestCommandLine:

    def test_main_writes_output(self, tmp_path, catalog_path, monkeypatch):
        output = tmp_path / "recipe.md"
        monkeypatch.setattr(sys, "argv", [
            "recipe_detail", "--catalog", catalog_path, "--recipe-id", "3",
            "--servings", "12", "--format", "markdown", "--output", str(output)
        ])

        assert main() == 0
        assert "- 1.13 cups All-purpose flour" in output.read_text()

    def test_main_unknown_recipe(self, catalog_path, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["recipe_detail", "--catalog", catalog_path, "--recipe-id", "99"])

        assert main() == 1
        assert "Recipe not found" in capsys.readouterr().err
