#!/usr/bin/env python3
"""
Recipe Data Models
Typed recipe, ingredient, step and filter records, validated with marshmallow
schemas at the data-access boundary before any value reaches the scaler.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

from marshmallow import Schema, fields, validate, pre_load, post_load, EXCLUDE, ValidationError

from error_handling import RecipeValidationError

DIFFICULTIES = ["easy", "medium", "hard"]
DEFAULT_SERVINGS = 4


@dataclass
class Ingredient:
    """Ingredient line as authored for the recipe's base servings."""
    id: str
    name: str
    amount: str
    unit: Optional[str] = None


@dataclass
class CookingStep:
    """Single cooking instruction."""
    id: str
    step_number: int
    description: str
    duration: Optional[float] = None  # minutes
    temperature: Optional[str] = None


@dataclass
class Recipe:
    """Complete recipe record."""
    id: Optional[str]
    name: str
    cook_time: int  # minutes
    servings: int = DEFAULT_SERVINGS
    ingredients: List[Ingredient] = field(default_factory=list)
    steps: List[CookingStep] = field(default_factory=list)
    description: Optional[str] = None
    image: Optional[str] = None
    prep_time: Optional[int] = None
    difficulty: str = "medium"
    category: Optional[str] = None
    nutrition: Optional[Dict[str, float]] = None
    tags: List[str] = field(default_factory=list)
    is_custom: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def sorted_steps(self) -> List[CookingStep]:
        return sorted(self.steps, key=lambda step: step.step_number)

    def to_summary(self) -> Dict[str, Any]:
        """Compact representation for recipe listings."""
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'image': self.image,
            'cook_time': self.cook_time,
            'prep_time': self.prep_time,
            'servings': self.servings,
            'difficulty': self.difficulty,
            'category': self.category,
            'tags': list(self.tags),
            'is_custom': self.is_custom,
        }


@dataclass
class RecipeFilter:
    """Catalog filter options."""
    search: Optional[str] = None
    category: Optional[str] = None
    difficulty: Optional[str] = None
    max_cook_time: Optional[int] = None
    tags: List[str] = field(default_factory=list)


def amount_to_text(amount: Any) -> Any:
    """Render numeric amounts from loosely typed sources as display strings."""
    if isinstance(amount, bool):
        return amount
    if isinstance(amount, int):
        return str(amount)
    if isinstance(amount, float):
        return str(int(amount)) if amount.is_integer() else repr(amount)
    return amount


def _id_to_text(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return amount_to_text(value)
    return value


class IngredientSchema(Schema):
    """Schema for an ingredient record."""

    class Meta:
        unknown = EXCLUDE

    id = fields.Str(required=True)
    name = fields.Str(required=True, validate=validate.Length(min=1, error="Ingredient name is required"))
    amount = fields.Str(required=True, validate=validate.Length(min=1, error="Amount is required"))
    unit = fields.Str(load_default=None, allow_none=True)

    @pre_load
    def normalize(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if 'amount' in data:
            data['amount'] = amount_to_text(data['amount'])
        if 'id' in data:
            data['id'] = _id_to_text(data['id'])
        if data.get('unit') == "":
            data['unit'] = None
        return data

    @post_load
    def make_ingredient(self, data, **kwargs):
        return Ingredient(**data)


class CookingStepSchema(Schema):
    """Schema for a cooking step record."""

    class Meta:
        unknown = EXCLUDE

    id = fields.Str(required=True)
    step_number = fields.Int(required=True, validate=validate.Range(min=1))
    description = fields.Str(required=True, validate=validate.Length(min=1, error="Step description is required"))
    duration = fields.Float(load_default=None, allow_none=True, validate=validate.Range(min=0))
    temperature = fields.Str(load_default=None, allow_none=True)

    @pre_load
    def normalize(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if 'id' in data:
            data['id'] = _id_to_text(data['id'])
        return data

    @post_load
    def make_step(self, data, **kwargs):
        return CookingStep(**data)


class RecipeSchema(Schema):
    """Schema for a full recipe record."""

    class Meta:
        unknown = EXCLUDE

    id = fields.Str(load_default=None, allow_none=True)
    name = fields.Str(required=True, validate=validate.Length(min=1, error="Recipe name is required"))
    description = fields.Str(load_default=None, allow_none=True)
    image = fields.Str(load_default=None, allow_none=True)
    cook_time = fields.Int(required=True, validate=validate.Range(min=0))
    prep_time = fields.Int(load_default=None, allow_none=True, validate=validate.Range(min=0))
    servings = fields.Int(load_default=DEFAULT_SERVINGS, validate=validate.Range(min=1))
    difficulty = fields.Str(load_default="medium", validate=validate.OneOf(DIFFICULTIES))
    category = fields.Str(load_default=None, allow_none=True)
    ingredients = fields.List(fields.Nested(IngredientSchema), load_default=list)
    steps = fields.List(fields.Nested(CookingStepSchema), load_default=list)
    nutrition = fields.Dict(keys=fields.Str(), values=fields.Float(validate=validate.Range(min=0)),
                            load_default=None, allow_none=True)
    tags = fields.List(fields.Str(), load_default=list)
    is_custom = fields.Bool(load_default=False)
    created_at = fields.Str(load_default=None, allow_none=True)
    updated_at = fields.Str(load_default=None, allow_none=True)

    @pre_load
    def normalize(self, data, **kwargs):
        """Fill defaults the way records from the local database are read."""
        if not isinstance(data, dict):
            return data
        data = dict(data)

        if 'id' in data:
            data['id'] = _id_to_text(data['id'])

        if 'steps' not in data and 'instructions' in data:
            data['steps'] = data.pop('instructions')

        if not data.get('servings'):
            data.pop('servings', None)

        difficulty = data.get('difficulty')
        if isinstance(difficulty, str):
            data['difficulty'] = difficulty.lower()
        elif difficulty is None:
            data.pop('difficulty', None)

        if data.get('tags') is None:
            data.pop('tags', None)

        ingredients = data.get('ingredients')
        if isinstance(ingredients, list):
            data['ingredients'] = [
                {**ing, 'id': ing.get('id') if ing.get('id') is not None else f"ing_{index}"}
                if isinstance(ing, dict) else ing
                for index, ing in enumerate(ingredients)
            ]

        steps = data.get('steps')
        if isinstance(steps, list):
            normalized_steps = []
            for index, step in enumerate(steps):
                if isinstance(step, dict):
                    step = dict(step)
                    if step.get('id') is None:
                        step['id'] = f"step_{index}"
                    if step.get('step_number') is None:
                        step['step_number'] = index + 1
                normalized_steps.append(step)
            data['steps'] = normalized_steps

        nutrition = data.get('nutrition')
        if isinstance(nutrition, dict):
            data['nutrition'] = {key: value for key, value in nutrition.items() if value is not None}

        return data

    @post_load
    def make_recipe(self, data, **kwargs):
        return Recipe(**data)


class RecipeFilterSchema(Schema):
    """Schema for catalog filter parameters."""

    class Meta:
        unknown = EXCLUDE

    search = fields.Str(load_default=None, allow_none=True)
    category = fields.Str(load_default=None, allow_none=True)
    difficulty = fields.Str(load_default=None, allow_none=True, validate=validate.OneOf(DIFFICULTIES))
    max_cook_time = fields.Int(load_default=None, allow_none=True, validate=validate.Range(min=0))
    tags = fields.List(fields.Str(), load_default=list)

    @post_load
    def make_filter(self, data, **kwargs):
        return RecipeFilter(**data)


def load_recipe(data: Dict[str, Any]) -> Recipe:
    """
    Validate and load a single recipe record.

    Raises:
        RecipeValidationError: If the record does not match the schema
    """
    try:
        return RecipeSchema().load(data)
    except ValidationError as e:
        raise RecipeValidationError("Invalid recipe data", e.messages) from e


def load_recipes(records: List[Dict[str, Any]]) -> List[Recipe]:
    """Validate and load a list of recipe records."""
    try:
        return RecipeSchema(many=True).load(records)
    except ValidationError as e:
        raise RecipeValidationError("Invalid recipe data", e.messages) from e


def load_filter(data: Dict[str, Any]) -> RecipeFilter:
    """Validate filter parameters."""
    try:
        return RecipeFilterSchema().load(data)
    except ValidationError as e:
        raise RecipeValidationError("Invalid filter", e.messages) from e


def dump_recipe(recipe: Recipe) -> Dict[str, Any]:
    """Serialize a recipe to a JSON-compatible dictionary."""
    return RecipeSchema().dump(recipe)
