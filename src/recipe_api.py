#!/usr/bin/env python3
"""
Recipe API Server
RESTful API for browsing the recipe catalog, serving-scaled recipe detail,
nutrition, cooking steps, custom recipes and favorites.
"""

from datetime import datetime
from typing import Dict, List, Optional, Any
import logging

from flask import Flask, request, jsonify
from flask_cors import CORS
from marshmallow import Schema, fields, validate, ValidationError

from app_config import load_config, setup_logging
from cooking_session import StepTimer
from error_handling import RecipeAppError
from recipe_catalog import RecipeCatalog
from recipe_detail import RecipeDetailRenderer
from recipe_models import dump_recipe, load_filter, load_recipe

API_VERSION = '1.0.0'


# API Schemas
class RecipeScalingSchema(Schema):
    """Schema for recipe scaling request."""
    target_servings = fields.Int(required=True, validate=validate.Range(min=1))


class RecipeAPI:
    """RESTful API server for the recipe assistant."""

    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 catalog: Optional[RecipeCatalog] = None):
        """
        Initialize Recipe API server.

        Args:
            config: Configuration dictionary
            catalog: Preloaded catalog, loaded from config['catalog_path'] when omitted
        """
        self.config = config or {}
        self.app = Flask(__name__)
        self.app.json.sort_keys = False

        CORS(self.app)

        self.logger = self._setup_logging()

        if catalog is None:
            catalog = RecipeCatalog(self.config)
            catalog.load()
        self.catalog = catalog
        self.renderer = RecipeDetailRenderer()

        self._register_routes()

        self.logger.info("Initialized Recipe API server")

    def _setup_logging(self) -> logging.Logger:
        """Setup logging for API server."""
        return setup_logging('recipe_api', self.config.get('log_level', 'INFO'))

    def _servings_arg(self) -> Optional[int]:
        return request.args.get('servings', type=int)

    def _filter_args(self) -> Dict[str, Any]:
        tags = request.args.get('tags', '')
        return {
            'search': request.args.get('q') or None,
            'category': request.args.get('category') or None,
            'difficulty': request.args.get('difficulty') or None,
            'max_cook_time': request.args.get('max_cook_time') or None,
            'tags': [tag.strip() for tag in tags.split(',') if tag.strip()],
        }

    def _summaries(self, recipes) -> List[Dict[str, Any]]:
        return [
            {**recipe.to_summary(), 'is_favorite': self.catalog.is_favorite(recipe.id)}
            for recipe in recipes
        ]

    def _register_routes(self):
        """Register API routes."""

        @self.app.route('/api/health', methods=['GET'])
        def health_check():
            """Health check endpoint."""
            return jsonify({
                'status': 'healthy',
                'timestamp': datetime.now().isoformat(),
                'version': API_VERSION,
                'recipes': len(self.catalog.recipes)
            })

        @self.app.route('/api/recipes', methods=['GET'])
        def list_recipes():
            """List recipes matching search and filter parameters."""
            filters = load_filter(self._filter_args())
            recipes = self.catalog.filter_recipes(filters)

            return jsonify({
                'recipes': self._summaries(recipes),
                'total': len(recipes)
            })

        @self.app.route('/api/categories', methods=['GET'])
        def list_categories():
            return jsonify({'categories': self.catalog.categories()})

        @self.app.route('/api/recipes/<recipe_id>', methods=['GET'])
        def get_recipe(recipe_id: str):
            """Get recipe detail scaled to the requested servings."""
            recipe = self.catalog.get_recipe(recipe_id)
            view = self.renderer.render(recipe, self._servings_arg())

            response = view.to_dict()
            response['is_favorite'] = self.catalog.is_favorite(recipe.id)
            return jsonify(response)

        @self.app.route('/api/recipes/<recipe_id>/scale', methods=['POST'])
        def scale_recipe(recipe_id: str):
            """Scale recipe."""
            schema = RecipeScalingSchema()
            try:
                data = schema.load(request.get_json(silent=True) or {})
            except ValidationError as e:
                return jsonify({'error': 'Invalid request', 'details': e.messages}), 400

            recipe = self.catalog.get_recipe(recipe_id)
            view = self.renderer.render(recipe, data['target_servings'])

            return jsonify({
                'success': True,
                'recipe_id': recipe.id,
                'base_servings': view.base_servings,
                'target_servings': view.target_servings,
                'scaling_factor': view.scaling_factor,
                'scaled_ingredients': [
                    {
                        'id': line.id,
                        'name': line.name,
                        'original_amount': line.original_amount,
                        'amount': line.amount,
                        'unit': line.unit,
                        'display_text': line.display_text
                    }
                    for line in view.ingredients
                ],
                'nutrition': {row.key: row.display for row in view.nutrition}
            })

        @self.app.route('/api/recipes/<recipe_id>/nutrition', methods=['GET'])
        def get_nutrition(recipe_id: str):
            """Get nutrition values scaled to the requested servings."""
            recipe = self.catalog.get_recipe(recipe_id)
            view = self.renderer.render(recipe, self._servings_arg())

            return jsonify({
                'recipe_id': recipe.id,
                'target_servings': view.target_servings,
                'nutrition': [
                    {'key': row.key, 'value': row.value, 'display': row.display}
                    for row in view.nutrition
                ]
            })

        @self.app.route('/api/recipes/<recipe_id>/steps', methods=['GET'])
        def get_steps(recipe_id: str):
            """Cooking mode steps with timer durations."""
            recipe = self.catalog.get_recipe(recipe_id)

            return jsonify({
                'recipe_id': recipe.id,
                'steps': [
                    {
                        'id': step.id,
                        'step_number': step.step_number,
                        'description': step.description,
                        'temperature': step.temperature,
                        'timer_seconds': StepTimer(step.duration).duration_seconds
                    }
                    for step in recipe.sorted_steps()
                ]
            })

        @self.app.route('/api/recipes', methods=['POST'])
        def add_recipe():
            """Add a custom recipe."""
            recipe = load_recipe(request.get_json(silent=True) or {})
            stored = self.catalog.add_custom_recipe(recipe)
            return jsonify(dump_recipe(stored)), 201

        @self.app.route('/api/recipes/<recipe_id>', methods=['PUT'])
        def update_recipe(recipe_id: str):
            """Replace a custom recipe."""
            recipe = load_recipe(request.get_json(silent=True) or {})
            stored = self.catalog.update_custom_recipe(recipe_id, recipe)
            return jsonify(dump_recipe(stored))

        @self.app.route('/api/recipes/<recipe_id>', methods=['DELETE'])
        def delete_recipe(recipe_id: str):
            """Delete a custom recipe."""
            self.catalog.delete_custom_recipe(recipe_id)
            return jsonify({'success': True})

        @self.app.route('/api/favorites', methods=['GET'])
        def list_favorites():
            recipes = self.catalog.favorite_recipes()
            return jsonify({
                'recipes': self._summaries(recipes),
                'total': len(recipes)
            })

        @self.app.route('/api/favorites/<recipe_id>', methods=['POST'])
        def toggle_favorite(recipe_id: str):
            is_favorite = self.catalog.toggle_favorite(recipe_id)
            return jsonify({'recipe_id': recipe_id, 'is_favorite': is_favorite})

        # Error handlers
        @self.app.errorhandler(RecipeAppError)
        def recipe_error(e):
            if e.status_code >= 500:
                self.logger.error(f"{e.error_code}: {e.message}")
            return jsonify(e.to_dict()), e.status_code

        @self.app.errorhandler(404)
        def not_found(e):
            return jsonify({'error': 'Endpoint not found'}), 404

        @self.app.errorhandler(405)
        def method_not_allowed(e):
            return jsonify({'error': 'Method not allowed'}), 405

        @self.app.errorhandler(500)
        def internal_error(e):
            return jsonify({'error': 'Internal server error'}), 500

    def run(self, host: str = '0.0.0.0', port: int = 5000, debug: bool = False):
        """
        Run the API server.

        Args:
            host: Host address
            port: Port number
            debug: Debug mode
        """
        self.logger.info(f"Starting Recipe API server on {host}:{port}")
        self.app.run(host=host, port=port, debug=debug)


def main():
    """Main API server script."""
    import argparse

    parser = argparse.ArgumentParser(description='Recipe API server')
    parser.add_argument('--host', help='Host address')
    parser.add_argument('--port', type=int, help='Port number')
    parser.add_argument('--debug', action='store_true', help='Debug mode')
    parser.add_argument('--config', help='Configuration file (JSON)')
    parser.add_argument('--catalog', help='Recipe catalog JSON file')

    args = parser.parse_args()

    config = load_config(args.config)
    if args.catalog:
        config['catalog_path'] = args.catalog

    api = RecipeAPI(config)
    api.run(host=args.host or config['host'], port=args.port or config['port'], debug=args.debug)


if __name__ == "__main__":
    main()
