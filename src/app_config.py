#!/usr/bin/env python3
"""
Application Configuration
Environment-driven defaults, optionally overridden by a JSON config file.
"""

import os
import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional


class AppConfig:
    """Configuration defaults for the recipe assistant."""

    # Catalog
    CATALOG_PATH = os.getenv("RECIPE_CATALOG_PATH", str(Path(__file__).parent.parent / "data" / "recipes.json"))
    FAVORITES_PATH = os.getenv("RECIPE_FAVORITES_PATH")
    CUSTOM_RECIPES_PATH = os.getenv("RECIPE_CUSTOM_RECIPES_PATH")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # API server
    API_HOST = os.getenv("API_HOST", "0.0.0.0")
    API_PORT = int(os.getenv("API_PORT", "5000"))

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        return {
            'catalog_path': cls.CATALOG_PATH,
            'favorites_path': cls.FAVORITES_PATH,
            'custom_recipes_path': cls.CUSTOM_RECIPES_PATH,
            'log_level': cls.LOG_LEVEL,
            'host': cls.API_HOST,
            'port': cls.API_PORT,
        }


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Build the configuration dictionary.

    Args:
        config_path: Optional JSON file whose keys override the defaults

    Returns:
        Configuration dictionary
    """
    config = AppConfig.as_dict()

    if config_path:
        try:
            with open(config_path, 'r') as f:
                custom_config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logging.getLogger(__name__).warning(f"Failed to load config from {config_path}: {e}")
            return config

        if isinstance(custom_config, dict):
            config.update(custom_config)
        else:
            logging.getLogger(__name__).warning(
                f"Ignoring config file {config_path}: expected a JSON object, "
                f"got {type(custom_config).__name__}"
            )

    return config


def setup_logging(name: str, level: str = "INFO") -> logging.Logger:
    """Named logger with a console handler."""
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
