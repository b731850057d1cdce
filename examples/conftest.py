import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.append(str(Path(__file__).parent.parent / "src"))

from recipe_catalog import RecipeCatalog

CATALOG_PATH = Path(__file__).parent.parent / "data" / "recipes.json"


@pytest.fixture
def catalog_path():
    return str(CATALOG_PATH)


@pytest.fixture
def catalog(tmp_path, catalog_path):
    recipe_catalog = RecipeCatalog({
        'catalog_path': catalog_path,
        'favorites_path': str(tmp_path / "favorites.json"),
    })
    recipe_catalog.load()
    return recipe_catalog
