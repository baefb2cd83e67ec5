"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from recipebox.config import Settings
from recipebox.main import create_app

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (require external services)"
    )
    config.addinivalue_line("markers", "slow: marks tests as slow running")


# =============================================================================
# Ingredient Fixtures
# =============================================================================


@pytest.fixture
def stored_ingredients():
    """Ingredients as they are stored on a recipe after parsing."""
    return [
        {"quantity": "2", "unit": "cup", "name": "flour", "notes": "sifted",
         "original": "2 cups flour, sifted"},
        {"quantity": "3", "unit": "", "name": "eggs", "notes": "", "original": "3 eggs"},
        {"quantity": "1", "unit": "pound", "name": "chicken breast", "notes": "",
         "original": "1 lb chicken breast"},
        {"quantity": "1", "unit": "", "name": "onion", "notes": "diced",
         "original": "1 onion, diced"},
    ]


@pytest.fixture
def recipe_payload():
    """Valid create-recipe request body."""
    return {
        "title": "Pancakes",
        "description": "Sunday breakfast",
        "prep_time": "10 min",
        "cook_time": "15 min",
        "servings": "4",
        "ingredients": "2 cups flour\n2 eggs\n1 1/2 cups milk\n1 tbsp sugar",
        "instructions": ["Mix everything", "  ", "Fry in butter"],
        "tags": ["breakfast", "sweet", "breakfast"],
        "created_by": "user-1",
    }


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def app():
    """Application wired to the in-memory backend."""
    return create_app(Settings(repository_backend="memory"))


@pytest.fixture
def client(app):
    """Test client with the application lifespan running."""
    with TestClient(app) as test_client:
        yield test_client
