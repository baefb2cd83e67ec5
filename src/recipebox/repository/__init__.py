"""Data access for recipe records."""

from recipebox.repository.base import (
    ErrorKind,
    RecipeRepository,
    RepositoryError,
    Result,
)
from recipebox.repository.memory import InMemoryRecipeRepository
from recipebox.repository.sql import SqlRecipeRepository

__all__ = [
    "ErrorKind",
    "InMemoryRecipeRepository",
    "RecipeRepository",
    "RepositoryError",
    "Result",
    "SqlRecipeRepository",
]
