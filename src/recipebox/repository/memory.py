"""In-memory recipe repository for tests and local development."""

import itertools
import uuid
from datetime import datetime
from typing import Any

from recipebox.logging_config import get_logger
from recipebox.repository.base import ErrorKind, Result, filter_recipe_fields
from recipebox.schemas import RecipeRecord

logger = get_logger(__name__)


class InMemoryRecipeRepository:
    """Dict-backed RecipeRepository; data lives as long as the instance."""

    def __init__(self, recipes: list[RecipeRecord] | None = None):
        self._recipes: dict[str, RecipeRecord] = {}
        self._sequence: dict[str, int] = {}
        self._counter = itertools.count()
        for recipe in recipes or []:
            self._store(recipe)

    def _store(self, recipe: RecipeRecord) -> None:
        self._recipes[recipe.id] = recipe
        self._sequence.setdefault(recipe.id, next(self._counter))

    def _not_found(self, recipe_id: str) -> Result[Any]:
        return Result.failure(ErrorKind.NOT_FOUND, f"Recipe {recipe_id} not found")

    def _newest_first(self, recipes: list[RecipeRecord]) -> list[RecipeRecord]:
        return sorted(
            recipes,
            key=lambda r: (r.created_at or datetime.min, self._sequence[r.id]),
            reverse=True,
        )

    async def list_recipes(self, owner_id: str | None = None) -> Result[list[RecipeRecord]]:
        recipes = [
            recipe
            for recipe in self._recipes.values()
            if owner_id is None or recipe.created_by == owner_id
        ]
        return Result.success(self._newest_first(recipes))

    async def get_recipe(self, recipe_id: str) -> Result[RecipeRecord]:
        recipe = self._recipes.get(recipe_id)
        if recipe is None:
            return self._not_found(recipe_id)
        return Result.success(recipe)

    async def get_public_recipe(self, recipe_id: str) -> Result[RecipeRecord]:
        recipe = self._recipes.get(recipe_id)
        if recipe is None or not recipe.is_public:
            return self._not_found(recipe_id)
        return Result.success(recipe)

    async def create_recipe(self, data: dict[str, Any]) -> Result[RecipeRecord]:
        now = datetime.utcnow()
        recipe = RecipeRecord(
            id=str(uuid.uuid4()),
            created_at=now,
            updated_at=now,
            **filter_recipe_fields(data),
        )
        self._store(recipe)
        logger.info(f"Created recipe {recipe.id}")
        return Result.success(recipe)

    async def update_recipe(
        self, recipe_id: str, updates: dict[str, Any]
    ) -> Result[RecipeRecord]:
        recipe = self._recipes.get(recipe_id)
        if recipe is None:
            return self._not_found(recipe_id)

        changes = filter_recipe_fields(updates)
        changes["updated_at"] = datetime.utcnow()
        updated = recipe.model_copy(update=changes)
        self._store(updated)
        return Result.success(updated)

    async def delete_recipe(self, recipe_id: str) -> Result[bool]:
        if self._recipes.pop(recipe_id, None) is None:
            return self._not_found(recipe_id)
        self._sequence.pop(recipe_id, None)
        logger.info(f"Deleted recipe {recipe_id}")
        return Result.success(True)

    async def list_family_recipes(self, family_id: str) -> Result[list[RecipeRecord]]:
        recipes = [r for r in self._recipes.values() if r.family_id == family_id]
        return Result.success(self._newest_first(recipes))

    async def share_with_family(self, recipe_id: str, family_id: str) -> Result[RecipeRecord]:
        return await self.update_recipe(recipe_id, {"family_id": family_id})

    async def remove_from_family(self, recipe_id: str) -> Result[RecipeRecord]:
        return await self.update_recipe(recipe_id, {"family_id": None})
