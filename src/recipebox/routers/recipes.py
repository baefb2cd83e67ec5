"""API routes for stored recipes and family cookbooks."""

from typing import Annotated, Any, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from recipebox.logging_config import LoggingContext, get_logger
from recipebox.normalize import format_ingredient, ingredients_to_strings, parse_ingredients
from recipebox.plan import generate_shopping_list
from recipebox.repository import ErrorKind, RecipeRepository, Result
from recipebox.schemas import (
    RecipeCreateRequest,
    RecipeIngredientLinesResponse,
    RecipeListResponse,
    RecipeRecord,
    RecipeUpdateRequest,
    ShareRecipeRequest,
    ShoppingListResponse,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])

T = TypeVar("T")

ERROR_STATUS = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorKind.TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.UNKNOWN: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

ERROR_DETAIL = {
    ErrorKind.NOT_FOUND: "Recipe not found",
    ErrorKind.PERMISSION_DENIED: "Not allowed to access this recipe",
    ErrorKind.TIMEOUT: "Recipe store timed out",
    ErrorKind.CONFLICT: "Recipe conflicts with existing data",
    ErrorKind.UNKNOWN: "Failed to access recipe store",
}

# An explicit null for these is ignored on update
NON_NULL_FIELDS = frozenset({"title", "ingredients", "instructions", "tags", "is_public"})


def get_repository(request: Request) -> RecipeRepository:
    """Repository built by the application lifespan."""
    return request.app.state.recipe_repository


Repository = Annotated[RecipeRepository, Depends(get_repository)]


def unwrap_or_raise(result: Result[T]) -> T:
    """Return a successful value or raise the matching HTTPException."""
    if result.ok:
        return result.value  # type: ignore[return-value]

    kind = result.error or ErrorKind.UNKNOWN
    if kind is ErrorKind.UNKNOWN:
        logger.error(f"Repository failure: {result.message}")
    raise HTTPException(status_code=ERROR_STATUS[kind], detail=ERROR_DETAIL[kind])


def _stored_ingredients(text: str | list[str]) -> list[dict[str, str]]:
    return [ingredient.to_dict() for ingredient in parse_ingredients(text)]


# =============================================================================
# Collections
# =============================================================================


@router.get("", response_model=RecipeListResponse)
async def list_recipes(
    repository: Repository,
    owner_id: Annotated[str | None, Query(description="Only recipes created by this user")] = None,
) -> RecipeListResponse:
    """List recipes, newest first."""
    recipes = unwrap_or_raise(await repository.list_recipes(owner_id))
    return RecipeListResponse(recipes=recipes, total=len(recipes))


@router.get("/families/{family_id}", response_model=RecipeListResponse)
async def list_family_recipes(family_id: str, repository: Repository) -> RecipeListResponse:
    """Recipes shared with a family cookbook."""
    recipes = unwrap_or_raise(await repository.list_family_recipes(family_id))
    return RecipeListResponse(recipes=recipes, total=len(recipes))


@router.get("/public/{recipe_id}", response_model=RecipeRecord)
async def get_public_recipe(recipe_id: str, repository: Repository) -> RecipeRecord:
    """A published recipe; unpublished ones are reported as missing."""
    return unwrap_or_raise(await repository.get_public_recipe(recipe_id))


# =============================================================================
# Single recipe
# =============================================================================


@router.post("", response_model=RecipeRecord, status_code=status.HTTP_201_CREATED)
async def create_recipe(request: RecipeCreateRequest, repository: Repository) -> RecipeRecord:
    """
    Create a recipe.

    Ingredient text is parsed into structured records before saving, so the
    stored recipe always carries quantity, unit, name and notes per line.
    """
    data = request.model_dump()
    data["ingredients"] = _stored_ingredients(request.ingredients)

    recipe = unwrap_or_raise(await repository.create_recipe(data))
    logger.info(f"Created recipe {recipe.id} with {len(recipe.ingredients)} ingredients")
    return recipe


@router.get("/{recipe_id}", response_model=RecipeRecord)
async def get_recipe(recipe_id: str, repository: Repository) -> RecipeRecord:
    """Get a single recipe."""
    return unwrap_or_raise(await repository.get_recipe(recipe_id))


@router.patch("/{recipe_id}", response_model=RecipeRecord)
async def update_recipe(
    recipe_id: str,
    request: RecipeUpdateRequest,
    repository: Repository,
) -> RecipeRecord:
    """Update the supplied fields; new ingredient text is re-parsed."""
    updates: dict[str, Any] = {
        key: value
        for key, value in request.model_dump(exclude_unset=True).items()
        if value is not None or key not in NON_NULL_FIELDS
    }
    if "ingredients" in updates:
        updates["ingredients"] = _stored_ingredients(updates["ingredients"])

    with LoggingContext(recipe_id=recipe_id):
        logger.info(f"Updating fields: {sorted(updates)}")
        return unwrap_or_raise(await repository.update_recipe(recipe_id, updates))


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(recipe_id: str, repository: Repository) -> None:
    """Delete a recipe."""
    with LoggingContext(recipe_id=recipe_id):
        unwrap_or_raise(await repository.delete_recipe(recipe_id))


# =============================================================================
# Derived views
# =============================================================================


@router.get("/{recipe_id}/shopping-list", response_model=ShoppingListResponse)
async def get_shopping_list(recipe_id: str, repository: Repository) -> ShoppingListResponse:
    """Categorized shopping list built from the recipe's stored ingredients."""
    recipe = unwrap_or_raise(await repository.get_recipe(recipe_id))
    categories = generate_shopping_list(recipe.ingredients)

    return ShoppingListResponse(
        recipe_id=recipe.id,
        categories=[category.to_dict() for category in categories],
        total_items=sum(len(category.items) for category in categories),
    )


@router.get("/{recipe_id}/edit-form", response_model=RecipeIngredientLinesResponse)
async def get_edit_lines(recipe_id: str, repository: Repository) -> RecipeIngredientLinesResponse:
    """Ingredient lines for pre-filling an edit form."""
    recipe = unwrap_or_raise(await repository.get_recipe(recipe_id))
    return RecipeIngredientLinesResponse(
        recipe_id=recipe.id,
        lines=ingredients_to_strings(recipe.ingredients),
    )


@router.get("/{recipe_id}/ingredients/display", response_model=RecipeIngredientLinesResponse)
async def get_display_lines(
    recipe_id: str, repository: Repository
) -> RecipeIngredientLinesResponse:
    """Ingredient lines for display; legacy string entries are shown verbatim."""
    recipe = unwrap_or_raise(await repository.get_recipe(recipe_id))
    lines = [
        entry if isinstance(entry, str) else format_ingredient(entry)
        for entry in recipe.ingredients
    ]
    return RecipeIngredientLinesResponse(recipe_id=recipe.id, lines=lines)


# =============================================================================
# Family sharing
# =============================================================================


@router.post("/{recipe_id}/share", response_model=RecipeRecord)
async def share_recipe(
    recipe_id: str,
    request: ShareRecipeRequest,
    repository: Repository,
) -> RecipeRecord:
    """Share a recipe with a family cookbook."""
    with LoggingContext(recipe_id=recipe_id):
        logger.info(f"Sharing with family {request.family_id}")
        return unwrap_or_raise(
            await repository.share_with_family(recipe_id, request.family_id)
        )


@router.delete("/{recipe_id}/share", response_model=RecipeRecord)
async def unshare_recipe(recipe_id: str, repository: Repository) -> RecipeRecord:
    """Remove a recipe from its family cookbook."""
    with LoggingContext(recipe_id=recipe_id):
        return unwrap_or_raise(await repository.remove_from_family(recipe_id))
