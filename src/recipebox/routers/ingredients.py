"""API routes for parsing, formatting and grouping ingredient lines."""

from fastapi import APIRouter

from recipebox.logging_config import get_logger
from recipebox.normalize import format_ingredient, parse_ingredients
from recipebox.plan import generate_shopping_list
from recipebox.schemas import (
    IngredientLinesResponse,
    IngredientListRequest,
    IngredientParseRequest,
    IngredientParseResponse,
    IngredientSchema,
    ShoppingListResponse,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/ingredients", tags=["ingredients"])


def _entries(request: IngredientListRequest) -> list:
    """Request entries as parser input: dicts for records, strings as-is."""
    return [
        entry.model_dump() if isinstance(entry, IngredientSchema) else entry
        for entry in request.ingredients
    ]


@router.post("/parse", response_model=IngredientParseResponse)
async def parse(request: IngredientParseRequest) -> IngredientParseResponse:
    """
    Parse free-text ingredient lines into structured records.

    A single string is split on commas, semicolons and newlines; a list is
    parsed line by line. Blank lines are dropped.
    """
    parsed = parse_ingredients(request.text)
    logger.info(f"Parsed {len(parsed)} ingredients")

    return IngredientParseResponse(
        ingredients=[IngredientSchema(**item.to_dict()) for item in parsed],
        total=len(parsed),
    )


@router.post("/format", response_model=IngredientLinesResponse)
async def format_lines(request: IngredientListRequest) -> IngredientLinesResponse:
    """Render ingredients as display strings; plain strings pass through."""
    lines = [
        entry if isinstance(entry, str) else format_ingredient(entry)
        for entry in _entries(request)
    ]
    return IngredientLinesResponse(lines=lines)


@router.post("/shopping-list", response_model=ShoppingListResponse)
async def shopping_list(request: IngredientListRequest) -> ShoppingListResponse:
    """Group ingredients into grocery categories."""
    categories = generate_shopping_list(_entries(request))
    total_items = sum(len(category.items) for category in categories)
    logger.info(f"Generated shopping list with {total_items} items")

    return ShoppingListResponse(
        categories=[category.to_dict() for category in categories],
        total_items=total_items,
    )
