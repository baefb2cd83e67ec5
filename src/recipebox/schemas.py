"""Request and response schemas for the recipebox API."""

import re
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

TIME_PATTERN = re.compile(r"^\d+\s*(min|hr|hour|hours?|mins?|minutes?)$", re.IGNORECASE)


def _clean_time(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if not TIME_PATTERN.match(value):
        raise ValueError('Please enter a valid time (e.g., "30 min", "1 hr")')
    return value


def _clean_title(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError("Title is required")
    return value


def _clean_servings(value: Any) -> Any:
    if value is None or isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return None
    if not text.isdigit():
        raise ValueError("Servings must be a number")
    return int(text)


def _clean_lines(values: list[str] | None) -> list[str] | None:
    if values is None:
        return None
    return [value.strip() for value in values if value.strip()]


def _clean_tags(values: list[str] | None) -> list[str] | None:
    if values is None:
        return None
    tags: list[str] = []
    for value in values:
        tag = value.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


# =============================================================================
# Ingredients
# =============================================================================


class IngredientSchema(BaseModel):
    """Structured ingredient as stored on a recipe."""

    model_config = ConfigDict(from_attributes=True)

    quantity: str = ""
    unit: str = ""
    name: str = ""
    notes: str = ""
    original: str = ""


class IngredientParseRequest(BaseModel):
    """Free text (split on commas, semicolons, newlines) or a list of lines."""

    text: str | list[str]


class IngredientParseResponse(BaseModel):
    """Parsed ingredients in input order."""

    ingredients: list[IngredientSchema]
    total: int


class IngredientListRequest(BaseModel):
    """Stored ingredient entries: structured records or plain strings."""

    ingredients: list[IngredientSchema | str] = Field(default_factory=list)


class IngredientLinesResponse(BaseModel):
    """One display or edit line per ingredient."""

    lines: list[str]


class ShoppingListItemSchema(BaseModel):
    """Single item in the shopping list."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    quantity: str
    unit: str
    original: str
    checked: bool = False


class ShoppingListCategorySchema(BaseModel):
    """Shopping list items for one grocery category."""

    model_config = ConfigDict(from_attributes=True)

    category: str
    items: list[ShoppingListItemSchema]


class ShoppingListResponse(BaseModel):
    """Categorized shopping list."""

    recipe_id: str | None = None
    categories: list[ShoppingListCategorySchema]
    total_items: int


# =============================================================================
# Recipes
# =============================================================================


class RecipeRecord(BaseModel):
    """Recipe as returned by a repository."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None = None
    image_url: str | None = None
    prep_time: str | None = None
    cook_time: str | None = None
    total_time: str | None = None
    servings: int | None = None
    source: str | None = None
    # Stored verbatim: structured dicts or plain strings
    ingredients: list[Any] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    is_public: bool = False
    family_id: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RecipeCreateRequest(BaseModel):
    """Request to create a recipe; ingredients are parsed before saving."""

    title: str = Field(min_length=1)
    description: str | None = None
    image_url: str | None = None
    prep_time: str | None = None
    cook_time: str | None = None
    total_time: str | None = None
    servings: int | None = Field(None, ge=0)
    source: str | None = None
    ingredients: str | list[str]
    instructions: list[str]
    tags: list[str] = Field(default_factory=list)
    is_public: bool = False
    family_id: str | None = None
    created_by: str | None = None

    check_title = field_validator("title")(_clean_title)
    check_times = field_validator("prep_time", "cook_time", "total_time")(_clean_time)
    check_servings = field_validator("servings", mode="before")(_clean_servings)
    check_instructions = field_validator("instructions")(_clean_lines)
    check_tags = field_validator("tags")(_clean_tags)

    @field_validator("ingredients")
    @classmethod
    def require_ingredient(cls, value: str | list[str]) -> str | list[str]:
        lines = [value] if isinstance(value, str) else value
        if not any(line.strip() for line in lines):
            raise ValueError("At least one ingredient is required")
        return value

    @field_validator("instructions")
    @classmethod
    def require_instruction(cls, value: list[str]) -> list[str]:
        if not any(line.strip() for line in value):
            raise ValueError("At least one instruction is required")
        return value


class RecipeUpdateRequest(BaseModel):
    """Partial recipe update; supplied ingredients are re-parsed."""

    title: str | None = Field(None, min_length=1)
    description: str | None = None
    image_url: str | None = None
    prep_time: str | None = None
    cook_time: str | None = None
    total_time: str | None = None
    servings: int | None = Field(None, ge=0)
    source: str | None = None
    ingredients: str | list[str] | None = None
    instructions: list[str] | None = None
    tags: list[str] | None = None
    is_public: bool | None = None

    check_title = field_validator("title")(_clean_title)
    check_times = field_validator("prep_time", "cook_time", "total_time")(_clean_time)
    check_servings = field_validator("servings", mode="before")(_clean_servings)
    check_instructions = field_validator("instructions")(_clean_lines)
    check_tags = field_validator("tags")(_clean_tags)


class RecipeListResponse(BaseModel):
    """List of recipes."""

    recipes: list[RecipeRecord]
    total: int


class ShareRecipeRequest(BaseModel):
    """Share a recipe with a family cookbook."""

    family_id: str = Field(min_length=1)


class RecipeIngredientLinesResponse(BaseModel):
    """Ingredient lines for a stored recipe."""

    recipe_id: str
    lines: list[str]
