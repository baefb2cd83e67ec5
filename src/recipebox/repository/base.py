"""Recipe repository interface and result types."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from recipebox.schemas import RecipeRecord

T = TypeVar("T")

# Columns a caller may set on create/update
RECIPE_FIELDS = frozenset(
    {
        "title",
        "description",
        "image_url",
        "prep_time",
        "cook_time",
        "total_time",
        "servings",
        "source",
        "ingredients",
        "instructions",
        "tags",
        "is_public",
        "family_id",
        "created_by",
    }
)


class ErrorKind(str, Enum):
    """Why a data-access operation failed."""

    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    TIMEOUT = "timeout"
    CONFLICT = "conflict"
    UNKNOWN = "unknown"


class RepositoryError(Exception):
    """Raised by Result.unwrap() on a failed result."""

    def __init__(self, kind: ErrorKind, message: str = ""):
        super().__init__(message or kind.value)
        self.kind = kind
        self.message = message


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a repository call: a value or an error kind."""

    value: T | None = None
    error: ErrorKind | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind, message: str = "") -> "Result[T]":
        return cls(error=error, message=message)

    def unwrap(self) -> T:
        """Return the value or raise RepositoryError."""
        if self.error is not None:
            raise RepositoryError(self.error, self.message)
        return self.value  # type: ignore[return-value]


def filter_recipe_fields(data: dict[str, Any]) -> dict[str, Any]:
    """Keep only recipe columns callers are allowed to write."""
    return {key: value for key, value in data.items() if key in RECIPE_FIELDS}


@runtime_checkable
class RecipeRepository(Protocol):
    """Record-based access to stored recipes."""

    async def list_recipes(self, owner_id: str | None = None) -> Result[list[RecipeRecord]]:
        """Recipes created by a user (all recipes when owner_id is None), newest first."""
        ...

    async def get_recipe(self, recipe_id: str) -> Result[RecipeRecord]: ...

    async def get_public_recipe(self, recipe_id: str) -> Result[RecipeRecord]:
        """A recipe that has been published; NOT_FOUND otherwise."""
        ...

    async def create_recipe(self, data: dict[str, Any]) -> Result[RecipeRecord]: ...

    async def update_recipe(
        self, recipe_id: str, updates: dict[str, Any]
    ) -> Result[RecipeRecord]: ...

    async def delete_recipe(self, recipe_id: str) -> Result[bool]: ...

    async def list_family_recipes(self, family_id: str) -> Result[list[RecipeRecord]]:
        """Recipes shared with a family cookbook, newest first."""
        ...

    async def share_with_family(self, recipe_id: str, family_id: str) -> Result[RecipeRecord]: ...

    async def remove_from_family(self, recipe_id: str) -> Result[RecipeRecord]: ...
