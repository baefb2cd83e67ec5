"""SQLAlchemy-backed recipe repository."""

import asyncio
import uuid
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import (
    DBAPIError,
    IntegrityError,
    NoResultFound,
    SQLAlchemyError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from recipebox.logging_config import get_logger
from recipebox.models import Recipe
from recipebox.repository.base import ErrorKind, Result, filter_recipe_fields
from recipebox.schemas import RecipeRecord

logger = get_logger(__name__)

T = TypeVar("T")

# PostgreSQL SQLSTATE codes
INSUFFICIENT_PRIVILEGE = "42501"
QUERY_CANCELED = "57014"


def _sqlstate(exc: DBAPIError) -> str | None:
    """Extract the SQLSTATE from a driver error (asyncpg or psycopg)."""
    orig = exc.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


class SqlRecipeRepository:
    """RecipeRepository over an async SQLAlchemy session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def _run(
        self,
        operation: str,
        func: Callable[[AsyncSession], Awaitable[T]],
        commit: bool = False,
    ) -> Result[T]:
        """Run one unit of work and translate failures into a Result."""
        try:
            async with self.session_factory() as session:
                value = await func(session)
                if commit:
                    await session.commit()
                return Result.success(value)
        except NoResultFound:
            return Result.failure(ErrorKind.NOT_FOUND, "Recipe not found")
        except IntegrityError as e:
            logger.warning(f"{operation} conflicted: {e.orig}")
            return Result.failure(ErrorKind.CONFLICT, str(e.orig))
        except (asyncio.TimeoutError, TimeoutError, PoolTimeoutError) as e:
            logger.warning(f"{operation} timed out: {e}")
            return Result.failure(ErrorKind.TIMEOUT, f"{operation} timed out")
        except DBAPIError as e:
            sqlstate = _sqlstate(e)
            if sqlstate == INSUFFICIENT_PRIVILEGE:
                logger.warning(f"{operation} denied: {e.orig}")
                return Result.failure(ErrorKind.PERMISSION_DENIED, str(e.orig))
            if sqlstate == QUERY_CANCELED:
                logger.warning(f"{operation} canceled by statement timeout")
                return Result.failure(ErrorKind.TIMEOUT, f"{operation} timed out")
            logger.error(f"{operation} failed: {e}")
            return Result.failure(ErrorKind.UNKNOWN, str(e))
        except SQLAlchemyError as e:
            logger.error(f"{operation} failed: {e}")
            return Result.failure(ErrorKind.UNKNOWN, str(e))
        except OSError as e:
            # Driver connection errors are not always wrapped by SQLAlchemy
            logger.error(f"{operation} could not reach the database: {e}")
            return Result.failure(ErrorKind.UNKNOWN, f"Database unavailable: {e}")
        except Exception as e:
            logger.exception(f"{operation} failed unexpectedly: {e}")
            return Result.failure(ErrorKind.UNKNOWN, str(e))

    @staticmethod
    async def _load(session: AsyncSession, recipe_id: str, public_only: bool = False) -> Recipe:
        query = select(Recipe).where(Recipe.id == recipe_id)
        if public_only:
            query = query.where(Recipe.is_public.is_(True))
        result = await session.execute(query)
        return result.scalar_one()

    async def _list(self, operation: str, *criteria: Any) -> Result[list[RecipeRecord]]:
        async def op(session: AsyncSession) -> list[RecipeRecord]:
            query = select(Recipe).order_by(Recipe.created_at.desc())
            if criteria:
                query = query.where(*criteria)
            result = await session.execute(query)
            return [RecipeRecord.model_validate(row) for row in result.scalars().all()]

        return await self._run(operation, op)

    # =========================================================================
    # Queries
    # =========================================================================

    async def list_recipes(self, owner_id: str | None = None) -> Result[list[RecipeRecord]]:
        if owner_id is None:
            return await self._list("list_recipes")
        return await self._list("list_recipes", Recipe.created_by == owner_id)

    async def get_recipe(self, recipe_id: str) -> Result[RecipeRecord]:
        async def op(session: AsyncSession) -> RecipeRecord:
            return RecipeRecord.model_validate(await self._load(session, recipe_id))

        return await self._run("get_recipe", op)

    async def get_public_recipe(self, recipe_id: str) -> Result[RecipeRecord]:
        async def op(session: AsyncSession) -> RecipeRecord:
            recipe = await self._load(session, recipe_id, public_only=True)
            return RecipeRecord.model_validate(recipe)

        return await self._run("get_public_recipe", op)

    async def list_family_recipes(self, family_id: str) -> Result[list[RecipeRecord]]:
        return await self._list("list_family_recipes", Recipe.family_id == family_id)

    # =========================================================================
    # Mutations
    # =========================================================================

    async def create_recipe(self, data: dict[str, Any]) -> Result[RecipeRecord]:
        async def op(session: AsyncSession) -> RecipeRecord:
            recipe = Recipe(id=str(uuid.uuid4()), **filter_recipe_fields(data))
            session.add(recipe)
            await session.flush()
            await session.refresh(recipe)
            return RecipeRecord.model_validate(recipe)

        result = await self._run("create_recipe", op, commit=True)
        if result.ok:
            logger.info(f"Created recipe {result.value.id}")
        return result

    async def update_recipe(
        self, recipe_id: str, updates: dict[str, Any]
    ) -> Result[RecipeRecord]:
        async def op(session: AsyncSession) -> RecipeRecord:
            recipe = await self._load(session, recipe_id)
            for key, value in filter_recipe_fields(updates).items():
                setattr(recipe, key, value)
            await session.flush()
            await session.refresh(recipe)
            return RecipeRecord.model_validate(recipe)

        return await self._run("update_recipe", op, commit=True)

    async def delete_recipe(self, recipe_id: str) -> Result[bool]:
        async def op(session: AsyncSession) -> bool:
            recipe = await self._load(session, recipe_id)
            await session.delete(recipe)
            return True

        result = await self._run("delete_recipe", op, commit=True)
        if result.ok:
            logger.info(f"Deleted recipe {recipe_id}")
        return result

    async def share_with_family(self, recipe_id: str, family_id: str) -> Result[RecipeRecord]:
        return await self.update_recipe(recipe_id, {"family_id": family_id})

    async def remove_from_family(self, recipe_id: str) -> Result[RecipeRecord]:
        return await self.update_recipe(recipe_id, {"family_id": None})
