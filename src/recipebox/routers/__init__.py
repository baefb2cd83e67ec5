"""API routers for the recipebox application."""

from recipebox.routers.ingredients import router as ingredients_router
from recipebox.routers.recipes import router as recipes_router

__all__ = [
    "ingredients_router",
    "recipes_router",
]
