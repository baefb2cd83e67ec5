"""Shopping list planning for recipes."""

from recipebox.plan.shopping_list import (
    CATEGORY_CHECK_ORDER,
    CATEGORY_DISPLAY_ORDER,
    ShoppingListCategory,
    ShoppingListItem,
    categorize_ingredient,
    generate_shopping_list,
)

__all__ = [
    "CATEGORY_CHECK_ORDER",
    "CATEGORY_DISPLAY_ORDER",
    "ShoppingListCategory",
    "ShoppingListItem",
    "categorize_ingredient",
    "generate_shopping_list",
]
