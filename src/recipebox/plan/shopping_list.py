"""Shopping list generation from a recipe's ingredients."""

import unicodedata
from dataclasses import asdict, dataclass, field
from typing import Any

from recipebox.logging_config import get_logger
from recipebox.normalize.ingredients import coerce_ingredient

logger = get_logger(__name__)


# =============================================================================
# Category Keywords
# =============================================================================

PRODUCE_KEYWORDS = (
    "apple",
    "banana",
    "orange",
    "lemon",
    "lime",
    "grape",
    "strawberry",
    "blueberry",
    "onion",
    "garlic",
    "potato",
    "carrot",
    "celery",
    "lettuce",
    "tomato",
    "pepper",
    "broccoli",
    "cauliflower",
    "spinach",
    "kale",
    "mushroom",
    "avocado",
    "cucumber",
    "herb",
    "basil",
    "parsley",
    "cilantro",
    "mint",
    "rosemary",
    "thyme",
    "oregano",
)

MEAT_KEYWORDS = (
    "chicken",
    "beef",
    "pork",
    "turkey",
    "fish",
    "salmon",
    "tuna",
    "shrimp",
    "sausage",
    "bacon",
    "ham",
    "steak",
    "ground",
    "breast",
    "thigh",
    "wing",
)

DAIRY_KEYWORDS = (
    "milk",
    "cheese",
    "butter",
    "cream",
    "yogurt",
    "sour cream",
    "cream cheese",
    "mozzarella",
    "cheddar",
    "parmesan",
    "feta",
    "goat cheese",
)

PANTRY_KEYWORDS = (
    "flour",
    "sugar",
    "salt",
    "pepper",
    "oil",
    "vinegar",
    "rice",
    "pasta",
    "bread",
    "cereal",
    "oats",
    "beans",
    "lentils",
    "nuts",
    "seeds",
    "spice",
)

BAKERY_KEYWORDS = (
    "bread",
    "roll",
    "bagel",
    "croissant",
    "muffin",
    "cake",
    "cookie",
    "pastry",
)

FROZEN_KEYWORDS = (
    "frozen",
    "ice cream",
    "pizza",
    "vegetables",
    "fruit",
    "meat",
)

FALLBACK_CATEGORY = "other"

# Order in which keyword sets are tried; the first hit decides the category
CATEGORY_CHECK_ORDER: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("produce", PRODUCE_KEYWORDS),
    ("meat", MEAT_KEYWORDS),
    ("dairy", DAIRY_KEYWORDS),
    ("bakery", BAKERY_KEYWORDS),
    ("frozen", FROZEN_KEYWORDS),
    ("pantry", PANTRY_KEYWORDS),
)

# Order in which populated categories are returned (differs from the check order)
CATEGORY_DISPLAY_ORDER: tuple[str, ...] = (
    "produce",
    "meat",
    "dairy",
    "pantry",
    "bakery",
    "frozen",
    FALLBACK_CATEGORY,
)


# =============================================================================
# Data Model
# =============================================================================


@dataclass
class ShoppingListItem:
    """A single line on the shopping list."""

    name: str
    quantity: str
    unit: str
    original: str
    checked: bool = False  # toggled by the client, never persisted

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ShoppingListCategory:
    """Items that belong to one grocery category."""

    category: str
    items: list[ShoppingListItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "items": [item.to_dict() for item in self.items],
        }


# =============================================================================
# Generation
# =============================================================================


def categorize_ingredient(name: str | None) -> str:
    """
    Pick the grocery category for an ingredient name.

    Keywords are matched as lower-case substrings, so "black pepper" lands in
    produce and "pineapple" in produce via "apple".
    """
    lowered = (name or "").lower()

    for category, keywords in CATEGORY_CHECK_ORDER:
        if any(keyword in lowered for keyword in keywords):
            return category

    return FALLBACK_CATEGORY


def item_sort_key(name: str) -> tuple[str, str]:
    """Collation key that ignores case and accents, like a locale compare."""
    decomposed = unicodedata.normalize("NFKD", name)
    folded = "".join(char for char in decomposed if not unicodedata.combining(char))
    # Lower case sorts before upper case on otherwise equal names
    return folded.casefold(), name.swapcase()


def generate_shopping_list(ingredients: Any) -> list[ShoppingListCategory]:
    """
    Group ingredients into shopping list categories.

    Args:
        ingredients: Structured records, stored mappings or raw lines.

    Returns:
        Non-empty categories in display order, items sorted by name.
    """
    if not isinstance(ingredients, (list, tuple)):
        return []

    grouped: dict[str, list[ShoppingListItem]] = {
        category: [] for category in CATEGORY_DISPLAY_ORDER
    }

    for entry in ingredients:
        ingredient = coerce_ingredient(entry)
        if ingredient is None:
            logger.debug(f"Skipping shopping list entry of type {type(entry).__name__}")
            continue

        category = categorize_ingredient(ingredient.name)
        grouped[category].append(
            ShoppingListItem(
                name=ingredient.name,
                quantity=ingredient.quantity,
                unit=ingredient.unit,
                original=ingredient.original,
            )
        )

    shopping_list = [
        ShoppingListCategory(
            category=category,
            items=sorted(items, key=lambda item: item_sort_key(item.name)),
        )
        for category, items in grouped.items()
        if items
    ]

    logger.debug(
        f"Generated shopping list: {sum(len(c.items) for c in shopping_list)} items "
        f"in {len(shopping_list)} categories"
    )

    return shopping_list
