"""Parse free-text ingredient lines into structured records and back."""

import re
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

from recipebox.logging_config import get_logger
from recipebox.normalize.units import (
    QUANTITY_PATTERN,
    UNIT_PATTERN,
    normalize_quantity,
    normalize_unit,
)

logger = get_logger(__name__)


# =============================================================================
# Patterns
# =============================================================================

# quantity, then (only after a quantity) a known unit, then the rest of the line
INGREDIENT_LINE_RE = re.compile(
    rf"^(?:(?P<quantity>{QUANTITY_PATTERN})(?![\d./])\s*"
    rf"(?:(?P<unit>{UNIT_PATTERN})\.?\s+)?)?"
    r"(?P<remainder>\S.*)$",
    re.IGNORECASE | re.DOTALL,
)

# Separators between the ingredient name and its preparation notes.
# The earliest occurrence in the text wins, whichever separator it is.
NOTE_SEPARATORS: tuple[str, ...] = (
    r",",
    r"\(",
    r"-",
    r"\bfor\b",
    r"\bchopped\b",
    r"\bdiced\b",
    r"\bsliced\b",
    r"\bminced\b",
    r"\bgrated\b",
)
NOTE_SEPARATOR_RE = re.compile("|".join(NOTE_SEPARATORS), re.IGNORECASE)

_LEADING_PUNCTUATION_RE = re.compile(r"^[,\-\s]+")

BATCH_SPLIT_RE = re.compile(r"[,;\n]+")

INGREDIENT_FIELDS = ("quantity", "unit", "name", "notes", "original")


# =============================================================================
# Data Model
# =============================================================================


@dataclass(frozen=True)
class StructuredIngredient:
    """One ingredient line split into quantity, unit, name and notes."""

    quantity: str = ""
    unit: str = ""
    name: str = ""
    notes: str = ""
    original: str = ""

    def to_dict(self) -> dict[str, str]:
        """Convert to the JSON shape stored on recipe records."""
        return asdict(self)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "StructuredIngredient":
        """Build from a stored mapping, treating missing or null fields as empty."""
        return cls(**{key: str(data.get(key) or "") for key in INGREDIENT_FIELDS})


def coerce_ingredient(value: Any) -> StructuredIngredient | None:
    """Accept a record, a stored mapping or a raw line; anything else is None."""
    if isinstance(value, StructuredIngredient):
        return value
    if isinstance(value, Mapping):
        return StructuredIngredient.from_mapping(value)
    if isinstance(value, str):
        return parse_line(value)
    return None


# =============================================================================
# Parsing
# =============================================================================


def split_name_and_notes(text: str | None) -> tuple[str, str]:
    """
    Split the remainder of a line into the ingredient name and its notes.

    Examples:
        "flour, sifted" -> ("flour", "sifted")
        "butter (softened)" -> ("butter", "softened")
        "onion chopped" -> ("onion", "chopped")
        "parsley for garnish" -> ("parsley", "for garnish")

    A separator at the very start of the text is ignored.
    """
    if not text:
        return "", ""

    cleaned = text.strip()
    match = NOTE_SEPARATOR_RE.search(cleaned, 1)
    if not match:
        return cleaned, ""

    name = cleaned[: match.start()].strip()
    notes = _LEADING_PUNCTUATION_RE.sub("", cleaned[match.start() :])

    if notes.startswith("("):
        notes = notes[1:]
    if notes.endswith(")"):
        notes = notes[:-1]

    return name, notes.strip()


def parse_line(text: Any) -> StructuredIngredient | None:
    """
    Parse one free-text ingredient line.

    Handles formats like "2 cups flour, sifted", "1/2 tsp salt", "3 eggs",
    "½ cup sugar" and "2 15oz cans tomatoes". Returns None for empty or
    non-string input; never raises.
    """
    if not text or not isinstance(text, str):
        return None

    trimmed = text.strip()
    if not trimmed:
        return None

    match = INGREDIENT_LINE_RE.match(trimmed)
    if not match:
        logger.debug(f"No quantity/unit segmentation for {trimmed!r}")
        return StructuredIngredient(name=trimmed, original=trimmed)

    name, notes = split_name_and_notes(match.group("remainder"))

    return StructuredIngredient(
        quantity=normalize_quantity(match.group("quantity")),
        unit=normalize_unit(match.group("unit")),
        name=name,
        notes=notes,
        original=trimmed,
    )


def parse_ingredients(ingredients: Any) -> list[StructuredIngredient]:
    """
    Parse a block of ingredient text or a list of lines.

    A single string is split on commas, semicolons and newlines. A list is
    parsed element by element without further splitting. Blank and
    unparseable entries are dropped; order is preserved.
    """
    if not ingredients:
        return []

    if isinstance(ingredients, str):
        lines: list[Any] = [
            piece for piece in BATCH_SPLIT_RE.split(ingredients) if piece.strip()
        ]
    elif isinstance(ingredients, (list, tuple)):
        lines = list(ingredients)
    else:
        logger.debug(f"Ignoring ingredients of type {type(ingredients).__name__}")
        return []

    parsed = [parse_line(line) for line in lines]
    return [ingredient for ingredient in parsed if ingredient is not None]


# =============================================================================
# Formatting
# =============================================================================


def format_ingredient(ingredient: Any) -> str:
    """Render a record as "quantity unit name (notes)", skipping empty parts."""
    if not ingredient:
        return ""

    if isinstance(ingredient, StructuredIngredient):
        record = ingredient
    elif isinstance(ingredient, Mapping):
        record = StructuredIngredient.from_mapping(ingredient)
    else:
        return ""

    parts = [record.quantity, record.unit, record.name]
    if record.notes:
        parts.append(f"({record.notes})")

    return " ".join(part for part in parts if part)


def ingredients_to_strings(ingredients: Any) -> list[str]:
    """
    Turn stored ingredients back into editable lines.

    Plain strings pass through unchanged. Structured entries use their
    original text when present, otherwise the formatted record.
    """
    if not isinstance(ingredients, (list, tuple)):
        return []

    lines = []
    for ingredient in ingredients:
        if isinstance(ingredient, str):
            lines.append(ingredient)
        elif isinstance(ingredient, StructuredIngredient) and ingredient.original:
            lines.append(ingredient.original)
        elif isinstance(ingredient, Mapping) and ingredient.get("original"):
            lines.append(str(ingredient["original"]))
        else:
            lines.append(format_ingredient(ingredient))

    return lines
