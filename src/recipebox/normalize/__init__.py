"""Turn free-text ingredient lines into structured records."""

from recipebox.normalize.ingredients import (
    StructuredIngredient,
    coerce_ingredient,
    format_ingredient,
    ingredients_to_strings,
    parse_ingredients,
    parse_line,
    split_name_and_notes,
)
from recipebox.normalize.units import (
    FRACTION_GLYPHS,
    UNIT_ABBREVIATIONS,
    normalize_quantity,
    normalize_unit,
)

__all__ = [
    "FRACTION_GLYPHS",
    "UNIT_ABBREVIATIONS",
    "StructuredIngredient",
    "coerce_ingredient",
    "format_ingredient",
    "ingredients_to_strings",
    "normalize_quantity",
    "normalize_unit",
    "parse_ingredients",
    "parse_line",
    "split_name_and_notes",
]
