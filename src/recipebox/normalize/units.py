"""Quantity and unit normalization for free-text ingredient lines."""

import re


# =============================================================================
# Normalization Tables
# =============================================================================

# Vulgar fraction glyphs, replaced literally (not rounded) with decimal strings
FRACTION_GLYPHS: dict[str, str] = {
    "¼": "0.25",
    "½": "0.5",
    "¾": "0.75",
    "⅓": "0.333",
    "⅔": "0.666",
    "⅛": "0.125",
    "⅜": "0.375",
    "⅝": "0.625",
    "⅞": "0.875",
}

# Short forms -> full singular unit names
UNIT_ABBREVIATIONS: dict[str, str] = {
    "tbsp": "tablespoon",
    "tbs": "tablespoon",
    "tbl": "tablespoon",
    "tsp": "teaspoon",
    "t": "teaspoon",
    "oz": "ounce",
    "lbs": "pound",
    "lb": "pound",
    "g": "gram",
    "kg": "kilogram",
    "ml": "milliliter",
    "l": "liter",
    "c": "cup",
    "pt": "pint",
    "qt": "quart",
    "gal": "gallon",
}

VOLUME_UNITS: frozenset[str] = frozenset(
    {
        "teaspoon",
        "tablespoon",
        "cup",
        "pint",
        "quart",
        "gallon",
        "milliliter",
        "millilitre",
        "liter",
        "litre",
        "deciliter",
        "dl",
        "centiliter",
        "cl",
        "fl oz",
        "fluid ounce",
    }
)

WEIGHT_UNITS: frozenset[str] = frozenset(
    {
        "gram",
        "kilogram",
        "milligram",
        "mg",
        "ounce",
        "pound",
    }
)

# Count-style units. Only "-s" plurals are accepted ("pinches" stays in the name).
COUNT_UNITS: frozenset[str] = frozenset(
    {
        "piece",
        "pc",
        "clove",
        "head",
        "bunch",
        "sprig",
        "stalk",
        "slice",
        "can",
        "jar",
        "package",
        "pkg",
        "packet",
        "pack",
        "bottle",
        "bag",
        "box",
        "carton",
        "container",
        "envelope",
        "stick",
        "fillet",
        "sheet",
        "pinch",
        "dash",
        "drop",
        "handful",
        "whole",
    }
)

SIZE_DESCRIPTORS: frozenset[str] = frozenset(
    {
        "small",
        "medium",
        "large",
        "extra large",
        "extra-large",
        "xl",
        "jumbo",
    }
)


def _unit_forms() -> list[str]:
    """All spellings accepted as a unit segment, longest first."""
    base = (
        set(UNIT_ABBREVIATIONS)
        | set(UNIT_ABBREVIATIONS.values())
        | VOLUME_UNITS
        | WEIGHT_UNITS
        | COUNT_UNITS
        | SIZE_DESCRIPTORS
    )
    forms = set(base)
    forms.update(f"{unit}s" for unit in base if not unit.endswith("s"))
    return sorted(forms, key=lambda form: (-len(form), form))


GLYPH_CLASS = "".join(FRACTION_GLYPHS)

# "2", "1.5", "1/2", "1 1/2", "1½", "1 ½", "½"
QUANTITY_PATTERN = rf"\d+(?:[./]\d+)?(?:\s+\d+/\d+|\s*[{GLYPH_CLASS}])?|[{GLYPH_CLASS}]"

UNIT_PATTERN = "|".join(re.escape(form) for form in _unit_forms())

_GLYPH_AFTER_DIGIT_RE = re.compile(rf"(\d)([{GLYPH_CLASS}])")
_MIXED_NUMBER_RE = re.compile(r"^(\d+)\s+(\d+(?:\.\d+)?|\.\d+)$")


# =============================================================================
# Normalization Functions
# =============================================================================


def format_number(value: float) -> str:
    """Render a number without trailing zeros ("2", "1.5", "1.333")."""
    return f"{value:.6f}".rstrip("0").rstrip(".")


def normalize_quantity(quantity_str: str | None) -> str:
    """
    Normalize a captured quantity segment to a numeric string.

    Handles formats like:
    - "2" -> "2"
    - "½" -> "0.5"
    - "1 ½" or "1½" -> "1.5"
    - "1/2" -> "1/2" (slash fractions are kept as written)
    """
    if not quantity_str:
        return ""

    result = quantity_str.strip().lower()
    result = _GLYPH_AFTER_DIGIT_RE.sub(r"\1 \2", result)

    for glyph, decimal in FRACTION_GLYPHS.items():
        result = result.replace(glyph, decimal)

    mixed_match = _MIXED_NUMBER_RE.match(result)
    if mixed_match:
        whole = float(mixed_match.group(1))
        fraction = float(mixed_match.group(2))
        result = format_number(whole + fraction)

    return result


def normalize_unit(unit_str: str | None) -> str:
    """
    Normalize a unit segment to a singular, lower-case full name.

    Examples:
        "Cups" -> "cup"
        "tbsp" -> "tablespoon"
        "lbs" -> "pound"
        "grams" -> "gram"

    One trailing "s" is always removed, so a non-plural unit ending in "s"
    loses its last letter too.
    """
    if not unit_str:
        return ""

    unit = unit_str.strip().lower().rstrip(".").strip()
    if unit.endswith("s"):
        unit = unit[:-1]

    return UNIT_ABBREVIATIONS.get(unit, unit)
