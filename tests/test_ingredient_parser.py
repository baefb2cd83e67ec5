"""Unit tests for ingredient line parsing and formatting."""

import pytest

from recipebox.normalize import (
    StructuredIngredient,
    coerce_ingredient,
    format_ingredient,
    ingredients_to_strings,
    parse_ingredients,
    parse_line,
    split_name_and_notes,
)

# =============================================================================
# Single Line Parsing Tests
# =============================================================================


class TestParseLine:
    """Tests for parse_line function."""

    @pytest.mark.parametrize(
        "text,quantity,unit,name,notes",
        [
            ("2 cups flour", "2", "cup", "flour", ""),
            ("1/2 tsp salt", "1/2", "teaspoon", "salt", ""),
            ("½ cup sugar", "0.5", "cup", "sugar", ""),
            ("2 cups flour, sifted", "2", "cup", "flour", "sifted"),
            ("3 eggs", "3", "", "eggs", ""),
            ("1 1/2 cups milk", "1 1/2", "cup", "milk", ""),
            ("1½ cups milk", "1.5", "cup", "milk", ""),
            ("1.5 lbs ground beef", "1.5", "pound", "ground beef", ""),
            ("2 Tbsp. olive oil", "2", "tablespoon", "olive oil", ""),
            ("3 cloves garlic, minced", "3", "clove", "garlic", "minced"),
            ("2 large eggs", "2", "large", "eggs", ""),
        ],
    )
    def test_structured_lines(self, text, quantity, unit, name, notes):
        """Lines split into quantity, unit, name and notes."""
        ingredient = parse_line(text)

        assert ingredient == StructuredIngredient(
            quantity=quantity,
            unit=unit,
            name=name,
            notes=notes,
            original=text,
        )

    def test_hyphen_splits_notes(self):
        """Any hyphen starts the notes, even inside a word."""
        ingredient = parse_line("2 cups all-purpose flour")
        assert ingredient.name == "all"
        assert ingredient.notes == "purpose flour"
        assert ingredient.original == "2 cups all-purpose flour"

    def test_size_inside_can_is_part_of_name(self):
        """A second number that is not a fraction stays in the name."""
        ingredient = parse_line("2 15oz cans tomatoes")
        assert ingredient.quantity == "2"
        assert ingredient.unit == ""
        assert ingredient.name == "15oz cans tomatoes"

    def test_no_quantity(self):
        """Lines without a leading quantity keep everything in the name."""
        ingredient = parse_line("Salt to taste")
        assert ingredient.quantity == ""
        assert ingredient.unit == ""
        assert ingredient.name == "Salt to taste"

    def test_unit_requires_quantity(self):
        """A unit word at the start of a line is part of the name."""
        ingredient = parse_line("pinch of salt")
        assert ingredient.unit == ""
        assert ingredient.name == "pinch of salt"

    def test_original_is_trimmed(self):
        assert parse_line("  3 eggs  ").original == "3 eggs"

    @pytest.mark.parametrize("value", ["", "   ", None, 42, ["2 cups flour"]])
    def test_invalid_input_returns_none(self, value):
        """Empty and non-string input yields None rather than raising."""
        assert parse_line(value) is None


# =============================================================================
# Notes Splitting Tests
# =============================================================================


class TestSplitNameAndNotes:
    """Tests for split_name_and_notes function."""

    @pytest.mark.parametrize(
        "text,name,notes",
        [
            ("flour, sifted", "flour", "sifted"),
            ("butter (softened)", "butter", "softened"),
            ("onion - finely chopped", "onion", "finely chopped"),
            ("parsley for garnish", "parsley", "for garnish"),
            ("carrots chopped", "carrots", "chopped"),
            ("tomatoes diced", "tomatoes", "diced"),
            ("ginger grated", "ginger", "grated"),
            ("flour", "flour", ""),
        ],
    )
    def test_separators(self, text, name, notes):
        assert split_name_and_notes(text) == (name, notes)

    def test_earliest_separator_wins(self):
        """The first separator in the text decides, not the first in the list."""
        assert split_name_and_notes("onion chopped, about 1 cup") == (
            "onion",
            "chopped, about 1 cup",
        )

    def test_separator_inside_word_is_ignored(self):
        """Keywords only match as whole words."""
        assert split_name_and_notes("formula milk") == ("formula milk", "")

    def test_empty(self):
        assert split_name_and_notes("") == ("", "")
        assert split_name_and_notes(None) == ("", "")


# =============================================================================
# Batch Parsing Tests
# =============================================================================


class TestParseIngredients:
    """Tests for parse_ingredients function."""

    def test_text_block_is_split(self):
        """Commas, semicolons and newlines all separate lines."""
        parsed = parse_ingredients("2 cups flour; 3 eggs\n1 tsp salt")

        assert [item.name for item in parsed] == ["flour", "eggs", "salt"]
        assert [item.original for item in parsed] == ["2 cups flour", "3 eggs", "1 tsp salt"]

    def test_mixed_separators_keep_order(self):
        parsed = parse_ingredients("2 eggs, 1 cup milk\n1/2 tsp vanilla")

        assert [(item.quantity, item.unit, item.name) for item in parsed] == [
            ("2", "", "eggs"),
            ("1", "cup", "milk"),
            ("1/2", "teaspoon", "vanilla"),
        ]

    def test_blank_lines_dropped(self):
        parsed = parse_ingredients("2 cups flour\n\n  \n3 eggs")
        assert len(parsed) == 2

    def test_list_is_not_resplit(self):
        """List entries keep their commas as notes separators."""
        parsed = parse_ingredients(["2 cups flour, sifted", "3 eggs"])

        assert len(parsed) == 2
        assert parsed[0].notes == "sifted"

    def test_list_skips_invalid_entries(self):
        parsed = parse_ingredients(["2 cups flour", "", None, 7, "3 eggs"])
        assert [item.name for item in parsed] == ["flour", "eggs"]

    @pytest.mark.parametrize("value", ["", None, [], 12, {"name": "flour"}])
    def test_empty_or_unsupported(self, value):
        assert parse_ingredients(value) == []


# =============================================================================
# Formatting Tests
# =============================================================================


class TestFormatting:
    """Tests for format_ingredient and ingredients_to_strings."""

    def test_format_full_record(self):
        ingredient = StructuredIngredient(
            quantity="2", unit="cup", name="flour", notes="sifted", original="2 cups flour, sifted"
        )
        assert format_ingredient(ingredient) == "2 cup flour (sifted)"

    def test_format_skips_empty_parts(self):
        assert format_ingredient({"quantity": "3", "name": "eggs"}) == "3 eggs"
        assert format_ingredient({"name": "salt", "unit": None}) == "salt"

    @pytest.mark.parametrize("value", [None, "", {}, "2 cups flour", 5])
    def test_format_invalid(self, value):
        assert format_ingredient(value) == ""

    def test_to_strings_prefers_original(self, stored_ingredients):
        lines = ingredients_to_strings(stored_ingredients)
        assert lines == [
            "2 cups flour, sifted",
            "3 eggs",
            "1 lb chicken breast",
            "1 onion, diced",
        ]

    def test_to_strings_mixed_entries(self):
        """Strings pass through; records without original are formatted."""
        lines = ingredients_to_strings(
            ["a pinch of salt", {"quantity": "1", "unit": "cup", "name": "rice"}]
        )
        assert lines == ["a pinch of salt", "1 cup rice"]

    def test_to_strings_not_a_list(self):
        assert ingredients_to_strings("2 cups flour") == []
        assert ingredients_to_strings(None) == []

    @pytest.mark.parametrize(
        "line",
        [
            "2 cups flour, sifted",
            "½ cup sugar",
            "1½ cups milk",
            "2 15oz cans tomatoes",
            "1 cup butter (softened)",
            "Salt to taste",
        ],
    )
    def test_parsed_line_round_trips(self, line):
        """The edit-form line of a parsed record is the input line."""
        assert ingredients_to_strings([parse_line(line)]) == [line]
        assert ingredients_to_strings([parse_line(line).to_dict()]) == [line]

    def test_plain_strings_unchanged(self):
        lines = ["2 cups flour", "a pinch of salt", "", "3 eggs"]
        assert ingredients_to_strings(lines) == lines


class TestCoerceIngredient:
    """Tests for coerce_ingredient function."""

    def test_mapping(self):
        ingredient = coerce_ingredient({"name": "flour", "quantity": 2})
        assert ingredient == StructuredIngredient(quantity="2", name="flour")

    def test_string_is_parsed(self):
        assert coerce_ingredient("3 eggs").name == "eggs"

    def test_record_passes_through(self):
        record = StructuredIngredient(name="salt")
        assert coerce_ingredient(record) is record

    def test_unsupported(self):
        assert coerce_ingredient(3) is None
