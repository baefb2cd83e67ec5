"""Unit tests for shopping list generation."""

import pytest

from recipebox.normalize import StructuredIngredient
from recipebox.plan import (
    CATEGORY_CHECK_ORDER,
    CATEGORY_DISPLAY_ORDER,
    ShoppingListItem,
    categorize_ingredient,
    generate_shopping_list,
)

# =============================================================================
# Categorization Tests
# =============================================================================


class TestCategorizeIngredient:
    """Tests for categorize_ingredient function."""

    @pytest.mark.parametrize(
        "name,category",
        [
            ("onion", "produce"),
            ("fresh basil", "produce"),
            ("chicken breast", "meat"),
            ("bacon", "meat"),
            ("whole milk", "dairy"),
            ("cheddar", "dairy"),
            ("flour", "pantry"),
            ("olive oil", "pantry"),
            ("bagel", "bakery"),
            ("frozen peas", "frozen"),
            ("eggs", "other"),
        ],
    )
    def test_keyword_categories(self, name, category):
        assert categorize_ingredient(name) == category

    def test_case_insensitive(self):
        assert categorize_ingredient("Chicken Thighs") == "meat"

    def test_first_matching_category_wins(self):
        """Keyword sets are tried in check order, not display order."""
        # "pepper" is both produce and pantry
        assert categorize_ingredient("black pepper") == "produce"
        # "bread" is both bakery and pantry; bakery is checked first
        assert categorize_ingredient("bread") == "bakery"
        # "ice cream" contains the dairy keyword "cream"
        assert categorize_ingredient("ice cream") == "dairy"

    def test_substring_match(self):
        """Keywords match inside longer words."""
        assert categorize_ingredient("pineapple") == "produce"

    @pytest.mark.parametrize("name", ["", None])
    def test_empty_name(self, name):
        assert categorize_ingredient(name) == "other"

    def test_check_and_display_orders_differ(self):
        checked = [category for category, _ in CATEGORY_CHECK_ORDER]
        assert checked.index("bakery") < checked.index("pantry")
        assert CATEGORY_DISPLAY_ORDER.index("pantry") < CATEGORY_DISPLAY_ORDER.index("bakery")
        assert CATEGORY_DISPLAY_ORDER[-1] == "other"


# =============================================================================
# Generation Tests
# =============================================================================


class TestGenerateShoppingList:
    """Tests for generate_shopping_list function."""

    def test_groups_in_display_order(self, stored_ingredients):
        shopping_list = generate_shopping_list(stored_ingredients)

        assert [c.category for c in shopping_list] == ["produce", "meat", "pantry", "other"]

    def test_empty_categories_omitted(self):
        shopping_list = generate_shopping_list([{"name": "flour"}])

        assert len(shopping_list) == 1
        assert shopping_list[0].category == "pantry"

    def test_items_carry_quantity_and_original(self, stored_ingredients):
        shopping_list = generate_shopping_list(stored_ingredients)
        meat = next(c for c in shopping_list if c.category == "meat")

        assert meat.items == [
            ShoppingListItem(
                name="chicken breast",
                quantity="1",
                unit="pound",
                original="1 lb chicken breast",
                checked=False,
            )
        ]

    def test_items_sorted_by_name_ignoring_case_and_accents(self):
        shopping_list = generate_shopping_list(
            [{"name": "sugar"}, {"name": "Flour"}, {"name": "crème fraîche oil"}, {"name": "salt"}]
        )

        names = [item.name for item in shopping_list[0].items]
        assert names == ["crème fraîche oil", "Flour", "salt", "sugar"]

    def test_lower_case_sorts_before_upper_case_on_ties(self):
        shopping_list = generate_shopping_list([{"name": "Salt"}, {"name": "salt"}])

        names = [item.name for item in shopping_list[0].items]
        assert names == ["salt", "Salt"]

    def test_accepts_records_and_raw_lines(self):
        shopping_list = generate_shopping_list(
            [StructuredIngredient(name="onion"), "2 cups milk", 42, None]
        )

        assert [c.category for c in shopping_list] == ["produce", "dairy"]
        milk = shopping_list[1].items[0]
        assert (milk.quantity, milk.unit, milk.name) == ("2", "cup", "milk")

    def test_duplicates_are_not_merged(self):
        shopping_list = generate_shopping_list([{"name": "salt"}, {"name": "salt"}])
        assert len(shopping_list[0].items) == 2

    @pytest.mark.parametrize("value", [None, "2 cups flour", {"name": "flour"}, 3])
    def test_non_list_input(self, value):
        assert generate_shopping_list(value) == []

    def test_empty_list(self):
        assert generate_shopping_list([]) == []

    def test_to_dict(self):
        shopping_list = generate_shopping_list([{"name": "salt", "quantity": "1", "unit": "teaspoon"}])

        assert shopping_list[0].to_dict() == {
            "category": "pantry",
            "items": [
                {
                    "name": "salt",
                    "quantity": "1",
                    "unit": "teaspoon",
                    "original": "",
                    "checked": False,
                }
            ],
        }
