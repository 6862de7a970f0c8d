"""
Unit tests for core/comparers.py
Verifies value comparison, model comparison (primary + secondary column,
missing values last) and group ordering.
"""
from types import SimpleNamespace

import pytest

from virtualgroups.core.comparers import ModelComparer, GroupComparer, compare_values
from virtualgroups.core.models import CompareOutcome, Group, SortOrder, NO_VALUE
from virtualgroups.core.text_compare import natural_compare


def person(name, dept, year):
    return SimpleNamespace(name=name, dept=dept, year=year)


class Opaque:
    """A type without ordering."""


# =============================================================================
# 1. VALUE COMPARISON
# =============================================================================
class TestCompareValues:

    def test_numbers_use_natural_ordering(self):
        assert compare_values(1, 2) is CompareOutcome.LESS
        assert compare_values(2.5, 1) is CompareOutcome.GREATER
        assert compare_values(3, 3) is CompareOutcome.EQUAL

    def test_strings_compare_case_insensitively_by_default(self):
        assert compare_values("abc", "ABC") is CompareOutcome.EQUAL
        assert compare_values("apple", "Banana") is CompareOutcome.LESS

    def test_string_against_number_is_unordered(self):
        assert compare_values("10", 10) is CompareOutcome.UNORDERED
        assert compare_values(10, "10") is CompareOutcome.UNORDERED

    def test_types_without_ordering_are_unordered(self):
        assert compare_values(Opaque(), Opaque()) is CompareOutcome.UNORDERED

    def test_injected_text_comparer_is_used(self):
        assert compare_values("item10", "item2") is CompareOutcome.LESS
        assert compare_values("item10", "item2", natural_compare) is CompareOutcome.GREATER

    def test_unordered_sign_is_zero(self):
        assert CompareOutcome.UNORDERED.sign == 0


# =============================================================================
# 2. MODEL COMPARER
# =============================================================================
class TestModelComparer:

    def test_ascending_and_descending(self, year_column):
        old, new = person("Bob", "Eng", 2019), person("Amy", "Eng", 2020)

        ascending = ModelComparer(year_column, SortOrder.ASCENDING)
        descending = ModelComparer(year_column, SortOrder.DESCENDING)

        assert ascending.compare(old, new) < 0
        assert descending.compare(old, new) > 0
        assert ascending(new, new) == 0

    @pytest.mark.parametrize("order", [SortOrder.ASCENDING, SortOrder.DESCENDING])
    def test_missing_values_sort_last_in_both_directions(self, year_column, order):
        """None and NO_VALUE always come after concrete values."""
        people = [
            person("NoYear", "Eng", None),
            person("Amy", "Eng", 2020),
            person("Sentinel", "Eng", NO_VALUE),
            person("Bob", "Eng", 2019),
        ]
        comparer = ModelComparer(year_column, order)

        ordered = sorted(people, key=comparer.sort_key())

        assert [p.name for p in ordered[2:]] == ["NoYear", "Sentinel"]
        expected_head = ["Bob", "Amy"] if order == SortOrder.ASCENDING else ["Amy", "Bob"]
        assert [p.name for p in ordered[:2]] == expected_head

    def test_secondary_column_breaks_ties(self, year_column, name_column):
        people = [person("Amy", "Eng", 2020), person("Zed", "Eng", 2020), person("Bob", "Eng", 2019)]
        comparer = ModelComparer(year_column, SortOrder.ASCENDING, name_column, SortOrder.DESCENDING)

        ordered = sorted(people, key=comparer.sort_key())

        assert [p.name for p in ordered] == ["Bob", "Zed", "Amy"]

    def test_secondary_on_same_column_is_ignored(self, year_column):
        comparer = ModelComparer(year_column, SortOrder.ASCENDING, year_column, SortOrder.DESCENDING)
        assert comparer.secondary is None

    def test_secondary_with_order_none_is_ignored(self, year_column, name_column):
        comparer = ModelComparer(year_column, SortOrder.ASCENDING, name_column, SortOrder.NONE)
        assert comparer.secondary is None

    def test_order_none_compares_everything_equal(self, year_column):
        comparer = ModelComparer(year_column, SortOrder.NONE)
        assert comparer.compare(person("A", "Eng", 1), person("B", "Eng", 2)) == 0

    def test_mixed_types_compare_equal(self, year_column):
        comparer = ModelComparer(year_column, SortOrder.ASCENDING)
        assert comparer.compare(person("A", "Eng", "2020"), person("B", "Eng", 2019)) == 0

    def test_requires_a_column(self):
        with pytest.raises(ValueError):
            ModelComparer(None, SortOrder.ASCENDING)

    def test_compare_rows_uses_the_model_attribute(self, name_column):
        comparer = ModelComparer(name_column, SortOrder.ASCENDING)
        row_a = SimpleNamespace(model=person("Amy", "Eng", 2020))
        row_b = SimpleNamespace(model=person("Bob", "Eng", 2019))
        assert comparer.compare_rows(row_a, row_b) < 0


# =============================================================================
# 3. GROUP COMPARER
# =============================================================================
class TestGroupComparer:

    def test_sort_values_decide_when_both_present(self):
        low = Group(label="zzz", sort_value=1)
        high = Group(label="aaa", sort_value=2)
        assert GroupComparer(SortOrder.ASCENDING).compare(low, high) < 0

    def test_labels_decide_when_a_sort_value_is_missing(self):
        with_value = Group(label="beta", sort_value=1)
        without_value = Group(label="Alpha", sort_value=None)
        assert GroupComparer(SortOrder.ASCENDING).compare(with_value, without_value) > 0

    def test_unorderable_sort_values_fall_back_to_labels(self):
        text = Group(label="b", sort_value="x")
        number = Group(label="a", sort_value=5)
        assert GroupComparer(SortOrder.ASCENDING).compare(text, number) > 0

    def test_descending_inverts(self):
        a, b = Group(label="a", sort_value=1), Group(label="b", sort_value=2)
        assert GroupComparer(SortOrder.DESCENDING).compare(a, b) > 0

    def test_natural_label_comparison(self):
        item2 = Group(label="item2")
        item10 = Group(label="item10")
        groups = sorted([item10, item2], key=GroupComparer(SortOrder.ASCENDING, natural_compare).sort_key())
        assert groups == [item2, item10]
