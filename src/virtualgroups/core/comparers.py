"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/comparers.py
Comparers used to order items inside groups and to order the groups themselves.

ModelComparer is the workhorse for comparing two models by the value of one
column, optionally chained to a secondary column that breaks ties.

Missing values (None or NO_VALUE) always sort after concrete values, in both
ascending and descending order. Values that cannot be ordered against each
other (different types, types without ordering) compare as equal.
"""
from functools import cmp_to_key
from typing import Any, Optional

from virtualgroups.core.models import (
    CompareOutcome, Group, SortOrder, is_missing
)
from virtualgroups.core.text_compare import TextComparer, casefold_compare


def compare_values(x: Any, y: Any, text_comparer: TextComparer = casefold_compare) -> CompareOutcome:
    """
    Compare two concrete (non-missing) values.
    Strings go through the text comparer; everything else uses its own ordering.
    """
    if isinstance(x, str) or isinstance(y, str):
        if isinstance(x, str) and isinstance(y, str):
            return CompareOutcome.from_sign(text_comparer(x, y))
        return CompareOutcome.UNORDERED

    try:
        if x < y:
            return CompareOutcome.LESS
        if y < x:
            return CompareOutcome.GREATER
    except TypeError:
        return CompareOutcome.UNORDERED
    return CompareOutcome.EQUAL


class ModelComparer:
    """
    Compares two model objects by the value a column extracts from them.

    Usage:
        comparer = ModelComparer(year_column, SortOrder.ASCENDING,
                                 name_column, SortOrder.DESCENDING)
        models.sort(key=comparer.sort_key())
    """

    def __init__(
            self,
            column: Any,
            order: SortOrder,
            secondary_column: Any = None,
            secondary_order: SortOrder = SortOrder.NONE,
            text_comparer: Optional[TextComparer] = None
    ):
        if column is None:
            raise ValueError("ModelComparer requires a column")
        self.column = column
        self.order = SortOrder.coerce(order)
        self.text_comparer = text_comparer or casefold_compare
        self.secondary: Optional[ModelComparer] = None

        # There is no point in secondary sorting on the same column
        secondary_order = SortOrder.coerce(secondary_order)
        if (secondary_column is not None
                and secondary_column is not column
                and secondary_order != SortOrder.NONE):
            self.secondary = ModelComparer(secondary_column, secondary_order,
                                           text_comparer=self.text_comparer)

    def compare(self, x: Any, y: Any) -> int:
        """Compare two models. Returns -1, 0 or 1."""
        if self.order == SortOrder.NONE:
            return 0

        x_value = self.column.get_value(x)
        y_value = self.column.get_value(y)

        x_missing = is_missing(x_value)
        y_missing = is_missing(y_value)
        if x_missing or y_missing:
            # Missing values go last regardless of direction
            if x_missing and y_missing:
                result = 0
            else:
                result = 1 if x_missing else -1
        else:
            result = compare_values(x_value, y_value, self.text_comparer).sign
            if self.order == SortOrder.DESCENDING:
                result = -result

        if result == 0 and self.secondary is not None:
            result = self.secondary.compare(x, y)

        return result

    __call__ = compare

    def compare_rows(self, x: Any, y: Any) -> int:
        """Compare two rows that carry their model in a `model` attribute."""
        return self.compare(x.model, y.model)

    def sort_key(self):
        """Key adapter for sorted() / list.sort()."""
        return cmp_to_key(self.compare)


class GroupComparer:
    """
    Orders groups by their sort value when both groups have one that can be
    compared; otherwise by a case-insensitive comparison of their labels.
    """

    def __init__(self, order: SortOrder, text_comparer: Optional[TextComparer] = None):
        self.order = SortOrder.coerce(order)
        self.text_comparer = text_comparer or casefold_compare

    def compare(self, x: Group, y: Group) -> int:
        outcome = CompareOutcome.UNORDERED
        if x.sort_value is not None and y.sort_value is not None:
            outcome = compare_values(x.sort_value, y.sort_value, self.text_comparer)
        if outcome is CompareOutcome.UNORDERED:
            outcome = CompareOutcome.from_sign(self.text_comparer(x.label or "", y.label or ""))

        result = outcome.sign
        if self.order == SortOrder.DESCENDING:
            result = -result
        return result

    __call__ = compare

    def sort_key(self):
        return cmp_to_key(self.compare)
