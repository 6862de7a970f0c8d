"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/sorter.py
Pure sorting logic for the members of each bucket.
"""
from functools import cmp_to_key
from typing import Any, Callable, List, Optional

from virtualgroups.core.comparers import ModelComparer
from virtualgroups.core.grouper import OrderedBuckets
from virtualgroups.core.interfaces import VirtualSource
from virtualgroups.core.models import GroupingParams, SortOrder


class Sorter:
    """
    Sorts the item indices inside each bucket according to the grouping params.
    Modifies index lists in-place.
    Sorting priority:
    1. An explicit item comparator, if given, decides everything
    2. Otherwise the primary column (or the host's primary display column)
       in the primary order
    3. The secondary column breaks ties
    Sorting is stable: items that compare equal keep their source order.
    """

    @staticmethod
    def build_comparator(params: GroupingParams) -> Optional[Callable[[Any, Any], int]]:
        """Model comparator for the params, or None when members stay in source order."""
        if params.item_comparator is not None:
            return params.item_comparator

        primary = params.effective_primary_column
        if primary is None or params.primary_sort_order == SortOrder.NONE:
            return None

        return ModelComparer(
            primary,
            params.primary_sort_order,
            params.secondary_sort_column,
            params.secondary_sort_order,
            text_comparer=params.text_comparer,
        )

    @staticmethod
    def sort_indices(indices: List[int], source: VirtualSource, compare: Callable[[Any, Any], int]) -> None:
        """Sort one list of item indices in place by comparing their models."""
        if len(indices) < 2:
            return
        model_key = cmp_to_key(compare)
        pairs = [(source.item_at(i), i) for i in indices]
        pairs.sort(key=lambda pair: model_key(pair[0]))
        indices[:] = [i for _, i in pairs]

    @staticmethod
    def sort_members(
            buckets: OrderedBuckets,
            source: VirtualSource,
            params: GroupingParams,
            on_bucket_sorted: Optional[Callable[[int], None]] = None
    ) -> bool:
        """
        Sort the indices of every bucket in place.
        Returns False (and leaves buckets in source order) when the params
        configure no member ordering.
        """
        compare = Sorter.build_comparator(params)
        if compare is None:
            return False

        for _, indices in buckets.items():
            Sorter.sort_indices(indices, source, compare)
            if on_bucket_sorted:
                on_bucket_sorted(len(indices))
        return True
