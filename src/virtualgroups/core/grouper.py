"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Partitions an index-addressed source into buckets of item indices by group key.
"""

import logging
from typing import Any, Callable, Dict, Iterator, List, Tuple
from virtualgroups.core.interfaces import ItemGrouper, VirtualSource, ColumnLike

logger = logging.getLogger(__name__)


class OrderedBuckets:
    """
    Key -> list of item indices, iterated in first-seen key order.

    Any key that supports equality is accepted, including None and unhashable
    values such as lists or dicts (those are matched by a linear equality scan).
    """

    def __init__(self):
        self._slots: List[Tuple[Any, List[int]]] = []
        self._hashed: Dict[Any, int] = {}
        self._unhashed: List[int] = []

    def add(self, key: Any, index: int) -> None:
        self.bucket_for(key).append(index)

    def bucket_for(self, key: Any) -> List[int]:
        """Return the bucket for key, creating it if needed."""
        try:
            slot = self._hashed.get(key)
            hashable = True
        except TypeError:
            slot = self._find_unhashed(key)
            hashable = False

        if slot is None:
            slot = len(self._slots)
            self._slots.append((key, []))
            if hashable:
                self._hashed[key] = slot
            else:
                self._unhashed.append(slot)
        return self._slots[slot][1]

    def _find_unhashed(self, key: Any):
        for slot in self._unhashed:
            if self._slots[slot][0] == key:
                return slot
        return None

    def items(self) -> Iterator[Tuple[Any, List[int]]]:
        return iter(self._slots)

    def keys(self) -> List[Any]:
        return [key for key, _ in self._slots]

    def __getitem__(self, key: Any) -> List[int]:
        try:
            slot = self._hashed.get(key)
        except TypeError:
            slot = self._find_unhashed(key)
        if slot is None:
            raise KeyError(key)
        return self._slots[slot][1]

    def __contains__(self, key: Any) -> bool:
        try:
            self[key]
        except KeyError:
            return False
        return True

    def __len__(self) -> int:
        return len(self._slots)

    def total_items(self) -> int:
        return sum(len(indices) for _, indices in self._slots)

    def __repr__(self):
        return f"<OrderedBuckets keys={len(self._slots)}, items={self.total_items()}>"


class ItemGrouperImpl(ItemGrouper):
    """
    A concrete ItemGrouper.
    Reads each model exactly once, in index order, and buckets its index under
    the column's group key.
    """

    def partition(self, source: VirtualSource, column: ColumnLike) -> OrderedBuckets:
        """Groups the items of the source by the column's group key."""
        return self._group_by(source, column.get_group_key)

    @staticmethod
    def _group_by(source: VirtualSource, key_func: Callable[[Any], Any]) -> OrderedBuckets:
        """
        Helper method to group item indices by any computed key.
        Args:
            source: Source to read models from
            key_func: Function that computes a key from a model (None allowed)
        Returns:
            OrderedBuckets[key, List[int]]

        Errors raised by key_func propagate: a partial partition is never returned.
        """
        buckets = OrderedBuckets()
        count = source.count()
        for index in range(count):
            buckets.add(key_func(source.item_at(index)), index)

        logger.debug(f"Partitioned {count} items into {len(buckets)} buckets")
        return buckets
