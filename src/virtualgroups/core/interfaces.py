"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the grouping engine.
These protocols enforce structural typing using Python's `typing.Protocol` so any
host object with the right shape can plug in.

Key Components:
---------------
- VirtualSource: Index-addressed collection (count + item_at).
- ColumnLike: Extracts values and group keys from models.
- ItemGrouper: Partitions a source into key -> item-index buckets.
- PipelineStage: One step of the build pipeline.
- VirtualGroups: The engine's public surface (build + reverse lookups + cache hint).
"""

from typing import Protocol, Any, List, Optional, Callable, TYPE_CHECKING
from virtualgroups.core.models import Group, GroupingParams, GroupingStats

if TYPE_CHECKING:
    from virtualgroups.core.grouper import OrderedBuckets


# ===== Interfaces =====

class VirtualSource(Protocol):
    """A dataset accessed only by index, never fully materialized."""
    def count(self) -> int: ...
    def item_at(self, index: int) -> Any: ...


class ColumnLike(Protocol):
    """
    Interface for value/key extraction.

    group_formatter is an optional attribute: a callable (group, params) -> None
    invoked on every group built from this column.
    """
    def get_value(self, model: Any) -> Any: ...
    def get_group_key(self, model: Any) -> Any: ...
    def convert_group_key_to_title(self, key: Any) -> str: ...


class ItemGrouper(Protocol):
    """Interface for splitting a source into buckets of item indices."""
    def partition(self, source: VirtualSource, column: ColumnLike) -> "OrderedBuckets":
        """
        Single pass over the source; returns buckets of item indices keyed by
        the column's group key, in first-seen key order.
        """
        ...


# =============================
# Stage Interfaces
# =============================

class PipelineStage(Protocol):
    """
    Interface for one stage of the build pipeline.

    Methods:
        get_stage_name: Name used for statistics and logging.
        process: Consumes the previous stage's output and returns its own.
    """
    def get_stage_name(self) -> str: ...

    def process(
        self,
        data: Any,
        params: GroupingParams,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Any:
        ...


class VirtualGroups(Protocol):
    """
    Interface a virtual list host uses to show its items in groups.

    build_groups runs the whole pipeline and publishes a new result; the other
    methods are read-only queries against the last published result.
    """
    def build_groups(
        self,
        params: GroupingParams,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[Group]:
        """Return the groups that should be shown according to the parameters."""
        ...

    def member_of_group(self, group: int, index_within_group: int) -> int:
        """Index of the item at the given position within the given group."""
        ...

    def group_of_item(self, item_index: int) -> int:
        """Position of the group the given item belongs to."""
        ...

    def position_within_group(self, group: int, item_index: int) -> int:
        """Position at which the given item is shown in the given group."""
        ...

    def cache_hint(self, from_group: int, from_index: int, to_group: int, to_index: int) -> None:
        """A hint that the given range of items is going to be required."""
        ...

    @property
    def last_stats(self) -> Optional[GroupingStats]: ...

