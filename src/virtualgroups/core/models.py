"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for grouping and sorting index-addressed collections.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
from enum import Enum


# =============================
# Enums and sentinels
# =============================

class SortOrder(Enum):
    """
    Direction of a sort level. NONE disables sorting on that level.
    """
    ASCENDING = "ascending"
    DESCENDING = "descending"
    NONE = "none"

    @property
    def display_name(self) -> str:
        """Human-readable name for UI display."""
        mapping = {
            SortOrder.ASCENDING: "Ascending",
            SortOrder.DESCENDING: "Descending",
            SortOrder.NONE: "Unsorted",
        }
        return mapping.get(self, self.value)

    @classmethod
    def coerce(cls, value: Union["SortOrder", str, None]) -> "SortOrder":
        """Accepts a SortOrder, its value string, or None (treated as NONE)."""
        if value is None:
            return cls.NONE
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(value.strip().lower())
        raise ValueError(f"Invalid sort order: {value!r}")

    def __repr__(self) -> str:
        return self.value


class CompareOutcome(Enum):
    """
    Result of comparing two concrete values.
    UNORDERED marks values that cannot be ordered against each other; callers
    rank them as equal.
    """
    LESS = -1
    EQUAL = 0
    GREATER = 1
    UNORDERED = None

    @property
    def sign(self) -> int:
        return 0 if self is CompareOutcome.UNORDERED else self.value

    @classmethod
    def from_sign(cls, result: int) -> "CompareOutcome":
        if result < 0:
            return cls.LESS
        if result > 0:
            return cls.GREATER
        return cls.EQUAL


class _NoValue:
    """Explicit "no value" marker an extractor may return instead of None."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_VALUE"


NO_VALUE = _NoValue()

GROUP_TITLE_DEFAULT = "{null}"
DEFAULT_TITLE_FORMAT = "{0} [{1} items]"
DEFAULT_TITLE_SINGULAR_FORMAT = "{0} [{1} item]"


def is_missing(value: Any) -> bool:
    """True for None and the NO_VALUE sentinel."""
    return value is None or value is NO_VALUE


def is_orderable(value: Any) -> bool:
    """True if the value's type defines its own ordering."""
    if is_missing(value):
        return False
    return getattr(type(value), "__lt__", object.__lt__) is not object.__lt__


# ======================
#  Core Data Models
# ======================

@dataclass(eq=False)
class Group:
    """
    One group of items in the published result.
    Members are absolute item indices, already sorted; the tuple is immutable
    so hooks and callers cannot reorder a published group.
    """
    label: str
    key: Any = None
    sort_value: Any = None
    members: Tuple[int, ...] = ()
    column: Any = None
    collapsible: bool = False
    subtitle: Optional[str] = None
    task: Optional[str] = None
    footer: Optional[str] = None
    title_image: Any = None

    def __post_init__(self):
        self.members = tuple(self.members)

    @property
    def count(self) -> int:
        """How many items are in this group."""
        return len(self.members)

    def __len__(self) -> int:
        return len(self.members)

    def __repr__(self):
        return f"<Group label={self.label!r}, count={self.count}>"


@dataclass
class GroupingStats:
    """
    Statistics collected during one build.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.source_count: int = 0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}
        self._listeners: List[Callable[[str, Dict], None]] = []

    def add_listener(self, listener: Callable[[str, Dict], None]):
        """Adds a listener to receive updates when stats are updated."""
        self._listeners.append(listener)

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            items_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "items": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["items"] += items_processed
        self.stage_stats[stage_name]["time"] += duration

        for listener in self._listeners:
            listener(stage_name, self.stage_stats[stage_name])

    def print_summary(self) -> str:
        lines = [
            "Grouping Statistics:",
            f"Items: {self.source_count}",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            "Stage: GROUPS / ITEMS / TIME"
        ]

        for stage, data in self.stage_stats.items():
            lines.append(f"{stage}: {data['groups']} / {data['items']} / {data['time']:.3f}s")

        return "\n".join(lines)


"""
DTO for grouping parameters with built-in validation.
Interface-agnostic — used by the engine, the CLI and the Qt model.
"""
from virtualgroups.core.text_compare import TextComparer, casefold_compare


@dataclass
class GroupingParams:
    """Parameters for one build of the groups, validated on creation."""
    group_by_column: Any
    group_by_order: SortOrder = SortOrder.ASCENDING
    primary_sort_column: Any = None
    primary_sort_order: SortOrder = SortOrder.ASCENDING
    secondary_sort_column: Any = None
    secondary_sort_order: SortOrder = SortOrder.NONE
    group_comparator: Optional[Callable[[Group, Group], int]] = None
    item_comparator: Optional[Callable[[Any, Any], int]] = None
    title_format: Optional[str] = None
    title_singular_format: Optional[str] = None
    sort_items_by_primary_column: bool = False
    primary_display_column: Any = None
    collapsible_groups: bool = False
    text_comparer: TextComparer = field(default=casefold_compare)

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if self.group_by_column is None:
            raise ValueError("Group-by column cannot be empty")

        self.group_by_order = SortOrder.coerce(self.group_by_order)
        self.primary_sort_order = SortOrder.coerce(self.primary_sort_order)
        self.secondary_sort_order = SortOrder.coerce(self.secondary_sort_order)

        if self.sort_items_by_primary_column and self.primary_display_column is None:
            raise ValueError("Sorting by the primary column requires a primary display column")

        if self.text_comparer is None:
            self.text_comparer = casefold_compare

    @property
    def effective_primary_column(self) -> Any:
        """Column the members of each group are sorted by."""
        if self.sort_items_by_primary_column:
            return self.primary_display_column
        return self.primary_sort_column

    @staticmethod
    def from_field_names(
            group_by: str,
            sort_by: Optional[str] = None,
            then_by: Optional[str] = None,
            group_order: Union[SortOrder, str] = SortOrder.ASCENDING,
            sort_order: Union[SortOrder, str] = SortOrder.ASCENDING,
            then_order: Union[SortOrder, str] = SortOrder.ASCENDING,
            show_counts: bool = False,
            use_initial_letter: bool = False,
            text_comparer: Optional[TextComparer] = None,
            ignore_missing: bool = False,
    ) -> 'GroupingParams':
        """
        Factory method to create params from plain field names.
        Each name becomes a Column reading that field (dotted paths allowed).
        Useful for CLI argument parsing or simple hosts.
        With ignore_missing, a field absent from a model reads as None instead of raising.
        """
        from virtualgroups.core.columns import Column

        columns: Dict[str, Column] = {}

        def column_for(name: Optional[str]) -> Optional[Column]:
            if not name:
                return None
            if name not in columns:
                columns[name] = Column(name, aspect_name=name, ignore_missing_aspects=ignore_missing)
            return columns[name]

        group_column = Column(group_by, aspect_name=group_by,
                              use_initial_letter_for_group=use_initial_letter,
                              ignore_missing_aspects=ignore_missing)

        return GroupingParams(
            group_by_column=group_column,
            group_by_order=group_order,
            primary_sort_column=column_for(sort_by),
            primary_sort_order=sort_order if sort_by else SortOrder.NONE,
            secondary_sort_column=column_for(then_by),
            secondary_sort_order=then_order if then_by else SortOrder.NONE,
            title_format=DEFAULT_TITLE_FORMAT if show_counts else None,
            title_singular_format=DEFAULT_TITLE_SINGULAR_FORMAT if show_counts else None,
            text_comparer=text_comparer or casefold_compare,
        )
