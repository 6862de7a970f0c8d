"""
Core grouping engine — partitioner, sorter, group builder and reverse index.

This package contains the foundation of virtualgroups:
- ItemGrouperImpl: one-pass partition of a source into group-key buckets
- Sorter + ModelComparer: stable multi-column ordering of members inside each group
- GroupComparer: ordering of the groups themselves
- GroupIndex: item → group and group position → item lookups
- VirtualGroupsImpl: the pipeline orchestrator hosts talk to
- Column / AttributePath: reference value and group-key extraction

All components are pure Python with no GUI dependencies — suitable for CLI and server usage.
"""

from .models import (
    Group, GroupingParams, GroupingStats, SortOrder, CompareOutcome,
    NO_VALUE, GROUP_TITLE_DEFAULT, DEFAULT_TITLE_FORMAT, DEFAULT_TITLE_SINGULAR_FORMAT,
    is_missing, is_orderable)
from .errors import GroupingError, InvalidGroupQueryError, AspectError
from .text_compare import casefold_compare, locale_compare, natural_compare
from .comparers import ModelComparer, GroupComparer, compare_values
from .aspects import AttributePath
from .columns import Column
from .sources import ListSource, CallbackSource
from .grouper import ItemGrouperImpl, OrderedBuckets
from .sorter import Sorter
from .formatting import format_group_title
from .reverse_index import GroupIndex
from .virtual_groups import AbstractVirtualGroups, VirtualGroupsImpl

__all__ = [
    "Group",
    "GroupingParams",
    "GroupingStats",
    "SortOrder",
    "CompareOutcome",
    "NO_VALUE",
    "GROUP_TITLE_DEFAULT",
    "DEFAULT_TITLE_FORMAT",
    "DEFAULT_TITLE_SINGULAR_FORMAT",
    "is_missing",
    "is_orderable",
    "GroupingError",
    "InvalidGroupQueryError",
    "AspectError",
    "casefold_compare",
    "locale_compare",
    "natural_compare",
    "ModelComparer",
    "GroupComparer",
    "compare_values",
    "AttributePath",
    "Column",
    "ListSource",
    "CallbackSource",
    "ItemGrouperImpl",
    "OrderedBuckets",
    "Sorter",
    "format_group_title",
    "GroupIndex",
    "AbstractVirtualGroups",
    "VirtualGroupsImpl",
]
