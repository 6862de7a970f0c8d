"""
virtualgroups — grouping and sorting for index-addressed ("virtual") lists.

Core features:
- Partition items into groups by any column's key (missing keys form their own group)
- Multi-column, stable ordering of items inside groups; ordering of the groups themselves
- O(1) reverse lookups: item → group, group position → item
- Optional Qt item model (install with [gui] extra)
- CLI interface for grouping JSON / CSV records
"""

# Get version
from importlib.metadata import PackageNotFoundError, version as _version

try:
    __version__ = _version("virtualgroups")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API: only what users should import directly
from virtualgroups.commands import GroupingCommand
from virtualgroups.core import (
    Column, Group, GroupingParams, GroupingStats, SortOrder,
    ListSource, CallbackSource, VirtualGroupsImpl, GroupingError, InvalidGroupQueryError
)
from virtualgroups.services import RecordLoader

__all__ = [
    "GroupingCommand",
    "Column",
    "Group",
    "GroupingParams",
    "GroupingStats",
    "SortOrder",
    "ListSource",
    "CallbackSource",
    "VirtualGroupsImpl",
    "GroupingError",
    "InvalidGroupQueryError",
    "RecordLoader",
    "__version__",
]
