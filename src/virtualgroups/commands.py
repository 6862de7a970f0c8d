"""
Unified command orchestrator for grouping.
This is the SINGLE source of truth for the build workflow — used by both GUI and CLI.
No Qt/PySide6 dependencies — pure Python.
"""
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

from virtualgroups.core.interfaces import VirtualSource
from virtualgroups.core.models import Group, GroupingParams, GroupingStats
from virtualgroups.core.sources import ListSource
from virtualgroups.core.virtual_groups import VirtualGroupsImpl


class GroupingCommand:
    """
    Orchestrates the grouping workflow:
    1. Wrap the records in a source (unless a source is given)
    2. Create the engine for that source
    3. Build the groups with progress support

    Usage:
        # For GUI (engine stays alive for reverse lookups):
        command = GroupingCommand()
        groups, stats = command.execute(records, params, progress_callback=qt_progress_adapter)
        engine = command.get_engine()

        # For CLI (with console progress):
        groups, stats = command.execute(records, params, progress_callback=cli_progress_printer)
    """

    def __init__(self):
        self.engine: Optional[VirtualGroupsImpl] = None

    def execute(
            self,
            records: Union[Sequence[Any], VirtualSource],
            params: GroupingParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> Tuple[List[Group], GroupingStats]:
        """
        Build groups over the records with the given parameters.

        Args:
            records: A sequence of models, or any object with count() / item_at()
            params: Validated grouping parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Returns:
            Tuple of (groups, statistics)

        Raises:
            Whatever the columns' extractors raise; GroupingError if a group hook
            breaks the result.
        """
        source = records if hasattr(records, "item_at") else ListSource(records)
        self.engine = VirtualGroupsImpl(source)

        groups = self.engine.build_groups(params, progress_callback=progress_callback)
        return groups, self.engine.last_stats

    def get_engine(self) -> VirtualGroupsImpl:
        """Get the engine of the last execution (for reverse lookups)."""
        if not self.engine:
            raise RuntimeError("Command not executed yet")
        return self.engine

    def get_source(self) -> VirtualSource:
        """Get the source the groups were built over."""
        return self.get_engine().source
