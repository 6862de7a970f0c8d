"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

virtual_groups.py
Implements grouping for index-addressed ("virtual") lists as a pipeline:
    partition → member sort → group build → group sort → reverse index

A build runs to completion and then replaces the published GroupIndex in a
single assignment. Until then, and if the build raises, queries keep answering
from the previous result.
"""
import logging
import time
from typing import List, Optional, Callable, Tuple

from virtualgroups.core.errors import InvalidGroupQueryError
from virtualgroups.core.grouper import ItemGrouperImpl
from virtualgroups.core.interfaces import VirtualGroups, VirtualSource, ItemGrouper, PipelineStage
from virtualgroups.core.models import Group, GroupingParams, GroupingStats
from virtualgroups.core.reverse_index import GroupIndex
from virtualgroups.core.stages import (
    PartitionStage, MemberSortStage, GroupBuildStage, GroupSortStage, ReverseIndexStage
)

logger = logging.getLogger(__name__)


class AbstractVirtualGroups(VirtualGroups):
    """A safe, do-nothing grouping strategy: no groups, every query reports -1."""

    def build_groups(
        self,
        params: GroupingParams,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[Group]:
        return []

    def member_of_group(self, group: int, index_within_group: int) -> int:
        return -1

    def group_of_item(self, item_index: int) -> int:
        return -1

    def position_within_group(self, group: int, item_index: int) -> int:
        return -1

    def cache_hint(self, from_group: int, from_index: int, to_group: int, to_index: int) -> None:
        pass

    @property
    def last_stats(self) -> Optional[GroupingStats]:
        return None


# =============================
# Main grouping strategy
# =============================
class VirtualGroupsImpl(AbstractVirtualGroups):
    """
    Groups the items of a VirtualSource and answers reverse lookups
    (item → group, group position → item) against the last build.

    Usage:
        engine = VirtualGroupsImpl(ListSource(people))
        groups = engine.build_groups(GroupingParams(group_by_column=dept, primary_sort_column=year))
        g = engine.group_of_item(0)
        pos = engine.position_within_group(g, 0)
        assert engine.member_of_group(g, pos) == 0
    """

    def __init__(self, source: VirtualSource, grouper: Optional[ItemGrouper] = None):
        self.source = source
        self.grouper = grouper or ItemGrouperImpl()
        self._published: Optional[GroupIndex] = None
        self._last_stats: Optional[GroupingStats] = None

    def build_groups(
        self,
        params: GroupingParams,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[Group]:
        """
        Main build pipeline.
        Args:
            params: Grouping parameters (group-by column, sort columns and orders, title formats)
            progress_callback (Optional[Callable[[str, int, int], None]]): Reports progress per stage.
        Returns:
            The ordered groups (a new list; the engine keeps its own copy)
        Raises:
            Whatever the columns' extractors raise. The previous result stays published.
        """
        stats = GroupingStats()
        total_start_time = time.time()

        partition_stage = PartitionStage(self.source, self.grouper)
        start_time = time.time()
        buckets = partition_stage.process(None, params, progress_callback=progress_callback)
        source_count = buckets.total_items()
        stats.source_count = source_count
        VirtualGroupsImpl._update_stats(stats, partition_stage.get_stage_name(),
                                        time.time() - start_time, len(buckets), source_count)

        data = buckets
        for stage in self._build_pipeline(source_count):
            start_time = time.time()
            data = stage.process(data, params, progress_callback=progress_callback)
            VirtualGroupsImpl._update_stats(stats, stage.get_stage_name(),
                                            time.time() - start_time, len(data), source_count)

        result: GroupIndex = data
        stats.total_time = time.time() - total_start_time

        # Publish in one step
        self._published = result
        self._last_stats = stats

        logger.debug(f"Built {len(result)} groups over {source_count} items "
                     f"in {stats.total_time:.3f}s")
        return list(result.groups)

    def _build_pipeline(self, source_count: int) -> List[PipelineStage]:
        """Stages that run after partitioning, in order."""
        return [
            MemberSortStage(self.source),
            GroupBuildStage(),
            GroupSortStage(),
            ReverseIndexStage(source_count),
        ]

    # --- Queries ---

    @property
    def groups(self) -> Tuple[Group, ...]:
        """Groups of the published result (empty before the first build)."""
        return self._published.groups if self._published is not None else ()

    @property
    def source_count(self) -> int:
        """Number of items the published result covers."""
        return self._published.source_count if self._published is not None else 0

    @property
    def last_stats(self) -> Optional[GroupingStats]:
        return self._last_stats

    def _require_result(self) -> GroupIndex:
        if self._published is None:
            raise InvalidGroupQueryError("No groups have been built yet")
        return self._published

    def member_of_group(self, group: int, index_within_group: int) -> int:
        return self._require_result().member_of_group(group, index_within_group)

    def group_of_item(self, item_index: int) -> int:
        return self._require_result().group_of_item(item_index)

    def position_within_group(self, group: int, item_index: int) -> int:
        return self._require_result().position_within_group(group, item_index)

    def cache_hint(self, from_group: int, from_index: int, to_group: int, to_index: int) -> None:
        """No-op. Subclasses override this to prefetch the requested range."""
        logger.debug(f"Cache hint: ({from_group}, {from_index}) → ({to_group}, {to_index})")

    @staticmethod
    def _update_stats(
        stats: GroupingStats,
        stage: str,
        duration: float,
        groups_found: int,
        items: int
    ):
        """Helper to update GroupingStats object."""
        stats.update_stage(
            stage_name=stage,
            groups_found=groups_found,
            items_processed=items,
            duration=duration
        )
