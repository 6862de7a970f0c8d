"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Build pipeline stages for the grouping engine.

STAGES (in order)
-----------------
PartitionStage     : One pass over the source, item indices bucketed by group key
MemberSortStage    : Sorts the indices inside each bucket (primary + secondary column)
GroupBuildStage    : Turns buckets into Group objects (title, sort value, members)
GroupSortStage     : Orders the groups (explicit group comparator or GroupComparer)
ReverseIndexStage  : Builds the item -> group map and wraps everything in a GroupIndex

STAGE CONTRACTS
---------------
Each stage implements a consistent `process()` interface that:
  • Accepts the previous stage's output and the GroupingParams
  • Returns its own output for the next stage
  • Reports progress via callback (stage name, processed count, total count)
  • Lets extractor errors propagate: a stage never returns partial results
"""

import logging
from functools import cmp_to_key
from typing import Callable, List, Optional

from virtualgroups.core.comparers import GroupComparer
from virtualgroups.core.errors import GroupingError
from virtualgroups.core.formatting import format_group_title
from virtualgroups.core.grouper import ItemGrouperImpl, OrderedBuckets
from virtualgroups.core.interfaces import ItemGrouper, PipelineStage, VirtualSource
from virtualgroups.core.models import Group, GroupingParams, SortOrder, is_orderable
from virtualgroups.core.reverse_index import GroupIndex
from virtualgroups.core.sorter import Sorter

logger = logging.getLogger(__name__)

ProgressCallback = Optional[Callable[[str, int, object], None]]


class PartitionStage(PipelineStage):
    def __init__(self, source: VirtualSource, grouper: Optional[ItemGrouper] = None):
        self.source = source
        self.grouper = grouper or ItemGrouperImpl()

    def get_stage_name(self) -> str:
        return "Partition"

    def process(self, data, params: GroupingParams, progress_callback: ProgressCallback = None) -> OrderedBuckets:
        """Group the source's item indices by the group-by column's key."""
        buckets = self.grouper.partition(self.source, params.group_by_column)
        if progress_callback:
            total = buckets.total_items()
            progress_callback(self.get_stage_name(), total, total)
        return buckets


class MemberSortStage(PipelineStage):
    def __init__(self, source: VirtualSource):
        self.source = source

    def get_stage_name(self) -> str:
        return "Member sort"

    def process(self, data: OrderedBuckets, params: GroupingParams,
                progress_callback: ProgressCallback = None) -> OrderedBuckets:
        total = data.total_items()
        processed = 0

        def on_bucket_sorted(count: int) -> None:
            nonlocal processed
            processed += count
            if progress_callback:
                progress_callback(self.get_stage_name(), processed, total)

        if not Sorter.sort_members(data, self.source, params, on_bucket_sorted):
            logger.debug("No member ordering configured; keeping source order")
        return data


class GroupBuildStage(PipelineStage):
    def get_stage_name(self) -> str:
        return "Group build"

    def process(self, data: OrderedBuckets, params: GroupingParams,
                progress_callback: ProgressCallback = None) -> List[Group]:
        """
        Creates one Group per bucket.
        The label comes from the column's key-to-title conversion, then the title
        format (if any). The column's group formatter runs last and may adjust
        display fields, but not the members.
        """
        column = params.group_by_column
        formatter = getattr(column, "group_formatter", None)
        groups = []
        total = len(data)

        for key, indices in data.items():
            title = column.convert_group_key_to_title(key)
            label = format_group_title(title, len(indices),
                                       params.title_format, params.title_singular_format)
            group = Group(
                label=label,
                key=key,
                sort_value=key if is_orderable(key) else None,
                members=indices,
                column=column,
                collapsible=params.collapsible_groups,
            )

            if formatter is not None:
                members = group.members
                formatter(group, params)
                if group.members is not members:
                    raise GroupingError(f"Group formatter changed the members of group {label!r}")

            groups.append(group)
            if progress_callback:
                progress_callback(self.get_stage_name(), len(groups), total)

        return groups


class GroupSortStage(PipelineStage):
    def get_stage_name(self) -> str:
        return "Group sort"

    def process(self, data: List[Group], params: GroupingParams,
                progress_callback: ProgressCallback = None) -> List[Group]:
        if params.group_by_order == SortOrder.NONE:
            return data

        compare = params.group_comparator or GroupComparer(params.group_by_order, params.text_comparer)
        groups = sorted(data, key=cmp_to_key(compare))

        if progress_callback:
            progress_callback(self.get_stage_name(), len(groups), len(groups))
        return groups


class ReverseIndexStage(PipelineStage):
    def __init__(self, source_count: int):
        self.source_count = source_count

    def get_stage_name(self) -> str:
        return "Reverse index"

    def process(self, data: List[Group], params: GroupingParams,
                progress_callback: ProgressCallback = None) -> GroupIndex:
        index = GroupIndex(data, self.source_count)
        if progress_callback:
            progress_callback(self.get_stage_name(), self.source_count, self.source_count)
        return index
