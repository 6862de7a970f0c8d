"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/reverse_index.py
The published result of a build: the ordered groups plus the map from each
item index to the position of the group that owns it.
"""
from typing import List, Sequence, Tuple

from virtualgroups.core.errors import GroupingError, InvalidGroupQueryError
from virtualgroups.core.models import Group


class GroupIndex:
    """
    Immutable snapshot of one build.

    group_of_item and member_of_group are O(1); position_within_group is a
    linear search of one group's members.
    Indices outside this snapshot raise InvalidGroupQueryError, including
    negative ones.
    """

    def __init__(self, groups: Sequence[Group], source_count: int):
        self.groups: Tuple[Group, ...] = tuple(groups)
        self.source_count = source_count
        self._group_of_item: List[int] = self._build_reverse_index(self.groups, source_count)

    @staticmethod
    def _build_reverse_index(groups: Sequence[Group], source_count: int) -> List[int]:
        reverse_index = [-1] * source_count
        for position, group in enumerate(groups):
            for item_index in group.members:
                if not 0 <= item_index < source_count:
                    raise GroupingError(
                        f"Group {group.label!r} holds item {item_index} outside 0..{source_count - 1}")
                if reverse_index[item_index] != -1:
                    raise GroupingError(f"Item {item_index} belongs to more than one group")
                reverse_index[item_index] = position

        unassigned = reverse_index.count(-1)
        if unassigned:
            raise GroupingError(f"{unassigned} items are not in any group")
        return reverse_index

    @classmethod
    def empty(cls) -> "GroupIndex":
        return cls((), 0)

    def __len__(self) -> int:
        return len(self.groups)

    def group_at(self, group: int) -> Group:
        if not 0 <= group < len(self.groups):
            raise InvalidGroupQueryError(
                f"Group {group} out of range (0..{len(self.groups) - 1})")
        return self.groups[group]

    def group_of_item(self, item_index: int) -> int:
        if not 0 <= item_index < self.source_count:
            raise InvalidGroupQueryError(
                f"Item {item_index} out of range (0..{self.source_count - 1})")
        return self._group_of_item[item_index]

    def member_of_group(self, group: int, index_within_group: int) -> int:
        members = self.group_at(group).members
        if not 0 <= index_within_group < len(members):
            raise InvalidGroupQueryError(
                f"Position {index_within_group} out of range for group {group} "
                f"({len(members)} items)")
        return members[index_within_group]

    def position_within_group(self, group: int, item_index: int) -> int:
        members = self.group_at(group).members
        try:
            return members.index(item_index)
        except ValueError:
            raise InvalidGroupQueryError(f"Item {item_index} is not a member of group {group}") from None

    def __repr__(self):
        return f"<GroupIndex groups={len(self.groups)}, items={self.source_count}>"
