"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

gui/grouped_item_model.py
Two-level Qt item model over the grouping engine: groups are top-level rows,
their items are child rows. Rows are resolved on demand through the engine's
reverse index, so the model never copies the source.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Sequence

from PySide6.QtCore import QAbstractItemModel, QModelIndex, Qt

from virtualgroups.core.interfaces import VirtualSource
from virtualgroups.core.models import Group, GroupingParams
from virtualgroups.core.virtual_groups import VirtualGroupsImpl

logger = logging.getLogger(__name__)

# internalId of a top-level (group) row; item rows store their group position + 1
GROUP_ROW_ID = 0


class GroupedItemModel(QAbstractItemModel):
    """
    Shows a VirtualSource in groups.

    Usage:
        model = GroupedItemModel(ListSource(people), [name_column, dept_column])
        model.rebuild(GroupingParams(group_by_column=dept_column, primary_sort_column=name_column))
        tree_view.setModel(model)
    """

    def __init__(self, source: VirtualSource, columns: Sequence[Any],
                 engine: Optional[VirtualGroupsImpl] = None, parent=None):
        super().__init__(parent)
        self.source = source
        self.columns: List[Any] = list(columns)
        self.engine = engine or VirtualGroupsImpl(source)
        self._groups: List[Group] = []

    # --- Building ---

    def rebuild(self, params: GroupingParams,
                progress_callback: Optional[Callable[[str, int, object], None]] = None) -> List[Group]:
        """Regroup the source. Views are reset even if the build raises."""
        self.beginResetModel()
        try:
            self._groups = self.engine.build_groups(params, progress_callback=progress_callback)
        finally:
            self.endResetModel()
        logger.debug(f"Model rebuilt with {len(self._groups)} groups")
        return self._groups

    @property
    def groups(self) -> List[Group]:
        return self._groups

    # --- Qt overrides ---

    def index(self, row: int, column: int, parent: QModelIndex = QModelIndex()) -> QModelIndex:
        if row < 0 or not 0 <= column < self.columnCount():
            return QModelIndex()

        if not parent.isValid():
            if row >= len(self._groups):
                return QModelIndex()
            return self.createIndex(row, column, GROUP_ROW_ID)

        if parent.internalId() != GROUP_ROW_ID:
            return QModelIndex()
        group = parent.row()
        if row >= self._groups[group].count:
            return QModelIndex()
        return self.createIndex(row, column, group + 1)

    def parent(self, index: QModelIndex) -> QModelIndex:  # type: ignore[override]
        if not index.isValid() or index.internalId() == GROUP_ROW_ID:
            return QModelIndex()
        return self.createIndex(index.internalId() - 1, 0, GROUP_ROW_ID)

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        if not parent.isValid():
            return len(self._groups)
        if parent.internalId() == GROUP_ROW_ID and parent.column() == 0:
            return self._groups[parent.row()].count
        return 0

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return max(1, len(self.columns))

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid():
            return None

        if index.internalId() == GROUP_ROW_ID:
            group = self._groups[index.row()]
            if role == Qt.ItemDataRole.DisplayRole:
                return group.label if index.column() == 0 else None
            if role == Qt.ItemDataRole.ToolTipRole:
                return group.subtitle
            if role == Qt.ItemDataRole.UserRole:
                return group
            return None

        item_index = self.item_index(index)
        if role == Qt.ItemDataRole.DisplayRole:
            if not self.columns:
                return str(self.source.item_at(item_index))
            return self.columns[index.column()].get_string_value(self.source.item_at(item_index))
        if role == Qt.ItemDataRole.UserRole:
            return item_index
        return None

    def headerData(self, section: int, orientation: Qt.Orientation,
                   role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if (role == Qt.ItemDataRole.DisplayRole and orientation == Qt.Orientation.Horizontal
                and 0 <= section < len(self.columns)):
            return self.columns[section].name
        return None

    def flags(self, index: QModelIndex) -> Qt.ItemFlag:
        if not index.isValid():
            return Qt.ItemFlag.NoItemFlags
        if index.internalId() == GROUP_ROW_ID:
            return Qt.ItemFlag.ItemIsEnabled
        return Qt.ItemFlag.ItemIsEnabled | Qt.ItemFlag.ItemIsSelectable

    # --- Lookups ---

    def item_index(self, index: QModelIndex) -> int:
        """Source index of the item shown at a child row, or -1 for group rows."""
        if not index.isValid() or index.internalId() == GROUP_ROW_ID:
            return -1
        return self.engine.member_of_group(index.internalId() - 1, index.row())

    def index_for_item(self, item_index: int, column: int = 0) -> QModelIndex:
        """Model index of the row that shows the given source item."""
        group = self.engine.group_of_item(item_index)
        row = self.engine.position_within_group(group, item_index)
        return self.createIndex(row, column, group + 1)

    def prefetch(self, first: QModelIndex, last: QModelIndex) -> None:
        """Forward the range of rows a view is about to paint to the engine."""
        if not first.isValid() or not last.isValid():
            return
        self.engine.cache_hint(*self._group_position(first), *self._group_position(last))

    @staticmethod
    def _group_position(index: QModelIndex):
        """(group, position within group) of a row; a group row maps to its first item."""
        if index.internalId() == GROUP_ROW_ID:
            return index.row(), 0
        return index.internalId() - 1, index.row()
