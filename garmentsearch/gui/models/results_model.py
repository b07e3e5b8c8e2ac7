from __future__ import annotations

from typing import List, Sequence

from PySide6 import QtCore

from garmentsearch.index.catalog import Item
from ..style.colors import tinted_background


# Role carrying the Color member for the swatch delegate
ColorRole = QtCore.Qt.UserRole + 1


class ResultsTableModel(QtCore.QAbstractTableModel):
    HEADERS = ["Name", "Size", "Color", "Id"]
    COLOR_COLUMN = 2

    def __init__(self, items: Sequence[Item] | None = None) -> None:
        super().__init__()
        self._items: List[Item] = list(items or [])

    def set_items(self, items: Sequence[Item]) -> None:
        self.beginResetModel()
        self._items = list(items)
        self.endResetModel()

    def rowCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:  # type: ignore[override]
        if parent.isValid():
            return 0
        return len(self._items)

    def columnCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:  # type: ignore[override]
        return len(self.HEADERS)

    def data(self, index: QtCore.QModelIndex, role: int = QtCore.Qt.DisplayRole):  # type: ignore[override]
        if not index.isValid():
            return None
        item = self._items[index.row()]
        col = index.column()
        if role == QtCore.Qt.DisplayRole:
            if col == 0:
                return item.name
            if col == 1:
                return item.size.label
            if col == 2:
                return item.color.label
            if col == 3:
                return item.id
        if role == ColorRole:
            return item.color
        if role == QtCore.Qt.BackgroundRole and col != self.COLOR_COLUMN:
            return tinted_background(item.color, alpha=24)
        if role == QtCore.Qt.ToolTipRole:
            return item.id
        return None

    def headerData(self, section: int, orientation: QtCore.Qt.Orientation, role: int = QtCore.Qt.DisplayRole):  # type: ignore[override]
        if orientation == QtCore.Qt.Horizontal and role == QtCore.Qt.DisplayRole:
            return self.HEADERS[section]
        return None

    def item_at(self, row: int) -> Item:
        return self._items[row]
