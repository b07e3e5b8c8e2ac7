from __future__ import annotations

from typing import Sequence

from PySide6 import QtCore, QtWidgets

from garmentsearch.index.catalog import Item
from ..models.results_model import ResultsTableModel
from .delegates import SwatchDelegate


class ResultsView(QtWidgets.QTableView):
    itemActivated = QtCore.Signal(object)

    def __init__(self) -> None:
        super().__init__()
        self.setModel(ResultsTableModel())
        self.setItemDelegateForColumn(ResultsTableModel.COLOR_COLUMN, SwatchDelegate(self))
        self.setSelectionBehavior(QtWidgets.QAbstractItemView.SelectionBehavior.SelectRows)
        self.setSelectionMode(QtWidgets.QAbstractItemView.SelectionMode.SingleSelection)
        self.setAlternatingRowColors(True)
        self.setShowGrid(False)
        self.setSortingEnabled(False)
        self.verticalHeader().hide()
        self.horizontalHeader().setStretchLastSection(True)
        self.horizontalHeader().setSectionResizeMode(0, QtWidgets.QHeaderView.Stretch)
        for col in (1, 2, 3):
            self.horizontalHeader().setSectionResizeMode(col, QtWidgets.QHeaderView.ResizeMode.ResizeToContents)
        self.doubleClicked.connect(self._on_double_clicked)

    def set_items(self, items: Sequence[Item]) -> None:
        model: ResultsTableModel = self.model()  # type: ignore[assignment]
        model.set_items(items)
        if items:
            self.selectRow(0)

    def _on_double_clicked(self, index: QtCore.QModelIndex) -> None:
        model: ResultsTableModel = self.model()  # type: ignore[assignment]
        self.itemActivated.emit(model.item_at(index.row()))
