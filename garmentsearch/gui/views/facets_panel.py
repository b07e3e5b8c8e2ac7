from __future__ import annotations

from typing import Dict, List, Sequence

from PySide6 import QtCore, QtWidgets

from garmentsearch.index.engine import FacetCount
from garmentsearch.index.facets import ALL_COLORS, ALL_SIZES, FacetValue
from ..models.facets_model import FacetCounts, FacetSelection
from ..style.colors import GARMENT_COLORS


class _FacetGroup(QtWidgets.QGroupBox):
    selectionChanged = QtCore.Signal()

    def __init__(self, title: str, universe: Sequence[FacetValue], swatches: bool = False) -> None:
        super().__init__(title)
        self.setLayout(QtWidgets.QVBoxLayout())
        self._swatches = swatches
        self._checks: Dict[FacetValue, QtWidgets.QCheckBox] = {}
        # One row per universe value, in universe order; only labels change on update.
        for value in universe:
            cb = QtWidgets.QCheckBox()
            cb.setProperty("facet_key", value.id)
            cb.toggled.connect(lambda _checked: self.selectionChanged.emit())
            self.layout().addWidget(cb)
            self._checks[value] = cb
            self._set_label(value, 0)
        self.layout().addStretch(1)

    def _set_label(self, value: FacetValue, count: int) -> None:
        cb = self._checks[value]
        if self._swatches:
            hex_color = GARMENT_COLORS.get(value, "#9aa0a6")
            dot = f"<span style='color:{hex_color}; font-size:14px;'>&#9679;</span> "
            cb.setText(f"<html>{dot}{value.label} <span style='color:#9aa0a6'>({count})</span></html>")
        else:
            cb.setText(f"{value.label} ({count})")
        cb.setProperty("facet_count", count)

    def set_counts(self, counts: Sequence[FacetCount]) -> None:
        for fc in counts:
            self._set_label(fc.value, fc.count)

    def selected(self) -> List[FacetValue]:
        return [v for v, cb in self._checks.items() if cb.isChecked()]

    def checkbox(self, value: FacetValue) -> QtWidgets.QCheckBox:
        return self._checks[value]


class FacetsPanel(QtWidgets.QScrollArea):
    filtersChanged = QtCore.Signal(FacetSelection)

    def __init__(self) -> None:
        super().__init__()
        self.setWidgetResizable(True)
        self._inner = QtWidgets.QWidget()
        self.setWidget(self._inner)
        self._layout = QtWidgets.QVBoxLayout(self._inner)

        self.group_size = _FacetGroup("Size", ALL_SIZES)
        self.group_color = _FacetGroup("Color", ALL_COLORS, swatches=True)

        for g in (self.group_size, self.group_color):
            g.selectionChanged.connect(self._emit)
            self._layout.addWidget(g)

        self._layout.addStretch(1)

    def update_counts(self, counts: FacetCounts) -> None:
        self.group_size.set_counts(counts.sizes)
        self.group_color.set_counts(counts.colors)

    def selection(self) -> FacetSelection:
        return FacetSelection(
            sizes=self.group_size.selected(),  # type: ignore[arg-type]
            colors=self.group_color.selected(),  # type: ignore[arg-type]
        )

    def _emit(self) -> None:
        self.filtersChanged.emit(self.selection())
