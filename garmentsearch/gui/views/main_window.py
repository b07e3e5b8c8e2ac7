from __future__ import annotations

import logging

from PySide6 import QtCore, QtGui, QtWidgets

from garmentsearch.index.catalog import Item
from garmentsearch.index.engine import SearchEngine, SearchResults
from .facets_panel import FacetsPanel
from .results_view import ResultsView
from ..models.facets_model import FacetCounts, FacetSelection


log = logging.getLogger(__name__)


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, engine: SearchEngine) -> None:
        super().__init__()
        self.setWindowTitle("GarmentSearch")
        self.engine = engine
        self._selection = FacetSelection()

        # Central layout: left facets, right results
        splitter = QtWidgets.QSplitter()
        self.setCentralWidget(splitter)

        self.facets_panel = FacetsPanel()
        splitter.addWidget(self.facets_panel)

        self.results = ResultsView()
        splitter.addWidget(self.results)
        splitter.setStretchFactor(0, 0)
        splitter.setStretchFactor(1, 1)

        self.status = self.statusBar()
        self._status_label = QtWidgets.QLabel("Ready")
        self.status.addPermanentWidget(self._status_label)

        self.facets_panel.filtersChanged.connect(self._on_facets_changed)
        self.results.itemActivated.connect(self._copy_item_id)

        # Debounce timer
        self._timer = QtCore.QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(150)
        self._timer.timeout.connect(self._do_search)

        self._do_search()

    @property
    def selection(self) -> FacetSelection:
        return self._selection

    def _schedule_search(self) -> None:
        self._timer.start()

    def _do_search(self) -> SearchResults:
        results = self.engine.search(self._selection.to_options())
        self._apply_results(results)
        return results

    def _apply_results(self, results: SearchResults) -> None:
        self.results.set_items(results.items)
        self.facets_panel.update_counts(FacetCounts(sizes=results.size_counts, colors=results.color_counts))
        if self._selection.is_empty():
            self._status_label.setText(f"Showing all {len(self.engine)} items")
        else:
            self._status_label.setText(f"{len(results.items)} of {len(self.engine)} items")

    def status_text(self) -> str:
        return self._status_label.text()

    def _on_facets_changed(self, sel: FacetSelection) -> None:
        self._selection = sel
        self._schedule_search()

    def _copy_item_id(self, item: Item) -> None:
        QtGui.QGuiApplication.clipboard().setText(item.id)
        self.status.showMessage(f"Copied id of {item.name}", 3000)
        log.debug(f"Copied item id {item.id}")
