from __future__ import annotations

import logging
from pathlib import Path

from PySide6 import QtWidgets

from garmentsearch.config.settings import Settings
from garmentsearch.index.catalog import resolve_catalog
from garmentsearch.index.engine import SearchEngine
from .views.main_window import MainWindow


log = logging.getLogger(__name__)


def run_gui(catalog: Path | str | None = None) -> None:
    settings = Settings.load()
    logging.basicConfig(level=settings.resolved_log_level(), format="[%(levelname)s] %(message)s")

    engine = SearchEngine(resolve_catalog(settings, catalog))
    log.info(f"Browsing {len(engine)} items")

    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    app.setOrganizationName("GarmentSearch")
    app.setApplicationName("GarmentSearch")

    win = MainWindow(engine)
    win.resize(900, 600)
    win.show()

    app.exec()


if __name__ == "__main__":
    run_gui()
