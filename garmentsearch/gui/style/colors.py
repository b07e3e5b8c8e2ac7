from __future__ import annotations

from PySide6 import QtGui

from garmentsearch.index.facets import Color


# Swatch per garment color
GARMENT_COLORS: dict[Color, str] = {
    Color.RED: "#e5484d",
    Color.BLUE: "#3e8ef7",
    Color.YELLOW: "#f2c12e",
    Color.WHITE: "#f4f4f5",
    Color.BLACK: "#1f2023",
}
FALLBACK_COLOR = "#9aa0a6"

# Swatches too light for white text
_LIGHT = {Color.YELLOW, Color.WHITE}


def color_for_garment(color: Color | None) -> QtGui.QColor:
    return QtGui.QColor(GARMENT_COLORS.get(color, FALLBACK_COLOR))


def text_color_for_garment(color: Color | None) -> QtGui.QColor:
    return QtGui.QColor("#1f2023" if color in _LIGHT else "#ffffff")


def tinted_background(color: Color | None, alpha: int = 28) -> QtGui.QBrush:
    c = QtGui.QColor(color_for_garment(color))  # copy
    c.setAlpha(max(0, min(255, alpha)))
    return QtGui.QBrush(c)
