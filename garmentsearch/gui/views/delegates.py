from __future__ import annotations

from PySide6 import QtCore, QtGui, QtWidgets

from ..models.results_model import ColorRole
from ..style.colors import color_for_garment, text_color_for_garment


class SwatchDelegate(QtWidgets.QStyledItemDelegate):
    """Paints the garment color as a rounded pill with its label centered."""

    def paint(self, painter: QtGui.QPainter, option: QtWidgets.QStyleOptionViewItem, index: QtCore.QModelIndex) -> None:  # type: ignore[override]
        text = str(index.data(QtCore.Qt.DisplayRole) or "")
        color = index.data(ColorRole)
        # Base style painting (for selection highlighting background)
        opt = QtWidgets.QStyleOptionViewItem(option)
        self.initStyleOption(opt, index)
        style = opt.widget.style() if opt.widget else QtWidgets.QApplication.style()
        style.drawPrimitive(QtWidgets.QStyle.PE_PanelItemViewItem, opt, painter, opt.widget)

        if not text:
            return

        r = opt.rect.adjusted(8, 4, -8, -4)
        path = QtGui.QPainterPath()
        radius = r.height() / 2
        path.addRoundedRect(r, radius, radius)

        painter.save()
        painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
        painter.fillPath(path, color_for_garment(color))
        painter.setPen(QtGui.QPen(text_color_for_garment(color)))
        font = painter.font()
        font.setBold(True)
        painter.setFont(font)
        painter.drawText(r, QtCore.Qt.AlignCenter, text)
        painter.restore()

    def sizeHint(self, option: QtWidgets.QStyleOptionViewItem, index: QtCore.QModelIndex) -> QtCore.QSize:  # type: ignore[override]
        base = super().sizeHint(option, index)
        return QtCore.QSize(base.width(), max(base.height(), 28))
