"""Transparent always-on-top layer that renders translated overlays."""

from __future__ import annotations

from typing import Dict, Optional

from PySide6.QtCore import QRect, Qt
from PySide6.QtGui import QColor
from PySide6.QtWidgets import QGraphicsOpacityEffect, QLabel, QWidget

from ..config.schemas import OverlayStyle
from ..core.models import ScreenRect
from ..core.overlays import OverlayKey, OverlaySink


class OverlayLayer(QWidget, OverlaySink):
    """Frameless window placed over the captured region, one label per overlay."""

    def __init__(self, style: Optional[OverlayStyle] = None, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._style = style or OverlayStyle()
        self._labels: Dict[OverlayKey, QLabel] = {}
        self._configure_window()

    @property
    def labels(self) -> Dict[OverlayKey, QLabel]:
        return dict(self._labels)

    def set_geometry(self, rect: QRect) -> None:
        if not rect.isNull():
            self.move(rect.x(), rect.y())
            self.setFixedSize(rect.width(), rect.height())

    # ------------------------------------------------------------------
    # OverlaySink
    # ------------------------------------------------------------------
    def on_overlay_created(self, key: OverlayKey, text: str, rect: ScreenRect) -> None:
        label = QLabel(text, self)
        label.setWordWrap(True)
        label.setAlignment(Qt.AlignCenter)
        label.setStyleSheet(self._stylesheet())
        label.setGraphicsEffect(QGraphicsOpacityEffect(label))
        # Slightly larger than the source text so the translation fits.
        width = int(rect.width * 1.1)
        height = int(rect.height * 1.5)
        label.setGeometry(int(rect.x + rect.width / 2 - width / 2), int(rect.y), max(width, 1), max(height, 1))
        label.show()
        self._labels[key] = label

    def on_overlay_updated(self, key: OverlayKey, text: str, rect: ScreenRect) -> None:
        label = self._labels.get(key)
        if label is None:
            self.on_overlay_created(key, text, rect)
            return
        label.setText(text)

    def on_overlay_alpha_changed(self, key: OverlayKey, alpha: float) -> None:
        label = self._labels.get(key)
        if label is not None:
            label.graphicsEffect().setOpacity(alpha)

    def on_overlay_expired(self, key: OverlayKey) -> None:
        label = self._labels.pop(key, None)
        if label is not None:
            label.hide()
            label.deleteLater()

    def on_overlays_cleared(self) -> None:
        for label in self._labels.values():
            label.hide()
            label.deleteLater()
        self._labels.clear()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _stylesheet(self) -> str:
        style = self._style
        stylesheet = (
            f"color: {style.text_color};"
            f"font-family: '{style.font_family}';"
            f"font-size: {style.font_size}px;"
            "padding: 4px;"
        )
        rgba = QColor(style.background_color)
        if rgba.isValid():
            stylesheet += f"background-color: {rgba.name(QColor.HexArgb)};"
        return stylesheet

    def _configure_window(self) -> None:
        self.setWindowFlags(
            Qt.FramelessWindowHint
            | Qt.WindowStaysOnTopHint
            | Qt.Tool
            | Qt.WindowTransparentForInput
        )
        self.setAttribute(Qt.WA_TranslucentBackground)
        self.setAttribute(Qt.WA_DeleteOnClose, False)
