"""Core controller driving the pipeline from a Qt frame timer."""

from __future__ import annotations

import logging
import time
from typing import Optional

from PySide6.QtCore import QObject, QRect, QTimer, Signal

from ..config.manager import ConfigManager
from ..ui.overlay_layer import OverlayLayer
from .frame_source import ScreenFrameSource
from .pipeline import TranslationPipeline

logger = logging.getLogger(__name__)


class MainController(QObject):
    """Glue layer between the UI, the frame source and the pipeline."""

    status_changed = Signal(str)
    log_message = Signal(str)
    language_changed = Signal(str, str)

    def __init__(
        self,
        config_manager: ConfigManager,
        pipeline: TranslationPipeline,
        overlay_layer: OverlayLayer,
        frame_source: Optional[ScreenFrameSource] = None,
    ) -> None:
        super().__init__()
        self._config_manager = config_manager
        self._pipeline = pipeline
        self._overlay_layer = overlay_layer
        config = config_manager.config
        self._frame_source = frame_source or ScreenFrameSource(config.capture.region)

        self._timer = QTimer(self)
        self._timer.setInterval(config.capture.frame_interval_ms)
        self._timer.timeout.connect(self._on_frame)
        self._last_frame_at: Optional[float] = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def bind_main_window(self, window) -> None:  # noqa: ANN001
        window.toggle_requested.connect(self.toggle_translation)
        window.swap_requested.connect(self.swap_languages)
        window.clear_requested.connect(self.clear_overlays)
        self.log_message.connect(window.append_log)
        self.status_changed.connect(window.update_status)
        self.language_changed.connect(window.update_languages)

        self._emit_languages()
        self.log_message.emit("Application started")

    def start_translation(self) -> None:
        if self.is_running:
            return
        region = self._config_manager.config.capture.region
        self._overlay_layer.set_geometry(QRect(region.x, region.y, region.width, region.height))
        self._pipeline.overlays.set_screen_size(region.width, region.height)
        self._overlay_layer.show()

        self._frame_source.start()
        self._last_frame_at = None
        self._pipeline.trigger_recognition()
        self._timer.start()
        self._emit_status("Running")

    def stop_translation(self) -> None:
        if not self.is_running:
            return
        self._timer.stop()
        self._frame_source.stop()
        self._pipeline.clear_overlays()
        self._overlay_layer.hide()
        self._emit_status("Stopped")

    def toggle_translation(self) -> None:
        if self.is_running:
            self.stop_translation()
        else:
            self.start_translation()

    def swap_languages(self) -> None:
        pair = self._pipeline.swap_languages()
        self._config_manager.remember_language_pair(pair)
        self._emit_languages()

    def clear_overlays(self) -> None:
        self._pipeline.clear_overlays()
        self.log_message.emit("Overlays cleared")

    @property
    def is_running(self) -> bool:
        return self._timer.isActive()

    @property
    def pipeline(self) -> TranslationPipeline:
        return self._pipeline

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _on_frame(self) -> None:
        now = time.monotonic()
        delta = 0.0 if self._last_frame_at is None else now - self._last_frame_at
        self._last_frame_at = now

        self._pipeline.tick(delta)
        frame = self._frame_source.grab()
        requests = self._pipeline.process_frame(frame)
        if requests:
            logger.debug("Scanned frame, %d regions", len(requests))

    def _emit_languages(self) -> None:
        pair = self._pipeline.coordinator.language_pair
        self.language_changed.emit(pair.source.display_name, pair.target.display_name)

    def _emit_status(self, status: str) -> None:
        self.status_changed.emit(status)
        self.log_message.emit(status)
