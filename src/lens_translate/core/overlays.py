"""Overlay lifecycle: deduplication by position, refresh, fade and expiry."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from ..config.schemas import OverlayConfig
from .models import NormalizedRect, ScreenRect

logger = logging.getLogger(__name__)

FADE_WINDOW = 1.0

# Tolerance for float drift in summed frame deltas.
_EPSILON = 1e-9

OverlayKey = Tuple[str, int, int]


def overlay_key(text: str, x: float, y: float, quantum: float = 50.0) -> OverlayKey:
    """Bucket a screen position so nearby sightings of the same text match."""
    return (text, math.floor(x / quantum), math.floor(y / quantum))


@dataclass
class OverlayHandle:
    key: OverlayKey
    original_text: str
    translated_text: str
    rect: ScreenRect
    total_duration: float
    elapsed: float = 0.0

    @property
    def alpha(self) -> float:
        fade_start = self.total_duration - FADE_WINDOW
        if self.elapsed > fade_start + _EPSILON:
            return min(1.0, max(0.0, 1.0 - (self.elapsed - fade_start)))
        return 1.0

    @property
    def fading(self) -> bool:
        return self.alpha < 1.0


class OverlaySink:
    """Receives overlay lifecycle events. Override the callbacks you need."""

    def on_overlay_created(self, key: OverlayKey, text: str, rect: ScreenRect) -> None:
        pass

    def on_overlay_updated(self, key: OverlayKey, text: str, rect: ScreenRect) -> None:
        pass

    def on_overlay_alpha_changed(self, key: OverlayKey, alpha: float) -> None:
        pass

    def on_overlay_expired(self, key: OverlayKey) -> None:
        pass

    def on_overlays_cleared(self) -> None:
        pass


class OverlayLifecycleManager:
    """Own the live overlays and drive them from display calls and ticks.

    Each handle goes Active -> Fading -> Expired. A repeated ``display`` for
    the same key before expiry puts it back to Active with a fresh timer.
    """

    def __init__(
        self,
        sink: Optional[OverlaySink] = None,
        duration: float = 5.0,
        position_quantum: float = 50.0,
        screen_size: Tuple[int, int] = (1280, 720),
    ) -> None:
        if duration <= 0:
            raise ValueError("duration must be positive")
        if position_quantum <= 0:
            raise ValueError("position_quantum must be positive")
        self._sink = sink or OverlaySink()
        self._duration = duration
        self._quantum = position_quantum
        self._screen_width, self._screen_height = screen_size
        self._handles: Dict[OverlayKey, OverlayHandle] = {}

    @classmethod
    def from_config(cls, config: OverlayConfig, sink: Optional[OverlaySink] = None) -> "OverlayLifecycleManager":
        return cls(
            sink=sink,
            duration=config.duration,
            position_quantum=config.position_quantum,
            screen_size=(config.screen_width, config.screen_height),
        )

    @property
    def handles(self) -> Dict[OverlayKey, OverlayHandle]:
        return dict(self._handles)

    def get(self, key: OverlayKey) -> Optional[OverlayHandle]:
        return self._handles.get(key)

    def __len__(self) -> int:
        return len(self._handles)

    def __contains__(self, key: OverlayKey) -> bool:
        return key in self._handles

    def set_screen_size(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("screen size must be positive")
        self._screen_width, self._screen_height = width, height

    def display(
        self,
        original_text: str,
        translated_text: str,
        rect: Union[NormalizedRect, ScreenRect],
        duration: Optional[float] = None,
    ) -> OverlayHandle:
        """Show ``translated_text`` over ``rect``, refreshing a matching overlay.

        Normalized rects are projected onto the configured screen size.
        """
        duration = self._duration if duration is None else duration
        if duration <= 0:
            raise ValueError("duration must be positive")

        if isinstance(rect, NormalizedRect):
            rect = rect.to_screen(self._screen_width, self._screen_height)
        key = overlay_key(original_text, rect.x, rect.y, self._quantum)

        handle = self._handles.get(key)
        if handle is not None:
            was_fading = handle.fading
            handle.translated_text = translated_text
            handle.elapsed = 0.0
            self._sink.on_overlay_updated(key, translated_text, handle.rect)
            if was_fading:
                self._sink.on_overlay_alpha_changed(key, handle.alpha)
            return handle

        handle = OverlayHandle(
            key=key,
            original_text=original_text,
            translated_text=translated_text,
            rect=rect,
            total_duration=duration,
        )
        self._handles[key] = handle
        logger.debug("Overlay created for %s", key)
        self._sink.on_overlay_created(key, translated_text, rect)
        return handle

    def tick(self, delta: float) -> List[OverlayKey]:
        """Advance every overlay by ``delta``. Returns the keys that expired."""
        if delta < 0:
            raise ValueError("delta must not be negative")

        expired: List[OverlayKey] = []
        for key, handle in list(self._handles.items()):
            previous_alpha = handle.alpha
            handle.elapsed += delta
            if handle.elapsed >= handle.total_duration - _EPSILON:
                del self._handles[key]
                expired.append(key)
                logger.debug("Overlay expired for %s", key)
                self._sink.on_overlay_expired(key)
                continue
            alpha = handle.alpha
            if alpha != previous_alpha:
                self._sink.on_overlay_alpha_changed(key, alpha)
        return expired

    def clear_all(self) -> None:
        self._handles.clear()
        self._sink.on_overlays_cleared()
