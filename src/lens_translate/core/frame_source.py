"""Screen frame source based on mss."""

from __future__ import annotations

from typing import Optional

import mss
import numpy as np

from ..config.schemas import WindowConfig


class ScreenFrameSource:
    """Grab a screen region as an RGB numpy array."""

    def __init__(self, region: WindowConfig) -> None:
        self._region = region
        self._sct: Optional[mss.base.MSSBase] = None

    def start(self) -> None:
        if self._sct is None:
            self._sct = mss.mss()

    def stop(self) -> None:
        if self._sct is not None:
            self._sct.close()
            self._sct = None

    def grab(self) -> np.ndarray:
        if self._sct is None:
            self.start()
        monitor = {
            "left": self._region.x,
            "top": self._region.y,
            "width": self._region.width,
            "height": self._region.height,
        }
        raw = np.array(self._sct.grab(monitor))
        # mss returns BGRA.
        return raw[:, :, 2::-1]
