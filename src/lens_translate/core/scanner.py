"""Grid-based contrast scan that proposes candidate text regions."""

from __future__ import annotations

from typing import Iterator

import numpy as np

from ..config.schemas import ScannerConfig
from .models import NormalizedRect, RecognizedRegion

LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114])


def to_luminance(frame: np.ndarray) -> np.ndarray:
    """Convert an RGB(A) frame to a 2-D luminance array in [0, 1].

    Integer frames are assumed to be 8-bit and are scaled by 1/255.
    """
    if frame.ndim != 3 or frame.shape[2] < 3:
        raise ValueError(f"Expected an (height, width, channels>=3) frame, got shape {frame.shape}")
    height, width = frame.shape[:2]
    if height <= 0 or width <= 0:
        raise ValueError(f"Frame dimensions must be positive, got {width}x{height}")

    rgb = frame[:, :, :3].astype(np.float64)
    if np.issubdtype(frame.dtype, np.integer):
        rgb /= 255.0
    return rgb @ LUMA_WEIGHTS


class TextRegionScanner:
    """Report grid cells whose luminance contrast exceeds a threshold.

    This is a stand-in for a real detector: it decides *where* text might be,
    never what it says. Every reported region carries the caller's text.
    """

    def __init__(self, threshold: float = 0.5, cell_width: int = 20, cell_height: int = 10) -> None:
        if cell_width <= 0 or cell_height <= 0:
            raise ValueError("Cell dimensions must be positive")
        self.threshold = threshold
        self.cell_width = cell_width
        self.cell_height = cell_height

    @classmethod
    def from_config(cls, config: ScannerConfig) -> "TextRegionScanner":
        return cls(threshold=config.threshold, cell_width=config.cell_width, cell_height=config.cell_height)

    def scan(self, frame: np.ndarray, text: str) -> Iterator[RecognizedRegion]:
        """Lazily yield one region per high-contrast cell, row by row.

        The frame is validated eagerly; the cells are visited on iteration.
        Trailing pixels that do not fill a whole cell are ignored.
        """
        luminance = to_luminance(frame)
        return self._iter_regions(luminance, text)

    def _iter_regions(self, luminance: np.ndarray, text: str) -> Iterator[RecognizedRegion]:
        height, width = luminance.shape
        cw, ch = self.cell_width, self.cell_height

        for y in range(0, height - ch + 1, ch):
            for x in range(0, width - cw + 1, cw):
                cell = luminance[y : y + ch, x : x + cw]
                contrast = float(cell.max() - cell.min())
                if contrast > self.threshold:
                    yield RecognizedRegion(
                        text=text,
                        rect=NormalizedRect(x / width, y / height, cw / width, ch / height),
                    )
