"""Tests for the contrast-scan region proposer."""

from __future__ import annotations

import numpy as np
import pytest

from lens_translate.core.models import NormalizedRect
from lens_translate.core.scanner import TextRegionScanner, to_luminance


def blank_frame(width: int, height: int, value: float = 0.0) -> np.ndarray:
    return np.full((height, width, 3), value, dtype=np.float64)


def test_uniform_frame_yields_no_regions() -> None:
    scanner = TextRegionScanner()

    assert list(scanner.scan(blank_frame(100, 50, 0.7), "text")) == []


def test_single_high_contrast_cell_yields_one_region() -> None:
    frame = blank_frame(40, 20)
    # Right half of the bottom-right cell is white.
    frame[10:20, 30:40] = 1.0

    regions = list(TextRegionScanner().scan(frame, "Sample Text"))

    assert len(regions) == 1
    assert regions[0].text == "Sample Text"
    assert regions[0].rect == NormalizedRect(0.5, 0.5, 0.5, 0.5)


def test_frame_smaller_than_a_cell_yields_nothing() -> None:
    frame = blank_frame(10, 5)
    frame[0, 0] = 1.0

    assert list(TextRegionScanner().scan(frame, "text")) == []


def test_contrast_equal_to_threshold_is_excluded() -> None:
    frame = blank_frame(20, 10)
    frame[0, 0] = (1.0, 0.0, 0.0)  # luminance 0.299

    assert list(TextRegionScanner(threshold=0.299).scan(frame, "t")) == []
    assert len(list(TextRegionScanner(threshold=0.298).scan(frame, "t"))) == 1


def test_partial_trailing_cells_are_skipped() -> None:
    frame = blank_frame(45, 15)
    frame[:, 40:45] = 1.0
    frame[10:15, :] = 1.0

    assert list(TextRegionScanner().scan(frame, "t")) == []


def test_scan_order_is_row_major() -> None:
    frame = blank_frame(60, 20)
    for x, y in [(40, 10), (0, 0), (20, 10)]:
        frame[y, x] = 1.0

    rects = [region.rect for region in TextRegionScanner().scan(frame, "t")]

    assert [(round(r.x * 60), round(r.y * 20)) for r in rects] == [(0, 0), (20, 10), (40, 10)]


def test_eight_bit_frames_are_scaled() -> None:
    frame = np.zeros((10, 20, 4), dtype=np.uint8)
    frame[0, 0, :3] = 255

    assert len(list(TextRegionScanner().scan(frame, "t"))) == 1
    assert to_luminance(frame)[0, 0] == pytest.approx(1.0)


def test_scan_is_lazy() -> None:
    frame = blank_frame(40, 10)
    frame[0, 0] = 1.0
    frame[0, 20] = 1.0

    regions = TextRegionScanner().scan(frame, "t")

    assert next(regions).rect.x == 0.0
    assert next(regions).rect.x == 0.5
    with pytest.raises(StopIteration):
        next(regions)


def test_malformed_frames_fail_fast() -> None:
    scanner = TextRegionScanner()

    with pytest.raises(ValueError):
        scanner.scan(np.zeros((10, 20)), "t")
    with pytest.raises(ValueError):
        scanner.scan(np.zeros((0, 20, 3)), "t")
    with pytest.raises(ValueError):
        TextRegionScanner(cell_width=0)
