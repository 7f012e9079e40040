"""Pluggable text detectors producing recognized regions from frames."""

from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np

from .languages import Language
from .models import NormalizedRect, RecognizedRegion
from .scanner import TextRegionScanner

try:
    import easyocr
except ImportError:  # pragma: no cover
    easyocr = None

logger = logging.getLogger(__name__)

# easyocr names a few languages differently from the translation APIs.
EASYOCR_CODES = {Language.CHINESE: "ch_sim"}


class TextDetector:
    """Base class for anything that finds text in an RGB frame."""

    def set_source_language(self, language: Language) -> None:
        pass

    def detect(self, frame: np.ndarray) -> List[RecognizedRegion]:
        raise NotImplementedError

    def stop(self) -> None:
        pass


class ContrastDetector(TextDetector):
    """Report high-contrast cells, all labelled with a fixed placeholder text."""

    def __init__(self, scanner: TextRegionScanner, placeholder_text: str = "Sample Text") -> None:
        self._scanner = scanner
        self._placeholder_text = placeholder_text

    def detect(self, frame: np.ndarray) -> List[RecognizedRegion]:
        return list(self._scanner.scan(frame, self._placeholder_text))


class EasyOCRDetector(TextDetector):
    """Recognize text with EasyOCR and report each line's bounding box."""

    def __init__(self, language: Language = Language.ENGLISH, min_confidence: float = 0.3, gpu: bool = False) -> None:
        self._languages = self._easyocr_languages(language)
        self._min_confidence = min_confidence
        self._gpu = gpu
        self._reader: Optional["easyocr.Reader"] = None

    @staticmethod
    def _easyocr_languages(language: Language) -> List[str]:
        code = EASYOCR_CODES.get(language, language.code)
        return [code] if code == "en" else [code, "en"]

    def set_source_language(self, language: Language) -> None:
        languages = self._easyocr_languages(language)
        if languages != self._languages:
            self._languages = languages
            # Reader is rebuilt lazily for the new languages.
            self._reader = None

    def start(self) -> None:
        if easyocr is None:
            raise RuntimeError("easyocr is not installed. Install it with `pip install easyocr`.")
        if self._reader is None:
            logger.info("Loading EasyOCR reader for %s", ", ".join(self._languages))
            self._reader = easyocr.Reader(self._languages, gpu=self._gpu)

    def stop(self) -> None:
        self._reader = None

    def detect(self, frame: np.ndarray) -> List[RecognizedRegion]:
        if self._reader is None:
            self.start()
        height, width = frame.shape[:2]
        if height <= 0 or width <= 0:
            raise ValueError(f"Frame dimensions must be positive, got {width}x{height}")

        regions = []
        for box, text, confidence in self._reader.readtext(frame):
            if confidence < self._min_confidence or not text.strip():
                continue
            xs = [point[0] for point in box]
            ys = [point[1] for point in box]
            left, top = max(0.0, min(xs)), max(0.0, min(ys))
            right, bottom = min(float(width), max(xs)), min(float(height), max(ys))
            rect = NormalizedRect(left / width, top / height, (right - left) / width, (bottom - top) / height)
            regions.append(RecognizedRegion(text=text, rect=rect, confidence=float(confidence)))
        return regions
