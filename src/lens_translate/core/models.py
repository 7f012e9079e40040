"""Value types shared by the recognition-to-overlay pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class NormalizedRect:
    """Rectangle in normalized frame coordinates, each axis in [0, 1]."""

    x: float
    y: float
    width: float
    height: float

    def to_screen(self, screen_width: float, screen_height: float) -> "ScreenRect":
        return ScreenRect(
            x=self.x * screen_width,
            y=self.y * screen_height,
            width=self.width * screen_width,
            height=self.height * screen_height,
        )


@dataclass(frozen=True)
class ScreenRect:
    """Rectangle in screen units."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class RecognizedRegion:
    """Text found in a frame together with where it was found."""

    text: str
    rect: NormalizedRect
    confidence: float = 1.0


class TranslationStatus(Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class TranslationOutcome:
    """Terminal result of a single translation request."""

    status: TranslationStatus
    text: str
    translated_text: Optional[str] = None
    from_cache: bool = False

    @property
    def ok(self) -> bool:
        return self.status is TranslationStatus.SUCCESS
