"""Pydantic schemas for application configuration."""

from __future__ import annotations

import os
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..core.languages import Language, LanguagePair


class WindowConfig(BaseModel):
    """Geometry of the captured screen region."""

    x: int = Field(0, ge=0)
    y: int = Field(0, ge=0)
    width: int = Field(1280, ge=1)
    height: int = Field(720, ge=1)


class CaptureConfig(BaseModel):
    """Where frames come from and how often the pipeline ticks."""

    region: WindowConfig = WindowConfig()
    frame_interval_ms: int = Field(33, ge=5, le=1000)


class ScannerConfig(BaseModel):
    """Parameters of the contrast-scan region proposer."""

    threshold: float = Field(0.5, gt=0.0, le=1.0)
    cell_width: int = Field(20, ge=1)
    cell_height: int = Field(10, ge=1)
    placeholder_text: str = "Sample Text"


class RecognitionConfig(BaseModel):
    """Which detector runs and how often."""

    detector: Literal["contrast", "easyocr"] = "contrast"
    interval: float = Field(0.5, ge=0.0)
    min_confidence: float = Field(0.3, ge=0.0, le=1.0)


class TranslationConfig(BaseModel):
    """Active language pair and request deadline."""

    source_language: str = "en"
    target_language: str = "es"
    request_timeout: float = Field(5.0, gt=0.0)

    @field_validator("source_language", "target_language")
    @classmethod
    def _known_language(cls, value: str) -> str:
        code = value.strip().lower()
        if code not in {language.code for language in Language}:
            raise ValueError(f"Unsupported language code: {value!r}")
        return code

    @property
    def language_pair(self) -> LanguagePair:
        return LanguagePair(Language.from_code(self.source_language), Language.from_code(self.target_language))


class OverlayConfig(BaseModel):
    """Lifetime and placement of translated overlays."""

    duration: float = Field(5.0, gt=0.0)
    position_quantum: float = Field(50.0, gt=0.0)
    screen_width: int = Field(1280, ge=1)
    screen_height: int = Field(720, ge=1)


class ApiConfig(BaseModel):
    """Endpoint and credentials of the translation service."""

    provider: Literal["libretranslate", "google"] = "libretranslate"
    libretranslate_url: str = "https://libretranslate.com/translate"
    google_url: str = "https://translation.googleapis.com/language/translate/v2"
    api_key: Optional[str] = Field(default=None, repr=False)
    http_timeout: float = Field(10.0, gt=0.0)
    max_workers: int = Field(4, ge=1, le=32)

    def resolved_api_key(self) -> str:
        """Return the configured key or the ``TRANSLATE_API_KEY`` environment variable."""
        return self.api_key or os.environ.get("TRANSLATE_API_KEY", "")


class OverlayStyle(BaseModel):
    """Styling options for overlay labels."""

    font_family: str = "Arial"
    font_size: int = Field(16, ge=8, le=96)
    text_color: str = "#FFFFFF"
    background_color: str = "#AA000000"


class AppConfig(BaseModel):
    """Root configuration model for the application."""

    capture: CaptureConfig = CaptureConfig()
    scanner: ScannerConfig = ScannerConfig()
    recognition: RecognitionConfig = RecognitionConfig()
    translation: TranslationConfig = TranslationConfig()
    overlay: OverlayConfig = OverlayConfig()
    api: ApiConfig = ApiConfig()
    overlay_style: OverlayStyle = OverlayStyle()
