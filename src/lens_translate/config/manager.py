"""Configuration manager for Lens Translate."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..core.languages import LanguagePair
from .schemas import AppConfig

logger = logging.getLogger(__name__)


@dataclass
class ConfigManager:
    """Load, update and persist the JSON configuration file."""

    config_path: Path = field(default_factory=lambda: Path.home() / ".lens_translate" / "config.json")
    _config: AppConfig = field(init=False)

    def __post_init__(self) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self._config = self._load_or_default()

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def language_pair(self) -> LanguagePair:
        return self._config.translation.language_pair

    def update(self, **kwargs: Any) -> None:
        """Replace top-level sections, e.g. ``update(overlay=OverlayConfig(...))``, and save."""
        self._config = self._config.model_copy(update=kwargs)
        self.save()

    def remember_language_pair(self, pair: LanguagePair) -> None:
        """Persist the active pair so the next start resumes with it."""
        translation = self._config.translation.model_copy(
            update={"source_language": pair.source.code, "target_language": pair.target.code}
        )
        self.update(translation=translation)

    def save(self) -> None:
        self.config_path.write_text(self._config.model_dump_json(indent=2), encoding="utf-8")

    def _load_or_default(self) -> AppConfig:
        if self.config_path.exists():
            logger.debug("Loading configuration from %s", self.config_path)
            return AppConfig.model_validate_json(self.config_path.read_text(encoding="utf-8"))
        config = AppConfig()
        self.config_path.write_text(config.model_dump_json(indent=2), encoding="utf-8")
        logger.info("Wrote default configuration to %s", self.config_path)
        return config
