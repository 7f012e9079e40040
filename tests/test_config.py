"""Tests for configuration manager and schemas."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from lens_translate.config.manager import ConfigManager
from lens_translate.config.schemas import ApiConfig, ScannerConfig, TranslationConfig
from lens_translate.core.languages import Language


def test_config_manager_loads_defaults(tmp_path: Path) -> None:
    config_dir = tmp_path / "config"
    manager = ConfigManager(config_path=config_dir / "config.json")

    config = manager.config
    assert (config_dir / "config.json").exists()
    assert config.scanner.threshold == 0.5
    assert (config.scanner.cell_width, config.scanner.cell_height) == (20, 10)
    assert config.overlay.duration == 5.0
    assert config.overlay.position_quantum == 50
    assert config.translation.request_timeout == 5.0
    assert manager.language_pair.source is Language.ENGLISH
    assert manager.language_pair.target is Language.SPANISH


def test_translation_config_rejects_unknown_language() -> None:
    with pytest.raises(ValidationError):
        TranslationConfig(source_language="xx")


def test_translation_config_normalizes_codes() -> None:
    config = TranslationConfig(source_language="JA", target_language=" de ")

    assert config.language_pair.source is Language.JAPANESE
    assert config.language_pair.target is Language.GERMAN


def test_scanner_config_rejects_non_positive_values() -> None:
    with pytest.raises(ValidationError):
        ScannerConfig(cell_width=0)
    with pytest.raises(ValidationError):
        ScannerConfig(threshold=0)


def test_api_key_falls_back_to_environment(monkeypatch) -> None:
    monkeypatch.setenv("TRANSLATE_API_KEY", "env-key")

    assert ApiConfig().resolved_api_key() == "env-key"
    assert ApiConfig(api_key="explicit").resolved_api_key() == "explicit"
