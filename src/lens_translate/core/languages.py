"""Supported languages and the active translation direction."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List


class Language(Enum):
    """Languages understood by the translation backends."""

    ENGLISH = "en"
    SPANISH = "es"
    FRENCH = "fr"
    GERMAN = "de"
    ITALIAN = "it"
    PORTUGUESE = "pt"
    RUSSIAN = "ru"
    CHINESE = "zh"
    JAPANESE = "ja"
    KOREAN = "ko"
    ARABIC = "ar"

    @property
    def code(self) -> str:
        """Return the short code used by translation APIs."""
        return self.value

    @property
    def display_name(self) -> str:
        return self.name.title()

    @classmethod
    def from_code(cls, code: str) -> "Language":
        """Decode an API language code, falling back to English."""
        try:
            return cls(code.strip().lower())
        except ValueError:
            return cls.ENGLISH


def available_languages() -> List[Language]:
    return list(Language)


@dataclass(frozen=True)
class LanguagePair:
    """Source and target language of the active translation direction."""

    source: Language = Language.ENGLISH
    target: Language = Language.SPANISH

    def swapped(self) -> "LanguagePair":
        return LanguagePair(source=self.target, target=self.source)

    def __str__(self) -> str:
        return f"{self.source.code}→{self.target.code}"
