"""Translation cache scoped to the active language pair."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .languages import LanguagePair

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, LanguagePair]


def cache_key(text: str, pair: LanguagePair) -> CacheKey:
    return (text, pair)


@dataclass
class CacheEntry:
    key: CacheKey
    translated_text: str


class TranslationCache:
    """Remember translations so repeated sightings skip the network.

    All entries belong to one language pair. Rescoping to another pair drops
    every entry at once.
    """

    def __init__(self, pair: LanguagePair) -> None:
        self._pair = pair
        self._entries: Dict[CacheKey, CacheEntry] = {}

    @property
    def pair(self) -> LanguagePair:
        return self._pair

    def get(self, text: str) -> Optional[str]:
        entry = self._entries.get(cache_key(text, self._pair))
        return entry.translated_text if entry is not None else None

    def put(self, text: str, translated_text: str) -> None:
        # Last writer wins.
        key = cache_key(text, self._pair)
        self._entries[key] = CacheEntry(key=key, translated_text=translated_text)

    def rescope(self, pair: LanguagePair) -> None:
        dropped = len(self._entries)
        self._pair = pair
        self._entries.clear()
        logger.debug("Translation cache rescoped to %s, dropped %d entries", pair, dropped)

    def __contains__(self, text: str) -> bool:
        return cache_key(text, self._pair) in self._entries

    def __len__(self) -> int:
        return len(self._entries)
