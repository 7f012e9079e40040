"""HTTP translation backends (LibreTranslate and Google Translate v2)."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional, Tuple

import requests

from ..config.schemas import ApiConfig

logger = logging.getLogger(__name__)


class Translator:
    """Call a translation web service off the tick thread.

    Instances are the coordinator's backend: calling one submits the request
    to a worker pool and returns a future resolving to ``(ok, text)``.
    """

    def __init__(
        self,
        api_config: ApiConfig,
        executor: Optional[ThreadPoolExecutor] = None,
        log: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._api_config = api_config
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=api_config.max_workers, thread_name_prefix="translate"
        )
        self._log_callback = log

    def _log(self, message: str) -> None:
        logger.debug(message)
        if self._log_callback:
            self._log_callback(message)

    def __call__(self, text: str, source: str, target: str) -> "Future[Tuple[bool, str]]":
        return self._executor.submit(self.translate, text, source, target)

    def translate(self, text: str, source: str, target: str) -> Tuple[bool, str]:
        """Translate synchronously. Never raises for network or payload errors."""
        self._log(f"Translating {len(text)} chars {source}→{target} via {self._api_config.provider}")
        try:
            if self._api_config.provider == "google":
                translated = self._translate_google(text, source, target)
            else:
                translated = self._translate_libre(text, source, target)
        except requests.RequestException as exc:
            logger.warning("Translation API error: %s", exc)
            return False, ""
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            logger.warning("Failed to parse translation response: %s", exc)
            return False, ""

        if not translated:
            logger.warning("Translation response contained no text")
            return False, ""
        return True, translated

    def _translate_libre(self, text: str, source: str, target: str) -> str:
        form = {"q": text, "source": source, "target": target, "format": "text"}
        api_key = self._api_config.resolved_api_key()
        if api_key:
            form["api_key"] = api_key

        response = requests.post(self._api_config.libretranslate_url, data=form, timeout=self._api_config.http_timeout)
        self._log(f"LibreTranslate status: {response.status_code}")
        response.raise_for_status()
        return response.json()["translatedText"]

    def _translate_google(self, text: str, source: str, target: str) -> str:
        params = {"q": text, "source": source, "target": target, "key": self._api_config.resolved_api_key()}

        response = requests.get(self._api_config.google_url, params=params, timeout=self._api_config.http_timeout)
        self._log(f"Google Translate status: {response.status_code}")
        response.raise_for_status()
        return response.json()["data"]["translations"][0]["translatedText"]

    def shutdown(self) -> None:
        """Stop the worker pool without waiting for abandoned requests."""
        if self._owns_executor:
            self._executor.shutdown(wait=False)
