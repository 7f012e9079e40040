"""Translation coordinator: cache lookups, backend requests and deadlines."""

from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Callable, List, Optional, Tuple

from .cache import TranslationCache
from .languages import LanguagePair
from .models import TranslationOutcome, TranslationStatus

logger = logging.getLogger(__name__)

# Tolerance for float drift in summed frame deltas.
_EPSILON = 1e-9

# (text, source_code, target_code) -> Future resolving to (ok, translated_text)
TranslationBackend = Callable[[str, str, str], "Future[Tuple[bool, str]]"]


def _preview(text: str, limit: int = 30) -> str:
    return f"{text[:limit]}{'...' if len(text) > limit else ''}"


class TranslationRequest:
    """Handle for one call to :meth:`TranslationCoordinator.translate`.

    Requests answered from the cache (or skipped) are done on creation. The
    others finish during a later :meth:`TranslationCoordinator.tick`.
    """

    def __init__(self, text: str, pair: LanguagePair, future: Optional[Future] = None) -> None:
        self.text = text
        self.pair = pair
        self.elapsed = 0.0
        self._future = future
        self._outcome: Optional[TranslationOutcome] = None
        self._callbacks: List[Callable[["TranslationRequest"], None]] = []

    @property
    def done(self) -> bool:
        return self._outcome is not None

    @property
    def outcome(self) -> Optional[TranslationOutcome]:
        return self._outcome

    def add_done_callback(self, fn: Callable[["TranslationRequest"], None]) -> None:
        """Call ``fn(request)`` once finished, immediately if already finished."""
        if self.done:
            fn(self)
        else:
            self._callbacks.append(fn)

    def _finish(self, outcome: TranslationOutcome) -> None:
        self._outcome = outcome
        callbacks, self._callbacks = self._callbacks, []
        for fn in callbacks:
            fn(self)

    def __repr__(self) -> str:
        state = self._outcome.status.value if self._outcome else "pending"
        return f"<TranslationRequest {self.text!r} {self.pair} {state} elapsed={self.elapsed:.2f}>"


class TranslationCoordinator:
    """Turn recognized text into translated text for the active language pair.

    Not thread-safe: every method must be called from the thread that drives
    :meth:`tick`. The backend may do its work elsewhere; its future is only
    inspected from ``tick``.
    """

    def __init__(
        self,
        backend: TranslationBackend,
        pair: Optional[LanguagePair] = None,
        request_timeout: float = 5.0,
    ) -> None:
        if request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        self._backend = backend
        self._pair = pair or LanguagePair()
        self._timeout = request_timeout
        self._cache = TranslationCache(self._pair)
        self._pending: List[TranslationRequest] = []

    @property
    def language_pair(self) -> LanguagePair:
        return self._pair

    @property
    def cache(self) -> TranslationCache:
        return self._cache

    @property
    def pending(self) -> List[TranslationRequest]:
        return list(self._pending)

    # ------------------------------------------------------------------
    # Language pair
    # ------------------------------------------------------------------
    def set_language_pair(self, pair: LanguagePair) -> bool:
        """Activate ``pair``. Returns False (and keeps the cache) if unchanged."""
        if pair == self._pair:
            return False
        self._apply_pair(pair)
        return True

    def swap_languages(self) -> LanguagePair:
        """Reverse the active pair. The cache is always cleared."""
        self._apply_pair(self._pair.swapped())
        return self._pair

    def _apply_pair(self, pair: LanguagePair) -> None:
        self._pair = pair
        self._cache.rescope(pair)
        logger.info("Language pair set to %s", pair)

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------
    def translate(self, text: str) -> TranslationRequest:
        pair = self._pair
        request = TranslationRequest(text, pair)

        if not text or not text.strip():
            request._finish(TranslationOutcome(TranslationStatus.SKIPPED, text))
            return request

        cached = self._cache.get(text)
        if cached is not None:
            logger.debug("Cache hit for '%s'", _preview(text))
            request._finish(TranslationOutcome(TranslationStatus.SUCCESS, text, cached, from_cache=True))
            return request

        logger.debug("Requesting translation of '%s' (%s)", _preview(text), pair)
        try:
            request._future = self._backend(text, pair.source.code, pair.target.code)
        except Exception:
            logger.exception("Translation backend raised for '%s'", _preview(text))
            request._finish(TranslationOutcome(TranslationStatus.FAILED, text))
            return request

        self._pending.append(request)
        return request

    def tick(self, delta: float) -> List[TranslationRequest]:
        """Advance every pending request by ``delta`` and finish what is due.

        A backend result that is available is used even on the tick where the
        deadline passes. Results arriving after a timeout are ignored; a backend
        call that has not started yet is cancelled, one already running is left
        to finish.
        """
        if delta < 0:
            raise ValueError("delta must not be negative")

        finished: List[TranslationRequest] = []
        for request in list(self._pending):
            request.elapsed += delta
            if request._future.done():
                outcome = self._resolve(request)
            elif request.elapsed >= self._timeout - _EPSILON:
                request._future.cancel()
                logger.warning(
                    "Translation of '%s' timed out after %.2f", _preview(request.text), request.elapsed
                )
                outcome = TranslationOutcome(TranslationStatus.TIMED_OUT, request.text)
            else:
                continue
            self._pending.remove(request)
            request._finish(outcome)
            finished.append(request)
        return finished

    def _resolve(self, request: TranslationRequest) -> TranslationOutcome:
        try:
            ok, translated = request._future.result()
        except Exception:
            logger.exception("Translation backend failed for '%s'", _preview(request.text))
            return TranslationOutcome(TranslationStatus.FAILED, request.text)

        if not ok:
            logger.warning("Translation failed for '%s'", _preview(request.text))
            return TranslationOutcome(TranslationStatus.FAILED, request.text)

        if request.pair == self._pair:
            self._cache.put(request.text, translated)
        else:
            logger.debug("Not caching '%s': language pair changed while in flight", _preview(request.text))
        return TranslationOutcome(TranslationStatus.SUCCESS, request.text, translated)
