"""Frame -> regions -> translations -> overlays."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

import numpy as np

from ..config.schemas import AppConfig
from .coordinator import TranslationBackend, TranslationCoordinator, TranslationRequest
from .detector import ContrastDetector, EasyOCRDetector, TextDetector
from .languages import LanguagePair
from .models import RecognizedRegion, TranslationStatus
from .overlays import OverlayLifecycleManager, OverlaySink
from .scanner import TextRegionScanner

logger = logging.getLogger(__name__)


class TranslationPipeline:
    """Wire a detector, a coordinator and an overlay manager together.

    One instance per process. ``tick`` is called once per rendered frame and
    ``process_frame`` whenever a new frame is available.
    """

    def __init__(
        self,
        detector: TextDetector,
        coordinator: TranslationCoordinator,
        overlays: OverlayLifecycleManager,
        recognition_interval: float = 0.5,
        status: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._detector = detector
        self._coordinator = coordinator
        self._overlays = overlays
        self._interval = recognition_interval
        self._since_scan = recognition_interval
        self._force_scan = False
        self._status = status

        self._detector.set_source_language(coordinator.language_pair.source)

    @property
    def coordinator(self) -> TranslationCoordinator:
        return self._coordinator

    @property
    def overlays(self) -> OverlayLifecycleManager:
        return self._overlays

    def _emit_status(self, message: str) -> None:
        if self._status:
            self._status(message)

    def process_frame(self, frame: np.ndarray) -> List[TranslationRequest]:
        """Detect text in ``frame`` and start translating it.

        Frames arriving within the recognition interval of the previous scan
        are dropped unless :meth:`trigger_recognition` was called.
        """
        if not self._force_scan and self._since_scan < self._interval:
            return []
        self._force_scan = False
        self._since_scan = 0.0

        requests = []
        for region in self._detector.detect(frame):
            request = self._coordinator.translate(region.text)
            request.add_done_callback(lambda req, region=region: self._on_translated(region, req))
            requests.append(request)
        return requests

    def trigger_recognition(self) -> None:
        self._force_scan = True

    def tick(self, delta: float) -> None:
        # Overlays first, so an overlay created by this tick's translations starts at zero.
        self._overlays.tick(delta)
        self._coordinator.tick(delta)
        self._since_scan += delta

    def set_language_pair(self, pair: LanguagePair) -> bool:
        changed = self._coordinator.set_language_pair(pair)
        if changed:
            self._detector.set_source_language(pair.source)
            self._emit_status(f"Language pair: {pair}")
        return changed

    def swap_languages(self) -> LanguagePair:
        pair = self._coordinator.swap_languages()
        self._detector.set_source_language(pair.source)
        self._emit_status(f"Language pair: {pair}")
        return pair

    def clear_overlays(self) -> None:
        self._overlays.clear_all()

    def stop(self) -> None:
        self._detector.stop()

    def _on_translated(self, region: RecognizedRegion, request: TranslationRequest) -> None:
        outcome = request.outcome
        if outcome.ok:
            self._overlays.display(region.text, outcome.translated_text, region.rect)
        elif outcome.status is TranslationStatus.FAILED:
            self._emit_status(f"Translation failed: {region.text[:30]}")
        elif outcome.status is TranslationStatus.TIMED_OUT:
            self._emit_status(f"Translation timed out: {region.text[:30]}")


def build_detector(config: AppConfig) -> TextDetector:
    if config.recognition.detector == "easyocr":
        return EasyOCRDetector(
            language=config.translation.language_pair.source,
            min_confidence=config.recognition.min_confidence,
        )
    scanner = TextRegionScanner.from_config(config.scanner)
    return ContrastDetector(scanner, placeholder_text=config.scanner.placeholder_text)


def build_pipeline(
    config: AppConfig,
    backend: TranslationBackend,
    sink: Optional[OverlaySink] = None,
    detector: Optional[TextDetector] = None,
    status: Optional[Callable[[str], None]] = None,
) -> TranslationPipeline:
    """Construct the pipeline described by ``config``."""
    coordinator = TranslationCoordinator(
        backend,
        pair=config.translation.language_pair,
        request_timeout=config.translation.request_timeout,
    )
    overlays = OverlayLifecycleManager.from_config(config.overlay, sink=sink)
    return TranslationPipeline(
        detector or build_detector(config),
        coordinator,
        overlays,
        recognition_interval=config.recognition.interval,
        status=status,
    )
