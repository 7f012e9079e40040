"""Shared pytest fixtures: Qt application and a controllable translation backend."""

from __future__ import annotations

import os
from concurrent.futures import Future
from typing import List, Tuple

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


class DummyBackend:
    """Translation backend whose futures are resolved by the test."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, str, str]] = []
        self.futures: List[Future] = []

    def __call__(self, text: str, source: str, target: str) -> Future:
        future: Future = Future()
        self.calls.append((text, source, target))
        self.futures.append(future)
        return future

    def start(self, index: int) -> None:
        """Mark a call as picked up by a worker, so it can no longer be cancelled."""
        self.futures[index].set_running_or_notify_cancel()

    def resolve(self, index: int, ok: bool, text: str = "") -> None:
        self.futures[index].set_result((ok, text))


class RecordingSink:
    """Overlay sink that records every event it receives."""

    def __init__(self) -> None:
        self.events: list = []

    def on_overlay_created(self, key, text, rect) -> None:
        self.events.append(("created", key, text))

    def on_overlay_updated(self, key, text, rect) -> None:
        self.events.append(("updated", key, text))

    def on_overlay_alpha_changed(self, key, alpha) -> None:
        self.events.append(("alpha", key, alpha))

    def on_overlay_expired(self, key) -> None:
        self.events.append(("expired", key))

    def on_overlays_cleared(self) -> None:
        self.events.append(("cleared",))

    def kinds(self) -> List[str]:
        return [event[0] for event in self.events]


@pytest.fixture
def backend() -> DummyBackend:
    return DummyBackend()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
