"""Tests for overlay deduplication, fading and expiry."""

from __future__ import annotations

import pytest

from lens_translate.core.models import NormalizedRect, ScreenRect
from lens_translate.core.overlays import OverlayHandle, OverlayLifecycleManager, overlay_key


def at(x: float, y: float) -> ScreenRect:
    return ScreenRect(x, y, 40, 20)


@pytest.fixture
def manager(sink) -> OverlayLifecycleManager:
    return OverlayLifecycleManager(sink=sink, duration=5.0, position_quantum=50, screen_size=(1000, 1000))


def test_overlay_key_floors_into_buckets() -> None:
    assert overlay_key("X", 103, 207) == ("X", 2, 4)
    assert overlay_key("X", 109, 213) == ("X", 2, 4)
    assert overlay_key("X", 160, 207) == ("X", 3, 4)


def test_nearby_sightings_collapse(manager, sink) -> None:
    manager.display("X", "x", at(103, 207))
    manager.display("X", "x", at(109, 213))

    assert len(manager) == 1
    assert sink.kinds() == ["created", "updated"]

    manager.display("X", "x", at(160, 207))
    assert len(manager) == 2


def test_different_text_at_same_position_is_separate(manager) -> None:
    manager.display("X", "x", at(103, 207))
    manager.display("Y", "y", at(103, 207))

    assert len(manager) == 2


def test_normalized_rects_are_projected_to_screen(manager) -> None:
    handle = manager.display("X", "x", NormalizedRect(0.103, 0.207, 0.02, 0.01))

    assert handle.key == ("X", 2, 4)
    assert handle.rect.x == pytest.approx(103)


def test_new_overlay_starts_active(manager, sink) -> None:
    handle = manager.display("Hola", "Hello", at(0, 0))

    assert handle.elapsed == 0.0
    assert handle.total_duration == 5.0
    assert handle.alpha == 1.0
    assert sink.events == [("created", ("Hola", 0, 0), "Hello")]


def test_fade_and_expiry(manager, sink) -> None:
    handle = manager.display("Hola", "Hello", at(0, 0))
    key = handle.key

    manager.tick(4.0)
    assert handle.alpha == 1.0
    assert "alpha" not in sink.kinds()

    manager.tick(0.5)
    assert handle.alpha == pytest.approx(0.5)

    manager.tick(0.25)
    assert handle.alpha == pytest.approx(0.25)
    assert key in manager

    assert manager.tick(0.25) == [key]
    assert key not in manager
    assert sink.events[-1] == ("expired", key)


def test_expiry_fires_once(manager, sink) -> None:
    manager.display("Hola", "Hello", at(0, 0))

    manager.tick(10.0)
    manager.tick(1.0)

    assert sink.kinds().count("expired") == 1
    assert len(manager) == 0


def test_display_refreshes_fading_overlay(manager, sink) -> None:
    handle = manager.display("Hola", "Hello", at(0, 0))
    manager.tick(4.5)
    assert handle.fading

    again = manager.display("Hola", "Hi", at(10, 10))

    assert again is handle
    assert handle.elapsed == 0.0
    assert handle.alpha == 1.0
    assert handle.translated_text == "Hi"
    assert handle.total_duration == 5.0
    assert sink.events[-2:] == [("updated", handle.key, "Hi"), ("alpha", handle.key, 1.0)]

    manager.tick(4.5)
    assert handle.key in manager


def test_alpha_is_clamped() -> None:
    handle = OverlayHandle(key=("X", 0, 0), original_text="X", translated_text="x", rect=at(0, 0), total_duration=5.0)

    handle.elapsed = 12.0
    assert handle.alpha == 0.0

    short = OverlayHandle(key=("X", 0, 0), original_text="X", translated_text="x", rect=at(0, 0), total_duration=0.5)
    assert short.alpha == pytest.approx(0.5)


def test_clear_all(manager, sink) -> None:
    manager.display("A", "a", at(0, 0))
    manager.display("B", "b", at(100, 0))

    manager.clear_all()

    assert len(manager) == 0
    assert sink.kinds() == ["created", "created", "cleared"]


def test_custom_duration(manager) -> None:
    handle = manager.display("A", "a", at(0, 0), duration=2.0)

    manager.tick(1.5)
    assert handle.alpha == pytest.approx(0.5)
    assert manager.tick(0.5) == [handle.key]


def test_invalid_arguments(manager) -> None:
    with pytest.raises(ValueError):
        manager.display("A", "a", at(0, 0), duration=-1.0)
    with pytest.raises(ValueError):
        manager.tick(-0.1)
    with pytest.raises(ValueError):
        OverlayLifecycleManager(duration=0)


def test_expiry_at_ten_frames_per_second(manager, sink) -> None:
    handle = manager.display("Hola", "Hello", at(0, 0))

    for _ in range(49):
        manager.tick(0.1)
    assert handle.key in manager

    manager.tick(0.1)
    assert len(manager) == 0
    assert sink.kinds().count("expired") == 1


def test_alpha_stays_opaque_until_fade_window_at_ten_frames_per_second(manager) -> None:
    handle = manager.display("Hola", "Hello", at(0, 0))

    for _ in range(40):
        manager.tick(0.1)

    assert handle.alpha == 1.0
    manager.tick(0.1)
    assert handle.alpha == pytest.approx(0.9)
