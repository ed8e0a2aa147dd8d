"""Tests for the hover surface listener table."""

from typing import List

from fretdiagram.pointer import MouseEvent, PointerEvent, Rect
from fretdiagram.surface import HoverSurface


def _surface() -> HoverSurface:
    return HoverSurface(element=None, viewport=Rect(0, 0, 100, 50))


def test_dispatch_to_listener() -> None:
    surface = _surface()
    received: List[PointerEvent] = []
    surface.add_listener("click", received.append)
    event = MouseEvent("click", 1, 2)
    assert surface.dispatch(event)
    assert not surface.dispatch(MouseEvent("mousemove", 1, 2))
    assert received == [event]


def test_listener_replacement() -> None:
    surface = _surface()
    first: List[PointerEvent] = []
    second: List[PointerEvent] = []
    surface.add_listener("click", first.append)
    surface.add_listener("click", second.append)
    surface.dispatch(MouseEvent("click", 1, 2))
    assert first == []
    assert len(second) == 1
    assert surface.event_names() == ["click"]


def test_listening_detaches_on_exit() -> None:
    surface = _surface()
    received: List[PointerEvent] = []
    with surface.listening("mousemove", received.append):
        surface.dispatch(MouseEvent("mousemove", 1, 2))
    surface.dispatch(MouseEvent("mousemove", 3, 4))
    assert len(received) == 1
    assert surface.get_listener("mousemove") is None


def test_listening_keeps_replacement() -> None:
    surface = _surface()
    replacement: List[PointerEvent] = []
    with surface.listening("click", lambda event: None):
        surface.add_listener("click", replacement.append)
    surface.dispatch(MouseEvent("click", 1, 2))
    assert len(replacement) == 1


def test_close_removes_listeners() -> None:
    surface = _surface()
    surface.add_listener("click", lambda event: None)
    surface.add_listener("touchend", lambda event: None)
    assert surface.remove_listener("missing") is None
    surface.close()
    assert surface.event_names() == []
    assert not surface.dispatch(MouseEvent("click", 1, 2))
