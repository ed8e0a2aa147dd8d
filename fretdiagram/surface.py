"""The interactive surface of a fretboard diagram.

A hover surface is a transparent element covering the whole diagram, so
that pointer input always has a stable target whatever the shape of the
drawing underneath. It keeps at most one listener per event name.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Generator, List, Optional

from fretdiagram.base import Closeable
from fretdiagram.pointer import PointerEvent, Rect

Listener = Callable[[PointerEvent], None]
"""Receives the raw pointer events of one event name."""


class HoverSurface(Closeable):
    """Listener table attached to the overlay element of a diagram."""

    def __init__(self, element: Any, viewport: Rect) -> None:
        """Initialize the surface.

        Args:
            element: The overlay element in the scene.
            viewport: Where the whole diagram is shown, in client coordinates.
        """
        self.element = element
        self.viewport = viewport
        self._listeners: Dict[str, Listener] = {}

    def event_names(self) -> List[str]:
        return list(self._listeners)

    def get_listener(self, event_name: str) -> Optional[Listener]:
        return self._listeners.get(event_name)

    def add_listener(self, event_name: str, listener: Listener) -> None:
        """Attach a listener, detaching the one already registered for the name."""
        if event_name in self._listeners:
            self.remove_listener(event_name)
        self._listeners[event_name] = listener
        logging.debug("attached %s listener", event_name)

    def remove_listener(self, event_name: str) -> Optional[Listener]:
        """Detach the listener of an event name, returning it if there was one."""
        listener = self._listeners.pop(event_name, None)
        if listener is not None:
            logging.debug("detached %s listener", event_name)
        return listener

    @contextmanager
    def listening(
        self, event_name: str, listener: Listener
    ) -> Generator[HoverSurface, None, None]:
        """Attach a listener for the duration of a context.

        The listener is detached on exit unless it has been replaced in the
        meantime.
        """
        self.add_listener(event_name, listener)
        try:
            yield self
        finally:
            if self._listeners.get(event_name) is listener:
                self.remove_listener(event_name)

    def dispatch(self, event: PointerEvent) -> bool:
        """Deliver an event to the listener registered for its name.

        Returns:
            True if a listener received the event.
        """
        listener = self._listeners.get(event.type)
        if listener is None:
            return False
        listener(event)
        return True

    def close(self) -> None:
        for event_name in self.event_names():
            self.remove_listener(event_name)
