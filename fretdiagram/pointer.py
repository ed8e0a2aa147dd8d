"""Pointer input handling for fretboard diagrams.

Mouse and touch events carry their coordinates differently: a mouse event
always has exactly one point, a touch event has zero or more contacts (the
release of a touch has none). Every event is reduced to a PointerSample,
whose first point is then mapped onto a (string, fret) cell of the board.
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from typing import Any, FrozenSet, Mapping, Optional, Sequence, Tuple, override

from fretdiagram.base import MatchException
from fretdiagram.position import Position

MOUSE_EVENTS: FrozenSet[str] = frozenset(
    {
        "click",
        "dblclick",
        "mousedown",
        "mouseup",
        "mousemove",
        "mouseenter",
        "mouseleave",
        "mouseover",
        "mouseout",
        "contextmenu",
    }
)
"""Event names carrying a single pointer coordinate."""

TOUCH_EVENTS: FrozenSet[str] = frozenset(
    {"touchstart", "touchmove", "touchend", "touchcancel"}
)
"""Event names carrying a list of touch contacts."""

STREAM_END_EVENTS: FrozenSet[str] = frozenset({"mouseleave", "touchcancel"})
"""Events ending a gesture; the remembered position is dropped after them."""


@dataclass(frozen=True)
class ClientPoint:
    """A point in client (screen) coordinates."""

    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle in client coordinates."""

    left: float
    top: float
    width: float
    height: float


class PointerSample(metaclass=ABCMeta):
    """The coordinates carried by one pointer event."""

    @abstractmethod
    def first_point(self) -> Optional[ClientPoint]:
        """Get the point used for hit testing, if the event carries any."""
        raise NotImplementedError()


@dataclass(frozen=True)
class Single(PointerSample):
    """Exactly one point, as carried by mouse events."""

    x: float
    y: float

    @override
    def first_point(self) -> Optional[ClientPoint]:
        return ClientPoint(self.x, self.y)


@dataclass(frozen=True)
class Multi(PointerSample):
    """One or more contact points, as carried by active touch events."""

    points: Tuple[ClientPoint, ...]

    @override
    def first_point(self) -> Optional[ClientPoint]:
        return self.points[0] if self.points else None


@dataclass(frozen=True)
class Empty(PointerSample):
    """No coordinates at all, e.g. the end of a touch."""

    @override
    def first_point(self) -> Optional[ClientPoint]:
        return None


class PointerEvent(metaclass=ABCMeta):
    """Abstract base class of the pointer events a fretboard reacts to."""

    type: str
    """Name of the event, e.g. "click" or "touchend"."""

    @abstractmethod
    def sample(self) -> PointerSample:
        """Extract the coordinates of this event."""
        raise NotImplementedError()


@dataclass(frozen=True)
class MouseEvent(PointerEvent):
    """A mouse event at a client coordinate."""

    type: str
    client_x: float
    client_y: float

    @override
    def sample(self) -> PointerSample:
        return Single(self.client_x, self.client_y)


@dataclass(frozen=True)
class TouchEvent(PointerEvent):
    """A touch event with its active contact points."""

    type: str
    touches: Tuple[ClientPoint, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "touches", tuple(self.touches))

    @override
    def sample(self) -> PointerSample:
        if self.touches:
            return Multi(self.touches)
        return Empty()


def find_string_index(local_y: float, height: float, string_count: int) -> Optional[int]:
    """Map a local y offset to a 0-based string index.

    Returns:
        The nearest string index, or None when it falls off the board.
    """
    if string_count < 2:
        return 0 if 0 <= local_y <= height else None
    found = round(local_y / (height / (string_count - 1)))
    if found < 0 or found >= string_count:
        return None
    return found


def find_fret(local_x: float, width: float, frets: Sequence[float], nut_width: float) -> int:
    """Map a local x offset to a fret number.

    The fret is the first boundary lying to the right of the point (the
    last fret beyond the end of the board); anything within the nut's
    stroke is the open string.
    """
    if local_x < nut_width:
        return 0
    percent_x = max(0.0, local_x) / width * 100
    for i, boundary in enumerate(frets):
        if percent_x < boundary:
            return i
    return len(frets) - 1


def position_from_pointer(
    event: PointerEvent,
    bounds: Rect,
    strings: Sequence[float],
    frets: Sequence[float],
    dots: Sequence[Position],
    nut_width: float,
    offset: int = 0,
) -> Optional[Position]:
    """Resolve the fretboard cell under a pointer event.

    Args:
        event: The pointer event.
        bounds: Client rectangle of the string area.
        strings: String offsets of the layout.
        frets: Fret boundaries of the layout, in percent of the width.
        dots: Current dots; a dot on the resolved cell is returned instead
            of a bare position.
        nut_width: Stroke width of the nut.
        offset: Crop offset of the view, added to the visible fret.

    Returns:
        The position under the pointer, or None when the event carries no
        coordinates or points outside the strings.
    """
    point = event.sample().first_point()
    if point is None:
        return None
    x = point.x - bounds.left
    y = point.y - bounds.top
    string_index = find_string_index(y, bounds.height, len(strings))
    if string_index is None:
        return None
    fret = find_fret(x, bounds.width, frets, nut_width) + offset
    string = string_index + 1
    for dot in dots:
        if dot.string == string and dot.fret == fret:
            return dot
    return Position(string=string, fret=fret)


def parse_event(data: Mapping[str, Any]) -> PointerEvent:
    """Build a pointer event from its serialized browser form.

    Mouse events carry "clientX" and "clientY"; touch events carry a
    "touches" list of such points.

    Raises:
        MatchException: If the event name is not a pointer event.
        KeyError: If a coordinate is missing.
    """
    event_type = data["type"]
    if event_type in MOUSE_EVENTS:
        return MouseEvent(event_type, data["clientX"], data["clientY"])
    elif event_type in TOUCH_EVENTS:
        touches = tuple(
            ClientPoint(t["clientX"], t["clientY"]) for t in data.get("touches", ())
        )
        return TouchEvent(event_type, touches)
    else:
        raise MatchException(event_type)
