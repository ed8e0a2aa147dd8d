"""Position data model for fretboard diagrams.

A Position is one (string, fret) cell of the fretboard, optionally carrying
musical annotations and free-form tags. Both rendering and hit testing use
it, and class tags derived from it give styling a stable vocabulary of
selectors.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Generator, Mapping, Optional, Sequence, Tuple, Union

Scalar = Union[str, int, float, bool]
"""A single tag value."""

TagValue = Union[Scalar, Tuple[Scalar, ...]]
"""A tag value: one scalar or a tuple of scalars."""

_CORE_FIELDS = (
    "string",
    "fret",
    "note",
    "disabled",
    "octave",
    "interval",
    "degree",
    "chroma",
)

_ACCIDENTAL_WORDS: Tuple[Tuple[str, str], ...] = (
    ("##", "double-sharp"),
    ("𝄪", "double-sharp"),
    ("♯♯", "double-sharp"),
    ("bb", "double-flat"),
    ("𝄫", "double-flat"),
    ("♭♭", "double-flat"),
    ("#", "sharp"),
    ("♯", "sharp"),
    ("b", "flat"),
    ("♭", "flat"),
)


@dataclass(frozen=True)
class Point:
    """A point in diagram coordinates."""

    x: float
    y: float


@dataclass(frozen=True)
class Position:
    """A single cell of the fretboard.

    String numbers are 1-based, 1 being the highest-pitched string. Fret 0
    is the open string. Annotations are optional; anything else a data
    source wants to attach (for later filtering or styling) goes into tags.
    """

    string: int
    """String number, 1 (highest pitch) to string count (lowest)."""
    fret: int
    """Fret number, 0 for the open string."""
    note: Optional[str] = None
    """Display name of the note sounding at this position."""
    disabled: Optional[bool] = None
    octave: Optional[int] = None
    interval: Optional[str] = None
    """Interval from the root of the scale or chord, e.g. "3M"."""
    degree: Optional[int] = None
    """Scale degree, 1-based."""
    chroma: Optional[int] = None
    """Pitch class, 0-11."""
    tags: Mapping[str, TagValue] = field(default_factory=dict, hash=False)
    """Free-form attributes used only for styling and filtering."""

    def get(self, key: str, default: Any = None) -> Any:
        """Read a core field or a tag by name."""
        if key in _CORE_FIELDS:
            value = getattr(self, key)
            return default if value is None else value
        return self.tags.get(key, default)

    def with_tags(self, **tags: TagValue) -> Position:
        """Derive a position with extra tags merged in."""
        merged: Dict[str, TagValue] = dict(self.tags)
        merged.update(tags)
        return replace(self, tags=merged)

    def attributes(self) -> Generator[Tuple[str, TagValue], None, None]:
        """Iterate over every populated attribute, core fields first.

        Yields:
            (name, value) pairs, skipping unset core fields.
        """
        for f in fields(self):
            if f.name == "tags":
                continue
            value = getattr(self, f.name)
            if value is not None:
                yield f.name, value
        for key, value in self.tags.items():
            if value is not None:
                yield key, value

    def same_cell(self, other: Position) -> bool:
        return self.string == other.string and self.fret == other.fret


@dataclass(frozen=True)
class Barre:
    """A bar spanning a range of strings at one fret."""

    fret: int
    string_from: Optional[int] = None
    """Lowest-pitched string of the barre (highest number), default the last string."""
    string_to: Optional[int] = None
    """Highest-pitched string of the barre (lowest number), default string 1."""

    def normalize(self, string_count: int) -> Barre:
        """Resolve missing bounds and clamp the range to the board.

        Args:
            string_count: Number of strings on the board.

        Returns:
            A barre with both bounds set, string_from >= string_to.
        """
        string_from = self.string_from if self.string_from else string_count
        string_to = self.string_to if self.string_to else 1
        string_from = max(1, min(string_from, string_count))
        string_to = max(1, min(string_to, string_count))
        if string_from < string_to:
            string_from, string_to = string_to, string_from
        return Barre(fret=self.fret, string_from=string_from, string_to=string_to)


@dataclass(frozen=True)
class AreaBounds:
    """Corners of the rectangle enclosing a set of positions."""

    top_left: Position
    top_right: Position
    bottom_left: Position
    bottom_right: Position

    @classmethod
    def of(cls, area: Sequence[Position]) -> AreaBounds:
        """Compute the corners enclosing the given positions.

        Top means the highest-pitched (lowest numbered) string.
        """
        strings = [p.string for p in area]
        frets = [p.fret for p in area]
        min_string, max_string = min(strings), max(strings)
        min_fret, max_fret = min(frets), max(frets)
        return cls(
            top_left=Position(string=min_string, fret=min_fret),
            top_right=Position(string=min_string, fret=max_fret),
            bottom_left=Position(string=max_string, fret=min_fret),
            bottom_right=Position(string=max_string, fret=max_fret),
        )


def kebab_case(name: str) -> str:
    """Convert snake_case or camelCase names to kebab-case."""
    spaced = re.sub(r"([a-z0-9])([A-Z])", r"\1-\2", name)
    return re.sub(r"[_\s]+", "-", spaced).lower()


def _render_value(key: str, value: Scalar) -> Optional[str]:
    if isinstance(value, bool):
        return None if value else "false"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value)
    if key == "note" and len(text) > 1:
        for symbol, word in _ACCIDENTAL_WORDS:
            if text.endswith(symbol):
                return f"{text[0]}-{word}"
    return text


def _render_class(prefix: str, key: str, value: Scalar) -> str:
    parts = ["dot", prefix, kebab_case(key), _render_value(key, value)]
    return "-".join(p for p in parts if p)


def dot_classes(dot: Position, prefix: str = "") -> str:
    """Build the class tags of a dot.

    The result holds an identity tag for the cell and one tag per attribute
    value (one per element for tuple values), e.g. for an open low E:
    "dot-id-s6:f0 dot-string-6 dot-fret-0 dot-note-E". A True flag renders
    as the bare attribute tag ("dot-disabled"), False as "dot-disabled-false".

    Args:
        dot: The position to describe.
        prefix: Optional namespace inserted after "dot".

    Returns:
        Whitespace-joined class names.
    """
    classes = []
    if prefix:
        classes.append(f"dot-{prefix}")
    classes.append(f"dot-id-s{dot.string}:f{dot.fret}")
    for key, value in dot.attributes():
        values = value if isinstance(value, (tuple, list)) else (value,)
        classes.extend(_render_class(prefix, key, v) for v in values)
    return " ".join(classes)
