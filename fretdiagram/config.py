"""Configuration for fretboard diagrams.

This module defines the frozen option set a fretboard is built from, the
parameters of the muted string overlay, and the validation rules that
reject inconsistent configurations before anything is drawn.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence, Tuple, Union

from fretdiagram import constants
from fretdiagram.base import ConfigError
from fretdiagram.constants import DEFAULT_COLORS, DEFAULT_DIMENSIONS

if TYPE_CHECKING:
    from fretdiagram.position import Position

StringWidth = Union[float, Sequence[float]]
"""A single stroke width for all strings, or one width per string."""

DotText = Callable[["Position"], str]
"""Produces the label drawn inside a dot."""

_UNIT = DEFAULT_DIMENSIONS["unit"]
_LINE = DEFAULT_DIMENSIONS["line"]


def empty_dot_text(dot: Position) -> str:
    """Default dot label: draw nothing."""
    return ""


@dataclass(frozen=True)
class Options:
    """Complete option set of a fretboard diagram.

    Every dimension is expressed in SVG user units. The tuning lists the
    open string pitches from the lowest string to the highest, while string
    numbers on the diagram run from 1 (highest) to string_count (lowest).
    """

    el: Optional[Any] = field(default=None, compare=False)
    """Container the diagram is mounted into (an svgwrite container), or None for a standalone drawing."""
    tuning: Tuple[str, ...] = tuple(constants.GUITAR_TUNINGS["default"])
    """Open string pitches, low to high."""
    string_count: int = 6
    string_width: StringWidth = _LINE
    string_color: str = DEFAULT_COLORS["line"]
    fret_count: int = constants.DEFAULT_FRET_COUNT
    fret_width: float = _LINE
    fret_color: str = DEFAULT_COLORS["line"]
    nut_width: float = DEFAULT_DIMENSIONS["nut"]
    nut_color: str = DEFAULT_COLORS["line"]
    middle_fret: int = constants.MIDDLE_FRET
    """Fret boundary drawn with the accent stroke."""
    middle_fret_color: str = DEFAULT_COLORS["highlight"]
    middle_fret_width: float = 3 * _LINE
    scale_frets: bool = True
    """Space frets like a real instrument instead of evenly."""
    crop: bool = False
    """Only show the fret range around the current dots."""
    fret_left_padding: int = 0
    """Extra frets kept visible left of the lowest dot when cropping."""
    top_padding: float = _UNIT
    bottom_padding: float = _UNIT * 0.75
    left_padding: float = _UNIT
    right_padding: float = _UNIT
    height: float = DEFAULT_DIMENSIONS["height"]
    width: float = DEFAULT_DIMENSIONS["width"]
    dot_size: float = _UNIT
    dot_stroke_color: str = DEFAULT_COLORS["dot_stroke"]
    dot_stroke_width: float = 2 * _LINE
    dot_text_size: float = constants.DEFAULT_FONT_SIZE
    dot_text_color: str = DEFAULT_COLORS["dot_text"]
    dot_fill: str = DEFAULT_COLORS["dot_fill"]
    dot_text: DotText = empty_dot_text
    disabled_opacity: float = 0.9
    show_fret_numbers: bool = True
    show_fret_markers: bool = True
    fret_marker_color: str = DEFAULT_COLORS["marker_dot"]
    fret_numbers_height: float = 2 * _UNIT
    fret_numbers_margin: float = _UNIT
    fret_numbers_color: str = DEFAULT_COLORS["line"]
    font: str = constants.DEFAULT_FONT_FAMILY
    barres_color: str = DEFAULT_COLORS["barres"]
    highlight_padding: float = _UNIT * 0.5
    highlight_radius: float = _UNIT * 0.5
    highlight_stroke: str = DEFAULT_COLORS["highlight_stroke"]
    highlight_fill: str = DEFAULT_COLORS["highlight_fill"]
    highlight_blend_mode: str = constants.DEFAULT_HIGHLIGHT_BLEND_MODE
    prefer_sharp: bool = True
    """Spell derived note names with sharps rather than flats."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "tuning", tuple(self.tuning))
        if not isinstance(self.string_width, (int, float)):
            object.__setattr__(self, "string_width", tuple(self.string_width))
        self.validate()

    def validate(self) -> None:
        """Check the option set for consistency.

        Raises:
            ConfigError: If the options describe an impossible fretboard.
        """
        if self.string_count != len(self.tuning):
            raise ConfigError(
                f"string_count ({self.string_count}) and tuning size "
                f"({len(self.tuning)}) do not match"
            )
        if self.string_count < 1:
            raise ConfigError(f"string_count must be positive: {self.string_count}")
        if self.fret_count < 1:
            raise ConfigError(f"fret_count must be positive: {self.fret_count}")
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"invalid dimensions: {self.width}x{self.height}")

    @classmethod
    def create(cls, **overrides: Any) -> Options:
        """Create options from the defaults with the given overrides.

        Args:
            **overrides: Option names and values to change.

        Returns:
            A validated Options instance.

        Raises:
            ConfigError: If the resulting options are inconsistent.
        """
        return cls(**overrides)

    def with_overrides(self, **overrides: Any) -> Options:
        """Derive new options from these with some values replaced."""
        return replace(self, **overrides)

    @property
    def is_standard_tuning(self) -> bool:
        return list(self.tuning) == constants.GUITAR_TUNINGS["default"]


@dataclass(frozen=True)
class MuteStringsParams:
    """Parameters of the muted string overlay."""

    strings: Tuple[int, ...] = ()
    """String numbers (1-based) to mark as muted."""
    width: float = constants.MUTED_STRING_WIDTH
    stroke_width: float = constants.MUTED_STRING_STROKE_WIDTH
    stroke: str = DEFAULT_COLORS["muted_string"]

    def __post_init__(self) -> None:
        object.__setattr__(self, "strings", tuple(self.strings))
