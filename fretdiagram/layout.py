"""Layout generation for fretboard diagrams.

Pure functions computing where strings, frets, dots and inlay markers go.
String offsets are in diagram units on [0, height]; fret boundaries are
percentages of the usable width on [0, 100], also available scaled to
diagram units. The layout of a fretboard is computed once and never
changes afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from fretdiagram import constants
from fretdiagram.config import Options, StringWidth
from fretdiagram.position import Point


def string_thickness(string_width: StringWidth, string_index: int) -> float:
    """Get the stroke width of one string.

    Args:
        string_width: A single width, or one width per string.
        string_index: 0-based index of the string, top to bottom.

    Returns:
        The stroke width, 1 when a per-string list has no entry for it.
    """
    if isinstance(string_width, (int, float)):
        return string_width
    if 0 <= string_index < len(string_width) and string_width[string_index]:
        return string_width[string_index]
    return 1


def generate_strings(
    string_count: int, height: float, string_width: StringWidth
) -> List[float]:
    """Compute the y offset of every string.

    Strings are spread evenly over [0, height]. The first and last strings
    are moved inwards by half of their own stroke width so that their
    strokes stay inside the diagram.

    Args:
        string_count: Number of strings.
        height: Height of the string area.
        string_width: A single stroke width, or one per string.

    Returns:
        The y offset of each string, top to bottom.
    """
    strings: List[float] = []
    spacing = height / (string_count - 1) if string_count > 1 else 0.0
    for i in range(string_count):
        thickness = string_thickness(string_width, i)
        y = spacing * i
        if i == 0:
            y += thickness / 2
        if i == string_count - 1 and string_count > 1:
            y -= thickness / 2
        strings.append(y)
    return strings


def generate_frets(fret_count: int, scale_frets: bool) -> List[float]:
    """Compute the fret boundaries as percentages of the usable width.

    With scale_frets the boundaries follow the equal-tempered law
    100 - 100 / r**i (r being the twelfth root of two), so frets get closer
    towards the body; otherwise they are evenly spaced. Either way the
    sequence is rescaled so that the last boundary is exactly 100.

    Args:
        fret_count: Number of frets.
        scale_frets: Whether to use realistic spacing.

    Returns:
        fret_count + 1 boundaries, the first one (the nut) being 0.
    """
    frets = [0.0]
    for i in range(1, fret_count + 1):
        if scale_frets:
            x = 100 - 100 / constants.FRET_RATIO**i
        else:
            x = 100 / fret_count * i
        frets.append(x)
    last = frets[-1]
    normalized = [x / last * 100 for x in frets]
    normalized[-1] = 100.0
    return normalized


def dot_coords(
    string: int, fret: int, fret_xs: Sequence[float], strings: Sequence[float]
) -> Point:
    """Compute where the dot for a (string, fret) cell is drawn.

    An open string dot sits on the nut; a fretted dot sits halfway between
    its fret and the previous one.
    """
    if fret == 0:
        x = fret_xs[0] / 2
    else:
        x = fret_xs[fret] - (fret_xs[fret] - fret_xs[fret - 1]) / 2
    return Point(x=x, y=strings[string - 1])


def generate_positions(
    string_count: int,
    fret_count: int,
    fret_xs: Sequence[float],
    strings: Sequence[float],
) -> List[List[Point]]:
    """Build the dense table of dot coordinates, indexed [string - 1][fret]."""
    return [
        [dot_coords(string, fret, fret_xs, strings) for fret in range(fret_count + 1)]
        for string in range(1, string_count + 1)
    ]


def fret_markers(
    fret_count: int, fret_xs: Sequence[float], offset: int = 0
) -> Tuple[List[float], Optional[float]]:
    """Compute the x offsets of the inlay markers.

    Markers stay on their musical frets: when the view is cropped by an
    offset, marker fret f is drawn on visible fret f - offset, and markers
    falling outside the visible frets are dropped.

    Args:
        fret_count: Number of visible frets.
        fret_xs: Fret boundaries in diagram units.
        offset: Crop offset of the view.

    Returns:
        The single marker offsets, and the double marker offset when the
        twelfth fret is visible (None otherwise).
    """

    def midpoint(fret: int) -> float:
        return (fret_xs[fret - 1] + fret_xs[fret]) / 2

    markers = [
        midpoint(fret - offset)
        for fret in constants.SINGLE_MARKER_FRETS
        if 1 <= fret - offset <= fret_count
    ]
    double: Optional[float] = None
    shown = constants.DOUBLE_MARKER_FRET - offset
    if 1 <= shown <= fret_count:
        double = midpoint(shown)
    return markers, double


def get_dimensions(options: Options) -> Tuple[float, float]:
    """Compute the total size of the diagram including paddings.

    Returns:
        (total_width, total_height); the height includes the fret number
        row when fret numbers are shown.
    """
    total_width = options.width + options.left_padding + options.right_padding
    total_height = options.height + options.top_padding + options.bottom_padding
    if options.show_fret_numbers:
        total_height += options.fret_numbers_height
    return total_width, total_height


@dataclass(frozen=True)
class Layout:
    """The complete geometry of one fretboard."""

    strings: List[float]
    """y offset per string, top (string 1) to bottom."""
    frets: List[float]
    """Fret boundaries as percentages of the width, nut first."""
    fret_xs: List[float]
    """Fret boundaries in diagram units."""
    positions: List[List[Point]]
    """Dot coordinates indexed [string - 1][fret]."""
    markers: List[float]
    double_marker: Optional[float]
    total_width: float
    total_height: float

    @classmethod
    def build(cls, options: Options) -> Layout:
        """Compute the geometry described by a set of options."""
        strings = generate_strings(
            options.string_count, options.height, options.string_width
        )
        frets = generate_frets(options.fret_count, options.scale_frets)
        fret_xs = [x * options.width / 100 for x in frets]
        positions = generate_positions(
            options.string_count, options.fret_count, fret_xs, strings
        )
        markers, double_marker = fret_markers(options.fret_count, fret_xs)
        total_width, total_height = get_dimensions(options)
        return cls(
            strings=strings,
            frets=frets,
            fret_xs=fret_xs,
            positions=positions,
            markers=markers,
            double_marker=double_marker,
            total_width=total_width,
            total_height=total_height,
        )

    @property
    def string_count(self) -> int:
        return len(self.strings)

    @property
    def fret_count(self) -> int:
        return len(self.frets) - 1

    def point(self, string: int, fret: int) -> Point:
        """Look up the dot coordinates of a cell."""
        return self.positions[string - 1][fret]
