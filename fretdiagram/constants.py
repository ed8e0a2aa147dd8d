"""Constants and defaults for fretboard diagrams.

This module defines default colors, dimensions, tunings and timing values
used when no explicit option is given to a fretboard.
"""

from typing import Dict, List, Tuple

DEFAULT_FRET_COUNT = 15
"""Number of frets drawn when not configured."""

MIDDLE_FRET = 12
"""Fret boundary drawn with the accent stroke (the octave fret)."""

THROTTLE_INTERVAL = 0.066
"""Minimum interval between two pointer handler invocations (seconds)."""

SINGLE_MARKER_FRETS: Tuple[int, ...] = (3, 5, 7, 9, 15, 17, 19, 21)
"""Frets carrying a single inlay dot."""

DOUBLE_MARKER_FRET = 12
"""Fret carrying the double inlay dot."""

DOUBLE_MARKER_HEIGHTS: Tuple[float, float] = (0.30, 0.70)
"""Vertical placement of the double inlay dots as fractions of the height."""

FRET_RATIO = 2 ** (1 / 12)
"""Equal-tempered ratio between successive fret distances."""

DEFAULT_FONT_FAMILY = "Arial, Helvetica, sans-serif"
"""Font used for dot labels and fret numbers."""

DEFAULT_FONT_SIZE = 12
"""Font size of dot labels."""

DEFAULT_HIGHLIGHT_BLEND_MODE = "color-dodge"
"""CSS blend mode used for highlight areas."""

DEFAULT_DIMENSIONS: Dict[str, float] = {
    "unit": 20,
    "line": 1,
    "nut": 5,
    "width": 960,
    "height": 150,
}
"""Base dimensions that the other defaults are derived from."""

DEFAULT_COLORS: Dict[str, str] = {
    "line": "#666",
    "highlight": "#aaa",
    "dot_stroke": "#555",
    "dot_fill": "white",
    "dot_text": "#333",
    "barres": "#333",
    "marker_dot": "#ddd",
    "muted_string": "#333",
    "highlight_fill": "dodgerblue",
    "highlight_stroke": "transparent",
}
"""Default palette for every drawn element."""

GUITAR_TUNINGS: Dict[str, List[str]] = {
    "default": ["E2", "A2", "D3", "G3", "B3", "E4"],
    "halfStepDown": ["Eb2", "Ab2", "Db3", "Gb3", "Bb3", "Eb4"],
    "dropD": ["D2", "A2", "D3", "G3", "B3", "E4"],
    "openG": ["D2", "G2", "D3", "G3", "B3", "D4"],
    "dadgad": ["D2", "A2", "D3", "G3", "A3", "D4"],
}
"""Named guitar tunings, each listed from the lowest string to the highest."""

MUTED_STRING_WIDTH = 15
"""Size of the muted string cross."""

MUTED_STRING_STROKE_WIDTH = 5
"""Stroke width of the muted string cross."""

BARRE_RADIUS = 7.5
"""Corner radius of barre rectangles."""
