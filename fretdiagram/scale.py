"""Musical scale definitions for fretboard diagrams.

This module provides the table of known scales, interval names and lookup
helpers used by the default scale provider.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from fretdiagram.pitch import MAX_NOTES

INTERVAL_NAMES: List[str] = [
    "1P",
    "2m",
    "2M",
    "3m",
    "3M",
    "4P",
    "5d",
    "5P",
    "6m",
    "6M",
    "7m",
    "7M",
]
"""Interval names indexed by semitone distance from the root."""


@dataclass(frozen=True)
class Scale:
    """Represents a musical scale with its name and interval pattern.

    A scale is defined by its name and a list of semitone intervals
    from the root note. The intervals list always starts with 0 (the root).
    """

    name: str
    """The human-readable name of this musical scale."""
    intervals: List[int]
    """Ascending semitone offsets from the root, starting with 0."""

    def degree_of(self, steps: int) -> Optional[int]:
        """Get the 1-based degree of a semitone offset, or None if outside the scale."""
        steps %= MAX_NOTES
        if steps in self.intervals:
            return self.intervals.index(steps) + 1
        return None

    @property
    def size(self) -> int:
        return len(self.intervals)


SCALES: List[Scale] = [
    Scale("Major", [0, 2, 4, 5, 7, 9, 11]),
    Scale("Minor", [0, 2, 3, 5, 7, 8, 10]),
    Scale("Dorian", [0, 2, 3, 5, 7, 9, 10]),
    Scale("Mixolydian", [0, 2, 4, 5, 7, 9, 10]),
    Scale("Lydian", [0, 2, 4, 6, 7, 9, 11]),
    Scale("Phrygian", [0, 1, 3, 5, 7, 8, 10]),
    Scale("Locrian", [0, 1, 3, 4, 7, 8, 10]),
    Scale("Diminished", [0, 1, 3, 4, 6, 7, 9, 10]),
    Scale("Whole Tone", [0, 2, 4, 6, 8, 10]),
    Scale("Blues", [0, 3, 5, 6, 7, 10]),
    Scale("Minor Pentatonic", [0, 3, 5, 7, 10]),
    Scale("Major Pentatonic", [0, 2, 4, 7, 9]),
    Scale("Harmonic Minor", [0, 2, 3, 5, 7, 8, 11]),
    Scale("Melodic Minor", [0, 2, 3, 5, 7, 9, 11]),
    Scale("Chromatic", [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11]),
]
"""Known scales, from the church modes to pentatonics."""


def _scale_key(name: str) -> str:
    return re.sub(r"[\s_-]+", "", name).lower()


SCALE_LOOKUP: Dict[str, Scale] = {_scale_key(s.name): s for s in SCALES}
"""Lookup from normalised scale name to Scale.

Aliases used by other tools are registered alongside the canonical names.
"""
SCALE_LOOKUP.update(
    {
        "ionian": SCALE_LOOKUP["major"],
        "aeolian": SCALE_LOOKUP["minor"],
        "naturalminor": SCALE_LOOKUP["minor"],
    }
)


def find_scale(name: str) -> Scale:
    """Look a scale up by name, ignoring case, spaces, dashes and underscores.

    Args:
        name: Scale name such as "major", "Minor Pentatonic" or "minor-pentatonic".

    Returns:
        The matching scale.

    Raises:
        ValueError: If no scale has that name.
    """
    scale = SCALE_LOOKUP.get(_scale_key(name))
    if scale is None:
        raise ValueError(f"Unknown scale type: {name!r}")
    return scale


def interval_name(steps: int) -> str:
    """Get the name of the interval spanning a number of semitones (mod octave)."""
    return INTERVAL_NAMES[steps % MAX_NOTES]
