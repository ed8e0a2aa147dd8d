"""Chord fingering parsing for fretboard diagrams using Lark."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from lark import Lark, Transformer
from lark.exceptions import LarkError

from fretdiagram.position import Position

MUTED = "x"
"""Marker of a string that is not played."""

# A fingering lists one entry per string from the lowest string to the
# highest: either one character per string, or dash separated entries when
# some fret needs two digits.
FINGERING_GRAMMAR = """
%import common.WS
%ignore WS

CELL: /[0-9xX]/
FRET: /[0-9]+|[xX]/

start: compact | dashed
compact: CELL+
dashed: FRET ("-" FRET)+
"""


class FingeringTransformer(Transformer):
    """Transform a parsed fingering into its list of entries."""

    def start(self, items):
        return items[0]

    def compact(self, items):
        return [str(item) for item in items]

    def dashed(self, items):
        return [str(item) for item in items]


_PARSER = Lark(FINGERING_GRAMMAR)


@dataclass(frozen=True)
class ParsedChord:
    """Positions and muted strings of a chord fingering."""

    positions: List[Position]
    muted_strings: List[int]


def parse_chord(chord: str, string_count: Optional[int] = None) -> ParsedChord:
    """Parse a chord fingering written from the lowest string to the highest.

    One character per string ("x32010"), or dash separated values when a
    fret needs two digits ("x-10-12-12-11-10"). "x" marks a muted string.

    Args:
        chord: The fingering.
        string_count: Expected number of strings, checked when given.

    Returns:
        The fretted positions (string 1 being the highest) and muted strings.

    Raises:
        ValueError: If the fingering is malformed.
    """
    try:
        tokens: List[str] = FingeringTransformer().transform(_PARSER.parse(chord))
    except LarkError as e:
        raise ValueError(f"Invalid chord fingering: {chord!r}") from e
    if string_count is not None and len(tokens) != string_count:
        raise ValueError(
            f"Chord fingering {chord!r} has {len(tokens)} strings, expected {string_count}"
        )
    count = len(tokens)
    positions: List[Position] = []
    muted: List[int] = []
    for index, token in enumerate(tokens):
        string = count - index
        if token.lower() == MUTED:
            muted.append(string)
        else:
            positions.append(Position(string=string, fret=int(token)))
    return ParsedChord(positions=positions, muted_strings=muted)
