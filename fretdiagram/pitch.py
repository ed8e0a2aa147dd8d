"""Pitch naming service for fretboard diagrams.

Converts between scientific note names ("E2", "C#4", "Bb3") and MIDI note
numbers, reduces names to pitch classes and swaps enharmonic spellings.
Middle C is C4 (MIDI 60).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

MAX_NOTES = 12
"""Number of distinct pitch classes in the chromatic scale."""

SHARP_NAMES: List[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
"""Pitch class names spelled with sharps, indexed by chroma."""

FLAT_NAMES: List[str] = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]
"""Pitch class names spelled with flats, indexed by chroma."""

LETTER_TO_CHROMA: Dict[str, int] = {
    "C": 0,
    "D": 2,
    "E": 4,
    "F": 5,
    "G": 7,
    "A": 9,
    "B": 11,
}
"""Chroma of each natural letter."""

_ACCIDENTAL_STEPS: Dict[str, int] = {"#": 1, "♯": 1, "b": -1, "♭": -1}

DISPLAY_ACCIDENTALS: Dict[str, str] = {"#": "♯", "b": "♭"}
"""Typographic replacements for ASCII accidentals."""


@dataclass(frozen=True)
class NoteName:
    """A parsed note name: letter, accidental run and optional octave."""

    letter: str
    """Natural letter, upper case (C to B)."""
    accidental: str
    """Accidental run in ASCII form ("", "#", "##", "b", "bb")."""
    octave: Optional[int]
    """Scientific octave number, None for a bare pitch class."""

    @property
    def alteration(self) -> int:
        return sum(_ACCIDENTAL_STEPS[a] for a in self.accidental)

    @property
    def chroma(self) -> int:
        return (LETTER_TO_CHROMA[self.letter] + self.alteration) % MAX_NOTES

    @property
    def pitch_class(self) -> str:
        return self.letter + self.accidental

    def __str__(self) -> str:
        octave = "" if self.octave is None else str(self.octave)
        return f"{self.pitch_class}{octave}"


def parse_note(name: str) -> NoteName:
    """Parse a note name such as "E2", "c#", "B♭3" or "Ebb".

    Args:
        name: The note name to parse.

    Returns:
        The parsed note name with accidentals normalised to ASCII.

    Raises:
        ValueError: If the name is not a valid note name.
    """
    text = name.strip()
    if not text or text[0].upper() not in LETTER_TO_CHROMA:
        raise ValueError(f"Invalid note name: {name!r}")
    letter = text[0].upper()
    rest = text[1:]
    accidental = ""
    while rest and rest[0] in _ACCIDENTAL_STEPS:
        accidental += "#" if _ACCIDENTAL_STEPS[rest[0]] > 0 else "b"
        rest = rest[1:]
    if "#" in accidental and "b" in accidental:
        raise ValueError(f"Mixed accidentals in note name: {name!r}")
    octave: Optional[int] = None
    if rest:
        try:
            octave = int(rest)
        except ValueError:
            raise ValueError(f"Invalid octave in note name: {name!r}") from None
    return NoteName(letter=letter, accidental=accidental, octave=octave)


def chroma(name: str) -> int:
    """Get the pitch class number (0-11) of a note name."""
    return parse_note(name).chroma


def note_to_midi(name: str) -> int:
    """Convert a note name with octave to its MIDI note number.

    Args:
        name: A note name including an octave, e.g. "E2".

    Returns:
        The MIDI note number (E2 is 40).

    Raises:
        ValueError: If the name is invalid or has no octave.
    """
    note = parse_note(name)
    if note.octave is None:
        raise ValueError(f"Note name has no octave: {name!r}")
    return (note.octave + 1) * MAX_NOTES + LETTER_TO_CHROMA[note.letter] + note.alteration


def midi_to_note(midi: int, sharps: bool = False) -> str:
    """Convert a MIDI note number to a note name with octave.

    Args:
        midi: MIDI note number.
        sharps: Spell accidentals with sharps instead of flats.

    Returns:
        A note name such as "Db4" (or "C#4" with sharps).
    """
    names = SHARP_NAMES if sharps else FLAT_NAMES
    return f"{names[midi % MAX_NOTES]}{midi // MAX_NOTES - 1}"


def pitch_class(name: str) -> str:
    """Strip the octave from a note name ("Db4" becomes "Db")."""
    return parse_note(name).pitch_class


def enharmonic(name: str) -> str:
    """Get the enharmonic spelling of a note name.

    Sharps become flats and flats become sharps, keeping the octave of the
    sounding pitch. Natural names are returned unchanged. Names that only
    exist as respellings (E#, Cb, double accidentals) resolve to their
    simplest name.

    Args:
        name: The note name to respell.

    Returns:
        The respelled note name.
    """
    note = parse_note(name)
    if not note.accidental:
        return str(note)
    sharps = note.alteration < 0
    if note.octave is None:
        names = SHARP_NAMES if sharps else FLAT_NAMES
        return names[note.chroma]
    return midi_to_note(note_to_midi(name), sharps=sharps)


def spell_pitch_class(midi: int, prefer_sharp: bool) -> str:
    """Pick the pitch class spelling of a MIDI note according to a preference.

    The flat spelling is produced first; when it conflicts with the
    preference it is replaced by its enharmonic equivalent.

    Args:
        midi: MIDI note number.
        prefer_sharp: Whether sharps are preferred over flats.

    Returns:
        An ASCII pitch class such as "F#" or "Gb".
    """
    name = midi_to_note(midi)
    pc = pitch_class(name)
    if (prefer_sharp and "b" in pc[1:]) or (not prefer_sharp and "#" in pc):
        pc = pitch_class(enharmonic(name))
    return pc


def display_note(name: str) -> str:
    """Replace ASCII accidentals with typographic sharp and flat symbols."""
    if not name:
        return name
    return name[0] + "".join(DISPLAY_ACCIDENTALS.get(c, c) for c in name[1:])
