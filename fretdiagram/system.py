"""Scale and box provider for fretboard diagrams.

The provider lays a scale out over every string and fret of a board, and
marks the cells of a fingering box. Boxes are computed from the tuning by
walking the scale upwards from a starting degree on the lowest string and
placing a fixed number of notes on each string. The classic fingering
shapes only come out right on standard tuning.
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from enum import Enum, unique
from typing import List, Optional, Sequence, Set, Tuple, Union, override

from fretdiagram.pitch import (
    MAX_NOTES,
    chroma,
    display_note,
    midi_to_note,
    note_to_midi,
    parse_note,
    pitch_class,
    spell_pitch_class,
)
from fretdiagram.position import Position
from fretdiagram.scale import Scale, find_scale, interval_name

Cell = Tuple[int, int]
"""A (string, fret) pair."""


@unique
class Systems(Enum):
    """Fingering systems, valued by the number of notes played per string."""

    pentatonic = 2
    tnps = 3

    @property
    def notes_per_string(self) -> int:
        return self.value


@dataclass(frozen=True)
class BoxSpec:
    """Selects one fingering box of a system."""

    system: Systems
    box: Union[int, str]
    """1-based box number; box n starts on the n-th scale degree."""

    @property
    def index(self) -> int:
        return int(self.box)


@dataclass(frozen=True)
class NoteInfo:
    """Name and pitch class of the note sounding at a position."""

    note: str
    chroma: int


class ScaleProvider(metaclass=ABCMeta):
    """Source of scale positions and note names for a fretboard."""

    @abstractmethod
    def get_scale(
        self, type: str, root: str, box: Optional[BoxSpec] = None
    ) -> List[Position]:
        """Lay a scale out over the board.

        Args:
            type: Scale name, e.g. "major".
            root: Root note name, e.g. "A".
            box: Optional box selection; positions get an in_box tag.

        Returns:
            Every position of the board that belongs to the scale.
        """
        raise NotImplementedError()

    @abstractmethod
    def get_note_at_position(self, position: Position) -> NoteInfo:
        """Get the name and pitch class of the note at a position."""
        raise NotImplementedError()


class FretboardSystem(ScaleProvider):
    """Default scale provider computing positions from the tuning."""

    def __init__(
        self, fret_count: int, tuning: Sequence[str], prefer_sharp: bool = True
    ) -> None:
        """Initialize the provider for one board.

        Args:
            fret_count: Number of frets of the board.
            tuning: Open string pitches, low to high.
            prefer_sharp: Spelling used when the root does not imply one.
        """
        self._fret_count = fret_count
        self._open = [note_to_midi(n) for n in tuning]
        self._prefer_sharp = prefer_sharp

    @property
    def string_count(self) -> int:
        return len(self._open)

    def _open_midi(self, string: int) -> int:
        # Strings count from the highest pitch, the tuning from the lowest
        return self._open[self.string_count - string]

    def _use_sharps(self, root: str) -> bool:
        accidental = parse_note(root).accidental
        if accidental:
            return "#" in accidental
        return self._prefer_sharp

    @override
    def get_scale(
        self, type: str, root: str, box: Optional[BoxSpec] = None
    ) -> List[Position]:
        scale = find_scale(type)
        root_chroma = chroma(root)
        sharps = self._use_sharps(root)
        cells = self.box_cells(scale, root_chroma, box) if box is not None else None
        positions: List[Position] = []
        for string in range(1, self.string_count + 1):
            for fret in range(self._fret_count + 1):
                midi = self._open_midi(string) + fret
                steps = (midi - root_chroma) % MAX_NOTES
                degree = scale.degree_of(steps)
                if degree is None:
                    continue
                position = Position(
                    string=string,
                    fret=fret,
                    note=display_note(pitch_class(midi_to_note(midi, sharps=sharps))),
                    octave=midi // MAX_NOTES - 1,
                    interval=interval_name(steps),
                    degree=degree,
                    chroma=midi % MAX_NOTES,
                )
                if cells is not None:
                    position = position.with_tags(in_box=(string, fret) in cells)
                positions.append(position)
        return positions

    def box_cells(self, scale: Scale, root_chroma: int, box: BoxSpec) -> Set[Cell]:
        """Compute the cells of a fingering box.

        The box starts on the lowest string at the lowest fret sounding the
        selected degree, then takes the next scale notes in ascending order,
        a fixed number per string. When a note would fall off the board the
        whole box is tried one octave higher.

        Returns:
            The (string, fret) cells of the box, empty if it does not fit.
        """
        per_string = box.system.notes_per_string
        steps = scale.intervals[(box.index - 1) % scale.size]
        lowest = self._open[0]
        start_fret = (root_chroma + steps - lowest) % MAX_NOTES
        for shift in (0, MAX_NOTES):
            cells = self._walk_box(scale, root_chroma, lowest + start_fret + shift, per_string)
            if cells is not None:
                return cells
        return set()

    def _walk_box(
        self, scale: Scale, root_chroma: int, start: int, per_string: int
    ) -> Optional[Set[Cell]]:
        wanted = per_string * self.string_count
        notes: List[int] = []
        midi = start
        while len(notes) < wanted:
            if scale.degree_of(midi - root_chroma) is not None:
                notes.append(midi)
            midi += 1
        cells: Set[Cell] = set()
        for index, open_midi in enumerate(self._open):
            string = self.string_count - index
            for note in notes[index * per_string : (index + 1) * per_string]:
                fret = note - open_midi
                if fret < 0 or fret > self._fret_count:
                    return None
                cells.add((string, fret))
        return cells

    @override
    def get_note_at_position(self, position: Position) -> NoteInfo:
        midi = self._open_midi(position.string) + position.fret
        pc = spell_pitch_class(midi, self._prefer_sharp)
        return NoteInfo(note=display_note(pc), chroma=midi % MAX_NOTES)
