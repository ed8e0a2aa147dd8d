"""Fretboard diagrams for stringed instruments, rendered to SVG."""

from fretdiagram.base import ConfigError, FretboardError
from fretdiagram.chords import ParsedChord, parse_chord
from fretdiagram.config import MuteStringsParams, Options
from fretdiagram.constants import GUITAR_TUNINGS
from fretdiagram.fretboard import Fretboard
from fretdiagram.pointer import ClientPoint, MouseEvent, Rect, TouchEvent, parse_event
from fretdiagram.position import Barre, Position, dot_classes
from fretdiagram.render import Equals, Predicate
from fretdiagram.system import BoxSpec, FretboardSystem, Systems

__all__ = [
    "Barre",
    "BoxSpec",
    "ClientPoint",
    "ConfigError",
    "Equals",
    "Fretboard",
    "FretboardError",
    "FretboardSystem",
    "GUITAR_TUNINGS",
    "MouseEvent",
    "MuteStringsParams",
    "Options",
    "ParsedChord",
    "Position",
    "Predicate",
    "Rect",
    "Systems",
    "TouchEvent",
    "dot_classes",
    "parse_chord",
    "parse_event",
]
