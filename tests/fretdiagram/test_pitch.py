"""Tests for the pitch naming service."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fretdiagram.pitch import (
    NoteName,
    chroma,
    display_note,
    enharmonic,
    midi_to_note,
    note_to_midi,
    parse_note,
    pitch_class,
    spell_pitch_class,
)
from tests.fretdiagram.hypo import configure_hypo

configure_hypo()


def test_parse_note() -> None:
    assert parse_note("E2") == NoteName("E", "", 2)
    assert parse_note("c#") == NoteName("C", "#", None)
    assert parse_note("B♭3") == NoteName("B", "b", 3)
    assert parse_note("Ebb") == NoteName("E", "bb", None)


@pytest.mark.parametrize("name", ["", "H2", "C#b", "Cx", "E2.5"])
def test_parse_note_invalid(name: str) -> None:
    with pytest.raises(ValueError):
        parse_note(name)


def test_note_to_midi() -> None:
    assert note_to_midi("E2") == 40
    assert note_to_midi("C4") == 60
    assert note_to_midi("A4") == 69
    assert note_to_midi("Cb4") == 59
    with pytest.raises(ValueError):
        note_to_midi("E")


def test_midi_to_note() -> None:
    assert midi_to_note(61) == "Db4"
    assert midi_to_note(61, sharps=True) == "C#4"
    assert midi_to_note(40) == "E2"


@given(st.integers(min_value=0, max_value=127), st.booleans())
def test_midi_round_trip(midi: int, sharps: bool) -> None:
    assert note_to_midi(midi_to_note(midi, sharps=sharps)) == midi


def test_pitch_class_and_chroma() -> None:
    assert pitch_class("Db4") == "Db"
    assert chroma("B♭") == 10
    assert chroma("B#") == 0
    assert chroma("E2") == 4


def test_enharmonic() -> None:
    assert enharmonic("C#4") == "Db4"
    assert enharmonic("Db") == "C#"
    assert enharmonic("E2") == "E2"
    assert enharmonic("B#3") == "C4"


def test_spell_pitch_class() -> None:
    assert spell_pitch_class(61, True) == "C#"
    assert spell_pitch_class(61, False) == "Db"
    assert spell_pitch_class(40, True) == "E"


def test_display_note() -> None:
    assert display_note("C#") == "C♯"
    assert display_note("Bb") == "B♭"
    assert display_note("b") == "b"
    assert display_note("") == ""
