"""Tests for chord fingering parsing."""

import pytest

from fretdiagram.chords import parse_chord
from fretdiagram.position import Position


def test_single_digit_fingering() -> None:
    parsed = parse_chord("x32010")
    assert parsed.muted_strings == [6]
    assert parsed.positions == [
        Position(string=5, fret=3),
        Position(string=4, fret=2),
        Position(string=3, fret=0),
        Position(string=2, fret=1),
        Position(string=1, fret=0),
    ]


def test_dash_separated_fingering() -> None:
    parsed = parse_chord("x-10-12-12-11-10")
    assert parsed.muted_strings == [6]
    assert [(p.string, p.fret) for p in parsed.positions] == [
        (5, 10),
        (4, 12),
        (3, 12),
        (2, 11),
        (1, 10),
    ]


def test_muted_strings() -> None:
    parsed = parse_chord("XX0232")
    assert parsed.muted_strings == [6, 5]
    assert len(parsed.positions) == 4


@pytest.mark.parametrize("chord", ["", "x3201a", "x--1", "3-a-0"])
def test_invalid_fingering(chord: str) -> None:
    with pytest.raises(ValueError):
        parse_chord(chord)


def test_string_count_check() -> None:
    assert len(parse_chord("0000", string_count=4).positions) == 4
    with pytest.raises(ValueError):
        parse_chord("x32010", string_count=4)
