"""Tests for the SVG scene built by the renderer."""

from typing import Any, List

import svgwrite

from fretdiagram.config import Options
from fretdiagram.fretboard import Fretboard
from fretdiagram.position import Barre, Position
from fretdiagram.render import Equals, Predicate


def _group(fretboard: Fretboard, name: str) -> Any:
    group = fretboard.renderer.find_group(name)
    assert group is not None, name
    return group


def _circles(fretboard: Fretboard) -> List[Any]:
    return [node.elements[0] for node in _group(fretboard, "dots").elements]


def _labels(fretboard: Fretboard) -> List[Any]:
    return [node.elements[1] for node in _group(fretboard, "dots").elements]


def test_static_layer() -> None:
    fretboard = Fretboard()
    assert not fretboard.renderer.base_rendered
    fretboard.render()
    assert fretboard.renderer.base_rendered
    strings = _group(fretboard, "strings").elements
    frets = _group(fretboard, "frets").elements
    assert len(strings) == 6
    assert len(frets) == 16
    assert frets[0]["stroke-width"] == 5
    assert frets[12]["stroke"] == "#aaa"
    assert frets[12]["stroke-width"] == 3
    assert frets[11]["stroke-width"] == 1
    assert len(_group(fretboard, "single-dot-markers").elements) == 5
    assert len(_group(fretboard, "double-dot-markers").elements) == 2


def test_fret_numbers() -> None:
    fretboard = Fretboard().render()
    labels = _group(fretboard, "fret-numbers").elements
    assert [label.text for label in labels] == [str(i) for i in range(1, 16)]
    assert labels[11]["fill"] == "#aaa"
    assert labels[10]["fill"] == "#666"


def test_optional_static_groups() -> None:
    fretboard = Fretboard(show_fret_numbers=False, show_fret_markers=False).render()
    assert fretboard.renderer.find_group("fret-numbers") is None
    assert fretboard.renderer.find_group("single-dot-markers") is None


def test_render_is_idempotent() -> None:
    fretboard = Fretboard().set_dots([Position(string=6, fret=0), Position(string=5, fret=2)])
    first = fretboard.render().to_svg()
    second = fretboard.render().to_svg()
    assert first == second
    names = [group["class"] for group in fretboard.renderer.wrapper.elements]
    assert names.count("dots") == 1
    assert names.count("strings") == 1


def test_dot_nodes() -> None:
    fretboard = Fretboard().set_dots(
        [Position(string=6, fret=0), Position(string=2, fret=3, disabled=True)]
    )
    fretboard.render()
    nodes = _group(fretboard, "dots").elements
    assert nodes[0]["class"] == "dot dot-id-s6:f0 dot-string-6 dot-fret-0 dot-note-E dot-chroma-4"
    assert nodes[0]["opacity"] == 1
    assert nodes[1]["opacity"] == 0.9
    circle = nodes[0].elements[0]
    assert circle["class"] == "dot-circle"
    assert circle["r"] == 10
    assert circle["cx"] == fretboard.layout.point(6, 0).x
    assert circle["cy"] == fretboard.layout.point(6, 0).y


def test_dot_text() -> None:
    fretboard = Fretboard(dot_text=lambda dot: dot.note or "")
    fretboard.set_dots([Position(string=5, fret=2)]).render()
    assert _labels(fretboard)[0].text == "B"


def test_dots_outside_view_are_skipped() -> None:
    fretboard = Fretboard(fret_count=5).set_dots(
        [Position(string=1, fret=3), Position(string=1, fret=9), Position(string=8, fret=1)]
    )
    fretboard.render()
    assert len(_group(fretboard, "dots").elements) == 1
    empty = Fretboard(fret_count=5).set_dots([Position(string=1, fret=9)]).render()
    assert empty.renderer.find_group("dots") is None


def test_clear() -> None:
    fretboard = Fretboard().set_dots([Position(string=1, fret=1)]).render().clear()
    assert fretboard.renderer.find_group("dots") is None
    assert fretboard.dots == []
    assert fretboard.offset == 0


def test_clear_forgets_dots() -> None:
    fretboard = Fretboard(crop=True).set_dots([Position(string=1, fret=9)]).render()
    assert fretboard.offset == 8
    fretboard.clear().render()
    assert fretboard.offset == 0
    assert fretboard.renderer.find_group("dots") is None


def test_style_with_equals() -> None:
    fretboard = Fretboard().set_dots([Position(string=6, fret=0), Position(string=5, fret=2)])
    fretboard.render().style(Equals("note", "E"), fill="red", stroke_width=3)
    first, second = _circles(fretboard)
    assert first["fill"] == "red"
    assert first["stroke-width"] == 3
    assert second["fill"] == "white"


def test_style_text_with_predicate() -> None:
    fretboard = Fretboard().set_dots([Position(string=6, fret=0), Position(string=5, fret=2)])
    fretboard.render().style(
        Predicate(lambda dot: dot.fret > 0), text=lambda dot: dot.note or "", font_fill="blue"
    )
    first, second = _labels(fretboard)
    assert first.text == ""
    assert second.text == "B"
    assert second["fill"] == "blue"
    assert second["font-size"] == 12


def test_style_all_dots() -> None:
    fretboard = Fretboard().set_dots([Position(string=6, fret=0), Position(string=5, fret=2)])
    fretboard.render().style(fill=lambda dot: "black" if dot.fret else "grey")
    assert [c["fill"] for c in _circles(fretboard)] == ["grey", "black"]


def test_barres() -> None:
    fretboard = Fretboard().render_chord("133211", barres=Barre(fret=1))
    rects = _group(fretboard, "barres").elements
    assert len(rects) == 1
    layout = fretboard.layout
    assert rects[0]["x"] == layout.point(1, 1).x
    assert rects[0]["width"] == 16
    assert rects[0]["height"] == layout.strings[5] - layout.strings[0] + 30


def test_chord_without_barres_drops_old_barres() -> None:
    fretboard = Fretboard().render_chord("133211", barres=Barre(fret=1))
    assert fretboard.renderer.find_group("barres") is not None
    fretboard.render_chord("x32010")
    assert fretboard.renderer.find_group("barres") is None


def test_partial_barre() -> None:
    fretboard = Fretboard().render_barres([Barre(fret=3, string_from=4, string_to=2)])
    rect = _group(fretboard, "barres").elements[0]
    layout = fretboard.layout
    assert rect["y"] == layout.strings[1] - 15
    assert rect["height"] == layout.strings[3] - layout.strings[1] + 30


def test_muted_strings() -> None:
    fretboard = Fretboard().render_chord("x32010")
    assert len(_group(fretboard, "muted-strings").elements) == 1
    assert len(_group(fretboard, "dots").elements) == 5
    fretboard.mute_strings([5, 6, 9], stroke="red")
    paths = _group(fretboard, "muted-strings").elements
    assert len(paths) == 2
    assert paths[0]["stroke"] == "red"


def test_highlight_areas() -> None:
    fretboard = Fretboard().highlight_areas(
        [Position(string=1, fret=1), Position(string=3, fret=3)]
    )
    rects = _group(fretboard, "highlight-areas").elements
    assert len(rects) == 1
    layout = fretboard.layout
    assert rects[0]["x"] == layout.point(1, 1).x - 20
    assert rects[0]["width"] == layout.point(1, 3).x - layout.point(1, 1).x + 40
    assert rects[0]["height"] == layout.strings[2] - layout.strings[0] + 40
    assert rects[0]["style"] == "mix-blend-mode: color-dodge"
    fretboard.clear_highlight_areas()
    assert fretboard.renderer.find_group("highlight-areas") is None


def test_crop() -> None:
    fretboard = Fretboard(crop=True).set_dots(
        [Position(string=1, fret=5), Position(string=2, fret=6), Position(string=3, fret=7)]
    )
    assert fretboard.offset == 4
    fretboard.render()
    labels = _group(fretboard, "fret-numbers").elements
    assert labels[0].text == "5"
    assert _circles(fretboard)[0]["cx"] == fretboard.layout.point(1, 1).x
    padded = Fretboard(crop=True, fret_left_padding=2).set_dots([Position(string=1, fret=5)])
    assert padded.offset == 2
    assert Fretboard(crop=True).offset == 0
    assert Fretboard().set_dots([Position(string=1, fret=5)]).offset == 0


def test_mounted_into_drawing() -> None:
    drawing = svgwrite.Drawing(debug=False)
    fretboard = Fretboard(Options(el=drawing)).render()
    assert fretboard.renderer.svg in drawing.elements
    assert "fretboard-wrapper" in drawing.tostring()


def test_to_svg() -> None:
    text = Fretboard().render_chord("x32010").to_svg()
    assert text.startswith("<svg")
    assert "dot-id-s5:f3" in text
    assert "muted-string" in text
