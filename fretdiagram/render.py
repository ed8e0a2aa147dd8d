"""SVG rendering of fretboard diagrams.

The scene is an svgwrite drawing with one wrapper group, translated by the
left and top paddings, holding a static layer (strings, frets, inlay
markers, fret numbers) drawn once, and dynamic groups (dots, barres, muted
strings, highlight areas) that are removed and rebuilt whenever they are
touched. Every group carries a class naming what it holds, so it can be
found again and styled from outside.
"""

from __future__ import annotations

import logging
from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple, override

import svgwrite
from svgwrite.base import BaseElement
from svgwrite.container import Group

from fretdiagram import constants
from fretdiagram.config import DotText, MuteStringsParams, Options
from fretdiagram.layout import Layout, fret_markers, string_thickness
from fretdiagram.position import AreaBounds, Barre, Point, Position, dot_classes

DotNode = Tuple[Position, BaseElement, BaseElement]
"""A drawn dot: its position, circle and label."""


class DotFilter(metaclass=ABCMeta):
    """Selects the dots a style change applies to."""

    @abstractmethod
    def matches(self, dot: Position) -> bool:
        raise NotImplementedError()


@dataclass(frozen=True)
class Predicate(DotFilter):
    """Selects the dots an arbitrary function accepts."""

    fn: Callable[[Position], bool]

    @override
    def matches(self, dot: Position) -> bool:
        return bool(self.fn(dot))


@dataclass(frozen=True)
class Equals(DotFilter):
    """Selects the dots whose field or tag equals a value."""

    key: str
    value: Any

    @override
    def matches(self, dot: Position) -> bool:
        return bool(dot.get(self.key) == self.value)


MATCH_ALL: DotFilter = Predicate(lambda dot: True)


def _translate(x: float, y: float) -> str:
    return f"translate({x}, {y})"


def mute_path(x: float, y: float, width: float) -> str:
    """Path data of the cross drawn over a muted string at (x, y)."""
    return (
        f"M{x},{y} L{x + width},{y + width} "
        f"M{x + width},{y} L{x},{y + width}"
    )


class Renderer:
    """Draws one fretboard into an svgwrite scene.

    The renderer owns a standalone drawing unless the options name a
    container to mount into, in which case a nested svg element is added to
    that container.
    """

    def __init__(self, options: Options, layout: Layout) -> None:
        self.options = options
        self.layout = layout
        width, height = layout.total_width, layout.total_height
        self._drawing = svgwrite.Drawing(
            size=(width, height), viewBox=f"0 0 {width} {height}", debug=False
        )
        if options.el is None:
            self.svg: BaseElement = self._drawing
            self.svg["class"] = "fretboard"
        else:
            self.svg = self._drawing.svg(
                size=(width, height), viewBox=f"0 0 {width} {height}", class_="fretboard"
            )
            options.el.add(self.svg)
        self.wrapper = self._drawing.g(
            class_="fretboard-wrapper",
            transform=_translate(options.left_padding, options.top_padding),
        )
        self.svg.add(self.wrapper)
        self._base_rendered = False
        self._dot_nodes: List[DotNode] = []

    @property
    def base_rendered(self) -> bool:
        return self._base_rendered

    def find_group(self, name: str) -> Optional[Group]:
        """Find a top level group of the wrapper by its class."""
        for element in self.wrapper.elements:
            if element.attribs.get("class") == name:
                return element
        return None

    def remove_group(self, name: str) -> None:
        group = self.find_group(name)
        if group is not None:
            self.wrapper.elements.remove(group)

    def _replace_group(self, name: str, **extra: Any) -> Group:
        self.remove_group(name)
        group = self._drawing.g(class_=name, **extra)
        self.wrapper.add(group)
        return group

    def _in_view(self, string: int, fret: int, offset: int) -> bool:
        return (
            1 <= string <= self.layout.string_count
            and 0 <= fret - offset <= self.layout.fret_count
        )

    def _point(self, string: int, fret: int, offset: int) -> Point:
        return self.layout.point(string, fret - offset)

    def base_render(self, offset: int = 0) -> None:
        """Draw the static layer, once.

        Args:
            offset: Crop offset used for the fret number labels and markers.
        """
        if self._base_rendered:
            return
        self._base_rendered = True
        self._render_strings()
        self._render_frets(offset)
        if self.options.show_fret_markers:
            self._render_markers(offset)
        if self.options.show_fret_numbers:
            self._render_fret_numbers(offset)
        logging.debug("rendered static layer (offset %d)", offset)

    def _render_strings(self) -> None:
        options = self.options
        group = self._replace_group("strings")
        for i, y in enumerate(self.layout.strings):
            group.add(
                self._drawing.line(
                    start=(0, y),
                    end=(options.width, y),
                    stroke=options.string_color,
                    stroke_width=string_thickness(options.string_width, i),
                )
            )

    def _render_frets(self, offset: int) -> None:
        options = self.options
        group = self._replace_group("frets")
        for i, x in enumerate(self.layout.fret_xs):
            if i == 0:
                color, width = options.nut_color, options.nut_width
            elif i + offset == options.middle_fret:
                color, width = options.middle_fret_color, options.middle_fret_width
            else:
                color, width = options.fret_color, options.fret_width
            group.add(
                self._drawing.line(
                    start=(x, 1),
                    end=(x, options.height - 1),
                    stroke=color,
                    stroke_width=width,
                )
            )

    def _render_markers(self, offset: int) -> None:
        options = self.options
        markers, double = fret_markers(self.layout.fret_count, self.layout.fret_xs, offset)
        spacing = options.height / max(1, options.string_count - 1)
        radius = 0.35 * spacing
        singles = self._replace_group("single-dot-markers", fill=options.fret_marker_color)
        for x in markers:
            singles.add(self._drawing.circle(center=(x, options.height / 2), r=radius))
        doubles = self._replace_group("double-dot-markers", fill=options.fret_marker_color)
        if double is not None:
            for ratio in constants.DOUBLE_MARKER_HEIGHTS:
                doubles.add(
                    self._drawing.circle(center=(double, options.height * ratio), r=radius)
                )

    def _render_fret_numbers(self, offset: int) -> None:
        options = self.options
        y = options.fret_numbers_margin + options.top_padding + self.layout.strings[-1]
        group = self._replace_group(
            "fret-numbers", font_family=options.font, transform=_translate(0, y)
        )
        xs = self.layout.fret_xs
        for i in range(1, len(xs)):
            label = i + offset
            fill = (
                options.middle_fret_color
                if label == options.middle_fret
                else options.fret_numbers_color
            )
            group.add(
                self._drawing.text(
                    str(label),
                    insert=(xs[i] - (xs[i] - xs[i - 1]) / 2, 0),
                    text_anchor="middle",
                    fill=fill,
                )
            )

    def render_dots(self, dots: Sequence[Position], offset: int = 0) -> None:
        """Rebuild the dots group.

        Dots outside the visible fret range are skipped, as are dots on
        strings the board does not have.
        """
        options = self.options
        self.remove_group("dots")
        self._dot_nodes = []
        visible = [d for d in dots if self._in_view(d.string, d.fret, offset)]
        if not visible:
            return
        group = self._replace_group("dots", font_family=options.font)
        for dot in visible:
            point = self._point(dot.string, dot.fret, offset)
            node = self._drawing.g(
                class_=f"dot {dot_classes(dot)}",
                opacity=options.disabled_opacity if dot.disabled else 1,
            )
            circle = self._drawing.circle(
                center=(point.x, point.y),
                r=options.dot_size / 2,
                class_="dot-circle",
                stroke=options.dot_stroke_color,
                stroke_width=options.dot_stroke_width,
                fill=options.dot_fill,
            )
            label = self._drawing.text(
                options.dot_text(dot),
                insert=(point.x, point.y),
                class_="dot-text",
                text_anchor="middle",
                dominant_baseline="central",
                font_size=options.dot_text_size,
                fill=options.dot_text_color,
            )
            node.add(circle)
            node.add(label)
            group.add(node)
            self._dot_nodes.append((dot, circle, label))

    def clear_dots(self) -> None:
        self.remove_group("dots")
        self._dot_nodes = []

    def style(
        self,
        dot_filter: DotFilter = MATCH_ALL,
        attrs: Optional[Mapping[str, Any]] = None,
        text: Optional[DotText] = None,
        font_size: Optional[float] = None,
        font_fill: Optional[str] = None,
    ) -> int:
        """Restyle the drawn dots selected by a filter.

        Args:
            dot_filter: Selects the dots to change.
            attrs: Attributes set on the dot circles. Values may be callables
                receiving the dot.
            text: New label of the selected dots.
            font_size: Label size, defaults to the configured dot text size.
            font_fill: Label color, defaults to the configured dot text color.

        Returns:
            The number of dots changed.
        """
        options = self.options
        changed = 0
        for dot, circle, label in self._dot_nodes:
            if not dot_filter.matches(dot):
                continue
            changed += 1
            for key, value in (attrs or {}).items():
                circle[key.replace("_", "-")] = value(dot) if callable(value) else value
            if text is not None:
                label.text = text(dot)
                label["font-size"] = font_size if font_size is not None else options.dot_text_size
                label["fill"] = font_fill if font_fill is not None else options.dot_text_color
        return changed

    def render_barres(self, barres: Sequence[Barre], offset: int = 0) -> None:
        options = self.options
        width = options.dot_size * 0.8
        group = self._replace_group("barres", transform=_translate(-width / 2, 0))
        for barre in barres:
            barre = barre.normalize(self.layout.string_count)
            upper_string, lower_string = barre.string_to or 1, barre.string_from or 1
            if not self._in_view(upper_string, barre.fret, offset):
                logging.debug("skipping barre outside the view: %s", barre)
                continue
            upper = self._point(upper_string, barre.fret, offset)
            lower = self._point(lower_string, barre.fret, offset)
            group.add(
                self._drawing.rect(
                    insert=(upper.x, upper.y - options.dot_size * 0.75),
                    size=(width, lower.y - upper.y + options.dot_size * 1.5),
                    rx=constants.BARRE_RADIUS,
                    class_="barre",
                    fill=options.barres_color,
                )
            )

    def clear_barres(self) -> None:
        self.remove_group("barres")

    def render_muted_strings(self, params: MuteStringsParams) -> None:
        width = params.width
        group = self._replace_group(
            "muted-strings", transform=_translate(-width / 2, -width / 2)
        )
        for string in params.strings:
            if not 1 <= string <= self.layout.string_count:
                logging.debug("skipping mute of unknown string %d", string)
                continue
            point = self.layout.point(string, 0)
            group.add(
                self._drawing.path(
                    d=mute_path(point.x, point.y, width),
                    class_="muted-string",
                    fill="none",
                    stroke=params.stroke,
                    stroke_width=params.stroke_width,
                )
            )

    def render_highlights(
        self, areas: Sequence[Sequence[Position]], offset: int = 0
    ) -> None:
        """Rebuild the highlight areas group, one rounded rect per area."""
        options = self.options
        group = self._replace_group("highlight-areas")
        pad = options.dot_size / 2 + options.highlight_padding
        for area in areas:
            if not area:
                continue
            bounds = AreaBounds.of(area)
            corners = (bounds.top_left, bounds.bottom_right)
            if not all(self._in_view(c.string, c.fret, offset) for c in corners):
                logging.debug("skipping highlight outside the view: %s", bounds)
                continue
            top_left = self._point(bounds.top_left.string, bounds.top_left.fret, offset)
            top_right = self._point(bounds.top_right.string, bounds.top_right.fret, offset)
            bottom_left = self._point(
                bounds.bottom_left.string, bounds.bottom_left.fret, offset
            )
            group.add(
                self._drawing.rect(
                    insert=(top_left.x - pad, top_left.y - pad),
                    size=(
                        top_right.x - top_left.x + 2 * pad,
                        bottom_left.y - top_left.y + 2 * pad,
                    ),
                    rx=options.highlight_radius,
                    class_="highlight-area",
                    stroke=options.highlight_stroke,
                    fill=options.highlight_fill,
                    style=f"mix-blend-mode: {options.highlight_blend_mode}",
                )
            )

    def clear_highlights(self) -> None:
        self.remove_group("highlight-areas")

    def add_hover_surface(self) -> BaseElement:
        """Cover the whole diagram with a transparent rect receiving pointer input."""
        rect = self._drawing.rect(
            insert=(0, 0),
            size=(self.layout.total_width, self.layout.total_height),
            class_="hover-surface",
            fill="transparent",
        )
        self.svg.add(rect)
        return rect

    def to_svg(self) -> str:
        """Serialize the scene of this fretboard."""
        return self.svg.tostring()
