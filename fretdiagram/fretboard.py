"""The fretboard diagram facade.

A Fretboard ties together the layout of one board, its renderer, a scale
provider and a chord parser, and turns pointer input on the diagram into
positions delivered to user handlers. Every drawing operation returns the
fretboard itself so calls can be chained:

    Fretboard(fret_count=12).render_chord("x32010").to_svg()
"""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from fretdiagram.chords import ParsedChord, parse_chord
from fretdiagram.config import DotText, MuteStringsParams, Options
from fretdiagram.constants import THROTTLE_INTERVAL
from fretdiagram.layout import Layout
from fretdiagram.pointer import (
    STREAM_END_EVENTS,
    Empty,
    PointerEvent,
    Rect,
    position_from_pointer,
)
from fretdiagram.position import Barre, Position
from fretdiagram.render import MATCH_ALL, DotFilter, Renderer
from fretdiagram.surface import HoverSurface
from fretdiagram.system import BoxSpec, FretboardSystem, ScaleProvider
from fretdiagram.throttle import CallQueue, Scheduler, Throttle

Handler = Callable[[Position, PointerEvent], None]
"""Receives the position under the pointer and the event that produced it."""

ChordParser = Callable[[str, int], ParsedChord]
"""Parses a fingering for a board with the given number of strings."""


class Fretboard:
    """An interactive diagram of a stringed instrument's fretboard."""

    def __init__(
        self,
        options: Optional[Options] = None,
        system: Optional[ScaleProvider] = None,
        chord_parser: ChordParser = parse_chord,
        viewport: Optional[Rect] = None,
        throttle_interval: float = THROTTLE_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        scheduler: Optional[Scheduler] = None,
        **overrides: Any,
    ) -> None:
        """Initialize the fretboard.

        Args:
            options: Complete option set; the defaults are used when omitted.
            system: Scale and box provider, by default computed from the tuning.
            chord_parser: Parses the fingerings given to render_chord.
            viewport: Where the diagram is shown in client coordinates, used
                to map pointer input; by default its natural size at the origin.
            throttle_interval: Minimum time between two handler calls in seconds.
            clock: Time source of the handler throttles.
            scheduler: Delivers the trailing call of throttled handlers; by
                default they wait in a queue run by dispatch and poll.
            **overrides: Option values replacing those of options.

        Raises:
            ConfigError: If the options are inconsistent.
        """
        if options is None:
            options = Options.create(**overrides)
        elif overrides:
            options = options.with_overrides(**overrides)
        self.options = options
        self.layout = Layout.build(options)
        self.system: ScaleProvider = system or FretboardSystem(
            options.fret_count, options.tuning, options.prefer_sharp
        )
        self._chord_parser = chord_parser
        self._viewport = viewport
        self._throttle_interval = throttle_interval
        self._clock = clock
        self._calls = CallQueue(clock)
        self._scheduler = scheduler if scheduler is not None else self._calls.schedule
        self.renderer = Renderer(options, self.layout)
        self._dots: List[Position] = []
        self._surface: Optional[HoverSurface] = None
        self._throttles: Dict[str, Throttle] = {}
        self._last_position: Optional[Position] = None
        logging.debug(
            "created fretboard: %d strings, %d frets",
            options.string_count,
            options.fret_count,
        )

    @property
    def dots(self) -> List[Position]:
        return list(self._dots)

    @property
    def offset(self) -> int:
        """Number of frets hidden left of the view when cropping."""
        if not self.options.crop or not self._dots:
            return 0
        lowest = min(dot.fret for dot in self._dots)
        return max(0, lowest - 1 - self.options.fret_left_padding)

    @property
    def surface(self) -> Optional[HoverSurface]:
        return self._surface

    def _note_info(self, dot: Position) -> Position:
        if not 1 <= dot.string <= self.options.string_count:
            return dot
        info = self.system.get_note_at_position(dot)
        return replace(
            dot,
            note=dot.note if dot.note is not None else info.note,
            chroma=dot.chroma if dot.chroma is not None else info.chroma,
        )

    def set_dots(self, dots: Sequence[Position]) -> Fretboard:
        """Replace the dots of the diagram without drawing them.

        Dots without a note get the name of the note sounding at their
        position.
        """
        self._dots = [dot if dot.note is not None else self._note_info(dot) for dot in dots]
        return self

    def render(self) -> Fretboard:
        """Draw the static layer if needed and redraw the dots."""
        offset = self.offset
        self.renderer.base_render(offset)
        self.renderer.render_dots(self._dots, offset)
        return self

    def clear(self) -> Fretboard:
        """Forget the dots and remove them from the diagram."""
        self._dots = []
        self.renderer.clear_dots()
        return self

    def style(
        self,
        filter: Optional[DotFilter] = None,
        text: Optional[DotText] = None,
        font_size: Optional[float] = None,
        font_fill: Optional[str] = None,
        **attrs: Any,
    ) -> Fretboard:
        """Restyle the drawn dots.

        Args:
            filter: Selects the dots to change, all of them when omitted.
            text: New label of the selected dots.
            font_size: Label size when text is given.
            font_fill: Label color when text is given.
            **attrs: Attributes of the dot circles; underscores in names
                become hyphens (stroke_width sets stroke-width).
        """
        changed = self.renderer.style(
            filter if filter is not None else MATCH_ALL,
            attrs,
            text=text,
            font_size=font_size,
            font_fill=font_fill,
        )
        logging.debug("styled %d dots", changed)
        return self

    def mute_strings(self, strings: Sequence[int] = (), **params: Any) -> Fretboard:
        """Draw a cross over the nut of each given string.

        Args:
            strings: String numbers to mark as muted.
            **params: Other MuteStringsParams fields (width, stroke_width, stroke).
        """
        self.renderer.base_render(self.offset)
        self.renderer.render_muted_strings(MuteStringsParams(strings=strings, **params))
        return self

    def render_barres(self, barres: Sequence[Barre]) -> Fretboard:
        offset = self.offset
        self.renderer.base_render(offset)
        self.renderer.render_barres(barres, offset)
        return self

    def render_chord(
        self, chord: str, barres: Union[None, Barre, Sequence[Barre]] = None
    ) -> Fretboard:
        """Draw a chord fingering.

        Args:
            chord: Fingering from the lowest string to the highest, e.g. "x32010".
            barres: Barres to draw with the chord.

        Raises:
            ValueError: If the fingering cannot be parsed or does not have
                one entry per string.
        """
        parsed = self._chord_parser(chord, self.options.string_count)
        self.set_dots(parsed.positions)
        if barres is not None:
            self.render_barres([barres] if isinstance(barres, Barre) else barres)
        else:
            self.renderer.clear_barres()
        self.render()
        self.mute_strings(parsed.muted_strings)
        return self

    def render_scale(
        self, type: str, root: str, box: Optional[BoxSpec] = None
    ) -> Fretboard:
        """Draw every position of a scale.

        With a box, positions carry an in_box tag that can be used to style
        the box apart from the rest of the scale.

        Raises:
            ValueError: If the scale type is unknown.
        """
        if box is not None and not self.options.is_standard_tuning:
            logging.warning("Box systems are only supported with standard tuning")
        self.set_dots(self.system.get_scale(type, root, box))
        return self.render()

    def render_box(self, type: str, root: str, box: BoxSpec) -> Fretboard:
        """Draw only the positions of one fingering box of a scale.

        Raises:
            ValueError: If the scale type is unknown.
        """
        if not self.options.is_standard_tuning:
            logging.warning("Box systems are only supported with standard tuning")
        positions = self.system.get_scale(type, root, box)
        self.set_dots([p for p in positions if p.get("in_box")])
        return self.render()

    def highlight_areas(self, *areas: Sequence[Position]) -> Fretboard:
        """Draw a rounded rectangle around each group of positions."""
        offset = self.offset
        self.renderer.base_render(offset)
        self.renderer.render_highlights(areas, offset)
        return self

    def clear_highlight_areas(self) -> Fretboard:
        self.renderer.clear_highlights()
        return self

    def _ensure_surface(self) -> HoverSurface:
        if self._surface is None:
            element = self.renderer.add_hover_surface()
            viewport = self._viewport or Rect(
                0, 0, self.layout.total_width, self.layout.total_height
            )
            self._surface = HoverSurface(element, viewport)
        return self._surface

    def set_viewport(self, viewport: Rect) -> Fretboard:
        """Update where the diagram is shown, e.g. after the client resized it."""
        self._viewport = viewport
        if self._surface is not None:
            self._surface.viewport = viewport
        return self

    def surface_bounds(self) -> Rect:
        """Get the client rectangle of the string area."""
        if self._surface is not None:
            viewport = self._surface.viewport
        else:
            viewport = self._viewport or Rect(
                0, 0, self.layout.total_width, self.layout.total_height
            )
        scale = viewport.width / self.layout.total_width
        options = self.options
        return Rect(
            left=viewport.left + options.left_padding * scale,
            top=viewport.top + options.top_padding * scale,
            width=options.width * scale,
            height=options.height * scale,
        )

    def position_at(self, event: PointerEvent) -> Optional[Position]:
        """Resolve the position under a pointer event.

        When the event carries no coordinates at all (the release of a
        touch), the last position resolved in the same gesture is reused.
        The gesture ends when a mouseleave or touchcancel event is dispatched.
        Coordinates off the strings resolve to nothing.

        Returns:
            The position with its note name, or None if nothing was resolved.
        """
        position = position_from_pointer(
            event,
            self.surface_bounds(),
            self.layout.strings,
            self.layout.frets,
            self._dots,
            self.options.nut_width,
            self.offset,
        )
        if position is not None:
            self._last_position = position
        elif isinstance(event.sample(), Empty):
            position = self._last_position
        if position is None:
            return None
        return self._note_info(position)

    def on(self, event_name: str, handler: Handler) -> Fretboard:
        """Call a handler with the position under the pointer on an event.

        The handler replaces any handler registered for the same event name
        and runs at most once per throttle interval.

        Args:
            event_name: Pointer event name, e.g. "click" or "mousemove".
            handler: Receives the position and the event.
        """
        surface = self._ensure_surface()
        previous = self._throttles.pop(event_name, None)
        if previous is not None:
            previous.cancel()
        throttle = Throttle(
            self._throttle_interval, handler, clock=self._clock, scheduler=self._scheduler
        )
        self._throttles[event_name] = throttle

        def listener(event: PointerEvent) -> None:
            position = self.position_at(event)
            if position is not None:
                throttle(position, event)

        surface.add_listener(event_name, listener)
        return self

    def remove_event_listeners(self) -> Fretboard:
        """Detach every handler and drop calls still waiting in a throttle."""
        for throttle in self._throttles.values():
            throttle.cancel()
        self._throttles.clear()
        if self._surface is not None:
            self._surface.close()
        self._last_position = None
        return self

    def dispatch(self, event: PointerEvent) -> bool:
        """Feed a pointer event received by the diagram to its handlers.

        Throttled calls whose window has closed are delivered first.

        Returns:
            True if a handler was registered for the event.
        """
        self.poll()
        if self._surface is None:
            return False
        delivered = self._surface.dispatch(event)
        if event.type in STREAM_END_EVENTS:
            self._last_position = None
        return delivered

    def poll(self) -> int:
        """Deliver the throttled handler calls whose window has closed.

        Call it from the thread owning the fretboard, e.g. from an idle loop,
        so that the last call of a burst is not held until the next event.

        Returns:
            The number of calls delivered.
        """
        return self._calls.run_due()

    def to_svg(self) -> str:
        return self.renderer.to_svg()
