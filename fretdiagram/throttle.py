"""Rate limiting of pointer handlers.

A throttled callable runs at most once per interval. The first call of a
burst runs immediately; later calls inside the window are coalesced and
only the most recent one is delivered when the window closes.

Trailing calls go through a scheduler. A CallQueue holds them until its
owner runs them, so they are delivered on the owner's thread.
"""

from __future__ import annotations

import logging
import threading
import time
from itertools import count
from typing import Any, Callable, Dict, Optional, Tuple

Cancel = Callable[[], None]
"""Cancels a scheduled callback."""

Scheduler = Callable[[float, Callable[[], None]], Cancel]
"""Runs a callback after a delay in seconds and returns a way to cancel it."""


class CallQueue:
    """Callbacks waiting for their due time, run only when the owner asks.

    Nothing runs in the background: the owner calls run_due from its own
    thread, e.g. before handling the next input event or from its loop.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._ids = count()
        self._calls: Dict[int, Tuple[float, Callable[[], None]]] = {}

    def __len__(self) -> int:
        return len(self._calls)

    def schedule(self, delay: float, fn: Callable[[], None]) -> Cancel:
        """Queue a callback to run once delay seconds have passed.

        Conforms to Scheduler.
        """
        call_id = next(self._ids)
        self._calls[call_id] = (self._clock() + delay, fn)

        def cancel() -> None:
            self._calls.pop(call_id, None)

        return cancel

    def next_due(self) -> Optional[float]:
        """Get the clock time of the earliest queued callback, if any."""
        if not self._calls:
            return None
        return min(due for due, _ in self._calls.values())

    def run_due(self) -> int:
        """Run the callbacks whose time has come, earliest first.

        Returns:
            The number of callbacks run.
        """
        now = self._clock()
        ready = sorted(
            (due, call_id) for call_id, (due, _) in self._calls.items() if due <= now
        )
        ran = 0
        for _, call_id in ready:
            # An earlier callback may have cancelled this one
            entry = self._calls.pop(call_id, None)
            if entry is not None:
                entry[1]()
                ran += 1
        return ran


class Throttle:
    """Wraps a callable so that it runs at most once per interval."""

    def __init__(
        self,
        interval: float,
        fn: Callable[..., None],
        scheduler: Scheduler,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the throttle.

        Args:
            interval: Minimum time between two invocations in seconds.
            fn: The callable to throttle.
            scheduler: Used to deliver the trailing call of a burst.
            clock: Monotonic time source.
        """
        self._interval = interval
        self._fn = fn
        self._clock = clock
        self._scheduler = scheduler
        self._lock = threading.Lock()
        self._last_call: Optional[float] = None
        self._pending: Optional[Tuple[Any, ...]] = None
        self._cancel_timer: Optional[Cancel] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def __call__(self, *args: Any) -> None:
        with self._lock:
            now = self._clock()
            if self._last_call is None or now - self._last_call >= self._interval:
                self._stop_timer()
                self._pending = None
                self._last_call = now
                run = True
            else:
                self._pending = args
                if self._cancel_timer is None:
                    delay = self._last_call + self._interval - now
                    self._cancel_timer = self._scheduler(delay, self._trailing)
                run = False
        if run:
            self._fn(*args)

    def _trailing(self) -> None:
        with self._lock:
            self._cancel_timer = None
            args = self._pending
            self._pending = None
            if args is not None:
                self._last_call = self._clock()
        if args is not None:
            logging.debug("delivering coalesced call")
            self._fn(*args)

    def _stop_timer(self) -> None:
        if self._cancel_timer is not None:
            self._cancel_timer()
            self._cancel_timer = None

    def flush(self) -> None:
        """Deliver the pending call now instead of at the end of the window."""
        with self._lock:
            self._stop_timer()
        self._trailing()

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        with self._lock:
            self._stop_timer()
            self._pending = None
