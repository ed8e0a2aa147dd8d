"""Tests for handler rate limiting."""

from typing import Callable, List, Tuple

from fretdiagram.throttle import CallQueue, Cancel, Throttle


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class FakeScheduler:
    """Records scheduled callbacks until fired by the test."""

    def __init__(self) -> None:
        self.delays: List[float] = []
        self._callbacks: List[Callable[[], None]] = []

    def __call__(self, delay: float, fn: Callable[[], None]) -> Cancel:
        self.delays.append(delay)
        self._callbacks.append(fn)

        def cancel() -> None:
            if fn in self._callbacks:
                self._callbacks.remove(fn)

        return cancel

    @property
    def scheduled(self) -> int:
        return len(self._callbacks)

    def fire(self) -> None:
        callbacks, self._callbacks = self._callbacks, []
        for fn in callbacks:
            fn()


def _throttle() -> Tuple[Throttle, FakeClock, FakeScheduler, List[int]]:
    clock = FakeClock()
    scheduler = FakeScheduler()
    calls: List[int] = []
    throttle = Throttle(0.066, calls.append, clock=clock, scheduler=scheduler)
    return throttle, clock, scheduler, calls


def test_leading_call_runs_immediately() -> None:
    throttle, _, scheduler, calls = _throttle()
    throttle(1)
    assert calls == [1]
    assert scheduler.scheduled == 0


def test_burst_delivers_latest_call() -> None:
    throttle, clock, scheduler, calls = _throttle()
    throttle(1)
    clock.now = 0.01
    throttle(2)
    clock.now = 0.02
    throttle(3)
    assert calls == [1]
    assert throttle.pending
    assert scheduler.scheduled == 1
    assert abs(scheduler.delays[0] - 0.056) < 1e-9
    clock.now = 0.1
    scheduler.fire()
    assert calls == [1, 3]
    assert not throttle.pending


def test_calls_after_window_run_immediately() -> None:
    throttle, clock, _, calls = _throttle()
    throttle(1)
    clock.now = 0.2
    throttle(2)
    assert calls == [1, 2]


def test_cancel_drops_pending_call() -> None:
    throttle, clock, scheduler, calls = _throttle()
    throttle(1)
    clock.now = 0.01
    throttle(2)
    throttle.cancel()
    assert not throttle.pending
    assert scheduler.scheduled == 0
    scheduler.fire()
    assert calls == [1]


def test_flush_delivers_now() -> None:
    throttle, clock, scheduler, calls = _throttle()
    throttle(1)
    clock.now = 0.01
    throttle(2)
    throttle.flush()
    assert calls == [1, 2]
    assert scheduler.scheduled == 0
    # Nothing left to flush
    throttle.flush()
    assert calls == [1, 2]


def test_call_queue_runs_only_due_calls() -> None:
    clock = FakeClock()
    queue = CallQueue(clock)
    calls: List[str] = []
    queue.schedule(0.2, lambda: calls.append("late"))
    queue.schedule(0.1, lambda: calls.append("early"))
    assert queue.next_due() == 0.1
    assert queue.run_due() == 0
    clock.now = 0.15
    assert queue.run_due() == 1
    assert calls == ["early"]
    clock.now = 1.0
    assert queue.run_due() == 1
    assert calls == ["early", "late"]
    assert len(queue) == 0
    assert queue.next_due() is None


def test_call_queue_cancel() -> None:
    clock = FakeClock()
    queue = CallQueue(clock)
    calls: List[int] = []
    cancel = queue.schedule(0.1, lambda: calls.append(1))
    cancel()
    # Cancelling twice is harmless
    cancel()
    clock.now = 1.0
    assert queue.run_due() == 0
    assert calls == []


def test_throttle_with_call_queue() -> None:
    clock = FakeClock()
    queue = CallQueue(clock)
    calls: List[int] = []
    throttle = Throttle(0.066, calls.append, clock=clock, scheduler=queue.schedule)
    throttle(1)
    clock.now = 0.01
    throttle(2)
    throttle(3)
    assert len(queue) == 1
    clock.now = 0.1
    queue.run_due()
    assert calls == [1, 3]
    assert not throttle.pending
