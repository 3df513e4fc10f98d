"""A scheduler driven by a virtual clock.

``ManualScheduler`` never sleeps: timers fire only when the test calls
``advance()``. Use it wherever a ``Scheduler`` is accepted::

    scheduler = ManualScheduler()
    field = FieldController("email", scheduler=scheduler)
    field.on_change("user@example.com")   # looks like autofill
    scheduler.advance(1.5)
    assert field.touched
"""

import heapq
from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass(order=True, slots=True)
class _Timer:
    when: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Timers on a clock that only moves when told to.

    Timers due at the same instant run in the order they were scheduled.
    A callback that schedules another timer inside the advanced window
    sees it run during the same ``advance()``.
    """

    __slots__ = ("_queue", "_seq", "now")

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self._queue: list[_Timer] = []
        self._seq = 0

    def call_later(self, delay: float, callback: Callable[[], None]) -> _Timer:
        self._seq += 1
        timer = _Timer(self.now + max(delay, 0.0), self._seq, callback)
        heapq.heappush(self._queue, timer)
        return timer

    def advance(self, seconds: float) -> int:
        """Move the clock forward, running every timer that comes due.

        Returns the number of callbacks run.
        """
        target = self.now + seconds
        ran = 0
        while self._queue and self._queue[0].when <= target:
            timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self.now = timer.when
            timer.callback()
            ran += 1
        self.now = target
        return ran

    @property
    def pending_count(self) -> int:
        """Timers scheduled and not yet run or cancelled."""
        return sum(1 for t in self._queue if not t.cancelled)

    def __repr__(self) -> str:
        return f"ManualScheduler(now={self.now}, pending={self.pending_count})"
