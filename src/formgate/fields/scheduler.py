"""One-shot scheduled tasks with explicit cancellation.

Field controllers never hold a raw timer handle. They own a
``ScheduledTask`` that can be armed, cancelled, fired early, and closed:

- ``arm(delay)`` always cancels the previous timer first (last arm wins),
  so at most one timer is outstanding per task.
- ``close()`` cancels and refuses any later ``arm()``; a closed task can
  never fire against a torn-down field.

The timers themselves come from a ``Scheduler``. ``TaskGroupScheduler``
runs them on an anyio task group; ``formgate.testing.ManualScheduler``
runs them on a virtual clock for tests.

Example::

    async with anyio.create_task_group() as tg:
        task = ScheduledTask(TaskGroupScheduler(tg), on_elapsed)
        task.arm(1.5)
        ...
        task.close()
"""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

import anyio
from anyio.abc import TaskGroup

from formgate.errors import TeardownError


@runtime_checkable
class Handle(Protocol):
    """A pending timer returned by ``Scheduler.call_later``."""

    def cancel(self) -> None: ...


@runtime_checkable
class Scheduler(Protocol):
    """Anything that can run a callback once after a delay (in seconds)."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Handle: ...


class _ScopeHandle:
    __slots__ = ("_scope",)

    def __init__(self, scope: anyio.CancelScope) -> None:
        self._scope = scope

    def cancel(self) -> None:
        self._scope.cancel()


class TaskGroupScheduler:
    """Run timers as tasks in an anyio task group.

    Each timer is a task sleeping inside its own ``CancelScope``;
    cancelling the handle cancels the scope, so the callback never runs.
    The task group must outlive every field that uses this scheduler.
    """

    __slots__ = ("_task_group",)

    def __init__(self, task_group: TaskGroup) -> None:
        self._task_group = task_group

    def call_later(self, delay: float, callback: Callable[[], None]) -> Handle:
        scope = anyio.CancelScope()

        async def run() -> None:
            with scope:
                await anyio.sleep(delay)
                callback()

        self._task_group.start_soon(run)
        return _ScopeHandle(scope)


class ScheduledTask:
    """A cancellable one-shot task bound to a single callback."""

    __slots__ = ("_callback", "_closed", "_handle", "_scheduler", "_token")

    def __init__(self, scheduler: Scheduler, callback: Callable[[], None]) -> None:
        self._scheduler = scheduler
        self._callback = callback
        self._handle: Handle | None = None
        self._token: object | None = None
        self._closed = False

    @property
    def pending(self) -> bool:
        """True while a timer is armed and has not fired or been cancelled."""
        return self._token is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def arm(self, delay: float) -> None:
        """Start the timer, cancelling any timer already running.

        Raises:
            TeardownError: The task was closed.
        """
        if self._closed:
            msg = "Cannot arm a scheduled task after close()"
            raise TeardownError(msg)
        self.cancel()
        token = object()
        self._token = token
        self._handle = self._scheduler.call_later(delay, lambda: self._elapsed(token))

    def cancel(self) -> bool:
        """Cancel the pending timer. Returns True if one was pending."""
        handle = self._handle
        was_pending = self._token is not None
        self._handle = None
        self._token = None
        if handle is not None:
            handle.cancel()
        return was_pending

    def fire(self) -> bool:
        """Run the callback now instead of waiting. Returns True if it ran."""
        if not self.cancel():
            return False
        self._callback()
        return True

    def close(self) -> None:
        """Cancel and refuse further arming. Safe to call repeatedly."""
        self.cancel()
        self._closed = True

    def _elapsed(self, token: object) -> None:
        # A stale timer whose cancellation raced with expiry must not run
        if self._closed or token is not self._token:
            return
        self._handle = None
        self._token = None
        self._callback()

    def __enter__(self) -> "ScheduledTask":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
