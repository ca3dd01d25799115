"""
Timer plumbing for the simulator. The engine only needs "call this every N seconds until I say stop", expressed by the
Scheduler protocol, so that tests can substitute a scheduler they fire by hand. The production scheduler runs the
callback from a Runnable loop on the current asyncio event loop.
"""

import asyncio
from collections.abc import Callable
from typing import Protocol

from airtraffic.log import log, log_exception
from airtraffic.runnable import Runnable


class ScheduledTask(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def schedule(self, period: float, callback: Callable[[], None]) -> ScheduledTask:
        """
        Arrange for `callback` to be called every `period` seconds, starting one period from now, until the returned
        task is cancelled.
        """
        ...


class PeriodicTask(Runnable):
    """
    Calls a synchronous callback once per period. The callback runs to completion on the event loop thread, so nothing
    else on the loop observes it half done.
    """

    def __init__(self, period: float, callback: Callable[[], None]):
        super().__init__(f"PeriodicTask({period:g}s)")
        self._period = period
        self._callback = callback

    async def step(self) -> None:
        await self.pause(self._period)
        if self.is_running():
            self._callback()


class _AsyncioTaskHandle:
    def __init__(self, periodic: PeriodicTask, task: asyncio.Task[None]):
        self._periodic = periodic
        self._task = task

    def cancel(self) -> None:
        if self._periodic.is_running():
            self._periodic.stop()
        else:
            # The loop hasn't started the task yet; stop() would be forgotten once it does.
            self._task.cancel()


class AsyncioScheduler:
    """
    Schedules periodic callbacks on the running asyncio event loop. `schedule` must be called from a coroutine or
    callback running on that loop.

    If a callback raises, its loop ends, the traceback is logged, and `on_error` (if given) is called with the
    exception so the host can shut down.
    """

    def __init__(self, on_error: Callable[[BaseException], None] | None = None):
        self._on_error = on_error

    def schedule(self, period: float, callback: Callable[[], None]) -> ScheduledTask:
        periodic = PeriodicTask(period, callback)
        task = asyncio.get_running_loop().create_task(periodic.run())
        task.add_done_callback(self._task_done)
        return _AsyncioTaskHandle(periodic, task)

    def _task_done(self, task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        log("periodic task failed")
        log_exception(exc)
        if self._on_error is not None:
            self._on_error(exc)
