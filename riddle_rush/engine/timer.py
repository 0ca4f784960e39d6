"""Cancellable countdown driving the round timer."""

import asyncio
from typing import Callable, Optional


class Countdown:
    """Periodic task that calls ``on_tick`` once per interval until stopped.

    At most one task runs at a time. ``start`` replaces any running task so
    ticks from a previous round can never fire into a later one.
    """

    def __init__(self, on_tick: Callable[[], None], interval: float = 1.0):
        """Initialize the countdown.

        Args:
            on_tick: Called on the event loop after every elapsed interval.
            interval: Seconds between ticks.
        """
        self.on_tick = on_tick
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        """Whether a tick task is currently scheduled."""
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start ticking, cancelling any previous task first."""
        self.stop()
        self._task = asyncio.get_running_loop().create_task(self._run())

    def stop(self) -> None:
        """Cancel the pending tick.

        Safe to call from inside ``on_tick``: the running task is detached
        and finishes after the current tick returns.
        """
        task, self._task = self._task, None
        if task is None or task.done():
            return
        if task is not asyncio.current_task():
            task.cancel()

    async def _run(self) -> None:
        me = asyncio.current_task()
        while self._task is me:
            await asyncio.sleep(self.interval)
            if self._task is not me:
                break
            self.on_tick()
