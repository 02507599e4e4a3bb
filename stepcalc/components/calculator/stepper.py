"""
Time-staged computation of triangular-number prefix arrays.

A run for ``n`` emits ``[T(1)]``, ``[T(1), T(2)]``, ... ``[T(1), ..., T(n)]``, waiting
``step * 100`` time units before each step. Runs are cancelled cooperatively: after every
wait the run compares its own ``n`` with the live target and stops as soon as they differ.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

STEP_DELAY_UNITS = 100
DEFAULT_TIME_UNIT_SECONDS = 0.001

StepCallback = Callable[[list[int]], None]
TargetGetter = Callable[[], "int | None"]
SleepFunc = Callable[[float], Awaitable[None]]


def triangular(i: int) -> int:
    """Closed form of 1 + 2 + ... + i."""
    return i * (i + 1) // 2


def triangular_prefix(k: int) -> list[int]:
    """Return ``[T(1), ..., T(k)]`` computed from scratch."""
    return [triangular(i) for i in range(1, k + 1)]


class Stepper:
    """Starts and tracks staged emission runs on the running event loop."""

    def __init__(
        self,
        time_unit_seconds: float = DEFAULT_TIME_UNIT_SECONDS,
        sleep: SleepFunc | None = None,
    ) -> None:
        self.time_unit_seconds = time_unit_seconds
        self._sleep = sleep or asyncio.sleep
        self._tasks: dict[asyncio.Task, int] = {}
        self._live: asyncio.Task | None = None

    @property
    def live_target(self) -> int | None:
        """Target of the most recently started run, if it is still going."""
        if self._live is None or self._live.done():
            return None
        return self._tasks.get(self._live)

    @property
    def pending(self) -> int:
        """Number of tasks not finished yet, superseded ones included."""
        return sum(1 for task in self._tasks if not task.done())

    def delay_for(self, step: int) -> float:
        return step * STEP_DELAY_UNITS * self.time_unit_seconds

    def start(
        self, n: int, on_step: StepCallback, current_target: TargetGetter
    ) -> asyncio.Task | None:
        """Schedule a run for ``n``, superseding whatever run was live.

        Returns ``None`` without scheduling anything if the live run is already for ``n``.
        """
        if self.live_target == n and current_target() == n:
            logger.debug("Run for %d already in flight, not restarting", n)
            return None

        task = asyncio.get_running_loop().create_task(
            self._run(n, on_step, current_target), name=f"stepper-{n}"
        )
        self._tasks[task] = n
        self._live = task
        task.add_done_callback(self._forget)
        logger.debug("Started run for %d", n)
        return task

    def _is_stale(self, n: int, current_target: TargetGetter) -> bool:
        # A run restarted for the same target replaces the older task
        return current_target() != n or asyncio.current_task() is not self._live

    async def _run(self, n: int, on_step: StepCallback, current_target: TargetGetter) -> None:
        for step in range(1, n + 1):
            await self._sleep(self.delay_for(step))
            if self._is_stale(n, current_target):
                logger.debug("Run for %d superseded at step %d", n, step)
                return
            on_step(triangular_prefix(step))
        logger.debug("Run for %d completed", n)

    def _forget(self, task: asyncio.Task) -> None:
        self._tasks.pop(task, None)
        if task is self._live:
            self._live = None

    async def shutdown(self) -> None:
        """Cancel every task still alive and wait for them to unwind."""
        tasks = list(self._tasks)
        self._live = None
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()
