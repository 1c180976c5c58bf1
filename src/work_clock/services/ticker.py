"""Periodic callback task bound to the running event loop."""

import asyncio
import contextlib
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class Ticker:
    """Invoke ``callback`` every ``interval`` seconds until stopped."""

    interval: float
    callback: Callable[[], None]
    _task: asyncio.Task[None] | None = field(default=None, init=False, repr=False)

    @property
    def running(self) -> bool:
        """Return True while the periodic task is scheduled."""
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the periodic task; must be called inside a running loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name="work_clock_ticker"
        )

    async def stop(self) -> None:
        """Cancel the periodic task and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self.callback()
            except Exception:
                logger.exception("Ticker callback failed")
