"""Fixed-rate tick scheduling on the asyncio event loop."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)


class Ticker(Protocol):
    """A single periodic timer that can be stopped and restarted."""

    @property
    def interval_ms(self) -> int | None: ...

    @property
    def running(self) -> bool: ...

    def start(self, interval_ms: int) -> None: ...

    def stop(self) -> None: ...

    async def aclose(self) -> None: ...


class AsyncioTicker:
    """Calls *callback* every ``interval_ms`` on the running event loop.

    Holds at most one task. :meth:`start` cancels the previous task before
    installing a new one, so two loops never step the same game. It is safe
    to call :meth:`start` or :meth:`stop` from inside *callback*.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        on_error: Callable[[BaseException], None] | None = None,
    ) -> None:
        self._callback = callback
        self._on_error = on_error
        self._task: asyncio.Task | None = None
        self._interval_ms: int | None = None

    @property
    def interval_ms(self) -> int | None:
        return self._interval_ms

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, interval_ms: int) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive.")
        self.stop()
        self._interval_ms = interval_ms
        self._task = asyncio.get_running_loop().create_task(
            self._run(interval_ms / 1000.0),
        )

    def stop(self) -> None:
        task, self._task = self._task, None
        self._interval_ms = None
        if task is not None and not task.done():
            task.cancel()

    async def aclose(self) -> None:
        """Stop and wait for the loop task to finish."""
        task = self._task
        self.stop()
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)

    async def _run(self, interval: float) -> None:
        me = asyncio.current_task()
        try:
            while self._task is me:
                await asyncio.sleep(interval)
                if self._task is not me:
                    break
                self._callback()
        except asyncio.CancelledError:
            logger.debug("Ticker loop cancelled.")
        except Exception as exc:
            logger.exception("Tick callback failed; stopping ticker.")
            if self._task is me:
                self._task = None
                self._interval_ms = None
            if self._on_error is not None:
                self._on_error(exc)
