"""Wake-up prober: polls the relay's liveness endpoint until it is ready.

Free-tier hosts put idle backends to sleep; the first request after a pause
can take a while. The prober keeps a single asyncio task that pings, sleeps
and pings again, and reports readiness once.
"""

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class WakeUpProber:
    """Polls ``ping`` every ``interval`` seconds until it returns True.

    Args:
        ping: Coroutine function returning True when the backend is ready.
        on_ready: Called once when a ping succeeds.
        interval: Seconds between attempts.
        max_attempts: Stop after this many failed attempts; None polls forever.
        on_probing: Called when polling starts.
    """

    def __init__(
        self,
        ping: Callable[[], Awaitable[bool]],
        on_ready: Callable[[], None],
        interval: float = 10.0,
        max_attempts: int | None = None,
        on_probing: Callable[[], None] | None = None,
    ) -> None:
        self._ping = ping
        self._on_ready = on_ready
        self._on_probing = on_probing
        self.interval = interval
        self.max_attempts = max_attempts
        self.attempts = 0
        self.ready = False
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start polling. Does nothing if already polling or already ready."""
        if self.running or self.ready:
            return
        if self._on_probing is not None:
            self._on_probing()
        self._task = asyncio.create_task(self._run())

    async def _run(self) -> None:
        while True:
            self.attempts += 1
            try:
                is_ready = await self._ping()
            except Exception:
                logger.exception(f"Ping attempt {self.attempts} failed")
                is_ready = False
            if is_ready:
                logger.info(f"Backend ready after {self.attempts} attempt(s)")
                self.ready = True
                self._on_ready()
                return
            if self.max_attempts is not None and self.attempts >= self.max_attempts:
                logger.warning(f"Backend not ready after {self.attempts} attempt(s), giving up")
                return
            logger.debug(f"Backend not ready, retrying in {self.interval:g}s")
            await asyncio.sleep(self.interval)

    async def stop(self) -> None:
        """Cancel polling and wait for the task to finish."""
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task


class Countdown:
    """Cosmetic countdown shown while the backend wakes up.

    Reaching zero does not stop polling.
    """

    def __init__(self, start: int = 15) -> None:
        self.seconds = start

    def tick(self) -> int:
        self.seconds = max(self.seconds - 1, 0)
        return self.seconds
