"""Unit tests for the wake-up prober and countdown."""

import asyncio

import pytest_check as check

from relaychat.ui.prober import Countdown, WakeUpProber


class FakePing:
    """Fails ``failures`` times, then succeeds (or never, if None)."""

    def __init__(self, failures: int | None) -> None:
        self.failures = failures
        self.calls = 0

    async def __call__(self) -> bool:
        self.calls += 1
        return self.failures is not None and self.calls > self.failures


async def wait_until(predicate, timeout: float = 1.0) -> None:
    async with asyncio.timeout(timeout):
        while not predicate():
            await asyncio.sleep(0.001)


class TestWakeUpProber:
    async def test_ready_on_first_ping(self) -> None:
        ready: list[bool] = []
        prober = WakeUpProber(FakePing(failures=0), on_ready=lambda: ready.append(True))

        prober.start()
        await wait_until(lambda: not prober.running)

        check.equal(ready, [True])
        check.equal(prober.attempts, 1)
        check.is_true(prober.ready)

    async def test_polls_until_ready(self) -> None:
        ping = FakePing(failures=3)
        ready: list[bool] = []
        prober = WakeUpProber(ping, on_ready=lambda: ready.append(True), interval=0.001)

        prober.start()
        await wait_until(lambda: prober.ready)

        check.equal(ping.calls, 4)
        check.equal(ready, [True])
        check.is_false(prober.running)

    async def test_on_probing_called_at_start(self) -> None:
        events: list[str] = []
        prober = WakeUpProber(
            FakePing(failures=0),
            on_ready=lambda: events.append("ready"),
            on_probing=lambda: events.append("probing"),
        )

        prober.start()
        await wait_until(lambda: prober.ready)

        assert events == ["probing", "ready"]

    async def test_never_ready_keeps_single_task(self) -> None:
        ping = FakePing(failures=None)
        prober = WakeUpProber(ping, on_ready=lambda: None, interval=0.001)

        prober.start()
        task = prober._task
        await wait_until(lambda: ping.calls >= 20)
        prober.start()

        check.is_true(prober.running)
        check.is_true(prober._task is task)

        await prober.stop()

        check.is_false(prober.running)
        check.is_true(task.cancelled())
        check.is_none(prober._task)

    async def test_stop_is_idempotent(self) -> None:
        prober = WakeUpProber(FakePing(failures=None), on_ready=lambda: None, interval=10)

        await prober.stop()
        prober.start()
        await prober.stop()
        await prober.stop()

        assert not prober.running

    async def test_no_polling_after_stop(self) -> None:
        ping = FakePing(failures=None)
        prober = WakeUpProber(ping, on_ready=lambda: None, interval=0.001)

        prober.start()
        await wait_until(lambda: ping.calls >= 2)
        await prober.stop()
        calls = ping.calls
        await asyncio.sleep(0.02)

        assert ping.calls == calls

    async def test_ping_exception_counts_as_failed_attempt(self) -> None:
        calls = 0

        async def flaky_ping() -> bool:
            nonlocal calls
            calls += 1
            if calls <= 2:
                raise RuntimeError("transport exploded")
            return True

        ready: list[bool] = []
        prober = WakeUpProber(flaky_ping, on_ready=lambda: ready.append(True), interval=0.001)

        prober.start()
        await wait_until(lambda: not prober.running)

        check.is_true(prober.ready)
        check.equal(prober.attempts, 3)
        check.equal(ready, [True])

    async def test_ping_exception_respects_max_attempts(self) -> None:
        async def broken_ping() -> bool:
            raise RuntimeError("transport exploded")

        prober = WakeUpProber(broken_ping, on_ready=lambda: None, max_attempts=2, interval=0.001)

        prober.start()
        await wait_until(lambda: not prober.running)

        check.equal(prober.attempts, 2)
        check.is_false(prober.ready)
        check.is_none(prober._task.exception())

    async def test_single_attempt_variant_gives_up(self) -> None:
        ready: list[bool] = []
        prober = WakeUpProber(
            FakePing(failures=None), on_ready=lambda: ready.append(True), max_attempts=1
        )

        prober.start()
        await wait_until(lambda: not prober.running)

        check.equal(prober.attempts, 1)
        check.equal(ready, [])
        check.is_false(prober.ready)

    async def test_start_after_ready_does_nothing(self) -> None:
        ping = FakePing(failures=0)
        prober = WakeUpProber(ping, on_ready=lambda: None)

        prober.start()
        await wait_until(lambda: prober.ready)
        prober.start()

        check.is_false(prober.running)
        check.equal(ping.calls, 1)


class TestCountdown:
    def test_counts_down_to_zero_and_stays(self) -> None:
        countdown = Countdown(start=3)

        ticks = [countdown.tick() for _ in range(5)]

        assert ticks == [2, 1, 0, 0, 0]

    def test_defaults_to_fifteen(self) -> None:
        assert Countdown().seconds == 15
