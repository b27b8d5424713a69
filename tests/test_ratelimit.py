"""Tests for the minimum-spacing rate limiter."""

from __future__ import annotations

import threading
import time

import pytest

from rainexplorer.ratelimit import RateLimiter


class FakeClock:
    """Manually advanced monotonic clock that records sleeps."""

    def __init__(self) -> None:
        self.now = 100.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def limiter(clock: FakeClock) -> RateLimiter:
    return RateLimiter(min_interval=1.1, clock=clock, sleep=clock.sleep)


@pytest.mark.unit
class TestRateLimiter:
    """Spacing between consecutive calls."""

    def test_first_call_does_not_wait(
        self, limiter: RateLimiter, clock: FakeClock
    ) -> None:
        with limiter:
            pass

        assert clock.sleeps == []

    def test_back_to_back_calls_wait_full_interval(
        self, limiter: RateLimiter, clock: FakeClock
    ) -> None:
        with limiter:
            pass
        with limiter:
            pass

        assert clock.sleeps == [pytest.approx(1.1)]

    def test_elapsed_time_is_credited(
        self, limiter: RateLimiter, clock: FakeClock
    ) -> None:
        with limiter:
            pass
        clock.now += 0.6
        with limiter:
            pass

        assert clock.sleeps == [pytest.approx(0.5)]

    def test_spacing_counts_from_end_of_call(
        self, limiter: RateLimiter, clock: FakeClock
    ) -> None:
        with limiter:
            clock.now += 3.0  # slow request
        with limiter:
            pass

        assert clock.sleeps == [pytest.approx(1.1)]

    def test_no_wait_after_long_idle(
        self, limiter: RateLimiter, clock: FakeClock
    ) -> None:
        with limiter:
            pass
        clock.now += 10.0
        with limiter:
            pass

        assert clock.sleeps == []

    def test_gap_between_three_calls(
        self, limiter: RateLimiter, clock: FakeClock
    ) -> None:
        starts: list[float] = []
        ends: list[float] = []
        for _ in range(3):
            with limiter:
                starts.append(clock.now)
                clock.now += 0.2
                ends.append(clock.now)

        for prev_end, next_start in zip(ends, starts[1:]):
            assert next_start - prev_end >= 1.1 - 1e-9

    def test_failed_call_still_counts(
        self, limiter: RateLimiter, clock: FakeClock
    ) -> None:
        with pytest.raises(RuntimeError), limiter:
            raise RuntimeError("boom")
        with limiter:
            pass

        assert clock.sleeps == [pytest.approx(1.1)]

    def test_wait_time(self, limiter: RateLimiter, clock: FakeClock) -> None:
        assert limiter.wait_time() == 0.0
        with limiter:
            pass
        clock.now += 0.1

        assert limiter.wait_time() == pytest.approx(1.0)

    def test_zero_interval_never_sleeps(self, clock: FakeClock) -> None:
        limiter = RateLimiter(min_interval=0, clock=clock, sleep=clock.sleep)
        for _ in range(5):
            with limiter:
                pass

        assert clock.sleeps == []
        assert limiter.min_interval == 0


@pytest.mark.unit
class TestRateLimiterThreads:
    def test_calls_never_overlap(self) -> None:
        limiter = RateLimiter(min_interval=0)
        active = 0
        overlaps = 0
        state_lock = threading.Lock()

        def work() -> None:
            nonlocal active, overlaps
            with limiter:
                with state_lock:
                    active += 1
                    if active > 1:
                        overlaps += 1
                time.sleep(0.005)
                with state_lock:
                    active -= 1

        threads = [threading.Thread(target=work) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert overlaps == 0
