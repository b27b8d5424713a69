"""Tests for the single-flight region cache."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from rainexplorer._types import Coordinates
from rainexplorer.cache import RegionCache
from rainexplorer.results import RegionEntry


def _entry(key: str) -> RegionEntry:
    return RegionEntry(key=key, coordinates=Coordinates(44.0, -100.0))


@pytest.mark.unit
class TestRegionCache:
    """Memoization per key."""

    def test_miss_runs_loader(self) -> None:
        cache = RegionCache()

        entry = cache.get_or_compute("Hughes", lambda: _entry("Hughes"))

        assert entry.key == "Hughes"
        assert "Hughes" in cache
        assert cache.get("Hughes") is entry

    def test_hit_skips_loader(self) -> None:
        cache = RegionCache()
        calls: list[str] = []

        def load() -> RegionEntry:
            calls.append("x")
            return _entry("Brown")

        first = cache.get_or_compute("Brown", load)
        second = cache.get_or_compute("Brown", load)

        assert first is second
        assert calls == ["x"]

    def test_get_does_not_load(self) -> None:
        cache = RegionCache()

        assert cache.get("Brown") is None
        assert len(cache) == 0

    def test_keys_in_insertion_order(self) -> None:
        cache = RegionCache()
        for key in ("b", "a", "c"):
            cache.get_or_compute(key, lambda k=key: _entry(k))

        assert cache.keys() == ["b", "a", "c"]
        assert list(cache) == ["b", "a", "c"]

    def test_loader_error_not_cached(self) -> None:
        cache = RegionCache()

        def fail() -> RegionEntry:
            raise RuntimeError("upstream")

        with pytest.raises(RuntimeError, match="upstream"):
            cache.get_or_compute("Lincoln", fail)

        assert "Lincoln" not in cache
        assert cache.in_flight() == []
        assert cache.get_or_compute("Lincoln", lambda: _entry("Lincoln")).key == (
            "Lincoln"
        )


@pytest.mark.unit
class TestSingleFlight:
    """Concurrent callers share one load."""

    def test_concurrent_callers_share_one_load(self) -> None:
        cache = RegionCache()
        gate = threading.Event()
        started = threading.Event()
        calls: list[int] = []

        def load() -> RegionEntry:
            calls.append(1)
            started.set()
            gate.wait(timeout=5)
            return _entry("Pennington")

        with ThreadPoolExecutor(max_workers=4) as pool:
            futures = [
                pool.submit(cache.get_or_compute, "Pennington", load) for _ in range(4)
            ]
            assert started.wait(timeout=5)
            assert cache.in_flight() == ["Pennington"]
            gate.set()
            results = [f.result(timeout=5) for f in futures]

        assert len(calls) == 1
        assert all(r is results[0] for r in results)
        assert cache.in_flight() == []

    def test_waiters_see_loader_error(self) -> None:
        cache = RegionCache()
        gate = threading.Event()
        started = threading.Event()

        def fail() -> RegionEntry:
            started.set()
            gate.wait(timeout=5)
            raise RuntimeError("upstream")

        with ThreadPoolExecutor(max_workers=3) as pool:
            owner = pool.submit(cache.get_or_compute, "Brown", fail)
            assert started.wait(timeout=5)
            waiters = [
                pool.submit(cache.get_or_compute, "Brown", fail) for _ in range(2)
            ]
            gate.set()
            for future in [owner, *waiters]:
                with pytest.raises(RuntimeError, match="upstream"):
                    future.result(timeout=5)

        assert "Brown" not in cache

    def test_different_keys_load_independently(self) -> None:
        cache = RegionCache()

        with ThreadPoolExecutor(max_workers=4) as pool:
            keys = ["a", "b", "c", "d"]
            results = list(
                pool.map(
                    lambda k: cache.get_or_compute(k, lambda: _entry(k)),
                    keys,
                )
            )

        assert [r.key for r in results] == keys
        assert sorted(cache.keys()) == keys
