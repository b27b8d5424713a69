"""Shared test fixtures for the RainExplorer test suite."""

from __future__ import annotations

import threading
from collections.abc import Callable

import pytest

from rainexplorer._types import Coordinates, DailySample, TimeRange
from rainexplorer.config import Config
from rainexplorer.providers.base import ArchiveProvider, ProviderStatus
from rainexplorer.session import ExplorerSession


class FakeProvider(ArchiveProvider):
    """In-memory archive provider that counts fetches.

    Args:
        config: Configuration snapshot.
        samples: Samples returned for every point, or a callable
            mapping coordinates to samples.
        gate: Optional event every fetch waits on before returning.
    """

    _name = "fake"

    def __init__(
        self,
        config: Config,
        samples: list[DailySample] | Callable[[Coordinates], list[DailySample]],
        gate: threading.Event | None = None,
    ) -> None:
        super().__init__(config)
        self._samples = samples
        self._gate = gate
        self._calls_lock = threading.Lock()
        self.calls: list[Coordinates] = []

    def fetch_daily(
        self,
        coords: Coordinates,
        time_range: TimeRange | None = None,
    ) -> list[DailySample]:
        with self._calls_lock:
            self.calls.append(coords)
        if self._gate is not None:
            self._gate.wait(timeout=5)
        if callable(self._samples):
            return list(self._samples(coords))
        return list(self._samples)

    def check_status(self) -> ProviderStatus:
        return ProviderStatus(available=True)


def make_daily(year_totals: dict[int, float]) -> list[DailySample]:
    """Two samples per year (Jan 1 and Jul 1) that sum to the given total."""
    samples: list[DailySample] = []
    for year in sorted(year_totals):
        half = year_totals[year] / 2
        samples.append(DailySample(date=f"{year}-01-01", value=half))
        samples.append(DailySample(date=f"{year}-07-01", value=half))
    return samples


@pytest.fixture
def test_config() -> Config:
    """Config with no request spacing so tests never sleep."""
    return Config(min_request_interval=0)


@pytest.fixture
def scenario_samples() -> list[DailySample]:
    """Three-sample series spanning two years."""
    return [
        DailySample(date="2020-01-01", value=1.0),
        DailySample(date="2020-06-01", value=2.0),
        DailySample(date="2021-01-01", value=3.0),
    ]


@pytest.fixture
def fake_provider(
    test_config: Config, scenario_samples: list[DailySample]
) -> FakeProvider:
    """FakeProvider returning the scenario series for every point."""
    return FakeProvider(test_config, scenario_samples)


@pytest.fixture
def explorer(test_config: Config, fake_provider: FakeProvider) -> ExplorerSession:
    """Session wired to the fake provider."""
    return ExplorerSession(config=test_config, provider=fake_provider)


@pytest.fixture
def make_provider(test_config: Config) -> Callable[..., FakeProvider]:
    """Factory for FakeProvider instances bound to the test config."""

    def _make(
        samples: list[DailySample] | Callable[[Coordinates], list[DailySample]],
        gate: threading.Event | None = None,
    ) -> FakeProvider:
        return FakeProvider(test_config, samples, gate=gate)

    return _make


@pytest.fixture
def daily_from_totals() -> Callable[[dict[int, float]], list[DailySample]]:
    """Expose ``make_daily`` to test modules."""
    return make_daily
