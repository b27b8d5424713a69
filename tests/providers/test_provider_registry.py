"""Tests for the provider registry get_provider() function."""

from __future__ import annotations

import pytest

from rainexplorer.config import Config
from rainexplorer.exceptions import ConfigurationError
from rainexplorer.providers import get_provider, get_registered_names
from rainexplorer.providers.base import ArchiveProvider
from rainexplorer.providers.openmeteo import OpenMeteoProvider
from rainexplorer.ratelimit import RateLimiter


@pytest.fixture(autouse=True)
def _reset_registry(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset provider registry before each test."""
    import rainexplorer.providers as _prov

    monkeypatch.setattr(_prov, "_REGISTRY_INITIALIZED", False)
    monkeypatch.setattr(_prov, "_PROVIDER_REGISTRY", {})


@pytest.mark.unit
class TestRegistryReturns:
    """Verify get_provider() returns correct provider instances."""

    def test_open_meteo(self) -> None:
        provider = get_provider("open-meteo", Config())

        assert isinstance(provider, OpenMeteoProvider)
        assert isinstance(provider, ArchiveProvider)

    def test_case_insensitive(self) -> None:
        assert isinstance(get_provider("Open-Meteo", Config()), OpenMeteoProvider)

    def test_shared_limiter_is_used(self) -> None:
        limiter = RateLimiter(min_interval=2.0)

        provider = get_provider("open-meteo", Config(), limiter=limiter)

        assert provider.limiter is limiter

    def test_registered_names(self) -> None:
        assert get_registered_names() == ["open-meteo"]


@pytest.mark.unit
class TestRegistryErrors:
    def test_unknown_provider(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown provider"):
            get_provider("noaa", Config())

    def test_error_lists_valid_names(self) -> None:
        with pytest.raises(ConfigurationError) as excinfo:
            get_provider("noaa", Config())

        assert "open-meteo" in excinfo.value.cause
