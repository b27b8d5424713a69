"""Provider interface contract and shared types.

Defines the ``ArchiveProvider`` abstract base class implemented by every
daily-precipitation source.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import requests

from rainexplorer._types import Coordinates, DailySample, TimeRange
from rainexplorer.config import Config
from rainexplorer.ratelimit import RateLimiter


@dataclass
class ProviderStatus:
    """Operational status of an archive provider.

    Args:
        available: ``True`` if the provider is operational.
        message: Human-readable status message (empty when healthy).

    Example:
        >>> ProviderStatus(available=True).message
        ''
    """

    available: bool = False
    message: str = ""


class ArchiveProvider(ABC):
    """Abstract base class for historical daily-precipitation sources.

    Subclasses set the ``_name`` class attribute and implement
    ``fetch_daily`` and ``check_status``. Neither method may raise on
    upstream failures.

    Args:
        config: Frozen configuration snapshot for this provider instance.
        limiter: Rate limiter shared with every other provider of the
            same session. A private limiter is created when omitted.
    """

    _name: str = ""

    def __init__(self, config: Config, limiter: RateLimiter | None = None) -> None:
        self._config = config
        self._limiter = (
            limiter
            if limiter is not None
            else RateLimiter(min_interval=config.min_request_interval)
        )
        self._session: requests.Session | None = None

    @property
    def name(self) -> str:
        """Provider identifier used in the registry."""
        return self._name

    @property
    def limiter(self) -> RateLimiter:
        """Rate limiter guarding upstream calls."""
        return self._limiter

    def default_time_range(self) -> TimeRange:
        """Archive window from the configuration snapshot."""
        return (self._config.start_date, self._config.end_date)

    @abstractmethod
    def fetch_daily(
        self,
        coords: Coordinates,
        time_range: TimeRange | None = None,
    ) -> list[DailySample]:
        """Fetch the daily precipitation series for a point.

        Returns an empty list on any transport failure, non-success
        status or malformed payload, after logging a warning.

        Args:
            coords: Point to query.
            time_range: ISO date pair ``(start, end)``; defaults to the
                configured archive window.

        Returns:
            Daily samples in source order, possibly empty.
        """
        ...

    @abstractmethod
    def check_status(self) -> ProviderStatus:
        """Check provider operational status without raising."""
        ...
