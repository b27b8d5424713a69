"""Open-Meteo historical archive access."""

from __future__ import annotations

import logging
import math
from typing import Any

import requests

from rainexplorer._types import Coordinates, DailySample, TimeRange
from rainexplorer.config import Config
from rainexplorer.exceptions import ProviderError
from rainexplorer.providers.base import ArchiveProvider, ProviderStatus
from rainexplorer.ratelimit import RateLimiter

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Archive API constants
# ---------------------------------------------------------------------------

_DAILY_VARIABLE = "precipitation_sum"
_STATUS_TIMEOUT = 10  # shorter timeout for status checks
_SUCCESS_STATUS_CODES = frozenset({200})


def _parse_value(day: Any, raw_value: Any) -> float:
    """Convert one ``precipitation_sum`` entry; ``None`` means no reading.

    Raises:
        ProviderError: If the entry is not a finite, non-negative number.
    """
    if raw_value is None:
        return 0.0
    if isinstance(raw_value, bool) or not isinstance(raw_value, (int, float)):
        raise ProviderError(
            what="Open-Meteo response malformed",
            cause=f"Non-numeric precipitation value {raw_value!r} on {day}",
        )
    value = float(raw_value)
    if math.isnan(value) or math.isinf(value) or value < 0:
        raise ProviderError(
            what="Open-Meteo response malformed",
            cause=f"Invalid precipitation value {raw_value!r} on {day}",
        )
    return value


class OpenMeteoProvider(ArchiveProvider):
    """Open-Meteo archive provider for daily precipitation totals.

    The archive is public and needs no authentication. Each call is a
    single attempt (no retry) spaced by the shared rate limiter.

    Args:
        config: Frozen configuration snapshot.
        limiter: Shared rate limiter; see ``ArchiveProvider``.

    Example:
        >>> from rainexplorer.config import Config
        >>> provider = OpenMeteoProvider(config=Config())
        >>> provider.name
        'open-meteo'
    """

    _name: str = "open-meteo"

    def __init__(self, config: Config, limiter: RateLimiter | None = None) -> None:
        super().__init__(config, limiter)
        self._session: requests.Session = requests.Session()

    def _build_params(
        self,
        coords: Coordinates,
        time_range: TimeRange,
    ) -> dict[str, str]:
        """Build archive query parameters for one point and window."""
        return {
            "latitude": str(coords.lat),
            "longitude": str(coords.lon),
            "start_date": time_range[0],
            "end_date": time_range[1],
            "daily": _DAILY_VARIABLE,
            "precipitation_unit": self._config.precipitation_unit,
            "timezone": self._config.timezone,
        }

    def fetch_daily(
        self,
        coords: Coordinates,
        time_range: TimeRange | None = None,
    ) -> list[DailySample]:
        """Fetch daily precipitation totals for *coords*.

        Never raises. Transport failures, non-200 responses and malformed
        payloads (missing arrays, negative or non-numeric values) all
        degrade to an empty list plus a warning.

        Args:
            coords: Point to query.
            time_range: ISO date pair; defaults to the configured window.

        Returns:
            Daily samples, with null readings stored as ``0.0``.

        Example:
            >>> provider.fetch_daily(Coordinates(43.54, -96.73))  # doctest: +SKIP
            [DailySample(date='1940-01-01', value=0.0), ...]
        """
        resolved = time_range if time_range is not None else self.default_time_range()
        logger.info(
            "Fetching daily precipitation for (%.4f, %.4f) %s..%s",
            coords.lat,
            coords.lon,
            resolved[0],
            resolved[1],
        )
        try:
            payload = self._request(self._build_params(coords, resolved))
            samples = self._parse_daily(payload)
        except ProviderError as exc:
            logger.warning(
                "Daily precipitation unavailable for (%.4f, %.4f): %s",
                coords.lat,
                coords.lon,
                exc,
            )
            return []

        logger.debug("Received %d daily samples", len(samples))
        return samples

    def _request(self, params: dict[str, str]) -> Any:
        """Issue one rate-limited GET and return the decoded JSON body.

        Raises:
            ProviderError: On transport errors, non-success status or an
                undecodable body.
        """
        with self._limiter:
            try:
                resp = self._session.get(
                    self._config.archive_url,
                    params=params,
                    timeout=self._config.request_timeout,
                )
            except requests.RequestException as exc:
                raise ProviderError(
                    what="Open-Meteo request failed",
                    cause=f"{type(exc).__name__}: {exc}",
                    fix="Check internet connection and try again",
                ) from exc

        if resp.status_code not in _SUCCESS_STATUS_CODES:
            raise ProviderError(
                what="Open-Meteo request failed",
                cause=f"HTTP {resp.status_code}",
                fix="Wait a moment and try again; the archive may be rate limiting",
            )

        try:
            return resp.json()
        except ValueError as exc:
            raise ProviderError(
                what="Open-Meteo response unreadable",
                cause="Invalid JSON response",
                fix="Try again; if persistent, check Open-Meteo status",
            ) from exc

    @staticmethod
    def _parse_daily(payload: Any) -> list[DailySample]:
        """Convert the ``daily`` parallel arrays into samples.

        Raises:
            ProviderError: If the payload lacks the ``daily`` block or either
                array, if the arrays differ in length, or if a value is not
                a non-negative number.
        """
        daily = payload.get("daily") if isinstance(payload, dict) else None
        if not isinstance(daily, dict):
            raise ProviderError(
                what="Open-Meteo response malformed",
                cause="Missing 'daily' block",
            )

        dates = daily.get("time")
        values = daily.get(_DAILY_VARIABLE)
        if not isinstance(dates, list) or not isinstance(values, list):
            raise ProviderError(
                what="Open-Meteo response malformed",
                cause=f"Missing 'time' or '{_DAILY_VARIABLE}' array",
            )
        if len(dates) != len(values):
            raise ProviderError(
                what="Open-Meteo response malformed",
                cause=(
                    f"Array length mismatch: {len(dates)} dates, "
                    f"{len(values)} values"
                ),
            )

        return [
            DailySample(date=str(day), value=_parse_value(day, raw_value))
            for day, raw_value in zip(dates, values)
        ]

    def check_status(self) -> ProviderStatus:
        """Check archive API reachability with a one-day query.

        Never raises; returns ``available=False`` with a message on any
        failure.
        """
        params = self._build_params(
            Coordinates(0.0, 0.0),
            (self._config.end_date, self._config.end_date),
        )
        try:
            with self._limiter:
                resp = self._session.get(
                    self._config.archive_url,
                    params=params,
                    timeout=_STATUS_TIMEOUT,
                )
        except requests.RequestException as exc:
            return ProviderStatus(
                available=False,
                message=f"Open-Meteo archive unreachable: {exc}",
            )
        if resp.status_code in _SUCCESS_STATUS_CODES:
            return ProviderStatus(available=True)
        return ProviderStatus(
            available=False,
            message=f"Open-Meteo returned HTTP {resp.status_code}",
        )
