"""Internal shared types for cross-boundary data contracts.

These types define the data shapes passed between the provider, the
aggregator, the metric engine and the summarizer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from rainexplorer.exceptions import ConfigurationError

TimeRange = tuple[str, str]
"""ISO-8601 date pair ``(start, end)`` bounding an archive query."""

_MIN_LAT = -90.0
_MAX_LAT = 90.0
_MIN_LON = -180.0
_MAX_LON = 180.0


@dataclass(frozen=True)
class DailySample:
    """One daily precipitation reading from the archive source.

    Args:
        date: Calendar date as ``YYYY-MM-DD``.
        value: Daily precipitation total (never negative; a missing
            upstream reading is stored as ``0.0``).

    Example:
        >>> DailySample(date="2020-01-01", value=0.12).year
        '2020'
    """

    date: str
    value: float

    @property
    def year(self) -> str:
        """Four-digit year prefix of ``date``."""
        return self.date[:4]

    @property
    def month(self) -> str:
        """``YYYY-MM`` prefix of ``date``."""
        return self.date[:7]


@dataclass(frozen=True)
class PeriodPoint:
    """One point of an aggregated or charted series.

    ``label`` is a year (``YYYY``), a month (``YYYY-MM``) or a date
    (``YYYY-MM-DD``) depending on the series granularity.

    Args:
        label: Period label used as the chart x value.
        value: Precipitation total for the period.

    Example:
        >>> PeriodPoint(label="1999-07", value=3.4).year
        '1999'
    """

    label: str
    value: float

    @property
    def year(self) -> str:
        """Four-digit year prefix of ``label``."""
        return self.label[:4]


YearlyPoint = PeriodPoint
"""A ``PeriodPoint`` whose label is a four-digit year."""


@dataclass(frozen=True)
class Coordinates:
    """WGS84 point used to query the archive.

    Raises:
        ConfigurationError: If latitude or longitude is out of range.

    Example:
        >>> Coordinates(43.54, -96.73).lat
        43.54
    """

    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not (_MIN_LAT <= self.lat <= _MAX_LAT):
            raise ConfigurationError(
                what=f"Invalid latitude: {self.lat}",
                cause=f"Latitude must be between {_MIN_LAT} and {_MAX_LAT}",
                fix="Provide a valid WGS84 latitude value",
            )
        if not (_MIN_LON <= self.lon <= _MAX_LON):
            raise ConfigurationError(
                what=f"Invalid longitude: {self.lon}",
                cause=f"Longitude must be between {_MIN_LON} and {_MAX_LON}",
                fix="Provide a valid WGS84 longitude value",
            )


class Granularity(str, Enum):
    """Time scale of a charted series."""

    YEARLY = "yearly"
    MONTHLY = "monthly"
    DAILY = "daily"

    @property
    def unit_label(self) -> str:
        """Singular period noun used in the statistics panel."""
        return {"yearly": "year", "monthly": "month", "daily": "day"}[self.value]

    @property
    def chart_kind(self) -> Literal["line", "bar"]:
        """Chart type the widget should draw for this granularity."""
        return "bar" if self is Granularity.DAILY else "line"
