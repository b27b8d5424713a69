"""Result object model for pipeline outputs."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, Field

from rainexplorer._types import Coordinates, DailySample, Granularity, PeriodPoint

if TYPE_CHECKING:
    import pandas as pd

_METRIC_NAMES = ("amount", "trend", "variability")


def _format_optional(value: float | None, suffix: str = "") -> str:
    if value is None or math.isnan(value):
        return "N/A"
    return f"{value:.2f}{suffix}"


@dataclass(frozen=True)
class MetricSet:
    """Derived climate metrics for one yearly series.

    Attributes:
        amount: Trailing-decade mean annual precipitation.
        trend: Percent change between adjacent 20-year means.
        variability: Population standard deviation of all years.

    Example:
        >>> MetricSet(amount=21.3, trend=None, variability=4.1).get("amount")
        21.3
    """

    amount: float | None = None
    trend: float | None = None
    variability: float | None = None

    def get(self, kind: str | Enum) -> float | None:
        """Return the metric named by *kind* (a ``MetricKind`` or its name).

        Raises:
            KeyError: If *kind* does not name a metric.
        """
        name = kind.value if isinstance(kind, Enum) else str(kind).lower()
        if name not in _METRIC_NAMES:
            raise KeyError(name)
        value: float | None = getattr(self, name)
        return value


@dataclass(frozen=True)
class RegionEntry:
    """Fully derived, cached record for one named location.

    Created once per location per session and never mutated.

    Attributes:
        key: Location key (city, county or station-backed county).
        coordinates: Point the archive was queried at.
        metrics: Derived metrics for the yearly series.
        yearly: Yearly totals, ascending by year.
        daily: Raw daily samples, kept so monthly and daily charts need
            no second fetch.

    Example:
        >>> entry = RegionEntry(key="Hughes", coordinates=Coordinates(44.37, -100.37))
        >>> entry.has_data
        False
    """

    key: str
    coordinates: Coordinates
    metrics: MetricSet = field(default_factory=MetricSet)
    yearly: tuple[PeriodPoint, ...] = ()
    daily: tuple[DailySample, ...] = ()

    @property
    def has_data(self) -> bool:
        """Whether the archive returned any samples for this location."""
        return bool(self.daily)

    def __repr__(self) -> str:
        """Return narrative summary for interactive display.

        Shows the key, the year span and each metric. Does NOT show the
        raw series.
        """
        lines: list[str] = [f"{type(self).__name__}("]
        lines.append(f"  key: {self.key}")
        if self.yearly:
            lines.append(
                f"  years: {self.yearly[0].label}-{self.yearly[-1].label} "
                f"({len(self.yearly)} years, {len(self.daily)} days)"
            )
        else:
            lines.append("  years: no data")
        lines.append(f"  amount: {_format_optional(self.metrics.amount, ' in/yr')}")
        lines.append(f"  trend: {_format_optional(self.metrics.trend, '%')}")
        lines.append(
            f"  variability: {_format_optional(self.metrics.variability, ' std dev')}"
        )
        lines.append(")")
        return "\n".join(lines)

    def to_dataframe(self) -> pd.DataFrame:
        """Export the yearly series to a pandas DataFrame.

        Returns:
            DataFrame with ``key``, ``year`` and ``precipitation`` columns.
        """
        import pandas as pd

        return pd.DataFrame(
            {
                "key": [self.key] * len(self.yearly),
                "year": [p.label for p in self.yearly],
                "precipitation": [p.value for p in self.yearly],
            },
            columns=["key", "year", "precipitation"],
        )


class Extremum(BaseModel):
    """An extreme value and the period label it came from."""

    model_config = ConfigDict(frozen=True)

    value: float
    label: str


class SummaryStats(BaseModel):
    """Descriptive statistics for the currently charted series.

    Uses Pydantic for JSON serialization to the display panel.

    Attributes:
        title: Panel heading.
        granularity: Time scale of the summarized series.
        count: Number of non-null values.
        total: Sum of all values (2 decimals).
        average: Mean value (2 decimals).
        wettest: Largest value and its label, ``None`` when empty.
        driest: Smallest value and its label, ``None`` when empty.
        change_percent: Last-window vs previous-window percent change.
        long_term_trend: Recent-window mean vs pre-cutoff mean, percent.
        change_direction: ``"up"``, ``"down"`` or ``""`` for the panel card.

    Example:
        >>> SummaryStats(title="Pierre").total
        0.0
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    granularity: Granularity = Granularity.YEARLY
    count: int = 0
    total: float = 0.0
    average: float = 0.0
    wettest: Extremum | None = None
    driest: Extremum | None = None
    change_percent: float | None = None
    long_term_trend: float | None = None
    change_direction: Literal["up", "down", ""] = ""

    @property
    def is_empty(self) -> bool:
        """Whether the summarized series had no values."""
        return self.count == 0


class ChartSeries(BaseModel):
    """Everything the chart widget and stats panel need for one selection.

    Attributes:
        token: Request token issued for the selection.
        key: Location key.
        title: Chart title.
        granularity: Time scale of ``points``.
        kind: ``"line"`` or ``"bar"``.
        points: Ordered ``(label, value)`` points.
        stats: Summary of ``points``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    token: int
    key: str
    title: str
    granularity: Granularity
    kind: Literal["line", "bar"]
    points: list[PeriodPoint] = Field(default_factory=list)
    stats: SummaryStats = Field(default_factory=SummaryStats)

    def xy(self) -> list[dict[str, float | str]]:
        """Points in the ``{"x": label, "y": value}`` shape charts expect."""
        return [{"x": p.label, "y": p.value} for p in self.points]
