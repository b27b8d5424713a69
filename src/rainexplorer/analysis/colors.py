"""Choropleth color classification for the three climate metrics.

Each ``MetricKind`` owns a static ``ThresholdTable``. Classification is a
descending scan with strict ``>`` comparisons: a value exactly on a bound
falls into the band below it, and anything under the lowest bound takes
the table's floor color. Missing values take ``NO_DATA_COLOR``.

Example:
    >>> classify(MetricKind.AMOUNT, 20)
    '#6baed6'
    >>> classify("trend", None)
    '#e5e7eb'
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

NO_DATA_COLOR = "#e5e7eb"


@dataclass(frozen=True)
class ThresholdTable:
    """Ordered lower bounds with their colors.

    Args:
        bands: ``(lower_bound, color)`` pairs, highest bound first.
        floor_color: Color for values at or below the lowest bound.
    """

    bands: tuple[tuple[float, str], ...]
    floor_color: str

    def __post_init__(self) -> None:
        bounds = [bound for bound, _ in self.bands]
        if bounds != sorted(bounds, reverse=True):
            msg = "threshold bands must be ordered highest bound first"
            raise ValueError(msg)

    def classify(self, value: float | None) -> str:
        """Return the color for *value*."""
        if value is None or math.isnan(value):
            return NO_DATA_COLOR
        for bound, color in self.bands:
            if value > bound:
                return color
        return self.floor_color

    def legend(self) -> list[tuple[float | None, float | None, str]]:
        """Bands as ``(lower, upper, color)`` from lowest to highest.

        The floor band has ``lower=None``; the top band has ``upper=None``.
        """
        ascending = list(reversed(self.bands))
        entries: list[tuple[float | None, float | None, str]] = []
        first_bound = ascending[0][0] if ascending else None
        entries.append((None, first_bound, self.floor_color))
        for i, (bound, color) in enumerate(ascending):
            upper = ascending[i + 1][0] if i + 1 < len(ascending) else None
            entries.append((bound, upper, color))
        return entries


# ── Threshold tables ──────────────────────────────────────────────

_AMOUNT_TABLE = ThresholdTable(
    bands=(
        (25.0, "#08306b"),
        (20.0, "#2171b5"),
        (15.0, "#6baed6"),
        (10.0, "#bdd7e7"),
    ),
    floor_color="#eff3ff",
)

# Asymmetric around zero: wetting trends are blues, drying trends reds.
_TREND_TABLE = ThresholdTable(
    bands=(
        (20.0, "#08306b"),
        (10.0, "#2171b5"),
        (0.0, "#6baed6"),
        (-10.0, "#fcae91"),
        (-20.0, "#fb6a4a"),
    ),
    floor_color="#cb181d",
)

_VARIABILITY_TABLE = ThresholdTable(
    bands=(
        (6.0, "#4d004b"),
        (5.0, "#810f7c"),
        (4.0, "#8c6bb1"),
        (3.0, "#9ebcda"),
        (2.0, "#e7e1ef"),
    ),
    floor_color="#ffffcc",
)


class MetricKind(str, Enum):
    """The three map metrics, each carrying its threshold table."""

    AMOUNT = "amount"
    TREND = "trend"
    VARIABILITY = "variability"

    @classmethod
    def parse(cls, value: MetricKind | str) -> MetricKind:
        """Accept a member or its (case-insensitive) name.

        Raises:
            ValueError: If *value* does not name a metric.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            msg = f"Unknown metric {value!r}; expected one of: {valid}"
            raise ValueError(msg) from None

    @property
    def table(self) -> ThresholdTable:
        """Threshold table for this metric."""
        return _TABLES[self]

    @property
    def unit(self) -> str:
        """Suffix appended to formatted values."""
        return _UNITS[self]

    @property
    def legend_title(self) -> str:
        """Legend heading."""
        return _TITLES[self]


_TABLES: dict[MetricKind, ThresholdTable] = {
    MetricKind.AMOUNT: _AMOUNT_TABLE,
    MetricKind.TREND: _TREND_TABLE,
    MetricKind.VARIABILITY: _VARIABILITY_TABLE,
}

_UNITS: dict[MetricKind, str] = {
    MetricKind.AMOUNT: " in/yr",
    MetricKind.TREND: "%",
    MetricKind.VARIABILITY: " std dev",
}

_TITLES: dict[MetricKind, str] = {
    MetricKind.AMOUNT: "10-yr Avg (in)",
    MetricKind.TREND: "40-yr Trend (%)",
    MetricKind.VARIABILITY: "Variability (std dev)",
}


def classify(kind: MetricKind | str, value: float | None) -> str:
    """Map a metric value to its choropleth color.

    Args:
        kind: Metric kind or its name.
        value: Metric value; ``None`` or NaN means no data.

    Returns:
        Hex color string.
    """
    return MetricKind.parse(kind).table.classify(value)


def legend(kind: MetricKind | str) -> list[tuple[float | None, float | None, str]]:
    """Legend bands for *kind*, lowest first.

    Example:
        >>> legend("amount")[0]
        (None, 10.0, '#eff3ff')
    """
    return MetricKind.parse(kind).table.legend()


def format_value(kind: MetricKind | str, value: float | None) -> str:
    """Tooltip text for a metric value.

    Example:
        >>> format_value("amount", 23.414)
        '23.41 in/yr'
        >>> format_value("trend", None)
        'No data'
    """
    if value is None or math.isnan(value):
        return "No data"
    return f"{value:.2f}{MetricKind.parse(kind).unit}"
