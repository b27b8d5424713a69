"""Daily precipitation aggregation.

Reduces a daily sample series to yearly or monthly totals by grouping on
the date prefix. Periods that never appear in the input are not
zero-filled.

Example:
    >>> from rainexplorer._types import DailySample
    >>> aggregate_yearly([
    ...     DailySample("2020-01-01", 1.0),
    ...     DailySample("2020-06-01", 2.0),
    ...     DailySample("2021-01-01", 3.0),
    ... ])
    [PeriodPoint(label='2020', value=3.0), PeriodPoint(label='2021', value=3.0)]
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import pandas as pd

from rainexplorer._types import DailySample, Granularity, PeriodPoint

logger = logging.getLogger(__name__)

_YEAR_PREFIX = 4
_MONTH_PREFIX = 7
_ROUND_DIGITS = 2


def _samples_to_frame(samples: Sequence[DailySample]) -> pd.DataFrame:
    """Build a ``date``/``value`` DataFrame from daily samples."""
    return pd.DataFrame(
        {
            "date": [s.date for s in samples],
            "value": [float(s.value) for s in samples],
        }
    )


def _sum_by_prefix(
    samples: Sequence[DailySample],
    prefix_len: int,
) -> list[PeriodPoint]:
    """Sum sample values grouped by the first *prefix_len* date characters.

    Args:
        samples: Daily samples in any order.
        prefix_len: 4 for years, 7 for months.

    Returns:
        One point per distinct prefix, rounded to 2 decimals and sorted
        ascending by label.
    """
    if not samples:
        return []

    frame = _samples_to_frame(samples)
    totals = frame.groupby(frame["date"].str[:prefix_len], sort=True)["value"].sum()
    return [
        PeriodPoint(label=str(label), value=round(float(total), _ROUND_DIGITS))
        for label, total in totals.items()
    ]


def aggregate_yearly(samples: Sequence[DailySample]) -> list[PeriodPoint]:
    """Reduce daily samples to one total per calendar year.

    Args:
        samples: Daily samples from the archive provider.

    Returns:
        Yearly points labelled ``YYYY``, ascending; empty for empty input.
    """
    return _sum_by_prefix(samples, _YEAR_PREFIX)


def aggregate_monthly(samples: Sequence[DailySample]) -> list[PeriodPoint]:
    """Reduce daily samples to one total per calendar month.

    Args:
        samples: Daily samples from the archive provider.

    Returns:
        Monthly points labelled ``YYYY-MM``, ascending.
    """
    return _sum_by_prefix(samples, _MONTH_PREFIX)


def trailing_daily(samples: Sequence[DailySample], days: int) -> list[PeriodPoint]:
    """Return the last *days* samples as chart points, unchanged.

    Args:
        samples: Daily samples in chronological order.
        days: Number of trailing samples to keep.

    Returns:
        Points labelled ``YYYY-MM-DD``.
    """
    if days <= 0:
        return []
    return [PeriodPoint(label=s.date, value=s.value) for s in samples[-days:]]


def aggregate(
    samples: Sequence[DailySample],
    granularity: Granularity | str,
    daily_days: int = 365,
) -> list[PeriodPoint]:
    """Build the chart series for *granularity*.

    Args:
        samples: Daily samples in chronological order.
        granularity: ``"yearly"``, ``"monthly"`` or ``"daily"``.
        daily_days: Trailing window used for the daily series.

    Returns:
        Points ready for the chart widget.

    Raises:
        ValueError: If *granularity* is not a known time scale.
    """
    scale = Granularity(granularity)
    if scale is Granularity.YEARLY:
        return aggregate_yearly(samples)
    if scale is Granularity.MONTHLY:
        return aggregate_monthly(samples)
    return trailing_daily(samples, daily_days)
