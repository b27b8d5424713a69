"""Descriptive statistics for the currently charted series.

Works on whatever granularity is on screen (yearly, monthly or daily)
and is independent of the metric engine.

Example:
    >>> from rainexplorer._types import PeriodPoint
    >>> stats = summarize(
    ...     [PeriodPoint("2020", 3.0), PeriodPoint("2021", 3.0)],
    ...     "yearly",
    ...     "Pierre",
    ... )
    >>> stats.total, stats.average, stats.wettest.label
    (6.0, 3.0, '2020')
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np

from rainexplorer._types import Granularity, PeriodPoint
from rainexplorer.config import Config
from rainexplorer.results import Extremum, SummaryStats

logger = logging.getLogger(__name__)

_DEFAULT_CHANGE_WINDOW = 10
_DEFAULT_CUTOFF_YEAR = 2000
_DIRECTION_THRESHOLD = 5.0  # percent
_ROUND_DIGITS = 2


def _is_missing(value: float | None) -> bool:
    return value is None or math.isnan(value)


def _percent_change(recent: float, baseline: float) -> float | None:
    """Percent change from *baseline* to *recent*; ``None`` if baseline is 0."""
    if baseline == 0 or math.isnan(baseline):
        return None
    return (recent - baseline) / baseline * 100


def _extrema(points: Sequence[PeriodPoint]) -> tuple[Extremum, Extremum]:
    """Linear scan for the largest and smallest values.

    Ties keep the first point seen.
    """
    wettest = points[0]
    driest = points[0]
    for point in points[1:]:
        if point.value > wettest.value:
            wettest = point
        if point.value < driest.value:
            driest = point
    return (
        Extremum(value=wettest.value, label=wettest.label),
        Extremum(value=driest.value, label=driest.label),
    )


def _change_percent(values: Sequence[float], window: int) -> float | None:
    """Last *window* values vs the *window* before them, in percent."""
    if len(values) < 2 * window:
        return None
    recent = float(np.mean(values[-window:]))
    previous = float(np.mean(values[-2 * window : -window]))
    return _percent_change(recent, previous)


def _long_term_trend(
    points: Sequence[PeriodPoint],
    window: int,
    cutoff_year: int,
) -> float | None:
    """Recent-window mean vs the mean of every point before *cutoff_year*."""
    if len(points) < window:
        return None
    early = [p.value for p in points if p.year.isdigit() and int(p.year) < cutoff_year]
    if not early:
        return None
    recent = float(np.mean([p.value for p in points[-window:]]))
    return _percent_change(recent, float(np.mean(early)))


def _direction(change: float | None) -> str:
    if change is None:
        return ""
    if change > _DIRECTION_THRESHOLD:
        return "up"
    if change < -_DIRECTION_THRESHOLD:
        return "down"
    return ""


def summarize(
    points: Sequence[PeriodPoint],
    granularity: Granularity | str = Granularity.YEARLY,
    title: str = "Rainfall",
    config: Config | None = None,
) -> SummaryStats:
    """Compute total, average, extrema and change figures for *points*.

    Never raises on empty or short input: totals fall back to 0 and the
    fields without enough samples are ``None``. Points with a missing
    value are ignored.

    The last-window change is only reported for yearly and monthly
    series.

    Args:
        points: Charted points in chronological order.
        granularity: Time scale of *points*.
        title: Panel heading.
        config: Supplies ``change_window`` and ``long_term_cutoff_year``.

    Returns:
        A ``SummaryStats`` instance.
    """
    scale = Granularity(granularity)
    window = config.change_window if config else _DEFAULT_CHANGE_WINDOW
    cutoff = config.long_term_cutoff_year if config else _DEFAULT_CUTOFF_YEAR

    valid = [p for p in points if not _is_missing(p.value)]
    if not valid:
        return SummaryStats(title=title, granularity=scale)

    values = [p.value for p in valid]
    series = np.array(values, dtype=np.float64)
    total = float(series.sum())
    average = float(series.mean())
    wettest, driest = _extrema(valid)

    change = None if scale is Granularity.DAILY else _change_percent(values, window)
    long_term = _long_term_trend(valid, window, cutoff)

    logger.debug(
        "Summarized %d %s points for %s", len(values), scale.unit_label, title
    )
    return SummaryStats(
        title=title,
        granularity=scale,
        count=len(values),
        total=round(total, _ROUND_DIGITS),
        average=round(average, _ROUND_DIGITS),
        wettest=wettest,
        driest=driest,
        change_percent=change,
        long_term_trend=long_term,
        change_direction=_direction(change),
    )
