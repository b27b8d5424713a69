"""Climate metrics derived from a yearly precipitation series.

The three metrics are independent of each other:

* ``amount`` - mean of the trailing ``amount_window`` years.
* ``trend`` - percent change between the latest ``trend_window`` years
  and the ``trend_window`` years before them.
* ``variability`` - population standard deviation of every year.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import numpy as np
import numpy.typing as npt

from rainexplorer._types import PeriodPoint
from rainexplorer.config import Config
from rainexplorer.results import MetricSet

logger = logging.getLogger(__name__)

_DEFAULT_AMOUNT_WINDOW = 10
_DEFAULT_TREND_WINDOW = 20


def _values(points: Sequence[PeriodPoint]) -> npt.NDArray[np.floating[Any]]:
    return np.array([p.value for p in points], dtype=np.float64)


def compute_amount(
    yearly: Sequence[PeriodPoint],
    window: int = _DEFAULT_AMOUNT_WINDOW,
) -> float | None:
    """Mean annual precipitation over the trailing *window* years.

    Divides by the number of years actually present, so a location with
    only five years of history is not deflated.

    Args:
        yearly: Yearly points in ascending order.
        window: Maximum number of trailing years to average.

    Returns:
        Mean value, or ``None`` for an empty series.

    Example:
        >>> compute_amount([PeriodPoint(str(y), 10.0) for y in range(2000, 2005)])
        10.0
    """
    recent = _values(yearly[-window:])
    if recent.size == 0:
        return None
    return float(recent.mean())


def compute_trend(
    yearly: Sequence[PeriodPoint],
    window: int = _DEFAULT_TREND_WINDOW,
) -> float | None:
    """Percent change between the two most recent *window*-year means.

    Args:
        yearly: Yearly points in ascending order.
        window: Years in each of the two compared windows.

    Returns:
        ``(recent - prior) / prior * 100``; ``0.0`` when the prior mean
        is exactly zero; ``None`` with fewer than ``2 * window`` years.
    """
    if len(yearly) < 2 * window:
        return None
    recent = _values(yearly[-window:]).mean()
    prior = _values(yearly[-2 * window : -window]).mean()
    if prior == 0:
        return 0.0
    return float((recent - prior) / prior * 100)


def compute_variability(yearly: Sequence[PeriodPoint]) -> float | None:
    """Population standard deviation of the whole yearly series.

    Returns:
        Standard deviation (divisor N), or ``None`` for an empty series.

    Example:
        >>> round(compute_variability(
        ...     [PeriodPoint(str(y), float(v)) for y, v in zip(range(5), [1, 2, 3, 4, 5])]
        ... ), 4)
        1.4142
    """
    values = _values(yearly)
    if values.size == 0:
        return None
    return float(np.std(values, ddof=0))


def compute_metrics(
    yearly: Sequence[PeriodPoint],
    config: Config | None = None,
) -> MetricSet:
    """Compute ``amount``, ``trend`` and ``variability`` for a series.

    Args:
        yearly: Yearly points in ascending order.
        config: Supplies the window sizes; defaults are used when omitted.

    Returns:
        A ``MetricSet``; fields without enough history are ``None``.
    """
    amount_window = config.amount_window if config else _DEFAULT_AMOUNT_WINDOW
    trend_window = config.trend_window if config else _DEFAULT_TREND_WINDOW
    metrics = MetricSet(
        amount=compute_amount(yearly, amount_window),
        trend=compute_trend(yearly, trend_window),
        variability=compute_variability(yearly),
    )
    logger.debug("Computed metrics over %d years: %s", len(yearly), metrics)
    return metrics
