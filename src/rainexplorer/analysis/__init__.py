"""Aggregation, metric, color and statistics pipeline stages."""

from rainexplorer.analysis.aggregate import (
    aggregate,
    aggregate_monthly,
    aggregate_yearly,
    trailing_daily,
)
from rainexplorer.analysis.colors import (
    NO_DATA_COLOR,
    MetricKind,
    ThresholdTable,
    classify,
    format_value,
    legend,
)
from rainexplorer.analysis.metrics import (
    compute_amount,
    compute_metrics,
    compute_trend,
    compute_variability,
)
from rainexplorer.analysis.summary import summarize

__all__ = [
    "NO_DATA_COLOR",
    "MetricKind",
    "ThresholdTable",
    "aggregate",
    "aggregate_monthly",
    "aggregate_yearly",
    "classify",
    "compute_amount",
    "compute_metrics",
    "compute_trend",
    "compute_variability",
    "format_value",
    "legend",
    "summarize",
    "trailing_daily",
]
