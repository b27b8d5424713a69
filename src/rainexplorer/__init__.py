"""RainExplorer: historical rainfall metrics for a state choropleth.

Example:
    >>> import rainexplorer as rx
    >>>
    >>> explorer = rx.session()
    >>> entry = explorer.region("Pennington")
    >>> print(entry.metrics.amount)
    >>>
    >>> # Color every county for the active metric
    >>> explorer.set_metric("trend")
    >>> colors = explorer.style_map(["Pennington", "Minnehaha"])
    >>>
    >>> # Chart points plus summary statistics
    >>> chart = explorer.chart("Pennington", "monthly")
    >>> chart.stats.wettest
"""

from rainexplorer.__about__ import __version__
from rainexplorer._types import (
    Coordinates,
    DailySample,
    Granularity,
    PeriodPoint,
    YearlyPoint,
)
from rainexplorer.analysis import (
    MetricKind,
    aggregate_monthly,
    aggregate_yearly,
    classify,
    compute_metrics,
    summarize,
)
from rainexplorer.config import Config, configure
from rainexplorer.exceptions import (
    ConfigurationError,
    ProviderError,
    RainExplorerError,
    UnknownLocationError,
)
from rainexplorer.registry import LocationRegistry
from rainexplorer.results import (
    ChartSeries,
    Extremum,
    MetricSet,
    RegionEntry,
    SummaryStats,
)
from rainexplorer.session import ExplorerSession, session

__all__ = [
    # Version
    "__version__",
    # Session
    "ExplorerSession",
    "session",
    "LocationRegistry",
    # Pipeline stages
    "MetricKind",
    "aggregate_monthly",
    "aggregate_yearly",
    "classify",
    "compute_metrics",
    "summarize",
    # Types
    "Coordinates",
    "DailySample",
    "Granularity",
    "PeriodPoint",
    "YearlyPoint",
    # Configuration
    "Config",
    "configure",
    # Results
    "ChartSeries",
    "Extremum",
    "MetricSet",
    "RegionEntry",
    "SummaryStats",
    # Exceptions
    "ConfigurationError",
    "ProviderError",
    "RainExplorerError",
    "UnknownLocationError",
]
