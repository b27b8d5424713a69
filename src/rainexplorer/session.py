"""Explorer session: the explicit owner of all dashboard state.

A session holds the configuration snapshot, the location registry, the
archive provider (with its rate limiter), the region cache, the active
map metric and the request-token counter. Independent sessions share
nothing, so several dashboards can run side by side.

Example:
    >>> import rainexplorer as rx
    >>> explorer = rx.session()
    >>> entry = explorer.region("Minnehaha")  # doctest: +SKIP
    >>> explorer.color_for("Minnehaha")  # doctest: +SKIP
    '#2171b5'
    >>> chart = explorer.chart("Minnehaha", "monthly")  # doctest: +SKIP
"""

from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from rainexplorer._types import Coordinates, Granularity
from rainexplorer.analysis.aggregate import aggregate, aggregate_yearly
from rainexplorer.analysis.colors import MetricKind, classify, format_value
from rainexplorer.analysis.metrics import compute_metrics
from rainexplorer.analysis.summary import summarize
from rainexplorer.cache import RegionCache
from rainexplorer.config import Config, get_default_config
from rainexplorer.providers import get_provider
from rainexplorer.providers.base import ArchiveProvider
from rainexplorer.ratelimit import RateLimiter
from rainexplorer.registry import LocationRegistry
from rainexplorer.results import ChartSeries, RegionEntry

logger = logging.getLogger(__name__)

_DEFAULT_PROVIDER = "open-meteo"
_LOADING_TEXT = "Loading..."


class ExplorerSession:
    """Fetch, derive and classify rainfall data for registered locations.

    Args:
        config: Configuration snapshot for this session.
        registry: Location registry. Defaults to cities plus county
            centroids, with ``config.fallback_location`` as fallback.
        provider: Archive provider. Defaults to the Open-Meteo archive
            behind a rate limiter owned by this session.
    """

    def __init__(
        self,
        config: Config,
        registry: LocationRegistry | None = None,
        provider: ArchiveProvider | None = None,
    ) -> None:
        self._config = config
        self._registry = (
            registry
            if registry is not None
            else LocationRegistry.default(fallback=config.fallback_location)
        )
        if provider is None:
            limiter = RateLimiter(min_interval=config.min_request_interval)
            provider = get_provider(_DEFAULT_PROVIDER, config, limiter=limiter)
        self._provider = provider
        self._cache = RegionCache()
        self._metric = MetricKind.AMOUNT
        self._tokens = itertools.count(1)
        self._latest_token = 0
        self._token_lock = threading.Lock()

    # ── State accessors ──────────────────────────────────────────────

    @property
    def config(self) -> Config:
        """Configuration snapshot captured at creation."""
        return self._config

    @property
    def registry(self) -> LocationRegistry:
        """Location registry used to resolve keys."""
        return self._registry

    @property
    def provider(self) -> ArchiveProvider:
        """Archive provider used on cache misses."""
        return self._provider

    @property
    def cache(self) -> RegionCache:
        """Region cache for this session."""
        return self._cache

    @property
    def metric(self) -> MetricKind:
        """Metric currently shown on the map."""
        return self._metric

    def set_metric(self, kind: MetricKind | str) -> MetricKind:
        """Switch the map metric.

        Raises:
            ValueError: If *kind* does not name a metric.
        """
        self._metric = MetricKind.parse(kind)
        logger.debug("Active metric set to %s", self._metric.value)
        return self._metric

    # ── Region data ──────────────────────────────────────────────────

    def _load_region(self, key: str, coords: Coordinates) -> RegionEntry:
        daily = self._provider.fetch_daily(coords)
        yearly = aggregate_yearly(daily)
        metrics = compute_metrics(yearly, self._config)
        if not daily:
            logger.warning("No precipitation data available for %s", key)
        return RegionEntry(
            key=key,
            coordinates=coords,
            metrics=metrics,
            yearly=tuple(yearly),
            daily=tuple(daily),
        )

    def region(self, key: str) -> RegionEntry:
        """Return the derived record for *key*, fetching at most once.

        The key is resolved before the cache is consulted, so an
        unregistered key fails fast and never occupies a cache slot.

        Args:
            key: Location key.

        Returns:
            The cached ``RegionEntry`` (an entry without data if the
            archive returned nothing).

        Raises:
            UnknownLocationError: If *key* is not registered and no
                fallback is configured.
        """
        return self._cached_region(key, self._registry.resolve(key))

    def _cached_region(self, key: str, coords: Coordinates) -> RegionEntry:
        return self._cache.get_or_compute(
            key, lambda: self._load_region(key, coords)
        )

    def preload(
        self,
        keys: Iterable[str],
        max_workers: int = 1,
    ) -> dict[str, RegionEntry]:
        """Load several regions, optionally from a thread pool.

        Upstream calls stay serialized by the rate limiter; the pool only
        overlaps the local aggregation work.

        Args:
            keys: Location keys to load.
            max_workers: Worker threads; ``1`` loads sequentially.

        Returns:
            Mapping of key to entry, in input order.

        Raises:
            UnknownLocationError: If any key is not registered.
        """
        ordered = list(dict.fromkeys(keys))
        points = [self._registry.resolve(key) for key in ordered]
        if max_workers <= 1:
            return {
                key: self._cached_region(key, coords)
                for key, coords in zip(ordered, points)
            }
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            entries = list(pool.map(self._cached_region, ordered, points))
        return dict(zip(ordered, entries))

    # ── Map styling ──────────────────────────────────────────────────

    def metric_value(
        self,
        key: str,
        kind: MetricKind | str | None = None,
    ) -> float | None:
        """Cached metric value for *key*; ``None`` when not loaded yet."""
        entry = self._cache.get(key)
        if entry is None:
            return None
        resolved = self._metric if kind is None else MetricKind.parse(kind)
        return entry.metrics.get(resolved)

    def color_for(self, key: str, kind: MetricKind | str | None = None) -> str:
        """Map color for *key* from cached data only (never fetches)."""
        resolved = self._metric if kind is None else MetricKind.parse(kind)
        return classify(resolved, self.metric_value(key, resolved))

    def style_map(
        self,
        names: Iterable[str],
        kind: MetricKind | str | None = None,
    ) -> dict[str, str]:
        """Colors for every region name, for restyling the choropleth."""
        return {name: self.color_for(name, kind) for name in names}

    def tooltip(self, key: str, kind: MetricKind | str | None = None) -> str:
        """Hover text for *key*: loading marker, ``No data`` or the value."""
        if key not in self._cache:
            return _LOADING_TEXT
        resolved = self._metric if kind is None else MetricKind.parse(kind)
        return format_value(resolved, self.metric_value(key, resolved))

    # ── Chart selections ─────────────────────────────────────────────

    def issue_token(self) -> int:
        """Issue a new request token, superseding every earlier one."""
        with self._token_lock:
            token = next(self._tokens)
            self._latest_token = token
            return token

    def is_current(self, token: int) -> bool:
        """Whether *token* is the most recently issued one."""
        with self._token_lock:
            return token == self._latest_token

    def chart(
        self,
        key: str,
        granularity: Granularity | str = Granularity.YEARLY,
        title: str | None = None,
    ) -> ChartSeries | None:
        """Build chart points and statistics for one selection.

        Each call issues a request token. If another selection was made
        while this one was loading, the result is discarded and ``None``
        is returned, so a slow response never overwrites a newer one.

        Args:
            key: Location key.
            granularity: ``"yearly"``, ``"monthly"`` or ``"daily"``.
            title: Chart title; defaults to the registry label.

        Returns:
            A ``ChartSeries``, or ``None`` if superseded.

        Raises:
            UnknownLocationError: If *key* is not registered.
            ValueError: If *granularity* is unknown.
        """
        scale = Granularity(granularity)
        token = self.issue_token()
        entry = self.region(key)

        if scale is Granularity.YEARLY:
            points = list(entry.yearly)
        else:
            points = aggregate(entry.daily, scale, self._config.daily_chart_days)
        heading = title if title is not None else self._registry.label(key)
        stats = summarize(points, scale, heading, self._config)

        if not self.is_current(token):
            logger.debug("Discarding superseded chart request %d for %s", token, key)
            return None

        return ChartSeries(
            token=token,
            key=key,
            title=heading,
            granularity=scale,
            kind=scale.chart_kind,
            points=points,
            stats=stats,
        )


def session(
    config: Config | None = None,
    registry: LocationRegistry | None = None,
    provider: ArchiveProvider | None = None,
) -> ExplorerSession:
    """Create an explorer session from the current default configuration.

    Args:
        config: Optional ``Config``; overrides the module defaults.
        registry: Optional location registry.
        provider: Optional archive provider.

    Returns:
        A new, empty ``ExplorerSession``.

    Example:
        >>> import rainexplorer as rx
        >>> explorer = rx.session(rx.Config(min_request_interval=0))
        >>> explorer.metric.value
        'amount'
    """
    captured = config if config is not None else get_default_config()
    return ExplorerSession(config=captured, registry=registry, provider=provider)
