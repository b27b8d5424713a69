"""In-memory region cache with single-flight loading.

The cache memoizes one ``RegionEntry`` per location key for the life of
a session. There is no eviction and no persistence. Concurrent callers
asking for the same uncached key share a single in-flight load.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from concurrent.futures import Future

from rainexplorer.results import RegionEntry

logger = logging.getLogger(__name__)


class RegionCache:
    """Memoizes derived region data per location key.

    ``get_or_compute`` runs the loader at most once per key: the first
    caller becomes the owner of the load, later callers for the same key
    block on the owner's ``Future``. If the loader raises, the exception
    reaches every waiting caller, nothing is stored, and the next call
    starts a fresh load.

    Example:
        >>> cache = RegionCache()
        >>> entry = cache.get_or_compute("Hughes", load_hughes)  # doctest: +SKIP
        >>> cache.get_or_compute("Hughes", load_hughes) is entry  # doctest: +SKIP
        True
    """

    def __init__(self) -> None:
        self._entries: dict[str, RegionEntry] = {}
        self._in_flight: dict[str, Future[RegionEntry]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> RegionEntry | None:
        """Return the cached entry for *key* without loading."""
        with self._lock:
            return self._entries.get(key)

    def get_or_compute(
        self,
        key: str,
        loader: Callable[[], RegionEntry],
    ) -> RegionEntry:
        """Return the entry for *key*, running *loader* on a miss.

        Args:
            key: Location key.
            loader: Zero-argument callable producing the entry.

        Returns:
            The cached (or freshly loaded) entry.

        Raises:
            Exception: Whatever *loader* raised, for the owner and for
                every caller waiting on the same load.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                logger.debug("Region cache hit for %s", key)
                return entry
            future = self._in_flight.get(key)
            is_owner = future is None
            if future is None:
                future = Future()
                self._in_flight[key] = future

        if not is_owner:
            logger.debug("Joining in-flight load for %s", key)
            return future.result()

        logger.debug("Region cache miss for %s", key)
        try:
            entry = loader()
        except BaseException as exc:
            with self._lock:
                self._in_flight.pop(key, None)
            future.set_exception(exc)
            raise

        with self._lock:
            self._entries[key] = entry
            self._in_flight.pop(key, None)
        future.set_result(entry)
        return entry

    def in_flight(self) -> list[str]:
        """Keys currently being loaded."""
        with self._lock:
            return sorted(self._in_flight)

    def keys(self) -> list[str]:
        """Cached keys in insertion order."""
        with self._lock:
            return list(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())
