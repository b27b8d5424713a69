"""Static location registries for South Dakota.

Locations are keyed by display name (cities and county names). The
county name doubles as the join key for boundary features, so it must
match the ``name``/``NAME`` property of the geometry source.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from rainexplorer._types import Coordinates
from rainexplorer.exceptions import UnknownLocationError

logger = logging.getLogger(__name__)

STATEWIDE_KEY = "Statewide Average"
STATE_FIPS = "46"

# ---------------------------------------------------------------------------
# Cities
# ---------------------------------------------------------------------------

CITIES: dict[str, Coordinates] = {
    STATEWIDE_KEY: Coordinates(44.37, -100.35),
    "Sioux Falls": Coordinates(43.54, -96.73),
    "Rapid City": Coordinates(44.08, -103.23),
    "Pierre": Coordinates(44.37, -100.35),
    "Aberdeen": Coordinates(45.46, -98.49),
    "Mitchell": Coordinates(43.71, -98.03),
    "Watertown": Coordinates(44.90, -97.12),
    "Brookings": Coordinates(44.31, -96.80),
    "Huron": Coordinates(44.36, -98.21),
    "Yankton": Coordinates(42.87, -97.39),
}

# ---------------------------------------------------------------------------
# County centroids
# ---------------------------------------------------------------------------

COUNTY_CENTROIDS: dict[str, Coordinates] = {
    "Minnehaha": Coordinates(43.67, -96.79),
    "Pennington": Coordinates(44.00, -103.45),
    "Hughes": Coordinates(44.37, -100.37),
    "Brown": Coordinates(45.57, -98.37),
    "Lincoln": Coordinates(43.25, -96.70),
    "Codington": Coordinates(44.97, -97.18),
    "Brookings": Coordinates(44.31, -96.80),
    "Beadle": Coordinates(44.41, -98.28),
}

# ---------------------------------------------------------------------------
# Weather stations (GHCN-Daily identifiers)
# ---------------------------------------------------------------------------

STATIONS: dict[str, dict[str, Any]] = {
    "USW00014944": {
        "label": "Sioux Falls Regional Airport",
        "coordinates": Coordinates(43.58, -96.75),
    },
    "USW00024090": {
        "label": "Rapid City Regional Airport",
        "coordinates": Coordinates(44.05, -103.05),
    },
    "USW00024025": {
        "label": "Pierre Regional Airport",
        "coordinates": Coordinates(44.38, -100.29),
    },
    "USW00014929": {
        "label": "Aberdeen Regional Airport",
        "coordinates": Coordinates(45.44, -98.41),
    },
    "USW00014936": {
        "label": "Huron Regional Airport",
        "coordinates": Coordinates(44.40, -98.22),
    },
    "USW00014946": {
        "label": "Watertown Regional Airport",
        "coordinates": Coordinates(44.91, -97.15),
    },
}

COUNTY_STATIONS: dict[str, str] = {
    "Minnehaha": "USW00014944",
    "Pennington": "USW00024090",
    "Hughes": "USW00024025",
    "Brown": "USW00014929",
    "Beadle": "USW00014936",
    "Codington": "USW00014946",
}


class LocationRegistry(Mapping[str, Coordinates]):
    """Read-only lookup from location key to coordinates.

    Unknown keys fail fast with ``UnknownLocationError``. A fallback key
    can be supplied explicitly; lookups that miss then resolve to the
    fallback's coordinates and a warning names both keys.

    Args:
        locations: Mapping of location key to coordinates.
        fallback: Optional key (present in *locations*) used when a
            lookup misses.
        labels: Optional display labels keyed by location key.

    Raises:
        UnknownLocationError: If *fallback* is not one of *locations*.

    Example:
        >>> registry = LocationRegistry.default()
        >>> registry.resolve("Sioux Falls")
        Coordinates(lat=43.54, lon=-96.73)
    """

    def __init__(
        self,
        locations: Mapping[str, Coordinates],
        fallback: str | None = None,
        labels: Mapping[str, str] | None = None,
    ) -> None:
        self._locations = dict(locations)
        self._labels = dict(labels or {})
        if fallback is not None and fallback not in self._locations:
            raise UnknownLocationError(
                fallback,
                cause="The configured fallback location is not registered",
                fix="Set fallback_location to one of the registered keys",
            )
        self._fallback = fallback

    @classmethod
    def default(cls, fallback: str | None = None) -> LocationRegistry:
        """Registry of cities plus county centroids."""
        return cls({**CITIES, **COUNTY_CENTROIDS}, fallback=fallback)

    @classmethod
    def counties(cls, fallback: str | None = None) -> LocationRegistry:
        """Registry of county centroids only."""
        return cls(COUNTY_CENTROIDS, fallback=fallback)

    @classmethod
    def stations(cls, fallback: str | None = None) -> LocationRegistry:
        """Registry mapping each county to its reference station.

        The county name stays the key so map features still join; the
        coordinates are the station's, and the label is the station's
        display name.
        """
        locations: dict[str, Coordinates] = {}
        labels: dict[str, str] = {}
        for county, station_key in COUNTY_STATIONS.items():
            station = STATIONS[station_key]
            locations[county] = station["coordinates"]
            labels[county] = station["label"]
        return cls(locations, fallback=fallback, labels=labels)

    @property
    def fallback(self) -> str | None:
        """Key used when a lookup misses, or ``None``."""
        return self._fallback

    def resolve(self, key: str) -> Coordinates:
        """Return the coordinates registered for *key*.

        Args:
            key: Location key (city, county or station-backed county).

        Returns:
            Registered coordinates, or the fallback's coordinates when
            a fallback is configured and *key* is unknown.

        Raises:
            UnknownLocationError: If *key* is unknown and no fallback
                is configured.
        """
        coords = self._locations.get(key)
        if coords is not None:
            return coords
        if self._fallback is None:
            raise UnknownLocationError(key)
        logger.warning(
            "Location %r is not registered; using fallback %r",
            key,
            self._fallback,
        )
        return self._locations[self._fallback]

    def label(self, key: str) -> str:
        """Display label for *key* (the key itself when none is set)."""
        return self._labels.get(key, key)

    def __getitem__(self, key: str) -> Coordinates:
        return self._locations[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._locations)

    def __len__(self) -> int:
        return len(self._locations)


def station_label(county: str) -> str | None:
    """Return the reference-station label for *county*, if any.

    Example:
        >>> station_label("Hughes")
        'Pierre Regional Airport'
    """
    station_key = COUNTY_STATIONS.get(county)
    if station_key is None:
        return None
    label: str = STATIONS[station_key]["label"]
    return label
