"""Helpers for joining boundary features to location keys.

Boundary sources are GeoJSON-like feature collections. Only the feature
properties are read here; polygons pass through untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)

_NAME_KEYS = ("name", "NAME")
_STATE_KEYS = ("STATE", "STATEFP", "state")


def feature_name(feature: Mapping[str, Any]) -> str | None:
    """Return the region name carried by a boundary feature.

    Checks ``name`` then ``NAME`` in the feature's properties.

    Example:
        >>> feature_name({"properties": {"NAME": "Hughes"}})
        'Hughes'
    """
    properties = feature.get("properties") or {}
    for key in _NAME_KEYS:
        value = properties.get(key)
        if value:
            return str(value)
    return None


def _feature_state(feature: Mapping[str, Any]) -> str | None:
    properties = feature.get("properties") or {}
    for key in _STATE_KEYS:
        value = properties.get(key)
        if value is not None:
            return str(value)
    return None


def filter_state(
    collection: Mapping[str, Any],
    state_code: str | None,
) -> list[Mapping[str, Any]]:
    """Return the features of *collection* belonging to *state_code*.

    Args:
        collection: GeoJSON ``FeatureCollection``-like mapping.
        state_code: State FIPS code (``"46"`` for South Dakota), or
            ``None`` to keep every feature.

    Returns:
        Matching features in source order.
    """
    features: list[Mapping[str, Any]] = list(collection.get("features") or [])
    if state_code is None:
        return features
    kept = [f for f in features if _feature_state(f) == state_code]
    logger.debug(
        "Kept %d of %d boundary features for state %s",
        len(kept),
        len(features),
        state_code,
    )
    return kept


def region_names(
    collection: Mapping[str, Any],
    state_code: str | None = None,
) -> list[str]:
    """Names of the regions in *collection*, skipping unnamed features.

    Example:
        >>> region_names({"features": [
        ...     {"properties": {"name": "Brown", "STATE": "46"}},
        ...     {"properties": {"name": "Cass", "STATE": "38"}},
        ... ]}, state_code="46")
        ['Brown']
    """
    names: list[str] = []
    for feature in filter_state(collection, state_code):
        name = feature_name(feature)
        if name is not None:
            names.append(name)
    return names
