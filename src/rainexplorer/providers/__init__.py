"""Provider registry for archive data sources.

Provides ``get_provider()`` to instantiate configured provider instances
by name. Currently supports the Open-Meteo historical archive.
"""

from __future__ import annotations

from rainexplorer.config import Config
from rainexplorer.exceptions import ConfigurationError
from rainexplorer.providers.base import ArchiveProvider
from rainexplorer.ratelimit import RateLimiter

_PROVIDER_REGISTRY: dict[str, type[ArchiveProvider]] = {}
_REGISTRY_INITIALIZED = False


def _init_registry() -> None:
    """Populate the provider registry on first use (lazy import)."""
    global _REGISTRY_INITIALIZED  # noqa: PLW0603
    if _REGISTRY_INITIALIZED:
        return

    from rainexplorer.providers.openmeteo import OpenMeteoProvider

    _PROVIDER_REGISTRY.update({"open-meteo": OpenMeteoProvider})
    _REGISTRY_INITIALIZED = True


def get_registered_names() -> list[str]:
    """Return sorted list of registered provider names."""
    _init_registry()
    return sorted(_PROVIDER_REGISTRY)


def get_provider(
    name: str,
    config: Config,
    limiter: RateLimiter | None = None,
) -> ArchiveProvider:
    """Return a configured provider instance by name.

    Provider names are case-insensitive.

    Args:
        name: Provider identifier (``"open-meteo"``).
        config: Frozen configuration snapshot.
        limiter: Rate limiter to share across providers of one session.

    Returns:
        A configured ``ArchiveProvider``.

    Raises:
        ConfigurationError: If *name* does not match a registered provider.

    Example:
        >>> provider = get_provider("open-meteo", Config())
        >>> provider.name
        'open-meteo'
    """
    _init_registry()
    key = name.lower()
    if key not in _PROVIDER_REGISTRY:
        valid = ", ".join(sorted(_PROVIDER_REGISTRY))
        raise ConfigurationError(
            what=f"Unknown provider: {name!r}",
            cause=f"Valid providers are: {valid}",
            fix=f"Use one of: {valid}",
        )
    return _PROVIDER_REGISTRY[key](config=config, limiter=limiter)


__all__ = ["ArchiveProvider", "get_provider", "get_registered_names"]
