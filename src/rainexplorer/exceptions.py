"""RainExplorer exception hierarchy.

All exceptions follow a three-part message pattern: what failed,
likely cause, and suggested fix.
"""

from __future__ import annotations


class RainExplorerError(Exception):
    """Base exception for all RainExplorer errors.

    Args:
        what: Description of what failed.
        cause: Likely cause of the failure.
        fix: Suggested action to resolve the issue.

    Example:
        >>> raise RainExplorerError(
        ...     what="Operation failed",
        ...     cause="Unexpected internal state",
        ...     fix="Please report this issue",
        ... )
    """

    def __init__(
        self,
        what: str,
        cause: str = "",
        fix: str = "",
    ) -> None:
        self.what = what
        self.cause = cause
        self.fix = fix
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Build the multi-line error message from parts."""
        parts = [self.what]
        if self.cause:
            parts.append(f"Cause: {self.cause}")
        if self.fix:
            parts.append(f"Fix: {self.fix}")
        return "\n".join(parts)


class ConfigurationError(RainExplorerError):
    """Raised for invalid configuration, coordinates or provider names.

    Example:
        >>> raise ConfigurationError(
        ...     what="Invalid latitude: 123.0",
        ...     cause="Latitude must be between -90.0 and 90.0",
        ...     fix="Provide a valid WGS84 latitude value",
        ... )
    """


class ProviderError(RainExplorerError):
    """Raised inside a provider when the archive source cannot be used.

    Providers catch this at their public boundary and degrade to an
    empty sample list, so callers of ``fetch_daily()`` never see it.

    Example:
        >>> raise ProviderError(
        ...     what="Open-Meteo request failed",
        ...     cause="HTTP 429",
        ...     fix="Wait a moment and try again",
        ... )
    """


class UnknownLocationError(RainExplorerError):
    """Raised when a location key has no registered coordinates.

    Args:
        key: The location key that could not be resolved.

    Example:
        >>> raise UnknownLocationError("Atlantis")
    """

    def __init__(self, key: str, cause: str = "", fix: str = "") -> None:
        self.key = key
        super().__init__(
            what=f"Unknown location: {key!r}",
            cause=cause or "No coordinates are registered for this key",
            fix=fix
            or "Register the location in the LocationRegistry or set "
            "Config.fallback_location",
        )
