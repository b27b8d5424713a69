"""Configuration for RainExplorer sessions.

Every ``ExplorerSession`` captures a snapshot of the active ``Config`` at
creation time, so later ``configure()`` calls never affect live sessions.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationInfo,
    field_validator,
    model_validator,
)

logger = logging.getLogger("rainexplorer")

_DEFAULT_ARCHIVE_URL = "https://archive-api.open-meteo.com/v1/archive"


class Config(BaseModel):
    """Session configuration model.

    Immutable pydantic model holding the archive query settings, the
    rate-limit spacing and the window sizes used by the metric engine
    and the statistics summarizer.

    Args:
        archive_url: Open-Meteo archive endpoint.
        start_date: First day requested from the archive (ISO date).
        end_date: Last day requested from the archive (ISO date).
        precipitation_unit: ``"inch"`` or ``"mm"``.
        timezone: IANA timezone used by the archive to cut days.
        min_request_interval: Seconds between the end of one upstream
            call and the start of the next.
        request_timeout: HTTP timeout in seconds.
        amount_window: Trailing years averaged by the ``amount`` metric.
        trend_window: Years in each of the two ``trend`` windows.
        change_window: Points in each of the two summary change windows.
        long_term_cutoff_year: Points labelled before this year form the
            long-term baseline of the summary.
        daily_chart_days: Trailing days shown in the daily chart.
        fallback_location: Registry key used when a lookup misses.
            ``None`` makes unknown keys fail fast.

    Example:
        >>> cfg = Config(start_date="1980-01-01", min_request_interval=0)
        >>> cfg.amount_window
        10
    """

    model_config = ConfigDict(frozen=True, validate_default=True, extra="forbid")

    archive_url: str = _DEFAULT_ARCHIVE_URL
    start_date: str = "1940-01-01"
    end_date: str = "2025-12-31"
    precipitation_unit: Literal["inch", "mm"] = "inch"
    timezone: str = "America/Chicago"
    min_request_interval: float = 1.1
    request_timeout: float = 30.0
    amount_window: int = 10
    trend_window: int = 20
    change_window: int = 10
    long_term_cutoff_year: int = 2000
    daily_chart_days: int = 365
    fallback_location: str | None = None

    @field_validator("archive_url")
    @classmethod
    def _validate_url(cls, v: str) -> str:
        """Ensure the archive URL is an http(s) URL."""
        if not v.startswith(("http://", "https://")):
            msg = "archive_url must start with http:// or https://"
            raise ValueError(msg)
        return v

    @field_validator("start_date", "end_date")
    @classmethod
    def _validate_iso_date(cls, v: str) -> str:
        """Ensure dates are ISO ``YYYY-MM-DD`` strings."""
        try:
            date.fromisoformat(v)
        except ValueError:
            msg = f"{v!r} is not an ISO date (YYYY-MM-DD)"
            raise ValueError(msg) from None
        return v

    @field_validator("min_request_interval")
    @classmethod
    def _validate_interval(cls, v: float) -> float:
        """Ensure the request spacing is not negative."""
        if v < 0:
            msg = "min_request_interval must be >= 0"
            raise ValueError(msg)
        return v

    @field_validator("request_timeout")
    @classmethod
    def _validate_timeout(cls, v: float) -> float:
        """Ensure the HTTP timeout is positive."""
        if v <= 0:
            msg = "request_timeout must be greater than 0"
            raise ValueError(msg)
        return v

    @field_validator(
        "amount_window",
        "trend_window",
        "change_window",
        "daily_chart_days",
        "long_term_cutoff_year",
    )
    @classmethod
    def _validate_positive(cls, v: int, info: ValidationInfo) -> int:
        """Ensure window sizes and the cutoff year are positive."""
        if v <= 0:
            msg = f"{info.field_name} must be greater than 0"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def _validate_date_order(self) -> Config:
        """Ensure ``start_date`` does not come after ``end_date``."""
        if date.fromisoformat(self.start_date) > date.fromisoformat(self.end_date):
            msg = "start_date must not be after end_date"
            raise ValueError(msg)
        return self


_default_config = Config()


def configure(**kwargs: Any) -> None:
    """Set module-level default configuration.

    Creates a new ``Config`` from the current defaults merged with
    the provided keyword arguments.

    Args:
        **kwargs: Any ``Config`` field (e.g. ``start_date``,
            ``min_request_interval``, ``fallback_location``).

    Raises:
        ValidationError: If a provided value fails pydantic validation.

    Example:
        >>> configure(start_date="1990-01-01", timezone="America/Denver")
    """
    global _default_config  # noqa: PLW0603
    current = _default_config.model_dump()
    current.update(kwargs)
    _default_config = Config(**current)
    logger.debug("Default configuration updated: %s", sorted(kwargs))


def get_default_config() -> Config:
    """Return the current module-level default configuration."""
    return _default_config
