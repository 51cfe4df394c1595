"""
Failure kinds raised by the weather client.

All three share WeatherError so the snapshot cache can absorb any of them
when it holds a previous snapshot.
"""

from __future__ import annotations


class WeatherError(Exception):
    """Base class for weather fetch failures."""


class ConfigError(WeatherError):
    """No API credential configured — raised before any network call."""


class ProviderError(WeatherError):
    """OpenWeatherMap answered with a non-success status or an unusable body."""

    def __init__(self, status_code: int, detail: str | None = None) -> None:
        self.status_code = status_code
        self.detail = detail
        message = f"Weather API error: {status_code}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class TransportError(WeatherError):
    """Network-level failure reaching OpenWeatherMap (DNS, connect, timeout)."""
