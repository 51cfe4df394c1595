"""
Weather package.

Provides the OpenWeatherMap One Call client, the single-slot snapshot cache
with stale-if-error fallback, and the forecast day selection/aggregation.
"""

from services.dashboard.weather.cache import CacheEntry, SnapshotCache
from services.dashboard.weather.client import WeatherClient
from services.dashboard.weather.errors import (
    ConfigError,
    ProviderError,
    TransportError,
    WeatherError,
)
from services.dashboard.weather.models import WeatherSnapshot

__all__ = [
    "CacheEntry",
    "ConfigError",
    "ProviderError",
    "SnapshotCache",
    "TransportError",
    "WeatherClient",
    "WeatherError",
    "WeatherSnapshot",
]
