"""
WeatherClient — OpenWeatherMap One Call client for a single fixed location.

One GET per fetch(), no retries. Failures are mapped onto the WeatherError
hierarchy so callers never see raw httpx exceptions:

  no API key            -> ConfigError   (before any network call)
  non-2xx status        -> ProviderError (carries status_code)
  DNS/connect/timeout   -> TransportError
  2xx but unparseable   -> ProviderError ("malformed payload")

The "exclude" parameter depends on the aggregation mode: hourly readings are
only requested when the dashboard will aggregate them.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from services.dashboard.weather.errors import ConfigError, ProviderError, TransportError
from services.dashboard.weather.models import WeatherSnapshot

logger = logging.getLogger(__name__)

_ONECALL_ENDPOINT = "https://api.openweathermap.org/data/3.0/onecall"

# HTTP timeout for OpenWeatherMap calls
_API_TIMEOUT_S = 8.0

_EXCLUDE_WITH_HOURLY = ("minutely", "alerts")
_EXCLUDE_WITHOUT_HOURLY = ("minutely", "hourly", "alerts")


class WeatherClient:
    """
    Usage:
        client = WeatherClient(api_key="...", latitude=52.2053, longitude=0.1218)
        snapshot = await client.fetch()
    """

    def __init__(
        self,
        api_key: str,
        latitude: float,
        longitude: float,
        *,
        include_hourly: bool = True,
        base_url: str = _ONECALL_ENDPOINT,
        timeout_s: float = _API_TIMEOUT_S,
    ) -> None:
        """
        Args:
            api_key:        OpenWeatherMap API key (OPENWEATHER_API_KEY env var).
            latitude:       Fixed location latitude.
            longitude:      Fixed location longitude.
            include_hourly: Request hourly readings (hourly aggregation mode).
            base_url:       One Call endpoint.
            timeout_s:      httpx timeout for the single request.
        """
        self._api_key = api_key
        self._latitude = latitude
        self._longitude = longitude
        self._include_hourly = include_hourly
        self._base_url = base_url
        self._timeout_s = timeout_s

    @property
    def include_hourly(self) -> bool:
        return self._include_hourly

    def build_params(self) -> dict[str, Any]:
        exclude = _EXCLUDE_WITH_HOURLY if self._include_hourly else _EXCLUDE_WITHOUT_HOURLY
        return {
            "lat": self._latitude,
            "lon": self._longitude,
            "exclude": ",".join(exclude),
            "units": "metric",
            "appid": self._api_key,
        }

    async def fetch(self) -> WeatherSnapshot:
        """Fetch and validate one snapshot. Raises WeatherError subclasses."""
        if not self._api_key:
            raise ConfigError("OPENWEATHER_API_KEY environment variable is required")

        try:
            async with httpx.AsyncClient(timeout=self._timeout_s) as client:
                resp = await client.get(self._base_url, params=self.build_params())
                resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "OpenWeatherMap returned %d for lat=%s lon=%s: %s",
                exc.response.status_code,
                self._latitude,
                self._longitude,
                exc.response.text[:200],
            )
            raise ProviderError(exc.response.status_code) from exc
        except httpx.RequestError as exc:
            logger.warning("OpenWeatherMap request failed: %s", type(exc).__name__)
            raise TransportError(f"Weather API unreachable: {type(exc).__name__}") from exc

        try:
            return WeatherSnapshot.from_payload(resp.json())
        except (ValueError, ValidationError) as exc:
            logger.warning("OpenWeatherMap returned a malformed payload: %s", exc)
            raise ProviderError(resp.status_code, "malformed payload") from exc
