"""
DashboardService — the request pipeline behind GET /.

  SnapshotCache -> target day -> (hourly mode) 08:00-22:00 peak/min
                -> formatting -> template substitution

Aggregation modes:
  "hourly"  hourly readings are requested and the daily high/low come from
            the 08:00-22:00 window, falling back to the provider's daily
            min/max when no samples qualify.
  "daily"   hourly readings are not requested; high/low are always the
            provider's daily min/max.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal
from zoneinfo import ZoneInfo

from services.dashboard.presentation.formatting import (
    format_clock,
    format_date,
    format_temperature,
    format_time,
    format_uvi,
    format_wind_speed,
    weather_icon,
)
from services.dashboard.presentation.template import (
    RenderContext,
    TemplateField,
    load_template,
    render,
    validate_context,
)
from services.dashboard.weather.cache import Clock, SnapshotCache, utc_now
from services.dashboard.weather.client import WeatherClient
from services.dashboard.weather.forecast import PeakMin, aggregate_peak_min, select_target_day

logger = logging.getLogger(__name__)

AggregationMode = Literal["hourly", "daily"]


class DashboardService:
    def __init__(
        self,
        cache: SnapshotCache,
        template_path: Path,
        location_name: str,
        tz: ZoneInfo,
        aggregation_mode: AggregationMode = "hourly",
        clock: Clock = utc_now,
    ) -> None:
        self._cache = cache
        self._template_path = template_path
        self._location_name = location_name
        self._tz = tz
        self._aggregation_mode = aggregation_mode
        self._clock = clock

    @classmethod
    def from_settings(cls, settings, clock: Clock = utc_now) -> "DashboardService":
        """Wire client, cache and service from a Settings instance."""
        client = WeatherClient(
            api_key=settings.openweather_api_key,
            latitude=settings.latitude,
            longitude=settings.longitude,
            include_hourly=settings.aggregation_mode == "hourly",
            base_url=settings.openweather_url,
            timeout_s=settings.weather_api_timeout_s,
        )
        cache = SnapshotCache(
            fetch=client.fetch,
            ttl_seconds=settings.weather_cache_ttl_s,
            clock=clock,
        )
        return cls(
            cache=cache,
            template_path=settings.template_path,
            location_name=settings.location_name,
            tz=ZoneInfo(settings.timezone),
            aggregation_mode=settings.aggregation_mode,
            clock=clock,
        )

    @property
    def cache(self) -> SnapshotCache:
        return self._cache

    async def build_context(self, now=None) -> RenderContext:
        now = now or self._clock()
        snapshot = await self._cache.get_snapshot()

        target_day = select_target_day(now, self._tz)
        current = snapshot.current
        daily = snapshot.day(target_day)

        if self._aggregation_mode == "hourly":
            peak_min = aggregate_peak_min(snapshot.hourly, target_day, now, self._tz)
        else:
            peak_min = PeakMin(None, None)

        high = peak_min.peak if peak_min.peak is not None else daily.temp.max
        low = peak_min.min if peak_min.min is not None else daily.temp.min

        context: RenderContext = {
            TemplateField.LOCATION: self._location_name,
            TemplateField.CURRENT_DATE: format_date(current.dt, self._tz),
            TemplateField.CURRENT_TIME: format_time(current.dt, self._tz),
            TemplateField.CURRENT_TEMP: format_temperature(current.temp),
            TemplateField.CURRENT_FEELS_LIKE: format_temperature(current.feels_like),
            TemplateField.CURRENT_HUMIDITY: current.humidity,
            TemplateField.CURRENT_WIND_SPEED: format_wind_speed(current.wind_speed),
            TemplateField.CURRENT_WEATHER_ICON: weather_icon(current.condition.icon),
            TemplateField.CURRENT_WEATHER_DESC: current.condition.description,
            TemplateField.DAILY_HIGH: format_temperature(high),
            TemplateField.DAILY_LOW: format_temperature(low),
            TemplateField.DAILY_WEATHER_ICON: weather_icon(daily.condition.icon),
            TemplateField.DAILY_WEATHER_DESC: daily.condition.description,
            TemplateField.DAILY_HUMIDITY: daily.humidity,
            TemplateField.DAILY_WIND_SPEED: format_wind_speed(daily.wind_speed),
            TemplateField.DAILY_UVI: format_uvi(daily.uvi),
            TemplateField.SUNRISE: format_time(daily.sunrise, self._tz),
            TemplateField.SUNSET: format_time(daily.sunset, self._tz),
            TemplateField.LAST_UPDATED: format_clock(now, self._tz),
        }
        validate_context(context)
        return context

    async def render_page(self, now=None) -> str:
        context = await self.build_context(now)
        template_text = load_template(self._template_path)
        return render(template_text, context)
