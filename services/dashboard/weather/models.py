"""
Typed view of the OpenWeatherMap One Call response.

Only the fields the dashboard reads are modelled; everything else in the
payload is ignored. Models are frozen and sequences are stored as tuples so a
snapshot cannot change once fetched.

One Call 3.0 response (abridged):
  {
    "current": {"dt": 1768467600, "temp": 6.3, "feels_like": 3.9,
                "humidity": 81, "wind_speed": 4.1,
                "weather": [{"id": 803, "main": "Clouds",
                             "description": "broken clouds", "icon": "04d"}]},
    "hourly":  [{"dt": 1768467600, "temp": 6.3, ...}, ...],
    "daily":   [{"dt": 1768478400, "temp": {"min": 2.1, "max": 7.8, ...},
                 "humidity": 77, "wind_speed": 5.2, "uvi": 0.84,
                 "sunrise": 1768463870, "sunset": 1768494002,
                 "weather": [...]}, ...]
  }
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _Reading(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class Condition(_Reading):
    id: int = 800  # 800 = clear sky
    main: str = ""
    description: str = ""
    icon: str = ""


class CurrentReading(_Reading):
    dt: int
    temp: float
    feels_like: float
    humidity: int
    wind_speed: float
    weather: tuple[Condition, ...] = ()

    @property
    def condition(self) -> Condition:
        return self.weather[0] if self.weather else Condition()


class HourlyReading(_Reading):
    dt: int
    temp: float


class TemperatureRange(_Reading):
    min: float
    max: float


class DailyReading(_Reading):
    dt: int
    temp: TemperatureRange
    humidity: int
    wind_speed: float
    uvi: float = 0.0
    sunrise: int
    sunset: int
    weather: tuple[Condition, ...] = ()

    @property
    def condition(self) -> Condition:
        return self.weather[0] if self.weather else Condition()


class WeatherSnapshot(_Reading):
    current: CurrentReading
    hourly: tuple[HourlyReading, ...] | None = None
    daily: tuple[DailyReading, ...] = Field(min_length=1)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "WeatherSnapshot":
        """Validate a raw One Call JSON body. Raises pydantic.ValidationError."""
        return cls.model_validate(payload)

    def day(self, offset: int) -> DailyReading:
        """
        Daily reading for today (0) or tomorrow (1).

        A provider response shorter than requested falls back to the last
        day it did return rather than failing the whole page.
        """
        if offset < 0:
            raise ValueError(f"day offset must be >= 0, got {offset}")
        return self.daily[min(offset, len(self.daily) - 1)]
