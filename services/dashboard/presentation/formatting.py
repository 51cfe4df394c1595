"""
Display formatting for the dashboard.

Pure functions; timestamps are epoch seconds as returned by OpenWeatherMap
and are rendered in the dashboard's timezone. Units are whatever the
provider returned (metric) — nothing is converted here.

Rounding is half-up (towards +inf on .5), so 2.5 -> 3 and -2.5 -> -2.
"""

from __future__ import annotations

import math
from datetime import datetime, tzinfo

# Every condition renders as the same glyph on the e-ink display
_PLACEHOLDER_ICON = "-"


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def format_temperature(temp: float) -> int:
    return int(_round_half_up(temp))


def format_wind_speed(speed: float) -> int:
    return int(_round_half_up(speed))


def format_uvi(uvi: float) -> float:
    """UV index to one decimal place."""
    return _round_half_up(uvi, 1)


def format_time(timestamp: int, tz: tzinfo) -> str:
    """24-hour HH:MM, e.g. '07:42'."""
    return datetime.fromtimestamp(timestamp, tz).strftime("%H:%M")


def format_clock(now: datetime, tz: tzinfo) -> str:
    return now.astimezone(tz).strftime("%H:%M")


def format_date(timestamp: int, tz: tzinfo) -> str:
    """Weekday, day of month and month, e.g. 'Monday 19 October'."""
    dt = datetime.fromtimestamp(timestamp, tz)
    return f"{dt:%A} {dt.day} {dt:%B}"


def weather_icon(condition_code: str | int | None) -> str:
    # Condition codes are accepted but not mapped to distinct glyphs
    return _PLACEHOLDER_ICON
