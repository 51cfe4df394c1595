"""
Forecast day selection and daytime temperature aggregation.

Both functions take the current instant explicitly so tests can pin it.
All hour-of-day decisions are made in the dashboard's local timezone.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo
from typing import Iterable, NamedTuple

from services.dashboard.weather.models import HourlyReading

# From 8 PM onwards the dashboard shows tomorrow's forecast
_EVENING_SWITCH_HOUR = 20

# Daytime window, inclusive on both ends
_DAYTIME_FIRST_HOUR = 8
_DAYTIME_LAST_HOUR = 22


class PeakMin(NamedTuple):
    peak: float | None
    min: float | None


def _local(now: datetime, tz: tzinfo) -> datetime:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(tz)


def select_target_day(now: datetime, tz: tzinfo) -> int:
    """Return 0 (today) before 20:00 local time, 1 (tomorrow) from 20:00."""
    return 1 if _local(now, tz).hour >= _EVENING_SWITCH_HOUR else 0


def aggregate_peak_min(
    hourly: Iterable[HourlyReading] | None,
    target_day_offset: int,
    now: datetime,
    tz: tzinfo,
) -> PeakMin:
    """
    Peak and minimum temperature between 08:00 and 22:00 on the target day.

    Readings are first bounded to the target calendar day
    [00:00:00.000, 23:59:59.999] local time, then to local hours 8-22.
    Returns PeakMin(None, None) when nothing qualifies, in which case the
    caller uses the provider's daily min/max instead.
    """
    if not hourly:
        return PeakMin(None, None)

    # Calendar-day arithmetic on the local wall clock
    target = _local(now, tz) + timedelta(days=target_day_offset)
    day_start = target.replace(hour=0, minute=0, second=0, microsecond=0)
    day_end = target.replace(hour=23, minute=59, second=59, microsecond=999_000)
    start_ts = day_start.timestamp()
    end_ts = day_end.timestamp()

    day_readings = [h for h in hourly if start_ts <= h.dt <= end_ts]
    temps = [
        h.temp
        for h in day_readings
        if _DAYTIME_FIRST_HOUR <= datetime.fromtimestamp(h.dt, tz).hour <= _DAYTIME_LAST_HOUR
    ]

    if not temps:
        return PeakMin(None, None)
    return PeakMin(peak=max(temps), min=min(temps))
