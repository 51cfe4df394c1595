"""
Shared test fixtures for the dashboard test suite.

Provides:
- a controllable clock (no real wall-clock waits for TTL tests)
- factory functions for OpenWeatherMap One Call payloads
- async FastAPI test client with the weather client mocked out
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import AsyncMock, MagicMock
from zoneinfo import ZoneInfo

import pytest
from httpx import ASGITransport, AsyncClient

# Ensure test env vars before any app imports
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("OPENWEATHER_API_KEY", "test-key-123")
os.environ.setdefault("SENTRY_DSN", "")

LONDON = ZoneInfo("Europe/London")

# Thursday 15 January 2026, 10:30 — GMT, so local time == UTC
FIXED_NOW = datetime(2026, 1, 15, 10, 30, tzinfo=timezone.utc)


def local_ts(year: int, month: int, day: int, hour: int, minute: int = 0) -> int:
    """Epoch seconds for a London wall-clock time."""
    return int(datetime(year, month, day, hour, minute, tzinfo=LONDON).timestamp())


class FakeClock:
    """Callable clock returning a settable instant."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


# ---------------------------------------------------------------------------
# Factory functions — One Call payload pieces
# ---------------------------------------------------------------------------

# Hourly temps for 15 Jan from 10:00 (fetch time) to 23:00.
# Daytime window (08-22) peak 9.6, min 3.3; the 23:00 reading is outside it.
DAY0_HOURLY_TEMPS = {
    10: 5.2, 11: 6.0, 12: 7.1, 13: 8.4, 14: 9.6, 15: 9.1, 16: 7.9,
    17: 6.5, 18: 5.4, 19: 4.8, 20: 4.1, 21: 3.6, 22: 3.3, 23: 1.2,
}

# Hourly temps for 16 Jan. Daytime window peak 4.4, min -0.6.
DAY1_HOURLY_TEMPS = {
    **{h: -2.0 for h in range(0, 8)},
    **{h: 2.0 for h in range(8, 23)},
    8: -0.6, 12: 3.2, 14: 4.4, 22: 1.5,
    23: -1.9,
}


def make_condition(
    condition_id: int = 803,
    main: str = "Clouds",
    description: str = "broken clouds",
    icon: str = "04d",
) -> dict[str, Any]:
    return {"id": condition_id, "main": main, "description": description, "icon": icon}


def make_current(**overrides: Any) -> dict[str, Any]:
    base = {
        "dt": local_ts(2026, 1, 15, 10, 20),
        "temp": 6.3,
        "feels_like": 3.9,
        "pressure": 1012,
        "humidity": 81,
        "wind_speed": 4.1,
        "weather": [make_condition()],
    }
    base.update(overrides)
    return base


def make_hourly(year: int, month: int, day: int, temps: dict[int, float]) -> list[dict[str, Any]]:
    return [
        {"dt": local_ts(year, month, day, hour), "temp": temp, "pop": 0}
        for hour, temp in sorted(temps.items())
    ]


def make_daily(**overrides: Any) -> dict[str, Any]:
    base = {
        "dt": local_ts(2026, 1, 15, 12),
        "sunrise": local_ts(2026, 1, 15, 7, 58),
        "sunset": local_ts(2026, 1, 15, 16, 21),
        "temp": {"day": 6.9, "min": 2.1, "max": 7.8, "night": 2.9},
        "humidity": 77,
        "wind_speed": 5.2,
        "uvi": 0.84,
        "weather": [make_condition(500, "Rain", "light rain", "10d")],
    }
    base.update(overrides)
    return base


def make_tomorrow() -> dict[str, Any]:
    return make_daily(
        dt=local_ts(2026, 1, 16, 12),
        sunrise=local_ts(2026, 1, 16, 7, 57),
        sunset=local_ts(2026, 1, 16, 16, 23),
        temp={"day": 3.0, "min": -1.4, "max": 4.6, "night": -0.2},
        humidity=70,
        wind_speed=3.5,
        uvi=1.25,
        weather=[make_condition(800, "Clear", "clear sky", "01d")],
    )


def make_onecall_payload(include_hourly: bool = True, **overrides: Any) -> dict[str, Any]:
    """Factory for OpenWeatherMap One Call 3.0 response dicts."""
    payload = {
        "lat": 52.2053,
        "lon": 0.1218,
        "timezone": "Europe/London",
        "timezone_offset": 0,
        "current": make_current(),
        "daily": [make_daily(), make_tomorrow()],
    }
    if include_hourly:
        payload["hourly"] = (
            make_hourly(2026, 1, 15, DAY0_HOURLY_TEMPS)
            + make_hourly(2026, 1, 16, DAY1_HOURLY_TEMPS)
        )
    payload.update(overrides)
    return payload


# ---------------------------------------------------------------------------
# Service + FastAPI test client
# ---------------------------------------------------------------------------

@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def weather_client():
    """Mock WeatherClient whose fetch() returns the default snapshot."""
    from services.dashboard.weather.models import WeatherSnapshot

    client = MagicMock()
    client.fetch = AsyncMock(return_value=WeatherSnapshot.from_payload(make_onecall_payload()))
    return client


@pytest.fixture
def dashboard_service(weather_client, clock):
    from services.dashboard.config import settings
    from services.dashboard.dashboard import DashboardService
    from services.dashboard.weather.cache import SnapshotCache

    return DashboardService(
        cache=SnapshotCache(fetch=weather_client.fetch, clock=clock),
        template_path=settings.template_path,
        location_name="Cambridge, UK",
        tz=LONDON,
        clock=clock,
    )


@pytest.fixture
def app(dashboard_service):
    """The FastAPI app with the dashboard service swapped for the test one."""
    from services.dashboard.main import app as _app
    from services.dashboard.routers.dashboard import get_dashboard_service

    _app.dependency_overrides[get_dashboard_service] = lambda: dashboard_service
    yield _app
    _app.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    """Async HTTP client bound to the test app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
