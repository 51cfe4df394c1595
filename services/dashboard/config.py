"""
Application configuration via pydantic-settings.
All config read from environment variables with sensible defaults for local dev.
"""

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

_PACKAGE_DIR = Path(__file__).parent


class Settings(BaseSettings):
    # App
    app_name: str = "kindle-weather"
    app_version: str = "0.1.0"
    environment: str = Field(default="development", pattern=r"^(development|staging|production)$")
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    # Hosted behind an external invoker (e.g. Vercel) — do not bind a socket
    serverless: bool = Field(
        default=False,
        validation_alias=AliasChoices("SERVERLESS", "VERCEL", "VERCEL_DEV"),
    )

    # Location (Cambridge, UK)
    location_name: str = "Cambridge, UK"
    latitude: float = Field(default=52.2053, ge=-90, le=90)
    longitude: float = Field(default=0.1218, ge=-180, le=180)
    timezone: str = "Europe/London"

    # Weather (OpenWeatherMap One Call 3.0)
    openweather_api_key: str = ""
    openweather_url: str = "https://api.openweathermap.org/data/3.0/onecall"
    weather_api_timeout_s: float = 8.0
    weather_cache_ttl_s: int = Field(default=900, gt=0)  # 15 minutes
    aggregation_mode: Literal["hourly", "daily"] = "hourly"

    # Templates
    static_dir: Path = _PACKAGE_DIR / "static"

    # Sentry
    sentry_dsn: str = ""
    sentry_traces_sample_rate: float = Field(default=0.1, ge=0.0, le=1.0)

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore"}

    @property
    def template_path(self) -> Path:
        return self.static_dir / "index.html"

    @property
    def stylesheet_path(self) -> Path:
        return self.static_dir / "kindle.css"


settings = Settings()
