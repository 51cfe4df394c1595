"""
Placeholder substitution for the static dashboard template.

Tokens have the literal form {{fieldName}}. For every key in the context,
each occurrence of its token is replaced (global, case sensitive). Tokens
with no context key are left in the output untouched. Values are trusted
(provider data and our own formatting), so no HTML escaping is applied.
"""

from __future__ import annotations

import html
import logging
import re
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"\{\{([^{}]+)\}\}")


class TemplateField(str, Enum):
    """Placeholders the dashboard template may reference."""

    LOCATION = "location"
    CURRENT_DATE = "currentDate"
    CURRENT_TIME = "currentTime"
    CURRENT_TEMP = "currentTemp"
    CURRENT_FEELS_LIKE = "currentFeelsLike"
    CURRENT_HUMIDITY = "currentHumidity"
    CURRENT_WIND_SPEED = "currentWindSpeed"
    CURRENT_WEATHER_ICON = "currentWeatherIcon"
    CURRENT_WEATHER_DESC = "currentWeatherDesc"
    DAILY_HIGH = "dailyHigh"
    DAILY_LOW = "dailyLow"
    DAILY_WEATHER_ICON = "dailyWeatherIcon"
    DAILY_WEATHER_DESC = "dailyWeatherDesc"
    DAILY_HUMIDITY = "dailyHumidity"
    DAILY_WIND_SPEED = "dailyWindSpeed"
    DAILY_UVI = "dailyUvi"
    SUNRISE = "sunrise"
    SUNSET = "sunset"
    LAST_UPDATED = "lastUpdated"


RenderContext = dict[TemplateField, Any]

ERROR_PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
    <head>
        <title>Weather Dashboard - Error</title>
        <link rel="stylesheet" href="/kindle.css">
    </head>
    <body>
        <div class="container">
            <h1>Weather Dashboard</h1>
            <p class="error">Unable to load weather data. Please try again later.</p>
            <p class="error-details">{{errorMessage}}</p>
        </div>
    </body>
</html>
"""


def _field_name(key: TemplateField | str) -> str:
    return key.value if isinstance(key, TemplateField) else str(key)


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def render(template_text: str, context: Mapping[TemplateField | str, Any]) -> str:
    rendered = template_text
    for key, value in context.items():
        rendered = rendered.replace("{{" + _field_name(key) + "}}", _to_text(value))

    leftover = sorted(set(_TOKEN_RE.findall(rendered)))
    if leftover:
        logger.debug("Template tokens left unrendered: %s", ", ".join(leftover))
    return rendered


def validate_context(context: Mapping[TemplateField | str, Any]) -> None:
    """Raise ValueError if any dashboard field is missing from the context."""
    present = {_field_name(key) for key in context}
    missing = [f.value for f in TemplateField if f.value not in present]
    if missing:
        raise ValueError(f"Render context missing fields: {', '.join(missing)}")


def load_template(path: Path) -> str:
    """Read the template from disk. Called per request, never cached."""
    return path.read_text(encoding="utf-8")


def render_error_page(message: str) -> str:
    return render(ERROR_PAGE_TEMPLATE, {"errorMessage": html.escape(message)})
