"""
Sentry instrumentation for the dashboard service.
Strips sensitive headers and the OpenWeatherMap API key (appid) from events.
"""

import re
from typing import Any

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from services.dashboard.config import settings

SENSITIVE_HEADERS = {"authorization", "cookie", "set-cookie"}

_APPID_RE = re.compile(r"(appid=)[^&\s]*", re.IGNORECASE)


def _scrub_appid(value: Any) -> Any:
    if isinstance(value, str):
        return _APPID_RE.sub(r"\1[FILTERED]", value)
    return value


def _filter_headers(headers: Any) -> None:
    if isinstance(headers, dict):
        for key in list(headers.keys()):
            if key.lower() in SENSITIVE_HEADERS:
                headers[key] = "[FILTERED]"


def _strip_sensitive_data(event: dict[str, Any], hint: dict[str, Any]) -> dict[str, Any] | None:
    """before_send hook: filter auth headers/cookies and the weather API key."""
    if "breadcrumbs" in event:
        for breadcrumb in event["breadcrumbs"].get("values", []):
            if "message" in breadcrumb:
                breadcrumb["message"] = _scrub_appid(breadcrumb["message"])
            data = breadcrumb.get("data", {})
            if isinstance(data, dict):
                _filter_headers(data.get("headers", {}))
                for key in ("url", "http.query"):
                    if key in data:
                        data[key] = _scrub_appid(data[key])
    # Also strip from request data
    request = event.get("request", {})
    if isinstance(request, dict):
        _filter_headers(request.get("headers", {}))
        for key in ("url", "query_string"):
            if key in request:
                request[key] = _scrub_appid(request[key])
    return event


def setup_sentry() -> None:
    if not settings.sentry_dsn:
        return

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        release=f"{settings.app_name}@{settings.app_version}",
        traces_sample_rate=settings.sentry_traces_sample_rate,
        before_send=_strip_sensitive_data,
        integrations=[
            StarletteIntegration(transaction_style="endpoint"),
            FastApiIntegration(transaction_style="endpoint"),
        ],
        send_default_pii=False,
    )
