"""
Kindle weather dashboard — FastAPI service.

Entrypoint: python -m services.dashboard.server
ASGI app for external invokers: services.dashboard.main:app
"""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from starlette.responses import JSONResponse

from services.dashboard.config import settings
from services.dashboard.dashboard import DashboardService
from services.dashboard.middleware.sentry import setup_sentry
from services.dashboard.routers import dashboard, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    setup_sentry()

    app.state.settings = settings
    app.state.dashboard = DashboardService.from_settings(settings)

    if not settings.openweather_api_key:
        logger.warning("OPENWEATHER_API_KEY not set; the dashboard will render the error page")

    yield


app = FastAPI(
    title="Kindle Weather Dashboard",
    version=settings.app_version,
    docs_url="/docs" if settings.environment == "development" else None,
    redoc_url=None,
    lifespan=lifespan,
)
# Available before lifespan runs, for invokers that skip lifespan events
app.state.settings = settings

app.include_router(health.router)
app.include_router(dashboard.router)


# Request ID injection
@app.middleware("http")
async def request_id_middleware(request: Request, call_next) -> Response:
    request_id = request.headers.get("x-request-id", str(uuid.uuid4()))
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


# -- Exception Handlers --

@app.exception_handler(404)
async def not_found_handler(request: Request, exc) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={
            "success": False,
            "error": {"code": "NOT_FOUND", "message": "Resource not found."},
            "requestId": getattr(request.state, "request_id", str(uuid.uuid4())),
        },
    )


@app.exception_handler(500)
async def internal_error_handler(request: Request, exc) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": {"code": "INTERNAL_ERROR", "message": "An unexpected error occurred."},
            "requestId": getattr(request.state, "request_id", str(uuid.uuid4())),
        },
    )
