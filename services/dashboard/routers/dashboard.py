"""
Dashboard router — the e-reader page and its stylesheet.

GET /            rendered dashboard HTML (200) or the error page (500)
GET /kindle.css  stylesheet referenced by both pages
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse, HTMLResponse

from services.dashboard.dashboard import DashboardService
from services.dashboard.presentation.template import render_error_page

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dashboard"])


def get_dashboard_service(request: Request) -> DashboardService:
    """
    Shared DashboardService from app state.

    Built lazily when the lifespan did not run (external invokers that call
    the ASGI app without lifespan events).
    """
    service = getattr(request.app.state, "dashboard", None)
    if service is None:
        service = DashboardService.from_settings(request.app.state.settings)
        request.app.state.dashboard = service
    return service


@router.get("/", response_class=HTMLResponse)
async def dashboard_page(
    service: DashboardService = Depends(get_dashboard_service),
) -> HTMLResponse:
    try:
        body = await service.render_page()
    except Exception as exc:
        logger.exception("Error serving dashboard")
        return HTMLResponse(render_error_page(str(exc)), status_code=500)
    return HTMLResponse(body)


@router.get("/kindle.css", include_in_schema=False)
async def stylesheet(request: Request) -> FileResponse:
    return FileResponse(request.app.state.settings.stylesheet_path, media_type="text/css")
