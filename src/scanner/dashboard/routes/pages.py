"""Page routes serving the signal dashboard HTML."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from scanner.market_data.signal_service import SignalService

router = APIRouter()


def grid_context(service: SignalService) -> dict:
    """Template context for the signal grid partial."""
    board = service.latest
    return {
        "board": board,
        "signals": board.signals if board is not None else (),
        "loading": board is None and service.last_error is None,
        "error": service.last_error is not None,
    }


@router.get("/", response_class=HTMLResponse)
async def dashboard_index(request: Request) -> HTMLResponse:
    """Main dashboard page rendering the last retained signal board."""
    templates: Jinja2Templates = request.app.state.templates
    service: SignalService = request.app.state.signal_service

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            **grid_context(service),
            "refresh_interval": request.app.state.refresh_interval,
        },
    )
