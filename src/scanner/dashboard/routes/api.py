"""JSON API endpoints for the ranked signal board and service status."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from scanner.exceptions import UpstreamUnavailable
from scanner.market_data.signal_service import SignalService

log = structlog.get_logger(__name__)

router = APIRouter()

FETCH_ERROR = "Failed to fetch signals"


@router.get("/signals")
async def get_signals(request: Request) -> JSONResponse:
    """Top-ranked signals with builder address and generation time.

    Returns ``{"error": ...}`` with status 500 when the upstream snapshot
    is unavailable; no partial result is produced.
    """
    service: SignalService = request.app.state.signal_service
    try:
        board = await service.fetch_board()
    except UpstreamUnavailable as e:
        log.error("signals_endpoint_upstream_error", error=str(e))
        return JSONResponse(content={"error": FETCH_ERROR}, status_code=500)
    return JSONResponse(content=board.to_dict())


@router.get("/status")
async def get_status(request: Request) -> JSONResponse:
    """Refresh loop state: running flag, last success time, last error."""
    service: SignalService = request.app.state.signal_service
    return JSONResponse(content=service.get_status())
