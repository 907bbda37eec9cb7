"""Pushes re-rendered signal grids to WebSocket clients after each refresh.

Registered as a SignalService listener, so clients update exactly when a
new board is published. The hub wraps the grid as an htmx out-of-band swap.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI
from fastapi.templating import Jinja2Templates

from scanner.dashboard.routes.pages import grid_context
from scanner.signals.models import SignalBoard

log = structlog.get_logger(__name__)

GRID_PANEL_ID = "signal-grid-panel"


def render_grid(app: FastAPI) -> str:
    """Render the signal grid partial from the service's retained board."""
    templates: Jinja2Templates = app.state.templates
    tpl = templates.env.get_template("partials/signal_grid.html")
    return tpl.render(**grid_context(app.state.signal_service))


def make_board_listener(app: FastAPI):
    """Build a SignalService listener that broadcasts the grid to all clients."""

    async def _on_board(board: SignalBoard) -> None:
        hub = app.state.hub
        if not hub.connections:
            return
        await hub.push_panel(GRID_PANEL_ID, render_grid(app))
        log.debug("signal_grid_broadcast", clients=len(hub.connections), count=len(board.signals))

    return _on_board
