"""WebSocket hub for pushing re-rendered signal grids to dashboard clients."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

log = structlog.get_logger(__name__)

router = APIRouter()


class DashboardHub:
    """Manages WebSocket connections and broadcasts HTML fragments to all clients."""

    def __init__(self) -> None:
        self.connections: list[WebSocket] = []

    async def connect(self, ws: WebSocket) -> None:
        await ws.accept()
        self.connections.append(ws)
        log.info("dashboard_ws_connected", total=len(self.connections))

    def disconnect(self, ws: WebSocket) -> None:
        if ws in self.connections:
            self.connections.remove(ws)
        log.info("dashboard_ws_disconnected", total=len(self.connections))

    async def push_panel(self, panel_id: str, html: str) -> None:
        """Replace element ``panel_id`` on every client via an htmx out-of-band swap."""
        await self.broadcast(f'<div id="{panel_id}" hx-swap-oob="true">{html}</div>')

    async def broadcast(self, html: str) -> None:
        """Send an HTML fragment to every client, dropping connections that fail."""
        for conn in self.connections.copy():
            try:
                await conn.send_text(html)
            except Exception:
                self.disconnect(conn)
                log.warning("dashboard_ws_broadcast_error", remaining=len(self.connections))


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    """WebSocket endpoint for signal grid pushes."""
    hub: DashboardHub = websocket.app.state.hub
    await hub.connect(websocket)
    try:
        while True:
            # Client messages are ignored; reading keeps the connection alive
            await websocket.receive_text()
    except WebSocketDisconnect:
        hub.disconnect(websocket)
