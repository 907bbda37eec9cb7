"""Tests for the dashboard JSON API, HTML page and WebSocket push."""

import asyncio
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from scanner.dashboard.app import create_dashboard_app
from scanner.dashboard.update_loop import GRID_PANEL_ID, make_board_listener, render_grid
from scanner.exceptions import UpstreamUnavailable
from scanner.market_data.signal_service import SignalService
from scanner.signals.engine import SignalEngine

HOT = {
    "markPx": "0.5",
    "prevDayPx": "0.4",
    "dayNtlVlm": "40000000",
    "openInterest": "1000000",
    "funding": "0.0012",
}
COLD = {
    "markPx": "100",
    "prevDayPx": "100",
    "dayNtlVlm": "1000",
    "openInterest": "500",
    "funding": "0",
}


@pytest.fixture
def source(snapshot_factory) -> AsyncMock:
    src = AsyncMock()
    src.fetch_snapshot = AsyncMock(
        return_value=snapshot_factory([("COLD", COLD), ("HOT", HOT), ("ZERO", dict(COLD, markPx="0"))])
    )
    return src


@pytest.fixture
def service(source: AsyncMock, signal_settings) -> SignalService:
    return SignalService(source, SignalEngine(signal_settings), builder_address="0xBUILDER")


@pytest.fixture
def app(service: SignalService):
    app = create_dashboard_app()
    app.state.signal_service = service
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


class TestSignalsEndpoint:
    def test_returns_ranked_contract(self, client: TestClient) -> None:
        resp = client.get("/api/signals")
        assert resp.status_code == 200
        body = resp.json()
        assert set(body) == {"signals", "builderAddress", "updatedAt"}
        assert body["builderAddress"] == "0xBUILDER"
        assert body["updatedAt"].endswith("Z")
        assert [s["symbol"] for s in body["signals"]] == ["HOT", "COLD"]
        hot = body["signals"][0]
        assert set(hot) == {
            "symbol",
            "price",
            "change24h",
            "volume24h",
            "fundingRate",
            "openInterest",
            "score",
            "tags",
        }
        assert hot["tags"] == [
            "Pumping",
            "High Funding",
            "High Turnover",
            "Overheated",
            "High Volume",
        ]

    def test_upstream_failure_returns_error(self, client: TestClient, source: AsyncMock) -> None:
        source.fetch_snapshot.side_effect = UpstreamUnavailable("down")
        resp = client.get("/api/signals")
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to fetch signals"}

    def test_status(self, client: TestClient) -> None:
        resp = client.get("/api/status")
        assert resp.status_code == 200
        assert resp.json()["running"] is False
        assert resp.json()["signal_count"] == 0
        assert resp.json()["max_score"] == 23.0


class TestDashboardPage:
    def test_loading_state(self, client: TestClient) -> None:
        resp = client.get("/")
        assert resp.status_code == 200
        assert "Loading signals..." in resp.text

    def test_renders_cards_from_latest_board(self, client: TestClient, service) -> None:
        asyncio.run(service.refresh())
        resp = client.get("/")
        assert resp.status_code == 200
        assert "Trade HOT" in resp.text
        assert "https://app.hyperliquid.xyz/trade/HOT" in resp.text
        assert "🚀 Pumping" in resp.text
        assert "ZERO" not in resp.text
        assert "Loading signals..." not in resp.text

    def test_error_banner_keeps_last_board(self, client: TestClient, service, source) -> None:
        asyncio.run(service.refresh())
        source.fetch_snapshot.side_effect = UpstreamUnavailable("down")
        asyncio.run(service.refresh())
        resp = client.get("/")
        assert "Failed to load signals. Retrying..." in resp.text
        assert "Trade HOT" in resp.text


class TestWebSocketPush:
    @pytest.mark.asyncio
    async def test_hub_connect_and_disconnect(self, app) -> None:
        hub = app.state.hub
        ws = AsyncMock()
        await hub.connect(ws)
        ws.accept.assert_awaited_once()
        assert hub.connections == [ws]
        hub.disconnect(ws)
        assert hub.connections == []

    def test_websocket_endpoint_accepts(self, client: TestClient) -> None:
        with client.websocket_connect("/ws") as ws:
            ws.send_text("ping")

    def test_render_grid_from_latest_board(self, app, service) -> None:
        asyncio.run(service.refresh())
        html = render_grid(app)
        assert "Trade HOT" in html
        assert "hx-swap-oob" not in html

    @pytest.mark.asyncio
    async def test_push_panel_wraps_as_oob_swap(self, app) -> None:
        ws = AsyncMock()
        app.state.hub.connections.append(ws)
        await app.state.hub.push_panel("signal-grid-panel", "<p>x</p>")
        ws.send_text.assert_awaited_once_with(
            '<div id="signal-grid-panel" hx-swap-oob="true"><p>x</p></div>'
        )

    @pytest.mark.asyncio
    async def test_listener_broadcasts_to_clients(self, app, service) -> None:
        ws = AsyncMock()
        app.state.hub.connections.append(ws)
        service.add_listener(make_board_listener(app))
        await service.refresh()
        ws.send_text.assert_awaited_once()
        assert "Trade HOT" in ws.send_text.await_args.args[0]
        assert ws.send_text.await_args.args[0].startswith(
            f'<div id="{GRID_PANEL_ID}" hx-swap-oob="true">'
        )

    @pytest.mark.asyncio
    async def test_broken_client_dropped(self, app, service) -> None:
        ws = AsyncMock()
        ws.send_text.side_effect = RuntimeError("closed")
        app.state.hub.connections.append(ws)
        service.add_listener(make_board_listener(app))
        await service.refresh()
        assert app.state.hub.connections == []
