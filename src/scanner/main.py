"""Entry point for the perp signal scanner.

Wires all components together and either serves the FastAPI dashboard
(default) or runs the refresh loop headless. When the dashboard is
enabled, the refresh loop and the web server share one asyncio event loop
via uvicorn's programmatic API and FastAPI's lifespan context manager.

Component wiring order (in _build_components):
1. HyperliquidClient (ccxt snapshot source)
2. CachedSnapshotSource (bounded-age snapshot reuse)
3. SignalEngine (scoring, tagging, ranking)
4. SignalService (periodic refresh, last-good retention)
"""

import asyncio
import signal
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI

from scanner.config import AppSettings
from scanner.exchange.cache import CachedSnapshotSource
from scanner.exchange.hyperliquid_client import HyperliquidClient
from scanner.logging import get_logger, setup_logging
from scanner.market_data.signal_service import SignalService
from scanner.signals.engine import SignalEngine
from scanner.signals.models import SignalBoard


def _build_components(settings: AppSettings) -> dict[str, Any]:
    """Build all scanner components from settings.

    Does NOT start the refresh loop -- that happens in the lifespan
    (dashboard mode) or run() (headless mode).
    """
    client = HyperliquidClient(settings.hyperliquid)
    source = CachedSnapshotSource(client, ttl=settings.hyperliquid.cache_ttl)
    engine = SignalEngine(settings.signal)
    service = SignalService(
        source=source,
        engine=engine,
        builder_address=settings.builder_address,
        refresh_interval=settings.dashboard.refresh_interval,
    )
    return {
        "client": client,
        "source": source,
        "engine": engine,
        "signal_service": service,
    }


def _log_board(board: SignalBoard) -> None:
    """Headless listener: log the ranked symbols of each new board."""
    logger = get_logger("scanner.main")
    logger.info(
        "signal_board",
        updated_at=board.to_dict()["updatedAt"],
        ranking=[
            f"{s.symbol}:{s.score:.2f}" + (f"[{','.join(s.tags)}]" if s.tags else "")
            for s in board.signals
        ],
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the refresh loop on startup; stop it and close the source on shutdown."""
    from scanner.dashboard.update_loop import make_board_listener

    logger = get_logger("scanner.main")
    components = app.state.components
    service: SignalService = components["signal_service"]

    app.state.signal_service = service
    app.state.refresh_interval = app.state.settings.dashboard.refresh_interval
    service.add_listener(make_board_listener(app))

    await service.start()
    logger.info("lifespan_started")

    yield

    await service.stop()
    await components["source"].close()
    logger.info("perp_scanner_stopped")


async def run() -> None:
    """Run the scanner.

    When dashboard is enabled (DASHBOARD_ENABLED=true, the default):
    - Creates the FastAPI dashboard app with lifespan
    - Serves the API, HTML dashboard and WebSocket push via uvicorn

    When dashboard is disabled (DASHBOARD_ENABLED=false):
    - Runs the refresh loop directly and logs each ranked board
    - SIGINT/SIGTERM stop the loop gracefully
    """
    settings = AppSettings()
    setup_logging(settings.log_level)
    logger = get_logger("scanner.main")

    components = _build_components(settings)

    if settings.dashboard.enabled:
        from scanner.dashboard.app import create_dashboard_app

        app = create_dashboard_app(lifespan=lifespan)
        app.state.settings = settings
        app.state.components = components

        logger.info(
            "starting_with_dashboard",
            host=settings.dashboard.host,
            port=settings.dashboard.port,
            testnet=settings.hyperliquid.testnet,
        )

        config = uvicorn.Config(
            app,
            host=settings.dashboard.host,
            port=settings.dashboard.port,
            log_level="warning",
        )
        server = uvicorn.Server(config)
        await server.serve()
        return

    service: SignalService = components["signal_service"]
    service.add_listener(_log_board)
    stop_event = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop_event.set)

    logger.info(
        "starting_without_dashboard",
        refresh_interval=settings.dashboard.refresh_interval,
        top_n=settings.signal.top_n,
    )

    try:
        await service.start()
        await stop_event.wait()
        logger.info("graceful_shutdown_signal")
    finally:
        await service.stop()
        await components["source"].close()
        logger.info("perp_scanner_stopped")


def main() -> None:
    """Synchronous entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()
