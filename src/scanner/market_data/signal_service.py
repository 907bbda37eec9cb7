"""Signal service -- periodically refreshes the ranked signal board.

Uses REST polling: each cycle fetches a snapshot, ranks it with the
SignalEngine and wraps it with the builder address. A new board replaces
the previous one only on success; on upstream failure the last good board
is kept and the error is recorded until the next successful cycle.
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

from scanner.exceptions import UpstreamUnavailable
from scanner.exchange.client import SnapshotSource
from scanner.logging import get_logger
from scanner.signals.engine import SignalEngine
from scanner.signals.models import SignalBoard, build_board

logger = get_logger(__name__)

BoardListener = Callable[[SignalBoard], Awaitable[None] | None]


class SignalService:
    """Produces SignalBoards on demand and on a fixed refresh interval.

    Args:
        source: Snapshot source (typically a CachedSnapshotSource).
        engine: Signal engine used to rank each snapshot.
        builder_address: Opaque address embedded in every board.
        refresh_interval: Seconds between background refreshes.
    """

    def __init__(
        self,
        source: SnapshotSource,
        engine: SignalEngine,
        builder_address: str,
        refresh_interval: float = 30.0,
    ) -> None:
        self._source = source
        self._engine = engine
        self._builder_address = builder_address
        self._refresh_interval = refresh_interval
        self._latest: SignalBoard | None = None
        self._last_error: str | None = None
        self._last_success_at: datetime | None = None
        self._listeners: list[BoardListener] = []
        self._running = False
        self._task: asyncio.Task | None = None  # type: ignore[type-arg]

    @property
    def latest(self) -> SignalBoard | None:
        """Most recent successfully computed board, retained across failures."""
        return self._latest

    @property
    def last_error(self) -> str | None:
        """Error from the most recent refresh, cleared on the next success."""
        return self._last_error

    @property
    def last_success_at(self) -> datetime | None:
        return self._last_success_at

    @property
    def is_running(self) -> bool:
        return self._running

    def add_listener(self, listener: BoardListener) -> None:
        """Register a callback invoked with every newly published board."""
        self._listeners.append(listener)

    async def fetch_board(self) -> SignalBoard:
        """Fetch a snapshot and rank it into a fresh board.

        Does not touch the retained board.

        Raises:
            UpstreamUnavailable: If the snapshot could not be fetched.
        """
        snapshot = await self._source.fetch_snapshot()
        signals = self._engine.compute_signals(snapshot.universe, snapshot.contexts)
        return build_board(signals, self._builder_address)

    async def refresh(self) -> SignalBoard | None:
        """Run one refresh cycle.

        Returns:
            The new board on success, or None if the upstream was
            unavailable (the previous board is kept).
        """
        try:
            board = await self.fetch_board()
        except UpstreamUnavailable as exc:
            self._last_error = str(exc) or "upstream unavailable"
            logger.warning(
                "signal_refresh_failed",
                error=self._last_error,
                retained=self._latest is not None,
            )
            return None

        self._latest = board
        self._last_error = None
        self._last_success_at = datetime.now(timezone.utc)
        logger.info(
            "signal_board_updated",
            count=len(board.signals),
            top=[s.symbol for s in board.signals[:3]],
        )
        await self._notify(board)
        return board

    async def _notify(self, board: SignalBoard) -> None:
        for listener in list(self._listeners):
            try:
                result = listener(board)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.warning("signal_listener_error", exc_info=True)

    async def start(self) -> None:
        """Begin refreshing in the background."""
        if self._running:
            logger.warning("signal_service_already_running")
            return
        self._running = True
        self._task = asyncio.create_task(self._refresh_loop())
        logger.info("signal_service_started", refresh_interval=self._refresh_interval)

    async def stop(self) -> None:
        """Stop the refresh loop gracefully."""
        self._running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("signal_service_stopped")

    async def _refresh_loop(self) -> None:
        """Main polling loop: refresh, then sleep for the interval."""
        while self._running:
            try:
                await self.refresh()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.warning("signal_refresh_error", exc_info=True)
            if self._running:
                await asyncio.sleep(self._refresh_interval)

    def get_status(self) -> dict:
        """Return a JSON-friendly summary of the service state."""
        return {
            "running": self._running,
            "refresh_interval": self._refresh_interval,
            "signal_count": len(self._latest.signals) if self._latest else 0,
            "last_success_at": (
                self._last_success_at.isoformat() if self._last_success_at else None
            ),
            "last_error": self._last_error,
            "max_score": self._engine.settings.max_score,
        }
