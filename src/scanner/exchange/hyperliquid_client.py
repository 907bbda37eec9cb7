"""Hyperliquid snapshot source via ccxt async.

Wraps ccxt.async_support.hyperliquid and calls the public info endpoint
with ``{"type": "metaAndAssetCtxs"}``. The response is a two-element array:
``[{"universe": [{"name": ...}, ...]}, [assetCtx | null, ...]]`` where the
second element is aligned by index with the universe.
"""

from typing import Any

import ccxt.async_support as ccxt_async
from ccxt.base.errors import BaseError as CcxtError

from scanner.config import HyperliquidSettings
from scanner.exceptions import UpstreamUnavailable
from scanner.exchange.client import SnapshotSource
from scanner.logging import get_logger
from scanner.models import InstrumentMeta, RawInstrumentContext, Snapshot

logger = get_logger(__name__)

META_AND_ASSET_CTXS = {"type": "metaAndAssetCtxs"}


def parse_snapshot(payload: Any) -> Snapshot:
    """Convert a raw metaAndAssetCtxs response into a Snapshot.

    Entries are kept positionally aligned: a universe entry without a name
    becomes None, and a context that is not an object becomes None, so
    neither shifts its neighbours.

    Raises:
        UpstreamUnavailable: If the top-level shape is not usable.
    """
    if not isinstance(payload, (list, tuple)) or len(payload) < 2:
        raise UpstreamUnavailable("unexpected metaAndAssetCtxs response shape")

    meta, raw_contexts = payload[0], payload[1]
    if not isinstance(meta, dict) or not isinstance(meta.get("universe"), list):
        raise UpstreamUnavailable("metaAndAssetCtxs response missing universe")
    if not isinstance(raw_contexts, list):
        raise UpstreamUnavailable("metaAndAssetCtxs response missing asset contexts")

    universe: list[InstrumentMeta | None] = []
    contexts: list[RawInstrumentContext | None] = []

    for i, asset in enumerate(meta["universe"]):
        name = asset.get("name") if isinstance(asset, dict) else None
        universe.append(InstrumentMeta(name=str(name)) if name else None)

        raw = raw_contexts[i] if i < len(raw_contexts) else None
        if isinstance(raw, dict) and name:
            contexts.append(RawInstrumentContext.from_dict(str(name), raw))
        else:
            contexts.append(None)

    return Snapshot(universe=universe, contexts=contexts)


class HyperliquidClient(SnapshotSource):
    """Concrete Hyperliquid snapshot source using ccxt async."""

    def __init__(self, settings: HyperliquidSettings) -> None:
        self._settings = settings
        self._exchange = ccxt_async.hyperliquid(
            {
                "enableRateLimit": True,
                "timeout": settings.timeout_ms,
            }
        )
        if settings.testnet:
            self._exchange.set_sandbox_mode(True)

    @property
    def exchange(self) -> ccxt_async.hyperliquid:
        """Access the underlying ccxt exchange instance."""
        return self._exchange

    async def fetch_snapshot(self) -> Snapshot:
        """Fetch and parse one metaAndAssetCtxs snapshot.

        Transport failures and non-success responses surface from ccxt as
        ccxt errors and are re-raised as UpstreamUnavailable.
        """
        try:
            payload = await self._exchange.public_post_info(dict(META_AND_ASSET_CTXS))
        except CcxtError as exc:
            logger.warning(
                "snapshot_fetch_failed",
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise UpstreamUnavailable(f"Hyperliquid info request failed: {exc}") from exc

        snapshot = parse_snapshot(payload)
        logger.debug(
            "snapshot_fetched",
            instruments=len(snapshot),
            testnet=self._settings.testnet,
        )
        return snapshot

    async def close(self) -> None:
        """Clean up ccxt async resources. Must be called to avoid leaking the HTTP session."""
        logger.info("closing_hyperliquid_connection")
        await self._exchange.close()
