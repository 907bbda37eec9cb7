"""Snapshot source layer -- Hyperliquid info API integration via ccxt."""

from scanner.exchange.cache import CachedSnapshotSource
from scanner.exchange.client import SnapshotSource
from scanner.exchange.hyperliquid_client import HyperliquidClient, parse_snapshot

__all__ = ["CachedSnapshotSource", "HyperliquidClient", "SnapshotSource", "parse_snapshot"]
