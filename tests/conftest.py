"""Shared test fixtures for the perp signal scanner."""

from typing import Any

import pytest

from scanner.config import AppSettings, DashboardSettings, HyperliquidSettings, SignalSettings
from scanner.models import InstrumentMeta, RawInstrumentContext, Snapshot


def make_ctx(symbol: str = "BTC", **fields: Any) -> RawInstrumentContext:
    """Build a RawInstrumentContext from camelCase wire fields."""
    return RawInstrumentContext.from_dict(symbol, fields)


def make_snapshot(rows: list[tuple[str, dict[str, Any] | None]]) -> Snapshot:
    """Build an aligned Snapshot from (name, wire-context-or-None) pairs."""
    return Snapshot(
        universe=[InstrumentMeta(name=name) for name, _ in rows],
        contexts=[
            RawInstrumentContext.from_dict(name, ctx) if ctx is not None else None
            for name, ctx in rows
        ],
    )


#: The worked BTC example: score ~4.667, tags Pumping + High Volume.
BTC_CTX = {
    "markPx": "50000",
    "prevDayPx": "48000",
    "dayNtlVlm": "100000000",
    "openInterest": "2000",
    "funding": "0.0002",
}


@pytest.fixture
def signal_settings() -> SignalSettings:
    """Default scoring settings."""
    return SignalSettings()


@pytest.fixture
def mock_settings() -> AppSettings:
    """Return AppSettings with test defaults (testnet, fast refresh)."""
    return AppSettings(
        log_level="DEBUG",
        builder_address="0xTEST",
        hyperliquid=HyperliquidSettings(testnet=True, cache_ttl=0.0),
        signal=SignalSettings(),
        dashboard=DashboardSettings(enabled=False, refresh_interval=1),
    )


@pytest.fixture
def ctx_factory():
    """Factory fixture for RawInstrumentContext (see make_ctx)."""
    return make_ctx


@pytest.fixture
def snapshot_factory():
    """Factory fixture for aligned Snapshots (see make_snapshot)."""
    return make_snapshot


@pytest.fixture
def btc_ctx() -> dict[str, Any]:
    return dict(BTC_CTX)
