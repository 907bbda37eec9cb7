"""Market data layer -- periodic signal board refresh."""

from scanner.market_data.signal_service import SignalService

__all__ = ["SignalService"]
