"""Custom exceptions for the perp signal scanner."""


class ScannerError(Exception):
    """Base exception for all scanner errors."""


class UpstreamUnavailable(ScannerError):
    """Raised when the market data source does not return a usable snapshot."""


class MalformedRecord(ScannerError, ValueError):
    """Raised by strict numeric parsing when a field cannot be read as a number.

    The signal engine never lets this escape: lenient parsing degrades the
    field to its default instead.
    """
