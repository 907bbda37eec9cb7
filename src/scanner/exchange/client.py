"""Abstract snapshot source interface.

The signal pipeline depends only on this contract, keeping
exchange-specific transport details in the concrete implementation.
"""

from abc import ABC, abstractmethod

from scanner.models import Snapshot


class SnapshotSource(ABC):
    """Supplies market snapshots on demand."""

    @abstractmethod
    async def fetch_snapshot(self) -> Snapshot:
        """Fetch instrument metadata and aligned market contexts.

        Raises:
            UpstreamUnavailable: If the remote call fails or returns an
                unusable payload.
        """
        ...

    async def close(self) -> None:
        """Release transport resources. No-op by default."""
