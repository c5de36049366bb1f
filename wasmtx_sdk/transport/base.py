"""
Abstract transport interface.
"""
from abc import ABC, abstractmethod
from typing import Optional

from ..models import AbciQueryResponse, CommitResult


class ChainTransport(ABC):
    """
    Abstract base class for node transports.

    Implementations must not raise for chain-reported failures: a non-zero
    ABCI code is returned to the caller inside the response object. Only
    network and codec level problems raise ``TransportError``.
    """

    @abstractmethod
    def abci_query(self, path: str, data: bytes) -> AbciQueryResponse:
        """
        Run an ABCI query.

        Args:
            path: Fully-qualified service/method path (e.g. "/cosmos.auth.v1beta1.Query/Account")
            data: Protobuf-encoded request

        Returns:
            Query response envelope

        Raises:
            TransportError: If the node cannot be reached or answers garbage
        """
        pass

    @abstractmethod
    def broadcast_tx_commit(self, tx_bytes: bytes, timeout: Optional[float] = None) -> CommitResult:
        """
        Broadcast a signed transaction and wait until it is included in a block.

        Args:
            tx_bytes: Serialized signed transaction
            timeout: Seconds to wait before giving up

        Returns:
            Result of both the check and deliver phases

        Raises:
            BroadcastTimeoutError: If the wait exceeds ``timeout``
            TransportError: For other network level failures
        """
        pass

    def close(self) -> None:
        """Close any open connections or resources."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
