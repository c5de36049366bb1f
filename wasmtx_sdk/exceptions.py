"""
Exceptions for the wasmtx SDK.

Every stage of the transaction pipeline raises one of these; the first error
raised stops the pipeline and is the only thing the caller observes.
"""
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import TxPhaseResult


class WasmTxError(Exception):
    """Base exception for all wasmtx SDK errors."""

    def __init__(self, message: str, operation: Optional[str] = None):
        self.message = message
        self.operation = operation
        super().__init__(message)

    def __str__(self) -> str:
        if self.operation:
            return f"{self.operation}: {self.message}"
        return self.message


class ConfigError(WasmTxError):
    """Raised for malformed configuration values (endpoint, prefix, denom, address)."""
    pass


class TransportError(WasmTxError):
    """Raised when the RPC transport fails at the network level."""
    pass


class BroadcastTimeoutError(TransportError):
    """Raised when broadcast-and-wait does not complete within the configured timeout."""
    pass


class CodecError(TransportError):
    """Raised when a protobuf message cannot be encoded or decoded."""
    pass


class AccountNotFoundError(WasmTxError):
    """Raised when the chain has no record of the signer's account."""

    def __init__(self, address: str, code: int = 0, log: str = ""):
        self.address = address
        self.code = code
        self.log = log
        message = f"Account {address} not found on chain"
        if code:
            message += f" (code={code}): {log}"
        super().__init__(message)


class SimulationFailedError(WasmTxError):
    """Raised when the chain rejects the gas-simulation probe."""

    def __init__(self, message: str, code: Optional[int] = None, log: str = ""):
        self.code = code
        self.log = log
        super().__init__(message)


class SigningFailedError(WasmTxError):
    """Raised when the signing primitive fails."""
    pass


class BroadcastRejectedError(WasmTxError):
    """Raised when the mempool (check phase) rejects a transaction."""

    def __init__(self, result: "TxPhaseResult", tx_hash: Optional[str] = None):
        self.result = result
        self.tx_hash = tx_hash
        super().__init__(
            f"check_tx failed: code={result.code} codespace={result.codespace!r} log={result.log!r}"
        )


class ExecutionFailedError(WasmTxError):
    """Raised when a transaction was included in a block but its messages failed."""

    def __init__(self, result: "TxPhaseResult", tx_hash: Optional[str] = None):
        self.result = result
        self.tx_hash = tx_hash
        super().__init__(
            f"deliver_tx failed: code={result.code} codespace={result.codespace!r} log={result.log!r}"
        )


class EventNotFoundError(WasmTxError):
    """Raised when an expected event is missing from the block-inclusion result."""

    def __init__(self, event_type: str):
        self.event_type = event_type
        super().__init__(f"Event '{event_type}' not found in transaction result")


class AttributeNotFoundError(WasmTxError):
    """Raised when a matched event does not carry the expected attribute."""

    def __init__(self, event_type: str, key: str):
        self.event_type = event_type
        self.key = key
        super().__init__(f"Attribute '{key}' not found in event '{event_type}'")


class MalformedResponseError(WasmTxError):
    """Raised when an extracted field or response envelope cannot be interpreted."""
    pass


class QueryFailedError(WasmTxError):
    """Raised when a smart-contract state query fails on the chain side."""

    def __init__(self, address: str, code: int, log: str = ""):
        self.address = address
        self.code = code
        self.log = log
        super().__init__(f"Query of contract {address} failed (code={code}): {log}")
