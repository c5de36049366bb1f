"""
wasmtx SDK - store, instantiate, execute and query CosmWasm contracts
on Cosmos SDK chains.
"""
from .version import __version__
from .client import ChainClient
from .config import ChainConfig, NetworkConfig
from .models import (
    Account,
    Coin,
    CommitResult,
    ContractEvent,
    EventAttribute,
    ExecResult,
    Fee,
    InstantiateResult,
    QueryResult,
    StoreCodeResult,
    TxPhaseResult,
)
from .signer import LocalSigner, Signer
from .transport import ChainTransport, HttpTransport
from .exceptions import (
    WasmTxError,
    ConfigError,
    TransportError,
    BroadcastTimeoutError,
    CodecError,
    AccountNotFoundError,
    SimulationFailedError,
    SigningFailedError,
    BroadcastRejectedError,
    ExecutionFailedError,
    EventNotFoundError,
    AttributeNotFoundError,
    MalformedResponseError,
    QueryFailedError,
)

__all__ = [
    "__version__",
    "ChainClient",
    "ChainConfig",
    "NetworkConfig",
    "Account",
    "Coin",
    "CommitResult",
    "ContractEvent",
    "EventAttribute",
    "ExecResult",
    "Fee",
    "InstantiateResult",
    "QueryResult",
    "StoreCodeResult",
    "TxPhaseResult",
    "LocalSigner",
    "Signer",
    "ChainTransport",
    "HttpTransport",
    "WasmTxError",
    "ConfigError",
    "TransportError",
    "BroadcastTimeoutError",
    "CodecError",
    "AccountNotFoundError",
    "SimulationFailedError",
    "SigningFailedError",
    "BroadcastRejectedError",
    "ExecutionFailedError",
    "EventNotFoundError",
    "AttributeNotFoundError",
    "MalformedResponseError",
    "QueryFailedError",
]
