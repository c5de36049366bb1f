"""
Data models for the wasmtx SDK.
"""
import base64
import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Coin(BaseModel):
    """An amount of a single denomination"""
    model_config = ConfigDict(frozen=True)

    denom: str
    amount: int = Field(..., ge=0)

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


class Account(BaseModel):
    """On-chain account number and sequence for a signer at a point in time"""
    model_config = ConfigDict(frozen=True)

    address: str
    account_number: int
    sequence: int


class Fee(BaseModel):
    """Transaction fee: amount paid and gas limit"""
    model_config = ConfigDict(frozen=True)

    amount: Coin
    gas_limit: int = Field(..., ge=0)


class EventAttribute(BaseModel):
    key: str
    value: str = ""
    index: bool = False


class ContractEvent(BaseModel):
    """A named event with ordered key/value attributes"""
    type: str
    attributes: List[EventAttribute] = Field(default_factory=list)

    @classmethod
    def from_rpc(cls, raw: Dict[str, Any], base64_attributes: bool = False) -> "ContractEvent":
        """
        Build an event from its JSON-RPC representation.

        Args:
            raw: Event dictionary with ``type`` and ``attributes``
            base64_attributes: Whether keys and values are base64 encoded (Tendermint <= 0.34)

        Returns:
            ContractEvent instance
        """
        attributes = []
        for attr in raw.get("attributes") or []:
            key = attr.get("key") or ""
            value = attr.get("value") or ""
            if base64_attributes:
                key = base64.b64decode(key).decode("utf-8")
                value = base64.b64decode(value).decode("utf-8")
            attributes.append(EventAttribute(key=key, value=value, index=bool(attr.get("index", False))))
        return cls(type=raw.get("type", ""), attributes=attributes)


class TxPhaseResult(BaseModel):
    """Outcome of one phase (check or deliver) of a committed transaction"""
    code: int = 0
    codespace: str = ""
    log: str = ""
    data: bytes = b""
    gas_wanted: int = 0
    gas_used: int = 0
    events: List[ContractEvent] = Field(default_factory=list)

    @property
    def is_ok(self) -> bool:
        return self.code == 0

    @classmethod
    def from_rpc(cls, raw: Optional[Dict[str, Any]], base64_attributes: bool = False) -> "TxPhaseResult":
        raw = raw or {}
        data = raw.get("data") or ""
        return cls(
            code=int(raw.get("code") or 0),
            codespace=raw.get("codespace") or "",
            log=raw.get("log") or "",
            data=base64.b64decode(data) if data else b"",
            gas_wanted=int(raw.get("gas_wanted") or 0),
            gas_used=int(raw.get("gas_used") or 0),
            events=[
                ContractEvent.from_rpc(event, base64_attributes)
                for event in raw.get("events") or []
            ],
        )


class CommitResult(BaseModel):
    """Result of broadcast-and-wait: mempool admission and block inclusion"""
    tx_hash: str = ""
    height: int = 0
    check_tx: TxPhaseResult
    deliver_tx: TxPhaseResult

    @classmethod
    def from_rpc(cls, raw: Dict[str, Any], base64_attributes: bool = False) -> "CommitResult":
        """
        Convert a ``broadcast_tx_commit`` JSON-RPC result to our model.

        CometBFT 0.38 renamed ``deliver_tx`` to ``tx_result``; both are accepted.
        """
        deliver = raw.get("deliver_tx")
        if deliver is None:
            deliver = raw.get("tx_result")
        return cls(
            tx_hash=raw.get("hash") or "",
            height=int(raw.get("height") or 0),
            check_tx=TxPhaseResult.from_rpc(raw.get("check_tx"), base64_attributes),
            deliver_tx=TxPhaseResult.from_rpc(deliver, base64_attributes),
        )


class AbciQueryResponse(BaseModel):
    """Response envelope of an ``abci_query`` call"""
    code: int = 0
    codespace: str = ""
    log: str = ""
    value: bytes = b""
    height: int = 0

    @property
    def is_ok(self) -> bool:
        return self.code == 0


class StoreCodeResult(BaseModel):
    code_id: int
    commit: CommitResult


class InstantiateResult(BaseModel):
    address: str
    commit: CommitResult


class ExecResult(BaseModel):
    commit: CommitResult


class QueryResult(BaseModel):
    """Raw payload returned by a smart-contract state query"""
    model_config = ConfigDict(frozen=True)

    data: bytes

    def as_json(self) -> Any:
        """Decode the payload as JSON (CosmWasm contracts answer queries in JSON)."""
        return json.loads(self.data)
