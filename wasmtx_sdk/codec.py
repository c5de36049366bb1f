"""
Protobuf codec for the wasmtx SDK.

Builds the CosmWasm lifecycle messages and encodes/decodes the ABCI query
envelopes used by the pipeline. Encoding failures surface as ``CodecError``.
"""
import json
import logging
from typing import Any, Dict, Iterable, Optional, Union

from cosmpy.crypto.address import Address
from cosmpy.protos.cosmos.auth.v1beta1.auth_pb2 import BaseAccount
from cosmpy.protos.cosmos.auth.v1beta1.query_pb2 import QueryAccountRequest, QueryAccountResponse
from cosmpy.protos.cosmos.base.v1beta1.coin_pb2 import Coin as CoinProto
from cosmpy.protos.cosmos.tx.v1beta1.service_pb2 import SimulateRequest, SimulateResponse
from cosmpy.protos.cosmwasm.wasm.v1.query_pb2 import (
    QuerySmartContractStateRequest,
    QuerySmartContractStateResponse,
)
from cosmpy.protos.cosmwasm.wasm.v1.tx_pb2 import (
    MsgExecuteContract,
    MsgInstantiateContract,
    MsgStoreCode,
)
from google.protobuf.message import DecodeError, Message

from .exceptions import CodecError, ConfigError, MalformedResponseError
from .models import Account, Coin

logger = logging.getLogger(__name__)

# ABCI query paths
ACCOUNT_QUERY_PATH = "/cosmos.auth.v1beta1.Query/Account"
SIMULATE_PATH = "/cosmos.tx.v1beta1.Service/Simulate"
SMART_QUERY_PATH = "/cosmwasm.wasm.v1.Query/SmartContractState"

Payload = Union[bytes, Dict[str, Any]]


def validate_address(address: str, prefix: str) -> str:
    """
    Check that ``address`` is valid bech32 with the expected prefix.

    Raises:
        ConfigError: If the address is malformed or has a different prefix
    """
    if not isinstance(address, str) or not address.startswith(prefix + "1"):
        raise ConfigError(f"Address {address!r} does not use prefix '{prefix}'")
    try:
        Address(address)
    except Exception as e:
        raise ConfigError(f"Malformed bech32 address {address!r}: {e}") from e
    return address


def encode_payload(payload: Payload) -> bytes:
    """Serialize a contract message: bytes pass through, dicts become compact JSON."""
    if isinstance(payload, (bytes, bytearray)):
        return bytes(payload)
    try:
        return json.dumps(payload, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise CodecError(f"Payload is not JSON serializable: {e}") from e


def encode_funds(funds: Optional[Iterable[Coin]]) -> list:
    # the SDK rejects unsorted coin lists
    return [
        CoinProto(denom=coin.denom, amount=str(coin.amount))
        for coin in sorted(funds or [], key=lambda c: c.denom)
    ]


def store_code_msg(sender: str, wasm_byte_code: bytes) -> MsgStoreCode:
    return MsgStoreCode(sender=sender, wasm_byte_code=wasm_byte_code)


def instantiate_msg(
    sender: str,
    code_id: int,
    msg: bytes,
    label: str,
    admin: Optional[str] = None,
    funds: Optional[Iterable[Coin]] = None,
) -> MsgInstantiateContract:
    return MsgInstantiateContract(
        sender=sender,
        admin=admin or "",
        code_id=code_id,
        label=label,
        msg=msg,
        funds=encode_funds(funds),
    )


def execute_msg(
    sender: str,
    contract: str,
    msg: bytes,
    funds: Optional[Iterable[Coin]] = None,
) -> MsgExecuteContract:
    return MsgExecuteContract(
        sender=sender,
        contract=contract,
        msg=msg,
        funds=encode_funds(funds),
    )


def _serialize(message: Message) -> bytes:
    try:
        return message.SerializeToString()
    except Exception as e:
        raise CodecError(f"Failed to encode {type(message).__name__}: {e}") from e


def _parse(cls, value: bytes):
    try:
        return cls.FromString(value)
    except DecodeError as e:
        raise CodecError(f"Failed to decode {cls.__name__}: {e}") from e


def encode_account_query(address: str) -> bytes:
    return _serialize(QueryAccountRequest(address=address))


def decode_account(address: str, value: bytes) -> Account:
    """
    Decode a ``QueryAccountResponse`` holding a ``BaseAccount``.

    Raises:
        CodecError: If the envelope cannot be decoded
        MalformedResponseError: If the account is missing or not a BaseAccount
    """
    response = _parse(QueryAccountResponse, value)
    if not response.HasField("account"):
        raise MalformedResponseError(f"Account query for {address} returned no account")

    if not response.account.Is(BaseAccount.DESCRIPTOR):
        raise MalformedResponseError(
            f"Unsupported account type {response.account.type_url} for {address}"
        )
    base = BaseAccount()
    response.account.Unpack(base)
    return Account(
        address=base.address or address,
        account_number=base.account_number,
        sequence=base.sequence,
    )


def encode_simulate(tx_bytes: bytes) -> bytes:
    return _serialize(SimulateRequest(tx_bytes=tx_bytes))


def decode_simulate(value: bytes) -> Optional[int]:
    """Return the simulated gas usage, or None if the response carries no gas info."""
    response = _parse(SimulateResponse, value)
    if not response.HasField("gas_info"):
        return None
    return response.gas_info.gas_used


def encode_smart_query(address: str, query_data: bytes) -> bytes:
    return _serialize(QuerySmartContractStateRequest(address=address, query_data=query_data))


def decode_smart_query(value: bytes) -> bytes:
    return _parse(QuerySmartContractStateResponse, value).data
