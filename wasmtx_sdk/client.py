"""
ChainClient - Main client for CosmWasm contract lifecycle transactions.
"""
import logging
from contextlib import contextmanager
from typing import Iterable, Iterator, Optional

from google.protobuf.message import Message

from . import codec
from .account import resolve_account
from .broadcast import broadcast_and_confirm
from .codec import Payload
from .config import ChainConfig
from .events import UINT64_MAX, extract_attribute, parse_uint
from .exceptions import ConfigError, QueryFailedError, WasmTxError
from .gas import estimate_fee
from .models import (
    Account,
    Coin,
    CommitResult,
    ExecResult,
    Fee,
    InstantiateResult,
    QueryResult,
    StoreCodeResult,
)
from .signer import Signer
from .transport.base import ChainTransport
from .transport.http import HttpTransport
from .tx import TxOptions, build_signed_tx

DEFAULT_LABEL = "wasmtx"


class ChainClient:
    """
    Client for storing, instantiating, executing and querying CosmWasm contracts.

    The client only holds immutable configuration and a transport. The
    signer is passed into every state-changing call and never stored, and
    the account sequence is resolved again for every transaction.

    Operations from the same signer must be serialized by the caller:
    two concurrent calls would resolve the same sequence number.
    """

    def __init__(
        self,
        config: ChainConfig,
        transport: Optional[ChainTransport] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the ChainClient

        Args:
            config: Chain configuration
            transport: Node transport (defaults to an HttpTransport on ``config.rpc_endpoint``)
            logger: Optional logger instance to use for debug/info logging
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.transport = transport or HttpTransport(
            config.rpc_endpoint,
            timeout=config.request_timeout,
            retry_count=config.retry_count,
            base64_event_attributes=config.base64_event_attributes,
        )

    @contextmanager
    def _operation(self, name: str) -> Iterator[None]:
        """Tag any SDK error raised inside the block with the operation name."""
        try:
            yield
        except WasmTxError as e:
            if e.operation is None:
                e.operation = name
            self.logger.error(f"{name} failed: {e.message}")
            raise

    def account(self, address: str) -> Account:
        """
        Fetch the current account number and sequence of ``address``.

        Raises:
            AccountNotFoundError: If the chain has no record of the address
        """
        with self._operation("account"):
            return resolve_account(self.transport, address)

    def store(
        self,
        wasm_byte_code: bytes,
        signer: Signer,
        memo: str = "",
        timeout_height: int = 0,
        fee: Optional[Fee] = None,
    ) -> StoreCodeResult:
        """
        Upload contract code.

        Args:
            wasm_byte_code: Compiled (optionally gzipped) wasm module
            signer: Signing identity paying for the upload
            memo: Transaction memo
            timeout_height: Block height after which the tx is invalid (0 disables)
            fee: Explicit fee; skips gas simulation when given

        Returns:
            StoreCodeResult with the new code id

        Raises:
            EventNotFoundError: If no ``store_code`` event was emitted
            AttributeNotFoundError: If the event has no ``code_id``
            MalformedResponseError: If ``code_id`` is not an unsigned integer
        """
        with self._operation("store"):
            sender = signer.address(self.config.prefix)
            self.logger.debug(f"Storing {len(wasm_byte_code)} bytes of wasm from {sender}")
            msg = codec.store_code_msg(sender, wasm_byte_code)

            commit = self._send_tx(sender, msg, signer, TxOptions(memo, timeout_height), fee)
            code_id = parse_uint(extract_attribute(commit, "store_code", "code_id"), "code_id")

            self.logger.info(f"Stored code id {code_id}")
            return StoreCodeResult(code_id=code_id, commit=commit)

    def instantiate(
        self,
        code_id: int,
        payload: Payload,
        signer: Signer,
        label: str = DEFAULT_LABEL,
        admin: Optional[str] = None,
        funds: Optional[Iterable[Coin]] = None,
        memo: str = "",
        timeout_height: int = 0,
        fee: Optional[Fee] = None,
    ) -> InstantiateResult:
        """
        Create a contract instance from stored code.

        Args:
            code_id: Id returned by :meth:`store`
            payload: Instantiate message (bytes or JSON-serializable dict)
            signer: Signing identity
            label: Human-readable contract label
            admin: Optional admin address allowed to migrate the contract
            funds: Coins sent to the contract on instantiation
            memo: Transaction memo
            timeout_height: Block height after which the tx is invalid (0 disables)
            fee: Explicit fee; skips gas simulation when given

        Returns:
            InstantiateResult with the contract address exactly as emitted by the chain

        Raises:
            ConfigError: If code_id, label or admin are invalid
            EventNotFoundError: If no ``instantiate`` event was emitted
            AttributeNotFoundError: If the event has no ``_contract_address``
        """
        with self._operation("instantiate"):
            if not 1 <= code_id <= UINT64_MAX:
                raise ConfigError(f"code_id must be a positive uint64, got {code_id}")
            if not label:
                raise ConfigError("label must not be empty")
            if admin is not None:
                codec.validate_address(admin, self.config.prefix)

            sender = signer.address(self.config.prefix)
            msg = codec.instantiate_msg(
                sender,
                code_id,
                codec.encode_payload(payload),
                label,
                admin=admin,
                funds=funds,
            )

            commit = self._send_tx(sender, msg, signer, TxOptions(memo, timeout_height), fee)
            address = extract_attribute(commit, "instantiate", "_contract_address")

            self.logger.info(f"Instantiated code id {code_id} at {address}")
            return InstantiateResult(address=address, commit=commit)

    def execute(
        self,
        address: str,
        payload: Payload,
        signer: Signer,
        funds: Optional[Iterable[Coin]] = None,
        memo: str = "",
        timeout_height: int = 0,
        fee: Optional[Fee] = None,
    ) -> ExecResult:
        """
        Execute a message on a contract.

        The result is returned as-is; execute responses are opaque to the client.

        Raises:
            ConfigError: If ``address`` is not a valid contract address
        """
        with self._operation("execute"):
            codec.validate_address(address, self.config.prefix)
            sender = signer.address(self.config.prefix)
            msg = codec.execute_msg(sender, address, codec.encode_payload(payload), funds=funds)

            commit = self._send_tx(sender, msg, signer, TxOptions(memo, timeout_height), fee)
            return ExecResult(commit=commit)

    def query(self, address: str, payload: Payload) -> QueryResult:
        """
        Query contract state (read-only, no signing or fees).

        Args:
            address: Contract address
            payload: Query message (bytes or JSON-serializable dict)

        Returns:
            QueryResult with the raw response payload

        Raises:
            ConfigError: If ``address`` is not a valid contract address
            QueryFailedError: If the chain-side query fails
        """
        with self._operation("query"):
            codec.validate_address(address, self.config.prefix)
            request = codec.encode_smart_query(address, codec.encode_payload(payload))
            response = self.transport.abci_query(codec.SMART_QUERY_PATH, request)
            if not response.is_ok:
                raise QueryFailedError(address, response.code, response.log)
            return QueryResult(data=codec.decode_smart_query(response.value))

    def _send_tx(
        self,
        sender: str,
        msg: Message,
        signer: Signer,
        options: TxOptions,
        fee: Optional[Fee] = None,
    ) -> CommitResult:
        """
        Drive one message through account resolution, fee estimation,
        signing and broadcast.

        Returns:
            Commit result whose check and deliver phases are both OK
        """
        account = resolve_account(self.transport, sender)

        if fee is None:
            fee = estimate_fee(self.transport, self.config, msg, signer, account, options)
        else:
            self.logger.debug(f"Using explicit fee {fee.amount} with gas limit {fee.gas_limit}")

        tx_bytes = build_signed_tx(self.config, msg, fee, signer, account, options)
        return broadcast_and_confirm(self.transport, tx_bytes, timeout=self.config.broadcast_timeout)

    def close(self) -> None:
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
