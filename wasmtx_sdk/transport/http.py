"""
JSON-RPC transport talking to a Tendermint/CometBFT node over HTTP.
"""
import base64
import itertools
import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..exceptions import BroadcastTimeoutError, TransportError
from ..models import AbciQueryResponse, CommitResult
from .base import ChainTransport

logger = logging.getLogger(__name__)


class HttpTransport(ChainTransport):
    """
    Transport using the node's JSON-RPC endpoint.

    Query calls are retried on connection errors and 5xx responses; broadcasts
    are never retried since a resubmission could land twice.
    """

    def __init__(
        self,
        rpc_endpoint: str,
        timeout: float = 30.0,
        retry_count: int = 3,
        base64_event_attributes: bool = False,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the transport

        Args:
            rpc_endpoint: Node RPC URL (e.g. "https://rpc.uni.junonetwork.io")
            timeout: Timeout for query calls in seconds
            retry_count: Number of retries for query calls
            base64_event_attributes: Whether event attributes are base64 encoded (Tendermint <= 0.34)
            session: Optional pre-configured requests session
        """
        self.rpc_endpoint = rpc_endpoint.rstrip("/")
        self.timeout = timeout
        self.base64_event_attributes = base64_event_attributes
        self._ids = itertools.count(1)

        # Query session with retries
        self.session = session or requests.Session()
        retries = Retry(
            total=retry_count,
            backoff_factor=0.5,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=["POST"],
            raise_on_status=False,
            connect=retry_count,
            read=retry_count,
        )
        self.session.mount("http://", HTTPAdapter(max_retries=retries))
        self.session.mount("https://", HTTPAdapter(max_retries=retries))

        # Broadcast session without retries
        self.broadcast_session = requests.Session()
        self.broadcast_session.mount("http://", HTTPAdapter(max_retries=0))
        self.broadcast_session.mount("https://", HTTPAdapter(max_retries=0))

    def _call(
        self,
        method: str,
        params: Dict[str, Any],
        session: requests.Session,
        timeout: float,
    ) -> Dict[str, Any]:
        """
        Perform a JSON-RPC call and return its ``result`` object.

        Raises:
            BroadcastTimeoutError: If a broadcast times out
            TransportError: On any other network or protocol error
        """
        request = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        try:
            response = session.post(self.rpc_endpoint, json=request, timeout=timeout)
            response.raise_for_status()
        except requests.Timeout as e:
            logger.error(f"{method} timed out after {timeout}s")
            error_cls = BroadcastTimeoutError if method == "broadcast_tx_commit" else TransportError
            raise error_cls(f"{method} timed out after {timeout}s") from e
        except requests.RequestException as e:
            logger.error(f"{method} request failed: {e}")
            raise TransportError(f"{method} request failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON response to {method}: {e}") from e

        if not isinstance(body, dict):
            raise TransportError(f"Unexpected JSON-RPC response to {method}: {body!r}")

        if body.get("error"):
            error = body["error"]
            detail = f"{error.get('message', '')} {error.get('data', '')}".strip()
            if method == "broadcast_tx_commit" and "timed out" in detail:
                raise BroadcastTimeoutError(f"{method} failed: {detail}")
            raise TransportError(f"{method} failed: {detail}")

        result = body.get("result")
        if not isinstance(result, dict):
            raise TransportError(f"Missing result in response to {method}: {body!r}")
        return result

    def abci_query(self, path: str, data: bytes) -> AbciQueryResponse:
        logger.debug(f"abci_query {path} ({len(data)} bytes)")
        result = self._call(
            "abci_query",
            {"path": path, "data": data.hex(), "height": "0", "prove": False},
            self.session,
            self.timeout,
        )
        response = result.get("response")
        if response is None:
            logger.warning(f"abci_query {path} returned no response object, treating as empty")
            response = {}
        value = response.get("value") or ""
        try:
            return AbciQueryResponse(
                code=int(response.get("code") or 0),
                codespace=response.get("codespace") or "",
                log=response.get("log") or "",
                value=base64.b64decode(value) if value else b"",
                height=int(response.get("height") or 0),
            )
        except (ValueError, TypeError) as e:
            raise TransportError(f"Malformed abci_query response: {e}") from e

    def broadcast_tx_commit(self, tx_bytes: bytes, timeout: Optional[float] = None) -> CommitResult:
        timeout = timeout or self.timeout
        logger.debug(f"broadcast_tx_commit ({len(tx_bytes)} bytes, timeout={timeout}s)")
        result = self._call(
            "broadcast_tx_commit",
            {"tx": base64.b64encode(tx_bytes).decode("ascii")},
            self.broadcast_session,
            timeout,
        )
        try:
            return CommitResult.from_rpc(result, self.base64_event_attributes)
        except (ValueError, TypeError) as e:
            raise TransportError(f"Malformed broadcast_tx_commit result: {e}") from e

    def close(self) -> None:
        self.session.close()
        self.broadcast_session.close()
