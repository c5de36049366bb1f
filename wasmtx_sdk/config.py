"""
Chain configuration for the wasmtx SDK.

``ChainConfig`` holds the immutable connection and fee parameters shared by
every operation. ``NetworkConfig`` provides named presets bundled with the
package in ``networks.json``.
"""
import importlib.resources
import json
import logging
import os
import re
import urllib.parse
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional, Union

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

# Cosmos SDK coin denom format
DENOM_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9/:._-]{2,127}$")
# bech32 human-readable part
PREFIX_RE = re.compile(r"^[a-z][a-z0-9]{0,82}$")

LOCAL_HOSTS = ("localhost", "127.0.0.1", "::1")


@dataclass(frozen=True)
class ChainConfig:
    """
    Connection and signing parameters for one chain.

    Attributes:
        rpc_endpoint: Tendermint/CometBFT RPC URL
        chain_id: Chain identifier included in every SignDoc
        prefix: bech32 address prefix (e.g. "juno")
        denom: Fee denomination
        gas_price: Price of one gas unit in ``denom``
        gas_adjustment: Multiplier applied to simulated gas usage
        broadcast_timeout: Seconds to wait for block inclusion
        request_timeout: Seconds to wait for query calls
        retry_count: HTTP retries for read-only query calls
        base64_event_attributes: Whether the node base64-encodes event attributes
    """
    rpc_endpoint: str
    chain_id: str
    prefix: str
    denom: str
    gas_price: Union[float, str, Decimal]
    gas_adjustment: Union[float, str, Decimal] = 1.3
    broadcast_timeout: float = 60.0
    request_timeout: float = 30.0
    retry_count: int = 3
    base64_event_attributes: bool = False

    def __post_init__(self):
        self._validate_endpoint(self.rpc_endpoint)

        if not self.chain_id or not self.chain_id.strip():
            raise ConfigError("chain_id must not be empty")
        if not PREFIX_RE.match(self.prefix or ""):
            raise ConfigError(f"Invalid bech32 address prefix: {self.prefix!r}")
        if not DENOM_RE.match(self.denom or ""):
            raise ConfigError(f"Invalid fee denomination: {self.denom!r}")

        for name in ("gas_price", "gas_adjustment"):
            value = self._to_decimal(name, getattr(self, name))
            if not value.is_finite() or value <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)!r}")

        for name in ("broadcast_timeout", "request_timeout"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)!r}")
        if self.retry_count < 0:
            raise ConfigError(f"retry_count must not be negative, got {self.retry_count!r}")

    @staticmethod
    def _to_decimal(name: str, value: Any) -> Decimal:
        try:
            return Decimal(str(value))
        except InvalidOperation:
            raise ConfigError(f"{name} is not a number: {value!r}")

    @staticmethod
    def _validate_endpoint(url: str) -> None:
        """
        Validate the RPC endpoint.

        Plain http is only accepted for local nodes unless WASMTX_INSECURE_RPC=1.

        Raises:
            ConfigError: If the URL is malformed or insecure
        """
        parsed = urllib.parse.urlparse(url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigError(f"Invalid RPC endpoint: {url!r}")

        host = parsed.hostname or ""
        if parsed.scheme != "https" and host not in LOCAL_HOSTS:
            if os.environ.get("WASMTX_INSECURE_RPC") != "1":
                raise ConfigError(
                    f"rpc_endpoint must use https:// for non-local hosts (got: {url}). "
                    "Set WASMTX_INSECURE_RPC=1 to allow HTTP."
                )

    @classmethod
    def from_network(cls, network: str, **overrides: Any) -> "ChainConfig":
        """
        Build a config from a bundled network preset.

        Args:
            network: Network name from networks.json
            **overrides: Field values replacing the preset's

        Returns:
            ChainConfig instance
        """
        net = NetworkConfig.get_network(network)
        params = {
            "rpc_endpoint": NetworkConfig.get_rpc_url(network, overrides.pop("rpc_endpoint", None)),
            "chain_id": net["chainId"],
            "prefix": net["prefix"],
            "denom": net["denom"],
            "gas_price": net["gasPrice"],
            "gas_adjustment": net.get("gasAdjustment", 1.3),
        }
        params.update(overrides)
        return cls(**params)


class NetworkConfig:
    """Named chain presets loaded from the package's networks.json"""

    _networks_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @classmethod
    def load_networks(cls) -> Dict[str, Dict[str, Any]]:
        """
        Load network presets, caching them after the first read.

        Returns:
            Mapping of network name to preset dictionary
        """
        if cls._networks_cache is not None:
            return cls._networks_cache

        resource = importlib.resources.files("wasmtx_sdk").joinpath("networks.json")
        with resource.open("r", encoding="utf-8") as f:
            cls._networks_cache = json.load(f)
        logger.debug(f"Loaded {len(cls._networks_cache)} network presets")
        return cls._networks_cache

    @classmethod
    def get_network(cls, network: str) -> Dict[str, Any]:
        networks = cls.load_networks()
        if network not in networks:
            available = ", ".join(sorted(networks))
            raise ValueError(f"Unknown network '{network}'. Available networks: {available}")
        return networks[network]

    @classmethod
    def get_rpc_url(cls, network: str, override: Optional[str] = None) -> str:
        """
        Resolve the RPC URL for a network.

        Precedence: explicit override, then ``<NETWORK>_RPC_URL`` env var, then preset.
        """
        if override:
            return override
        env_name = f"{network.upper().replace('-', '_')}_RPC_URL"
        env_url = os.environ.get(env_name)
        if env_url:
            return env_url
        return cls.get_network(network)["rpc"]

    @classmethod
    def get_chain_id(cls, network: str) -> str:
        return cls.get_network(network)["chainId"]
