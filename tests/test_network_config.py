"""
Tests for ChainConfig validation and the NetworkConfig presets.
"""
import os
import pytest
from decimal import Decimal
from unittest.mock import patch

from wasmtx_sdk.config import ChainConfig, NetworkConfig
from wasmtx_sdk.exceptions import ConfigError
from tests.test_helpers import make_config, TEST_RPC_URL

# Sample network configuration
MOCK_NETWORKS = {
    "test-network": {
        "chainId": "test-1",
        "rpc": "https://test.example.com",
        "prefix": "juno",
        "denom": "ujunox",
        "gasPrice": "0.075",
        "gasAdjustment": "1.5"
    }
}


class TestChainConfig:
    """Test ChainConfig validation."""

    def test_valid_config(self):
        config = make_config()
        assert config.rpc_endpoint == TEST_RPC_URL
        assert config.broadcast_timeout == 60.0
        assert config.base64_event_attributes is False

    def test_config_is_immutable(self):
        config = make_config()
        with pytest.raises(AttributeError):
            config.chain_id = "other"

    @pytest.mark.parametrize("denom", ["", "u", "1stake", "us take", "ustake!"])
    def test_invalid_denom(self, denom):
        with pytest.raises(ConfigError, match="denomination"):
            make_config(denom=denom)

    def test_ibc_denom_accepted(self):
        denom = "ibc/27394FB092D2ECCD56123C74F36E4C1F926001CEADA9CA97EA622B25F41E5EB2"
        assert make_config(denom=denom).denom == denom

    @pytest.mark.parametrize("prefix", ["", "Juno", "ju no", "1abc"])
    def test_invalid_prefix(self, prefix):
        with pytest.raises(ConfigError, match="prefix"):
            make_config(prefix=prefix)

    def test_empty_chain_id(self):
        with pytest.raises(ConfigError, match="chain_id"):
            make_config(chain_id="  ")

    @pytest.mark.parametrize("field,value", [
        ("gas_price", 0),
        ("gas_price", "-0.1"),
        ("gas_adjustment", "nan"),
        ("gas_adjustment", "abc"),
        ("broadcast_timeout", 0),
        ("request_timeout", -1),
    ])
    def test_non_positive_numbers(self, field, value):
        with pytest.raises(ConfigError):
            make_config(**{field: value})

    def test_decimal_gas_price(self):
        assert make_config(gas_price=Decimal("0.0025")).gas_price == Decimal("0.0025")

    def test_invalid_endpoint(self):
        with pytest.raises(ConfigError, match="Invalid RPC endpoint"):
            make_config(rpc_endpoint="tcp://localhost:26657")

    def test_http_rejected_for_remote_host(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ConfigError, match="https"):
                make_config(rpc_endpoint="http://rpc.example.com")

    def test_http_allowed_for_localhost(self):
        config = make_config(rpc_endpoint="http://localhost:26657")
        assert config.rpc_endpoint == "http://localhost:26657"

    def test_http_allowed_with_env_override(self):
        with patch.dict(os.environ, {"WASMTX_INSECURE_RPC": "1"}):
            config = make_config(rpc_endpoint="http://rpc.example.com")
        assert config.rpc_endpoint == "http://rpc.example.com"


class TestNetworkConfig:
    """Test NetworkConfig class."""

    def test_load_networks_cached(self):
        """Test that networks are cached after first load."""
        NetworkConfig._networks_cache = MOCK_NETWORKS

        with patch("importlib.resources.files") as mock_files:
            result = NetworkConfig.load_networks()
            mock_files.assert_not_called()

        assert result == MOCK_NETWORKS

    def test_load_bundled_networks(self):
        """Test that the packaged networks.json loads."""
        networks = NetworkConfig.load_networks()
        assert "local" in networks
        assert networks["local"]["prefix"] == "wasm"

    def test_get_network_not_found(self):
        NetworkConfig._networks_cache = MOCK_NETWORKS

        with pytest.raises(ValueError) as exc_info:
            NetworkConfig.get_network("non-existent-network")

        # Error message lists available networks
        assert "test-network" in str(exc_info.value)

    def test_get_rpc_url_default(self):
        NetworkConfig._networks_cache = MOCK_NETWORKS
        assert NetworkConfig.get_rpc_url("test-network") == "https://test.example.com"

    def test_get_rpc_url_override(self):
        NetworkConfig._networks_cache = MOCK_NETWORKS
        result = NetworkConfig.get_rpc_url("test-network", override="https://override.example.com")
        assert result == "https://override.example.com"

    def test_get_rpc_url_env_var(self):
        NetworkConfig._networks_cache = MOCK_NETWORKS
        with patch.dict(os.environ, {"TEST_NETWORK_RPC_URL": "https://env.example.com"}):
            assert NetworkConfig.get_rpc_url("test-network") == "https://env.example.com"

    def test_get_chain_id(self):
        NetworkConfig._networks_cache = MOCK_NETWORKS
        assert NetworkConfig.get_chain_id("test-network") == "test-1"

    def test_chain_config_from_network(self):
        NetworkConfig._networks_cache = MOCK_NETWORKS

        config = ChainConfig.from_network("test-network", broadcast_timeout=15)

        assert config.chain_id == "test-1"
        assert config.prefix == "juno"
        assert config.denom == "ujunox"
        assert config.gas_price == "0.075"
        assert config.gas_adjustment == "1.5"
        assert config.broadcast_timeout == 15

    def test_chain_config_from_network_rpc_override(self):
        NetworkConfig._networks_cache = MOCK_NETWORKS
        config = ChainConfig.from_network("test-network", rpc_endpoint="https://mine.example.com")
        assert config.rpc_endpoint == "https://mine.example.com"
