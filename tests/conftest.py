"""
Pytest fixtures for the wasmtx SDK tests.
"""
import pytest

from wasmtx_sdk import ChainClient, LocalSigner, NetworkConfig
from tests.test_helpers import FakeTransport, make_config, TEST_PRIV_KEY


@pytest.fixture(autouse=True)
def _reset_network_cache():
    """Make sure no test sees presets cached by another"""
    NetworkConfig._networks_cache = None
    yield
    NetworkConfig._networks_cache = None


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def signer():
    return LocalSigner(TEST_PRIV_KEY)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(config, transport):
    """ChainClient wired to the in-memory transport"""
    return ChainClient(config, transport=transport)
