from .fake_transport import (
    FakeTransport,
    make_commit,
    make_config,
    store_code_events,
    instantiate_events,
    TEST_RPC_URL,
    TEST_CHAIN_ID,
    TEST_PREFIX,
    TEST_DENOM,
    TEST_PRIV_KEY,
    TEST_CONTRACT,
    TEST_ADMIN,
)

__all__ = [
    "FakeTransport",
    "make_commit",
    "make_config",
    "store_code_events",
    "instantiate_events",
    "TEST_RPC_URL",
    "TEST_CHAIN_ID",
    "TEST_PREFIX",
    "TEST_DENOM",
    "TEST_PRIV_KEY",
    "TEST_CONTRACT",
    "TEST_ADMIN",
]
