"""
Tests for gas simulation and fee computation.
"""
import math
from decimal import Decimal

import pytest
from hypothesis import given, strategies as st, settings
from cosmpy.protos.cosmos.tx.v1beta1.service_pb2 import SimulateRequest
from cosmpy.protos.cosmos.tx.v1beta1.tx_pb2 import AuthInfo, TxRaw

from wasmtx_sdk import codec
from wasmtx_sdk.exceptions import SimulationFailedError
from wasmtx_sdk.gas import compute_fee, estimate_fee, simulate_gas
from wasmtx_sdk.models import Account
from wasmtx_sdk.tx import TxOptions

ACCOUNT = Account(address="wasm1signer", account_number=7, sequence=3)


def test_compute_fee_reference_values():
    """100000 gas * 1.3 -> 130000 gas limit, * 0.025 -> 3250"""
    fee = compute_fee(100000, 1.3, 0.025, "ustake")

    assert fee.gas_limit == 130000
    assert fee.amount.amount == 3250
    assert fee.amount.denom == "ustake"


def test_compute_fee_rounds_up():
    fee = compute_fee(100001, "1.3", "0.025", "ustake")

    # 130001.3 -> 130002; 130002 * 0.025 = 3250.05 -> 3251
    assert fee.gas_limit == 130002
    assert fee.amount.amount == 3251


@settings(max_examples=200)
@given(
    gas_used=st.integers(min_value=0, max_value=10**9),
    adjustment=st.decimals(min_value=Decimal("1"), max_value=Decimal("3"), places=2),
    price=st.decimals(min_value=Decimal("0.0001"), max_value=Decimal("10"), places=4),
)
def test_compute_fee_is_smallest_covering_integer(gas_used, adjustment, price):
    """Gas limit and amount are the ceilings of the exact decimal products"""
    fee = compute_fee(gas_used, adjustment, price, "ustake")

    exact_limit = gas_used * adjustment
    assert fee.gas_limit >= exact_limit
    assert fee.gas_limit - 1 < exact_limit

    exact_amount = fee.gas_limit * price
    assert fee.amount.amount >= exact_amount
    assert fee.amount.amount - 1 < exact_amount


@given(gas_used=st.integers(min_value=1, max_value=10**7))
def test_compute_fee_never_below_usage(gas_used):
    fee = compute_fee(gas_used, 1.3, 0.025, "ustake")
    assert fee.gas_limit >= gas_used
    assert fee.gas_limit == math.ceil(Decimal(gas_used) * Decimal("1.3"))


def test_simulate_sends_zero_fee_probe(config, signer, transport):
    """The probe is signed with the current sequence but carries no fee"""
    msg = codec.store_code_msg(signer.address(config.prefix), b"\0asm")

    gas_used = simulate_gas(transport, config, msg, signer, ACCOUNT, TxOptions())

    assert gas_used == 100000
    assert transport.calls["simulate"] == 1

    path, data = transport.queries[-1]
    probe = TxRaw.FromString(SimulateRequest.FromString(data).tx_bytes)
    auth_info = AuthInfo.FromString(probe.auth_info_bytes)
    assert auth_info.fee.gas_limit == 0
    assert list(auth_info.fee.amount) == []
    assert auth_info.signer_infos[0].sequence == ACCOUNT.sequence
    assert len(probe.signatures) == 1


def test_estimate_fee_applies_config(config, signer, transport):
    msg = codec.store_code_msg(signer.address(config.prefix), b"\0asm")

    fee = estimate_fee(transport, config, msg, signer, ACCOUNT, TxOptions())

    assert fee.gas_limit == 130000
    assert fee.amount.amount == 3250
    assert fee.amount.denom == config.denom


def test_simulation_rejected(config, signer, transport):
    transport.simulate_code = 5
    msg = codec.store_code_msg(signer.address(config.prefix), b"\0asm")

    with pytest.raises(SimulationFailedError) as exc_info:
        simulate_gas(transport, config, msg, signer, ACCOUNT, TxOptions())

    assert exc_info.value.code == 5
    assert "invalid message" in exc_info.value.log


def test_simulation_without_gas_info(config, signer, transport):
    transport.gas_used = None
    msg = codec.store_code_msg(signer.address(config.prefix), b"\0asm")

    with pytest.raises(SimulationFailedError, match="no gas info"):
        simulate_gas(transport, config, msg, signer, ACCOUNT, TxOptions())
