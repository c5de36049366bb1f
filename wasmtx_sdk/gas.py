"""
Gas estimation.

A probe transaction carrying a zero fee and zero gas limit is signed and
sent to the simulate endpoint. The reported gas usage is scaled by the
configured adjustment to get the gas limit, which is then priced:

    gas_limit  = ceil(gas_used * gas_adjustment)
    fee_amount = ceil(gas_limit * gas_price)

Decimal arithmetic keeps both roundings exact for decimal inputs such as
1.3 or 0.025.
"""
import logging
from decimal import ROUND_CEILING, Decimal
from typing import Union

from google.protobuf.message import Message

from . import codec
from .config import ChainConfig
from .exceptions import SimulationFailedError
from .models import Account, Coin, Fee
from .signer import Signer
from .transport.base import ChainTransport
from .tx import TxOptions, build_signed_tx

logger = logging.getLogger(__name__)

Number = Union[int, float, str, Decimal]


def _ceil(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_CEILING))


def compute_fee(gas_used: int, gas_adjustment: Number, gas_price: Number, denom: str) -> Fee:
    """
    Turn a simulated gas usage into a fee.

    Args:
        gas_used: Gas units consumed by the simulation
        gas_adjustment: Multiplier applied to ``gas_used``
        gas_price: Price per gas unit in ``denom``
        denom: Fee denomination

    Returns:
        Fee with ``gas_limit = ceil(gas_used * gas_adjustment)`` and
        ``amount = ceil(gas_limit * gas_price)``
    """
    gas_limit = _ceil(Decimal(gas_used) * Decimal(str(gas_adjustment)))
    amount = _ceil(Decimal(gas_limit) * Decimal(str(gas_price)))
    return Fee(amount=Coin(denom=denom, amount=amount), gas_limit=gas_limit)


def zero_fee(denom: str) -> Fee:
    """Placeholder fee for simulation probes"""
    return Fee(amount=Coin(denom=denom, amount=0), gas_limit=0)


def simulate_gas(
    transport: ChainTransport,
    config: ChainConfig,
    msg: Message,
    signer: Signer,
    account: Account,
    options: TxOptions,
) -> int:
    """
    Dry-run ``msg`` and return the gas units it consumed.

    Raises:
        SimulationFailedError: If the chain rejects the probe or reports no gas usage
    """
    probe = build_signed_tx(config, msg, zero_fee(config.denom), signer, account, options)
    response = transport.abci_query(codec.SIMULATE_PATH, codec.encode_simulate(probe))

    if not response.is_ok:
        logger.error(f"Simulation failed: code={response.code} log={response.log}")
        raise SimulationFailedError(
            f"Simulation rejected (code={response.code}): {response.log}",
            code=response.code,
            log=response.log,
        )

    gas_used = codec.decode_simulate(response.value)
    if gas_used is None:
        raise SimulationFailedError("Simulation response carries no gas info")
    return gas_used


def estimate_fee(
    transport: ChainTransport,
    config: ChainConfig,
    msg: Message,
    signer: Signer,
    account: Account,
    options: TxOptions,
) -> Fee:
    """
    Simulate ``msg`` and price the result with the configured gas parameters.

    Returns:
        Fee to attach to the real transaction
    """
    gas_used = simulate_gas(transport, config, msg, signer, account, options)
    fee = compute_fee(gas_used, config.gas_adjustment, config.gas_price, config.denom)
    logger.debug(f"Simulated gas_used={gas_used}, gas_limit={fee.gas_limit}, fee={fee.amount}")
    return fee
