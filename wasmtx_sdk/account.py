"""
Account resolution.

Account number and sequence are fetched fresh before every transaction and
never cached: each committed transaction consumes a sequence number, so a
stale value produces a signature the chain rejects.
"""
import logging

from . import codec
from .exceptions import AccountNotFoundError
from .models import Account
from .transport.base import ChainTransport

logger = logging.getLogger(__name__)


def resolve_account(transport: ChainTransport, address: str) -> Account:
    """
    Fetch the current account number and sequence for ``address``.

    Args:
        transport: Node transport
        address: bech32 address of the signer

    Returns:
        Account snapshot

    Raises:
        AccountNotFoundError: If the chain has no record of the address
        TransportError: If the query could not be performed
    """
    response = transport.abci_query(codec.ACCOUNT_QUERY_PATH, codec.encode_account_query(address))
    if not response.is_ok:
        logger.error(f"Account query for {address} failed: code={response.code} log={response.log}")
        raise AccountNotFoundError(address, code=response.code, log=response.log)
    if not response.value:
        raise AccountNotFoundError(address)

    account = codec.decode_account(address, response.value)
    logger.debug(
        f"Resolved account {address}: account_number={account.account_number} sequence={account.sequence}"
    )
    return account
