"""
Broadcast and confirmation.

A transaction is submitted with broadcast-and-wait and checked in two
steps: mempool admission (check phase) first, block inclusion (deliver
phase) second. Either failure is terminal; nothing here retries, since
the account sequence may already have advanced.
"""
import logging
from typing import Optional

from .exceptions import BroadcastRejectedError, ExecutionFailedError
from .models import CommitResult
from .transport.base import ChainTransport

logger = logging.getLogger(__name__)


def confirm(result: CommitResult) -> CommitResult:
    """
    Validate both phases of a commit result.

    Raises:
        BroadcastRejectedError: If the check phase reports a non-zero code
        ExecutionFailedError: If the deliver phase reports a non-zero code
    """
    if not result.check_tx.is_ok:
        logger.debug(f"check_tx failed: code={result.check_tx.code} log={result.check_tx.log}")
        raise BroadcastRejectedError(result.check_tx, tx_hash=result.tx_hash)
    if not result.deliver_tx.is_ok:
        logger.debug(
            f"deliver_tx failed for {result.tx_hash}: code={result.deliver_tx.code} log={result.deliver_tx.log}"
        )
        raise ExecutionFailedError(result.deliver_tx, tx_hash=result.tx_hash)
    return result


def broadcast_and_confirm(
    transport: ChainTransport,
    tx_bytes: bytes,
    timeout: Optional[float] = None,
) -> CommitResult:
    """
    Submit ``tx_bytes`` and block until the chain reports both phases.

    Args:
        transport: Node transport
        tx_bytes: Serialized signed transaction
        timeout: Seconds to wait for block inclusion

    Returns:
        Commit result with both phases OK
    """
    result = transport.broadcast_tx_commit(tx_bytes, timeout=timeout)
    confirm(result)
    logger.info(f"Transaction {result.tx_hash} committed at height {result.height}")
    return result
