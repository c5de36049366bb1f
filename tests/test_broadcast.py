"""
Tests for broadcast and two-phase confirmation.
"""
import logging
from unittest.mock import MagicMock, PropertyMock

import pytest

from wasmtx_sdk.broadcast import broadcast_and_confirm, confirm
from wasmtx_sdk.exceptions import BroadcastRejectedError, ExecutionFailedError
from wasmtx_sdk.models import TxPhaseResult
from tests.test_helpers import FakeTransport, make_commit, store_code_events


def test_confirm_success():
    commit = make_commit(store_code_events())
    assert confirm(commit) is commit


def test_check_failure_raises_rejected():
    commit = make_commit(store_code_events(), check_code=13)

    with pytest.raises(BroadcastRejectedError) as exc_info:
        confirm(commit)

    assert exc_info.value.result.code == 13
    assert exc_info.value.tx_hash == commit.tx_hash


def test_check_failure_never_reads_deliver_phase():
    result = MagicMock()
    result.check_tx = TxPhaseResult(code=19, log="tx already in mempool")
    deliver = PropertyMock()
    type(result).deliver_tx = deliver

    with pytest.raises(BroadcastRejectedError):
        confirm(result)

    deliver.assert_not_called()


def test_deliver_failure_raises_execution_failed():
    commit = make_commit(deliver_code=11)

    with pytest.raises(ExecutionFailedError) as exc_info:
        confirm(commit)

    assert exc_info.value.result.log == "out of gas"
    assert "deliver_tx failed" in str(exc_info.value)


def test_broadcast_passes_timeout():
    transport = FakeTransport()

    result = broadcast_and_confirm(transport, b"signed-tx", timeout=12.5)

    assert result.height == 100
    assert transport.broadcasts == [(b"signed-tx", 12.5)]


def test_broadcast_is_not_retried():
    transport = FakeTransport(commit=make_commit(check_code=32))

    with pytest.raises(BroadcastRejectedError):
        broadcast_and_confirm(transport, b"signed-tx")

    assert len(transport.broadcasts) == 1


def test_stage_failures_logged_below_error(caplog):
    """The client logs the terminal failure; the stage only leaves a debug trace"""
    with caplog.at_level(logging.DEBUG, logger="wasmtx_sdk.broadcast"):
        with pytest.raises(BroadcastRejectedError):
            confirm(make_commit(check_code=13))
        with pytest.raises(ExecutionFailedError):
            confirm(make_commit(deliver_code=11))

    records = [r for r in caplog.records if r.name == "wasmtx_sdk.broadcast"]
    assert len(records) == 2
    assert all(r.levelno == logging.DEBUG for r in records)
