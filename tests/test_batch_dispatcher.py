"""
Tests for the batch dispatch loop: ordering, nonce accounting and pacing.
"""

from unittest.mock import MagicMock

import pytest

from batch_dispatcher import BatchDispatcher
from conftest import RECIPIENT_A, RECIPIENT_B
from eth_sender import TransactionSender
from models import LoopPlan, NonceCounter, SendStatus

START_NONCE = 7


class RecordingSender:
    def __init__(self, outcomes=None):
        self.calls = []
        self._outcomes = list(outcomes or [])

    def send(self, to_address, amount, gas_price, nonce):
        self.calls.append((to_address, nonce))
        if self._outcomes:
            return self._outcomes.pop(0)
        return SendStatus.CONFIRMED


@pytest.fixture
def web3():
    web3 = MagicMock()
    web3.eth.get_transaction_count.return_value = START_NONCE
    return web3


def _dispatch(web3, account, sender, recipients, loop_count):
    sleeps = []
    dispatcher = BatchDispatcher(web3, account, sender, loop_interval=60, sleep=sleeps.append)
    report = dispatcher.run(recipients, "0.01", "20", loop_count)
    return report, sleeps


def test_nonce_sequence_for_two_recipients_two_loops(web3, account):
    sender = RecordingSender()
    report, sleeps = _dispatch(web3, account, sender, [RECIPIENT_A, RECIPIENT_B], 2)

    assert sender.calls == [
        (RECIPIENT_A, START_NONCE),
        (RECIPIENT_B, START_NONCE + 1),
        (RECIPIENT_A, START_NONCE + 2),
        (RECIPIENT_B, START_NONCE + 3),
    ]
    assert report.start_nonce == START_NONCE
    assert report.nonces == [START_NONCE, START_NONCE + 1, START_NONCE + 2, START_NONCE + 3]
    assert sleeps == [60]


@pytest.mark.parametrize("recipient_count, loop_count", [(1, 1), (3, 1), (1, 4), (3, 3)])
def test_attempts_all_planned_transfers_in_order(web3, account, recipient_count, loop_count):
    recipients = [f"0x{i:040x}" for i in range(recipient_count)]
    sender = RecordingSender()
    report, sleeps = _dispatch(web3, account, sender, recipients, loop_count)

    assert [to for to, _ in sender.calls] == recipients * loop_count
    assert [nonce for _, nonce in sender.calls] == list(
        range(START_NONCE, START_NONCE + recipient_count * loop_count)
    )
    assert len(report.attempts) == recipient_count * loop_count
    assert len(sleeps) == loop_count - 1


def test_starting_nonce_queried_once(web3, account):
    _dispatch(web3, account, RecordingSender(), [RECIPIENT_A, RECIPIENT_B], 3)
    web3.eth.get_transaction_count.assert_called_once_with(account.address)


def test_failures_consume_nonce_and_do_not_stop_batch(web3, account):
    sender = RecordingSender([SendStatus.FAILED, SendStatus.UNCONFIRMED, SendStatus.FAILED])
    report, _ = _dispatch(web3, account, sender, [RECIPIENT_A, RECIPIENT_B], 2)

    assert [nonce for _, nonce in sender.calls] == [7, 8, 9, 10]
    assert report.count(SendStatus.FAILED) == 2
    assert report.count(SendStatus.UNCONFIRMED) == 1
    assert report.count(SendStatus.CONFIRMED) == 1


@pytest.mark.parametrize("recipients, loop_count", [([], 1), ([RECIPIENT_A], 0)])
def test_invalid_plan_rejected_before_contacting_node(web3, account, recipients, loop_count):
    sender = RecordingSender()
    with pytest.raises(ValueError):
        _dispatch(web3, account, sender, recipients, loop_count)
    web3.eth.get_transaction_count.assert_not_called()
    assert sender.calls == []


def test_malformed_amount_fails_every_transfer(web3, account):
    sender = TransactionSender(web3, account, chain_id=1, sleep=lambda _: None)
    dispatcher = BatchDispatcher(web3, account, sender, sleep=lambda _: None)

    report = dispatcher.run([RECIPIENT_A, RECIPIENT_B], "lots", "20", 2)

    assert report.count(SendStatus.FAILED) == 4
    assert report.nonces == [7, 8, 9, 10]
    web3.eth.send_raw_transaction.assert_not_called()


def test_loop_plan_total():
    assert LoopPlan(recipients=(RECIPIENT_A, RECIPIENT_B), loop_count=3).total_transactions == 6


def test_nonce_counter_only_moves_forward():
    counter = NonceCounter(4)
    assert counter.advance() == 5
    assert counter.advance() == 6
    assert counter.value == 6
