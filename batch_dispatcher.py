import time
from typing import Callable, Sequence

from eth_account.signers.local import LocalAccount
from web3 import Web3

from eth_sender import TransactionSender
from models import BatchReport, LoopPlan, NonceCounter, SendStatus, TransferRequest
from settings import LOOP_INTERVAL
from utils import logger
from wallet_functions import masked_wallet


class BatchDispatcher:
	"""Drives loop_count x recipients transfers from one account, strictly one at a time.

	The starting nonce is read from the node once; after that the local
	counter is the only source of nonces and advances after every attempt,
	failed ones included, since the node's count only moves on inclusion.
	"""

	def __init__(self, web3: Web3, account: LocalAccount, sender: TransactionSender,
				 loop_interval: float = LOOP_INTERVAL, sleep: Callable[[float], None] = time.sleep):
		self.web3 = web3
		self.account = account
		self.sender = sender
		self.loop_interval = loop_interval
		self.sleep = sleep
		self.wallet_masked = masked_wallet(account.address)

	def run(self, recipients: Sequence[str], amount: str, gas_price: str, loop_count: int) -> BatchReport:
		plan = LoopPlan(recipients=tuple(recipients), loop_count=loop_count)

		nonce = NonceCounter(self.web3.eth.get_transaction_count(self.account.address))
		report = BatchReport(start_nonce=nonce.value)
		logger.info(f"[ {self.wallet_masked} ] | Starting nonce {nonce.value}, "
					f"{plan.total_transactions} transactions planned")

		for i in range(plan.loop_count):
			logger.info(f"[Loop {i + 1}/{plan.loop_count}]")

			for recipient in plan.recipients:
				request = TransferRequest(to_address=recipient, amount=amount, gas_price=gas_price,
										  nonce=nonce.value)
				status = self.sender.send(request.to_address, request.amount, request.gas_price, request.nonce)
				report.record(request, status)
				nonce.advance()

			if i < plan.loop_count - 1:
				logger.info(f"Waiting for {self.loop_interval} seconds before the next loop...")
				self.sleep(self.loop_interval)

		logger.success(
			f"All transactions completed! Confirmed: {report.count(SendStatus.CONFIRMED)}, "
			f"unconfirmed: {report.count(SendStatus.UNCONFIRMED)}, failed: {report.count(SendStatus.FAILED)}"
		)
		return report
