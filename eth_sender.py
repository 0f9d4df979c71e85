import math
import time
from decimal import Decimal
from typing import Callable, Optional

from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.exceptions import TransactionNotFound

from models import SendStatus
from settings import GAS_LIMIT, RECEIPT_POLL_INTERVAL, RECEIPT_TIMEOUT
from utils import logger
from wallet_functions import masked_wallet


class TransactionSender:
	"""Builds, signs and submits one native transfer, then waits for its receipt.

	`send` never raises: every failure is logged and reported as
	SendStatus.FAILED so the caller's loop keeps going.
	"""

	def __init__(self, web3: Web3, account: LocalAccount, chain_id: int,
				 receipt_timeout: int = RECEIPT_TIMEOUT, poll_interval: int = RECEIPT_POLL_INTERVAL,
				 sleep: Callable[[float], None] = time.sleep):
		self.web3 = web3
		self.account = account
		self.chain_id = chain_id
		self.receipt_timeout = receipt_timeout
		self.poll_interval = poll_interval
		self.sleep = sleep
		self.wallet_masked = masked_wallet(account.address)

	def build_transaction(self, to_address: str, amount: str, gas_price: str, nonce: int):
		return {
			"nonce": nonce,
			"to": Web3.to_checksum_address(to_address),
			"value": Web3.to_wei(Decimal(amount.strip()), "ether"),
			"gas": GAS_LIMIT,
			"gasPrice": Web3.to_wei(Decimal(gas_price.strip()), "gwei"),
			"chainId": self.chain_id,
		}

	def send(self, to_address: str, amount: str, gas_price: str, nonce: int) -> SendStatus:
		logger.info(f"[ {self.wallet_masked} ] | nonce {nonce} | Sending {amount} to {to_address}")
		try:
			transaction = self.build_transaction(to_address, amount, gas_price, nonce)
			signed_tx = self.account.sign_transaction(transaction)
			tx_hash = self.web3.eth.send_raw_transaction(signed_tx.raw_transaction)
			tx_id = Web3.to_hex(tx_hash)
		except Exception as e:
			logger.error(f"[ {self.wallet_masked} ] | nonce {nonce} | Error sending to {to_address}: {e}")
			return SendStatus.FAILED

		logger.info(f"[ {self.wallet_masked} ] | nonce {nonce} | Transaction sent! Hash: {tx_id}")
		logger.info(f"[ {self.wallet_masked} ] | nonce {nonce} | Waiting for confirmation...")

		try:
			receipt = self.wait_for_receipt(tx_id)
			status = receipt.get("status") if receipt is not None else None
		except Exception as e:
			logger.error(f"[ {self.wallet_masked} ] | nonce {nonce} | Error checking {tx_id}: {e}")
			return SendStatus.UNCONFIRMED

		if status == 1:
			logger.success(f"[ {self.wallet_masked} ] | nonce {nonce} | Transaction confirmed: {tx_id}")
			return SendStatus.CONFIRMED

		if status == 0:
			logger.error(f"[ {self.wallet_masked} ] | nonce {nonce} | Transaction reverted: {tx_id}")
		elif receipt is not None:
			logger.warning(f"[ {self.wallet_masked} ] | nonce {nonce} | Receipt has no status: {tx_id}")
		else:
			logger.warning(f"[ {self.wallet_masked} ] | nonce {nonce} | Transaction not yet confirmed: {tx_id}")
		return SendStatus.UNCONFIRMED

	def wait_for_receipt(self, tx_id: str) -> Optional[dict]:
		"""Poll for the receipt of `tx_id`; None if it does not show up within the timeout."""
		attempts = 0
		max_attempts = max(1, math.ceil(self.receipt_timeout / self.poll_interval))
		last_error = None

		while attempts < max_attempts:
			attempts += 1
			try:
				return self.web3.eth.get_transaction_receipt(tx_id)
			except TransactionNotFound:
				pass
			except Exception as e:
				last_error = e
				logger.debug(f"Checking transaction: {tx_id} - attempt {attempts}. Error: {e}")
				if attempts % 6 == 0:
					logger.warning(f"Checking transaction: {tx_id} - attempt {attempts}. Error: {e}")

			if attempts < max_attempts:
				self.sleep(self.poll_interval)

		if last_error is not None:
			logger.error(f"Could not get receipt for {tx_id} after {attempts} attempts. Last error: {last_error}")
		return None
