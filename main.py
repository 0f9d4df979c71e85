import argparse
import sys
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from address_source import read_addresses
from batch_dispatcher import BatchDispatcher
from eth_sender import TransactionSender
from settings import ConfigError, load_settings
from utils import logger, logging_setup
from wallet_functions import load_account, masked_wallet, web3_connect


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
	parser = argparse.ArgumentParser(
		description="Send a fixed native-coin amount to every address in a file, looping with a local nonce."
	)
	parser.add_argument("--file", help="path to the address file (one address per line)")
	parser.add_argument("--amount", help="amount to send to each address, in ether")
	parser.add_argument("--gas-price", help="gas price in gwei")
	parser.add_argument("--loops", help="how many times to go over the address list")
	return parser.parse_args(argv)


def prompt_question(answer: Optional[str], query: str) -> str:
	if answer is not None:
		return answer.strip()
	return input(query).strip()


def main(argv: Optional[List[str]] = None) -> int:
	args = parse_args(argv)
	load_dotenv(find_dotenv(usecwd=True))

	try:
		settings = load_settings()
	except ConfigError as e:
		logging_setup()
		logger.error(f"Error: {e}")
		return 1

	logging_setup(settings.log_level)

	try:
		account = load_account(settings.private_key)
	except ConfigError as e:
		logger.error(f"Error: {e}")
		return 1

	wallet_masked = masked_wallet(account.address)
	logger.info(f"[ {wallet_masked} ] | Sender account loaded")

	try:
		file_path = prompt_question(args.file, "Enter the path to the address file (e.g., addresses.txt): ")
		try:
			recipients = read_addresses(file_path)
		except (OSError, UnicodeDecodeError) as e:
			logger.error(f"Error reading address file: {e}")
			return 1

		if not recipients:
			logger.error("Error: No valid addresses found in the file.")
			return 1

		logger.info(f"Loaded {len(recipients)} addresses from file")

		amount = prompt_question(args.amount, "Enter the amount to send: ")
		gas_price = prompt_question(args.gas_price, "Enter the gas price in Gwei (e.g., 20): ")
		loops = prompt_question(args.loops, "Enter how many times to repeat (loop count): ")

		try:
			loop_count = int(loops)
		except ValueError:
			logger.error(f"Error: loop count must be a whole number, got {loops!r}")
			return 1
		if loop_count < 1:
			logger.error("Error: loop count must be at least 1")
			return 1

		try:
			web3 = web3_connect(settings.rpc_url, settings.proxy)
		except ConnectionError as e:
			logger.error(f"Error: {e}")
			return 1

		try:
			chain_id = settings.chain_id if settings.chain_id is not None else web3.eth.chain_id
			sender = TransactionSender(web3, account, chain_id, receipt_timeout=settings.receipt_timeout)
			BatchDispatcher(web3, account, sender).run(recipients, amount, gas_price, loop_count)
		except Exception as e:
			logger.error(f"[ {wallet_masked} ] | Could not query the node: {e}")
			return 1

	except KeyboardInterrupt:
		logger.warning("Interrupted, exiting.")
		return 130

	return 0


if __name__ == "__main__":
	sys.exit(main())
