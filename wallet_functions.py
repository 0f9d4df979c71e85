import random
import re
import time
from typing import Optional

import requests
from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import ValidationError
from mnemonic import Mnemonic
from web3 import Web3
from web3.middleware import ExtraDataToPOAMiddleware

from settings import CONNECT_ATTEMPTS, ConfigError

ETH_DERIVATION_PATH = "m/44'/60'/0'/0/0"

Account.enable_unaudited_hdwallet_features()


def check_wallet_data(wallet_data: str):
    words = wallet_data.split()

    if len(words) in [12, 15, 18, 21, 24]:
        mnemo = Mnemonic("english")
        if all(word in mnemo.wordlist for word in words):
            return "seed"

    if re.fullmatch(r"^(0x)?[0-9a-fA-F]{64}$", wallet_data):
        return "private_key"

    return None


def load_account(wallet_data: str) -> LocalAccount:
    """Build the signing account from a hex private key or a BIP-39 seed phrase."""
    wallet_data = wallet_data.strip()
    type_wallet_data = check_wallet_data(wallet_data)

    try:
        if type_wallet_data == "seed":
            return Account.from_mnemonic(" ".join(wallet_data.split()), account_path=ETH_DERIVATION_PATH)
        if type_wallet_data == "private_key":
            return Account.from_key(wallet_data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"PRIVATE_KEY is not a usable key: {e}")

    raise ConfigError("PRIVATE_KEY must be a 64-hex-digit private key or a seed phrase")


def masked_wallet(address):
    if address and len(address) >= 10:
        return f"{address[:6]}...{address[-4:]}"
    return address


def web3_connect(rpc_url: str, proxy: Optional[str] = None, attempts: int = CONNECT_ATTEMPTS) -> Web3:
    for attempt in range(1, attempts + 1):
        if proxy is not None:
            session = requests.Session()
            session.proxies.update({
                "http": proxy,
                "https": proxy
            })
            provider = Web3.HTTPProvider(rpc_url, session=session, request_kwargs={"timeout": 60})
        else:
            provider = Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": 60})

        web3 = Web3(provider)
        web3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

        if web3.is_connected():
            return web3

        if attempt < attempts:
            time.sleep(random.randint(1, 3))

    raise ConnectionError(f"Could not connect to {rpc_url} after {attempts} attempts")
