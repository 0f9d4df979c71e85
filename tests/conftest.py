import pytest
from eth_account import Account

# Well-known development key and the mnemonic it derives from (m/44'/60'/0'/0/0).
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_MNEMONIC = "test test test test test test test test test test test junk"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

RECIPIENT_A = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
RECIPIENT_B = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"


@pytest.fixture
def account():
    return Account.from_key(TEST_PRIVATE_KEY)
