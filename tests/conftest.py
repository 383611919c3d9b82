"""
Shared fixtures for smart contract wrapper tests.

Provides a stub web3 object exposing only the ``eth`` calls the wrapper
uses, an ERC20-style ABI and a well-known test key.
"""

import json

import pytest

from eth_smart_contract import SmartContract

# Private key for tests (DO NOT USE IN PRODUCTION)
TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
TEST_ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"

CONTRACT_ADDRESS = "0x" + "ab" * 20
RECIPIENT = "0x" + "12" * 20
CHAIN_ID = 1337

ERC20_ABI = [
    {
        "type": "function",
        "name": "balanceOf",
        "stateMutability": "view",
        "inputs": [{"name": "owner", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "type": "function",
        "name": "transfer",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "type": "function",
        "name": "name",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "string"}],
    },
    {
        "type": "function",
        "name": "pause",
        "stateMutability": "nonpayable",
        "inputs": [],
        "outputs": [],
    },
    {
        "type": "event",
        "name": "Transfer",
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "from", "type": "address"},
            {"indexed": True, "name": "to", "type": "address"},
            {"indexed": False, "name": "value", "type": "uint256"},
        ],
    },
]


class StubEth:
    def __init__(self):
        self.call_result = b""
        self.call_error = None
        self.send_error = None
        self.tx_hash = "0x" + "cd" * 32
        self.nonces = [0]
        self.calls = []
        self.sent = []
        self.count_requests = []

    def call(self, tx, block_identifier="latest"):
        self.calls.append((tx, block_identifier))
        if self.call_error:
            raise self.call_error
        return self.call_result

    def send_raw_transaction(self, raw):
        if self.send_error:
            raise self.send_error
        self.sent.append(raw)
        return self.tx_hash

    def get_transaction_count(self, address, block_identifier="latest"):
        self.count_requests.append((address, block_identifier))
        if len(self.nonces) > 1:
            return self.nonces.pop(0)
        return self.nonces[0]


class StubWeb3:
    def __init__(self):
        self.eth = StubEth()


@pytest.fixture()
def web3():
    return StubWeb3()


@pytest.fixture()
def contract(web3):
    return SmartContract(web3, CHAIN_ID, CONTRACT_ADDRESS, json.dumps(ERC20_ABI))
