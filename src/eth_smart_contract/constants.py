"""Constants for the smart contract wrapper.

This module defines the constant values shared across the package,
including ABI encoding sizes, secp256k1 bounds, gas defaults and
provider settings.
"""

# ABI Encoding Constants
ABI_SELECTOR_LENGTH = 4
ABI_WORD_LENGTH = 32
REVERT_SELECTOR = "0x08c379a0"

# Key / Address Constants
PRIVATE_KEY_LENGTH = 32
PUBLIC_KEY_LENGTH = 64
ADDRESS_LENGTH = 20
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

# Gas Constants
DEFAULT_GAS_LIMIT = 800_000
MAX_UINT256 = 2**256 - 1

# Network Constants
DEFAULT_TIMEOUT_SECONDS = 1.0
PENDING_BLOCK = "pending"
LATEST_BLOCK = "latest"

__all__ = [
    "ABI_SELECTOR_LENGTH",
    "ABI_WORD_LENGTH",
    "REVERT_SELECTOR",
    "PRIVATE_KEY_LENGTH",
    "PUBLIC_KEY_LENGTH",
    "ADDRESS_LENGTH",
    "SECP256K1_N",
    "DEFAULT_GAS_LIMIT",
    "MAX_UINT256",
    "DEFAULT_TIMEOUT_SECONDS",
    "PENDING_BLOCK",
    "LATEST_BLOCK",
]
