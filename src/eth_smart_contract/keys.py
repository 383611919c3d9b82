"""Private key handling and account address derivation.

The address of an account is the last 20 bytes of the keccak-256 hash of
its uncompressed secp256k1 public key. Everything here is pure: no I/O,
and key material never ends up in exception messages.
"""

from __future__ import annotations

from typing import Union

from eth_keys import keys
from eth_keys.exceptions import ValidationError as EthKeysValidationError
from eth_utils import keccak, to_checksum_address

from .constants import ADDRESS_LENGTH, PRIVATE_KEY_LENGTH, PUBLIC_KEY_LENGTH, SECP256K1_N
from .errors import InvalidKeyError

__all__ = [
    "PrivateKeyLike",
    "normalize_private_key",
    "private_key_to_public_key",
    "public_key_to_address",
    "private_key_to_address",
]

PrivateKeyLike = Union[str, bytes, bytearray]


def normalize_private_key(private_key: PrivateKeyLike) -> bytes:
    """Return the 32 raw bytes of a private key.

    Args:
        private_key: Raw bytes, or a hex string with or without ``0x``.

    Raises:
        InvalidKeyError: If the key is not 32 bytes or is not a valid
            secp256k1 scalar (``0 < k < n``).
    """
    if isinstance(private_key, str):
        hex_str = private_key[2:] if private_key[:2].lower() == "0x" else private_key
        if len(hex_str) != PRIVATE_KEY_LENGTH * 2:
            raise InvalidKeyError("Private key must be 32 bytes (key not shown for security)")
        try:
            key_bytes = bytes.fromhex(hex_str)
        except ValueError:
            raise InvalidKeyError("Private key must be hex encoded (key not shown for security)") from None
    elif isinstance(private_key, (bytes, bytearray)):
        key_bytes = bytes(private_key)
    else:
        raise InvalidKeyError("Private key must be a hex string or bytes")

    if len(key_bytes) != PRIVATE_KEY_LENGTH:
        raise InvalidKeyError("Private key must be 32 bytes (key not shown for security)")

    scalar = int.from_bytes(key_bytes, "big")
    if not 0 < scalar < SECP256K1_N:
        raise InvalidKeyError("Private key is not a valid secp256k1 scalar")
    return key_bytes


def private_key_to_public_key(private_key: PrivateKeyLike) -> bytes:
    """Derive the 64-byte uncompressed public key (without the 0x04 prefix)."""
    key_bytes = normalize_private_key(private_key)
    try:
        return keys.PrivateKey(key_bytes).public_key.to_bytes()
    except EthKeysValidationError:
        raise InvalidKeyError("Private key rejected by secp256k1 backend") from None


def public_key_to_address(public_key: Union[bytes, bytearray]) -> str:
    """Hash a public key into its EIP-55 checksummed account address.

    Accepts the 64-byte form or the 65-byte SEC1 form starting with 0x04.
    """
    pub = bytes(public_key)
    if len(pub) == PUBLIC_KEY_LENGTH + 1 and pub[0] == 0x04:
        pub = pub[1:]
    if len(pub) != PUBLIC_KEY_LENGTH:
        raise InvalidKeyError(f"Public key must be {PUBLIC_KEY_LENGTH} bytes, got {len(pub)}")
    return to_checksum_address(keccak(pub)[-ADDRESS_LENGTH:])


def private_key_to_address(private_key: PrivateKeyLike) -> str:
    """Derive the checksummed account address controlled by ``private_key``.

    Example:
        >>> private_key_to_address(
        ...     "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
        ... )
        '0x2c7536E3605D9C16a7a3D7b1898e529396a65c23'
    """
    return public_key_to_address(private_key_to_public_key(private_key))
