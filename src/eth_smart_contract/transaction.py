"""Transaction envelope construction and local signing.

Envelopes are legacy (gasPrice) transactions that never move native
currency: ``value`` is always zero. Numeric fields are kept as Python
integers and rendered as 0x hex quantities only in the wire dictionary
handed to the signer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Union

from eth_account import Account
from eth_utils import encode_hex, is_address, to_checksum_address

from .constants import DEFAULT_GAS_LIMIT, MAX_UINT256
from .errors import InvalidKeyError, SigningError
from .keys import PrivateKeyLike, normalize_private_key

__all__ = [
    "Quantity",
    "TransactionEnvelope",
    "SignedTransaction",
    "to_quantity",
    "to_hex_quantity",
    "build_envelope",
    "sign_envelope",
]

Quantity = Union[int, str]


def to_quantity(value: Quantity, field: str = "value") -> int:
    """Parse an integer, decimal string or 0x hex string into an int.

    Floats are refused so that large gas prices never lose precision.

    Raises:
        SigningError: If the value is not an integer, is negative, or does
            not fit in 256 bits
    """
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise SigningError(f"{field} must be an integer or an integer string, got {type(value).__name__}")
    if isinstance(value, str):
        text = value.strip()
        try:
            if text[:2].lower() == "0x":
                parsed = int(text[2:], 16)
            elif text.isdigit():
                parsed = int(text)
            else:
                raise ValueError(text)
        except ValueError:
            raise SigningError(f"{field} is not a valid integer: {value!r}") from None
    else:
        parsed = value
    if parsed < 0:
        raise SigningError(f"{field} must be non-negative")
    if parsed > MAX_UINT256:
        raise SigningError(f"{field} exceeds uint256 range")
    return parsed


def to_hex_quantity(value: int) -> str:
    """Render a non-negative int as a minimal 0x hex quantity (``0`` -> ``0x0``)."""
    return hex(value)


@dataclass(frozen=True)
class TransactionEnvelope:
    from_address: str
    to: str
    chain_id: int
    nonce: int
    gas: int
    gas_price: int
    data: str
    value: int = 0

    def to_wire(self) -> Dict[str, Any]:
        """Return the dictionary signed by ``eth_account``.

        ``chainId`` stays an integer: it selects the EIP-155 ``v`` value.
        """
        return {
            "from": self.from_address,
            "to": self.to,
            "chainId": self.chain_id,
            "nonce": to_hex_quantity(self.nonce),
            "gas": to_hex_quantity(self.gas),
            "gasPrice": to_hex_quantity(self.gas_price),
            "value": to_hex_quantity(self.value),
            "data": self.data,
        }


@dataclass(frozen=True)
class SignedTransaction:
    raw_transaction: str
    hash: str
    envelope: TransactionEnvelope


def _checksum(address: str, field: str) -> str:
    if not isinstance(address, str) or not is_address(address):
        raise SigningError(f"{field} must be a valid Ethereum address")
    return to_checksum_address(address)


def build_envelope(
    from_address: str,
    to: str,
    chain_id: int,
    nonce: Quantity,
    gas_price: Quantity,
    gas_limit: Quantity = DEFAULT_GAS_LIMIT,
    data: Union[bytes, str] = b"",
) -> TransactionEnvelope:
    """Assemble a zero-value contract call envelope.

    Args:
        from_address: Sender address derived from the signing key
        to: Contract address
        chain_id: Target chain id
        nonce: Sender's next nonce
        gas_price: Gas price in wei; there is no default
        gas_limit: Gas limit (default 800000)
        data: Call data as bytes or 0x hex

    Raises:
        SigningError: If an address is invalid or a numeric field is out of range
    """
    if isinstance(data, (bytes, bytearray)):
        data_hex = encode_hex(bytes(data))
    elif isinstance(data, str) and data[:2].lower() == "0x":
        data_hex = data
    else:
        raise SigningError("data must be bytes or a 0x-prefixed hex string")

    return TransactionEnvelope(
        from_address=_checksum(from_address, "from"),
        to=_checksum(to, "to"),
        chain_id=to_quantity(chain_id, "chain_id"),
        nonce=to_quantity(nonce, "nonce"),
        gas=to_quantity(gas_limit, "gas"),
        gas_price=to_quantity(gas_price, "gas_price"),
        data=data_hex,
    )


def sign_envelope(envelope: TransactionEnvelope, private_key: PrivateKeyLike) -> SignedTransaction:
    """Sign an envelope with ``private_key``; no network access.

    Returns:
        SignedTransaction with the 0x hex raw transaction and its hash

    Raises:
        SigningError: If the key is invalid, does not control
            ``envelope.from_address``, or a field is rejected by the signer
    """
    try:
        key_bytes = normalize_private_key(private_key)
    except InvalidKeyError as exc:
        raise SigningError(exc.message) from None

    try:
        signed = Account.sign_transaction(envelope.to_wire(), key_bytes)
    except Exception as exc:
        # Sanitize signer errors to prevent key leakage in stack traces
        raise SigningError(f"Cannot sign transaction: {exc}") from None

    return SignedTransaction(
        raw_transaction=encode_hex(signed.raw_transaction),
        hash=encode_hex(signed.hash),
        envelope=envelope,
    )
