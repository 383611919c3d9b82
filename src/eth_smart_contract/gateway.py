"""Single-shot JSON-RPC interactions with the node.

The gateway wraps the three node calls the wrapper needs (``eth_call``,
``eth_sendRawTransaction`` and ``eth_getTransactionCount``). Each is one
blocking request/response through web3.py; any failure, whether raised by
the transport or reported by the node, is re-raised as RpcError from the
call that issued it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional, Tuple, Union

from eth_abi import decode
from eth_abi.exceptions import DecodingError
from eth_utils import encode_hex, to_bytes, to_checksum_address

from .constants import ABI_SELECTOR_LENGTH, LATEST_BLOCK, PENDING_BLOCK, REVERT_SELECTOR
from .errors import RpcError

__all__ = ["RpcGateway", "decode_revert_reason"]

logger = logging.getLogger(__name__)


def decode_revert_reason(raw: Any) -> Optional[str]:
    """Decode a Solidity ``Error(string)`` revert reason from error data.

    Args:
        raw: Hex-encoded error data string

    Returns:
        Decoded revert reason string, or None if decoding fails
    """
    if not isinstance(raw, str) or not raw.startswith(REVERT_SELECTOR):
        return None
    try:
        (reason,) = decode(["string"], to_bytes(hexstr=raw)[ABI_SELECTOR_LENGTH:])
    except (DecodingError, ValueError):
        return None
    return reason


def _error_fields(exc: Exception) -> Tuple[str, Optional[int], Any]:
    """Extract (message, code, data) from a web3/provider exception."""
    payload: Any = None
    rpc_response = getattr(exc, "rpc_response", None)
    if isinstance(rpc_response, Mapping):
        payload = rpc_response.get("error")
    if payload is None and exc.args and isinstance(exc.args[0], Mapping):
        payload = exc.args[0]

    if isinstance(payload, Mapping):
        message = payload.get("message") or payload.get("reason") or str(exc)
        code = payload.get("code")
        data = payload.get("data")
    else:
        message = getattr(exc, "message", None) or str(exc) or exc.__class__.__name__
        code = None
        data = getattr(exc, "data", None)
    return str(message), code if isinstance(code, int) else None, data


def _to_rpc_error(method: str, exc: Exception) -> RpcError:
    message, code, data = _error_fields(exc)
    reason = decode_revert_reason(data)
    logger.debug("%s failed: %s", method, message)
    return RpcError(
        f"{message} (revert reason: {reason})" if reason and reason not in message else message,
        code=code,
        data=data,
        revert_reason=reason,
        details={"method": method, "exception": exc.__class__.__name__},
    )


class RpcGateway:
    """Send read calls and raw transactions through a ``Web3`` instance."""

    def __init__(self, web3):
        self.w3 = web3

    def call(self, to: str, data: Union[bytes, str], block_identifier: Any = LATEST_BLOCK) -> bytes:
        """Execute ``eth_call`` against ``to`` and return the raw result bytes."""
        if isinstance(data, (bytes, bytearray)):
            data = encode_hex(bytes(data))
        logger.debug("eth_call to=%s block=%s", to, block_identifier)
        try:
            result = self.w3.eth.call({"to": to, "data": data}, block_identifier)
        except Exception as exc:
            raise _to_rpc_error("eth_call", exc) from exc
        if isinstance(result, str):
            return to_bytes(hexstr=result)
        return bytes(result)

    def send_raw(self, raw_transaction: str) -> str:
        """Broadcast a signed transaction and return the node's hash as 0x hex."""
        logger.debug("eth_sendRawTransaction")
        try:
            tx_hash = self.w3.eth.send_raw_transaction(raw_transaction)
        except Exception as exc:
            raise _to_rpc_error("eth_sendRawTransaction", exc) from exc
        if isinstance(tx_hash, str):
            return tx_hash
        return encode_hex(bytes(tx_hash))

    def get_transaction_count(self, address: str, block_identifier: Any = PENDING_BLOCK) -> int:
        """Return the number of transactions sent from ``address``."""
        logger.debug("eth_getTransactionCount address=%s block=%s", address, block_identifier)
        try:
            count = self.w3.eth.get_transaction_count(to_checksum_address(address), block_identifier)
        except Exception as exc:
            raise _to_rpc_error("eth_getTransactionCount", exc) from exc
        if isinstance(count, str) and count[:2].lower() == "0x":
            try:
                count = int(count, 16)
            except ValueError:
                pass
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise RpcError(
                f"Node returned an invalid transaction count: {count!r}",
                details={"method": "eth_getTransactionCount"},
            )
        return count
