"""Smart contract wrapper for Python.

This module provides the SmartContract class, which binds one contract
address, its ABI and a chain id to a web3.py connection and exposes two
operations:

- ``read``: ABI-encode a call, run ``eth_call`` and decode the result
- ``write``: derive the sender from a private key, resolve its pending
  nonce, encode the call, sign a zero-value transaction locally and
  broadcast it

Example:
    >>> from eth_smart_contract import create
    >>> token = create("https://rpc.example.org", 1, "0x...", abi_json)
    >>> token.read("balanceOf", ["0x..."])
    [100]
    >>> tx_hash = token.write(
    ...     "transfer",
    ...     ["0x...", 10],
    ...     private_key="0x...",
    ...     gas_price="20000000000",
    ... )
"""
import logging
from typing import Any, List, Optional, Sequence, Union

from web3 import Web3
from web3.providers import BaseProvider

from .config import ContractConfig, parse_int
from .constants import DEFAULT_GAS_LIMIT, DEFAULT_TIMEOUT_SECONDS
from .encoder import AbiSource, CallEncoder
from .errors import ConfigError, ValidationError
from .gateway import RpcGateway
from .keys import PrivateKeyLike, private_key_to_address
from .nonce import NonceResolver
from .transaction import Quantity, TransactionEnvelope, build_envelope, sign_envelope

__all__ = ["SmartContract", "build_web3", "create", "create_from_config"]

logger = logging.getLogger(__name__)


def _validate_address(address: str, field: str = "address") -> str:
    if not isinstance(address, str) or not Web3.is_address(address):
        raise ValidationError(f"{field} must be a valid Ethereum address")
    return Web3.to_checksum_address(address)


def _validate_chain_id(chain_id: Union[int, str]) -> int:
    try:
        value = parse_int(chain_id, "chain_id")
    except ConfigError as exc:
        raise ValidationError(exc.message) from None
    if value < 0:
        raise ValidationError("chain_id must be non-negative")
    return value


class SmartContract:
    """One deployed contract on one chain, read and written through web3.py."""

    def __init__(
        self,
        web3: Web3,
        chain_id: Union[int, str],
        address: str,
        abi: AbiSource,
        *,
        default_gas_limit: Quantity = DEFAULT_GAS_LIMIT,
    ):
        self._chain_id = _validate_chain_id(chain_id)
        self._address = _validate_address(address)
        self._encoder = CallEncoder(abi)
        self.default_gas_limit = default_gas_limit
        self.gateway = RpcGateway(web3)
        self.nonces = NonceResolver(self.gateway)

    def __repr__(self) -> str:
        return f"SmartContract(chain_id={self._chain_id}, address={self._address!r})"

    @property
    def chain_id(self) -> int:
        return self._chain_id

    @property
    def address(self) -> str:
        return self._address

    @property
    def abi(self):
        return self._encoder.abi

    @property
    def encoder(self) -> CallEncoder:
        return self._encoder

    # ------------------------------------------------------------------
    # Query / read
    # ------------------------------------------------------------------
    def read(self, method: str, arguments: Sequence[Any] = ()) -> List[Any]:
        """Query the contract without changing state.

        Args:
            method: Function name (or full signature for overloads)
            arguments: Positional arguments, in ABI order

        Returns:
            Decoded return values, in the order of the ABI outputs

        Raises:
            EncodingError: If arguments or the result do not match the ABI
            RpcError: If the node or transport fails
        """
        arguments = list(arguments)
        data = self._encoder.encode_call(method, arguments)
        raw = self.gateway.call(self._address, data)
        return self._encoder.decode_output(method, raw, arguments)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------
    def build_transaction(
        self,
        method: str,
        arguments: Sequence[Any],
        private_key: PrivateKeyLike,
        gas_price: Quantity,
        gas_limit: Optional[Quantity] = None,
        *,
        nonce: Optional[int] = None,
    ) -> TransactionEnvelope:
        """Build the unsigned envelope that ``write`` would sign.

        The nonce is fetched from the node (pending count) unless given.

        Raises:
            InvalidKeyError: If the private key is malformed
            EncodingError: If arguments do not match the ABI
            SigningError: If a numeric field is out of range
            RpcError: If the nonce lookup fails
        """
        sender = private_key_to_address(private_key)
        if nonce is None:
            nonce = self.nonces.resolve(sender)
        data = self._encoder.encode_call(method, list(arguments))
        return build_envelope(
            from_address=sender,
            to=self._address,
            chain_id=self._chain_id,
            nonce=nonce,
            gas_price=gas_price,
            gas_limit=self.default_gas_limit if gas_limit is None else gas_limit,
            data=data,
        )

    def write(
        self,
        method: str,
        arguments: Sequence[Any],
        private_key: PrivateKeyLike,
        gas_price: Quantity,
        gas_limit: Optional[Quantity] = None,
        *,
        nonce: Optional[int] = None,
    ) -> str:
        """Sign and broadcast a call to ``method`` as a transaction.

        Not idempotent: every call submits a new transaction. The returned
        hash identifies the submission only; inclusion is not awaited.

        Args:
            method: Function name (or full signature for overloads)
            arguments: Positional arguments, in ABI order
            private_key: Signing key, used for this call only
            gas_price: Gas price in wei (int, decimal or 0x hex string)
            gas_limit: Gas limit, 800000 unless overridden
            nonce: Explicit nonce; the pending count is used when omitted

        Returns:
            Transaction hash (0x hex) as reported by the node

        Raises:
            InvalidKeyError, EncodingError, SigningError, RpcError
        """
        envelope = self.build_transaction(method, arguments, private_key, gas_price, gas_limit, nonce=nonce)
        signed = sign_envelope(envelope, private_key)
        tx_hash = self.gateway.send_raw(signed.raw_transaction)
        logger.info(
            "Submitted %s to %s from=%s nonce=%d hash=%s",
            method,
            self._address,
            envelope.from_address,
            envelope.nonce,
            tx_hash,
        )
        return tx_hash


# ------------------------------------------------------------------
# Factories
# ------------------------------------------------------------------

def build_web3(host: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> Web3:
    """Create a Web3 instance over HTTP with a request timeout in seconds."""
    return Web3(Web3.HTTPProvider(host, request_kwargs={"timeout": timeout}))


def create(
    transport: Union[str, BaseProvider, Web3],
    chain_id: Union[int, str],
    address: str,
    abi: AbiSource,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> SmartContract:
    """Create a SmartContract from a host URL, a provider or a Web3 instance.

    ``timeout`` only applies when ``transport`` is a host URL.
    """
    if isinstance(transport, str):
        web3 = build_web3(transport, timeout)
    elif isinstance(transport, BaseProvider):
        web3 = Web3(transport)
    else:
        web3 = transport
    return SmartContract(web3, chain_id, address, abi)


def create_from_config(config: ContractConfig, web3: Optional[Web3] = None) -> SmartContract:
    return SmartContract(
        web3 or build_web3(config.rpc_url, config.timeout),
        config.chain_id,
        config.address,
        config.abi,
        default_gas_limit=config.gas_limit,
    )
