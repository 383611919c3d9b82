"""ABI loading and call data encoding/decoding.

Method lookup, overload resolution and argument encoding are done by a
web3.py contract factory, the same object the rest of the web3 stack uses
for ``contract.functions.X(...)``. This module keeps a private copy of the
ABI for the lifetime of the encoder and maps web3/eth-abi failures to
EncodingError.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple, Union

from eth_abi.exceptions import DecodingError
from eth_utils import abi_to_signature, filter_abi_by_type, get_abi_output_types, to_bytes
from web3 import Web3
from web3._utils.abi import map_abi_data
from web3._utils.normalizers import BASE_RETURN_NORMALIZERS
from web3.exceptions import Web3Exception
from web3.utils.abi import get_abi_element

from .errors import EncodingError

__all__ = ["AbiSource", "load_abi", "CallEncoder"]

AbiSource = Union[str, Path, Sequence[Mapping[str, Any]], Mapping[str, Any]]

_RESOLVE_ERRORS = (Web3Exception, ValueError, TypeError, KeyError)


# ------------------------------------------------------------------
# ABI loading
# ------------------------------------------------------------------

@lru_cache(maxsize=16)
def _read_abi_text(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise EncodingError(f"Cannot read ABI file {path}: {exc}") from exc


def _parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise EncodingError(f"ABI is not valid JSON: {exc}") from exc


def _normalise_abi(abi_definition: Any) -> Tuple[Dict[str, Any], ...]:
    # Compiler artifacts (Foundry, Hardhat, Truffle) wrap the ABI under "abi"
    if isinstance(abi_definition, Mapping) and "abi" in abi_definition:
        abi_definition = abi_definition["abi"]
    if isinstance(abi_definition, (str, bytes)) or not isinstance(abi_definition, Sequence):
        raise EncodingError("Contract ABI must be a list of JSON objects")
    if not all(isinstance(entry, Mapping) for entry in abi_definition):
        raise EncodingError("Contract ABI must be a list of JSON objects")
    return tuple(copy.deepcopy(dict(entry)) for entry in abi_definition)


def load_abi(source: AbiSource) -> Tuple[Dict[str, Any], ...]:
    """Load an ABI from JSON text, a parsed list, an artifact mapping or a file.

    The result never shares objects with ``source`` or with earlier loads
    of the same file.

    Args:
        source: JSON string, ``pathlib.Path`` to a JSON file, list of ABI
            entries, or a compiler artifact with an ``"abi"`` key.

    Returns:
        Tuple of ABI entries

    Raises:
        EncodingError: If the source cannot be parsed into ABI entries
    """
    if isinstance(source, Path):
        return _normalise_abi(_parse_json(_read_abi_text(str(source.expanduser().resolve()))))
    if isinstance(source, str):
        return _normalise_abi(_parse_json(source))
    return _normalise_abi(source)


# ------------------------------------------------------------------
# Encoder
# ------------------------------------------------------------------

class CallEncoder:
    """Encode calls to and decode results from the functions of one ABI."""

    def __init__(self, abi: AbiSource):
        self._abi = list(load_abi(abi))
        # Encoding is local, so the factory needs no provider of its own
        try:
            self._factory = Web3().eth.contract(abi=self._abi)
        except _RESOLVE_ERRORS as exc:
            raise EncodingError(f"Invalid contract ABI: {exc}") from exc

    @property
    def abi(self) -> Tuple[Dict[str, Any], ...]:
        """A copy of the bound ABI; editing it does not affect the encoder."""
        return tuple(copy.deepcopy(self._abi))

    def function_names(self) -> List[str]:
        return sorted({f["name"] for f in filter_abi_by_type("function", self._abi)})

    def find_function(self, method: str, arguments: Sequence[Any] = ()) -> Dict[str, Any]:
        """Resolve ``method`` (a name or a full signature) against the ABI.

        Raises:
            EncodingError: If no function matches, or more than one does
        """
        try:
            entry = get_abi_element(self._abi, method, *arguments, abi_codec=self._factory.w3.codec)
        except _RESOLVE_ERRORS as exc:
            raise EncodingError(f"Cannot resolve {method}: {exc}") from exc
        return copy.deepcopy(entry)

    def encode_call(self, method: str, arguments: Sequence[Any] = ()) -> bytes:
        """Build call data for ``method(*arguments)``.

        Returns:
            Selector followed by the ABI-encoded arguments

        Raises:
            EncodingError: On unknown method or argument mismatch
        """
        try:
            data = self._factory.encode_abi(method, args=list(arguments))
        except _RESOLVE_ERRORS as exc:
            raise EncodingError(f"Cannot encode {method}: {exc}") from exc
        return to_bytes(hexstr=data)

    def decode_output(
        self,
        method: str,
        raw: Union[bytes, str],
        arguments: Sequence[Any] = (),
    ) -> List[Any]:
        """Decode the raw result of calling ``method`` into a list of values.

        Addresses come back checksummed, as from ``contract.functions.X().call()``.

        Args:
            method: Function name or signature
            raw: Bytes (or 0x hex) returned by ``eth_call``
            arguments: The call arguments, used to pick an overload

        Raises:
            EncodingError: If the data is empty or does not match the outputs
        """
        entry = self.find_function(method, list(arguments))
        output_types = get_abi_output_types(entry)
        if not output_types:
            return []

        data = to_bytes(hexstr=raw) if isinstance(raw, str) else bytes(raw)
        signature = abi_to_signature(entry)
        if not data:
            raise EncodingError(f"Empty result for {signature}; is the address a contract on this chain?")
        try:
            values = self._factory.w3.codec.decode(output_types, data)
        except (DecodingError, ValueError) as exc:
            raise EncodingError(f"Cannot decode result of {signature}: {exc}") from exc
        return list(map_abi_data(BASE_RETURN_NORMALIZERS, output_types, values))
