"""In-process serialization of writes sharing a signing key.

A bare SmartContract reads the pending nonce at call time with no locking,
so two threads writing from the same key can pick the same nonce. The
SerializedWriter runs each write under a lock and remembers the last nonce
it used per sender, handing out ``max(pending, last + 1)``.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional, Sequence

from .contract import SmartContract
from .keys import PrivateKeyLike, private_key_to_address
from .transaction import Quantity

__all__ = ["SerializedWriter"]

logger = logging.getLogger(__name__)


class SerializedWriter:
    def __init__(self, contract: SmartContract):
        self.contract = contract
        self._lock = threading.Lock()
        self._next_nonce: Dict[str, int] = {}

    def write(
        self,
        method: str,
        arguments: Sequence[Any],
        private_key: PrivateKeyLike,
        gas_price: Quantity,
        gas_limit: Optional[Quantity] = None,
    ) -> str:
        """Same contract as ``SmartContract.write``, serialized per process.

        A nonce is only consumed when the node accepts the transaction.
        """
        sender = private_key_to_address(private_key)
        with self._lock:
            pending = self.contract.nonces.resolve(sender)
            nonce = max(pending, self._next_nonce.get(sender, 0))
            if nonce != pending:
                logger.debug("Using tracked nonce %d for %s (pending=%d)", nonce, sender, pending)
            tx_hash = self.contract.write(method, arguments, private_key, gas_price, gas_limit, nonce=nonce)
            self._next_nonce[sender] = nonce + 1
            return tx_hash

    def reset(self, address: Optional[str] = None) -> None:
        """Forget tracked nonces for ``address`` (or every sender)."""
        with self._lock:
            if address is None:
                self._next_nonce.clear()
            else:
                for known in list(self._next_nonce):
                    if known.lower() == address.lower():
                        del self._next_nonce[known]
