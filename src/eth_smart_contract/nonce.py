"""Next-nonce lookup for a sending account.

The count is always taken against the ``pending`` block so that writes
issued in quick succession from one key see each other's transactions.
There is no locking: two concurrent writers may still read the same value
(see ``serialized.SerializedWriter`` for an in-process guard).
"""

from __future__ import annotations

import logging

from .constants import PENDING_BLOCK
from .gateway import RpcGateway

__all__ = ["NonceResolver"]

logger = logging.getLogger(__name__)


class NonceResolver:
    def __init__(self, gateway: RpcGateway):
        self.gateway = gateway

    def resolve(self, address: str) -> int:
        """Return the next usable nonce for ``address``.

        Raises:
            RpcError: If the node query fails; nothing is retried here
        """
        nonce = self.gateway.get_transaction_count(address, PENDING_BLOCK)
        logger.debug("Resolved pending nonce %d for %s", nonce, address)
        return nonce
