"""Exception hierarchy for the smart contract wrapper.

Every error raised by the package derives from ContractError, which keeps
the human-readable message and an optional dictionary of context details.
Nothing here is retried internally: errors surface to the caller of
``read`` or ``write`` as soon as they happen.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__ = [
    "ContractError",
    "ValidationError",
    "ConfigError",
    "InvalidKeyError",
    "EncodingError",
    "SigningError",
    "RpcError",
]


class ContractError(Exception):
    """Base exception for the smart contract wrapper.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for JSON serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(ContractError):
    """Raised when construction input (address, chain id) is invalid."""


class ConfigError(ContractError):
    """Raised when configuration cannot be loaded."""


class InvalidKeyError(ContractError):
    """Raised when a private key is malformed or outside the curve order."""


class EncodingError(ContractError):
    """Raised when call data cannot be encoded or a result cannot be decoded."""


class SigningError(ContractError):
    """Raised when a transaction envelope cannot be signed."""


class RpcError(ContractError):
    """Raised when the node or the transport fails a request.

    Attributes:
        code: JSON-RPC error code reported by the node, if any.
        data: Raw ``data`` member of the node's error object, if any.
        revert_reason: Decoded ``Error(string)`` reason when ``data`` carries one.
    """

    def __init__(
        self,
        message: str,
        *,
        code: Optional[int] = None,
        data: Any = None,
        revert_reason: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.code = code
        self.data = data
        self.revert_reason = revert_reason

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result.update(code=self.code, data=self.data, revert_reason=self.revert_reason)
        return result
