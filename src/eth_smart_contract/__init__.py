import logging

from .config import ContractConfig
from .constants import (
    ABI_SELECTOR_LENGTH,
    ABI_WORD_LENGTH,
    DEFAULT_GAS_LIMIT,
    DEFAULT_TIMEOUT_SECONDS,
    MAX_UINT256,
    REVERT_SELECTOR,
    SECP256K1_N,
)
from .contract import SmartContract, build_web3, create, create_from_config
from .encoder import CallEncoder, load_abi
from .errors import (
    ConfigError,
    ContractError,
    EncodingError,
    InvalidKeyError,
    RpcError,
    SigningError,
    ValidationError,
)
from .gateway import RpcGateway, decode_revert_reason
from .keys import (
    normalize_private_key,
    private_key_to_address,
    private_key_to_public_key,
    public_key_to_address,
)
from .nonce import NonceResolver
from .serialized import SerializedWriter
from .transaction import (
    SignedTransaction,
    TransactionEnvelope,
    build_envelope,
    sign_envelope,
    to_hex_quantity,
    to_quantity,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Facade
    "SmartContract",
    "SerializedWriter",
    "build_web3",
    "create",
    "create_from_config",
    # Config
    "ContractConfig",
    # Pipeline
    "CallEncoder",
    "load_abi",
    "NonceResolver",
    "RpcGateway",
    "decode_revert_reason",
    "TransactionEnvelope",
    "SignedTransaction",
    "build_envelope",
    "sign_envelope",
    "to_quantity",
    "to_hex_quantity",
    # Keys
    "normalize_private_key",
    "private_key_to_public_key",
    "public_key_to_address",
    "private_key_to_address",
    # Errors
    "ContractError",
    "ValidationError",
    "ConfigError",
    "InvalidKeyError",
    "EncodingError",
    "SigningError",
    "RpcError",
    # Constants
    "ABI_SELECTOR_LENGTH",
    "ABI_WORD_LENGTH",
    "REVERT_SELECTOR",
    "DEFAULT_GAS_LIMIT",
    "DEFAULT_TIMEOUT_SECONDS",
    "MAX_UINT256",
    "SECP256K1_N",
]
