import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

from .constants import DEFAULT_GAS_LIMIT, DEFAULT_TIMEOUT_SECONDS
from .errors import ConfigError

__all__ = ["ContractConfig", "parse_int"]


def parse_int(value: Union[int, str], field: str) -> int:
    """Parse a decimal or 0x hex integer setting."""
    if isinstance(value, bool):
        raise ConfigError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    try:
        return int(text[2:], 16) if text[:2].lower() == "0x" else int(text)
    except ValueError:
        raise ConfigError(f"{field} must be an integer, got {value!r}") from None


@dataclass(frozen=True)
class ContractConfig:
    rpc_url: str
    chain_id: int
    address: str
    abi: Union[str, Path]
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    gas_limit: int = DEFAULT_GAS_LIMIT

    @classmethod
    def from_env(cls, prefix: str = "ETH_", environ: Optional[Mapping[str, str]] = None) -> "ContractConfig":
        """Build a config from ``<prefix>RPC_URL``, ``<prefix>CHAIN_ID``,
        ``<prefix>CONTRACT_ADDRESS`` and ``<prefix>CONTRACT_ABI`` (a JSON file path).

        ``<prefix>RPC_TIMEOUT`` and ``<prefix>GAS_LIMIT`` are optional.
        Private keys are never read from the environment here.
        """
        env = os.environ if environ is None else environ

        def required(name: str) -> str:
            value = env.get(prefix + name)
            if not value:
                raise ConfigError(f"{prefix}{name} is not set")
            return value

        timeout_raw = env.get(prefix + "RPC_TIMEOUT")
        try:
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT_SECONDS
        except ValueError:
            raise ConfigError(f"{prefix}RPC_TIMEOUT must be a number, got {timeout_raw!r}") from None
        if timeout <= 0:
            raise ConfigError(f"{prefix}RPC_TIMEOUT must be positive")

        gas_raw = env.get(prefix + "GAS_LIMIT")
        return cls(
            rpc_url=required("RPC_URL"),
            chain_id=parse_int(required("CHAIN_ID"), prefix + "CHAIN_ID"),
            address=required("CONTRACT_ADDRESS"),
            abi=Path(required("CONTRACT_ABI")),
            timeout=timeout,
            gas_limit=parse_int(gas_raw, prefix + "GAS_LIMIT") if gas_raw else DEFAULT_GAS_LIMIT,
        )
