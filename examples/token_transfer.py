#!/usr/bin/env python3
"""
Token Transfer Example

Reads an ERC20 balance and submits a transfer through a single
SmartContract instance configured from the environment:

  ETH_RPC_URL, ETH_CHAIN_ID, ETH_CONTRACT_ADDRESS, ETH_CONTRACT_ABI
  PRIVATE_KEY, RECIPIENT, AMOUNT, GAS_PRICE (wei)

Run with: python examples/token_transfer.py
"""

import logging
import os
import sys

from eth_smart_contract import ContractConfig, ContractError, create_from_config, private_key_to_address


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    private_key = os.environ["PRIVATE_KEY"]
    recipient = os.environ["RECIPIENT"]

    try:
        token = create_from_config(ContractConfig.from_env())
        sender = private_key_to_address(private_key)

        (balance,) = token.read("balanceOf", [sender])
        print(f"Sender {sender} balance: {balance}")

        tx_hash = token.write(
            "transfer",
            [recipient, int(os.environ.get("AMOUNT", "1"))],
            private_key=private_key,
            gas_price=os.environ["GAS_PRICE"],
        )
    except ContractError as exc:
        print(f"Failed: {exc}", file=sys.stderr)
        return 1

    print(f"Submitted: {tx_hash}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
