"""Solana address shape check (base58 alphabet, 32-44 chars). No checksum or on-chain lookup."""

import re

_BASE58_ADDRESS = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")


def is_valid_solana_address(address: str) -> bool:
    return bool(_BASE58_ADDRESS.match(address))
