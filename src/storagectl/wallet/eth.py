"""
ECDSA / secp256k1 key handling.

The key comes from the PRIVATE_KEY setting (environment or .env file);
there is no built-in default key.

Dependencies: eth-account (no full web3.py needed)
"""

from __future__ import annotations

from typing import Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount

from ..errors import KeyMaterialError
from ..utils import add_0x, strip_0x


def normalize_private_key(private_key: Optional[str]) -> str:
    """
    Check the shape of a hex private key and return it 0x-prefixed.

    Raises:
        KeyMaterialError: If the key is missing or not 32 bytes of hex
    """
    if not private_key or not private_key.strip():
        raise KeyMaterialError(
            "PRIVATE_KEY not set. Export it or add it to ~/.storagectl/.env"
        )

    body = strip_0x(private_key.strip())
    if len(body) != 64:
        raise KeyMaterialError(
            f"Private key must be 32 bytes (64 hex chars), got {len(body)} chars"
        )
    try:
        bytes.fromhex(body)
    except ValueError:
        raise KeyMaterialError("Private key is not valid hex") from None

    return add_0x(body)


def get_account(private_key: Optional[str]) -> LocalAccount:
    """
    Get an eth-account LocalAccount from a private key.

    Raises:
        KeyMaterialError: If the key is missing, malformed, or out of range
    """
    key = normalize_private_key(private_key)
    try:
        return Account.from_key(key)
    except Exception as exc:  # eth-keys raises its own ValidationError
        raise KeyMaterialError(f"Failed to load private key: {exc}") from exc


def get_address(private_key: Optional[str]) -> str:
    """Checksummed address for a private key."""
    return get_account(private_key).address
