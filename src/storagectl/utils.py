from __future__ import annotations

from eth_utils import is_hex_address, to_checksum_address

from .errors import InvalidAddressError


def strip_0x(value: str) -> str:
    return value[2:] if value[:2] in ("0x", "0X") else value


def add_0x(value: str) -> str:
    return value if value[:2] in ("0x", "0X") else "0x" + value


def parse_address(text: str) -> str:
    """Validate a 0x-prefixed 20-byte hex address and return its EIP-55 form.

    Mixed-case input is accepted as-is; the checksum is not enforced.
    """
    candidate = text.strip()
    if not is_hex_address(candidate):
        raise InvalidAddressError(f"Invalid contract address: {text!r}")
    return to_checksum_address(candidate)


def hex_to_int(value: str) -> int:
    """Decode a JSON-RPC quantity (``"0x1a"``) to an int."""
    return int(value, 16)
