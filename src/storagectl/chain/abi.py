"""
ABI and bytecode handling for the SimpleStorage contract.

The ABI is small and fixed, so it lives here rather than in a build
artifact.  Bytecode is read from the solc ``--bin`` output file.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from eth_abi import decode, encode
from eth_utils import keccak

from ..errors import BytecodeError
from ..utils import strip_0x

SIMPLE_STORAGE_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "set",
        "inputs": [{"name": "x", "type": "uint256"}],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "get",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
    },
]


def _find_function(abi: list, function_name: str) -> dict[str, Any]:
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == function_name:
            return entry
    raise ValueError(f"Function {function_name} not found in ABI")


@lru_cache(maxsize=32)
def selector(signature: str) -> bytes:
    """First 4 bytes of keccak256 of a canonical signature, e.g. ``set(uint256)``."""
    # NOTE: Keccak-256 != SHA3-256 (NIST). Never use hashlib.sha3_256 here.
    return keccak(text=signature)[:4]


def function_signature(abi: list, function_name: str) -> str:
    func = _find_function(abi, function_name)
    input_types = [inp["type"] for inp in func.get("inputs", [])]
    return f"{function_name}({','.join(input_types)})"


def encode_call(abi: list, function_name: str, args: list) -> str:
    """ABI-encode a function call to 0x-prefixed hex calldata."""
    func = _find_function(abi, function_name)
    input_types = [inp["type"] for inp in func.get("inputs", [])]
    if len(args) != len(input_types):
        raise ValueError(
            f"{function_name} expects {len(input_types)} args, got {len(args)}"
        )

    sig = selector(function_signature(abi, function_name))
    encoded_args = encode(input_types, args) if args else b""
    return "0x" + sig.hex() + encoded_args.hex()


def decode_result(abi: list, function_name: str, data: str) -> Any:
    """
    ABI-decode a function call result.

    Returns:
        Decoded result (single value or tuple), or None for no outputs
    """
    func = _find_function(abi, function_name)
    output_types = [out["type"] for out in func.get("outputs", [])]
    if not output_types:
        return None

    decoded = decode(output_types, bytes.fromhex(strip_0x(data)))
    if len(decoded) == 1:
        return decoded[0]
    return decoded


def parse_bytecode(text: str) -> bytes:
    """Parse solc ``--bin`` output: hex text, optional 0x, whitespace ignored."""
    body = strip_0x("".join(text.split()))
    if not body:
        raise BytecodeError("Bytecode is empty")
    try:
        return bytes.fromhex(body)
    except ValueError:
        raise BytecodeError("Bytecode is not valid hex") from None


def load_bytecode(path: Path) -> bytes:
    """
    Load deployment bytecode from a ``.bin`` file.

    Raises:
        BytecodeError: If the file is missing, unreadable, or not hex
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise BytecodeError(f"Failed to read contract bytecode {path}: {exc}") from exc
    return parse_bytecode(text)
