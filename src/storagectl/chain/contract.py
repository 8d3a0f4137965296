"""Typed wrapper around a deployed SimpleStorage contract."""

from __future__ import annotations

from eth_abi.exceptions import DecodingError
from loguru import logger

from ..errors import VerificationError
from ..utils import parse_address
from .abi import SIMPLE_STORAGE_ABI, decode_result, encode_call
from .rpc import RpcClient
from .tx import SentTransaction, Transactor, build_tx, sign_and_send


class SimpleStorage:
    abi = SIMPLE_STORAGE_ABI

    def __init__(self, address: str, rpc: RpcClient) -> None:
        self.address = parse_address(address)
        self.rpc = rpc

    def __repr__(self) -> str:
        return f"SimpleStorage({self.address})"

    def set(self, transactor: Transactor, value: int) -> SentTransaction:
        """Send ``set(value)``. Returns once the node has accepted the tx."""
        calldata = encode_call(self.abi, "set", [value])
        tx = build_tx(
            self.rpc,
            transactor,
            bytes.fromhex(calldata[2:]),
            to=self.address,
        )
        logger.debug("set({}) on {}", value, self.address)
        return sign_and_send(self.rpc, transactor, tx)

    def get(self) -> int:
        """Read-only call of ``get()`` at the latest block."""
        result = self.rpc.eth_call(self.address, encode_call(self.abi, "get", []))
        if result == "0x":
            raise VerificationError(f"No contract code at {self.address}: get() returned no data")
        try:
            return decode_result(self.abi, "get", result)
        except DecodingError as exc:
            raise VerificationError(f"Unexpected get() return data at {self.address}: {exc}") from exc
