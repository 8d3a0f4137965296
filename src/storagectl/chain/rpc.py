"""
JSON-RPC client for an Ethereum-compatible node.

Lightweight alternative to web3.py: a single httpx.Client is opened at
startup and reused for every request made during the session.
"""

from __future__ import annotations

import itertools
import time
from dataclasses import dataclass
from typing import Any, Optional

import httpx
from loguru import logger

from ..errors import ConnectionFailedError, RpcError
from ..utils import hex_to_int


@dataclass(frozen=True)
class Receipt:
    tx_hash: str
    status: int
    gas_used: int
    block_number: Optional[int] = None
    contract_address: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == 1

    @classmethod
    def from_rpc(cls, data: dict[str, Any]) -> "Receipt":
        block = data.get("blockNumber")
        return cls(
            tx_hash=data["transactionHash"],
            status=hex_to_int(data.get("status") or "0x0"),
            gas_used=hex_to_int(data.get("gasUsed") or "0x0"),
            block_number=hex_to_int(block) if block else None,
            contract_address=data.get("contractAddress"),
        )


class RpcClient:
    """
    JSON-RPC over HTTP.

    Args:
        url: Node endpoint (e.g. http://localhost:8545)
        timeout: Per-request timeout in seconds
        transport: Optional httpx transport (tests plug a simulated node here)
    """

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.url = url
        self._ids = itertools.count(1)
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def __enter__(self) -> "RpcClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def call(self, method: str, params: Optional[list] = None) -> Any:
        """
        Make a JSON-RPC call.

        Returns:
            Result field from the RPC response

        Raises:
            ConnectionFailedError: If the node cannot be reached
            RpcError: If the node returns an error object or a bad response
        """
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params or [],
            "id": next(self._ids),
        }
        logger.debug("rpc -> {} {}", method, payload["params"])

        try:
            response = self._client.post(self.url, json=payload)
            response.raise_for_status()
        except httpx.TransportError as exc:
            raise ConnectionFailedError(
                f"Failed to reach node at {self.url}: {exc}"
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise RpcError(
                f"HTTP {exc.response.status_code} from {self.url}", method=method
            ) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise RpcError("Node returned a non-JSON response", method=method) from exc

        if "error" in data:
            error = data["error"] or {}
            raise RpcError(
                str(error.get("message", error)),
                code=error.get("code"),
                data=error.get("data"),
                method=method,
            )

        result = data.get("result")
        logger.debug("rpc <- {} {}", method, result)
        return result

    # ---- Reads ----

    def chain_id(self) -> int:
        return hex_to_int(self.call("eth_chainId"))

    def ping(self) -> int:
        """Check connectivity. Returns the chain id reported by the node."""
        return self.chain_id()

    def get_nonce(self, address: str, block: str = "pending") -> int:
        """Transaction count for ``address``; pending by default."""
        return hex_to_int(self.call("eth_getTransactionCount", [address, block]))

    def get_code(self, address: str, block: str = "latest") -> bytes:
        result = self.call("eth_getCode", [address, block]) or "0x"
        return bytes.fromhex(result[2:] if result.startswith("0x") else result)

    def get_gas_price(self) -> int:
        return hex_to_int(self.call("eth_gasPrice"))

    def get_receipt(self, tx_hash: str) -> Optional[Receipt]:
        """Receipt for ``tx_hash``, or None while the transaction is pending."""
        result = self.call("eth_getTransactionReceipt", [tx_hash])
        if result is None:
            return None
        return Receipt.from_rpc(result)

    def eth_call(self, to: str, data: str, block: str = "latest") -> str:
        return self.call("eth_call", [{"to": to, "data": data}, block]) or "0x"

    # ---- Writes ----

    def send_raw_transaction(self, raw_tx: str) -> str:
        """Submit a 0x-prefixed signed transaction. Returns the tx hash."""
        return self.call("eth_sendRawTransaction", [raw_tx])

    def wait_for_receipt(
        self,
        tx_hash: str,
        timeout: float = 60.0,
        poll_interval: float = 1.0,
    ) -> Receipt:
        """
        Poll until the transaction is mined.

        Raises:
            TimeoutError: If receipt not found within timeout
        """
        start = time.monotonic()
        while True:
            receipt = self.get_receipt(tx_hash)
            if receipt is not None:
                return receipt
            if time.monotonic() - start >= timeout:
                break
            time.sleep(poll_interval)

        raise TimeoutError(f"Transaction {tx_hash} not confirmed within {timeout}s")
