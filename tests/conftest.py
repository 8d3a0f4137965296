"""
Shared fixtures: an in-memory JSON-RPC node that understands just enough
of Ethereum to exercise storagectl end to end.

The node decodes signed legacy transactions with rlp, recovers the sender
with eth-account, and emulates SimpleStorage (set/get on one slot).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import httpx
import pytest
import rlp
from eth_abi import decode, encode
from eth_account import Account
from eth_utils import keccak, to_checksum_address
from loguru import logger

from storagectl.chain.tx import contract_address
from storagectl.config import Settings
from storagectl.session import Session

# Well-known local dev-chain account #0
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

CHAIN_ID = 1337
RUNTIME_CODE = bytes.fromhex("6080604052348015600f57600080fd5b50")
SET_SELECTOR = keccak(text="set(uint256)")[:4]
GET_SELECTOR = keccak(text="get()")[:4]

DEPLOY_GAS = 125_000
SET_GAS = 43_500
REVERT_GAS = 21_000


class SimulatedNode:
    def __init__(self, chain_id: int = CHAIN_ID) -> None:
        self.chain_id = chain_id
        self.automine = True
        self.deploy_empty_code = False
        self.reported_contract_address: Optional[str] = None
        self.errors: dict[str, dict[str, Any]] = {}
        self.calls: list[str] = []
        self.nonces: dict[str, int] = {}
        self.code: dict[str, bytes] = {}
        self.storage: dict[str, int] = {}
        self.receipts: dict[str, dict[str, Any]] = {}
        self.sent: list[dict[str, Any]] = []
        self.block = 0
        self.transport = httpx.MockTransport(self._handle)

    # ---- helpers for tests ----

    def add_receipt(self, tx_hash: str, status: int, gas_used: int) -> None:
        self.block += 1
        self.receipts[tx_hash.lower()] = {
            "transactionHash": tx_hash,
            "status": hex(status),
            "gasUsed": hex(gas_used),
            "blockNumber": hex(self.block),
            "contractAddress": None,
        }

    def fail(self, method: str, message: str = "boom", code: int = -32000) -> None:
        self.errors[method] = {"code": code, "message": message}

    # ---- transport ----

    def _handle(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        method = payload["method"]
        self.calls.append(method)

        if method in self.errors:
            body = {"jsonrpc": "2.0", "id": payload["id"], "error": self.errors[method]}
            return httpx.Response(200, json=body)

        handler = getattr(self, "_" + method, None)
        if handler is None:
            error = {"code": -32601, "message": f"method {method} not found"}
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], "error": error})

        result = handler(*payload["params"])
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], "result": result})

    # ---- JSON-RPC methods ----

    def _eth_chainId(self) -> str:
        return hex(self.chain_id)

    def _eth_gasPrice(self) -> str:
        return hex(1_000_000_000)

    def _eth_getTransactionCount(self, address: str, block: str) -> str:
        return hex(self.nonces.get(address.lower(), 0))

    def _eth_getCode(self, address: str, block: str) -> str:
        return "0x" + self.code.get(address.lower(), b"").hex()

    def _eth_getTransactionReceipt(self, tx_hash: str) -> Optional[dict[str, Any]]:
        return self.receipts.get(tx_hash.lower())

    def _eth_call(self, call: dict[str, Any], block: str) -> str:
        to = call["to"].lower()
        data = bytes.fromhex(call["data"][2:])
        if not self.code.get(to):
            return "0x"
        if data[:4] == GET_SELECTOR:
            return "0x" + encode(["uint256"], [self.storage.get(to, 0)]).hex()
        return "0x"

    def _eth_sendRawTransaction(self, raw_tx: str) -> str:
        raw = bytes.fromhex(raw_tx[2:])
        nonce, gas_price, gas, to, value, data, v, r, s = rlp.decode(raw)
        sender = Account.recover_transaction(raw_tx)
        tx_hash = "0x" + keccak(raw).hex()
        nonce = int.from_bytes(nonce, "big")

        self.sent.append(
            {
                "hash": tx_hash,
                "from": sender,
                "to": to_checksum_address(to) if to else None,
                "nonce": nonce,
                "gas": int.from_bytes(gas, "big"),
                "data": data,
                "v": int.from_bytes(v, "big"),
            }
        )
        self.nonces[sender.lower()] = nonce + 1

        if not self.automine:
            return tx_hash

        if not to:
            created = contract_address(sender, nonce)
            self.code[created.lower()] = b"" if self.deploy_empty_code else RUNTIME_CODE
            self.add_receipt(tx_hash, 1, DEPLOY_GAS)
            self.receipts[tx_hash.lower()]["contractAddress"] = (
                self.reported_contract_address or created.lower()
            )
            return tx_hash

        target = to_checksum_address(to).lower()
        if self.code.get(target) and data[:4] == SET_SELECTOR:
            (self.storage[target],) = decode(["uint256"], data[4:])
            self.add_receipt(tx_hash, 1, SET_GAS)
        else:
            self.add_receipt(tx_hash, 0, REVERT_GAS)
        return tx_hash


@pytest.fixture()
def node() -> SimulatedNode:
    return SimulatedNode()


@pytest.fixture()
def bytecode_file(tmp_path: Path) -> Path:
    path = tmp_path / "SimpleStorage.bin"
    path.write_text("608060405234801561001057600080fd5b50\n", encoding="utf-8")
    return path


@pytest.fixture()
def settings(bytecode_file: Path) -> Settings:
    return Settings(
        rpc_url="http://node.test:8545",
        private_key=TEST_PRIVATE_KEY,
        bytecode_path=bytecode_file,
        receipt_timeout=0,
    )


@pytest.fixture()
def session(settings: Settings, node: SimulatedNode):
    with Session.open(settings, transport=node.transport) as opened:
        yield opened


@pytest.fixture(autouse=True)
def _reset_loguru():
    """Drop sinks added by the CLI so later tests do not write to closed streams."""
    yield
    logger.remove()
