"""Tests for the JSON-RPC client."""

from __future__ import annotations

import json

import httpx
import pytest

from storagectl.chain.rpc import Receipt, RpcClient
from storagectl.errors import ConnectionFailedError, RpcError

from .conftest import CHAIN_ID, TEST_ADDRESS, SimulatedNode


@pytest.fixture()
def rpc(node: SimulatedNode):
    with RpcClient("http://node.test:8545", transport=node.transport) as client:
        yield client


class TestReads:
    def test_chain_id(self, rpc: RpcClient) -> None:
        assert rpc.chain_id() == CHAIN_ID
        assert rpc.ping() == CHAIN_ID

    def test_nonce_defaults_to_zero(self, rpc: RpcClient, node: SimulatedNode) -> None:
        assert rpc.get_nonce(TEST_ADDRESS) == 0
        node.nonces[TEST_ADDRESS.lower()] = 5
        assert rpc.get_nonce(TEST_ADDRESS) == 5

    def test_empty_code(self, rpc: RpcClient) -> None:
        assert rpc.get_code(TEST_ADDRESS) == b""

    def test_missing_receipt_is_none(self, rpc: RpcClient) -> None:
        assert rpc.get_receipt("0x" + "ab" * 32) is None

    def test_receipt_parsed(self, rpc: RpcClient, node: SimulatedNode) -> None:
        tx_hash = "0x" + "cd" * 32
        node.add_receipt(tx_hash, status=0, gas_used=21_000)

        receipt = rpc.get_receipt(tx_hash)
        assert receipt == Receipt(tx_hash=tx_hash, status=0, gas_used=21_000, block_number=1)
        assert not receipt.succeeded

    def test_request_ids_increase(self) -> None:
        seen: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            payload = json.loads(request.content)
            seen.append(payload["id"])
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], "result": "0x1"})

        with RpcClient("http://x", transport=httpx.MockTransport(handler)) as client:
            client.chain_id()
            client.chain_id()
        assert seen == [1, 2]


class TestErrors:
    def test_rpc_error_object(self, rpc: RpcClient, node: SimulatedNode) -> None:
        node.fail("eth_getTransactionCount", "header not found", code=-32000)

        with pytest.raises(RpcError) as info:
            rpc.get_nonce(TEST_ADDRESS)
        assert info.value.code == -32000
        assert info.value.method == "eth_getTransactionCount"
        assert "header not found" in str(info.value)

    def test_unreachable_node(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with RpcClient("http://down:8545", transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(ConnectionFailedError, match="down:8545"):
                client.ping()

    def test_http_error_status(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(502, text="bad gateway"))
        with RpcClient("http://x", transport=transport) as client:
            with pytest.raises(RpcError, match="HTTP 502"):
                client.chain_id()

    def test_non_json_body(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>"))
        with RpcClient("http://x", transport=transport) as client:
            with pytest.raises(RpcError, match="non-JSON"):
                client.chain_id()


class TestWaitForReceipt:
    def test_returns_existing_receipt(self, rpc: RpcClient, node: SimulatedNode) -> None:
        tx_hash = "0x" + "01" * 32
        node.add_receipt(tx_hash, status=1, gas_used=50_000)
        assert rpc.wait_for_receipt(tx_hash, timeout=0).gas_used == 50_000

    def test_times_out(self, rpc: RpcClient) -> None:
        with pytest.raises(TimeoutError):
            rpc.wait_for_receipt("0x" + "02" * 32, timeout=0)
