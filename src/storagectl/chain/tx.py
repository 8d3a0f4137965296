"""
Transaction Builder - build, sign, and send legacy (EIP-155) transactions.

Uses eth-account for signing and the shared RpcClient for sending.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import rlp
from eth_account.signers.local import LocalAccount
from eth_utils import keccak, to_canonical_address, to_checksum_address
from loguru import logger

from ..errors import SigningError
from ..utils import add_0x
from .rpc import RpcClient


@dataclass(frozen=True)
class Transactor:
    """Authorization context for state-changing calls: key + chain id."""

    account: LocalAccount
    chain_id: int
    gas_limit: int

    @property
    def address(self) -> str:
        return self.account.address


@dataclass(frozen=True)
class SentTransaction:
    tx_hash: str
    nonce: int


def contract_address(sender: str, nonce: int) -> str:
    """Address of a contract created by ``sender`` at ``nonce`` (CREATE)."""
    encoded = rlp.encode([to_canonical_address(sender), nonce])
    return to_checksum_address(keccak(encoded)[12:])


def build_tx(
    rpc: RpcClient,
    transactor: Transactor,
    data: bytes,
    to: Optional[str] = None,
    value: int = 0,
    nonce: Optional[int] = None,
) -> dict[str, Any]:
    """
    Build an unsigned transaction.

    Args:
        rpc: Node client (nonce and gas price lookups)
        transactor: Sender key, chain id, gas limit
        data: Calldata, or init code for a contract creation
        to: Recipient; None for a contract creation
        value: Wei to transfer
        nonce: Explicit nonce (default: pending nonce of the sender)

    Returns:
        Unsigned transaction dict
    """
    if nonce is None:
        nonce = rpc.get_nonce(transactor.address)

    tx: dict[str, Any] = {
        "data": add_0x(data.hex()),
        "value": value,
        "nonce": nonce,
        "gas": transactor.gas_limit,
        "gasPrice": rpc.get_gas_price(),
        "chainId": transactor.chain_id,
    }
    if to is not None:
        tx["to"] = to_checksum_address(to)
    return tx


def sign_and_send(rpc: RpcClient, transactor: Transactor, tx: dict[str, Any]) -> SentTransaction:
    """
    Sign a transaction and submit it. Does not wait for the receipt.

    Raises:
        SigningError: If eth-account rejects the transaction
    """
    try:
        signed = transactor.account.sign_transaction(tx)
    except Exception as exc:  # eth-account surfaces several unrelated types
        raise SigningError(f"Failed to sign transaction: {exc}") from exc

    raw_tx = add_0x(signed.raw_transaction.hex())
    tx_hash = rpc.send_raw_transaction(raw_tx)
    logger.info("Sent transaction {} (nonce {})", tx_hash, tx["nonce"])
    return SentTransaction(tx_hash=tx_hash, nonce=tx["nonce"])


def send_contract_creation(
    rpc: RpcClient,
    transactor: Transactor,
    init_code: bytes,
) -> tuple[SentTransaction, str]:
    """
    Send a contract creation transaction.

    Returns:
        (sent transaction, address the contract will live at)
    """
    nonce = rpc.get_nonce(transactor.address)
    tx = build_tx(rpc, transactor, init_code, to=None, nonce=nonce)
    sent = sign_and_send(rpc, transactor, tx)
    return sent, contract_address(transactor.address, nonce)
