"""Check a transaction's receipt."""

from __future__ import annotations

from loguru import logger

from ..errors import StorageCtlError
from ..session import Session
from .outcomes import ActionFailed, Outcome, TxFailed, TxPending, TxSucceeded


def check_transaction(session: Session, tx_hash: str) -> Outcome:
    """
    Look up the receipt for ``tx_hash``.

    The hash is passed to the node as typed (whitespace stripped); a
    malformed hash surfaces as the node's own error.
    """
    tx_hash = tx_hash.strip()
    try:
        receipt = session.rpc.get_receipt(tx_hash)
    except StorageCtlError as exc:
        logger.error("Failed to get transaction receipt: {}", exc)
        return ActionFailed.from_error(exc)

    if receipt is None:
        return TxPending(tx_hash=tx_hash)
    if not receipt.succeeded:
        return TxFailed(tx_hash=tx_hash, status=receipt.status, gas_used=receipt.gas_used)
    return TxSucceeded(
        tx_hash=tx_hash, gas_used=receipt.gas_used, block_number=receipt.block_number
    )
