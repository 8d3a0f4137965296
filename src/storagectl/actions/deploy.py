"""
Deploy - create a new SimpleStorage instance.

Flow:
1. Read the compiled bytecode
2. Fetch the pending nonce, build and sign a creation transaction
3. Submit it and derive the contract address from (sender, nonce)
4. Wait for the receipt, check it names that address and that code exists there
"""

from __future__ import annotations

from loguru import logger

from ..chain.abi import load_bytecode
from ..chain.tx import send_contract_creation
from ..errors import StorageCtlError, VerificationError
from ..session import Session
from .outcomes import ActionFailed, Deployed, Outcome


def deploy(session: Session) -> Outcome:
    settings = session.settings
    try:
        init_code = load_bytecode(settings.bytecode_path)
        sent, address = send_contract_creation(
            session.rpc, session.transactor(), init_code
        )
        logger.info("Deploy tx {} -> {}", sent.tx_hash, address)

        receipt = session.rpc.wait_for_receipt(
            sent.tx_hash, timeout=settings.receipt_timeout
        )
        if not receipt.succeeded:
            raise VerificationError(
                f"Deploy transaction {sent.tx_hash} failed "
                f"(status {receipt.status}, gas used {receipt.gas_used})"
            )

        if receipt.contract_address and receipt.contract_address.lower() != address.lower():
            raise VerificationError(
                f"Deploy transaction {sent.tx_hash} created {receipt.contract_address}, "
                f"expected {address}"
            )

        code = session.rpc.get_code(address)
        if not code:
            raise VerificationError(
                f"No contract code found at {address} (transaction {sent.tx_hash})"
            )
    except StorageCtlError as exc:
        logger.error("Deploy failed: {}", exc)
        return ActionFailed.from_error(exc)
    except TimeoutError as exc:
        logger.error("Deploy failed: {}", exc)
        return ActionFailed(kind="timeout", message=str(exc))

    return Deployed(tx_hash=sent.tx_hash, contract_address=address)
