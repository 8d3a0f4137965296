"""SET / GET on a deployed SimpleStorage."""

from __future__ import annotations

from typing import Optional

from loguru import logger

from ..chain.contract import SimpleStorage
from ..errors import InvalidAddressError, StorageCtlError
from ..session import Session
from .outcomes import ActionFailed, InvalidInput, Outcome, ValueRead, ValueSet


def _load(session: Session, address_text: str) -> SimpleStorage:
    # Address validation happens here, before any RPC traffic.
    instance = SimpleStorage(address_text, session.rpc)
    logger.debug("Contract instance is loaded: {!r}", instance)
    return instance


def set_value(session: Session, address_text: str, value: Optional[int] = None) -> Outcome:
    """
    Send ``set(value)``; value defaults to the configured set value.

    Only the submission is awaited, not the receipt.
    """
    if value is None:
        value = session.settings.set_value
    try:
        instance = _load(session, address_text)
    except InvalidAddressError as exc:
        return InvalidInput(message=str(exc))

    try:
        sent = instance.set(session.transactor(), value)
    except StorageCtlError as exc:
        logger.error("Failed to call contract method: {}", exc)
        return ActionFailed.from_error(exc)

    return ValueSet(tx_hash=sent.tx_hash, contract_address=instance.address, value=value)


def get_value(session: Session, address_text: str) -> Outcome:
    try:
        instance = _load(session, address_text)
    except InvalidAddressError as exc:
        return InvalidInput(message=str(exc))

    try:
        value = instance.get()
    except StorageCtlError as exc:
        logger.error("Failed to retrieve stored value: {}", exc)
        return ActionFailed.from_error(exc)

    return ValueRead(contract_address=instance.address, value=value)
