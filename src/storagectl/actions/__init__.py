"""
Actions - one module per menu entry.

Each action takes the open Session and returns an Outcome; none of them
exits the process.
"""

from .check import check_transaction
from .deploy import deploy
from .outcomes import (
    ActionFailed,
    Deployed,
    InvalidInput,
    Outcome,
    TxFailed,
    TxPending,
    TxSucceeded,
    ValueRead,
    ValueSet,
)
from .storage import get_value, set_value

__all__ = [
    "ActionFailed",
    "Deployed",
    "InvalidInput",
    "Outcome",
    "TxFailed",
    "TxPending",
    "TxSucceeded",
    "ValueRead",
    "ValueSet",
    "check_transaction",
    "deploy",
    "get_value",
    "set_value",
]
