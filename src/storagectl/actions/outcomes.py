"""
Action outcomes.

Every outcome knows how to report itself.  ``ok`` is False for outcomes
that describe something that went wrong; the menu loop keeps running
either way.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import click

from ..errors import StorageCtlError


class Outcome:
    ok: bool = True

    def lines(self) -> list[str]:
        raise NotImplementedError

    def report(self) -> None:
        color = None if self.ok else "red"
        for line in self.lines():
            click.secho(line, fg=color)


@dataclass(frozen=True)
class Deployed(Outcome):
    tx_hash: str
    contract_address: str

    def lines(self) -> list[str]:
        return [
            "Contract deployed !!",
            f"Transaction hash: {self.tx_hash}",
            f"Contract address: {self.contract_address}",
        ]


@dataclass(frozen=True)
class TxPending(Outcome):
    tx_hash: str
    ok = False

    def lines(self) -> list[str]:
        return [f"Transaction is still pending: {self.tx_hash}"]


@dataclass(frozen=True)
class TxFailed(Outcome):
    tx_hash: str
    status: int
    gas_used: int
    ok = False

    def lines(self) -> list[str]:
        return [
            f"Gas used: {self.gas_used}",
            f"Transaction failed - status: {self.status}",
        ]


@dataclass(frozen=True)
class TxSucceeded(Outcome):
    tx_hash: str
    gas_used: int
    block_number: Optional[int] = None

    def lines(self) -> list[str]:
        lines = ["Transaction succeeded"]
        if self.block_number is not None:
            lines.append(f"Mined in block: {self.block_number}")
        lines.append(f"Gas used: {self.gas_used}")
        return lines


@dataclass(frozen=True)
class ValueSet(Outcome):
    tx_hash: str
    contract_address: str
    value: int

    def lines(self) -> list[str]:
        return [f"Transaction sent: {self.tx_hash}"]


@dataclass(frozen=True)
class ValueRead(Outcome):
    contract_address: str
    value: int

    def lines(self) -> list[str]:
        return [f"Stored value is: {self.value}"]


@dataclass(frozen=True)
class InvalidInput(Outcome):
    message: str
    ok = False

    def lines(self) -> list[str]:
        return [self.message]


@dataclass(frozen=True)
class ActionFailed(Outcome):
    kind: str
    message: str
    ok = False

    @classmethod
    def from_error(cls, exc: StorageCtlError) -> "ActionFailed":
        return cls(kind=exc.kind, message=str(exc))

    def lines(self) -> list[str]:
        return [f"ERROR ({self.kind}): {self.message}"]
