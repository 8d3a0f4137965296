"""
Error taxonomy for storagectl.

Every failure raised by the chain, wallet and config layers derives from
``StorageCtlError``.  The class-level ``exit_code`` is what the CLI exits
with when the error happens during startup.
"""

from __future__ import annotations

from typing import Any, Optional


class StorageCtlError(RuntimeError):
    exit_code: int = 1
    kind: str = "error"


class ConnectionFailedError(StorageCtlError):
    """The ledger node could not be reached."""

    exit_code = 2
    kind = "connection"


class KeyMaterialError(StorageCtlError):
    """Missing or malformed private key."""

    exit_code = 3
    kind = "key"


class RpcError(StorageCtlError):
    """The node answered with a JSON-RPC error object."""

    exit_code = 4
    kind = "rpc"

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        data: Any = None,
        method: Optional[str] = None,
    ) -> None:
        self.code = code
        self.data = data
        self.method = method
        prefix = f"{method}: " if method else ""
        suffix = f" (code {code})" if code is not None else ""
        super().__init__(f"{prefix}{message}{suffix}")


class SigningError(StorageCtlError):
    exit_code = 5
    kind = "signing"


class VerificationError(StorageCtlError):
    """No contract code was found at the address computed after a deploy."""

    exit_code = 6
    kind = "verification"


class InvalidAddressError(StorageCtlError, ValueError):
    exit_code = 7
    kind = "input"


class ConfigError(StorageCtlError, ValueError):
    exit_code = 8
    kind = "config"


class BytecodeError(StorageCtlError):
    exit_code = 9
    kind = "bytecode"
