__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Config
    "Settings",
    "load_settings",
    # Session
    "Session",
    # Chain
    "Receipt",
    "RpcClient",
    "SimpleStorage",
    "Transactor",
    "contract_address",
    # Errors
    "StorageCtlError",
    "ConnectionFailedError",
    "KeyMaterialError",
    "RpcError",
    "SigningError",
    "VerificationError",
    "InvalidAddressError",
    "ConfigError",
    "BytecodeError",
]

from .errors import (
    BytecodeError,
    ConfigError,
    ConnectionFailedError,
    InvalidAddressError,
    KeyMaterialError,
    RpcError,
    SigningError,
    StorageCtlError,
    VerificationError,
)
from .config import Settings, load_settings
from .chain.rpc import Receipt, RpcClient
from .chain.tx import Transactor, contract_address
from .chain.contract import SimpleStorage
from .session import Session
