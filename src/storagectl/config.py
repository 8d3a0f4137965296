"""
Runtime configuration.

Settings are read once at startup from the process environment, after an
optional ``.env`` file (default ``~/.storagectl/.env``) has been loaded with
python-dotenv.  Values given on the command line win over both.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from loguru import logger

from .errors import ConfigError

# Default config directory
STORAGECTL_DIR = Path.home() / ".storagectl"
STORAGECTL_ENV = STORAGECTL_DIR / ".env"

DEFAULT_RPC_URL = "http://localhost:8545"
DEFAULT_BYTECODE = "SimpleStorage.bin"
DEFAULT_GAS_LIMIT = 3_500_000
DEFAULT_SET_VALUE = 42
DEFAULT_RECEIPT_TIMEOUT = 60.0
DEFAULT_LOG_LEVEL = "INFO"

_UINT256_MAX = 2**256 - 1


@dataclass(frozen=True)
class Settings:
    rpc_url: str = DEFAULT_RPC_URL
    private_key: Optional[str] = field(default=None, repr=False)
    bytecode_path: Path = Path(DEFAULT_BYTECODE)
    chain_id: Optional[int] = None
    gas_limit: int = DEFAULT_GAS_LIMIT
    set_value: int = DEFAULT_SET_VALUE
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Return a copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        if "bytecode_path" in values:
            values["bytecode_path"] = Path(values["bytecode_path"])
        updated = replace(self, **values)
        updated.validate()
        return updated

    def validate(self) -> None:
        if not self.rpc_url:
            raise ConfigError("RPC URL must not be empty")
        if self.chain_id is not None and self.chain_id <= 0:
            raise ConfigError(f"Chain ID must be positive, got {self.chain_id}")
        if self.gas_limit <= 0:
            raise ConfigError(f"Gas limit must be positive, got {self.gas_limit}")
        if not 0 <= self.set_value <= _UINT256_MAX:
            raise ConfigError(f"Set value must fit in uint256, got {self.set_value}")
        if not math.isfinite(self.receipt_timeout) or self.receipt_timeout < 0:
            raise ConfigError(
                f"Receipt timeout must be a finite, non-negative number, got {self.receipt_timeout}"
            )
        try:
            logger.level(self.log_level)
        except ValueError:
            raise ConfigError(f"Unknown log level {self.log_level!r}") from None


def parse_int(name: str, raw: Optional[str]) -> Optional[int]:
    """Parse a decimal or 0x-prefixed integer setting; blank means unset."""
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw.strip(), 0)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def _env_int(env: Mapping[str, str], name: str) -> Optional[int]:
    return parse_int(name, env.get(name))


def _env_float(env: Mapping[str, str], name: str) -> Optional[float]:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


def load_settings(
    env_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Build Settings from the environment.

    Args:
        env_path: .env file to load first (default: ~/.storagectl/.env).
                  Existing environment variables are not overridden.
        environ: Mapping to read instead of os.environ (tests).

    Returns:
        Validated Settings

    Raises:
        ConfigError: If a value cannot be parsed or is out of range
    """
    if environ is None:
        env_path = env_path or STORAGECTL_ENV
        if env_path.exists():
            load_dotenv(env_path, override=False)
        environ = os.environ

    defaults = Settings()
    gas_limit = _env_int(environ, "STORAGECTL_GAS_LIMIT")
    set_value = _env_int(environ, "STORAGECTL_SET_VALUE")
    receipt_timeout = _env_float(environ, "STORAGECTL_RECEIPT_TIMEOUT")

    settings = Settings(
        rpc_url=environ.get("STORAGECTL_RPC_URL") or defaults.rpc_url,
        private_key=environ.get("PRIVATE_KEY") or None,
        bytecode_path=Path(environ.get("STORAGECTL_BYTECODE") or DEFAULT_BYTECODE),
        chain_id=_env_int(environ, "STORAGECTL_CHAIN_ID"),
        gas_limit=defaults.gas_limit if gas_limit is None else gas_limit,
        set_value=defaults.set_value if set_value is None else set_value,
        receipt_timeout=(
            defaults.receipt_timeout if receipt_timeout is None else receipt_timeout
        ),
        log_level=(environ.get("STORAGECTL_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
    )
    settings.validate()
    return settings
