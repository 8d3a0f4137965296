"""
Session - everything the menu actions share for one process lifetime.

Opening a session is the only place where failures are fatal: if the node
cannot be reached, the key cannot be loaded, or the chain id cannot be
determined, the CLI stops before showing the menu.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import httpx
from eth_account.signers.local import LocalAccount
from loguru import logger

from .chain.rpc import RpcClient
from .chain.tx import Transactor
from .config import Settings
from .wallet.eth import get_account


@dataclass
class Session:
    settings: Settings
    rpc: RpcClient
    account: LocalAccount
    chain_id: int

    @classmethod
    def open(
        cls,
        settings: Settings,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "Session":
        """
        Load the key, connect to the node and settle the chain id.

        Raises:
            KeyMaterialError: If PRIVATE_KEY is missing or malformed
            ConnectionFailedError: If the node cannot be reached
            RpcError: If the node rejects the chain id query
        """
        account = get_account(settings.private_key)
        rpc = RpcClient(settings.rpc_url, transport=transport)
        try:
            node_chain_id = rpc.ping()
        except Exception:
            rpc.close()
            raise

        chain_id = settings.chain_id
        if chain_id is None:
            chain_id = node_chain_id
        elif chain_id != node_chain_id:
            logger.warning(
                "Configured chain id {} differs from node chain id {}",
                chain_id,
                node_chain_id,
            )

        logger.info(
            "Connected to {} (chain id {}) as {}", settings.rpc_url, chain_id, account.address
        )
        return cls(settings=settings, rpc=rpc, account=account, chain_id=chain_id)

    def transactor(self) -> Transactor:
        return Transactor(
            account=self.account,
            chain_id=self.chain_id,
            gas_limit=self.settings.gas_limit,
        )

    def close(self) -> None:
        self.rpc.close()

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
