"""Multi-chain client wrapper handed to every tool invocation."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

import httpx

from evm_mcp.chains import Chain, get_chain
from evm_mcp.config import EvmConfig, default_config
from evm_mcp.rpc.client import PublicClient, RpcError

logger = logging.getLogger(__name__)


class ChainNotSupportedError(RpcError):
    """Raised when a chain is unknown or not permitted by the client configuration."""

    def __init__(self, chain_id: Optional[int]) -> None:
        super().__init__(f"Chain {chain_id} is not supported.")
        self.chain_id = chain_id


class AccountNotConfiguredError(RpcError):
    """Raised when an operation needs the caller's address and none is configured."""


class ChainClient:
    """
    Capability object giving tools access to per-chain public clients.

    One ``PublicClient`` is created lazily per chain and reused; concurrent
    per-chain calls therefore never share a handle.
    """

    def __init__(
        self,
        config: EvmConfig | None = None,
        *,
        async_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config or default_config
        self._async_client = async_client
        self._public_clients: Dict[int, PublicClient] = {}

    def _resolve_chain(self, chain_id: int) -> Chain:
        chain = get_chain(chain_id)
        if chain is None:
            raise ChainNotSupportedError(chain_id)
        return chain

    def get_public_client(self, chain_id: Optional[int] = None) -> PublicClient:
        """Return the public client for ``chain_id`` (default chain when omitted)."""
        target = self.config.default_chain_id if chain_id is None else chain_id
        public_client = self._public_clients.get(target)
        if public_client is None:
            chain = self._resolve_chain(target)
            logger.debug("Creating public client for chain %s", chain.id)
            public_client = PublicClient(
                chain,
                rpc_url=self.config.rpc_urls.get(chain.id),
                timeout=self.config.timeout,
                async_client=self._async_client,
            )
            self._public_clients[target] = public_client
        return public_client

    async def get_address(self) -> str:
        """Return the caller's own address, used as ``from`` for gas estimation."""
        if not self.config.account_address:
            raise AccountNotConfiguredError("No account address configured.")
        return self.config.account_address

    def filter_supported_chains(
        self, chains: Iterable[Chain], chain_id: Optional[int] = None
    ) -> List[Chain]:
        """Keep the chains permitted by the allow-list, optionally narrowed to ``chain_id``."""
        allowed = set(self.config.allowed_chain_ids)
        permitted = [chain for chain in chains if not allowed or chain.id in allowed]
        if chain_id is not None:
            permitted = [chain for chain in permitted if chain.id == chain_id]
        return permitted

    async def aclose(self) -> None:
        for public_client in self._public_clients.values():
            await public_client.aclose()
        self._public_clients.clear()


default_client = ChainClient()
