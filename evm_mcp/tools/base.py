"""
Tool records and the single/multi-chain dispatch convention.

A tool is a name, a description, a pydantic parameter model, an optional list
of supported chains, and an async ``execute(client, args)`` coroutine. The
host validates arguments against ``parameters`` before ``execute`` runs.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Tuple, Type

from pydantic import BaseModel

from evm_mcp.chains import Chain
from evm_mcp.rpc import ChainNotSupportedError
from evm_mcp.rpc.client import PublicClient

logger = logging.getLogger(__name__)

ToolExecute = Callable[[Any, Any], Awaitable[Any]]
ChainFetch = Callable[[PublicClient], Awaitable[Any]]


@dataclass(frozen=True, slots=True)
class Tool:
    name: str
    description: str
    parameters: Type[BaseModel]
    execute: ToolExecute
    supported_chains: Tuple[Chain, ...] = ()

    @property
    def input_schema(self) -> Dict[str, Any]:
        return self.parameters.model_json_schema(by_alias=True)

    @property
    def supported_chain_ids(self) -> List[int]:
        return [chain.id for chain in self.supported_chains]


def create_tool(
    *,
    name: str,
    description: str,
    parameters: Type[BaseModel],
    execute: ToolExecute,
    supported_chains: Sequence[Chain] = (),
) -> Tool:
    return Tool(
        name=name,
        description=description,
        parameters=parameters,
        execute=execute,
        supported_chains=tuple(supported_chains),
    )


async def dispatch(
    client,
    supported_chains: Sequence[Chain],
    chain_id: Optional[int],
    fetch: ChainFetch,
    *,
    key: str,
) -> Any:
    """
    Run ``fetch`` against one chain or fan it out across every permitted chain.

    With ``chain_id`` the unwrapped result of that single chain is returned.
    Without it, ``fetch`` runs concurrently on each chain the client permits
    and the results come back as ``[{"chainId": id, key: value}, ...]`` in
    filtered-list order. Any failing leg fails the whole call.
    """
    if chain_id is not None:
        if not client.filter_supported_chains(supported_chains, chain_id):
            raise ChainNotSupportedError(chain_id)
        return await fetch(client.get_public_client(chain_id))

    chains = client.filter_supported_chains(supported_chains)
    logger.debug("fan-out key=%s chains=%s", key, [chain.id for chain in chains])
    values = await asyncio.gather(
        *(fetch(client.get_public_client(chain.id)) for chain in chains)
    )
    return [{"chainId": chain.id, key: value} for chain, value in zip(chains, values)]


def on_chain(client, supported_chains: Sequence[Chain], chain_id: int) -> PublicClient:
    """Public client for a tool that always targets exactly one chain."""
    if not client.filter_supported_chains(supported_chains, chain_id):
        raise ChainNotSupportedError(chain_id)
    return client.get_public_client(chain_id)
