"""Block-related tools."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from evm_mcp.chains import ALL_CHAINS
from evm_mcp.tools.base import create_tool, dispatch, on_chain
from evm_mcp.tools.utils import clean
from evm_mcp.tools.validators import HASH_PATTERN

logger = logging.getLogger(__name__)

SUPPORTED_CHAINS = ALL_CHAINS


class GetBlockParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    block_number: Optional[int] = Field(None, alias="blockNumber", ge=0)
    block_hash: Optional[str] = Field(None, alias="blockHash", pattern=HASH_PATTERN)
    chain_id: int = Field(..., alias="chainId")


class GetBlockNumberParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    chain_id: Optional[int] = Field(
        None,
        alias="chainId",
        description="Chain to query. Omit to query every supported chain.",
    )


async def get_block(client, args: GetBlockParams) -> Dict[str, Any]:
    """Fetch a block by hash, then by number, falling back to the latest block."""
    public_client = on_chain(client, SUPPORTED_CHAINS, args.chain_id)
    if args.block_hash is not None:
        block = await public_client.get_block(block_hash=args.block_hash)
    elif args.block_number is not None:
        block = await public_client.get_block(block_number=args.block_number)
    else:
        logger.debug("No block selector given; fetching latest block on chain %s", args.chain_id)
        block = await public_client.get_block()
    return clean(block)


async def get_block_number(client, args: GetBlockNumberParams) -> Any:
    async def fetch(public_client) -> str:
        return str(await public_client.get_block_number())

    return await dispatch(client, SUPPORTED_CHAINS, args.chain_id, fetch, key="blockNumber")


get_block_tool = create_tool(
    name="getBlock",
    description="Get information about a block",
    parameters=GetBlockParams,
    supported_chains=SUPPORTED_CHAINS,
    execute=get_block,
)

get_block_number_tool = create_tool(
    name="getBlockNumber",
    description="Get the current block number",
    parameters=GetBlockNumberParams,
    supported_chains=SUPPORTED_CHAINS,
    execute=get_block_number,
)
