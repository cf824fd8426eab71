"""Account-related tools: balance, bytecode, transaction count."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from evm_mcp.chains import ALL_CHAINS
from evm_mcp.tools.base import create_tool, dispatch
from evm_mcp.tools.utils import format_ether
from evm_mcp.tools.validators import ADDRESS_PATTERN

SUPPORTED_CHAINS = ALL_CHAINS


class AddressParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    address: str = Field(..., pattern=ADDRESS_PATTERN, description="0x-prefixed account address")
    chain_id: Optional[int] = Field(
        None,
        alias="chainId",
        description="Chain to query. Omit to query every supported chain.",
    )


class GetBalanceParams(AddressParams):
    format_eth: Optional[bool] = Field(
        None,
        alias="formatEth",
        description="Return ether instead of a wei string.",
    )


async def get_balance(client, args: GetBalanceParams) -> Any:
    async def fetch(public_client) -> str:
        balance = await public_client.get_balance(args.address)
        return format_ether(balance) if args.format_eth else str(balance)

    return await dispatch(client, SUPPORTED_CHAINS, args.chain_id, fetch, key="balance")


async def get_code(client, args: AddressParams) -> Any:
    async def fetch(public_client) -> Optional[str]:
        return await public_client.get_code(args.address)

    return await dispatch(client, SUPPORTED_CHAINS, args.chain_id, fetch, key="code")


async def get_transaction_count(client, args: AddressParams) -> Any:
    async def fetch(public_client) -> int:
        return await public_client.get_transaction_count(args.address)

    return await dispatch(client, SUPPORTED_CHAINS, args.chain_id, fetch, key="count")


get_balance_tool = create_tool(
    name="getBalance",
    description="Get the ETH balance for an address",
    parameters=GetBalanceParams,
    supported_chains=SUPPORTED_CHAINS,
    execute=get_balance,
)

get_code_tool = create_tool(
    name="getCode",
    description="Get the bytecode of an address",
    parameters=AddressParams,
    supported_chains=SUPPORTED_CHAINS,
    execute=get_code,
)

get_transaction_count_tool = create_tool(
    name="getTransactionCount",
    description="Get the number of transactions sent from an address",
    parameters=AddressParams,
    supported_chains=SUPPORTED_CHAINS,
    execute=get_transaction_count,
)
