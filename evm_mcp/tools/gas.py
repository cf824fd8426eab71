"""Gas pricing, estimation and fee history tools."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from evm_mcp.chains import ALL_CHAINS
from evm_mcp.config import MAX_FEE_HISTORY_BLOCKS, MIN_FEE_HISTORY_BLOCKS
from evm_mcp.tools.base import create_tool, dispatch, on_chain
from evm_mcp.tools.utils import clean, format_gwei, parse_ether
from evm_mcp.tools.validators import (
    ADDRESS_PATTERN,
    ETHER_AMOUNT_PATTERN,
    HEX_DATA_PATTERN,
    is_ascending,
)

SUPPORTED_CHAINS = ALL_CHAINS


class GetGasPriceParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    chain_id: Optional[int] = Field(None, alias="chainId")
    format_gwei: Optional[bool] = Field(
        None,
        alias="formatGwei",
        description="Return gwei instead of a wei string.",
    )


class EstimateGasParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    to: str = Field(..., pattern=ADDRESS_PATTERN, description="Recipient address")
    value: Optional[str] = Field(
        None,
        pattern=ETHER_AMOUNT_PATTERN,
        description="Amount of ether to send, as a decimal string",
    )
    data: Optional[str] = Field(None, pattern=HEX_DATA_PATTERN, description="0x-prefixed call data")
    chain_id: Optional[int] = Field(None, alias="chainId")


class GetFeeHistoryParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    block_count: int = Field(
        ...,
        alias="blockCount",
        ge=MIN_FEE_HISTORY_BLOCKS,
        le=MAX_FEE_HISTORY_BLOCKS,
        description=(
            "Number of blocks in the requested range. Between 1 and 1024 blocks can be "
            "requested in a single query. Less than requested may be returned if not all "
            "blocks are available."
        ),
    )
    reward_percentiles: Optional[List[float]] = Field(
        None,
        alias="rewardPercentiles",
        description=(
            "A monotonically increasing list of percentile values to sample from each "
            "block's effective priority fees per gas in ascending order, weighted by gas used."
        ),
    )
    chain_id: int = Field(..., alias="chainId")

    @field_validator("reward_percentiles")
    @classmethod
    def check_percentiles(cls, value: Optional[List[float]]) -> Optional[List[float]]:
        if value is None:
            return value
        if any(p < 0 or p > 100 for p in value):
            raise ValueError("percentiles must be between 0 and 100")
        if not is_ascending(value):
            raise ValueError("percentiles must be in ascending order")
        return value


async def get_gas_price(client, args: GetGasPriceParams) -> Any:
    async def fetch(public_client) -> str:
        gas_price = await public_client.get_gas_price()
        return format_gwei(gas_price) if args.format_gwei else str(gas_price)

    return await dispatch(client, SUPPORTED_CHAINS, args.chain_id, fetch, key="gasPrice")


async def estimate_gas(client, args: EstimateGasParams) -> Any:
    sender = await client.get_address()
    value = parse_ether(args.value) if args.value else None

    async def fetch(public_client) -> str:
        gas = await public_client.estimate_gas(
            account=sender,
            to=args.to,
            value=value,
            data=args.data,
        )
        return str(gas)

    return await dispatch(client, SUPPORTED_CHAINS, args.chain_id, fetch, key="gas")


async def get_fee_history(client, args: GetFeeHistoryParams) -> Dict[str, Any]:
    public_client = on_chain(client, SUPPORTED_CHAINS, args.chain_id)
    history = await public_client.get_fee_history(
        block_count=args.block_count,
        reward_percentiles=args.reward_percentiles or [],
    )
    return clean(history)


get_gas_price_tool = create_tool(
    name="getGasPrice",
    description=(
        "Get the current gas price. If chainId is not specified, will return gas price "
        "for all supported chains."
    ),
    parameters=GetGasPriceParams,
    supported_chains=SUPPORTED_CHAINS,
    execute=get_gas_price,
)

estimate_gas_tool = create_tool(
    name="estimateGas",
    description="Estimate gas for a transaction",
    parameters=EstimateGasParams,
    supported_chains=SUPPORTED_CHAINS,
    execute=estimate_gas,
)

get_fee_history_tool = create_tool(
    name="getFeeHistory",
    description="Get historical gas fee info",
    parameters=GetFeeHistoryParams,
    supported_chains=SUPPORTED_CHAINS,
    execute=get_fee_history,
)
