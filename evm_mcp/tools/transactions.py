"""Transaction lookup tools."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from evm_mcp.chains import ALL_CHAINS
from evm_mcp.tools.base import create_tool, on_chain
from evm_mcp.tools.utils import clean
from evm_mcp.tools.validators import HASH_PATTERN

SUPPORTED_CHAINS = ALL_CHAINS


class TransactionHashParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    hash: str = Field(..., pattern=HASH_PATTERN, description="0x-prefixed transaction hash")
    chain_id: int = Field(..., alias="chainId")


async def get_transaction(client, args: TransactionHashParams) -> Dict[str, Any]:
    public_client = on_chain(client, SUPPORTED_CHAINS, args.chain_id)
    tx = await public_client.get_transaction(args.hash)
    return clean(tx)


async def get_transaction_receipt(client, args: TransactionHashParams) -> Dict[str, Any]:
    public_client = on_chain(client, SUPPORTED_CHAINS, args.chain_id)
    receipt = await public_client.get_transaction_receipt(args.hash)
    return clean(receipt)


get_transaction_tool = create_tool(
    name="getTransaction",
    description="Get details about a transaction",
    parameters=TransactionHashParams,
    supported_chains=SUPPORTED_CHAINS,
    execute=get_transaction,
)

get_transaction_receipt_tool = create_tool(
    name="getTransactionReceipt",
    description="Get the receipt of a transaction",
    parameters=TransactionHashParams,
    supported_chains=SUPPORTED_CHAINS,
    execute=get_transaction_receipt,
)
