"""ENS name resolution tools.

Both tools run on the client's default chain; ENS never fans out.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from evm_mcp.tools.base import create_tool
from evm_mcp.tools.validators import ADDRESS_PATTERN


class ResolveEnsParams(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, description="The ENS name to resolve")


class LookupEnsParams(BaseModel):
    model_config = ConfigDict(extra="forbid")

    address: str = Field(..., pattern=ADDRESS_PATTERN, description="The Ethereum address to lookup")


async def resolve_ens(client, args: ResolveEnsParams) -> Optional[str]:
    public_client = client.get_public_client()
    return await public_client.get_ens_address(args.name)


async def lookup_ens(client, args: LookupEnsParams) -> Optional[str]:
    public_client = client.get_public_client()
    return await public_client.get_ens_name(args.address)


resolve_ens_tool = create_tool(
    name="resolveENS",
    description="Resolves an ENS name to an Ethereum address",
    parameters=ResolveEnsParams,
    execute=resolve_ens,
)

lookup_ens_tool = create_tool(
    name="lookupENS",
    description="Looks up the ENS name for an Ethereum address",
    parameters=LookupEnsParams,
    execute=lookup_ens,
)
