import dataclasses

import pytest
from pydantic import BaseModel

from evm_mcp.chains import mainnet, optimism
from evm_mcp.rpc import ChainNotSupportedError, NodeUnreachableError
from evm_mcp.tools.base import Tool, create_tool, dispatch, on_chain
from evm_mcp.tools.blocks import GetBlockNumberParams


def test_create_tool_builds_frozen_record():
    async def execute(client, args):
        return None

    tool = create_tool(
        name="noop",
        description="Does nothing",
        parameters=GetBlockNumberParams,
        supported_chains=[mainnet, optimism],
        execute=execute,
    )
    assert isinstance(tool, Tool)
    assert tool.supported_chains == (mainnet, optimism)
    assert tool.supported_chain_ids == [1, 10]
    with pytest.raises(dataclasses.FrozenInstanceError):
        tool.name = "other"


def test_create_tool_defaults_to_no_chains_and_exposes_alias_schema():
    class Params(BaseModel):
        name: str

    async def execute(client, args):
        return args.name

    tool = create_tool(name="echo", description="Echo", parameters=Params, execute=execute)
    assert tool.supported_chains == ()
    assert tool.input_schema["properties"]["name"]["type"] == "string"

    block_tool_schema = create_tool(
        name="bn", description="", parameters=GetBlockNumberParams, execute=execute
    ).input_schema
    assert "chainId" in block_tool_schema["properties"]


@pytest.mark.asyncio
async def test_dispatch_single_chain_is_unwrapped(make_client):
    client = make_client({"get_block_number": 5})

    async def fetch(public_client):
        return await public_client.get_block_number()

    result = await dispatch(client, [mainnet, optimism], 10, fetch, key="blockNumber")
    assert result == 5
    assert client.requested == [10]


@pytest.mark.asyncio
async def test_dispatch_fan_out_preserves_filtered_order(make_client):
    # The first chain answers last; output order must still follow the chain list.
    client = make_client(
        {"get_block_number": 0},
        per_chain={1: {"get_block_number": 100}, 10: {"get_block_number": 200}},
        delays={1: 0.05},
    )

    async def fetch(public_client):
        return await public_client.get_block_number()

    result = await dispatch(client, [mainnet, optimism], None, fetch, key="blockNumber")
    assert result == [
        {"chainId": 1, "blockNumber": 100},
        {"chainId": 10, "blockNumber": 200},
    ]


@pytest.mark.asyncio
async def test_dispatch_fan_out_respects_allow_list(make_client):
    client = make_client({"get_block_number": 1}, allowed={10})

    async def fetch(public_client):
        return await public_client.get_block_number()

    result = await dispatch(client, [mainnet, optimism], None, fetch, key="blockNumber")
    assert result == [{"chainId": 10, "blockNumber": 1}]
    assert client.requested == [10]


@pytest.mark.asyncio
async def test_dispatch_fan_out_fails_when_one_leg_fails(make_client):
    client = make_client(
        {"get_block_number": 1},
        per_chain={10: {"get_block_number": NodeUnreachableError("down")}},
    )

    async def fetch(public_client):
        return await public_client.get_block_number()

    with pytest.raises(NodeUnreachableError):
        await dispatch(client, [mainnet, optimism], None, fetch, key="blockNumber")


@pytest.mark.asyncio
async def test_dispatch_rejects_chain_outside_filtered_set(make_client):
    client = make_client({"get_block_number": 1}, allowed={1})

    async def fetch(public_client):
        pytest.fail("fetch should not run for a disallowed chain")

    with pytest.raises(ChainNotSupportedError):
        await dispatch(client, [mainnet, optimism], 10, fetch, key="blockNumber")
    assert client.requested == []


@pytest.mark.asyncio
async def test_dispatch_empty_filtered_set_returns_empty_list(make_client):
    client = make_client({}, allowed=set())

    async def fetch(public_client):
        pytest.fail("no chain should be queried")

    assert await dispatch(client, [mainnet], None, fetch, key="x") == []


def test_on_chain_checks_tool_chain_list(make_client):
    client = make_client({})
    assert on_chain(client, [mainnet], 1).chain_id == 1
    with pytest.raises(ChainNotSupportedError):
        on_chain(client, [mainnet], 10)
