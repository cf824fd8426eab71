import pytest

from evm_mcp.rpc import ExecutionRevertedError
from evm_mcp.tools.gas import (
    EstimateGasParams,
    GetFeeHistoryParams,
    GetGasPriceParams,
    estimate_gas,
    get_fee_history,
    get_gas_price,
)

SENDER = "0x1111111111111111111111111111111111111111"
RECIPIENT = "0x2222222222222222222222222222222222222222"


@pytest.mark.asyncio
async def test_gas_price_single_raw_and_gwei(make_client):
    client = make_client({"get_gas_price": 12345678901})
    assert await get_gas_price(client, GetGasPriceParams(chainId=1)) == "12345678901"
    assert (
        await get_gas_price(client, GetGasPriceParams(chainId=1, formatGwei=True))
        == "12.345678901"
    )


@pytest.mark.asyncio
async def test_gas_price_fan_out(make_client):
    client = make_client({"get_gas_price": 2 * 10**9}, allowed={1, 137})
    result = await get_gas_price(client, GetGasPriceParams(formatGwei=True))
    assert result == [{"chainId": 1, "gasPrice": "2"}, {"chainId": 137, "gasPrice": "2"}]


@pytest.mark.asyncio
async def test_estimate_gas_uses_client_address_and_parses_ether(make_client):
    client = make_client({"estimate_gas": 21000}, address=SENDER)
    result = await estimate_gas(
        client, EstimateGasParams(to=RECIPIENT, value="0.5", data="0xabcd", chainId=1)
    )
    assert result == "21000"
    assert client.public_clients[1].calls == [
        (
            "estimate_gas",
            {"account": SENDER, "to": RECIPIENT, "value": 5 * 10**17, "data": "0xabcd"},
        )
    ]


@pytest.mark.asyncio
async def test_estimate_gas_fan_out_without_value(make_client):
    client = make_client({"estimate_gas": 21000}, address=SENDER, allowed={10})
    result = await estimate_gas(client, EstimateGasParams(to=RECIPIENT))
    assert result == [{"chainId": 10, "gas": "21000"}]
    _, kwargs = client.public_clients[10].calls[0]
    assert kwargs["value"] is None
    assert kwargs["data"] is None


@pytest.mark.asyncio
async def test_estimate_gas_revert_propagates(make_client):
    client = make_client({"estimate_gas": ExecutionRevertedError("execution reverted")}, address=SENDER)
    with pytest.raises(ExecutionRevertedError):
        await estimate_gas(client, EstimateGasParams(to=RECIPIENT, chainId=1))


def test_estimate_gas_rejects_bad_value_and_data():
    with pytest.raises(ValueError):
        EstimateGasParams(to=RECIPIENT, value="1e18")
    with pytest.raises(ValueError):
        EstimateGasParams(to=RECIPIENT, data="0xabc")


@pytest.mark.asyncio
async def test_fee_history_is_cleaned(make_client):
    history = {
        "oldestBlock": 100,
        "baseFeePerGas": [10, 11, 12],
        "gasUsedRatio": [0.5, 0.25],
        "reward": [[1, 2], [3, 4]],
    }
    client = make_client({"get_fee_history": history})
    result = await get_fee_history(
        client, GetFeeHistoryParams(blockCount=2, rewardPercentiles=[25, 75], chainId=1)
    )
    assert result == {
        "oldestBlock": "100",
        "baseFeePerGas": ["10", "11", "12"],
        "gasUsedRatio": [0.5, 0.25],
        "reward": [["1", "2"], ["3", "4"]],
    }
    assert client.public_clients[1].calls == [
        ("get_fee_history", {"block_count": 2, "reward_percentiles": [25.0, 75.0]})
    ]


@pytest.mark.asyncio
async def test_fee_history_defaults_to_no_percentiles(make_client):
    client = make_client({"get_fee_history": {"oldestBlock": 1, "baseFeePerGas": [], "gasUsedRatio": []}})
    await get_fee_history(client, GetFeeHistoryParams(blockCount=1, chainId=1))
    assert client.public_clients[1].calls[0][1]["reward_percentiles"] == []


@pytest.mark.parametrize("block_count", [0, 1025, -3])
def test_fee_history_block_count_bounds(block_count):
    with pytest.raises(ValueError):
        GetFeeHistoryParams(blockCount=block_count, chainId=1)


def test_fee_history_block_count_edges_accepted():
    assert GetFeeHistoryParams(blockCount=1, chainId=1).block_count == 1
    assert GetFeeHistoryParams(blockCount=1024, chainId=1).block_count == 1024


def test_fee_history_percentiles_must_ascend_within_range():
    with pytest.raises(ValueError):
        GetFeeHistoryParams(blockCount=4, rewardPercentiles=[50, 25], chainId=1)
    with pytest.raises(ValueError):
        GetFeeHistoryParams(blockCount=4, rewardPercentiles=[10, 101], chainId=1)
