import asyncio

import pytest

from evm_mcp.config import EvmConfig
from evm_mcp.metrics import MetricsRecorder
from evm_mcp.rate_limiter import PerKeyRateLimiter
from evm_mcp.server import build_rate_limiter


@pytest.mark.asyncio
async def test_per_key_rate_limiter_allows_then_blocks():
    limiter = PerKeyRateLimiter(rate_per_sec=1, burst=1)
    assert await limiter.allow("getBalance")
    # Immediately requesting again should fail due to no tokens
    assert not await limiter.allow("getBalance")
    # Other keys have their own bucket
    assert await limiter.allow("getGasPrice")
    await asyncio.sleep(1.05)
    assert await limiter.allow("getBalance")


@pytest.mark.asyncio
async def test_per_tool_override():
    limiter = PerKeyRateLimiter(rate_per_sec=10, burst=5, per_tool={"estimateGas": 0.1})
    assert await limiter.allow("estimateGas")
    assert await limiter.allow("getBalance")
    assert limiter._buckets["estimateGas"].rate == pytest.approx(0.1)
    assert limiter._buckets["estimateGas"].capacity == pytest.approx(1.0)
    assert limiter._buckets["getBalance"].rate == pytest.approx(10)
    assert not await limiter.allow("estimateGas")


@pytest.mark.asyncio
async def test_server_limiter_uses_configured_overrides(monkeypatch):
    monkeypatch.setenv("EVM_MCP_PER_TOOL_RATE_LIMITS", "estimateGas=0.01")
    limiter = build_rate_limiter(EvmConfig(rate_limit_qps=100))
    assert limiter.per_tool == {"estimateGas": 0.01}
    assert await limiter.allow("estimateGas")
    assert not await limiter.allow("estimateGas")
    assert await limiter.allow("getBalance")
    assert await limiter.allow("getBalance")


def test_metrics_average_tool_duration():
    recorder = MetricsRecorder(recent=2)
    recorder.record_tool("getBalance", success=True, duration_ms=10.0)
    recorder.record_tool("getBalance", success=False, duration_ms=30.0)
    for request_id in ("a", "b", "c"):
        recorder.record_duration(request_id, 1.0)
    snapshot = recorder.snapshot()
    assert snapshot["tool_success"] == {"getBalance": 1}
    assert snapshot["tool_error"] == {"getBalance": 1}
    assert snapshot["tool_avg_duration_ms"] == {"getBalance": 20.0}
    assert list(snapshot["recent_request_durations_ms"]) == ["b", "c"]
