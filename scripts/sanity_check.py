"""Minimal live sanity checks for the EVM MCP tools."""

from __future__ import annotations

import asyncio
import os
import sys

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from evm_mcp.mcp import call_tool  # noqa: E402
from evm_mcp.rpc import default_client  # noqa: E402

# vitalik.eth by default; override via env.
SAMPLE_ADDRESS = os.getenv("EVM_SAMPLE_ADDRESS", "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045")
SAMPLE_NAME = os.getenv("EVM_SAMPLE_ENS_NAME", "vitalik.eth")
SAMPLE_CHAIN_ID = int(os.getenv("EVM_SAMPLE_CHAIN_ID", "1"))
# Opt-in to fan-out calls across every supported chain (slower, many endpoints).
RUN_FAN_OUT = os.getenv("RUN_FAN_OUT_SANITY", "false").lower() in {"1", "true", "yes"}


async def main() -> None:
    try:
        print("Block number:", await call_tool("getBlockNumber", {"chainId": SAMPLE_CHAIN_ID}))
        print(
            "Balance:",
            await call_tool(
                "getBalance",
                {"address": SAMPLE_ADDRESS, "chainId": SAMPLE_CHAIN_ID, "formatEth": True},
            ),
        )
        print("Gas price (gwei):", await call_tool("getGasPrice", {"chainId": SAMPLE_CHAIN_ID, "formatGwei": True}))
        print("Fee history:", await call_tool("getFeeHistory", {"chainId": SAMPLE_CHAIN_ID, "blockCount": 4, "rewardPercentiles": [25, 75]}))
        print("Resolve ENS:", await call_tool("resolveENS", {"name": SAMPLE_NAME}))
        print("Lookup ENS:", await call_tool("lookupENS", {"address": SAMPLE_ADDRESS}))

        if RUN_FAN_OUT:
            print("Block numbers (all chains):", await call_tool("getBlockNumber", {}))
    finally:
        await default_client.aclose()


if __name__ == "__main__":
    asyncio.run(main())
