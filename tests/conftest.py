import asyncio
import os
import sys

import pytest

# Ensure repository root is on sys.path before importing project modules.
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from evm_mcp.chains import ALL_CHAINS  # noqa: E402
from evm_mcp.metrics import default_metrics  # noqa: E402
from evm_mcp.rpc import ChainNotSupportedError  # noqa: E402


@pytest.fixture(autouse=True)
def reset_metrics():
    default_metrics.reset()
    yield
    default_metrics.reset()


class StubPublicClient:
    """Records calls and answers from a per-method table of canned values."""

    def __init__(self, chain_id, responses=None, *, delay=0.0):
        self.chain_id = chain_id
        self.responses = responses or {}
        self.delay = delay
        self.calls = []

    async def _answer(self, method, **kwargs):
        self.calls.append((method, kwargs))
        if self.delay:
            await asyncio.sleep(self.delay)
        value = self.responses[method]
        if isinstance(value, Exception):
            raise value
        if callable(value):
            return value(**kwargs)
        return value

    async def get_balance(self, address):
        return await self._answer("get_balance", address=address)

    async def get_code(self, address):
        return await self._answer("get_code", address=address)

    async def get_transaction_count(self, address):
        return await self._answer("get_transaction_count", address=address)

    async def get_block(self, **kwargs):
        return await self._answer("get_block", **kwargs)

    async def get_block_number(self):
        return await self._answer("get_block_number")

    async def get_gas_price(self):
        return await self._answer("get_gas_price")

    async def estimate_gas(self, **kwargs):
        return await self._answer("estimate_gas", **kwargs)

    async def get_fee_history(self, **kwargs):
        return await self._answer("get_fee_history", **kwargs)

    async def get_transaction(self, tx_hash):
        return await self._answer("get_transaction", tx_hash=tx_hash)

    async def get_transaction_receipt(self, tx_hash):
        return await self._answer("get_transaction_receipt", tx_hash=tx_hash)

    async def get_ens_address(self, name):
        return await self._answer("get_ens_address", name=name)

    async def get_ens_name(self, address):
        return await self._answer("get_ens_name", address=address)


class StubChainClient:
    """In-memory stand-in for ChainClient with an optional allow-list."""

    def __init__(self, public_clients, *, allowed=None, address=None, default_chain_id=1):
        self.public_clients = public_clients
        self.allowed = allowed
        self.address = address
        self.default_chain_id = default_chain_id
        self.requested = []

    def get_public_client(self, chain_id=None):
        target = self.default_chain_id if chain_id is None else chain_id
        self.requested.append(target)
        if target not in self.public_clients:
            raise ChainNotSupportedError(target)
        return self.public_clients[target]

    async def get_address(self):
        return self.address

    def filter_supported_chains(self, chains, chain_id=None):
        permitted = [c for c in chains if self.allowed is None or c.id in self.allowed]
        if chain_id is not None:
            permitted = [c for c in permitted if c.id == chain_id]
        return permitted


@pytest.fixture
def make_client():
    """
    Build a StubChainClient whose public clients all share ``responses``.

    ``delays`` maps chain id to an artificial latency in seconds.
    """

    def _make(responses, *, allowed=None, address=None, delays=None, per_chain=None):
        delays = delays or {}
        per_chain = per_chain or {}
        public_clients = {
            chain.id: StubPublicClient(
                chain.id,
                {**responses, **per_chain.get(chain.id, {})},
                delay=delays.get(chain.id, 0.0),
            )
            for chain in ALL_CHAINS
        }
        return StubChainClient(public_clients, allowed=allowed, address=address)

    return _make
