"""Static registry of the EVM networks the tools know how to reach."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True, slots=True)
class NativeCurrency:
    name: str
    symbol: str
    decimals: int = 18


ETHER = NativeCurrency(name="Ether", symbol="ETH")


@dataclass(frozen=True, slots=True)
class Chain:
    """An independently addressable EVM network."""

    id: int
    name: str
    rpc_url: str
    native_currency: NativeCurrency = ETHER
    block_explorer_url: Optional[str] = None
    testnet: bool = False


mainnet = Chain(
    id=1,
    name="Ethereum",
    rpc_url="https://eth.merkle.io",
    block_explorer_url="https://etherscan.io",
)
base = Chain(
    id=8453,
    name="Base",
    rpc_url="https://mainnet.base.org",
    block_explorer_url="https://basescan.org",
)
arbitrum = Chain(
    id=42161,
    name="Arbitrum One",
    rpc_url="https://arb1.arbitrum.io/rpc",
    block_explorer_url="https://arbiscan.io",
)
polygon = Chain(
    id=137,
    name="Polygon",
    rpc_url="https://polygon-rpc.com",
    native_currency=NativeCurrency(name="POL", symbol="POL"),
    block_explorer_url="https://polygonscan.com",
)
optimism = Chain(
    id=10,
    name="OP Mainnet",
    rpc_url="https://mainnet.optimism.io",
    block_explorer_url="https://optimistic.etherscan.io",
)
mode = Chain(
    id=34443,
    name="Mode Mainnet",
    rpc_url="https://mainnet.mode.network",
    block_explorer_url="https://modescan.io",
)
sepolia = Chain(
    id=11155111,
    name="Sepolia",
    rpc_url="https://sepolia.drpc.org",
    native_currency=NativeCurrency(name="Sepolia Ether", symbol="ETH"),
    block_explorer_url="https://sepolia.etherscan.io",
    testnet=True,
)

ALL_CHAINS: Tuple[Chain, ...] = (mainnet, base, arbitrum, polygon, optimism, mode, sepolia)
CHAINS_BY_ID: Dict[int, Chain] = {chain.id: chain for chain in ALL_CHAINS}


def get_chain(chain_id: int) -> Optional[Chain]:
    return CHAINS_BY_ID.get(chain_id)
