"""
Configuration helpers for the EVM MCP server.

This module centralizes RPC endpoint selection, the chain allow-list, default
timeouts, and rate limits. No secrets are stored in the repository; RPC URLs
(which frequently embed provider keys) are read from environment or a local
file if present.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

DEFAULT_CHAIN_ID_ENV_VAR = "EVM_DEFAULT_CHAIN_ID"
RPC_URLS_ENV_VAR = "EVM_RPC_URLS"
RPC_URLS_FILE_ENV_VAR = "EVM_RPC_URLS_FILE"
DEFAULT_RPC_URLS_FILE = "rpc_urls.txt"
ALLOWED_CHAINS_ENV_VAR = "EVM_ALLOWED_CHAINS"
ACCOUNT_ADDRESS_ENV_VAR = "EVM_ACCOUNT_ADDRESS"
PER_TOOL_RATE_LIMITS_ENV_VAR = "EVM_MCP_PER_TOOL_RATE_LIMITS"


def _load_timeout() -> float:
    raw_timeout = os.getenv("EVM_HTTP_TIMEOUT")
    if raw_timeout:
        try:
            return float(raw_timeout)
        except ValueError:
            return 10.0
    return 10.0


def _load_default_chain_id() -> int:
    raw = os.getenv(DEFAULT_CHAIN_ID_ENV_VAR)
    if raw:
        try:
            return int(raw)
        except ValueError:
            return 1
    return 1


def _load_rate_limit() -> float:
    raw = os.getenv("EVM_MCP_RATE_LIMIT_QPS")
    if raw:
        try:
            return float(raw)
        except ValueError:
            return 5.0
    return 5.0


def _parse_chain_ids(raw: Optional[str]) -> List[int]:
    """Parse a comma separated chain id list, skipping blanks and junk."""
    if not raw:
        return []
    ids: List[int] = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            chain_id = int(part)
        except ValueError:
            continue
        if chain_id not in ids:
            ids.append(chain_id)
    return ids


def _parse_pairs(raw: Optional[str], separator: str) -> Iterator[Tuple[str, str]]:
    """Yield stripped ``key=value`` pairs, skipping blanks, comments and junk."""
    if not raw:
        return
    for entry in raw.split(separator):
        entry = entry.strip()
        if not entry or entry.startswith("#") or "=" not in entry:
            continue
        key, _, value = entry.partition("=")
        key, value = key.strip(), value.strip()
        if key and value:
            yield key, value


def _parse_rpc_urls(raw: Optional[str], *, separator: str = ",") -> Dict[int, str]:
    """Parse ``chainId=url`` pairs. Malformed entries are ignored."""
    urls: Dict[int, str] = {}
    for key, url in _parse_pairs(raw, separator):
        try:
            urls[int(key)] = url
        except ValueError:
            continue
    return urls


def _parse_per_tool_rate_limits(raw: Optional[str]) -> Dict[str, float]:
    """Parse ``toolName=qps`` pairs; non-positive or non-numeric rates are ignored."""
    limits: Dict[str, float] = {}
    for tool, rate in _parse_pairs(raw, ","):
        try:
            qps = float(rate)
        except ValueError:
            continue
        if qps > 0:
            limits[tool] = qps
    return limits


def load_rpc_urls() -> Dict[int, str]:
    """
    Load per-chain RPC URL overrides from a local file and the environment.

    Returns:
        Mapping of chain id to RPC URL. Environment entries win over the file.
        URLs are never logged or returned to callers.
    """
    urls: Dict[int, str] = {}
    file_path = os.getenv(RPC_URLS_FILE_ENV_VAR, DEFAULT_RPC_URLS_FILE)
    if file_path:
        path = Path(file_path)
        if path.is_file():
            urls.update(_parse_rpc_urls(path.read_text(encoding="utf-8"), separator="\n"))
    urls.update(_parse_rpc_urls(os.getenv(RPC_URLS_ENV_VAR)))
    return urls


def load_account_address() -> Optional[str]:
    value = os.getenv(ACCOUNT_ADDRESS_ENV_VAR)
    if value and value.strip():
        return value.strip()
    return None


DEFAULT_TIMEOUT = _load_timeout()
DEFAULT_RATE_LIMIT_QPS = _load_rate_limit()
LOG_LEVEL = os.getenv("EVM_MCP_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("EVM_MCP_LOG_FORMAT", "json")  # json or plain

# eth_feeHistory accepts between 1 and 1024 blocks per query.
MIN_FEE_HISTORY_BLOCKS = 1
MAX_FEE_HISTORY_BLOCKS = 1024


@dataclass(slots=True)
class EvmConfig:
    """Runtime configuration for EVM RPC access."""

    timeout: float = DEFAULT_TIMEOUT
    default_chain_id: int = field(default_factory=_load_default_chain_id)
    rpc_urls: Dict[int, str] = field(default_factory=load_rpc_urls)
    allowed_chain_ids: List[int] = field(
        default_factory=lambda: _parse_chain_ids(os.getenv(ALLOWED_CHAINS_ENV_VAR))
    )
    account_address: Optional[str] = field(default_factory=load_account_address)
    rate_limit_qps: float = DEFAULT_RATE_LIMIT_QPS
    log_level: str = LOG_LEVEL
    log_format: str = LOG_FORMAT
    per_tool_rate_limits: Dict[str, float] = field(
        default_factory=lambda: _parse_per_tool_rate_limits(os.getenv(PER_TOOL_RATE_LIMITS_ENV_VAR))
    )


default_config = EvmConfig()
