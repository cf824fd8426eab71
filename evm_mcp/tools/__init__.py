"""LLM-facing tool definitions."""

from .base import Tool, create_tool, dispatch
from .account import get_balance_tool, get_code_tool, get_transaction_count_tool
from .blocks import get_block_number_tool, get_block_tool
from .gas import estimate_gas_tool, get_fee_history_tool, get_gas_price_tool
from .transactions import get_transaction_receipt_tool, get_transaction_tool
from .ens import lookup_ens_tool, resolve_ens_tool
from . import validators

RPC_TOOLS = (
    get_balance_tool,
    get_code_tool,
    get_transaction_count_tool,
    get_block_tool,
    get_block_number_tool,
    get_gas_price_tool,
    estimate_gas_tool,
    get_fee_history_tool,
    get_transaction_tool,
    get_transaction_receipt_tool,
)

ENS_TOOLS = (resolve_ens_tool, lookup_ens_tool)

ALL_TOOLS = RPC_TOOLS + ENS_TOOLS

__all__ = [
    "Tool",
    "create_tool",
    "dispatch",
    "get_balance_tool",
    "get_code_tool",
    "get_transaction_count_tool",
    "get_block_tool",
    "get_block_number_tool",
    "get_gas_price_tool",
    "estimate_gas_tool",
    "get_fee_history_tool",
    "get_transaction_tool",
    "get_transaction_receipt_tool",
    "resolve_ens_tool",
    "lookup_ens_tool",
    "RPC_TOOLS",
    "ENS_TOOLS",
    "ALL_TOOLS",
    "validators",
]
