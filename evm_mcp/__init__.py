"""
Read-only multi-chain EVM MCP server package.

This package exposes LLM-friendly tools backed by standard Ethereum JSON-RPC
methods across a fixed set of EVM chains. See DESIGN.md for full details.
"""

__all__ = ["config"]
