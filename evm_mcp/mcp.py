"""
Lightweight tool registry for MCP-style hosting.

Maps tool names to their definitions, validates arguments against each tool's
parameter model, and shapes failures into in-band error dicts. Callers must
handle authentication to the HTTP server hosting this adapter.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from evm_mcp.rpc import RpcError, default_client
from evm_mcp.tools import ALL_TOOLS, Tool

logger = logging.getLogger(__name__)


def build_registry(tools: Iterable[Tool]) -> Dict[str, Tool]:
    """Index tools by name, refusing duplicates."""
    registry: Dict[str, Tool] = {}
    for tool in tools:
        if tool.name in registry:
            raise ValueError(f"Duplicate tool name: {tool.name}")
        registry[tool.name] = tool
    return registry


TOOL_REGISTRY: Dict[str, Tool] = build_registry(ALL_TOOLS)


def list_tools() -> List[Dict[str, Any]]:
    """Return a simple list of available tools."""
    return [
        {
            "name": tool.name,
            "description": tool.description,
            "inputSchema": tool.input_schema,
            "supportedChains": tool.supported_chain_ids,
        }
        for tool in TOOL_REGISTRY.values()
    ]


def _validation_details(exc: ValidationError) -> List[str]:
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        details.append(f"{location}: {message}" if location else message)
    return details


async def call_tool(
    tool_name: str,
    params: Optional[Dict[str, Any]] = None,
    *,
    client=None,
) -> Any:
    """Validate ``params`` and dispatch to a tool by name."""
    tool = TOOL_REGISTRY.get(tool_name)
    if tool is None:
        return {"error": f"Unknown tool: {tool_name}"}

    try:
        args = tool.parameters.model_validate(params or {})
    except ValidationError as exc:
        return {"error": "Invalid parameters.", "details": _validation_details(exc)}

    try:
        return await tool.execute(client or default_client, args)
    except RpcError as exc:
        logger.warning("tool=%s failed: %s", tool_name, exc, extra={"tool": tool_name})
        return {"error": str(exc), "type": type(exc).__name__}
    except Exception:
        logger.exception("Unexpected error calling tool %s", tool_name)
        return {"error": "Unexpected error while calling tool."}
