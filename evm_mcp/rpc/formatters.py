"""Decode raw JSON-RPC payloads into Python-friendly dicts.

Quantities arrive as 0x-prefixed hex strings; these helpers turn the ones that
are numeric by nature into ints and map enum-like codes to names.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

BLOCK_QUANTITY_FIELDS = (
    "baseFeePerGas",
    "blobGasUsed",
    "difficulty",
    "excessBlobGas",
    "gasLimit",
    "gasUsed",
    "number",
    "size",
    "timestamp",
    "totalDifficulty",
)

TRANSACTION_QUANTITY_FIELDS = (
    "blockNumber",
    "chainId",
    "gas",
    "gasPrice",
    "maxFeePerBlobGas",
    "maxFeePerGas",
    "maxPriorityFeePerGas",
    "nonce",
    "transactionIndex",
    "value",
    "v",
    "yParity",
)

RECEIPT_QUANTITY_FIELDS = (
    "blobGasPrice",
    "blobGasUsed",
    "blockNumber",
    "cumulativeGasUsed",
    "effectiveGasPrice",
    "gasUsed",
    "transactionIndex",
)

LOG_QUANTITY_FIELDS = ("blockNumber", "logIndex", "transactionIndex")

TRANSACTION_TYPES = {
    "0x0": "legacy",
    "0x1": "eip2930",
    "0x2": "eip1559",
    "0x3": "eip4844",
    "0x4": "eip7702",
}

RECEIPT_STATUSES = {"0x0": "reverted", "0x1": "success"}


def hex_to_int(value: Any) -> Any:
    """Convert a hex quantity to int; anything else is returned untouched."""
    if isinstance(value, str) and value.startswith(("0x", "0X")):
        return int(value, 16) if len(value) > 2 else 0
    return value


def to_quantity(value: int) -> str:
    return hex(value)


def _convert_fields(payload: Dict[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
    result = dict(payload)
    for key in fields:
        if key in result and result[key] is not None:
            result[key] = hex_to_int(result[key])
    return result


def _format_type(result: Dict[str, Any]) -> None:
    raw_type = result.get("type")
    if isinstance(raw_type, str):
        result["typeHex"] = raw_type
        result["type"] = TRANSACTION_TYPES.get(raw_type.lower(), raw_type)


def format_transaction(payload: Dict[str, Any]) -> Dict[str, Any]:
    result = _convert_fields(payload, TRANSACTION_QUANTITY_FIELDS)
    _format_type(result)
    return result


def format_block(payload: Dict[str, Any]) -> Dict[str, Any]:
    result = _convert_fields(payload, BLOCK_QUANTITY_FIELDS)
    transactions = result.get("transactions")
    if isinstance(transactions, list):
        result["transactions"] = [
            format_transaction(tx) if isinstance(tx, dict) else tx for tx in transactions
        ]
    return result


def format_log(payload: Dict[str, Any]) -> Dict[str, Any]:
    return _convert_fields(payload, LOG_QUANTITY_FIELDS)


def format_receipt(payload: Dict[str, Any]) -> Dict[str, Any]:
    result = _convert_fields(payload, RECEIPT_QUANTITY_FIELDS)
    status = result.get("status")
    if isinstance(status, str):
        result["status"] = RECEIPT_STATUSES.get(status.lower(), status)
    _format_type(result)
    logs = result.get("logs")
    if isinstance(logs, list):
        result["logs"] = [format_log(log) if isinstance(log, dict) else log for log in logs]
    return result


def format_fee_history(payload: Dict[str, Any]) -> Dict[str, Any]:
    reward: Optional[List[List[int]]] = None
    raw_reward = payload.get("reward")
    if isinstance(raw_reward, list):
        reward = [[hex_to_int(value) for value in block] for block in raw_reward]
    result: Dict[str, Any] = {
        "oldestBlock": hex_to_int(payload.get("oldestBlock")),
        "baseFeePerGas": [hex_to_int(value) for value in payload.get("baseFeePerGas") or []],
        "gasUsedRatio": list(payload.get("gasUsedRatio") or []),
    }
    if reward is not None:
        result["reward"] = reward
    return result
