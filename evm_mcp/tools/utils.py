"""Response shaping helpers shared by the tools."""

from __future__ import annotations

from typing import Any

from eth_utils import to_wei

ETHER_DECIMALS = 18
GWEI_DECIMALS = 9


def format_units(value: int, decimals: int) -> str:
    """
    Scale an integer amount down by ``10**decimals`` using exact arithmetic.

    The result is a plain decimal string without trailing zeros or exponent
    notation, e.g. ``format_units(1500000000, 9) == "1.5"``.
    """
    negative = value < 0
    whole, fraction = divmod(abs(value), 10**decimals)
    fraction_digits = str(fraction).rjust(decimals, "0").rstrip("0") if decimals else ""
    rendered = f"{whole}.{fraction_digits}" if fraction_digits else str(whole)
    return f"-{rendered}" if negative else rendered


def format_ether(wei: int) -> str:
    return format_units(wei, ETHER_DECIMALS)


def format_gwei(wei: int) -> str:
    return format_units(wei, GWEI_DECIMALS)


def parse_ether(amount: str) -> int:
    """Convert a decimal ether amount to wei."""
    return int(to_wei(amount, "ether"))


def clean(value: Any) -> Any:
    """
    Return a JSON-safe copy of an RPC payload.

    Integers become decimal strings (they routinely exceed 2**53), bytes become
    0x-hex, ``None`` members and ``_``-prefixed keys are dropped from mappings.
    """
    if isinstance(value, bool) or value is None or isinstance(value, (str, float)):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, dict):
        return {
            str(key): clean(item)
            for key, item in value.items()
            if item is not None and not str(key).startswith("_")
        }
    if isinstance(value, (list, tuple)):
        return [clean(item) for item in value]
    return str(value)
