"""Shared validation patterns for EVM tool parameters."""

from __future__ import annotations

import re

ADDRESS_REGEX = re.compile(r"^0x[a-fA-F0-9]{40}$")
HASH_REGEX = re.compile(r"^0x[a-fA-F0-9]{64}$")
HEX_DATA_REGEX = re.compile(r"^0x([a-fA-F0-9]{2})*$")
# Ether amounts as plain decimals; wei has 18 fractional digits at most.
ETHER_AMOUNT_REGEX = re.compile(r"^\d+(\.\d{1,18})?$")

ADDRESS_PATTERN = ADDRESS_REGEX.pattern
HASH_PATTERN = HASH_REGEX.pattern
HEX_DATA_PATTERN = HEX_DATA_REGEX.pattern
ETHER_AMOUNT_PATTERN = ETHER_AMOUNT_REGEX.pattern


def is_ascending(values) -> bool:
    """True when every value is >= the one before it."""
    return all(earlier <= later for earlier, later in zip(values, values[1:]))
