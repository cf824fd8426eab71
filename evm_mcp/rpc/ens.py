"""ENS helpers: name hashing, DNS wire encoding and call-data for resolver lookups."""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Sequence, Tuple

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import function_signature_to_4byte_selector, keccak

logger = logging.getLogger(__name__)

# ENS registry with fallback, deployed at the same address on mainnet and testnets.
ENS_REGISTRY_ADDRESS = "0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e"
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
REVERSE_SUFFIX = "addr.reverse"

RESOLVER_SELECTOR = function_signature_to_4byte_selector("resolver(bytes32)")
ADDR_SELECTOR = function_signature_to_4byte_selector("addr(bytes32)")
NAME_SELECTOR = function_signature_to_4byte_selector("name(bytes32)")
RESOLVE_SELECTOR = function_signature_to_4byte_selector("resolve(bytes,bytes)")
SUPPORTS_INTERFACE_SELECTOR = function_signature_to_4byte_selector("supportsInterface(bytes4)")
# IExtendedResolver (ENSIP-10 wildcard resolution).
EXTENDED_RESOLVER_INTERFACE = bytes.fromhex("9061b923")


def normalize_name(name: str) -> str:
    # Lowercase ASCII normalization; full UTS-46 mapping is left to the resolver.
    return name.strip().lower()


def namehash(name: str) -> bytes:
    """Compute the EIP-137 namehash of an ENS name."""
    node = b"\x00" * 32
    normalized = normalize_name(name)
    if not normalized:
        return node
    for label in reversed(normalized.split(".")):
        node = keccak(node + keccak(text=label))
    return node


def parent_names(name: str) -> Iterator[str]:
    """Yield ``name`` followed by each of its parents, stopping before the root."""
    labels = normalize_name(name).split(".")
    for start in range(len(labels)):
        candidate = ".".join(labels[start:])
        if candidate:
            yield candidate


def dns_encode(name: str) -> bytes:
    """DNS wire-format encoding of ``name`` as expected by ``resolve(bytes,bytes)``."""
    encoded = b""
    for label in normalize_name(name).split("."):
        raw = label.encode("utf-8")
        if not raw:
            continue
        if len(raw) > 255:
            raise ValueError(f"ENS label too long: {label[:16]}...")
        encoded += bytes([len(raw)]) + raw
    return encoded + b"\x00"


def reverse_name(address: str) -> str:
    return f"{address.lower()[2:]}.{REVERSE_SUFFIX}"


def node_call(selector: bytes, node: bytes) -> bytes:
    return selector + encode(["bytes32"], [node])


def encode_node_call(selector: bytes, node: bytes) -> str:
    return "0x" + node_call(selector, node).hex()


def encode_resolve_call(name: str, inner: bytes) -> str:
    """Wrap a resolver record call for an ENSIP-10 ``resolve(name, data)``."""
    return "0x" + (RESOLVE_SELECTOR + encode(["bytes", "bytes"], [dns_encode(name), inner])).hex()


def encode_supports_interface(interface_id: bytes) -> str:
    return "0x" + (SUPPORTS_INTERFACE_SELECTOR + encode(["bytes4"], [interface_id])).hex()


def _decode(types: Sequence[str], data: str) -> Optional[Tuple]:
    """
    ABI-decode resolver output.

    Empty, short or malformed data (odd-length hex, bad padding, invalid
    UTF-8) is reported as None, the same as an unset record.
    """
    try:
        raw = bytes.fromhex(data[2:] if data.startswith(("0x", "0X")) else data)
        if not raw:
            return None
        return decode(types, raw)
    except (ValueError, DecodingError) as exc:
        logger.debug("Undecodable ENS resolver data (%s): %s", ",".join(types), exc)
        return None


def decode_address(data: str) -> Optional[str]:
    """Decode an ABI encoded address, treating empty data and 0x0 as unset."""
    decoded = _decode(["address"], data)
    if decoded is None:
        return None
    (address,) = decoded
    if int(address, 16) == 0:
        return None
    return address


def decode_string(data: str) -> Optional[str]:
    decoded = _decode(["string"], data)
    if decoded is None:
        return None
    return decoded[0] or None


def decode_bytes(data: str) -> Optional[str]:
    """Unwrap the ``bytes`` returned by ``resolve``, as 0x-prefixed hex."""
    decoded = _decode(["bytes"], data)
    if decoded is None:
        return None
    return "0x" + decoded[0].hex()


def decode_bool(data: str) -> bool:
    decoded = _decode(["bool"], data)
    return bool(decoded and decoded[0])
