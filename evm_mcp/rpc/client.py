"""
Thin async JSON-RPC client for a single EVM chain.

All methods are read-only and map transport and node errors to internal
exceptions; the tool layer lets them propagate to the host unmodified.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from evm_mcp.chains import Chain
from evm_mcp.rpc import ens
from evm_mcp.rpc.formatters import (
    format_block,
    format_fee_history,
    format_receipt,
    format_transaction,
    hex_to_int,
    to_quantity,
)

logger = logging.getLogger(__name__)

EXECUTION_REVERTED_CODE = 3


class RpcError(Exception):
    """Base exception for EVM RPC errors."""

    def __init__(
        self,
        message: str,
        *,
        code: Optional[int] = None,
        status_code: Optional[int] = None,
        data: Any = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code
        self.data = data


class NodeUnreachableError(RpcError):
    """Raised when the RPC endpoint cannot be reached."""


class UnauthorizedError(RpcError):
    """Raised when the RPC provider rejects the request due to missing auth."""


class RpcResponseError(RpcError):
    """Raised when the node answers with a JSON-RPC error object."""


class ExecutionRevertedError(RpcResponseError):
    """Raised when a call or gas estimate reverts."""


class BlockNotFoundError(RpcError):
    """Raised when the requested block does not exist."""


class TransactionNotFoundError(RpcError):
    """Raised when a transaction hash is unknown to the node."""


class TransactionReceiptNotFoundError(RpcError):
    """Raised when a transaction has no receipt yet (pending or unknown)."""


class PublicClient:
    """Async read-only client bound to one chain."""

    def __init__(
        self,
        chain: Chain,
        *,
        rpc_url: Optional[str] = None,
        timeout: float = 10.0,
        async_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.chain = chain
        self.rpc_url = rpc_url or chain.rpc_url
        self.timeout = timeout
        self._client: Optional[httpx.AsyncClient] = async_client
        self._owns_client = async_client is None
        self._ids = itertools.count(1)

    @property
    def chain_id(self) -> int:
        return self.chain.id

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _map_error(self, error: Dict[str, Any], status_code: int) -> RpcError:
        code = error.get("code")
        message = error.get("message")
        if not isinstance(message, str) or not message:
            message = "RPC error."
        data = error.get("data")
        if code == EXECUTION_REVERTED_CODE or "execution reverted" in message.lower():
            return ExecutionRevertedError(message, code=code, status_code=status_code, data=data)
        return RpcResponseError(message, code=code, status_code=status_code, data=data)

    def _process_response(self, response: httpx.Response) -> Any:
        if response.status_code in {401, 403}:
            raise UnauthorizedError(
                "Unauthorized or API key required.", status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and isinstance(data.get("error"), dict):
            raise self._map_error(data["error"], response.status_code)

        if response.status_code >= 400:
            raise RpcError("RPC endpoint error.", status_code=response.status_code)

        if not isinstance(data, dict) or "result" not in data:
            raise RpcError("Unexpected response from node.", status_code=response.status_code)

        return data["result"]

    async def request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """Send one JSON-RPC request and return its ``result`` member."""
        client = await self._get_client()
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params or [],
        }
        logger.debug("rpc chain=%s method=%s", self.chain.id, method)
        try:
            response = await client.post(self.rpc_url, json=payload)
        except httpx.RequestError as exc:
            logger.warning("RPC endpoint unreachable for chain %s method %s", self.chain.id, method)
            raise NodeUnreachableError("Node unreachable") from exc
        return self._process_response(response)

    async def get_balance(self, address: str, *, block_tag: str = "latest") -> int:
        """Return the native balance of ``address`` in wei."""
        return hex_to_int(await self.request("eth_getBalance", [address, block_tag]))

    async def get_code(self, address: str, *, block_tag: str = "latest") -> Optional[str]:
        """Return deployed bytecode, or None for accounts without code."""
        code = await self.request("eth_getCode", [address, block_tag])
        if not code or code == "0x":
            return None
        return code

    async def get_transaction_count(self, address: str, *, block_tag: str = "latest") -> int:
        return hex_to_int(await self.request("eth_getTransactionCount", [address, block_tag]))

    async def get_block(
        self,
        *,
        block_number: Optional[int] = None,
        block_hash: Optional[str] = None,
        include_transactions: bool = False,
    ) -> Dict[str, Any]:
        """Fetch a block by hash, by number, or the latest block."""
        if block_hash is not None:
            block = await self.request("eth_getBlockByHash", [block_hash, include_transactions])
            identifier = block_hash
        else:
            tag = to_quantity(block_number) if block_number is not None else "latest"
            block = await self.request("eth_getBlockByNumber", [tag, include_transactions])
            identifier = str(block_number) if block_number is not None else "latest"
        if not isinstance(block, dict):
            raise BlockNotFoundError(f"Block {identifier} not found.")
        return format_block(block)

    async def get_block_number(self) -> int:
        return hex_to_int(await self.request("eth_blockNumber"))

    async def get_gas_price(self) -> int:
        return hex_to_int(await self.request("eth_gasPrice"))

    async def estimate_gas(
        self,
        *,
        account: str,
        to: str,
        value: Optional[int] = None,
        data: Optional[str] = None,
    ) -> int:
        tx: Dict[str, Any] = {"from": account, "to": to}
        if value is not None:
            tx["value"] = to_quantity(value)
        if data is not None:
            tx["data"] = data
        return hex_to_int(await self.request("eth_estimateGas", [tx]))

    async def get_fee_history(
        self,
        *,
        block_count: int,
        reward_percentiles: Optional[List[float]] = None,
        block_tag: str = "latest",
    ) -> Dict[str, Any]:
        raw = await self.request(
            "eth_feeHistory",
            [to_quantity(block_count), block_tag, list(reward_percentiles or [])],
        )
        if not isinstance(raw, dict):
            raise RpcError("Unexpected response from node.")
        return format_fee_history(raw)

    async def get_transaction(self, tx_hash: str) -> Dict[str, Any]:
        tx = await self.request("eth_getTransactionByHash", [tx_hash])
        if not isinstance(tx, dict):
            raise TransactionNotFoundError(f"Transaction {tx_hash} not found.")
        return format_transaction(tx)

    async def get_transaction_receipt(self, tx_hash: str) -> Dict[str, Any]:
        receipt = await self.request("eth_getTransactionReceipt", [tx_hash])
        if not isinstance(receipt, dict):
            raise TransactionReceiptNotFoundError(
                f"Transaction receipt for {tx_hash} not found."
            )
        return format_receipt(receipt)

    async def call(self, *, to: str, data: str, block_tag: str = "latest") -> str:
        """Execute a read-only ``eth_call`` and return the raw hex result."""
        result = await self.request("eth_call", [{"to": to, "data": data}, block_tag])
        return result if isinstance(result, str) else "0x"

    async def _get_resolver(self, node: bytes) -> Optional[str]:
        data = await self.call(
            to=ens.ENS_REGISTRY_ADDRESS,
            data=ens.encode_node_call(ens.RESOLVER_SELECTOR, node),
        )
        return ens.decode_address(data)

    async def _find_resolver(self, name: str) -> Tuple[Optional[str], Optional[str]]:
        """Return ``(resolver, owning name)`` for the closest ancestor with a resolver set."""
        for candidate in ens.parent_names(name):
            resolver = await self._get_resolver(ens.namehash(candidate))
            if resolver is not None:
                return resolver, candidate
        return None, None

    async def _supports_wildcard(self, resolver: str) -> bool:
        try:
            data = await self.call(
                to=resolver,
                data=ens.encode_supports_interface(ens.EXTENDED_RESOLVER_INTERFACE),
            )
        except ExecutionRevertedError:
            return False
        return ens.decode_bool(data)

    async def _resolve_record(self, name: str, selector: bytes) -> Optional[str]:
        """
        Fetch the raw ABI result of a resolver record for ``name``.

        Follows ENSIP-10: when only a parent name has a resolver, that resolver
        must implement ``resolve(bytes,bytes)`` and is asked on behalf of the
        full name. A reverting resolver (including offchain lookups, which are
        not followed) reads as an unset record.
        """
        resolver, owner = await self._find_resolver(name)
        if resolver is None:
            return None
        inner = ens.node_call(selector, ens.namehash(name))
        try:
            if owner == ens.normalize_name(name):
                return await self.call(to=resolver, data="0x" + inner.hex())
            if not await self._supports_wildcard(resolver):
                logger.debug("ENS resolver for %s does not support wildcards", owner)
                return None
            data = await self.call(to=resolver, data=ens.encode_resolve_call(name, inner))
        except ExecutionRevertedError:
            logger.debug("ENS resolver reverted for %s", name)
            return None
        except ValueError:
            logger.debug("ENS name %s cannot be DNS-encoded", name)
            return None
        return ens.decode_bytes(data)

    async def get_ens_address(self, name: str) -> Optional[str]:
        """Resolve an ENS name to a checksummed address, or None if unset."""
        data = await self._resolve_record(name, ens.ADDR_SELECTOR)
        if data is None:
            return None
        return ens.decode_address(data)

    async def get_ens_name(self, address: str) -> Optional[str]:
        """
        Reverse-resolve ``address`` to its primary ENS name.

        The name is only returned when it forward-resolves back to the same
        address.
        """
        data = await self._resolve_record(ens.reverse_name(address), ens.NAME_SELECTOR)
        name = ens.decode_string(data) if data is not None else None
        if name is None:
            return None
        forward = await self.get_ens_address(name)
        if forward is None or forward.lower() != address.lower():
            logger.debug("ENS reverse record for %s does not forward-resolve", address)
            return None
        return name
