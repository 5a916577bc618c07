"""
sandbox_sdk.rpc.proxy
=====================

A Sui-client-shaped object backed by a local :class:`~sandbox_sdk.client.SandboxClient`.

`SandboxRpcClient` has one attribute per method of the network client
(:data:`~sandbox_sdk.rpc.methods.SUI_CLIENT_METHODS`). The methods the sandbox
can serve are implemented below as ``async def`` overrides and collected into
a per-instance registry; every other method is a generated stub that raises
:class:`~sandbox_sdk.errors.UnsupportedMethodError` naming the method and
the arguments it got. Unknown public attribute names behave the same way.

Example:
    client, sandbox = create_sandbox_client(MySandboxBackend)
    sandbox.mint_sui(address, 10_000)
    balance = await client.get_balance(owner=address)
    result = await client.sign_and_execute_transaction(transaction=tx, signer=keypair)
    if result.get("errors"):
        ...  # processed, but rejected by the ledger
"""

from __future__ import annotations

from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple, Union

from ..backend import BackendFactory
from ..client import SandboxClient, encode_transaction_block
from ..config import SandboxConfig
from ..errors import BackendError, ReadOnlyClientError, UnsupportedMethodError
from ..logging import get_logger
from ..tx import as_signed_transaction, is_raw_transaction, resolve
from ..types import (
    SUI_COIN_TYPE,
    BalanceResponse,
    DryRunResponse,
    DynamicFieldName,
    DynamicFieldPage,
    ObjectRead,
    ObjectResponse,
    PaginatedCoins,
    PaginatedTransactionResponse,
    TransactionBlockResponse,
    TransactionFilter,
)
from .methods import MUTATING_METHODS, SUI_CLIENT_METHODS

log = get_logger(__name__)

# The local backend has no progressing checkpoint counter; this is a fixed placeholder.
LATEST_CHECKPOINT_PLACEHOLDER = "10"

SUPPORTED_METHODS: Tuple[str, ...] = (
    "get_balance",
    "execute_transaction_block",
    "dry_run_transaction_block",
    "get_object",
    "multi_get_objects",
    "sign_and_execute_transaction",
    "wait_for_transaction",
    "get_transaction_block",
    "get_normalized_move_function",
    "get_reference_gas_price",
    "get_coins",
    "try_get_past_object",
    "get_dynamic_fields",
    "get_dynamic_field_object",
    "query_transaction_blocks",
    "get_latest_checkpoint_sequence_number",
)


def _format_args(args: Sequence[Any], kwargs: Mapping[str, Any]) -> str:
    parts = [repr(a) for a in args]
    parts.extend(f"{k}={v!r}" for k, v in kwargs.items())
    return ", ".join(parts)


def unsupported(name: str) -> Callable[..., Any]:
    """A callable that always raises UnsupportedMethodError for ``name``."""

    def method(*args: Any, **kwargs: Any) -> Any:
        log.warning("unsupported_client_method", method=name)
        raise UnsupportedMethodError(name, _format_args(args, kwargs))

    method.__name__ = name
    return method


def _unsupported_stub(name: str) -> Callable[..., Any]:
    def method(self: "SandboxRpcClient", *args: Any, **kwargs: Any) -> Any:
        return unsupported(name)(*args, **kwargs)

    method.__name__ = name
    method.__qualname__ = f"SandboxRpcClient.{name}"
    method.__doc__ = "Not available in the sandbox; always raises UnsupportedMethodError."
    return method


class SandboxRpcClient:
    """Async Sui JSON-RPC client surface served by a local sandbox."""

    def __init__(self, sandbox: SandboxClient) -> None:
        self._sandbox = sandbox
        self._reader = SandboxReader(self)
        self._registry: Dict[str, Callable[..., Any]] = {
            name: getattr(self, name) for name in SUPPORTED_METHODS
        }

    @property
    def sandbox(self) -> SandboxClient:
        return self._sandbox

    @property
    def reader(self) -> "SandboxReader":
        """Query-only view handed to transaction builders."""
        return self._reader

    def method(self, name: str) -> Callable[..., Any]:
        """Registry lookup: the override for ``name`` or an always-failing callable."""
        return self._registry.get(name) or unsupported(name)

    def supports(self, name: str) -> bool:
        return name in self._registry

    def __getattr__(self, name: str) -> Any:
        # Only reached for names not defined on the class.
        if name.startswith("_"):
            raise AttributeError(name)
        return unsupported(name)

    # --- coins ---

    async def get_balance(self, *, owner: str, coin_type: Optional[str] = None) -> BalanceResponse:
        return {
            "coinObjectCount": 1,
            "owner": owner,
            "totalBalance": str(self._sandbox.get_balance(owner, coin_type)),
            "lockedBalance": {},
            "coinType": coin_type if coin_type is not None else SUI_COIN_TYPE,
        }

    async def get_coins(
        self,
        *,
        owner: str,
        coin_type: Optional[str] = None,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> PaginatedCoins:
        return {
            "data": self._sandbox.get_coins(owner, coin_type),
            "nextCursor": None,
            "hasNextPage": False,
        }

    # --- transactions ---

    async def execute_transaction_block(
        self,
        *,
        transaction_block: Union[bytes, bytearray, str],
        signature: Union[str, Sequence[str]],
        options: Optional[Mapping[str, Any]] = None,
        request_type: Optional[str] = None,
    ) -> TransactionBlockResponse:
        # The sandbox always answers with full effects; options/request_type are accepted for parity.
        return self._sandbox.execute_transaction_block(
            encode_transaction_block(transaction_block), signature
        )

    async def dry_run_transaction_block(
        self, *, transaction_block: Union[bytes, bytearray, str]
    ) -> DryRunResponse:
        return self._sandbox.dry_run_transaction(encode_transaction_block(transaction_block))

    async def sign_and_execute_transaction(
        self,
        *,
        transaction: Any,
        signer: Any,
        **options: Any,
    ) -> TransactionBlockResponse:
        """
        Build (if needed), sign and submit a transaction.

        ``transaction`` is either raw BCS bytes or a builder; a builder gets the
        signer's address as sender unless it already has one, and is built
        against :attr:`reader`. Any failure along the way is raised; a
        transaction rejected by the ledger comes back with ``errors`` set.
        """
        if is_raw_transaction(transaction):
            tx_bytes = bytes(transaction)
        else:
            transaction.set_sender_if_not_set(signer.to_sui_address())
            tx_bytes = await resolve(transaction.build(client=self._reader))

        signed = as_signed_transaction(await resolve(signer.sign_transaction(tx_bytes)))
        log.debug("transaction_signed", size=len(tx_bytes))

        return await self.execute_transaction_block(
            transaction_block=signed.bytes,
            signature=signed.signature,
            **options,
        )

    async def get_transaction_block(
        self, *, digest: str, options: Optional[Mapping[str, Any]] = None
    ) -> TransactionBlockResponse:
        response = self._sandbox.get_transaction(digest)
        if response is None:
            raise BackendError("getTransactionBlock", f"transaction {digest} not found")
        return response

    async def wait_for_transaction(
        self,
        *,
        digest: str,
        options: Optional[Mapping[str, Any]] = None,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
        signal: Any = None,
    ) -> TransactionBlockResponse:
        # Execution is synchronous: anything submitted is already committed.
        return await self.get_transaction_block(digest=digest, options=options)

    async def query_transaction_blocks(
        self,
        *,
        filter: Optional[TransactionFilter] = None,
        options: Optional[Mapping[str, Any]] = None,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        order: Optional[str] = None,
    ) -> PaginatedTransactionResponse:
        return self._sandbox.query_transaction_blocks(
            filter, options=options, cursor=cursor, limit=limit, order=order
        )

    # --- objects ---

    async def get_object(
        self, *, id: str, options: Optional[Mapping[str, Any]] = None
    ) -> ObjectResponse:
        return self._sandbox.get_object(id)

    async def multi_get_objects(
        self, *, ids: Sequence[str], options: Optional[Mapping[str, Any]] = None
    ) -> List[ObjectResponse]:
        return [await self.get_object(id=object_id, options=options) for object_id in ids]

    async def try_get_past_object(
        self, *, id: str, version: int, options: Optional[Mapping[str, Any]] = None
    ) -> ObjectRead:
        return self._sandbox.try_get_past_object(id, version, options)

    async def get_dynamic_fields(
        self,
        *,
        parent_id: str,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> DynamicFieldPage:
        return self._sandbox.get_dynamic_fields(parent_id, cursor=cursor, limit=limit)

    async def get_dynamic_field_object(
        self, *, parent_id: str, name: DynamicFieldName
    ) -> ObjectResponse:
        return self._sandbox.get_dynamic_field_object(parent_id, name)

    # --- packages / state ---

    async def get_normalized_move_function(
        self, *, package: str, module: str, function: str
    ) -> dict:
        return self._sandbox.get_normalized_function(package, module, function)

    async def get_reference_gas_price(self) -> int:
        return int(self._sandbox.get_reference_gas_price())

    async def get_latest_checkpoint_sequence_number(self) -> str:
        return LATEST_CHECKPOINT_PLACEHOLDER


for _name in SUI_CLIENT_METHODS:
    if _name not in SUPPORTED_METHODS:
        setattr(SandboxRpcClient, _name, _unsupported_stub(_name))
del _name

# Everything a transaction builder may call through SandboxReader.
QUERY_METHODS: FrozenSet[str] = frozenset(SUI_CLIENT_METHODS) - frozenset(MUTATING_METHODS)


class SandboxReader:
    """
    Read-only view of a SandboxRpcClient.

    Only the client's query methods (and the unsupported stubs, which raise
    anyway) are reachable. Submitting methods and everything else on the
    client (``sandbox``, ``method``, ``supports``, ``reader``) raise
    ReadOnlyClientError so a builder cannot mutate the ledger it is reading.
    """

    def __init__(self, client: SandboxRpcClient) -> None:
        self._client = client

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        if name not in QUERY_METHODS:
            raise ReadOnlyClientError(name)
        return getattr(self._client, name)


def create_sandbox_client(
    backend_factory: Optional[BackendFactory] = None,
    *,
    config: Optional[SandboxConfig] = None,
) -> Tuple[SandboxRpcClient, SandboxClient]:
    """Fresh sandbox plus a client bound to it."""
    sandbox = SandboxClient(backend_factory, config=config)
    return SandboxRpcClient(sandbox), sandbox


__all__ = [
    "SandboxRpcClient",
    "SandboxReader",
    "SUPPORTED_METHODS",
    "QUERY_METHODS",
    "LATEST_CHECKPOINT_PLACEHOLDER",
    "create_sandbox_client",
    "unsupported",
]
