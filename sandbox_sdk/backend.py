"""
sandbox_sdk.backend
===================

Interface of the local execution backend consumed by :class:`sandbox_sdk.client.SandboxClient`.

The backend (a native Move VM sandbox, or an in-memory double in tests) owns
all ledger state. It is reached through a *session* object that hands out
capability groups; every structured result crosses the boundary as JSON text
and query parameters go in as JSON text with camelCase keys.

Nothing in this module does any work: these are typing Protocols describing
the call shapes, kept minimal to avoid tight coupling to one implementation.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Protocol, Sequence


class CoinApi(Protocol):
    def get_balance(self, address: str, coin_type: Optional[str] = None) -> int: ...
    def get_coins(self, address: str, coin_type: Optional[str] = None) -> str: ...
    def mint_sui(self, address: str, amount: int) -> str: ...


class TransactionApi(Protocol):
    def execute(self, tx_bytes_b64: str, signatures: List[str]) -> str: ...
    def dry_run(self, tx_bytes_b64: str) -> str: ...
    def get_response(self, digest: str) -> str: ...
    def query_blocks(self, params_json: str) -> str: ...


class ObjectApi(Protocol):
    def get(self, object_id: str) -> str: ...
    def get_past(self, params_json: str) -> str: ...
    def get_dynamic_fields(self, params_json: str) -> str: ...
    def get_dynamic_field_object(self, params_json: str) -> str: ...


class ClockApi(Protocol):
    def get_time_ms(self) -> int: ...
    def set_time_ms(self, timestamp_ms: int) -> None: ...
    def advance_by_millis(self, millis: int) -> None: ...


class BehaviourApi(Protocol):
    def set_reject_next_transaction(self, reason: str) -> None: ...
    def enable_signature_checks(self) -> None: ...
    def disable_signature_checks(self) -> None: ...


class PackageApi(Protocol):
    def publish(self, modules: Sequence[bytes], dependency_ids: Sequence[str], sender: str) -> str: ...
    def get_normalized_move_function(self, package_id: str, module: str, function: str) -> str: ...


class StateApi(Protocol):
    def get_reference_gas_price(self) -> int: ...


class StorageApi(Protocol):
    def take_snapshot(self) -> bytes: ...
    def restore_from_snapshot(self, snapshot: bytes) -> None: ...


class BackendSession(Protocol):
    """A live handle to one ledger; capability groups are views onto it."""

    def coin_api(self) -> CoinApi: ...
    def transaction_api(self) -> TransactionApi: ...
    def object_api(self) -> ObjectApi: ...
    def clock_api(self) -> ClockApi: ...
    def behaviour_api(self) -> BehaviourApi: ...
    def package_api(self) -> PackageApi: ...
    def state_api(self) -> StateApi: ...
    def storage_api(self) -> StorageApi: ...


BackendFactory = Callable[[], BackendSession]


__all__ = [
    "CoinApi",
    "TransactionApi",
    "ObjectApi",
    "ClockApi",
    "BehaviourApi",
    "PackageApi",
    "StateApi",
    "StorageApi",
    "BackendSession",
    "BackendFactory",
]
