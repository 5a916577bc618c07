"""
sandbox_sdk.client
==================

Typed facade over a local execution backend session.

`SandboxClient` is the only component that talks to the backend directly. It:
- normalises inputs (bytes vs base64 transaction payloads, one vs many signatures)
- serialises query parameters to the backend's JSON text form
- decodes every JSON text response exactly once, validating its shape
- wraps backend failures as :class:`~sandbox_sdk.errors.BackendError`

Decode problems raise :class:`~sandbox_sdk.errors.DecodeError`; they are never
turned into empty/default values.

Typical usage
-------------
    from sandbox_sdk.client import SandboxClient

    sandbox = SandboxClient(MySandboxBackend)
    sandbox.mint_sui(address, 10_000)
    assert sandbox.get_balance(address) == 10_000
    sandbox.reset()
    assert sandbox.get_balance(address) == 0
"""

from __future__ import annotations

import base64
import json
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from .backend import (
    BackendFactory,
    BackendSession,
    BehaviourApi,
    ClockApi,
    CoinApi,
    ObjectApi,
    PackageApi,
    StateApi,
    StorageApi,
    TransactionApi,
)
from .config import SandboxConfig, load_backend_factory
from .errors import BackendError, BackendUnavailableError, DecodeError, SandboxSdkError
from .logging import get_logger
from .types import (
    PAST_OBJECT_STATUSES,
    CoinDict,
    DryRunResponse,
    DynamicFieldName,
    DynamicFieldPage,
    ObjectRead,
    ObjectResponse,
    PaginatedTransactionResponse,
    TransactionBlockResponse,
    TransactionFilter,
)

log = get_logger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


# --- input normalisation -----------------------------------------------------


def encode_transaction_block(transaction_block: Union[BytesLike, str]) -> str:
    """Raw transaction bytes -> base64 text; text is assumed to be base64 already."""
    if isinstance(transaction_block, str):
        return transaction_block
    if isinstance(transaction_block, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(transaction_block)).decode("ascii")
    raise TypeError(
        f"transaction_block must be bytes or base64 str, got {type(transaction_block).__name__}"
    )


def normalize_signatures(signature: Union[str, Sequence[str]]) -> List[str]:
    if isinstance(signature, str):
        return [signature]
    return list(signature)


def _params_json(params: Mapping[str, Any]) -> str:
    return json.dumps({k: v for k, v in params.items() if v is not None}, separators=(",", ":"))


# --- response decoding -------------------------------------------------------


def _decode(operation: str, raw: Any) -> Any:
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = bytes(raw).decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(operation, f"response is not UTF-8: {e}", repr(bytes(raw))) from e
    if not isinstance(raw, str):
        raise DecodeError(operation, f"expected JSON text, got {type(raw).__name__}")
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise DecodeError(operation, f"invalid JSON: {e}", raw) from e


def _decode_object(operation: str, raw: Any) -> dict:
    value = _decode(operation, raw)
    if not isinstance(value, dict):
        raise DecodeError(operation, f"expected a JSON object, got {type(value).__name__}", str(raw))
    return value


def _decode_list(operation: str, raw: Any) -> list:
    value = _decode(operation, raw)
    if not isinstance(value, list):
        raise DecodeError(operation, f"expected a JSON array, got {type(value).__name__}", str(raw))
    return value


def _decode_page(operation: str, raw: Any) -> dict:
    page = _decode_object(operation, raw)
    if not isinstance(page.get("data"), list):
        raise DecodeError(operation, "page is missing its 'data' array", str(raw))
    page.setdefault("nextCursor", None)
    page["hasNextPage"] = bool(page.get("hasNextPage", False))
    return page


def _decode_execution(operation: str, raw: Any) -> TransactionBlockResponse:
    response = _decode_object(operation, raw)
    errors = response.get("errors")
    if errors is not None and not isinstance(errors, list):
        raise DecodeError(operation, "'errors' must be an array when present", str(raw))
    return response  # type: ignore[return-value]


def _decode_int(operation: str, value: Any) -> int:
    if isinstance(value, bool):
        raise DecodeError(operation, "expected an integer, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        digits = value.strip()
        if digits.isascii() and digits.isdigit():
            return int(digits)
    raise DecodeError(operation, f"expected an integer, got {value!r}")


# --- facade ------------------------------------------------------------------


class SandboxClient:
    """Synchronous, typed wrapper around one execution backend session."""

    def __init__(
        self,
        backend_factory: Optional[BackendFactory] = None,
        *,
        config: Optional[SandboxConfig] = None,
    ) -> None:
        if backend_factory is None:
            config = config or SandboxConfig.from_env()
            if not config.backend:
                raise BackendUnavailableError(
                    "no execution backend configured; pass backend_factory or set SANDBOX_BACKEND"
                )
            backend_factory = load_backend_factory(config.backend)
        self._factory: BackendFactory = backend_factory
        self._session: BackendSession = self._new_session()

    def _new_session(self) -> BackendSession:
        try:
            session = self._factory()
        except SandboxSdkError:
            raise
        except Exception as e:
            raise BackendUnavailableError(f"failed to build sandbox: {e}") from e
        log.debug("sandbox_session_created", factory=getattr(self._factory, "__name__", repr(self._factory)))
        return session

    def _call(self, operation: str, fn: Callable[..., Any], *args: Any) -> Any:
        try:
            return fn(*args)
        except SandboxSdkError:
            raise
        except Exception as e:
            raise BackendError(operation, str(e)) from e

    # --- capability groups (never cached; always from the live session) ---

    def coin_api(self) -> CoinApi:
        return self._session.coin_api()

    def transaction_api(self) -> TransactionApi:
        return self._session.transaction_api()

    def object_api(self) -> ObjectApi:
        return self._session.object_api()

    def clock_api(self) -> ClockApi:
        return self._session.clock_api()

    def behaviour_api(self) -> BehaviourApi:
        return self._session.behaviour_api()

    def package_api(self) -> PackageApi:
        return self._session.package_api()

    def state_api(self) -> StateApi:
        return self._session.state_api()

    def storage_api(self) -> StorageApi:
        return self._session.storage_api()

    # --- coins ---

    def get_coins(self, address: str, coin_type: Optional[str] = None) -> List[CoinDict]:
        raw = self._call("getCoins", self.coin_api().get_coins, address, coin_type)
        return _decode_list("getCoins", raw)

    def get_balance(self, address: str, coin_type: Optional[str] = None) -> int:
        raw = self._call("getBalance", self.coin_api().get_balance, address, coin_type)
        return _decode_int("getBalance", raw)

    def get_sui_balance(self, address: str) -> int:
        return self.get_balance(address)

    def mint_sui(self, address: str, amount: int) -> str:
        """Create a fresh gas coin of ``amount`` MIST owned by ``address``; returns its id."""
        if amount < 0:
            raise ValueError("amount must be non-negative")
        return str(self._call("mintSui", self.coin_api().mint_sui, address, int(amount)))

    # --- transactions ---

    def execute_transaction_block(
        self,
        transaction_block: Union[BytesLike, str],
        signature: Union[str, Sequence[str]],
    ) -> TransactionBlockResponse:
        """
        Execute a signed transaction and return the decoded response.

        A response with a non-empty ``errors`` list is a processed-but-failed
        transaction, not an exception.
        """
        tx_b64 = encode_transaction_block(transaction_block)
        signatures = normalize_signatures(signature)
        raw = self._call("executeTransactionBlock", self.transaction_api().execute, tx_b64, signatures)
        response = _decode_execution("executeTransactionBlock", raw)
        log.debug(
            "transaction_executed",
            digest=response.get("digest"),
            failed=bool(response.get("errors")),
        )
        return response

    def dry_run_transaction(self, transaction_block: Union[BytesLike, str]) -> DryRunResponse:
        tx_b64 = encode_transaction_block(transaction_block)
        raw = self._call("dryRunTransaction", self.transaction_api().dry_run, tx_b64)
        return _decode_object("dryRunTransaction", raw)  # type: ignore[return-value]

    def get_transaction(self, digest: str) -> Optional[TransactionBlockResponse]:
        """Committed transaction by digest, or None if the session never saw it."""
        raw = self._call("getTransaction", self.transaction_api().get_response, digest)
        value = _decode("getTransaction", raw)
        if value is None:
            return None
        if not isinstance(value, dict):
            raise DecodeError("getTransaction", f"expected a JSON object, got {type(value).__name__}", str(raw))
        return value  # type: ignore[return-value]

    def query_transaction_blocks(
        self,
        filter: Optional[TransactionFilter] = None,
        *,
        options: Optional[Mapping[str, Any]] = None,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        order: Optional[str] = None,
    ) -> PaginatedTransactionResponse:
        """
        Transactions matching ``filter`` in execution order; ``filter=None``
        returns every transaction of the session, oldest first.
        """
        if order not in (None, "ascending", "descending"):
            raise ValueError(f"order must be 'ascending' or 'descending', got {order!r}")
        params = _params_json(
            {"filter": filter, "options": options, "cursor": cursor, "limit": limit, "order": order}
        )
        raw = self._call("queryTransactionBlocks", self.transaction_api().query_blocks, params)
        return _decode_page("queryTransactionBlocks", raw)  # type: ignore[return-value]

    # --- objects ---

    def get_object(self, object_id: str) -> ObjectResponse:
        raw = self._call("getObject", self.object_api().get, object_id)
        return _decode_object("getObject", raw)  # type: ignore[return-value]

    def try_get_past_object(
        self,
        object_id: str,
        version: int,
        options: Optional[Mapping[str, Any]] = None,
    ) -> ObjectRead:
        params = _params_json({"id": object_id, "version": int(version), "options": options})
        raw = self._call("tryGetPastObject", self.object_api().get_past, params)
        read = _decode_object("tryGetPastObject", raw)
        if read.get("status") not in PAST_OBJECT_STATUSES:
            raise DecodeError("tryGetPastObject", f"unknown past object status {read.get('status')!r}", str(raw))
        read.setdefault("details", None)
        return read  # type: ignore[return-value]

    def get_dynamic_fields(
        self,
        parent_id: str,
        *,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> DynamicFieldPage:
        params = _params_json({"parentId": parent_id, "cursor": cursor, "limit": limit})
        raw = self._call("getDynamicFields", self.object_api().get_dynamic_fields, params)
        return _decode_page("getDynamicFields", raw)  # type: ignore[return-value]

    def get_dynamic_field_object(self, parent_id: str, name: DynamicFieldName) -> ObjectResponse:
        params = _params_json({"parentId": parent_id, "name": dict(name)})
        raw = self._call("getDynamicFieldObject", self.object_api().get_dynamic_field_object, params)
        return _decode_object("getDynamicFieldObject", raw)  # type: ignore[return-value]

    # --- clock ---

    def advance_clock_by_millis(self, millis: int) -> None:
        if millis < 0:
            raise ValueError("the sandbox clock only moves forward")
        self._call("advanceClockByMillis", self.clock_api().advance_by_millis, int(millis))

    def set_clock_timestamp_millis(self, timestamp_ms: int) -> None:
        self._call("setClockTimestampMillis", self.clock_api().set_time_ms, int(timestamp_ms))

    def get_clock_timestamp_millis(self) -> int:
        raw = self._call("getClockTimestampMillis", self.clock_api().get_time_ms)
        return _decode_int("getClockTimestampMillis", raw)

    # --- behaviour injection ---

    def reject_next_transaction(self, reason: str) -> None:
        """Arm a one-shot rejection; the backend clears it when the next transaction consumes it."""
        self._call("rejectNextTransaction", self.behaviour_api().set_reject_next_transaction, reason)

    def disable_sig_checks(self) -> None:
        self._call("disableSigChecks", self.behaviour_api().disable_signature_checks)

    def enable_sig_checks(self) -> None:
        self._call("enableSigChecks", self.behaviour_api().enable_signature_checks)

    # --- packages ---

    def publish_package(
        self,
        modules: Sequence[BytesLike],
        dependencies: Sequence[str],
        sender: str,
    ) -> TransactionBlockResponse:
        module_bytes = [bytes(m) for m in modules]
        raw = self._call("publish", self.package_api().publish, module_bytes, list(dependencies), sender)
        response = _decode_execution("publish", raw)
        log.info(
            "package_published",
            digest=response.get("digest"),
            modules=len(module_bytes),
            failed=bool(response.get("errors")),
        )
        return response

    def get_normalized_function(self, package: str, module: str, function: str) -> dict:
        raw = self._call(
            "getNormalizedMoveFunction",
            self.package_api().get_normalized_move_function,
            package,
            module,
            function,
        )
        return _decode_object("getNormalizedMoveFunction", raw)

    # --- state ---

    def get_reference_gas_price(self) -> int:
        raw = self._call("getReferenceGasPrice", self.state_api().get_reference_gas_price)
        return _decode_int("getReferenceGasPrice", raw)

    # --- storage ---

    def take_snapshot(self) -> bytes:
        raw = self._call("takeSnapshot", self.storage_api().take_snapshot)
        if isinstance(raw, (bytes, bytearray, memoryview)):
            return bytes(raw)
        if isinstance(raw, list):
            return bytes(raw)
        raise DecodeError("takeSnapshot", f"expected snapshot bytes, got {type(raw).__name__}")

    def restore_from_snapshot(self, snapshot: BytesLike) -> None:
        self._call("restoreFromSnapshot", self.storage_api().restore_from_snapshot, bytes(snapshot))

    # --- lifecycle ---

    def reset(self) -> None:
        """Drop the current session and start again from genesis."""
        self._session = self._new_session()
        log.info("sandbox_reset")


__all__ = ["SandboxClient", "encode_transaction_block", "normalize_signatures"]
