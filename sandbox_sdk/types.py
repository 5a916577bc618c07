from __future__ import annotations

"""
Protocol payload shapes for the sandbox SDK.

Responses handed back by the facade and the protocol adapter are plain dicts
in the JSON-RPC wire shape (camelCase keys), typed here with `TypedDict` so
call sites get checked field names. Nothing here performs I/O.

Also provides:
- well-known identifiers (Sui std/framework packages, native coin type)
- object id normalisation
- transaction query filter builders
"""

import re
from enum import Enum
from typing import Any, Dict, List, Optional, TypedDict, Union

# --- Common aliases ----------------------------------------------------------

Address = str  # 0x-prefixed, 32-byte hex
ObjectId = str  # 0x-prefixed, 32-byte hex
Digest = str  # base58 transaction digest

SUI_COIN_TYPE = "0x2::sui::SUI"

SUI_STD_ID = "0x" + "0" * 63 + "1"
SUI_FRAMEWORK_ID = "0x" + "0" * 63 + "2"
WELL_KNOWN_DEPENDENCY_IDS = (SUI_STD_ID, SUI_FRAMEWORK_ID)

SUI_CLOCK_OBJECT_ID = "0x" + "0" * 63 + "6"

_HEX_ID_RE = re.compile(r"^0[xX]([0-9a-fA-F]{1,64})$")


def normalize_object_id(value: str) -> ObjectId:
    """
    Normalise a hex object id/address to lowercase, 0x-prefixed, 64 hex digits.

    ``"0x2"`` -> ``"0x000...0002"``. Raises ValueError on non-hex input.
    """
    if not isinstance(value, str):
        raise TypeError(f"object id must be a string, got {type(value).__name__}")
    m = _HEX_ID_RE.match(value.strip())
    if not m:
        raise ValueError(f"invalid object id: {value!r}")
    return "0x" + m.group(1).lower().rjust(64, "0")


# --- Past object lookups -----------------------------------------------------


class PastObjectStatus(str, Enum):
    VERSION_FOUND = "VersionFound"
    VERSION_NOT_FOUND = "VersionNotFound"
    VERSION_TOO_HIGH = "VersionTooHigh"
    OBJECT_NOT_EXISTS = "ObjectNotExists"


PAST_OBJECT_STATUSES = frozenset(s.value for s in PastObjectStatus)


# --- Transaction query filters ----------------------------------------------

TransactionFilter = Dict[str, str]


def changed_object(object_id: str) -> TransactionFilter:
    """Transactions where the object's version changed."""
    return {"ChangedObject": object_id}


def input_object(object_id: str) -> TransactionFilter:
    """Transactions that took the object as a direct input."""
    return {"InputObject": object_id}


def affected_object(object_id: str) -> TransactionFilter:
    """Transactions that changed the object or took it as input."""
    return {"AffectedObject": object_id}


# --- JSON-RPC TypedDict shapes ----------------------------------------------


class CoinDict(TypedDict, total=False):
    coinType: str
    coinObjectId: ObjectId
    version: str
    digest: str
    balance: str
    previousTransaction: Digest


class PaginatedCoins(TypedDict):
    data: List[CoinDict]
    nextCursor: Optional[str]
    hasNextPage: bool


class BalanceResponse(TypedDict):
    owner: Address
    coinType: str
    coinObjectCount: int
    totalBalance: str
    lockedBalance: Dict[str, str]


class TransactionBlockResponse(TypedDict, total=False):
    digest: Digest
    transaction: Dict[str, Any]
    rawTransaction: str
    effects: Dict[str, Any]
    events: List[Dict[str, Any]]
    objectChanges: List[Dict[str, Any]]
    balanceChanges: List[Dict[str, Any]]
    timestampMs: str
    checkpoint: str
    errors: List[str]


class DryRunResponse(TypedDict, total=False):
    effects: Dict[str, Any]
    events: List[Dict[str, Any]]
    objectChanges: List[Dict[str, Any]]
    balanceChanges: List[Dict[str, Any]]
    input: Dict[str, Any]


class ObjectResponse(TypedDict, total=False):
    data: Dict[str, Any]
    error: Dict[str, Any]


class ObjectRead(TypedDict):
    status: str
    details: Any


class DynamicFieldPage(TypedDict):
    data: List[Dict[str, Any]]
    nextCursor: Optional[str]
    hasNextPage: bool


class PaginatedTransactionResponse(TypedDict):
    data: List[TransactionBlockResponse]
    nextCursor: Optional[str]
    hasNextPage: bool


class DynamicFieldName(TypedDict):
    type: str
    value: Any


JSON = Union[dict, list, str, int, float, bool, None]


__all__ = [
    "Address",
    "ObjectId",
    "Digest",
    "JSON",
    "SUI_COIN_TYPE",
    "SUI_STD_ID",
    "SUI_FRAMEWORK_ID",
    "SUI_CLOCK_OBJECT_ID",
    "WELL_KNOWN_DEPENDENCY_IDS",
    "normalize_object_id",
    "PastObjectStatus",
    "PAST_OBJECT_STATUSES",
    "TransactionFilter",
    "changed_object",
    "input_object",
    "affected_object",
    "CoinDict",
    "PaginatedCoins",
    "BalanceResponse",
    "TransactionBlockResponse",
    "DryRunResponse",
    "ObjectResponse",
    "ObjectRead",
    "DynamicFieldPage",
    "PaginatedTransactionResponse",
    "DynamicFieldName",
]
