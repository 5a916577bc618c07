"""
sandbox_sdk.tx
==============

Collaborator interfaces used by ``sign_and_execute_transaction``.

- `Signer`: anything that can derive a Sui address and sign transaction
  bytes (a keypair wrapper, a wallet, a test double).
- `TransactionBuilder`: a high-level transaction object that can set its
  sender and serialise itself to BCS bytes. Building may query chain data
  (gas coins, reference gas price); it receives a *read-only* client for that.

Signing and building may be synchronous or asynchronous; `resolve` awaits
the result only when it is awaitable.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Union


@dataclass(frozen=True)
class SignedTransaction:
    signature: str
    bytes: Union[bytes, str]


class Signer(Protocol):
    def to_sui_address(self) -> str: ...
    def sign_transaction(self, tx_bytes: bytes) -> Any: ...


class TransactionBuilder(Protocol):
    def set_sender_if_not_set(self, sender: str) -> None: ...
    def build(self, *, client: Any) -> Any: ...


async def resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def as_signed_transaction(value: Any) -> SignedTransaction:
    """
    Accept what signers commonly return: a SignedTransaction, a mapping with
    ``signature``/``bytes`` keys, or an object with those attributes.
    """
    if isinstance(value, SignedTransaction):
        return value
    if isinstance(value, Mapping):
        try:
            return SignedTransaction(signature=value["signature"], bytes=value["bytes"])
        except KeyError as e:
            raise TypeError(f"signer result is missing {e.args[0]!r}") from e
    try:
        return SignedTransaction(signature=value.signature, bytes=value.bytes)
    except AttributeError as e:
        raise TypeError(
            f"signer returned {type(value).__name__}; expected signature and bytes"
        ) from e


def is_raw_transaction(value: Any) -> bool:
    return isinstance(value, (bytes, bytearray, memoryview))


__all__ = [
    "SignedTransaction",
    "Signer",
    "TransactionBuilder",
    "resolve",
    "as_signed_transaction",
    "is_raw_transaction",
]
