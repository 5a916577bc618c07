"""
Typed error classes for the sandbox SDK.

These are raised by the backend facade, the protocol adapter and the Move
build pipeline so callers can catch specific failure modes while still being
able to catch the base `SandboxSdkError`.

A transaction that executes but is rejected by ledger rules (or by an armed
``reject_next_transaction``) is *not* an error: it comes back as a normal
response carrying an ``errors`` list.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

__all__ = [
    "SandboxSdkError",
    "UnsupportedMethodError",
    "ReadOnlyClientError",
    "DecodeError",
    "BackendError",
    "BackendUnavailableError",
    "ToolchainError",
    "BuildOutputError",
]


class SandboxSdkError(Exception):
    """Base class for all SDK errors."""


@dataclass(slots=True)
class UnsupportedMethodError(SandboxSdkError):
    """Raised when a client method has no local implementation."""

    method: str
    args_repr: str = ""

    def __str__(self) -> str:
        return f"Method {self.method}({self.args_repr}) not yet supported"


@dataclass(slots=True)
class ReadOnlyClientError(SandboxSdkError):
    """Raised when a transaction builder tries to mutate state through its query view."""

    method: str

    def __str__(self) -> str:
        return f"{self.method!r} is not available on the read-only client used for building"


@dataclass(slots=True)
class DecodeError(SandboxSdkError):
    """
    Raised when a backend response cannot be decoded into its expected shape.

    This points at a facade/backend mismatch, never at caller input.
    """

    operation: str
    message: str
    raw: Optional[str] = None

    def __str__(self) -> str:
        suffix = ""
        if self.raw is not None:
            snippet = self.raw if len(self.raw) <= 256 else self.raw[:256] + "..."
            suffix = f" raw={snippet!r}"
        return f"DecodeError[{self.operation}]: {self.message}{suffix}"


@dataclass(slots=True)
class BackendError(SandboxSdkError):
    """Raised when the execution backend could not service a call."""

    operation: str
    message: str

    def __str__(self) -> str:
        return f"BackendError[{self.operation}]: {self.message}"


@dataclass(slots=True)
class BackendUnavailableError(SandboxSdkError):
    """Raised when no execution backend factory is configured or importable."""

    message: str

    def __str__(self) -> str:
        return f"BackendUnavailableError: {self.message}"


@dataclass(slots=True)
class ToolchainError(SandboxSdkError):
    """
    Raised when the Move compiler cannot be launched, exits non-zero, or
    produces output we cannot use.

    Fields:
      - message: human-readable description including the underlying error
      - command: argv used to launch the compiler (if it got that far)
      - returncode: process exit status, when the process ran
      - stderr: captured compiler stderr, when available
    """

    message: str
    command: Optional[Sequence[str]] = None
    returncode: Optional[int] = None
    stderr: Optional[str] = None

    def __str__(self) -> str:
        bits = [self.message]
        if self.returncode is not None:
            bits.append(f"exit={self.returncode}")
        if self.stderr:
            bits.append(f"stderr={self.stderr.strip()}")
        return " ".join(bits)


class BuildOutputError(ToolchainError):
    """Raised when compiler stdout does not contain a usable JSON build report."""
