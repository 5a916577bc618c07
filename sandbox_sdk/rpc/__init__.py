"""
sandbox_sdk.rpc
---------------

Sui-client-shaped access to the local sandbox.

    from sandbox_sdk.rpc import create_sandbox_client
    client, sandbox = create_sandbox_client(MySandboxBackend)
"""

from __future__ import annotations

from .methods import MUTATING_METHODS, SUI_CLIENT_METHODS
from .proxy import (
    LATEST_CHECKPOINT_PLACEHOLDER,
    SUPPORTED_METHODS,
    SandboxReader,
    SandboxRpcClient,
    create_sandbox_client,
)

__all__ = [
    "SandboxRpcClient",
    "SandboxReader",
    "create_sandbox_client",
    "SUI_CLIENT_METHODS",
    "SUPPORTED_METHODS",
    "MUTATING_METHODS",
    "LATEST_CHECKPOINT_PLACEHOLDER",
]
