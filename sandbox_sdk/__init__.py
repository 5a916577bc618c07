"""
Sui sandbox SDK for Python.
Drive a Sui-client-shaped API against a local, deterministic execution backend.
"""

from .version import __version__  # noqa: F401

# Core config & errors
from .config import SandboxConfig, load_backend_factory  # noqa: F401
from .errors import (  # noqa: F401
    BackendError,
    BackendUnavailableError,
    BuildOutputError,
    DecodeError,
    ReadOnlyClientError,
    SandboxSdkError,
    ToolchainError,
    UnsupportedMethodError,
)

# Facade & client surface
from .client import SandboxClient  # noqa: F401
from .rpc.proxy import SandboxRpcClient, create_sandbox_client  # noqa: F401
from .tx import SignedTransaction  # noqa: F401

# Query helpers
from .types import (  # noqa: F401
    SUI_COIN_TYPE,
    SUI_FRAMEWORK_ID,
    SUI_STD_ID,
    PastObjectStatus,
    affected_object,
    changed_object,
    input_object,
)

# Move packages
from .move import (  # noqa: F401
    compile_move_package,
    find_sui_binary,
    publish_package,
)

__all__ = [
    "__version__",
    # Core
    "SandboxConfig", "load_backend_factory",
    "SandboxSdkError", "UnsupportedMethodError", "ReadOnlyClientError",
    "DecodeError", "BackendError", "BackendUnavailableError",
    "ToolchainError", "BuildOutputError",
    # Clients
    "SandboxClient", "SandboxRpcClient", "create_sandbox_client", "SignedTransaction",
    # Types
    "SUI_COIN_TYPE", "SUI_STD_ID", "SUI_FRAMEWORK_ID", "PastObjectStatus",
    "changed_object", "input_object", "affected_object",
    # Move
    "compile_move_package", "find_sui_binary", "publish_package",
]
