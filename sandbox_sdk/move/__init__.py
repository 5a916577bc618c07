"""
sandbox_sdk.move
----------------

Move package tooling: find the `sui` CLI, compile a package to base64
bytecode, and publish it into a sandbox.
"""

from __future__ import annotations

from .build import (
    BuildOutput,
    compile_move_package,
    extract_dependency_ids,
    extract_module_bytes,
    parse_build_output,
)
from .publish import publish_package
from .toolchain import find_sui_binary

__all__ = [
    "BuildOutput",
    "compile_move_package",
    "parse_build_output",
    "extract_module_bytes",
    "extract_dependency_ids",
    "find_sui_binary",
    "publish_package",
]
