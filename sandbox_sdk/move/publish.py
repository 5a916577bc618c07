"""
Compile a Move package directory and publish it into a sandbox.

There is no resumable middle state: if compiling fails nothing is published,
and the caller simply calls `publish_package` again.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from ..client import SandboxClient
from ..logging import bound_context
from ..types import TransactionBlockResponse
from .build import compile_move_package, extract_dependency_ids, extract_module_bytes


def publish_package(
    sandbox: SandboxClient,
    package_dir: Union[str, Path],
    owner: str,
    *,
    sui_bin: Optional[str] = None,
) -> TransactionBlockResponse:
    """Build ``package_dir`` and publish it with ``owner`` as sender."""
    with bound_context(package_dir=str(package_dir)):
        build = compile_move_package(package_dir, sui_bin)
        modules = extract_module_bytes(build)
        dependencies = extract_dependency_ids(build)
        return sandbox.publish_package(modules, dependencies, owner)


__all__ = ["publish_package"]
