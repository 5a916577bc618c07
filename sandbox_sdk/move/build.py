# -*- coding: utf-8 -*-
"""
build.py
========

Compile a Move package with the `sui` CLI and turn its report into what a
publish needs: raw module bytecode and the package dependency ids.

    sui move build --path <pkg> --dump-bytecode-as-base64 --skip-fetch-latest-git-deps

prints (possibly after some progress lines) one JSON object:

    {"modules": ["<base64>", ...], "dependencies": ["0x...", ...], "digest": [...]}

The two framework packages (0x1 std, 0x2 sui) are always dependencies of a
published package; they go first and are never repeated.
"""
from __future__ import annotations

import base64
import binascii
import json
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple, Union

from ..errors import BuildOutputError, ToolchainError
from ..logging import get_logger
from ..types import WELL_KNOWN_DEPENDENCY_IDS, normalize_object_id
from .toolchain import find_sui_binary

log = get_logger(__name__)

BUILD_FLAGS: Tuple[str, ...] = ("--dump-bytecode-as-base64", "--skip-fetch-latest-git-deps")

_JSON_SPAN_RE = re.compile(r"\{[\s\S]*\}")


@dataclass(frozen=True)
class BuildOutput:
    modules: Tuple[str, ...]
    dependencies: Tuple[str, ...]
    digest: Any = None


def build_command(sui_bin: str, package_dir: Union[str, Path]) -> List[str]:
    return [sui_bin, "move", "build", "--path", str(package_dir), *BUILD_FLAGS]


def compile_move_package(
    package_dir: Union[str, Path],
    sui_bin: Optional[str] = None,
) -> BuildOutput:
    """
    Run the compiler and parse its report. Blocks until the process exits.

    Raises ToolchainError if the compiler cannot be started or exits non-zero,
    BuildOutputError if its stdout has no usable JSON report.
    """
    cmd = build_command(sui_bin or find_sui_binary(), package_dir)
    log.info("move_build_started", package_dir=str(package_dir), sui=cmd[0])
    try:
        res = subprocess.run(
            cmd,
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
    except subprocess.CalledProcessError as exc:
        log.error("move_build_failed", package_dir=str(package_dir), returncode=exc.returncode)
        raise ToolchainError(
            f"Failed to build Move package: {exc}",
            command=cmd,
            returncode=exc.returncode,
            stderr=exc.stderr,
        ) from exc
    except OSError as exc:
        log.error("move_build_failed", package_dir=str(package_dir), error=str(exc))
        raise ToolchainError(f"Failed to build Move package: {exc}", command=cmd) from exc

    return parse_build_output(res.stdout)


def parse_build_output(output: str) -> BuildOutput:
    """
    Pull the JSON build report out of compiler stdout. Leading/trailing log
    text is ignored; the report spans from the first '{' to the last '}'.
    """
    match = _JSON_SPAN_RE.search(output or "")
    if not match:
        raise BuildOutputError("Failed to parse build output - no JSON found")
    try:
        info = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise BuildOutputError(f"Failed to parse build output - invalid JSON: {exc}") from exc
    if not isinstance(info, dict):
        raise BuildOutputError("Failed to parse build output - report is not an object")

    modules = info.get("modules")
    dependencies = info.get("dependencies")
    if not isinstance(modules, list) or not all(isinstance(m, str) for m in modules):
        raise BuildOutputError("Failed to parse build output - 'modules' must be a list of base64 strings")
    if not isinstance(dependencies, list) or not all(isinstance(d, str) for d in dependencies):
        raise BuildOutputError("Failed to parse build output - 'dependencies' must be a list of ids")

    return BuildOutput(
        modules=tuple(modules),
        dependencies=tuple(dependencies),
        digest=info.get("digest"),
    )


def extract_module_bytes(build: BuildOutput) -> List[bytes]:
    """Decode each base64 module; compiler order is kept."""
    out: List[bytes] = []
    for index, module in enumerate(build.modules):
        try:
            out.append(base64.b64decode(module, validate=True))
        except (binascii.Error, ValueError) as exc:
            raise BuildOutputError(f"module #{index} is not valid base64: {exc}") from exc
    return out


def extract_dependency_ids(
    build: BuildOutput,
    well_known: Sequence[str] = WELL_KNOWN_DEPENDENCY_IDS,
) -> List[str]:
    """
    Well-known framework ids first, then the compiler-reported ids in order,
    skipping any id already present (compared after normalisation).
    """
    result = [normalize_object_id(dep) for dep in well_known]
    seen = set(result)
    for dep in build.dependencies:
        try:
            dep_id = normalize_object_id(dep)
        except ValueError as exc:
            raise BuildOutputError(f"invalid dependency id in build output: {dep!r}") from exc
        if dep_id in seen:
            continue
        seen.add(dep_id)
        result.append(dep_id)
    return result


__all__ = [
    "BUILD_FLAGS",
    "BuildOutput",
    "build_command",
    "compile_move_package",
    "parse_build_output",
    "extract_module_bytes",
    "extract_dependency_ids",
]
