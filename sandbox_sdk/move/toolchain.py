"""
Locate the `sui` CLI used to compile Move packages.

Search order:
  1. explicit path from config (``SANDBOX_SUI_BIN``)
  2. ``sui`` on $PATH
  3. well-known install locations (/usr/local/bin, ~/.cargo/bin, ~/.local/bin)
  4. the bare command name ``sui``

Discovery never fails: when nothing is found the bare name is returned and the
error surfaces when the compiler is actually launched.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import List, Optional

from ..config import SandboxConfig
from ..logging import get_logger

log = get_logger(__name__)

SUI_COMMAND = "sui"


def candidate_paths(home: Optional[str] = None) -> List[Path]:
    home_dir = Path(home) if home else Path.home()
    return [
        Path("/usr/local/bin") / SUI_COMMAND,
        home_dir / ".cargo" / "bin" / SUI_COMMAND,
        home_dir / ".local" / "bin" / SUI_COMMAND,
    ]


def find_sui_binary(config: Optional[SandboxConfig] = None) -> str:
    """Return the path of the `sui` binary, or ``"sui"`` if none was found."""
    config = config or SandboxConfig.from_env()
    if config.sui_bin:
        return config.sui_bin

    on_path = shutil.which(SUI_COMMAND)
    if on_path:
        return on_path

    for candidate in candidate_paths(os.environ.get("HOME")):
        if candidate.exists():
            return str(candidate)

    log.debug("sui_binary_not_found", fallback=SUI_COMMAND)
    return SUI_COMMAND


__all__ = ["SUI_COMMAND", "candidate_paths", "find_sui_binary"]
