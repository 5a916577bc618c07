"""
Version helpers for the sandbox SDK.

`__version__` is the static package version. `version_info` pairs it with the
version string reported by the `sui` CLI the build pipeline would use, which
is what you want in bug reports: bytecode layout depends on the compiler.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import Optional

# Bump this when publishing
__version__ = "0.1.0"


@dataclass(frozen=True)
class VersionInfo:
    sdk: str
    sui: Optional[str] = None

    def __str__(self) -> str:
        return self.sdk if not self.sui else f"{self.sdk} (sui {self.sui})"


def sui_version(sui_bin: str) -> Optional[str]:
    """
    Return the version reported by ``<sui_bin> --version`` (``"sui 1.30.1-abc"``
    -> ``"1.30.1-abc"``), or None if the binary cannot be run.
    """
    try:
        out = subprocess.run(
            [sui_bin, "--version"],
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    text = out.stdout.strip()
    if not text:
        return None
    name, _, rest = text.partition(" ")
    return rest.strip() if name == "sui" and rest else text


def version_info(sui_bin: Optional[str] = None) -> VersionInfo:
    """SDK version, plus the toolchain version when ``sui_bin`` is given."""
    return VersionInfo(sdk=__version__, sui=sui_version(sui_bin) if sui_bin else None)


__all__ = ["__version__", "VersionInfo", "sui_version", "version_info"]
