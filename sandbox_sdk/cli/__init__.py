"""
sandbox_sdk.cli
---------------

`sandbox-sdk` command-line entrypoint (see :mod:`sandbox_sdk.cli.main`).
"""

from .main import app, run

__all__ = ["app", "run"]
