"""
sandbox_sdk.cli.main
====================

`sandbox-sdk`: build and publish Move packages against a local sandbox.

Commands
--------
    $ sandbox-sdk which
    $ sandbox-sdk build ./move/my_pkg
    $ sandbox-sdk publish ./move/my_pkg --sender 0x... --backend my_native:SuiSandbox

Configuration
-------------
- Backend      : `--backend` or env `SANDBOX_BACKEND` ("module:attr")
- sui binary   : `--sui-bin` or env `SANDBOX_SUI_BIN` (default: discovered)
- Log level    : `--log-level` or env `SANDBOX_LOG_LEVEL` (default: INFO)
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import typer

from ..client import SandboxClient
from ..config import SandboxConfig
from ..errors import SandboxSdkError
from ..logging import setup_logging
from ..move.build import compile_move_package, extract_dependency_ids
from ..move.publish import publish_package
from ..move.toolchain import find_sui_binary
from ..version import __version__, version_info

app = typer.Typer(
    name="sandbox-sdk",
    help="Build and publish Move packages against a local Sui sandbox.",
    no_args_is_help=True,
    add_completion=False,
)

__all__ = ["app", "main", "run"]


@dataclass
class Ctx:
    config: SandboxConfig


def _pretty(obj: Any) -> str:
    return json.dumps(obj, indent=2, ensure_ascii=False, default=str)


def _fail(exc: Exception) -> None:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="DEBUG, INFO, WARNING or ERROR", envvar="SANDBOX_LOG_LEVEL"
    ),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON lines"),
) -> None:
    try:
        config = SandboxConfig.with_overrides(
            SandboxConfig.from_env(),
            log_level=log_level,
            log_format="json" if json_logs else None,
        )
    except ValueError as e:
        _fail(e)
    setup_logging(level=config.log_level, log_format=config.log_format)
    ctx.obj = Ctx(config=config)


@app.command()
def version(
    ctx: typer.Context,
    sui: bool = typer.Option(False, "--sui", help="Also report the sui toolchain version"),
) -> None:
    """Print the SDK version (and optionally the sui toolchain version)."""
    if not sui:
        typer.echo(__version__)
        return
    info = version_info(find_sui_binary(ctx.obj.config))
    typer.echo(str(info) if info.sui else f"{info.sdk} (sui not found)")


@app.command()
def which(ctx: typer.Context) -> None:
    """Print the `sui` binary the build would use."""
    typer.echo(find_sui_binary(ctx.obj.config))


@app.command()
def build(
    ctx: typer.Context,
    package_dir: Path = typer.Argument(..., exists=True, file_okay=False, help="Move package directory"),
    sui_bin: Optional[str] = typer.Option(None, "--sui-bin", help="Path to the sui CLI"),
) -> None:
    """Compile a Move package and print a JSON summary of the build."""
    try:
        output = compile_move_package(package_dir, sui_bin or find_sui_binary(ctx.obj.config))
        summary = {
            "modules": len(output.modules),
            "dependencies": extract_dependency_ids(output),
            "digest": output.digest,
        }
    except SandboxSdkError as e:
        _fail(e)
    typer.echo(_pretty(summary))


@app.command()
def publish(
    ctx: typer.Context,
    package_dir: Path = typer.Argument(..., exists=True, file_okay=False, help="Move package directory"),
    sender: str = typer.Option(..., "--sender", help="Publisher address"),
    backend: Optional[str] = typer.Option(None, "--backend", help="Backend factory as module:attr"),
    sui_bin: Optional[str] = typer.Option(None, "--sui-bin", help="Path to the sui CLI"),
) -> None:
    """Compile a Move package and publish it into a fresh sandbox session."""
    config = SandboxConfig.with_overrides(ctx.obj.config, backend=backend)
    try:
        sandbox = SandboxClient(config=config)
        response = publish_package(
            sandbox, package_dir, sender, sui_bin=sui_bin or find_sui_binary(config)
        )
    except SandboxSdkError as e:
        _fail(e)
    typer.echo(_pretty(response))
    if response.get("errors"):
        raise typer.Exit(2)


def run() -> None:  # pragma: no cover - console entrypoint
    app()


if __name__ == "__main__":  # pragma: no cover
    run()
