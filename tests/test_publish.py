from __future__ import annotations

import subprocess

import pytest
import structlog

from sandbox_sdk.errors import BackendError, ToolchainError
from sandbox_sdk.logging import bind_context, clear_context
from sandbox_sdk.move import build as build_mod
from sandbox_sdk.move import publish_package
from sandbox_sdk.types import SUI_FRAMEWORK_ID, SUI_STD_ID

from .fake_backend import ALICE, build_report

D1 = "0x" + "d1" * 32


def _compiler(monkeypatch, stdout: str = "", fail: bool = False):
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        if fail:
            raise subprocess.CalledProcessError(1, cmd, output="", stderr="error: bad package")
        return subprocess.CompletedProcess(cmd, 0, stdout=stdout, stderr="")

    monkeypatch.setattr(build_mod.subprocess, "run", fake_run)
    return calls


def test_publish_compiles_and_submits(sandbox, fake, tmp_path, monkeypatch):
    stdout = "BUILDING pkg\n" + build_report([b"mod-a", b"mod-b"], [D1, SUI_STD_ID])
    calls = _compiler(monkeypatch, stdout)

    response = publish_package(sandbox, tmp_path, ALICE, sui_bin="/opt/sui")

    assert response["objectChanges"][0]["type"] == "published"
    assert calls[0][:5] == ["/opt/sui", "move", "build", "--path", str(tmp_path)]
    published = fake.ledger.published[0]
    assert published["modules"] == [b"mod-a", b"mod-b"]
    assert published["dependencies"] == [SUI_STD_ID, SUI_FRAMEWORK_ID, D1]
    assert published["sender"] == ALICE


def test_failed_build_publishes_nothing(sandbox, fake, tmp_path, monkeypatch):
    _compiler(monkeypatch, fail=True)
    with pytest.raises(ToolchainError) as ei:
        publish_package(sandbox, tmp_path, ALICE, sui_bin="sui")
    assert "bad package" in str(ei.value)
    assert fake.ledger.published == []


def test_backend_refusal_is_backend_error(sandbox, fake, tmp_path, monkeypatch):
    _compiler(monkeypatch, build_report([b"m"], []))
    # A backend that insists on an extra dependency the build did not report.
    original = type(fake.package_api()).publish

    def strict(self, modules, dependency_ids, sender):
        if D1 not in dependency_ids:
            raise RuntimeError("Publishing package failed: unresolved dependency")
        return original(self, modules, dependency_ids, sender)

    monkeypatch.setattr(type(fake.package_api()), "publish", strict)
    with pytest.raises(BackendError) as ei:
        publish_package(sandbox, tmp_path, ALICE, sui_bin="sui")
    assert ei.value.operation == "publish"


def test_publishing_twice_yields_two_packages(sandbox, fake, tmp_path, monkeypatch):
    _compiler(monkeypatch, build_report([b"m"], []))
    first = publish_package(sandbox, tmp_path, ALICE, sui_bin="sui")
    second = publish_package(sandbox, tmp_path, ALICE, sui_bin="sui")
    assert first["objectChanges"][0]["packageId"] != second["objectChanges"][0]["packageId"]
    assert len(fake.ledger.published) == 2


def test_caller_log_context_is_restored(sandbox, tmp_path, monkeypatch):
    seen = {}
    _compiler(monkeypatch, build_report([b"m"], []))
    original = build_mod.parse_build_output

    def spy(stdout):
        seen.update(structlog.contextvars.get_contextvars())
        return original(stdout)

    monkeypatch.setattr(build_mod, "parse_build_output", spy)
    bind_context(package_dir="outer", run="7")
    try:
        publish_package(sandbox, tmp_path, ALICE, sui_bin="sui")
        after = structlog.contextvars.get_contextvars()
    finally:
        clear_context()

    assert seen["package_dir"] == str(tmp_path)
    assert after["package_dir"] == "outer"
    assert after["run"] == "7"
