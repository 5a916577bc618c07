"""
Shared pytest fixtures:
- A recording factory for the in-memory fake backend
- A facade (`sandbox`) and client (`client`) bound to it
- A funded account
"""
from __future__ import annotations

import pytest

from sandbox_sdk.client import SandboxClient
from sandbox_sdk.rpc.proxy import SandboxRpcClient

from .fake_backend import ALICE, FakeSandbox, RecordingFactory


@pytest.fixture
def backend_factory() -> RecordingFactory:
    return RecordingFactory()


@pytest.fixture
def sandbox(backend_factory: RecordingFactory) -> SandboxClient:
    return SandboxClient(backend_factory)


@pytest.fixture
def fake(sandbox: SandboxClient, backend_factory: RecordingFactory) -> FakeSandbox:
    """The live backend session behind `sandbox` (for seeding objects)."""
    return backend_factory.current


@pytest.fixture
def client(sandbox: SandboxClient) -> SandboxRpcClient:
    return SandboxRpcClient(sandbox)


@pytest.fixture
def funded(sandbox: SandboxClient) -> str:
    sandbox.mint_sui(ALICE, 10_000)
    return ALICE
