from __future__ import annotations

import base64

import pytest

from sandbox_sdk.errors import ReadOnlyClientError, UnsupportedMethodError
from sandbox_sdk.rpc import SandboxReader, SandboxRpcClient
from sandbox_sdk.tx import SignedTransaction, as_signed_transaction

from .fake_backend import BOB, FakeSigner, FakeTransaction, encode_tx


@pytest.mark.asyncio
async def test_builder_gets_sender_and_read_only_client(client: SandboxRpcClient, funded: str):
    tx = FakeTransaction(pay=[{"recipient": BOB, "amount": 40}])
    signer = FakeSigner(funded)

    result = await client.sign_and_execute_transaction(transaction=tx, signer=signer)

    assert not result.get("errors")
    assert tx.sender == funded
    assert tx.build_clients == [client.reader]
    assert isinstance(tx.build_clients[0], SandboxReader)
    assert tx.gas_price == 1000
    assert len(signer.signed) == 1
    assert (await client.get_balance(owner=BOB))["totalBalance"] == "40"


@pytest.mark.asyncio
async def test_existing_sender_is_kept(client: SandboxRpcClient, funded: str):
    tx = FakeTransaction(sender=BOB)
    result = await client.sign_and_execute_transaction(transaction=tx, signer=FakeSigner(funded))
    assert tx.sender == BOB
    # Signed by a key that is not the sender.
    assert result["errors"] == ["Invalid user signature"]


@pytest.mark.asyncio
async def test_raw_bytes_skip_building(client: SandboxRpcClient, funded: str):
    raw = encode_tx(funded, pay=[{"recipient": BOB, "amount": 1}])
    signer = FakeSigner(funded)
    result = await client.sign_and_execute_transaction(transaction=raw, signer=signer)
    assert not result.get("errors")
    assert signer.signed == [raw]


@pytest.mark.asyncio
async def test_async_signer(client: SandboxRpcClient, funded: str):
    signer = FakeSigner(funded, use_async=True)
    result = await client.sign_and_execute_transaction(transaction=FakeTransaction(), signer=signer)
    assert not result.get("errors")
    assert len(signer.signed) == 1


@pytest.mark.asyncio
async def test_ledger_rejection_is_returned_not_raised(client: SandboxRpcClient, sandbox, funded: str):
    sandbox.reject_next_transaction("maintenance")
    result = await client.sign_and_execute_transaction(
        transaction=FakeTransaction(), signer=FakeSigner(funded)
    )
    assert "maintenance" in result["errors"][0]

    again = await client.sign_and_execute_transaction(
        transaction=FakeTransaction(), signer=FakeSigner(funded)
    )
    assert not again.get("errors")


@pytest.mark.asyncio
async def test_build_failure_propagates(client: SandboxRpcClient, sandbox, funded: str):
    class Broken(FakeTransaction):
        async def build(self, *, client):
            raise RuntimeError("cannot resolve gas")

    with pytest.raises(RuntimeError, match="cannot resolve gas"):
        await client.sign_and_execute_transaction(transaction=Broken(), signer=FakeSigner(funded))
    assert sandbox.query_transaction_blocks()["data"] == []


@pytest.mark.asyncio
async def test_builder_cannot_submit_through_reader(client: SandboxRpcClient, sandbox, funded: str):
    class Reentrant(FakeTransaction):
        async def build(self, *, client):
            await client.execute_transaction_block(transaction_block=b"{}", signature="x")

    with pytest.raises(ReadOnlyClientError) as ei:
        await client.sign_and_execute_transaction(transaction=Reentrant(), signer=FakeSigner(funded))
    assert ei.value.method == "execute_transaction_block"
    assert sandbox.query_transaction_blocks()["data"] == []


def test_reader_refuses_mutations_and_delegates_queries(client: SandboxRpcClient):
    reader = client.reader
    with pytest.raises(ReadOnlyClientError):
        reader.sign_and_execute_transaction(transaction=b"", signer=None)
    assert reader.get_object == client.get_object
    with pytest.raises(AttributeError):
        reader._client_internals


@pytest.mark.asyncio
async def test_options_are_passed_through(client: SandboxRpcClient, funded: str, monkeypatch):
    seen = {}
    original = SandboxRpcClient.execute_transaction_block

    async def spy(self, **kwargs):
        seen.update(kwargs)
        return await original(self, **kwargs)

    monkeypatch.setattr(SandboxRpcClient, "execute_transaction_block", spy)
    await client.sign_and_execute_transaction(
        transaction=FakeTransaction(),
        signer=FakeSigner(funded),
        options={"showEffects": True},
        request_type="WaitForLocalExecution",
    )
    assert seen["options"] == {"showEffects": True}
    assert seen["request_type"] == "WaitForLocalExecution"
    assert seen["signature"] == f"sig:{funded}"


@pytest.mark.asyncio
async def test_signer_returning_mapping(client: SandboxRpcClient, funded: str):
    class DictSigner(FakeSigner):
        def sign_transaction(self, tx_bytes):
            return {"signature": f"sig:{self.address}", "bytes": base64.b64encode(tx_bytes).decode()}

    result = await client.sign_and_execute_transaction(transaction=FakeTransaction(), signer=DictSigner(funded))
    assert not result.get("errors")


def test_as_signed_transaction_rejects_garbage():
    with pytest.raises(TypeError):
        as_signed_transaction(object())
    with pytest.raises(TypeError):
        as_signed_transaction({"signature": "s"})
    signed = SignedTransaction(signature="s", bytes=b"b")
    assert as_signed_transaction(signed) is signed


@pytest.mark.parametrize("name", ["method", "sandbox", "supports", "reader", "not_a_client_method"])
def test_reader_hides_everything_but_queries(client: SandboxRpcClient, name: str):
    with pytest.raises(ReadOnlyClientError) as ei:
        getattr(client.reader, name)
    assert ei.value.method == name


def test_reader_passes_unsupported_stubs_through(client: SandboxRpcClient):
    with pytest.raises(UnsupportedMethodError):
        client.reader.get_all_coins(owner=BOB)


@pytest.mark.asyncio
async def test_builder_cannot_reach_the_sandbox(client: SandboxRpcClient, sandbox, funded: str):
    class Sneaky(FakeTransaction):
        async def build(self, *, client):
            await client.method("execute_transaction_block")(
                transaction_block=encode_tx(funded, pay=[{"recipient": BOB, "amount": 7}]),
                signature=f"sig:{funded}",
            )

    class Resetting(FakeTransaction):
        async def build(self, *, client):
            client.sandbox.reset()

    for tx in (Sneaky(), Resetting()):
        with pytest.raises(ReadOnlyClientError):
            await client.sign_and_execute_transaction(transaction=tx, signer=FakeSigner(funded))

    assert sandbox.get_balance(BOB) == 0
    assert sandbox.get_balance(funded) == 10_000
    assert sandbox.query_transaction_blocks()["data"] == []
