from __future__ import annotations

import pytest

from loginkit.contracts.exceptions import PersistenceError
from loginkit.contracts.identity import Credential, Identity
from loginkit.contracts.stores import AgentOptions
from loginkit.persistence.sink import CredentialSink
from tests.fakes.login import FakeAgent, MemoryIdentityStore


@pytest.mark.asyncio
async def test_saves_to_agent_store_and_default(
    alice: Identity, credential: Credential, agent: FakeAgent, store: MemoryIdentityStore
) -> None:
    options = AgentOptions(lifetime=60)
    sink = CredentialSink(agent=agent, store=store, agent_options=options)

    assert await sink.save(credential, alice) is True

    assert agent.installed == [(credential, options)]
    assert store.records == {"alice@example.com": "tok123"}
    assert store.default == "alice@example.com"


@pytest.mark.asyncio
async def test_no_default_leaves_pointer_alone(
    alice: Identity, credential: Credential, agent: FakeAgent, store: MemoryIdentityStore
) -> None:
    sink = CredentialSink(agent=agent, store=store, no_default=True)

    assert await sink.save(credential, alice) is False

    assert store.records == {"alice@example.com": "tok123"}
    assert store.default is None


@pytest.mark.asyncio
async def test_agent_failure_stops_before_store(
    alice: Identity, credential: Credential, store: MemoryIdentityStore
) -> None:
    sink = CredentialSink(agent=FakeAgent(error=RuntimeError("agent gone")), store=store)

    with pytest.raises(PersistenceError, match="agent gone") as exc_info:
        await sink.save(credential, alice)

    assert exc_info.value.stage == "agent"
    assert store.save_calls == 0
    assert store.default is None


@pytest.mark.asyncio
async def test_agent_persistence_error_passes_through(
    alice: Identity, credential: Credential, store: MemoryIdentityStore
) -> None:
    original = PersistenceError("ssh-add exited with status 2", stage="agent")
    sink = CredentialSink(agent=FakeAgent(error=original), store=store)

    with pytest.raises(PersistenceError) as exc_info:
        await sink.save(credential, alice)

    assert exc_info.value is original


@pytest.mark.asyncio
async def test_store_failure_keeps_installed_agent_key(
    alice: Identity, credential: Credential, agent: FakeAgent
) -> None:
    store = MemoryIdentityStore(save_error=OSError("disk full"))
    sink = CredentialSink(agent=agent, store=store)

    with pytest.raises(PersistenceError, match="could not store identity") as exc_info:
        await sink.save(credential, alice)

    assert exc_info.value.stage == "identity-store"
    assert len(agent.installed) == 1
    assert store.default is None


@pytest.mark.asyncio
async def test_default_failure_is_reported(alice: Identity, credential: Credential, agent: FakeAgent) -> None:
    store = MemoryIdentityStore(default_error=OSError("read-only"))
    sink = CredentialSink(agent=agent, store=store)

    with pytest.raises(PersistenceError, match="could not mark identity as default") as exc_info:
        await sink.save(credential, alice)

    assert exc_info.value.stage == "default"
    assert store.records == {"alice@example.com": "tok123"}


@pytest.mark.asyncio
async def test_saving_twice_does_not_duplicate(
    alice: Identity, credential: Credential, agent: FakeAgent, store: MemoryIdentityStore
) -> None:
    sink = CredentialSink(agent=agent, store=store)

    await sink.save(credential, alice)
    await sink.save(credential, alice)

    assert store.records == {"alice@example.com": "tok123"}
