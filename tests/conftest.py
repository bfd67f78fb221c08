"""Shared test fixtures for loginkit tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from loginkit.contracts.config import LoginConfig, RetryConfig
from loginkit.contracts.identity import Credential, Identity
from tests.fakes.login import FakeAgent, MemoryIdentityStore


@pytest.fixture
def alice() -> Identity:
    return Identity(username="alice", domain="example.com")


@pytest.fixture
def credential() -> Credential:
    return Credential(token="tok123")


@pytest.fixture
def agent() -> FakeAgent:
    return FakeAgent()


@pytest.fixture
def store() -> MemoryIdentityStore:
    return MemoryIdentityStore()


@pytest.fixture
def fast_config(tmp_path: Path) -> LoginConfig:
    """A config that polls without waiting between attempts."""
    return LoginConfig(
        server="https://auth.example.com",
        retry=RetryConfig(max_attempts=3, wait=0.0, jitter=0.0, seed=7),
        identity_store_path=tmp_path / "identities.json",
    )
