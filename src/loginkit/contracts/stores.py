"""Credential store interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field

from loginkit.contracts.identity import Credential, StoredIdentity


class AgentOptions(BaseModel):
    """Options for installing a credential into the secret agent."""

    socket: str | None = None
    lifetime: int | None = Field(default=None, gt=0)
    ssh_add: str = "ssh-add"

    model_config = {"frozen": True}


class SecretAgent(ABC):
    @abstractmethod
    async def install(self, credential: Credential, options: AgentOptions) -> None:
        """Install the credential into the agent. Raises on failure."""


class IdentityStore(ABC):
    @abstractmethod
    def load(self, key: str) -> StoredIdentity | None:
        """Return the record for ``key``, or the default record when ``key`` is empty."""

    @abstractmethod
    def save(self, key: str, token: str) -> None:
        """Store ``token`` under ``key``, replacing any previous record."""

    @abstractmethod
    def set_default(self, key: str) -> None:
        """Mark ``key`` as the identity used when none is given."""
