"""Writes a fresh credential to the secret agent and the identity store."""

from __future__ import annotations

import logging

from loginkit.contracts.exceptions import PersistenceError
from loginkit.contracts.identity import Credential, Identity
from loginkit.contracts.stores import AgentOptions, IdentityStore, SecretAgent

_LOG = logging.getLogger(__name__)


class CredentialSink:
    """Persists a credential in order: agent, identity record, default pointer.

    A failing agent install stops everything. A failing identity-store write
    is reported but leaves the already installed agent key in place; the two
    stores can then disagree until the next successful login.
    """

    def __init__(
        self,
        *,
        agent: SecretAgent,
        store: IdentityStore,
        agent_options: AgentOptions | None = None,
        no_default: bool = False,
        logger: logging.Logger | None = None,
    ) -> None:
        self._agent = agent
        self._store = store
        self._agent_options = agent_options or AgentOptions()
        self._no_default = no_default
        self._log = logger or _LOG

    async def save(self, credential: Credential, identity: Identity) -> bool:
        """Persist *credential* for *identity*; return whether it became the default."""
        self._log.info("Storing credentials in SSH agent...")
        try:
            await self._agent.install(credential, self._agent_options)
        except PersistenceError:
            raise
        except Exception as exc:
            raise PersistenceError(f"failed to install credentials in agent: {exc}", stage="agent") from exc

        self._log.info("Storing identity %s in local identity store...", identity.key)
        try:
            self._store.save(identity.key, credential.token)
        except Exception as exc:
            raise PersistenceError(f"could not store identity: {exc}", stage="identity-store") from exc

        if self._no_default:
            self._log.info("Stored identity %s", identity.key)
            return False

        try:
            self._store.set_default(identity.key)
        except Exception as exc:
            raise PersistenceError(f"could not mark identity as default: {exc}", stage="default") from exc
        self._log.info("Stored identity %s as default", identity.key)
        return True
