"""Credential persistence."""

from loginkit.persistence.agent import SshAddAgent
from loginkit.persistence.identity_store import IdentityDocument, JsonIdentityStore
from loginkit.persistence.sink import CredentialSink

__all__ = ["CredentialSink", "IdentityDocument", "JsonIdentityStore", "SshAddAgent"]
