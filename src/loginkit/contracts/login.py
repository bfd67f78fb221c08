"""Login flow state and result contracts."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel

from loginkit.contracts.identity import Identity


class LoginState(StrEnum):
    """States of one login invocation.

    ``ERROR`` is reachable from the first three states only; the side channel
    always proceeds to ``DONE``.
    """

    RESOLVING_IDENTITY = "resolving-identity"
    AUTHENTICATING = "authenticating"
    PERSISTING = "persisting"
    SIDE_CHANNEL = "side-channel"
    DONE = "done"
    ERROR = "error"


class LoginResult(BaseModel):
    identity: Identity
    default_set: bool
    side_channel_ok: bool | None = None

    model_config = {"frozen": True}
