"""Login RPC contracts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Literal

from pydantic import BaseModel

from loginkit.contracts.identity import Credential


class LoginPending(BaseModel):
    status: Literal["pending"] = "pending"
    url: str | None = None

    model_config = {"frozen": True}


class LoginFatal(BaseModel):
    status: Literal["fatal"] = "fatal"
    reason: str

    model_config = {"frozen": True}


class LoginComplete(BaseModel):
    status: Literal["complete"] = "complete"
    credential: Credential

    model_config = {"frozen": True}


LoginResponse = LoginPending | LoginFatal | LoginComplete


class LoginClient(ABC):
    @abstractmethod
    async def login(self, *, username: str, domain: str) -> LoginResponse:
        """Issue one login attempt for ``username@domain``."""

    async def aclose(self) -> None:
        """Release transport resources. No-op by default."""
