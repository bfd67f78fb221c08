"""Identity and credential contracts."""

from __future__ import annotations

from pydantic import BaseModel, field_validator


class Identity(BaseModel):
    username: str = ""
    domain: str

    model_config = {"frozen": True}

    @property
    def key(self) -> str:
        return f"{self.username}@{self.domain}"

    def __str__(self) -> str:
        return self.key


class Credential(BaseModel):
    """Opaque token returned by the authentication service.

    ``private_key`` and ``certificate`` are optional SSH material the service
    may hand out along with the token.
    """

    token: str
    private_key: str | None = None
    certificate: str | None = None

    model_config = {"frozen": True}

    @field_validator("token")
    @classmethod
    def validate_token(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("token must be non-empty")
        return value

    @property
    def has_key_material(self) -> bool:
        return bool(self.private_key)

    def __repr__(self) -> str:
        return f"Credential(token=<redacted>, has_key_material={self.has_key_material})"


class StoredIdentity(BaseModel):
    key: str
    token: str

    model_config = {"frozen": True}
