"""JSON-file identity store."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from loginkit.contracts.exceptions import ConfigError
from loginkit.contracts.identity import StoredIdentity
from loginkit.contracts.stores import IdentityStore


class IdentityDocument(BaseModel):
    default: str | None = None
    identities: dict[str, str] = Field(default_factory=dict)


class JsonIdentityStore(IdentityStore):
    """Maps ``user@domain`` keys to tokens in a single JSON document.

    The file is rewritten atomically and kept readable by the owner only.
    """

    def __init__(self, path: Path) -> None:
        self._path = path.expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def load(self, key: str) -> StoredIdentity | None:
        document = self._read()
        resolved = key or document.default
        if not resolved:
            return None
        token = document.identities.get(resolved)
        if token is None:
            return None
        return StoredIdentity(key=resolved, token=token)

    def save(self, key: str, token: str) -> None:
        if not key:
            raise ValueError("identity key must be non-empty")
        document = self._read()
        document.identities[key] = token
        self._write(document)

    def set_default(self, key: str) -> None:
        document = self._read()
        if key not in document.identities:
            raise KeyError(f"unknown identity: {key}")
        document.default = key
        self._write(document)

    def _read(self) -> IdentityDocument:
        if not self._path.exists():
            return IdentityDocument()
        try:
            payload: Any = json.loads(self._path.read_text(encoding="utf-8"))
            return IdentityDocument.model_validate(payload)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            raise ConfigError(f"invalid identity store file: {self._path}") from exc

    def _write(self, document: IdentityDocument) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        staging = self._path.with_name(f"{self._path.name}.tmp")
        staging.touch(mode=0o600)
        staging.chmod(0o600)
        try:
            staging.write_text(document.model_dump_json(indent=2), encoding="utf-8")
            staging.replace(self._path)
        except OSError:
            staging.unlink(missing_ok=True)
            raise
