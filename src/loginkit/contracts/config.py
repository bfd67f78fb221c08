"""Configuration contracts."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from loginkit.contracts.stores import AgentOptions

DEFAULT_CONFIG_DIR = Path("~/.config/loginkit")


class RetryConfig(BaseModel):
    # Consent happens out of band; the defaults allow about 30 minutes.
    max_attempts: int = Field(default=1800, gt=0)
    wait: float = Field(default=1.0, ge=0)
    jitter: float = Field(default=0.25, ge=0)
    seed: int | None = None

    model_config = {"frozen": True}


class DomainDefaults(BaseModel):
    server: str | None = None
    side_channel_address: str | None = None
    agent: AgentOptions | None = None
    retry: RetryConfig | None = None

    model_config = {"frozen": True}


class LoginConfig(BaseModel):
    server: str | None = None
    identity: str | None = None
    default_domain: str | None = None
    request_timeout: float = Field(default=10.0, gt=0)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    agent: AgentOptions = Field(default_factory=AgentOptions)
    identity_store_path: Path = DEFAULT_CONFIG_DIR / "identities.json"
    no_default: bool = False
    side_channel_enabled: bool = True
    side_channel_address: str = "localhost:8981"
    side_channel_instance: str = ""
    side_channel_timeout: float = Field(default=2.0, gt=0)
    domains: dict[str, DomainDefaults] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def server_for(self, domain: str) -> str:
        if self.server:
            return self.server.rstrip("/")
        return f"https://auth.{domain}"
