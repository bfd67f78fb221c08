"""Public contracts for loginkit."""

from loginkit.contracts.config import DomainDefaults, LoginConfig, RetryConfig
from loginkit.contracts.exceptions import (
    ConfigError,
    ConnectError,
    FatalAuthError,
    LoginCancelledError,
    LoginKitError,
    PersistenceError,
    RetryableError,
    RetryExhaustedError,
    SideChannelError,
    UsageError,
)
from loginkit.contracts.exchange import LoginClient, LoginComplete, LoginFatal, LoginPending, LoginResponse
from loginkit.contracts.identity import Credential, Identity, StoredIdentity
from loginkit.contracts.login import LoginResult, LoginState
from loginkit.contracts.progress import LoginProgress, NullLoginProgress
from loginkit.contracts.stores import AgentOptions, IdentityStore, SecretAgent

__all__ = [
    "AgentOptions",
    "ConfigError",
    "ConnectError",
    "Credential",
    "DomainDefaults",
    "FatalAuthError",
    "Identity",
    "IdentityStore",
    "LoginCancelledError",
    "LoginClient",
    "LoginComplete",
    "LoginConfig",
    "LoginFatal",
    "LoginKitError",
    "LoginPending",
    "LoginProgress",
    "LoginResponse",
    "LoginResult",
    "LoginState",
    "NullLoginProgress",
    "PersistenceError",
    "RetryConfig",
    "RetryExhaustedError",
    "RetryableError",
    "SecretAgent",
    "SideChannelError",
    "StoredIdentity",
    "UsageError",
]
