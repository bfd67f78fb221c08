"""Public API surface for loginkit."""

from loginkit.auth import AuthExchange, HttpLoginClient, resolve_identity, split_username
from loginkit.config import apply_domain_defaults, apply_overrides, load_config
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
from loginkit.login import LoginFlow
from loginkit.persistence import CredentialSink, JsonIdentityStore, SshAddAgent
from loginkit.retry import RetryPolicy
from loginkit.sidechannel import SideChannelAuthenticator

__all__ = [
    "AgentOptions",
    "AuthExchange",
    "ConfigError",
    "ConnectError",
    "Credential",
    "CredentialSink",
    "DomainDefaults",
    "FatalAuthError",
    "HttpLoginClient",
    "Identity",
    "IdentityStore",
    "JsonIdentityStore",
    "LoginCancelledError",
    "LoginClient",
    "LoginComplete",
    "LoginConfig",
    "LoginFatal",
    "LoginFlow",
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
    "RetryPolicy",
    "RetryableError",
    "SecretAgent",
    "SideChannelAuthenticator",
    "SideChannelError",
    "SshAddAgent",
    "StoredIdentity",
    "UsageError",
    "apply_domain_defaults",
    "apply_overrides",
    "load_config",
    "resolve_identity",
    "split_username",
]
