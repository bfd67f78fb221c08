"""Exception hierarchy for loginkit."""

from __future__ import annotations


class LoginKitError(Exception):
    """Base exception for all loginkit errors."""


class UsageError(LoginKitError):
    """Malformed or missing identity, or bad command arguments."""


class ConfigError(LoginKitError):
    """Configuration loading or validation failure."""


class ConnectError(LoginKitError):
    """The authentication service cannot be reached."""


class FatalAuthError(LoginKitError):
    """The authentication service permanently rejected the login."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"authentication rejected: {reason}")
        self.reason = reason


class RetryableError(LoginKitError):
    """An attempt did not complete yet and may be retried."""


class RetryExhaustedError(LoginKitError):
    """The retry budget ran out before the operation completed."""

    def __init__(self, message: str, *, attempts: int, last_error: BaseException | None = None) -> None:
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


class LoginCancelledError(LoginKitError):
    """The login was interrupted by a signal or a deadline."""


class PersistenceError(LoginKitError):
    """Writing the credential to the secret agent or identity store failed."""

    def __init__(self, message: str, *, stage: str) -> None:
        super().__init__(message)
        self.stage = stage


class SideChannelError(LoginKitError):
    """Seeding the local proxy daemon failed. Never escapes the authenticator."""
