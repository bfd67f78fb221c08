"""Progress reporting protocol for the login flow.

The flow emits phase lifecycle events; consumers (e.g. the CLI's Rich
status spinner) implement ``LoginProgress`` to render feedback.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class LoginProgress(ABC):
    """Observer interface for login progress events."""

    @abstractmethod
    def phase_start(self, phase: str) -> None:
        """A login phase is starting."""
        ...  # pragma: no cover

    @abstractmethod
    def phase_done(self, phase: str) -> None:
        """The *phase* has finished successfully."""
        ...  # pragma: no cover

    @abstractmethod
    def phase_error(self, phase: str, error: BaseException) -> None:
        """The *phase* was interrupted by *error*."""
        ...  # pragma: no cover

    @abstractmethod
    def consent_required(self, url: str) -> None:
        """The user must visit *url* to approve the login."""
        ...  # pragma: no cover

    @abstractmethod
    def attempt(self, number: int, total: int) -> None:
        """Login attempt *number* of *total* is about to be sent."""
        ...  # pragma: no cover


class NullLoginProgress(LoginProgress):
    """No-op implementation used when no progress display is requested."""

    def phase_start(self, phase: str) -> None:
        pass

    def phase_done(self, phase: str) -> None:
        pass

    def phase_error(self, phase: str, error: BaseException) -> None:
        pass

    def consent_required(self, url: str) -> None:
        pass

    def attempt(self, number: int, total: int) -> None:
        pass
