"""Drives the login RPC until it completes or fails for good."""

from __future__ import annotations

import logging

from loginkit.contracts.exceptions import FatalAuthError, RetryableError, RetryExhaustedError
from loginkit.contracts.exchange import LoginClient, LoginComplete, LoginFatal
from loginkit.contracts.identity import Credential, Identity
from loginkit.contracts.progress import LoginProgress, NullLoginProgress
from loginkit.retry.policy import RetryPolicy

_LOG = logging.getLogger(__name__)


class AuthExchange:
    def __init__(
        self,
        *,
        client: LoginClient,
        policy: RetryPolicy,
        progress: LoginProgress | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._client = client
        self._policy = policy
        self._progress = progress or NullLoginProgress()
        self._log = logger or _LOG

    async def perform(self, identity: Identity) -> Credential:
        """Poll the login RPC for *identity*.

        Pending answers are retried within the policy budget, a fatal answer
        raises :class:`FatalAuthError` at once, and running out of attempts
        raises :class:`RetryExhaustedError`.
        """
        announced: set[str] = set()

        async def attempt(number: int) -> Credential:
            self._progress.attempt(number, self._policy.max_attempts)
            response = await self._client.login(username=identity.username, domain=identity.domain)
            if isinstance(response, LoginComplete):
                return response.credential
            if isinstance(response, LoginFatal):
                raise FatalAuthError(response.reason)
            if response.url and response.url not in announced:
                announced.add(response.url)
                self._log.info("Visit %s to approve the login for %s", response.url, identity.key)
                self._progress.consent_required(response.url)
            raise RetryableError(f"login for {identity.key} is still pending")

        try:
            return await self._policy.run(attempt, description=f"login for {identity.key}")
        except RetryExhaustedError as exc:
            raise RetryExhaustedError(
                f"authentication timed out for {identity.key} after {exc.attempts} attempt(s)",
                attempts=exc.attempts,
                last_error=exc.last_error,
            ) from exc.last_error
