"""Bounded, time-spaced retry executor with a cancellation-aware wait."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

from loginkit.contracts.config import RetryConfig
from loginkit.contracts.exceptions import LoginCancelledError, RetryableError, RetryExhaustedError

_LOG = logging.getLogger(__name__)

T = TypeVar("T")


class RetryPolicy:
    """Runs an async operation up to *max_attempts* times.

    The operation raises :class:`RetryableError` to ask for another attempt;
    any other exception stops the loop and propagates unchanged. Attempt starts
    are spaced by *wait* seconds, jittered by up to *jitter* seconds in either
    direction using the injected *rng*. Time already spent inside an attempt
    counts towards the wait.

    When *cancel* is set, a pending wait is abandoned and
    :class:`LoginCancelledError` is raised.
    """

    def __init__(
        self,
        *,
        max_attempts: int,
        wait: float,
        jitter: float = 0.0,
        rng: random.Random | None = None,
        cancel: asyncio.Event | None = None,
        logger: logging.Logger | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if wait < 0 or jitter < 0:
            raise ValueError("wait and jitter must not be negative")
        self._max_attempts = max_attempts
        self._wait_seconds = wait
        self._jitter = jitter
        self._rng = rng or random.Random()
        self._cancel = cancel
        self._log = logger or _LOG
        self._clock = clock

    @classmethod
    def from_config(
        cls,
        config: RetryConfig,
        *,
        rng: random.Random | None = None,
        cancel: asyncio.Event | None = None,
        logger: logging.Logger | None = None,
    ) -> RetryPolicy:
        if rng is None:
            rng = random.Random(config.seed)
        return cls(
            max_attempts=config.max_attempts,
            wait=config.wait,
            jitter=config.jitter,
            rng=rng,
            cancel=cancel,
            logger=logger,
        )

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def next_delay(self) -> float:
        if self._jitter == 0:
            return self._wait_seconds
        return max(0.0, self._wait_seconds + self._rng.uniform(-self._jitter, self._jitter))

    async def run(self, operation: Callable[[int], Awaitable[T]], *, description: str = "operation") -> T:
        last_error: RetryableError | None = None
        for attempt in range(1, self._max_attempts + 1):
            self._raise_if_cancelled()
            started = self._clock()
            try:
                return await operation(attempt)
            except RetryableError as exc:
                last_error = exc
                self._log.debug("%s attempt %d/%d not complete: %s", description, attempt, self._max_attempts, exc)

            if attempt == self._max_attempts:
                break
            elapsed = self._clock() - started
            await self._wait(max(0.0, self.next_delay() - elapsed))

        raise RetryExhaustedError(
            f"{description} did not complete after {self._max_attempts} attempt(s)",
            attempts=self._max_attempts,
            last_error=last_error,
        ) from last_error

    def _raise_if_cancelled(self) -> None:
        if self._cancel is not None and self._cancel.is_set():
            raise LoginCancelledError("cancelled before the next attempt")

    async def _wait(self, seconds: float) -> None:
        if self._cancel is None:
            await asyncio.sleep(seconds)
            return
        self._raise_if_cancelled()
        try:
            await asyncio.wait_for(self._cancel.wait(), timeout=seconds)
        except TimeoutError:
            return
        raise LoginCancelledError("cancelled while waiting to retry")
