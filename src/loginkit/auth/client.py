"""HTTP client for the login RPC."""

from __future__ import annotations

import json
import logging
from types import TracebackType
from typing import Annotated, Literal

import httpx
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from loginkit.contracts.exceptions import ConnectError, RetryableError
from loginkit.contracts.exchange import LoginClient, LoginComplete, LoginFatal, LoginPending, LoginResponse
from loginkit.contracts.identity import Credential

_LOG = logging.getLogger(__name__)

# Status codes that mean "try again later" rather than "never".
_RETRYABLE_STATUS_CODES = frozenset({429, 502, 503, 504})

LOGIN_PATH = "/v1/login"


class _PendingPayload(BaseModel):
    status: Literal["pending"]
    url: str | None = None


class _FatalPayload(BaseModel):
    status: Literal["fatal"]
    reason: str = "unspecified"


class _CompletePayload(BaseModel):
    status: Literal["complete"]
    token: str
    private_key: str | None = None
    certificate: str | None = None


_PAYLOAD = TypeAdapter(Annotated[_PendingPayload | _FatalPayload | _CompletePayload, Field(discriminator="status")])


class HttpLoginClient(LoginClient):
    """Sends login attempts as JSON over HTTP.

    Each attempt carries its own *timeout*, independent of the retry budget.
    Failing to connect before the service has ever answered raises
    :class:`ConnectError`. Once it has answered, connection failures count as
    transient like timeouts and server errors, and raise
    :class:`RetryableError` so the caller polls again.
    """

    def __init__(
        self,
        *,
        server: str,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._server = server.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))
        self._reached = False

    async def __aenter__(self) -> HttpLoginClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def login(self, *, username: str, domain: str) -> LoginResponse:
        url = f"{self._server}{LOGIN_PATH}"
        try:
            response = await self._client.post(url, json={"username": username, "domain": domain})
        except (httpx.ConnectError, httpx.ConnectTimeout) as exc:
            if self._reached:
                raise RetryableError(f"lost connection to authentication service: {exc!r}") from exc
            raise ConnectError(f"cannot reach authentication service {self._server}: {exc}") from exc
        except httpx.TransportError as exc:
            raise RetryableError(f"login request failed: {exc!r}") from exc

        self._reached = True
        if response.status_code in _RETRYABLE_STATUS_CODES or response.status_code >= 500:
            raise RetryableError(f"authentication service returned HTTP {response.status_code}")
        if not response.is_success:
            return LoginFatal(reason=self._error_reason(response))

        return self._parse(response)

    @staticmethod
    def _error_reason(response: httpx.Response) -> str:
        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            payload = None
        if isinstance(payload, dict) and payload.get("reason"):
            return str(payload["reason"])
        return f"HTTP {response.status_code}"

    @staticmethod
    def _parse(response: httpx.Response) -> LoginResponse:
        try:
            payload = _PAYLOAD.validate_json(response.content)
        except ValidationError as exc:
            _LOG.debug("unparseable login response: %s", exc)
            return LoginFatal(reason="malformed response from authentication service")

        if isinstance(payload, _PendingPayload):
            return LoginPending(url=payload.url)
        if isinstance(payload, _FatalPayload):
            return LoginFatal(reason=payload.reason)
        try:
            credential = Credential(
                token=payload.token,
                private_key=payload.private_key,
                certificate=payload.certificate,
            )
        except ValidationError:
            return LoginFatal(reason="authentication service returned an empty token")
        return LoginComplete(credential=credential)
