"""Seeds a local build-cache proxy daemon with a fresh token.

The daemon authenticates lazily: it reuses whatever credentials it sees on
requests it proxies. Until some build tool sends it a request, reads through
its mounts fail. Sending one cheap read-only lookup right after login, with
the token attached as a cookie, warms it up.

This is a workaround until the daemon supports a credential helper. Nothing
outside this package depends on it, and it never fails the login.
"""

from __future__ import annotations

import logging

import httpx

from loginkit.contracts.exceptions import SideChannelError
from loginkit.sidechannel.transport import InterceptingTransport, cookie_auth_interceptor

_LOG = logging.getLogger(__name__)
_TRANSPORT_LOGGERS = ("httpx", "httpcore")

# An arbitrary digest; the daemon answers that the blob is missing, which is fine.
_LOOKUP_DIGEST = {
    "hash": "013ad2661e3240ec6e0c8f79eb14944f599e04aeffa78d90873a6d679297746c",
    "sizeBytes": "22733",
}


class SideChannelAuthenticator:
    def __init__(
        self,
        *,
        address: str,
        instance: str = "",
        connect_timeout: float = 2.0,
        debug: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._address = address
        self._instance = instance.strip("/")
        self._connect_timeout = connect_timeout
        self._debug = debug
        self._transport = transport
        self._log = logger or _LOG

    @property
    def base_url(self) -> str:
        if "://" in self._address:
            return self._address.rstrip("/")
        return f"http://{self._address}"

    @property
    def path(self) -> str:
        if self._instance:
            return f"/v2/{self._instance}/blobs:findMissing"
        return "/v2/blobs:findMissing"

    async def authenticate(self, token: str) -> bool:
        """Send one authenticated lookup to the daemon. Returns ``False`` on any failure."""
        previous = {name: logging.getLogger(name).level for name in _TRANSPORT_LOGGERS}
        if self._debug:
            for name in _TRANSPORT_LOGGERS:
                logging.getLogger(name).setLevel(logging.DEBUG)
        try:
            await self._find_missing_blobs(token)
        except Exception as exc:
            if self._debug:
                self._log.error("Failed to auth side-channel daemon at %s", self._address, exc_info=exc)
            else:
                self._log.debug("Failed to auth side-channel daemon at %s: %s", self._address, exc)
            return False
        finally:
            for name, level in previous.items():
                logging.getLogger(name).setLevel(level)
        self._log.debug("side-channel daemon at %s accepted credentials", self._address)
        return True

    async def _find_missing_blobs(self, token: str) -> None:
        transport = InterceptingTransport(
            transport=self._transport,
            interceptors=[cookie_auth_interceptor(token)],
        )
        timeout = httpx.Timeout(5.0, connect=self._connect_timeout)
        try:
            async with httpx.AsyncClient(base_url=self.base_url, transport=transport, timeout=timeout) as client:
                response = await client.post(self.path, json={"blobDigests": [_LOOKUP_DIGEST]})
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise SideChannelError(f"side-channel request to {self._address} failed: {exc}") from exc
