"""httpx async transport wrapper that runs every request through interceptors."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence

import httpx

CallNext = Callable[[httpx.Request], Awaitable[httpx.Response]]
Interceptor = Callable[[httpx.Request, CallNext], Awaitable[httpx.Response]]


class InterceptingTransport(httpx.AsyncBaseTransport):
    """Wraps an httpx async transport with a chain of call interceptors.

    Interceptors run in the order given; each receives the request and a
    ``call_next`` coroutine that forwards it down the chain.
    """

    def __init__(
        self,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        interceptors: Sequence[Interceptor] = (),
    ) -> None:
        self._transport = transport or httpx.AsyncHTTPTransport()
        self._interceptors = tuple(interceptors)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        call: CallNext = self._transport.handle_async_request
        for interceptor in reversed(self._interceptors):
            call = _bind(interceptor, call)
        return await call(request)

    async def aclose(self) -> None:
        await self._transport.aclose()


def _bind(interceptor: Interceptor, call_next: CallNext) -> CallNext:
    async def call(request: httpx.Request) -> httpx.Response:
        return await interceptor(request, call_next)

    return call


def header_interceptor(name: str, value: str) -> Interceptor:
    async def intercept(request: httpx.Request, call_next: CallNext) -> httpx.Response:
        request.headers[name] = value
        return await call_next(request)

    return intercept


def cookie_auth_interceptor(token: str) -> Interceptor:
    return header_interceptor("cookie", f"Creds={token}")
