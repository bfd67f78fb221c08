"""Best-effort credential propagation to a local proxy daemon."""

from loginkit.sidechannel.authenticator import SideChannelAuthenticator
from loginkit.sidechannel.transport import (
    InterceptingTransport,
    Interceptor,
    cookie_auth_interceptor,
    header_interceptor,
)

__all__ = [
    "InterceptingTransport",
    "Interceptor",
    "SideChannelAuthenticator",
    "cookie_auth_interceptor",
    "header_interceptor",
]
