"""Login exchange and identity resolution."""

from loginkit.auth.client import HttpLoginClient
from loginkit.auth.exchange import AuthExchange
from loginkit.auth.identity import resolve_identity, split_username

__all__ = ["AuthExchange", "HttpLoginClient", "resolve_identity", "split_username"]
