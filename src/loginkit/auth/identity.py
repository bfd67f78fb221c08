"""Identity parsing and resolution."""

from __future__ import annotations

import logging

from loginkit.contracts.exceptions import UsageError
from loginkit.contracts.identity import Identity
from loginkit.contracts.stores import IdentityStore

_LOG = logging.getLogger(__name__)


def split_username(name: str, default_domain: str | None = None) -> tuple[str, str]:
    """Split ``user@domain`` into its parts.

    ``@domain`` yields an empty username, a bare ``user`` falls back to
    *default_domain*.
    """
    raw = name.strip()
    username, separator, domain = raw.rpartition("@")
    if not separator:
        return raw, (default_domain or "").strip()
    return username, domain.strip()


def resolve_identity(
    *,
    argument: str | None,
    configured: str | None,
    store: IdentityStore,
    default_domain: str | None = None,
) -> Identity:
    """Pick the login principal for this run.

    The positional argument wins, then the configured identity, then the
    default recorded in *store*.
    """
    name = argument or configured or ""
    if not name:
        stored = store.load("")
        if stored is not None:
            _LOG.debug("using default identity %s", stored.key)
            name = stored.key

    username, domain = split_username(name, default_domain)
    if not domain:
        raise UsageError(
            "Please specify your 'username@domain.com' as first argument, '... login myname@mydomain.com'"
        )
    return Identity(username=username, domain=domain)
