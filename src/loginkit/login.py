"""Login flow composition root.

Resolves the identity, polls the authentication service until the user has
approved the login, persists the credential and finally seeds the local proxy
daemon. The side channel runs strictly after persistence and can never turn a
successful login into a failed one.
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager

from loginkit.auth.client import HttpLoginClient
from loginkit.auth.exchange import AuthExchange
from loginkit.auth.identity import resolve_identity
from loginkit.config.loader import apply_domain_defaults
from loginkit.contracts.config import LoginConfig
from loginkit.contracts.exceptions import LoginKitError
from loginkit.contracts.exchange import LoginClient
from loginkit.contracts.identity import Identity
from loginkit.contracts.login import LoginResult, LoginState
from loginkit.contracts.progress import LoginProgress, NullLoginProgress
from loginkit.contracts.stores import IdentityStore, SecretAgent
from loginkit.persistence.agent import SshAddAgent
from loginkit.persistence.identity_store import JsonIdentityStore
from loginkit.persistence.sink import CredentialSink
from loginkit.retry.policy import RetryPolicy
from loginkit.sidechannel.authenticator import SideChannelAuthenticator

_LOG = logging.getLogger(__name__)

LoginClientFactory = Callable[[LoginConfig, Identity], LoginClient]
SideChannelFactory = Callable[[LoginConfig], SideChannelAuthenticator]


def default_client_factory(config: LoginConfig, identity: Identity) -> LoginClient:
    return HttpLoginClient(server=config.server_for(identity.domain), timeout=config.request_timeout)


class LoginFlow:
    """Runs one login invocation."""

    def __init__(
        self,
        *,
        config: LoginConfig,
        store: IdentityStore | None = None,
        agent: SecretAgent | None = None,
        client_factory: LoginClientFactory | None = None,
        side_channel_factory: SideChannelFactory | None = None,
        progress: LoginProgress | None = None,
        rng: random.Random | None = None,
        cancel: asyncio.Event | None = None,
        pinned: Iterable[str] = (),
        debug: bool = False,
        logger: logging.Logger | None = None,
    ) -> None:
        self._config = config
        self._store = store or JsonIdentityStore(config.identity_store_path)
        self._log = logger or _LOG
        self._agent = agent or SshAddAgent(logger=self._log)
        self._client_factory = client_factory or default_client_factory
        self._side_channel_factory = side_channel_factory or self._default_side_channel
        self._progress = progress or NullLoginProgress()
        self._rng = rng
        self._cancel = cancel
        self._pinned = frozenset(pinned)
        self._debug = debug
        self.state = LoginState.RESOLVING_IDENTITY
        self.history: list[LoginState] = []

    async def run(self, argument: str | None = None) -> LoginResult:
        self.history = []
        with self._phase(LoginState.RESOLVING_IDENTITY, "Identity"):
            identity = resolve_identity(
                argument=argument,
                configured=self._config.identity,
                store=self._store,
                default_domain=self._config.default_domain,
            )
            config = self._domain_config(identity.domain)

        with self._phase(LoginState.AUTHENTICATING, "Authenticate"):
            rng = self._rng if self._rng is not None else random.Random(config.retry.seed)
            policy = RetryPolicy.from_config(config.retry, rng=rng, cancel=self._cancel, logger=self._log)
            client = self._client_factory(config, identity)
            try:
                exchange = AuthExchange(client=client, policy=policy, progress=self._progress, logger=self._log)
                credential = await exchange.perform(identity)
            finally:
                await client.aclose()

        with self._phase(LoginState.PERSISTING, "Persist"):
            sink = CredentialSink(
                agent=self._agent,
                store=self._store,
                agent_options=config.agent,
                no_default=config.no_default,
                logger=self._log,
            )
            default_set = await sink.save(credential, identity)

        self._enter(LoginState.SIDE_CHANNEL)
        side_channel_ok: bool | None = None
        if config.side_channel_enabled:
            self._progress.phase_start("Side channel")
            self._log.info("Sending side-channel request so the proxy daemon picks up credentials...")
            side_channel_ok = await self._seed_side_channel(config, credential.token)
            self._progress.phase_done("Side channel")

        self._enter(LoginState.DONE)
        return LoginResult(identity=identity, default_set=default_set, side_channel_ok=side_channel_ok)

    def _domain_config(self, domain: str) -> LoginConfig:
        try:
            return apply_domain_defaults(self._config, domain, pinned=self._pinned)
        except LoginKitError as exc:
            self._log.info("updating defaults for domain %s failed: %s", domain, exc)
            return self._config

    async def _seed_side_channel(self, config: LoginConfig, token: str) -> bool:
        try:
            return await self._side_channel_factory(config).authenticate(token)
        except Exception as exc:
            self._log.debug("side channel failed: %s", exc)
            return False

    def _default_side_channel(self, config: LoginConfig) -> SideChannelAuthenticator:
        return SideChannelAuthenticator(
            address=config.side_channel_address,
            instance=config.side_channel_instance,
            connect_timeout=config.side_channel_timeout,
            debug=self._debug,
            logger=self._log,
        )

    def _enter(self, state: LoginState) -> None:
        self.state = state
        self.history.append(state)

    @contextmanager
    def _phase(self, state: LoginState, label: str) -> Iterator[None]:
        self._enter(state)
        self._progress.phase_start(label)
        try:
            yield
        except BaseException as exc:
            self._enter(LoginState.ERROR)
            self._progress.phase_error(label, exc)
            raise
        self._progress.phase_done(label)
