"""SSH agent installer backed by ``ssh-add``."""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from pathlib import Path

from loginkit.contracts.exceptions import PersistenceError
from loginkit.contracts.identity import Credential
from loginkit.contracts.stores import AgentOptions, SecretAgent

_LOG = logging.getLogger(__name__)

_KEY_NAME = "id_loginkit"


class SshAddAgent(SecretAgent):
    """Adds the credential's private key (and certificate) to the running agent.

    Credentials without key material have nothing to install and are skipped.
    """

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        self._log = logger or _LOG

    async def install(self, credential: Credential, options: AgentOptions) -> None:
        if not credential.has_key_material:
            self._log.debug("credential carries no key material; skipping ssh-agent")
            return

        env = dict(os.environ)
        if options.socket:
            env["SSH_AUTH_SOCK"] = options.socket
        if not env.get("SSH_AUTH_SOCK"):
            raise PersistenceError("no ssh-agent available: SSH_AUTH_SOCK is not set", stage="agent")

        with tempfile.TemporaryDirectory(prefix="loginkit-") as workdir:
            key_path = _write_key_files(Path(workdir), credential)
            args = [options.ssh_add]
            if options.lifetime is not None:
                args += ["-t", str(options.lifetime)]
            args.append(str(key_path))
            await self._run(args, env)

    async def _run(self, args: list[str], env: dict[str, str]) -> None:
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=env,
            )
        except OSError as exc:
            raise PersistenceError(f"Failed to execute {args[0]}: {exc}", stage="agent") from exc

        _, stderr = await process.communicate()
        if process.returncode != 0:
            details = stderr.decode(errors="replace").strip()
            message = f"{args[0]} exited with status {process.returncode}"
            if details:
                message = f"{message}: {details}"
            raise PersistenceError(message, stage="agent")
        self._log.debug("key added to ssh-agent")


def _write_key_files(directory: Path, credential: Credential) -> Path:
    key_path = directory / _KEY_NAME
    key_path.touch()
    key_path.chmod(0o600)
    key_path.write_text(_with_newline(credential.private_key or ""), encoding="utf-8")
    if credential.certificate:
        # ssh-add picks up <key>-cert.pub next to the key on its own.
        cert_path = directory / f"{_KEY_NAME}-cert.pub"
        cert_path.write_text(_with_newline(credential.certificate), encoding="utf-8")
    return key_path


def _with_newline(text: str) -> str:
    return text if text.endswith("\n") else f"{text}\n"
