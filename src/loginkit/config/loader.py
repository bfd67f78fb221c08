"""Config loading and per-domain defaults."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from loginkit.contracts.config import DEFAULT_CONFIG_DIR, LoginConfig
from loginkit.contracts.exceptions import ConfigError

DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.json"


def _resolve_path(value: Path, *, base_dir: Path) -> Path:
    value = value.expanduser()
    if value.is_absolute():
        return value
    return (base_dir / value).resolve()


def load_config(path: str | Path | None = None) -> LoginConfig:
    """Load and validate config from JSON.

    Without *path* the default location is used, and a missing file there
    yields the built-in defaults. An explicit *path* must exist.
    """
    explicit = path is not None
    config_path = Path(path if path is not None else DEFAULT_CONFIG_PATH).expanduser().resolve()
    if not explicit and not config_path.exists():
        return LoginConfig()

    try:
        raw_payload: Any = json.loads(config_path.read_text(encoding="utf-8"))
        parsed = LoginConfig.model_validate(raw_payload)
    except OSError as exc:
        raise ConfigError(f"failed reading config file: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in config file: {config_path}") from exc
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc

    return parsed.model_copy(
        update={"identity_store_path": _resolve_path(parsed.identity_store_path, base_dir=config_path.parent)}
    )


def apply_overrides(config: LoginConfig, overrides: dict[str, Any]) -> LoginConfig:
    """Return *config* with the non-``None`` *overrides* applied and re-validated."""
    payload = config.model_dump()
    # Domain sections keep only the keys the user set.
    payload["domains"] = {name: section.model_dump(exclude_unset=True) for name, section in config.domains.items()}
    retry = dict(payload["retry"])
    agent = dict(payload["agent"])
    for key, value in overrides.items():
        if value is None:
            continue
        if key.startswith("retry."):
            retry[key.removeprefix("retry.")] = value
        elif key.startswith("agent."):
            agent[key.removeprefix("agent.")] = value
        else:
            payload[key] = value
    payload["retry"] = retry
    payload["agent"] = agent
    try:
        return LoginConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc


def apply_domain_defaults(config: LoginConfig, domain: str, *, pinned: Iterable[str] = ()) -> LoginConfig:
    """Merge the ``domains[domain]`` section over *config*.

    Keys listed in *pinned* were set explicitly by the caller and keep their
    current value.
    """
    section = config.domains.get(domain)
    if section is None:
        return config

    keep = set(pinned)
    overrides: dict[str, Any] = {}
    if section.server is not None and "server" not in keep:
        overrides["server"] = section.server
    if section.side_channel_address is not None and "side_channel_address" not in keep:
        overrides["side_channel_address"] = section.side_channel_address
    for prefix, model in (("agent", section.agent), ("retry", section.retry)):
        if model is None:
            continue
        for key, value in model.model_dump(exclude_unset=True).items():
            name = f"{prefix}.{key}"
            if name not in keep:
                overrides[name] = value
    return apply_overrides(config, overrides)
