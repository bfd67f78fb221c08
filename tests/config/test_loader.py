from __future__ import annotations

import json
from pathlib import Path

import pytest

from loginkit.config.loader import apply_domain_defaults, apply_overrides, load_config
from loginkit.contracts.config import DomainDefaults, LoginConfig, RetryConfig
from loginkit.contracts.exceptions import ConfigError
from loginkit.contracts.stores import AgentOptions


def _write(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_defaults_cover_long_consent_window() -> None:
    config = LoginConfig()

    assert config.retry.max_attempts == 1800
    assert config.retry.wait == 1.0
    assert config.side_channel_address == "localhost:8981"
    assert config.side_channel_timeout == 2.0


def test_server_falls_back_to_domain() -> None:
    assert LoginConfig().server_for("example.com") == "https://auth.example.com"
    assert LoginConfig(server="https://login.corp/").server_for("example.com") == "https://login.corp"


def test_missing_default_file_yields_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr("loginkit.config.loader.DEFAULT_CONFIG_PATH", tmp_path / "absent.json")

    assert load_config() == LoginConfig()


def test_missing_explicit_file_is_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="failed reading config file"):
        load_config(tmp_path / "absent.json")


def test_invalid_json_is_error(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{", encoding="utf-8")

    with pytest.raises(ConfigError, match="invalid JSON"):
        load_config(path)


def test_invalid_values_are_error(tmp_path: Path) -> None:
    path = _write(tmp_path / "config.json", {"retry": {"max_attempts": 0}})

    with pytest.raises(ConfigError, match="invalid config"):
        load_config(path)


def test_relative_store_path_resolves_against_config_dir(tmp_path: Path) -> None:
    path = _write(tmp_path / "config.json", {"identity_store_path": "ids.json", "server": "https://auth.corp"})

    config = load_config(path)

    assert config.identity_store_path == (tmp_path / "ids.json").resolve()
    assert config.server == "https://auth.corp"


def test_overrides_skip_none_and_validate() -> None:
    config = apply_overrides(
        LoginConfig(),
        {"server": "https://x", "no_default": None, "retry.max_attempts": 5, "agent.lifetime": 60},
    )

    assert config.server == "https://x"
    assert config.no_default is False
    assert config.retry.max_attempts == 5
    assert config.retry.wait == 1.0
    assert config.agent.lifetime == 60


def test_invalid_override_is_config_error() -> None:
    with pytest.raises(ConfigError):
        apply_overrides(LoginConfig(), {"retry.max_attempts": -1})


def test_domain_defaults_merge_over_base() -> None:
    config = LoginConfig(
        domains={
            "example.com": DomainDefaults(
                server="https://auth.example.com:8443",
                side_channel_address="localhost:9000",
                agent=AgentOptions(lifetime=7200),
                retry=RetryConfig(max_attempts=10),
            )
        }
    )

    merged = apply_domain_defaults(config, "example.com")

    assert merged.server == "https://auth.example.com:8443"
    assert merged.side_channel_address == "localhost:9000"
    assert merged.agent.lifetime == 7200
    assert merged.retry.max_attempts == 10
    assert merged.retry.wait == 1.0


def test_domain_defaults_ignore_other_domains() -> None:
    config = LoginConfig(domains={"other.org": DomainDefaults(server="https://other")})

    assert apply_domain_defaults(config, "example.com") is config


def test_pinned_keys_keep_explicit_values() -> None:
    config = LoginConfig(
        server="https://flag",
        retry=RetryConfig(max_attempts=3),
        domains={"example.com": DomainDefaults(server="https://domain", retry=RetryConfig(max_attempts=10, wait=5))},
    )

    merged = apply_domain_defaults(config, "example.com", pinned={"server", "retry.max_attempts"})

    assert merged.server == "https://flag"
    assert merged.retry.max_attempts == 3
    assert merged.retry.wait == 5


def test_domain_sections_survive_overrides(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "config.json",
        {"retry": {"wait": 2.0}, "domains": {"example.com": {"retry": {"max_attempts": 10}}}},
    )

    config = apply_overrides(load_config(path), {"server": "https://flag"})
    merged = apply_domain_defaults(config, "example.com")

    assert merged.retry.max_attempts == 10
    assert merged.retry.wait == 2.0
