"""Configuration loading."""

from loginkit.config.loader import DEFAULT_CONFIG_PATH, apply_domain_defaults, apply_overrides, load_config

__all__ = ["DEFAULT_CONFIG_PATH", "apply_domain_defaults", "apply_overrides", "load_config"]
