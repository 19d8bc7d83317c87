"""Configuration: config manager and the shipped JSON defaults."""

from tabkeys.config.config_manager import load_config

__all__ = ["load_config"]
