"""Pydantic models for configuration and loaded state directories."""

from tabkeys.core.models.config import HardwareConfig, ProfileConfig, SystemConfig, TabkeysConfig
from tabkeys.core.models.state import Binding, BindingKind, State, parse_binding_name

__all__ = [
    "TabkeysConfig",
    "HardwareConfig",
    "ProfileConfig",
    "SystemConfig",
    "Binding",
    "BindingKind",
    "State",
    "parse_binding_name",
]
