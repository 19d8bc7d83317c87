"""Configuration Pydantic models: TabkeysConfig, ProfileConfig, HardwareConfig, SystemConfig."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProfileConfig(BaseModel):
    """Where the state tree lives."""

    model_config = ConfigDict(extra="forbid")

    profiles_dir: str = Field(
        default="~/.tabkeys",
        description="Profile root holding every state directory and the 'this' pointer",
    )

    @property
    def root(self) -> Path:
        """Profile root with ``~`` expanded (not resolved)."""
        return Path(self.profiles_dir).expanduser()


class HardwareConfig(BaseModel):
    """Device discovery and external tool settings.

    ``button_image_attr`` is a format string receiving the 0-based physical
    ``slot``.
    """

    model_config = ConfigDict(extra="forbid")

    backend: Literal["sysfs", "mock"] = Field(
        default="sysfs", description="'sysfs' for real tablets, 'mock' for dry runs"
    )

    # sysfs layout (wacom driver LED/OLED attributes)
    tablet_glob: str = Field(
        default="/sys/class/input/input*/led",
        description="Glob yielding one directory per tablet with LED support",
    )
    status_led_attr: str = Field(default="status_led_select")
    button_image_attr: str = Field(default="button{slot}_rawimg")
    led_off_value: int = Field(
        default=-1, description="Value written to the status attribute when no _status is set"
    )

    # External programs
    icon_converter: str = Field(
        default="intuos4led-img2raw", description="PNG → raw icon converter"
    )
    key_injector: str = Field(default="xdotool", description="Keysym injector")

    # Mock backend
    mock_tablets: int = Field(default=1, ge=0, description="Tablets reported by the mock backend")

    @field_validator("button_image_attr")
    @classmethod
    def _has_slot_placeholder(cls, value: str) -> str:
        if "{slot}" not in value:
            raise ValueError("button_image_attr must contain '{slot}'")
        return value


class SystemConfig(BaseModel):
    """Non-hardware runtime settings."""

    model_config = ConfigDict(extra="forbid")

    log_level: str = Field(default="WARNING", description="Root log level")
    debug: bool = Field(default=False, description="Verbose diagnostics (forces DEBUG)")
    log_dir: str | None = Field(
        default=None, description="Directory for a rotating log file; None disables it"
    )

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level


class TabkeysConfig(BaseModel):
    """Top-level configuration loaded from ``tabkeys_config.json``."""

    model_config = ConfigDict(extra="forbid")

    profiles: ProfileConfig = Field(default_factory=ProfileConfig)
    hardware: HardwareConfig = Field(default_factory=HardwareConfig)
    system: SystemConfig = Field(default_factory=SystemConfig)
