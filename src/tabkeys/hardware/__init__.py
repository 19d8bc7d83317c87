"""Hardware abstraction: factory + backends (sysfs, mock)."""

from tabkeys.hardware.factory import create_hardware_factory

__all__ = ["create_hardware_factory"]
