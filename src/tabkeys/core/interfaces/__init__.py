"""Hardware abstraction interfaces."""

from tabkeys.core.interfaces.hardware import (
    HardwareFactory,
    IconConverterInterface,
    KeyInjectorInterface,
    TabletInterface,
)

__all__ = [
    "HardwareFactory",
    "IconConverterInterface",
    "KeyInjectorInterface",
    "TabletInterface",
]
