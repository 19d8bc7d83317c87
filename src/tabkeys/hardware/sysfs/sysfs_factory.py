"""SysfsHardwareFactory — real tablets and external helper programs.

Tablets are discovered on every :meth:`discover_tablets` call; the helper
programs are located on ``PATH`` once, at construction.
"""

from __future__ import annotations

import logging as _logging

from tabkeys.core.interfaces.hardware import (
    HardwareFactory,
    IconConverterInterface,
    KeyInjectorInterface,
    TabletInterface,
)
from tabkeys.core.models.config import TabkeysConfig
from tabkeys.hardware.sysfs.sysfs_hardware import (
    Img2RawConverter,
    XdotoolInjector,
    discover_tablets,
)

_log = _logging.getLogger(__name__)


class SysfsHardwareFactory(HardwareFactory):
    """Factory for the Linux sysfs backend.

    Args:
        config: Full configuration (sysfs layout and tool names in
            ``config.hardware``).
    """

    def __init__(self, config: TabkeysConfig) -> None:
        self._hw = config.hardware
        self._converter = Img2RawConverter(self._hw.icon_converter)
        self._injector = XdotoolInjector(self._hw.key_injector)
        _log.debug(
            "SysfsHardwareFactory ready (converter=%s, injector=%s)",
            self._converter.is_available(),
            self._injector.is_available(),
        )

    # -- Factory interface --

    def discover_tablets(self) -> list[TabletInterface]:
        return list(discover_tablets(self._hw))

    def create_icon_converter(self) -> IconConverterInterface:
        return self._converter

    def create_key_injector(self) -> KeyInjectorInterface:
        return self._injector
