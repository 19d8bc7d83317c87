"""Hardware factory — backend selection.

``sysfs`` drives real tablets through the wacom driver; ``mock`` records
everything in memory (dry runs, tests).
"""

from __future__ import annotations

import logging

from tabkeys.core.interfaces.hardware import HardwareFactory
from tabkeys.core.models.config import TabkeysConfig

_log = logging.getLogger(__name__)


def create_hardware_factory(config: TabkeysConfig) -> HardwareFactory:
    """Return the :class:`HardwareFactory` selected by ``hardware.backend``."""
    if config.hardware.backend == "mock":
        from tabkeys.hardware.mock.mock_factory import MockHardwareFactory

        _log.debug("Using MockHardwareFactory (%d tablet(s))", config.hardware.mock_tablets)
        return MockHardwareFactory(tablet_count=config.hardware.mock_tablets)

    from tabkeys.hardware.sysfs.sysfs_factory import SysfsHardwareFactory

    _log.debug("Using SysfsHardwareFactory")
    return SysfsHardwareFactory(config)
