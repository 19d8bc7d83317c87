"""MockHardwareFactory — creates in-memory hardware for dry runs and tests.

All created instances are stored as public attributes so tests can
inspect recorded writes directly.
"""

from __future__ import annotations

from tabkeys.core.interfaces.hardware import (
    HardwareFactory,
    IconConverterInterface,
    KeyInjectorInterface,
    TabletInterface,
)
from tabkeys.hardware.mock.mock_hardware import (
    MockIconConverter,
    MockKeyInjector,
    MockTablet,
)


class MockHardwareFactory(HardwareFactory):
    """Factory that returns in-memory mock implementations.

    After creation, the individual mock objects are available as attributes
    (``factory.tablets``, ``factory.converter``, ``factory.injector``).

    Args:
        tablet_count: Number of tablets :meth:`discover_tablets` reports.
            ``0`` models a machine with no LED-capable tablet attached.
    """

    def __init__(self, tablet_count: int = 1) -> None:
        self.tablets = [MockTablet(f"mock{i}") for i in range(tablet_count)]
        self.converter = MockIconConverter()
        self.injector = MockKeyInjector()

    # -- Factory interface --

    def discover_tablets(self) -> list[TabletInterface]:
        return list(self.tablets)

    def create_icon_converter(self) -> IconConverterInterface:
        return self.converter

    def create_key_injector(self) -> KeyInjectorInterface:
        return self.injector
