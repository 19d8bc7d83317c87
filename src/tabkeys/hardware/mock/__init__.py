"""Mock hardware backend for dry runs and testing."""

from tabkeys.hardware.mock.mock_factory import MockHardwareFactory
from tabkeys.hardware.mock.mock_hardware import (
    MockIconConverter,
    MockKeyInjector,
    MockTablet,
)

__all__ = [
    "MockHardwareFactory",
    "MockIconConverter",
    "MockKeyInjector",
    "MockTablet",
]
