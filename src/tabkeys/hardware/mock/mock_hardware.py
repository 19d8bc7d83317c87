"""Mock hardware implementations for dry runs and testing.

Each class implements the corresponding ABC from
:mod:`tabkeys.core.interfaces.hardware` with in-memory state, so tests can
assert on exactly what would have reached the device.
"""

from __future__ import annotations

import logging
from pathlib import Path

from tabkeys.core.interfaces.hardware import (
    IconConverterInterface,
    KeyInjectorInterface,
    TabletInterface,
)

_log = logging.getLogger(__name__)

# Intuos4 OLED buffers are 64x32 pixels at 4 bits per pixel.
RAW_ICON_SIZE = 1024
BLANK_ICON = bytes(RAW_ICON_SIZE)


# ---------------------------------------------------------------------------
# Tablet
# ---------------------------------------------------------------------------

class MockTablet(TabletInterface):
    """In-memory tablet.

    Attributes:
        writes: Ordered log of ``("status", value)`` and
            ``("image", (slot, data))`` entries.
        status_led: Last value written to the status LED, or ``None``.
        images: Physical slot → last buffer written.
    """

    def __init__(self, name: str = "mock0") -> None:
        self._name = name
        self.writes: list[tuple[str, object]] = []
        self.status_led: int | None = None
        self.images: dict[int, bytes] = {}

    @property
    def name(self) -> str:
        return self._name

    def set_status_led(self, value: int) -> None:
        self.status_led = value
        self.writes.append(("status", value))

    def write_button_image(self, slot: int, data: bytes) -> None:
        self.images[slot] = data
        self.writes.append(("image", (slot, data)))

    def reset(self) -> None:
        """Forget every recorded write."""
        self.writes.clear()
        self.images.clear()
        self.status_led = None


# ---------------------------------------------------------------------------
# Icon converter
# ---------------------------------------------------------------------------

class MockIconConverter(IconConverterInterface):
    """Writes deterministic ``.raw`` files instead of converting images.

    The generated buffer is ``b"L:"`` or ``b"R:"`` (lefthanded or not)
    followed by the source file name, which makes mirroring visible in
    assertions.  Images whose name is in *failing* are not converted.
    """

    def __init__(self, available: bool = True, failing: set[str] | None = None) -> None:
        self.available = available
        self.failing = set(failing or ())
        self.conversions: list[tuple[Path, bool]] = []
        self.blanks: list[Path] = []

    def is_available(self) -> bool:
        return self.available

    def convert(self, image: Path, lefthanded: bool = False) -> bool:
        self.conversions.append((image, lefthanded))
        if image.name in self.failing:
            _log.debug("MockIconConverter: simulated failure for %s", image)
            return False
        prefix = b"L:" if lefthanded else b"R:"
        image.with_suffix(".raw").write_bytes(prefix + image.name.encode())
        return True

    def make_blank(self, output: Path) -> bool:
        self.blanks.append(output)
        output.write_bytes(BLANK_ICON)
        return True


# ---------------------------------------------------------------------------
# Key injector
# ---------------------------------------------------------------------------

class MockKeyInjector(KeyInjectorInterface):
    """Records key lists instead of sending them."""

    def __init__(self, available: bool = True) -> None:
        self.available = available
        self.sent: list[list[str]] = []

    def is_available(self) -> bool:
        return self.available

    def send_keys(self, keys: list[str]) -> bool:
        _log.info("MockKeyInjector: send_keys(%s)", " ".join(keys))
        self.sent.append(list(keys))
        return True
