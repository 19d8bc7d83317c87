"""Hardware abstraction interfaces (ABCs).

Every external collaborator has a matching abstract base class here.  The
sysfs and mock backends both implement these interfaces, so the activator
and router never know whether they are driving a real tablet.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


# ---------------------------------------------------------------------------
# Tablet (status LED + OLED buttons)
# ---------------------------------------------------------------------------

class TabletInterface(ABC):
    """One discovered tablet exposing a ring status LED and 8 button OLEDs."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable identifier used in log messages."""

    @abstractmethod
    def set_status_led(self, value: int) -> None:
        """Write *value* to the status LED attribute (1–3 or the off sentinel)."""

    @abstractmethod
    def write_button_image(self, slot: int, data: bytes) -> None:
        """Write a raw icon buffer to physical button *slot* (0–7)."""


# ---------------------------------------------------------------------------
# Icon converter
# ---------------------------------------------------------------------------

class IconConverterInterface(ABC):
    """Turns source images into device-native ``.raw`` icon buffers."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the converter can be used in this environment."""

    @abstractmethod
    def convert(self, image: Path, lefthanded: bool = False) -> bool:
        """Write ``image.with_suffix('.raw')``; return ``True`` on success."""

    @abstractmethod
    def make_blank(self, output: Path) -> bool:
        """Write a blank icon to *output*; return ``True`` on success."""


# ---------------------------------------------------------------------------
# Key injector
# ---------------------------------------------------------------------------

class KeyInjectorInterface(ABC):
    """Delivers synthesized key presses to the focused window."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if keystrokes can be injected."""

    @abstractmethod
    def send_keys(self, keys: list[str]) -> bool:
        """Send keysym *keys* without held modifiers; ``True`` on success."""


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

class HardwareFactory(ABC):
    """Creates all hardware interface implementations for the current backend."""

    @abstractmethod
    def discover_tablets(self) -> list[TabletInterface]: ...

    @abstractmethod
    def create_icon_converter(self) -> IconConverterInterface: ...

    @abstractmethod
    def create_key_injector(self) -> KeyInjectorInterface: ...

    def cleanup(self) -> None:
        """Release hardware resources.  No-op by default."""
