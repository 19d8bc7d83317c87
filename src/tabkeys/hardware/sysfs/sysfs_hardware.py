"""Linux hardware implementations.

:class:`SysfsTablet` writes to the LED/OLED attributes the wacom driver
exposes under ``/sys/class/input/input*/led``.  Icon conversion and key
injection are delegated to the ``intuos4led-img2raw`` and ``xdotool``
programs; both are looked up on ``PATH`` once and then invoked
synchronously without a timeout.
"""

from __future__ import annotations

import logging as _logging
import shutil
import subprocess
from pathlib import Path

from tabkeys.core.interfaces.hardware import (
    IconConverterInterface,
    KeyInjectorInterface,
    TabletInterface,
)
from tabkeys.core.models.config import HardwareConfig

_log = _logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Tablet
# ---------------------------------------------------------------------------

class SysfsTablet(TabletInterface):
    """One tablet's LED directory, e.g. ``/sys/class/input/input12/led``.

    Writes are plain blocking writes with no retry.  A failing write is
    logged and does not stop the remaining writes.
    """

    def __init__(self, led_dir: Path, config: HardwareConfig) -> None:
        self._dir = led_dir
        self._status_attr = config.status_led_attr
        self._image_attr = config.button_image_attr

    @property
    def name(self) -> str:
        return str(self._dir)

    @property
    def path(self) -> Path:
        return self._dir

    # -- ABC implementation --

    def set_status_led(self, value: int) -> None:
        target = self._dir / self._status_attr
        try:
            target.write_text(f"{value}\n", encoding="ascii")
        except OSError as exc:
            _log.warning("Could not write status LED %d to %s: %s", value, target, exc)

    def write_button_image(self, slot: int, data: bytes) -> None:
        target = self._dir / self._image_attr.format(slot=slot)
        try:
            target.write_bytes(data)
        except OSError as exc:
            _log.warning("Could not write icon to %s: %s", target, exc)


def discover_tablets(config: HardwareConfig) -> list[SysfsTablet]:
    """Return one :class:`SysfsTablet` per directory matching ``tablet_glob``."""
    # The glob is absolute, so expand it from the filesystem root.
    pattern = config.tablet_glob.lstrip("/")
    tablets = [
        SysfsTablet(p, config)
        for p in sorted(Path("/").glob(pattern))
        if p.is_dir()
    ]
    _log.debug("%d tablet(s) with led support found", len(tablets))
    return tablets


# ---------------------------------------------------------------------------
# Icon converter
# ---------------------------------------------------------------------------

class Img2RawConverter(IconConverterInterface):
    """Wraps ``intuos4led-img2raw``.

    * ``intuos4led-img2raw [--lefthanded] IMAGE`` writes ``IMAGE`` with a
      ``.raw`` suffix next to it.
    * ``intuos4led-img2raw --blank OUTPUT`` writes an empty icon.

    The program's stderr is discarded; only the exit status is used.
    """

    def __init__(self, command: str = "intuos4led-img2raw") -> None:
        self._command = command
        self._resolved: str | None = shutil.which(command)

    def is_available(self) -> bool:
        return self._resolved is not None

    def convert(self, image: Path, lefthanded: bool = False) -> bool:
        args = ["--lefthanded"] if lefthanded else []
        return self._run([*args, str(image)])

    def make_blank(self, output: Path) -> bool:
        return self._run(["--blank", str(output)])

    def _run(self, args: list[str]) -> bool:
        if self._resolved is None:
            return False
        try:
            result = subprocess.run(  # noqa: S603
                [self._resolved, *args],
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError as exc:
            _log.debug("%s could not be started: %s", self._command, exc)
            return False
        if result.returncode != 0:
            _log.debug("%s %s exited with %d", self._command, " ".join(args), result.returncode)
            return False
        return True


# ---------------------------------------------------------------------------
# Key injector
# ---------------------------------------------------------------------------

class XdotoolInjector(KeyInjectorInterface):
    """Sends keysyms to the window that has input focus when called.

    Runs ``xdotool getwindowfocus key --window %1 --clearmodifiers KEYS…``;
    the focused window is looked up at dispatch time.
    """

    def __init__(self, command: str = "xdotool") -> None:
        self._command = command
        self._resolved: str | None = shutil.which(command)

    def is_available(self) -> bool:
        return self._resolved is not None

    def send_keys(self, keys: list[str]) -> bool:
        if self._resolved is None:
            _log.warning("%s not found, cannot send %s", self._command, " ".join(keys))
            return False
        cmd = [
            self._resolved,
            "getwindowfocus",
            "key",
            "--window",
            "%1",
            "--clearmodifiers",
            *keys,
        ]
        try:
            result = subprocess.run(cmd, check=False)  # noqa: S603
        except OSError as exc:
            _log.warning("%s could not be started: %s", self._command, exc)
            return False
        if result.returncode != 0:
            _log.warning("%s exited with %d while sending %s",
                         self._command, result.returncode, " ".join(keys))
            return False
        return True
