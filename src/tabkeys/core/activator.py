"""State activator — make a state current and bring the tablet in line with it.

Order of operations for :meth:`StateActivator.activate`:

1. repoint ``this`` (before the hook runs, so the hook sees its own state);
2. run the state's ``_init`` hook;
3. stop if no tablet is attached;
4. convert missing ``N.raw`` icons and make sure ``blank.raw`` exists;
5. write the ring status LED on every tablet;
6. write the eight button icons on every tablet.

Activating the state that is already current repeats every step.
"""

from __future__ import annotations

import logging
from pathlib import Path

from tabkeys.core.interfaces.hardware import HardwareFactory
from tabkeys.core.models.config import HardwareConfig
from tabkeys.core.models.state import BUTTON_SLOTS, ICON_BUTTONS, STATUS_MAX, State
from tabkeys.core.process import run_program
from tabkeys.core.state_store import StateStore, is_readable
from tabkeys.logging.logger import ContextualLogger

_log = logging.getLogger(__name__)


def status_value(status: int | None, lefthanded: bool) -> int | None:
    """Map a ``_status`` value onto the ring LED; the ring is mirrored when lefthanded."""
    if status is None:
        return None
    return STATUS_MAX - status if lefthanded else status


def button_slot(index: int, lefthanded: bool) -> int:
    """Physical 0-based OLED slot for button *index* (1–8)."""
    slot = index - 1
    return BUTTON_SLOTS - 1 - slot if lefthanded else slot


class StateActivator:
    """The only writer of the current-state pointer.

    Args:
        store: State store owning the pointer.
        factory: Hardware backend (tablets + icon converter).
        hw_config: Hardware settings (``led_off_value``, converter name).
        invocation: Path of the running program, passed to ``_init`` hooks.
    """

    def __init__(
        self,
        store: StateStore,
        factory: HardwareFactory,
        hw_config: HardwareConfig,
        invocation: str,
    ) -> None:
        self._store = store
        self._factory = factory
        self._hw = hw_config
        self._invocation = invocation
        self._converter = factory.create_icon_converter()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def activate(self, target: Path) -> bool:
        """Make *target* the current state and sync the tablets.

        A *target* that is not a directory is a silent no-op; that is how
        plain-file bindings keep the current state.

        Returns:
            ``True`` if the pointer was moved, ``False`` for the no-op.
        """
        if not target.is_dir():
            _log.debug("Not a state directory, staying put: %s", target)
            return False

        path = self._store.set_current(target)
        log = ContextualLogger(_log, state=self._store.display_name(path))
        log.info("Changing to state %s", path)

        state = self._store.load_state(path)
        if state.init_hook is not None:
            log.info("Calling initialization script")
            rc = run_program(state.init_hook, self._invocation)
            if rc is not None and rc != 0:
                log.warning("_init exited with status %d", rc)
            # The hook may have added icons or moved the pointer itself.
            state = self._store.load_state(self._store.current_path() or path)

        tablets = self._factory.discover_tablets()
        if not tablets:
            log.info("No tablets with LED support, skipping device sync")
            return True

        lefthanded = self._store.is_lefthanded()
        if self._convert_icons(state, lefthanded, log):
            state = self._store.load_state(state.path)

        status = status_value(state.status, lefthanded)
        led = self._hw.led_off_value if status is None else status
        icons = self._load_icons(state, log)

        for tablet in tablets:
            log.info("Setting status led to %d on %s", led, tablet.name)
            tablet.set_status_led(led)
            for index in ICON_BUTTONS:
                data = icons.get(index)
                if data is None:
                    continue
                tablet.write_button_image(button_slot(index, lefthanded), data)
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _convert_icons(self, state: State, lefthanded: bool, log: ContextualLogger) -> bool:
        """Convert every image lacking a ``.raw``; return ``True`` if any was written."""
        if not self._converter.is_available():
            log.warning("%s not found, unable to convert images", self._hw.icon_converter)
            return False

        converted = False
        for index, image in sorted(state.images.items()):
            if index in state.icons:
                continue
            log.info("Converting %s to raw grayscale", image.name)
            if self._converter.convert(image, lefthanded=lefthanded):
                converted = True
            else:
                log.warning("Could not convert %s, button %d falls back to blank", image, index)

        blank = self._store.blank_icon_path
        if not is_readable(blank):
            log.info("Creating blank icon %s", blank)
            if not self._converter.make_blank(blank):
                log.warning("Could not create blank icon %s", blank)
        return converted

    def _load_icons(self, state: State, log: ContextualLogger) -> dict[int, bytes]:
        """Button index → buffer to display; buttons without one are left untouched."""
        blank: bytes | None = None
        blank_path = self._store.blank_icon_path
        if is_readable(blank_path):
            try:
                blank = blank_path.read_bytes()
            except OSError as exc:
                log.warning("Could not read %s: %s", blank_path, exc)

        icons: dict[int, bytes] = {}
        for index in ICON_BUTTONS:
            icon_path = state.icons.get(index)
            data: bytes | None = None
            if icon_path is not None:
                try:
                    data = icon_path.read_bytes()
                    log.debug("Displaying icon %d", index)
                except OSError as exc:
                    log.warning("Could not read %s: %s", icon_path, exc)
            if data is None:
                data = blank
            if data is not None:
                icons[index] = data
        return icons
