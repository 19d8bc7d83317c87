"""Command dispatcher — ``go``, ``press`` and ``list`` on top of the core services."""

from __future__ import annotations

import grp
import logging
import os
import pwd
import stat
from datetime import datetime
from pathlib import Path

from tabkeys.core.activator import StateActivator
from tabkeys.core.errors import (
    BootstrapError,
    ProfileRootMissingError,
    ToolMissingError,
)
from tabkeys.core.hotkey_router import HotkeyRouter
from tabkeys.core.interfaces.hardware import HardwareFactory
from tabkeys.core.models.config import TabkeysConfig
from tabkeys.core.state_store import StateStore

_log = logging.getLogger(__name__)


class CommandDispatcher:
    """Composition of store, activator and router for one invocation.

    Call :meth:`startup` before any command; it performs the environment
    checks and the first-run bootstrap.

    Args:
        config: Validated configuration.
        factory: Hardware backend.
        invocation: Path of the running program (handed to hooks/actions).
    """

    def __init__(self, config: TabkeysConfig, factory: HardwareFactory, invocation: str) -> None:
        self._config = config
        self._store = StateStore(config.profiles.root)
        self._injector = factory.create_key_injector()
        self._activator = StateActivator(self._store, factory, config.hardware, invocation)
        self._router = HotkeyRouter(self._store, self._activator, self._injector, invocation)

    @property
    def store(self) -> StateStore:
        return self._store

    @property
    def activator(self) -> StateActivator:
        return self._activator

    @property
    def router(self) -> HotkeyRouter:
        return self._router

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    def startup(self) -> None:
        """Check the environment and make sure a current state exists.

        Raises:
            ToolMissingError: The key injector is not installed.
            ProfileRootMissingError: The profile directory is missing.
            BootstrapError: No pointer and no ``init`` state.
            StateIntegrityError: The pointer is not a symlink to a directory.
        """
        if not self._injector.is_available():
            raise ToolMissingError(f"{self._config.hardware.key_injector} not found")
        if not self._store.exists():
            raise ProfileRootMissingError(f"Profile directory does not exist: {self._store.root}")

        if not self._store.pointer_exists():
            init = self._store.init_state_path
            if not init.is_dir():
                raise BootstrapError(f"No state set and no 'init' profile found in {self._store.root}")
            _log.info("No state set up, starting in %s", init)
            self._activator.activate(init)

        self._store.check_pointer()
        self._store.require_current()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def go(self, spec: str) -> bool:
        """Switch to the state named by *spec* (``/``-rooted or relative)."""
        current = self._store.require_current()
        target = self._store.resolve_path(current, spec)
        _log.debug("go %s -> %s", spec, target)
        return self._activator.activate(target)

    def press(self, index: int) -> bool:
        """Route a press of button *index*."""
        return self._router.press(index)

    def list_bindings(self) -> list[str]:
        """Long-listing lines for the current state's ``[0-9]-*`` entries."""
        state = self._store.load_state(self._store.require_current())
        bindings = sorted(
            (b for group in state.bindings.values() for b in group if b.index < 10),
            key=lambda b: b.name,
        )
        if not bindings:
            _log.info("No hotkeys bound in %s", state.path)
        return [_long_listing(b.path) for b in bindings]


def _long_listing(path: Path) -> str:
    """Format *path* the way ``ls -l`` does (symlinks are not followed)."""
    st = os.lstat(path)
    try:
        owner = pwd.getpwuid(st.st_uid).pw_name
    except KeyError:
        owner = str(st.st_uid)
    try:
        group = grp.getgrgid(st.st_gid).gr_name
    except KeyError:
        group = str(st.st_gid)
    mtime = datetime.fromtimestamp(st.st_mtime).strftime("%b %d %H:%M")
    line = (
        f"{stat.filemode(st.st_mode)} {st.st_nlink:>2} {owner} {group} "
        f"{st.st_size:>6} {mtime} {path}"
    )
    if stat.S_ISLNK(st.st_mode):
        line += f" -> {os.readlink(path)}"
    return line
