"""Hotkey router — turn a button press into an action, keystrokes or a transition."""

from __future__ import annotations

import logging

from tabkeys.core.activator import StateActivator
from tabkeys.core.interfaces.hardware import KeyInjectorInterface
from tabkeys.core.models.state import Binding, BindingKind
from tabkeys.core.process import run_program
from tabkeys.core.state_store import StateStore
from tabkeys.logging.logger import ContextualLogger

_log = logging.getLogger(__name__)


class HotkeyRouter:
    """Resolves ``press N`` against the current state's ``N-*`` bindings.

    Exactly one binding must match; zero or several is reported and
    nothing happens.  For the single match:

    * an executable file is run (with the program path as argument) and
      nothing else is done;
    * otherwise a name containing ``:`` sends the keysyms after the colon
      to the focused window, and a directory (or symlink to one) becomes
      the new state.  A colon-named directory does both.

    Args:
        store: State store (read-only use).
        activator: Used for sub-state bindings.
        injector: Key injector for keystroke bindings.
        invocation: Path of the running program, passed to actions.
    """

    def __init__(
        self,
        store: StateStore,
        activator: StateActivator,
        injector: KeyInjectorInterface,
        invocation: str,
    ) -> None:
        self._store = store
        self._activator = activator
        self._injector = injector
        self._invocation = invocation

    def press(self, index: int) -> bool:
        """Handle button *index*; return ``True`` if a binding was applied."""
        state = self._store.current_state()
        if state is None:
            _log.warning("No current state, ignoring button %d", index)
            return False

        matches = state.matches(index)
        if len(matches) != 1:
            _log.warning("%d matches found for %d in state: %s", len(matches), index, state.path)
            return False

        log = ContextualLogger(_log, state=self._store.display_name(state.path), button=index)
        self._apply(matches[0], log)
        return True

    def _apply(self, binding: Binding, log: ContextualLogger) -> None:
        if binding.kind is BindingKind.ACTION:
            if binding.has_key_spec:
                log.warning("%s is executable; its key spec is ignored", binding.name)
            log.info("Running: %s %s", binding.path, self._invocation)
            rc = run_program(binding.path, self._invocation)
            if rc is not None and rc != 0:
                log.warning("%s exited with status %d", binding.name, rc)
            return

        if binding.has_key_spec:
            if binding.keys:
                log.info("Sending to active window: %s", " ".join(binding.keys))
                self._injector.send_keys(binding.keys)
            else:
                log.warning("%s has no keys after ':'", binding.name)

        if binding.is_dir:
            self._activator.activate(binding.path)
        elif binding.kind is BindingKind.MARKER:
            log.debug("%s is a plain file, staying in place", binding.name)
