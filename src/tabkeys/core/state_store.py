"""State store — the profile tree on disk and the ``this`` pointer.

Layout of the profile root::

    ~/.tabkeys/
      this -> /home/me/.tabkeys/gimp/paint   current-state pointer (symlink)
      init/                                  bootstrap state
      _lefthanded                            optional marker
      blank.raw                              cached blank icon
      gimp/paint/
        1-brush:b          keystroke binding (button 1 sends "b")
        2-undo:ctrl+z
        3-launch           executable binding
        4-next -> ../erase sub-state binding (rings are built with symlinks)
        1.png  1.raw       icon source and converted buffer
        _init              hook run after the state becomes current
        _status            ring LED value, 1-3

The pointer is the only mutable global.  It is either absent or a symlink
to a directory; anything else aborts the invocation.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from tabkeys.core.errors import StateIntegrityError
from tabkeys.core.models.state import (
    STATUS_MAX,
    STATUS_MIN,
    Binding,
    State,
    parse_binding_name,
)

_log = logging.getLogger(__name__)

POINTER_NAME = "this"
INIT_STATE = "init"
LEFTHANDED_MARKER = "_lefthanded"
BLANK_ICON = "blank.raw"
INIT_HOOK = "_init"
STATUS_FILE = "_status"

_ICON_RE = re.compile(r"^([1-8])\.(png|raw)$")


def is_readable(path: Path) -> bool:
    """``True`` for an existing regular file the current user may read."""
    return path.is_file() and os.access(path, os.R_OK)


def canonicalize(path: Path) -> Path:
    """Absolute, symlink-free form of *path*.

    Unlike ``Path.resolve`` on Python < 3.13, a symlink loop does not raise;
    the looping component is kept as is.
    """
    return Path(os.path.realpath(path))


class StateStore:
    """Reads state directories and owns the current-state pointer.

    Args:
        root: Profile root directory (need not exist yet; see :meth:`exists`).
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    # ------------------------------------------------------------------
    # Profile root
    # ------------------------------------------------------------------

    @property
    def root(self) -> Path:
        return self._root

    @property
    def pointer_path(self) -> Path:
        return self._root / POINTER_NAME

    @property
    def init_state_path(self) -> Path:
        return self._root / INIT_STATE

    @property
    def blank_icon_path(self) -> Path:
        return self._root / BLANK_ICON

    def exists(self) -> bool:
        return self._root.is_dir()

    def is_lefthanded(self) -> bool:
        return (self._root / LEFTHANDED_MARKER).exists()

    # ------------------------------------------------------------------
    # Current-state pointer
    # ------------------------------------------------------------------

    def pointer_exists(self) -> bool:
        """``True`` if ``this`` resolves to something.

        A dangling symlink counts as absent so a deleted state falls back to
        bootstrap instead of failing.
        """
        return self.pointer_path.exists()

    def check_pointer(self) -> None:
        """Raise :class:`StateIntegrityError` unless ``this`` is absent or a symlink to a directory."""
        p = self.pointer_path
        if p.exists() and not (p.is_symlink() and p.is_dir()):
            raise StateIntegrityError(f"Abort: non-symlink state found at {p}")

    def current_path(self) -> Path | None:
        """Canonical path of the current state, or ``None`` without a pointer."""
        if not self.pointer_exists():
            return None
        self.check_pointer()
        return self.pointer_path.resolve()

    def require_current(self) -> Path:
        """Like :meth:`current_path` but a missing or broken pointer is fatal."""
        p = self.pointer_path
        if not (p.is_symlink() and p.is_dir()):
            raise StateIntegrityError(f"Invalid state: {p} is not a symlink to a state directory")
        return p.resolve()

    def current_state(self) -> State | None:
        path = self.current_path()
        return None if path is None else self.load_state(path)

    def set_current(self, target: Path) -> Path:
        """Repoint ``this`` at the canonical form of *target*.

        The new link is built under a per-process temporary name and renamed
        over ``this``, so the pointer is never absent and concurrent
        invocations resolve to whichever rename happened last.

        Returns:
            The canonical path the pointer now refers to.
        """
        self.check_pointer()
        canonical = canonicalize(target)
        p = self.pointer_path
        tmp = self._root / f".{POINTER_NAME}.{os.getpid()}"
        tmp.unlink(missing_ok=True)
        os.symlink(canonical, tmp, target_is_directory=True)
        try:
            os.replace(tmp, p)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
        _log.debug("Pointer %s -> %s", p, canonical)
        return canonical

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def resolve_path(self, base: Path, spec: str) -> Path:
        """Resolve a ``go`` argument.

        A leading ``/`` makes *spec* relative to the profile root; anything
        else is relative to *base*.  The result is canonical so re-entering a
        ring through a symlink lands on the same state.
        """
        if spec.startswith("/"):
            candidate = self._root / spec.lstrip("/")
        else:
            candidate = base / spec
        return canonicalize(candidate)

    def display_name(self, path: Path) -> str:
        """*path* relative to the canonical profile root when possible."""
        try:
            return str(path.relative_to(self._root.resolve())) or "."
        except ValueError:
            return str(path)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_state(self, path: Path) -> State:
        """Build the in-memory :class:`State` for directory *path*.

        Entries that are neither bindings nor known state files are ignored;
        a malformed profile only fails when the offending entry is used.
        """
        canonical = path.resolve()
        bindings: dict[int, list[Binding]] = {}
        init_hook: Path | None = None
        status: int | None = None
        images: dict[int, Path] = {}
        icons: dict[int, Path] = {}

        for entry in sorted(canonical.iterdir(), key=lambda p: p.name):
            name = entry.name

            parsed = parse_binding_name(name)
            if parsed is not None:
                index, keys = parsed
                is_dir = entry.is_dir()
                bindings.setdefault(index, []).append(
                    Binding(
                        index=index,
                        name=name,
                        path=entry,
                        executable=not is_dir and os.access(entry, os.X_OK),
                        is_dir=is_dir,
                        keys=keys,
                    )
                )
                continue

            if name == INIT_HOOK:
                if entry.is_file() and os.access(entry, os.X_OK):
                    init_hook = entry
                else:
                    _log.debug("%s is not executable, ignoring", entry)
            elif name == STATUS_FILE:
                status = self._read_status(entry)
            else:
                m = _ICON_RE.match(name)
                if m is None:
                    continue
                button = int(m.group(1))
                if m.group(2) == "png":
                    images[button] = entry
                elif is_readable(entry):
                    icons[button] = entry

        return State(
            path=canonical,
            bindings=bindings,
            init_hook=init_hook,
            status=status,
            images=images,
            icons=icons,
        )

    @staticmethod
    def _read_status(path: Path) -> int | None:
        """Parse ``_status``; anything but an integer in 1..3 means off."""
        if not is_readable(path):
            return None
        raw = path.read_text(encoding="utf-8", errors="replace").strip()
        try:
            value = int(raw)
        except ValueError:
            _log.warning("Ignoring non-numeric %s: %r", path, raw)
            return None
        if not STATUS_MIN <= value <= STATUS_MAX:
            _log.warning("Ignoring out-of-range %s: %d (expected %d-%d)",
                         path, value, STATUS_MIN, STATUS_MAX)
            return None
        return value
