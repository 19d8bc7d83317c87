"""In-memory model of a state directory.

The profile tree stays the persistence format; :class:`State` and
:class:`Binding` are what the router and activator work with once a
directory has been read.  States are identified by their canonical path,
so walking a ring of symlinked states always lands on the same node.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

# Ring button is 0, side buttons 1–8; only side buttons carry an OLED.
RING_BUTTON = 0
ICON_BUTTONS = range(1, 9)
BUTTON_SLOTS = 8

# Ring status LED values accepted in ``_status``.
STATUS_MIN = 1
STATUS_MAX = 3

_BINDING_RE = re.compile(r"^(0|[1-9][0-9]*)-")


class BindingKind(str, Enum):
    """What pressing a bound button does."""

    ACTION = "action"          # executable file, run as a subprocess
    SUBSTATE = "substate"      # directory or symlink to one
    KEYSTROKES = "keystrokes"  # name contains ':'; keysyms follow it
    MARKER = "marker"          # plain file: stay in place


class Binding(BaseModel):
    """A single ``N-<label>`` entry inside a state directory."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(description="Button number taken from the name prefix")
    name: str
    path: Path
    executable: bool = Field(default=False, description="Executable and not a directory")
    is_dir: bool = Field(default=False, description="Directory, possibly through a symlink")
    keys: list[str] = Field(default_factory=list, description="Keysyms after the first ':'")

    @property
    def has_key_spec(self) -> bool:
        return ":" in self.name

    @property
    def kind(self) -> BindingKind:
        """Primary variant, in router priority order."""
        if self.executable:
            return BindingKind.ACTION
        if self.is_dir:
            return BindingKind.SUBSTATE
        if self.has_key_spec:
            return BindingKind.KEYSTROKES
        return BindingKind.MARKER


class State(BaseModel):
    """A loaded state directory.

    Attributes:
        path: Canonical (symlink-free) absolute path; the state's identity.
        bindings: Button index → every ``N-*`` entry with that prefix.
        init_hook: Executable ``_init`` or ``None``.
        status: Ring LED value from ``_status`` (1–3) or ``None`` for off.
        images: Button index → ``N.png`` source image.
        icons: Button index → readable ``N.raw`` device icon.
    """

    path: Path
    bindings: dict[int, list[Binding]] = Field(default_factory=dict)
    init_hook: Path | None = None
    status: int | None = None
    images: dict[int, Path] = Field(default_factory=dict)
    icons: dict[int, Path] = Field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.path.name

    def matches(self, index: int) -> list[Binding]:
        """Return every binding whose prefix is *index* (may be 0, 1 or more)."""
        return list(self.bindings.get(index, []))


def parse_binding_name(name: str) -> tuple[int, list[str]] | None:
    """Split ``"3-copy:ctrl+c"`` into ``(3, ["ctrl+c"])``.

    Returns ``None`` when *name* is not a binding entry.
    """
    m = _BINDING_RE.match(name)
    if m is None:
        return None
    keys: list[str] = []
    if ":" in name:
        keys = name.split(":", 1)[1].split()
    return int(m.group(1)), keys
