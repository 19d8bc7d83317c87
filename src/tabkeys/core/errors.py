"""Exception taxonomy.

Only conditions that abort the invocation are raised; everything that the
state machine tolerates (conversion failures, hook failures, routing
ambiguity) is logged where it happens and never reaches the caller.
"""

from __future__ import annotations


class TabkeysError(Exception):
    """Base class for all tabkeys errors."""


class FatalError(TabkeysError):
    """Abort the current invocation with exit status 1."""


class ToolMissingError(FatalError):
    """A required external program (e.g. ``xdotool``) is not installed."""


class ProfileRootMissingError(FatalError):
    """The profile directory does not exist."""


class StateIntegrityError(FatalError):
    """The ``this`` pointer exists but is not a symlink to a directory."""


class BootstrapError(FatalError):
    """No current state and no ``init`` state to start from."""


class UsageError(TabkeysError):
    """Bad command-line invocation; carries the usage line to print."""
