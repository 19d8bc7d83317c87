"""Running profile-supplied executables (``_init`` hooks and action bindings)."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

_log = logging.getLogger(__name__)


def run_program(program: Path, invocation: str) -> int | None:
    """Run *program* with *invocation* as its only argument and wait for it.

    *invocation* is the path of the running ``tabkeys`` executable so the
    program can call back into it (``"$1" go /other``).  stdin/stdout/stderr
    are inherited and no timeout is applied.

    Returns:
        The exit status, or ``None`` if the program could not be started.
    """
    try:
        result = subprocess.run([str(program), invocation], check=False)  # noqa: S603
    except OSError as exc:
        _log.warning("Could not run %s: %s", program, exc)
        return None
    return result.returncode
