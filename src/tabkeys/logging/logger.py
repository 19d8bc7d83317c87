"""Diagnostics for a short-lived command-line process.

NOTE: This module lives under ``tabkeys.logging`` which shadows the stdlib
``logging`` package.  All internal references therefore import the stdlib
via ``import logging as _logging`` to avoid circular-import issues.

Every button press is its own process, usually spawned by the desktop's
hotkey daemon with stderr going nowhere.  So the defaults are quiet: only
warnings reach stderr, and stdout stays free for ``tabkeys list``.  A
rotating file can be switched on to see what a press did after the fact.
"""

from __future__ import annotations

import logging as _logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any

_FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_STDERR_FORMAT = "tabkeys: [%(levelname)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_NAME = "tabkeys.log"


def _stderr_handler(level: int) -> _logging.Handler:
    handler = _logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_logging.Formatter(_STDERR_FORMAT))
    return handler


def _file_handler(level: int, log_dir: str, max_bytes: int, backup_count: int) -> _logging.Handler:
    os.makedirs(log_dir, exist_ok=True)
    handler = RotatingFileHandler(
        os.path.join(log_dir, LOG_FILE_NAME),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(_logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def setup_logging(
    log_level: str = "WARNING",
    log_dir: str | None = None,
    max_bytes: int = 1024 * 1024,  # 1 MB
    backup_count: int = 3,
) -> None:
    """Point the root logger at stderr and, optionally, a rotating file.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        log_level: Level name; unknown names fall back to WARNING.
        log_dir: Directory for ``tabkeys.log`` (created if absent), or
            ``None`` for stderr only.
        max_bytes: Size at which the log file is rotated.
        backup_count: Rotated files kept next to it.
    """
    level = getattr(_logging, log_level.upper(), _logging.WARNING)

    root = _logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()

    root.addHandler(_stderr_handler(level))
    if log_dir:
        root.addHandler(_file_handler(level, log_dir, max_bytes, backup_count))


def get_logger(name: str) -> _logging.Logger:
    """Return a stdlib Logger for *name* (typically ``__name__``)."""
    return _logging.getLogger(name)


class ContextualLogger:
    """Prefixes each message with ``[key=value]`` tags.

    The activator tags messages with the state being entered, the router
    with the state and button::

        log = ContextualLogger(get_logger(__name__), state="gimp/paint", button=2)
        log.info("Sending %s", "ctrl+z")
        # => "[state=gimp/paint] [button=2] Sending ctrl+z"
    """

    def __init__(self, logger: _logging.Logger, **context: Any) -> None:
        self._logger = logger
        self._prefix = " ".join(f"[{k}={v}]" for k, v in context.items())

    def _log(self, level: int, msg: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        if self._prefix:
            msg = f"{self._prefix} {msg}"
        kwargs.setdefault("stacklevel", 3)
        self._logger.log(level, msg, *args, **kwargs)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(_logging.DEBUG, msg, args, kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(_logging.INFO, msg, args, kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(_logging.WARNING, msg, args, kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(_logging.ERROR, msg, args, kwargs)
