"""tabkeys — command-line entry point (composition root).

Wires together: Config → logging → HardwareFactory → CommandDispatcher.
Every invocation runs one command to completion and exits::

    tabkeys go [/]<path>     switch state (leading '/' = profile root)
    tabkeys press <N>        handle a press of button N (0 = ring button)
    tabkeys list             show the current state's hotkey bindings

Exit status is 1 for usage errors and fatal conditions, 0 otherwise.
"""

from __future__ import annotations

import argparse
import logging as _logging
import os
import shutil
import sys

from tabkeys.config.config_manager import load_config
from tabkeys.core.dispatcher import CommandDispatcher
from tabkeys.core.errors import FatalError, UsageError
from tabkeys.hardware.factory import create_hardware_factory
from tabkeys.logging.logger import setup_logging

_log = _logging.getLogger(__name__)

PROG = "tabkeys"


class _ArgumentParser(argparse.ArgumentParser):
    """Raise :class:`UsageError` instead of exiting with status 2."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(f"{self.format_usage().rstrip()}\n{self.prog}: error: {message}")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog=PROG, description="Hotkey state machine for tablet buttons")
    parser.add_argument("--config", metavar="PATH", help="Path to tabkeys_config.json")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose diagnostics on stderr")

    sub = parser.add_subparsers(dest="command", metavar="COMMAND", parser_class=_ArgumentParser)
    sub.required = True

    p_go = sub.add_parser("go", help="Switch to a state")
    p_go.add_argument("path", nargs="?", help="State path; leading '/' = profile root")

    p_press = sub.add_parser("press", help="Handle a button press")
    p_press.add_argument("index", nargs="?", type=int, help="Button number (0 = ring button)")

    sub.add_parser("list", help="List hotkey bindings of the current state")
    return parser


def _invocation() -> str:
    """Path under which hooks and actions can call this program again."""
    argv0 = sys.argv[0] if sys.argv and sys.argv[0] else PROG
    candidate = os.path.abspath(argv0) if os.sep in argv0 else shutil.which(argv0)
    if candidate and os.path.isfile(candidate) and os.access(candidate, os.X_OK):
        return candidate
    return shutil.which(PROG) or argv0


def main(argv: list[str] | None = None) -> int:
    """Run one command; return the process exit status."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        if args.command == "go" and not args.path:
            raise UsageError(f"Usage: {PROG} go [/]<path>")
        if args.command == "press" and args.index is None:
            raise UsageError(f"Usage: {PROG} press <#KEY>")
    except UsageError as exc:
        print(exc, file=sys.stderr)
        return 1

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as exc:
        print(f"{PROG}: {exc}", file=sys.stderr)
        return 1

    if args.verbose:
        config.system.debug = True
    try:
        setup_logging(config.system.effective_log_level, config.system.log_dir)
    except OSError as exc:
        print(f"{PROG}: cannot open log directory {config.system.log_dir}: {exc}", file=sys.stderr)
        return 1

    factory = create_hardware_factory(config)
    dispatcher = CommandDispatcher(config, factory, invocation=_invocation())
    try:
        dispatcher.startup()
        if args.command == "go":
            dispatcher.go(args.path)
        elif args.command == "press":
            dispatcher.press(args.index)
        elif args.command == "list":
            for line in dispatcher.list_bindings():
                print(line)
    except FatalError as exc:
        _log.error("%s", exc)
        return 1
    finally:
        factory.cleanup()
    return 0


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
