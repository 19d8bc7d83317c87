"""Tests for logging setup and ContextualLogger."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from tabkeys.logging.logger import ContextualLogger, get_logger, setup_logging


class TestSetupLogging:
    def test_console_only_by_default(self, restore_root_logger):
        setup_logging("INFO")
        root = restore_root_logger
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0], RotatingFileHandler)

    def test_unknown_level_falls_back_to_warning(self, restore_root_logger):
        setup_logging("CHATTY")
        assert restore_root_logger.level == logging.WARNING

    def test_file_handler(self, restore_root_logger, tmp_path):
        log_dir = tmp_path / "logs"
        setup_logging("DEBUG", str(log_dir))
        get_logger("tabkeys.test").debug("hello file")
        for h in restore_root_logger.handlers:
            h.flush()
        assert "hello file" in (log_dir / "tabkeys.log").read_text()

    def test_idempotent(self, restore_root_logger):
        setup_logging("INFO")
        setup_logging("INFO")
        assert len(restore_root_logger.handlers) == 1

    def test_console_goes_to_stderr(self, restore_root_logger, capsys):
        setup_logging("WARNING")
        get_logger("tabkeys.test").warning("careful")
        get_logger("tabkeys.test").info("quiet")
        err = capsys.readouterr().err
        assert "tabkeys: [WARNING] careful" in err
        assert "quiet" not in err


class TestContextualLogger:
    def test_prefix(self, caplog):
        log = ContextualLogger(get_logger("tabkeys.test"), state="gimp/paint", button=2)
        with caplog.at_level(logging.INFO, logger="tabkeys.test"):
            log.info("Running %s", "x")
        assert "[state=gimp/paint] [button=2] Running x" in caplog.text

    def test_no_context(self, caplog):
        log = ContextualLogger(get_logger("tabkeys.test"))
        with caplog.at_level(logging.WARNING, logger="tabkeys.test"):
            log.warning("plain")
        assert caplog.records[-1].getMessage() == "plain"
