"""Logging setup and contextual logger."""

from tabkeys.logging.logger import ContextualLogger, get_logger, setup_logging

__all__ = ["setup_logging", "get_logger", "ContextualLogger"]
