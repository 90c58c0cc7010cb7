"""
Logger setup: attach console and rotating JSON file handlers from config.
"""
from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from autoresponder.core.logger.config import LoggerConfig
from autoresponder.core.logger.formatters import JsonFormatter, PlainConsoleFormatter

_configured: Optional[LoggerConfig] = None


def _level(config: LoggerConfig) -> int:
    return getattr(logging, config.level.upper(), logging.INFO)


def configure(config: Optional[LoggerConfig] = None) -> logging.Logger:
    """
    Configure the project root logger and return it.

    With no argument the config comes from LoggerConfig.from_env(). Safe to
    call repeatedly (e.g. in tests): existing handlers are replaced.
    """
    global _configured
    if config is None:
        config = LoggerConfig.from_env()
    _configured = config

    root = logging.getLogger(config.root_name)
    root.setLevel(_level(config))
    root.handlers.clear()

    if config.console:
        console = logging.StreamHandler()
        console.setLevel(_level(config))
        console.setFormatter(PlainConsoleFormatter())
        root.addHandler(console)

    if config.file_rotating and config.log_dir and config.log_dir.strip():
        try:
            os.makedirs(config.log_dir, exist_ok=True)
        except OSError:
            root.warning("Could not create log dir %s, skipping file handler", config.log_dir)
        else:
            file_handler = RotatingFileHandler(
                os.path.join(config.log_dir, f"{config.log_file_basename}.log"),
                maxBytes=config.max_bytes,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
            file_handler.setLevel(_level(config))
            file_handler.setFormatter(JsonFormatter())
            root.addHandler(file_handler)

    root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a logger, configuring the root from env on first use."""
    if _configured is None:
        configure()
    return logging.getLogger(name)
