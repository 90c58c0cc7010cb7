"""
Project logger: console + optional rotating JSON file.

Usage:
    from autoresponder.core.logger import configure, get_logger, LoggerConfig

    # Configure once at startup (reads LOG_* env vars when called bare)
    configure()
    configure(LoggerConfig(level="DEBUG", log_dir="/var/log/autoresponder"))

    logger = get_logger(__name__)
    logger.info("Rule fired", extra={"rule_id": str(rule.id), "chat_id": "community"})

Context passed through ``extra`` (rule_id, chat_id, message_id, reason) is
written as top-level keys by the JSON file formatter.
"""
from autoresponder.core.logger.config import LoggerConfig
from autoresponder.core.logger.formatters import JsonFormatter, PlainConsoleFormatter
from autoresponder.core.logger.setup import configure, get_logger

__all__ = [
    "LoggerConfig",
    "JsonFormatter",
    "PlainConsoleFormatter",
    "configure",
    "get_logger",
]
