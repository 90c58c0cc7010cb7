"""
Logger configuration, built in code or from LOG_* environment variables.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


def _env_flag(name: str, default: str = "true") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class LoggerConfig:
    """
    Configuration for the project logger.

    Use LoggerConfig.from_env() for env-based config, or build explicitly.
    """

    # DEBUG, INFO, WARNING, ERROR, CRITICAL
    level: str = "INFO"
    # Directory for the rotating JSON file; None skips the file handler
    log_dir: Optional[str] = None
    log_file_basename: str = "autoresponder"
    max_bytes: int = 5 * 1024 * 1024  # 5 MB
    backup_count: int = 5
    # Handlers are attached here; child loggers inherit them
    root_name: str = "autoresponder"
    console: bool = True
    file_rotating: bool = True

    @classmethod
    def from_env(cls) -> "LoggerConfig":
        """
        Env:
            LOG_LEVEL          – default INFO
            LOG_DIR            – unset disables the file handler
            LOG_FILE_BASENAME  – default autoresponder
            LOG_MAX_BYTES      – default 5242880
            LOG_BACKUP_COUNT   – default 5
            LOG_ROOT_NAME      – default autoresponder
            LOG_CONSOLE        – "1" / "true" / "yes" → True (default true)
            LOG_FILE_ROTATING  – same (default true)
        """
        return cls(
            level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            log_dir=os.environ.get("LOG_DIR") or None,
            log_file_basename=os.environ.get("LOG_FILE_BASENAME", "autoresponder"),
            max_bytes=int(os.environ.get("LOG_MAX_BYTES", "5242880")),
            backup_count=int(os.environ.get("LOG_BACKUP_COUNT", "5")),
            root_name=os.environ.get("LOG_ROOT_NAME", "autoresponder"),
            console=_env_flag("LOG_CONSOLE"),
            file_rotating=_env_flag("LOG_FILE_ROTATING"),
        )
