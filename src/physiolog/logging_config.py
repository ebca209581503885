"""Centralized logging configuration for physiolog."""

import logging
import logging.config
import os
import sys

from pathlib import Path
from typing import Any

from physiolog.constants import (
    DEFAULT_LOG_BACKUP_COUNT,
    DEFAULT_LOG_DIR,
    DEFAULT_LOG_FILE,
    DEFAULT_LOG_MAX_BYTES,
)

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_logging_configured = False


def get_log_path() -> Path:
    """
    Get path to the active log file, creating its directory if needed.

    Returns:
        Path to physiolog.log
    """
    os.makedirs(DEFAULT_LOG_DIR, mode=0o700, exist_ok=True)
    return DEFAULT_LOG_DIR / DEFAULT_LOG_FILE


def _get_user_logging_config() -> dict[str, Any]:
    """Return the [logging] table of the config file, or {}."""
    from physiolog.config import load_config

    logging_config = load_config().get("logging", {})
    return logging_config if isinstance(logging_config, dict) else {}


def build_logging_config(
    verbose: bool = False,
    console_format: str | None = None,
    user_config: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Build the dictConfig configuration dictionary.

    Args:
        verbose: If True, set console to DEBUG level
        console_format: Override console format string
        user_config: [logging] settings; read from the config file if None

    Returns:
        Dictionary suitable for logging.config.dictConfig()
    """
    if user_config is None:
        user_config = _get_user_logging_config()

    config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": console_format or FILE_FORMAT},
            "file": {"format": FILE_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "DEBUG" if verbose else "INFO",
                "formatter": "console",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {
            "level": "DEBUG",
            "handlers": ["console"],
        },
    }

    if user_config.get("enabled", True):
        max_size_mb = user_config.get("max_size_mb")
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": str(user_config.get("level", "DEBUG")).upper(),
            "formatter": "file",
            "filename": str(get_log_path()),
            "maxBytes": (
                int(max_size_mb) * 1024 * 1024 if max_size_mb else DEFAULT_LOG_MAX_BYTES
            ),
            "backupCount": user_config.get("backup_count", DEFAULT_LOG_BACKUP_COUNT),
            "encoding": "utf-8",
        }
        config["root"]["handlers"].append("file")

    return config


def setup_logging(
    *,
    verbose: bool = False,
    console_format: str | None = None,
) -> None:
    """
    Configure logging for physiolog once per process.

    Args:
        verbose: If True, set console to DEBUG level
        console_format: Override console format string
    """
    global _logging_configured

    if _logging_configured:
        return

    try:
        config = build_logging_config(verbose=verbose, console_format=console_format)
        logging.config.dictConfig(config)
    except Exception as e:
        sys.stderr.write(f"WARNING: Failed to configure logging: {e}\n")
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format=console_format or "%(levelname)s: %(message)s",
        )

    _logging_configured = True
