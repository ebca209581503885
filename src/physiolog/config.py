"""Configuration management for physiolog."""

import logging
import os
import tomllib

from pathlib import Path
from typing import Any

import tomli_w

from physiolog.constants import (
    DEFAULT_CONFIG_DIR,
    DEFAULT_CONFIG_FILE,
    EXPECTED_LOG_VERSION,
)

logger = logging.getLogger(__name__)


def get_config_path() -> Path:
    """
    Get the path to the configuration file.

    Returns:
        Path to ~/.physiolog/config.toml
    """
    return DEFAULT_CONFIG_DIR / DEFAULT_CONFIG_FILE


def load_config() -> dict[str, Any]:
    """Read config.toml; a missing or unreadable file counts as empty."""
    config_path = get_config_path()
    if not config_path.exists():
        return {}

    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Failed to load config from {config_path}, ignoring it: {e}")
        return {}


def save_config(config: dict[str, Any]) -> None:
    """Atomically replace config.toml with `config`."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    temp_path = config_path.with_suffix(".toml.tmp")
    try:
        temp_path.write_text(tomli_w.dumps(config), encoding="utf-8")
        os.replace(temp_path, config_path)
    finally:
        temp_path.unlink(missing_ok=True)


def get_expected_version(override: str | None = None) -> str:
    """
    Resolve the accepted LogVersion: explicit value > config > built-in.

    Args:
        override: Value given on the command line, if any
    """
    if override:
        return override

    configured = load_config().get("format", {}).get("expected_version")
    if isinstance(configured, str) and configured:
        return configured
    return EXPECTED_LOG_VERSION


def set_expected_version(version: str) -> None:
    """
    Store the accepted LogVersion in config.

    Args:
        version: LogVersion string, e.g. "EJA_1"
    """
    config = load_config()

    if "format" not in config:
        config["format"] = {}

    config["format"]["expected_version"] = version
    save_config(config)


def unset_expected_version() -> None:
    """
    Remove the LogVersion setting from config.

    Drops the format section when it becomes empty, and the config file
    when nothing else is left.
    """
    config = load_config()

    if "format" in config and "expected_version" in config["format"]:
        del config["format"]["expected_version"]

        if not config["format"]:
            del config["format"]

        if not config:
            config_path = get_config_path()
            if config_path.exists():
                config_path.unlink()
        else:
            save_config(config)
