"""Pytest configuration and fixtures for physiolog tests."""

from pathlib import Path

import pytest

from tests.helpers.physio_logs import write_session


def pytest_configure(config):
    """Register custom test markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that do not require external dependencies"
    )
    config.addinivalue_line("markers", "parser: Tests for log file parsers")
    config.addinivalue_line(
        "markers", "integration: Integration tests combining multiple components"
    )


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep config and log files out of the real home directory."""
    home = tmp_path / "home"
    monkeypatch.setattr("physiolog.config.DEFAULT_CONFIG_DIR", home / ".physiolog")
    monkeypatch.setattr(
        "physiolog.logging_config.DEFAULT_LOG_DIR", home / ".physiolog" / "logs"
    )
    return home


@pytest.fixture
def logs_dir(tmp_path):
    """Directory holding synthetic log files."""
    directory = tmp_path / "logs"
    directory.mkdir()
    return directory


@pytest.fixture
def physio_base(logs_dir) -> Path:
    """Base path of a consistent five-file log set."""
    return write_session(logs_dir)
