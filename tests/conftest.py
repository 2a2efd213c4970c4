"""
Shared pytest configuration and fixtures.

This module provides fixtures and configuration used across all test suites
(unit and integration tests).
"""

import logging
from pathlib import Path
from typing import Generator

import pytest

from fixtures import envelopes


@pytest.fixture
def project_root() -> Path:
    """
    Return the project root directory.
    
    Returns:
        Path: Absolute path to the project root directory.
    """
    return Path(__file__).parent.parent


@pytest.fixture
def notify_updated_xml() -> str:
    """Full notifyUpdated envelope with three attribute case variants."""
    return envelopes.NOTIFY_UPDATED


@pytest.fixture
def notify_updated_minimal_xml() -> str:
    """notifyUpdated envelope with only an id and one attribute."""
    return envelopes.NOTIFY_UPDATED_MINIMAL


@pytest.fixture
def new_event_xml() -> str:
    """newEvent envelope with two logData entries."""
    return envelopes.NEW_EVENT


@pytest.fixture
def unknown_operation_xml() -> str:
    """Well-formed envelope carrying an operation the receiver does not know."""
    return envelopes.UNKNOWN_OPERATION


@pytest.fixture
def malformed_xml() -> str:
    """Envelope with an unclosed tag."""
    return envelopes.MALFORMED


@pytest.fixture
def envelope_file(tmp_path: Path, notify_updated_xml: str) -> Generator[Path, None, None]:
    """
    Write a notifyUpdated envelope to a temporary file.
    
    Args:
        tmp_path: Pytest's temporary directory fixture.
        notify_updated_xml: Envelope fixture.
    
    Yields:
        Path: Path to the envelope file.
    """
    path = tmp_path / "notify-updated.xml"
    path.write_text(notify_updated_xml, encoding="utf-8")
    yield path
    # Cleanup handled by tmp_path


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests independent of the caller's port and log settings."""
    for key in ("PORT", "RAILWAY_PORT", "DSR_CALLBACK_PORT", "DSR_CALLBACK_HOST",
                "DSR_CALLBACK_LOG_LEVEL", "DSR_CALLBACK_LOG_PATH",
                "DSR_CALLBACK_RENDER_CALLBACKS"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("DSR_CALLBACK_LOG_PATH", str(tmp_path / "logs" / "dsr-callback.log"))


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None, None, None]:
    """Restore root logger handlers replaced by configure_logging."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)
