# tests/conftest.py

"""Shared pytest fixtures for all client tests."""

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from psref.config.settings import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Hide any PSREF_* variables from the developer's shell or .env."""
    for name in (
        "PSREF_BASE_URL",
        "PSREF_RETRIES",
        "PSREF_RATE_INTERVAL",
        "PSREF_RATE_BURST",
        "PSREF_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def isolated_logs(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None, None, None]:
    """Write run logs to a temp dir and drop handlers afterwards."""
    monkeypatch.setattr(Settings, "LOGS_DIR", tmp_path / "logs")
    yield
    root_logger = logging.getLogger("psref")
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)
