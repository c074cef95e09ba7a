"""Shared test fixtures for urlexec tests."""

import logging
import os
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog


_SETTINGS_ENV_PREFIXES = ("PROXY__", "LOGGING__", "HTTP__")


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Keep settings from leaking in through the environment or a cwd config file."""
    for key in list(os.environ):
        if key.upper().startswith(_SETTINGS_ENV_PREFIXES):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("CONFIG_FILE", raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    structlog.reset_defaults()
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
