"""
Pytest configuration for budget-update.

Provides fixtures for:
- Isolating settings from the developer's environment and home directory
- A recording sink standing in for Google Sheets
"""

from __future__ import annotations

from pathlib import Path

import pytest

from budget_update import config
from tests.helpers.fakes import FakeSink

_ENV_VARS = (
    "BUDGET_INDEX_SHEET_ID",
    "BUDGET_APP_SECRET_FILE",
    "BUDGET_USER_AUTH_FILE",
    "BUDGET_ACCOUNT",
    "BUDGET_CATEGORY",
    "BUDGET_ROW_LAYOUT",
    "BUDGET_LOOKBACK_DAYS",
    "BUDGET_QUEUE_MAXSIZE",
    "BUDGET_FAILURE_POLICY",
    "LOG_LEVEL",
    "LOG_JSON",
)


@pytest.fixture(autouse=True)
def config_dir(monkeypatch, tmp_path: Path) -> Path:
    """
    Point the per-user config directory at a temp dir and clear the env overrides.

    Also moves the working directory so a developer's `.env` is not picked up.
    """
    directory = tmp_path / ".budget-update"
    monkeypatch.setattr(config, "DEFAULT_CONFIG_DIR", directory)
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return directory


@pytest.fixture
def fake_sink() -> FakeSink:
    return FakeSink()
