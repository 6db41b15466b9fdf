from __future__ import annotations

import json
from pathlib import Path

import pytest

from budget_update import config
from budget_update.domain.models import RowLayout
from budget_update.errors import ConfigError


def _options(directory: Path, payload) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / config.DEFAULT_CONFIG_FILE
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_defaults_without_options_file(config_dir: Path) -> None:
    settings = config.load_settings()
    assert settings.index_sheet_id == ""
    assert settings.account == "Joint Checking"
    assert settings.category == "Uncategorized"
    assert settings.row_layout is RowLayout.LABELED
    assert settings.lookback_days == 11
    assert settings.failure_policy == "strict"
    assert settings.app_secret_file == config_dir / config.DEFAULT_SECRET_FILE
    assert settings.user_auth_file == config_dir / config.DEFAULT_AUTH_FILE


def test_precedence_cli_over_file_over_env(config_dir: Path, monkeypatch) -> None:
    monkeypatch.setenv("BUDGET_INDEX_SHEET_ID", "from-env")
    monkeypatch.setenv("BUDGET_ACCOUNT", "Env Account")
    monkeypatch.setenv("BUDGET_CATEGORY", "Env Category")
    _options(config_dir, {"account": "File Account", "category": "File Category"})

    settings = config.load_settings(overrides={"category": "Cli Category", "account": None})

    assert settings.index_sheet_id == "from-env"
    assert settings.account == "File Account"
    assert settings.category == "Cli Category"


def test_legacy_nested_layout_is_flattened(config_dir: Path) -> None:
    _options(
        config_dir,
        {
            "Sheets": {
                "IndexSheetID": "legacy-index",
                "AppSecretFile": "/secrets/app.json",
                "UserAuthFile": "",
            },
            "Bank": {"Accounts": ["Savings", "Checking"]},
        },
    )

    settings = config.load_settings()

    assert settings.index_sheet_id == "legacy-index"
    assert settings.app_secret_file == Path("/secrets/app.json")
    assert settings.user_auth_file == config_dir / config.DEFAULT_AUTH_FILE
    assert settings.account == "Savings"


def test_explicit_missing_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        config.load_settings(tmp_path / "nope.json")


@pytest.mark.parametrize("content", ["[1, 2]", "{not json"])
def test_unusable_file_is_an_error(tmp_path: Path, content: str) -> None:
    path = tmp_path / "options.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        config.load_settings(path)


def test_invalid_values_become_config_errors() -> None:
    with pytest.raises(ConfigError, match="Invalid configuration"):
        config.load_settings(overrides={"failure_policy": "sometimes"})
    with pytest.raises(ConfigError):
        config.load_settings(overrides={"lookback_days": -1})
