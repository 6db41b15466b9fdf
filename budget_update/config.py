"""
Configuration settings for budget-update.

Uses Pydantic Settings to load environment variables (and `.env`) for the
budget index, Google credentials, the account being synced and pipeline
tuning. On top of that, an options file (JSON) is merged in and command-line
overrides win over everything:

    CLI options > options file > environment/.env > defaults
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from budget_update.domain.models import RowLayout
from budget_update.errors import ConfigError

DEFAULT_CONFIG_DIR = Path.home() / ".budget-update"
DEFAULT_CONFIG_FILE = "options.json"
DEFAULT_SECRET_FILE = "client-auth.json"
DEFAULT_AUTH_FILE = "user-auth.json"


def default_path(file_name: str) -> Path:
    """Return the default location of a file in the per-user config directory."""
    return DEFAULT_CONFIG_DIR / file_name


class Settings(BaseSettings):
    # Google Sheets
    index_sheet_id: str = Field("", alias="BUDGET_INDEX_SHEET_ID")
    app_secret_file: Path = Field(
        default_factory=lambda: default_path(DEFAULT_SECRET_FILE), alias="BUDGET_APP_SECRET_FILE"
    )
    user_auth_file: Path = Field(
        default_factory=lambda: default_path(DEFAULT_AUTH_FILE), alias="BUDGET_USER_AUTH_FILE"
    )

    # Ledger
    account: str = Field("Joint Checking", alias="BUDGET_ACCOUNT")
    category: str = Field("Uncategorized", alias="BUDGET_CATEGORY")
    row_layout: RowLayout = Field(RowLayout.LABELED, alias="BUDGET_ROW_LAYOUT")

    # Pipeline
    lookback_days: int = Field(11, alias="BUDGET_LOOKBACK_DAYS", ge=0)
    queue_maxsize: int = Field(100, alias="BUDGET_QUEUE_MAXSIZE", ge=0)
    failure_policy: Literal["strict", "tolerant"] = Field("strict", alias="BUDGET_FAILURE_POLICY")

    # Application
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


# Keys of the nested options layout used by earlier releases of the tool.
_LEGACY_KEYS = {
    ("Sheets", "IndexSheetID"): "index_sheet_id",
    ("Sheets", "AppSecretFile"): "app_secret_file",
    ("Sheets", "UserAuthFile"): "user_auth_file",
}


def _flatten_options(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Accept both flat field names and the legacy {"Sheets": {...}, "Bank": {...}} layout."""
    options = {k: v for k, v in raw.items() if k not in ("Sheets", "Bank")}
    for (section, key), field_name in _LEGACY_KEYS.items():
        value = (raw.get(section) or {}).get(key)
        if value:
            options.setdefault(field_name, value)
    accounts = (raw.get("Bank") or {}).get("Accounts") or []
    if accounts:
        options.setdefault("account", accounts[0])
    return options


def read_options_file(path: Path, required: bool) -> Dict[str, Any]:
    """
    Read a JSON options file.

    A missing file is only an error when it was asked for explicitly.
    """
    if not path.exists():
        if required:
            raise ConfigError(f"Unable to read config file: {path} does not exist")
        return {}
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Unable to process config file {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return _flatten_options(raw)


def load_settings(
    config_file: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> Settings:
    """
    Build settings from the options file and command-line overrides.

    Parameters
    ----------
    config_file : Path | None
        Explicit options file. Defaults to ~/.budget-update/options.json,
        which may be absent.
    overrides : Mapping | None
        Values set on the command line; None values are ignored.
    """
    path = config_file or default_path(DEFAULT_CONFIG_FILE)
    values = read_options_file(path, required=config_file is not None)
    values.update({k: v for k, v in (overrides or {}).items() if v is not None})
    # keyed by alias so explicit values shadow the environment source
    fields = Settings.model_fields
    values = {(fields[k].alias or k) if k in fields else k: v for k, v in values.items()}
    try:
        return Settings(**values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


__all__ = ["Settings", "default_path", "load_settings", "read_options_file"]
