"""Tests for account configuration."""

import json

import pytest

from inbox_assistant.config import AppConfig, AccountConfig, load_config
from inbox_assistant.exceptions import (
    ConfigurationError,
    MissingSpreadsheetError,
    UnknownAccountError,
)


def test_load_config_reads_accounts(config, project_dir):
    assert set(config.accounts) == {"work", "secondary"}
    assert config.account("work").label == "me@work.example"
    assert config.token_path("work") == project_dir.resolve() / "token.json"
    assert config.credentials_file == project_dir.resolve() / "credentials.json"


def test_load_config_from_env(project_dir, monkeypatch):
    monkeypatch.setenv("INBOX_ASSISTANT_HOME", str(project_dir))
    assert load_config().project_root == project_dir.resolve()


def test_missing_accounts_file(tmp_path):
    with pytest.raises(ConfigurationError, match="Missing accounts.json"):
        load_config(tmp_path)


def test_invalid_accounts_json(tmp_path):
    (tmp_path / "accounts.json").write_text("{not json")
    with pytest.raises(ConfigurationError, match="Invalid JSON"):
        load_config(tmp_path)


def test_account_without_token_file(tmp_path):
    (tmp_path / "accounts.json").write_text(json.dumps({"work": {"label": "x"}}))
    with pytest.raises(ConfigurationError, match="tokenFile"):
        load_config(tmp_path)


def test_unknown_account_lists_available(config):
    with pytest.raises(UnknownAccountError, match="Available accounts: work, secondary"):
        config.account("personal")


def test_summary_paths(config, project_dir):
    assert config.summary_path("work") == project_dir.resolve() / "summary.json"
    assert config.summary_path("secondary") == project_dir.resolve() / "summary-secondary.json"


def test_spreadsheet_id(config):
    assert config.spreadsheet_id("work") == "sheet-123"
    with pytest.raises(MissingSpreadsheetError, match="secondary"):
        config.spreadsheet_id("secondary")


def test_calendar_id_defaults_to_primary(config):
    assert config.calendar_id("work") == "primary"
    assert config.calendar_id("secondary") == "family@group.calendar.google.com"


def test_accounts_are_read_only(tmp_path):
    cfg = AppConfig(tmp_path, {"work": AccountConfig("w", "t.json")})
    with pytest.raises(TypeError):
        cfg.accounts["other"] = AccountConfig("o", "o.json")


def test_describe_accounts(config):
    assert config.describe_accounts() == (
        '"work" (me@work.example) or "secondary" (me@home.example)'
    )
