"""Account configuration loaded once from accounts.json."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from inbox_assistant.exceptions import (
    ConfigurationError,
    MissingSpreadsheetError,
    UnknownAccountError,
)

VALID_ACCOUNTS = ("work", "secondary")

ACCOUNTS_FILENAME = "accounts.json"
CREDENTIALS_FILENAME = "credentials.json"
HOME_ENV_VAR = "INBOX_ASSISTANT_HOME"

_SPREADSHEET_PLACEHOLDER = "PASTE_YOUR_SHEET_ID_HERE"


@dataclass(frozen=True)
class AccountConfig:
    """A single configured mailbox account."""

    label: str
    token_file: str
    spreadsheet_id: str | None = None
    calendar_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> AccountConfig:
        if "tokenFile" not in data:
            raise ConfigurationError("Account entry is missing 'tokenFile'.")
        return cls(
            label=data.get("label", ""),
            token_file=data["tokenFile"],
            spreadsheet_id=data.get("spreadsheetId"),
            calendar_id=data.get("calendarId"),
        )


@dataclass(frozen=True)
class AppConfig:
    """Process-wide configuration, passed explicitly into every component.

    Args:
        project_root: Directory holding accounts.json, credentials.json,
            token files and summary logs.
        accounts: Mapping of account key to AccountConfig.
        credentials_file: Path to the OAuth2 client credential bundle.
    """

    project_root: Path
    accounts: Mapping[str, AccountConfig] = field(default_factory=dict)
    credentials_file: Path | None = None

    def __post_init__(self):
        object.__setattr__(self, "accounts", MappingProxyType(dict(self.accounts)))
        if self.credentials_file is None:
            object.__setattr__(
                self, "credentials_file", self.project_root / CREDENTIALS_FILENAME,
            )

    def account(self, key: str) -> AccountConfig:
        acct = self.accounts.get(key)
        if acct is None:
            available = ", ".join(self.accounts)
            raise UnknownAccountError(
                f'Unknown account "{key}". Available accounts: {available}'
            )
        return acct

    def token_path(self, key: str) -> Path:
        return self.project_root / self.account(key).token_file

    def summary_path(self, key: str) -> Path:
        self.account(key)
        if key == "work":
            return self.project_root / "summary.json"
        return self.project_root / f"summary-{key}.json"

    def spreadsheet_id(self, key: str) -> str:
        sheet_id = self.account(key).spreadsheet_id
        if not sheet_id or sheet_id == _SPREADSHEET_PLACEHOLDER:
            raise MissingSpreadsheetError(
                f'No spreadsheetId configured for account "{key}" in {ACCOUNTS_FILENAME}.'
            )
        return sheet_id

    def calendar_id(self, key: str) -> str:
        return self.account(key).calendar_id or "primary"

    def describe_accounts(self) -> str:
        """Human-readable account list, e.g. '"work" (me@example.com) or ...'."""
        return " or ".join(
            f'"{key}" ({self.accounts[key].label if key in self.accounts else key})'
            for key in VALID_ACCOUNTS
        )


def load_config(project_root: Path | str | None = None) -> AppConfig:
    """Read accounts.json and build the AppConfig.

    The root defaults to ``$INBOX_ASSISTANT_HOME`` or the current directory.
    """
    if project_root is None:
        project_root = os.environ.get(HOME_ENV_VAR) or Path.cwd()
    root = Path(project_root).expanduser().resolve()

    accounts_path = root / ACCOUNTS_FILENAME
    if not accounts_path.exists():
        raise ConfigurationError(
            f"Missing {ACCOUNTS_FILENAME} at {accounts_path}. Create it first."
        )
    try:
        raw = json.loads(accounts_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {accounts_path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigurationError(f"{accounts_path} must contain a JSON object.")

    accounts = {key: AccountConfig.from_dict(value) for key, value in raw.items()}
    return AppConfig(project_root=root, accounts=accounts)
