"""Shared fixtures: a project directory with accounts.json, credentials.json and tokens."""

import json

import pytest

from inbox_assistant.config import load_config


@pytest.fixture
def project_dir(tmp_path):
    (tmp_path / "accounts.json").write_text(json.dumps({
        "work": {
            "label": "me@work.example",
            "tokenFile": "token.json",
            "spreadsheetId": "sheet-123",
        },
        "secondary": {
            "label": "me@home.example",
            "tokenFile": "token-secondary.json",
            "spreadsheetId": "PASTE_YOUR_SHEET_ID_HERE",
            "calendarId": "family@group.calendar.google.com",
        },
    }))
    (tmp_path / "credentials.json").write_text(json.dumps({
        "installed": {
            "client_id": "client-id.apps.googleusercontent.com",
            "client_secret": "shh",
            "redirect_uris": ["http://localhost"],
            "token_uri": "https://oauth2.googleapis.com/token",
        }
    }))
    (tmp_path / "token.json").write_text(json.dumps({
        "access_token": "ya29.old",
        "refresh_token": "1//refresh",
        "scope": "https://www.googleapis.com/auth/gmail.modify",
        "token_type": "Bearer",
        "expiry": "2026-10-19T12:00:00Z",
    }))
    return tmp_path


@pytest.fixture
def config(project_dir):
    return load_config(project_dir)
