"""Multi-account OAuth2 credential store with refresh-merge persistence."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

from dateutil import parser as date_parser
from google.auth.exceptions import RefreshError
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build, Resource
from googleapiclient.errors import HttpError

from inbox_assistant.config import AppConfig
from inbox_assistant.exceptions import (
    AuthError,
    MissingCredentialsError,
    MissingTokenError,
)

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/gmail.modify",
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/calendar.events",
]

DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"


def merge_token(disk: dict, refreshed: dict) -> dict:
    """Shallow union of a stored token and a refresh response.

    Refreshed values win. Keys the refresh omits, or reports as None,
    keep their stored value.
    """
    merged = dict(disk)
    merged.update({k: v for k, v in refreshed.items() if v is not None})
    return merged


def _parse_expiry(token: dict) -> datetime | None:
    # google-auth compares expiry against a naive UTC clock
    if token.get("expiry"):
        parsed = date_parser.isoparse(token["expiry"])
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        return parsed
    if token.get("expiry_date"):
        return datetime.fromtimestamp(
            int(token["expiry_date"]) / 1000, tz=timezone.utc,
        ).replace(tzinfo=None)
    return None


def _format_expiry(expiry: datetime | None) -> str | None:
    if expiry is None:
        return None
    return expiry.replace(tzinfo=timezone.utc).isoformat().replace("+00:00", "Z")


class AuthorizedClient:
    """Credentials for one account plus an explicit post-call refresh hook.

    Every Google API request goes through :meth:`execute`. After the call
    returns (or fails), a changed access token is handed to ``on_refresh``
    before control goes back to the caller.

    Args:
        account_key: The account the credentials belong to.
        credentials: google.oauth2.credentials.Credentials bound to the account.
        on_refresh: Called with the refreshed token fields.
    """

    def __init__(
        self,
        account_key: str,
        credentials: Credentials,
        on_refresh: Callable[[dict], Any],
    ):
        self.account_key = account_key
        self.credentials = credentials
        self._on_refresh = on_refresh
        self._seen_token = credentials.token
        self._seen_refresh_token = credentials.refresh_token

    def gmail(self) -> Resource:
        return build("gmail", "v1", credentials=self.credentials, cache_discovery=False)

    def sheets(self) -> Resource:
        return build("sheets", "v4", credentials=self.credentials, cache_discovery=False)

    def calendar(self) -> Resource:
        return build("calendar", "v3", credentials=self.credentials, cache_discovery=False)

    def execute(self, request) -> Any:
        """Execute a googleapiclient request, then persist any token refresh."""
        try:
            result = request.execute()
        except RefreshError as e:
            self._sync_after_failure()
            raise AuthError(
                f'Token refresh failed for account "{self.account_key}": {e}'
            ) from e
        except HttpError as e:
            self._sync_after_failure()
            if e.resp.status == 401:
                raise AuthError(
                    f'Request unauthorized for account "{self.account_key}": {e}'
                ) from e
            raise
        except Exception:
            self._sync_after_failure()
            raise
        self.sync_refreshed_token()
        return result

    def _sync_after_failure(self) -> None:
        """Persist a refresh that preceded a failed call. The call's error is what propagates."""
        try:
            self.sync_refreshed_token()
        except Exception as e:
            logger.error(
                f'Failed to persist refreshed token for account "{self.account_key}": {e}'
            )

    def sync_refreshed_token(self) -> bool:
        """Hand a newly obtained token to the persistence hook. Returns True if it did."""
        creds = self.credentials
        if not creds.token or creds.token == self._seen_token:
            return False

        refreshed = {
            "access_token": creds.token,
            "expiry": _format_expiry(creds.expiry),
        }
        # Non-rotating refreshes leave refresh_token untouched; omit it then
        if creds.refresh_token and creds.refresh_token != self._seen_refresh_token:
            refreshed["refresh_token"] = creds.refresh_token

        self._on_refresh(refreshed)
        self._seen_token = creds.token
        self._seen_refresh_token = creds.refresh_token
        return True


class CredentialStore:
    """Loads, builds and persists OAuth2 credentials per configured account.

    Args:
        config: Application configuration (account map and file locations).
        scopes: OAuth2 scopes to request.
    """

    def __init__(self, config: AppConfig, scopes: list[str] | None = None):
        self._config = config
        self.scopes = scopes or list(SCOPES)

    def _client_secrets_path(self) -> Path:
        return self._config.credentials_file

    def load_client_secrets(self) -> dict:
        """Return the ``installed`` (or ``web``) section of the credential bundle."""
        path = self._client_secrets_path()
        if not path.exists():
            raise MissingCredentialsError(
                f"Missing credentials.json at {path}. Download the OAuth client "
                "(Desktop app type) from Google Cloud Console and place it there."
            )
        data = json.loads(path.read_text(encoding="utf-8"))
        section = data.get("installed") or data.get("web")
        if not section:
            raise MissingCredentialsError(
                f"{path} has neither an 'installed' nor a 'web' client section."
            )
        return section

    def load_token(self, account_key: str) -> dict:
        token_path = self._config.token_path(account_key)
        if not token_path.exists():
            raise MissingTokenError(
                f'Missing token file at {token_path} for account "{account_key}". '
                "Run the authorization flow for this account first."
            )
        return json.loads(token_path.read_text(encoding="utf-8"))

    def get_credentials(self, account_key: str) -> Credentials:
        """Build credentials from the client bundle and the account's token."""
        # Unknown accounts fail before any file is read
        self._config.token_path(account_key)
        secrets = self.load_client_secrets()
        token = self.load_token(account_key)

        return Credentials(
            token=token.get("access_token") or token.get("token"),
            refresh_token=token.get("refresh_token"),
            token_uri=secrets.get("token_uri", DEFAULT_TOKEN_URI),
            client_id=secrets.get("client_id"),
            client_secret=secrets.get("client_secret"),
            scopes=self.scopes,
            expiry=_parse_expiry(token),
        )

    def get_client(self, account_key: str) -> AuthorizedClient:
        """Return an authorized client whose refreshes are merged back to disk."""
        creds = self.get_credentials(account_key)
        return AuthorizedClient(
            account_key,
            creds,
            on_refresh=lambda refreshed: self.persist_refresh(account_key, refreshed),
        )

    def persist_refresh(self, account_key: str, refreshed: dict) -> dict:
        """Re-read the token file and write back ``disk ∪ refreshed``."""
        token_path = self._config.token_path(account_key)
        current = json.loads(token_path.read_text(encoding="utf-8"))
        merged = merge_token(current, refreshed)
        token_path.write_text(json.dumps(merged, indent=2), encoding="utf-8")
        logger.info(f'Token refreshed and saved for account "{account_key}".')
        return merged

    def authorize_account(self, account_key: str) -> Path:
        """Run the one-time interactive OAuth2 flow. Opens a browser."""
        from google_auth_oauthlib.flow import InstalledAppFlow

        token_path = self._config.token_path(account_key)
        if token_path.exists():
            raise FileExistsError(
                f"Token already exists at {token_path}. Delete it to re-authorize."
            )
        self.load_client_secrets()

        flow = InstalledAppFlow.from_client_secrets_file(
            str(self._client_secrets_path()), self.scopes,
        )
        creds = flow.run_local_server(port=0, access_type="offline", prompt="consent")

        token = {
            "access_token": creds.token,
            "refresh_token": creds.refresh_token,
            "scope": " ".join(creds.scopes or self.scopes),
            "token_type": "Bearer",
            "expiry": _format_expiry(creds.expiry),
        }
        token_path.parent.mkdir(parents=True, exist_ok=True)
        token_path.write_text(json.dumps(token, indent=2), encoding="utf-8")
        logger.info(f'Token saved for account "{account_key}" at {token_path}')
        return token_path

    def has_token(self, account_key: str) -> bool:
        """Check if a token file exists for the account."""
        return self._config.token_path(account_key).exists()

    def get_token_info(self, account_key: str) -> dict | None:
        """Return basic token info (without secrets) for display."""
        token_path = self._config.token_path(account_key)
        if not token_path.exists():
            return None
        try:
            data = json.loads(token_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            return None
        return {
            "token_path": str(token_path),
            "has_refresh_token": bool(data.get("refresh_token")),
            "expiry": data.get("expiry"),
            "scopes": (data.get("scope") or "").split(),
        }
