"""Unified exception hierarchy for inbox-assistant."""


class InboxAssistantError(Exception):
    """Base exception for all inbox-assistant errors."""


# Configuration
class ConfigurationError(InboxAssistantError):
    """Missing or invalid configuration. Fatal for a single invocation."""


class UnknownAccountError(ConfigurationError):
    """The account key is not present in accounts.json."""


class MissingCredentialsError(ConfigurationError):
    """The shared OAuth2 client credential bundle is absent."""


class MissingTokenError(ConfigurationError):
    """The account has no persisted token file yet."""


class MissingSpreadsheetError(ConfigurationError):
    """The account has no spreadsheet configured."""


# Auth
class AuthError(InboxAssistantError):
    """Expired, invalid or revoked token reported by the Google transport."""


# External services
class ExternalServiceError(InboxAssistantError):
    """Base exception for failed outbound Google API calls."""


class GmailError(ExternalServiceError):
    """Failed Gmail operation."""


class SheetsError(ExternalServiceError):
    """Failed Sheets operation."""


class CalendarError(ExternalServiceError):
    """Failed Calendar operation."""


class PerItemExternalError(ExternalServiceError):
    """Failure of one unit in a batch. Recorded, never aborts the batch."""

    def __init__(self, item_id: str, message: str):
        super().__init__(message)
        self.item_id = item_id


# Input
class ValidationError(InboxAssistantError):
    """Malformed tool input, rejected before any core logic runs."""
