"""Input-shape checks applied before any tool touches credentials or stores."""

from __future__ import annotations

from inbox_assistant.calendar.client import MAX_DURATION_MINUTES, MIN_DURATION_MINUTES
from inbox_assistant.config import VALID_ACCOUNTS
from inbox_assistant.exceptions import ValidationError
from inbox_assistant.summary.models import CATEGORIES, SummaryEntry

MIN_FETCH = 1
MAX_FETCH = 100


def validate_account(account) -> str:
    if account not in VALID_ACCOUNTS:
        raise ValidationError(
            f"account must be one of {', '.join(VALID_ACCOUNTS)}, got {account!r}"
        )
    return account


def validate_int_range(name: str, value, low: int, high: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if not low <= value <= high:
        raise ValidationError(f"{name} must be between {low} and {high}, got {value}")
    return int(value)


def validate_max_results(value) -> int:
    return validate_int_range("max_results", value, MIN_FETCH, MAX_FETCH)


def validate_duration(value) -> int | None:
    if value is None:
        return None
    return validate_int_range(
        "duration_minutes", value, MIN_DURATION_MINUTES, MAX_DURATION_MINUTES,
    )


def require_text(name: str, value) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string, got {type(value).__name__}")
    return value


def optional_text(name: str, value) -> str:
    if value is None:
        return ""
    return require_text(name, value)


def validate_message_ids(value) -> list[str]:
    if not isinstance(value, list):
        raise ValidationError("message_ids must be an array of strings")
    return [require_text("message_ids[]", item) for item in value]


def validate_summary_entries(value) -> list[SummaryEntry]:
    """Turn raw entry dicts into SummaryEntry objects. Any ``addedAt`` is ignored."""
    if not isinstance(value, list):
        raise ValidationError("entries must be an array")
    entries = []
    for index, raw in enumerate(value):
        if not isinstance(raw, dict):
            raise ValidationError(f"entries[{index}] must be an object")
        category = raw.get("category")
        if category not in CATEGORIES:
            raise ValidationError(
                f"entries[{index}].category must be one of {', '.join(CATEGORIES)}, "
                f"got {category!r}"
            )
        entries.append(SummaryEntry(
            sender_name=require_text(f"entries[{index}].senderName", raw.get("senderName")),
            sender_email=require_text(f"entries[{index}].senderEmail", raw.get("senderEmail")),
            date_received=require_text(f"entries[{index}].dateReceived", raw.get("dateReceived")),
            subject=require_text(f"entries[{index}].subject", raw.get("subject")),
            category=category,
        ))
    return entries
