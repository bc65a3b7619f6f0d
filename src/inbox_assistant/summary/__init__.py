"""Per-account summary log of classified emails."""

from inbox_assistant.summary.models import CATEGORIES, PurgeResult, SummaryEntry
from inbox_assistant.summary.retention import RETENTION, RetentionLogFile, append_and_purge

__all__ = [
    "CATEGORIES",
    "PurgeResult",
    "RETENTION",
    "RetentionLogFile",
    "SummaryEntry",
    "append_and_purge",
]
