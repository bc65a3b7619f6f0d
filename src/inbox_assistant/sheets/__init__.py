"""Recruiter communication log: row layout, upsert engine and Sheets client.

Use explicit imports for the client:
    from inbox_assistant.sheets.client import RecruiterLog
"""

from inbox_assistant.sheets.models import SHEET_COLUMNS, SHEET_RANGE, SheetRow, normalize
from inbox_assistant.sheets.upsert import UpsertResult, find_match, merge_rows, upsert

__all__ = [
    "SHEET_COLUMNS",
    "SHEET_RANGE",
    "SheetRow",
    "UpsertResult",
    "find_match",
    "merge_rows",
    "normalize",
    "upsert",
]
