"""Match-or-append merge of an incoming row against the existing sheet rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from inbox_assistant.sheets.models import FIELD_NAMES, SheetRow

CONCATENATED_FIELD = "subsequent_contacts"
CONCAT_SEPARATOR = "; "


@dataclass
class UpsertResult:
    """``action`` is "update" (with a 0-based ``row_index``) or "append"."""

    action: str
    row: SheetRow
    row_index: int | None = None


def find_match(existing_rows: Sequence[SheetRow], incoming: SheetRow) -> int | None:
    """Index of the first row sharing the incoming (email, role) key."""
    key = incoming.identity_key()
    for index, row in enumerate(existing_rows):
        if row.identity_key() == key:
            return index
    return None


def merge_rows(existing: SheetRow, incoming: SheetRow) -> SheetRow:
    """Column-wise merge. Incoming never blanks out a present existing value.

    Subsequent contacts accumulate as ``existing; incoming`` when both are set,
    so resubmitting the same text appends it again.
    """
    merged = {}
    for name in FIELD_NAMES:
        old = getattr(existing, name)
        new = getattr(incoming, name)
        if name == CONCATENATED_FIELD and old and new:
            merged[name] = f"{old}{CONCAT_SEPARATOR}{new}"
        else:
            merged[name] = new or old or ""
    return SheetRow(**merged)


def upsert(existing_rows: Sequence[SheetRow], incoming: SheetRow) -> UpsertResult:
    match = find_match(existing_rows, incoming)
    if match is None:
        return UpsertResult(action="append", row=incoming)
    return UpsertResult(
        action="update",
        row=merge_rows(existing_rows[match], incoming),
        row_index=match,
    )
