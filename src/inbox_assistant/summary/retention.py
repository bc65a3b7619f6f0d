"""Append-only JSON summary log with a 30-day retention window."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from pathlib import Path

from dateutil import parser as date_parser

from inbox_assistant.summary.models import PurgeResult, SummaryEntry

logger = logging.getLogger(__name__)

RETENTION = timedelta(days=30)


def format_timestamp(moment: datetime) -> str:
    """UTC ISO 8601 with millisecond precision and a Z suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _parse_timestamp(value: str) -> datetime | None:
    try:
        parsed = date_parser.isoparse(value)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def append_and_purge(
    existing: list[SummaryEntry],
    new: list[SummaryEntry],
    now: datetime,
) -> PurgeResult:
    """Append ``new`` stamped with ``now``, then drop everything older than the window.

    All entries appended in one call share the same ``added_at``. Order is
    preserved. Entries whose timestamp cannot be parsed count as expired.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    stamp = format_timestamp(now)
    merged = list(existing) + [replace(entry, added_at=stamp) for entry in new]

    cutoff = now - RETENTION
    kept = []
    for entry in merged:
        added_at = _parse_timestamp(entry.added_at)
        if added_at is None:
            logger.warning(f"Dropping summary entry with unreadable addedAt: {entry.added_at!r}")
            continue
        if added_at >= cutoff:
            kept.append(entry)

    return PurgeResult(
        entries=kept,
        purged_count=len(merged) - len(kept),
        appended_count=len(new),
    )


class RetentionLogFile:
    """One account's summary log, loaded and saved wholesale per operation.

    Args:
        path: JSON file holding an array of summary entries.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> list[SummaryEntry]:
        if not self.path.exists():
            return []
        data = json.loads(self.path.read_text(encoding="utf-8"))
        return [SummaryEntry.from_dict(item) for item in data]

    def save(self, entries: list[SummaryEntry]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps([entry.to_dict() for entry in entries], indent=2),
            encoding="utf-8",
        )

    def append(self, new: list[SummaryEntry], now: datetime | None = None) -> PurgeResult:
        """Read, append, purge, write. Reads alone never purge."""
        if now is None:
            now = datetime.now(timezone.utc)
        result = append_and_purge(self.load(), new, now)
        self.save(result.entries)

        logger.info(
            f"Appended {result.appended_count} entries to {self.path} "
            f"({len(result.entries)} total, {result.purged_count} purged)"
        )
        return result
