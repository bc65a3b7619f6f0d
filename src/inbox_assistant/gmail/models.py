"""Data models for the Gmail module."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class FetchedEmail:
    """An unread message reduced to what the triage agent reads."""

    message_id: str
    sender: str
    date: str
    subject: str
    body: str


@dataclass
class TrashOutcome:
    """Result of trashing a single message id."""

    message_id: str
    ok: bool
    error: str | None = None

    def describe(self) -> str:
        if self.ok:
            return f"Trashed: {self.message_id}"
        return f"Failed to trash {self.message_id}: {self.error}"
