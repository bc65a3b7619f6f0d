"""Data models for the summary retention log."""

from __future__ import annotations

from dataclasses import dataclass, field

CATEGORIES = ("B", "D")  # B = advancement to next step, D = other


@dataclass(frozen=True)
class SummaryEntry:
    """One classified email recorded in the summary log. Immutable once written."""

    sender_name: str
    sender_email: str
    date_received: str
    subject: str
    category: str
    added_at: str = ""  # ISO 8601, stamped on append

    def to_dict(self) -> dict:
        return {
            "senderName": self.sender_name,
            "senderEmail": self.sender_email,
            "dateReceived": self.date_received,
            "subject": self.subject,
            "category": self.category,
            "addedAt": self.added_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> SummaryEntry:
        return cls(
            sender_name=data.get("senderName", ""),
            sender_email=data.get("senderEmail", ""),
            date_received=data.get("dateReceived", ""),
            subject=data.get("subject", ""),
            category=data.get("category", ""),
            added_at=data.get("addedAt", ""),
        )


@dataclass
class PurgeResult:
    """Outcome of an append: surviving entries and how many expired."""

    entries: list[SummaryEntry] = field(default_factory=list)
    purged_count: int = 0
    appended_count: int = 0
