"""Google Calendar event scheduling for follow-up calls and interviews."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from dateutil import parser as date_parser

from inbox_assistant.auth import AuthorizedClient
from inbox_assistant.exceptions import AuthError, CalendarError

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MINUTES = 60
MIN_DURATION_MINUTES = 5
MAX_DURATION_MINUTES = 480


@dataclass
class EventOutcome:
    """``status`` is "created" or "skipped" (start in the past)."""

    status: str
    title: str
    start: datetime
    end: datetime | None = None
    event_id: str | None = None
    html_link: str | None = None

    def describe(self) -> str:
        if self.status == "skipped":
            return (
                f'Skipped calendar event "{self.title}": the proposed date '
                f"({_iso(self.start)}) is in the past."
            )
        return "\n".join([
            f'Created calendar event: "{self.title}"',
            f"Start: {_iso(self.start)}",
            f"End: {_iso(self.end)}",
            f"Event ID: {self.event_id}",
            f"Link: {self.html_link}",
        ])


def _iso(moment: datetime | None) -> str:
    if moment is None:
        return ""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_start(value: str) -> datetime:
    """Parse an ISO 8601 start. Naive values are taken as local time."""
    try:
        parsed = date_parser.isoparse(value)
    except (ValueError, OverflowError) as e:
        raise CalendarError(f"Invalid start date/time {value!r}: {e}") from e
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


def check_past(title: str, start: datetime, now: datetime | None = None) -> EventOutcome | None:
    """Return a skipped outcome when ``start`` precedes ``now``, else None."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.astimezone()
    if start < now:
        logger.info(f'Skipping past calendar event "{title}" at {start.isoformat()}')
        return EventOutcome(status="skipped", title=title, start=start)
    return None


class CalendarClient:
    """Google Calendar API client bound to one account's calendar.

    Args:
        client: AuthorizedClient for the account.
        calendar_id: Calendar to write to.
    """

    def __init__(self, client: AuthorizedClient, calendar_id: str = "primary"):
        self._client = client
        self._service = client.calendar()
        self.calendar_id = calendar_id

    def create_event(
        self,
        summary: str,
        start: datetime,
        end: datetime,
        description: str | None = None,
        location: str | None = None,
    ) -> dict:
        """Create a new calendar event."""
        event_body: dict[str, Any] = {
            "summary": summary,
            "start": {"dateTime": start.isoformat()},
            "end": {"dateTime": end.isoformat()},
            "description": description or "",
            "location": location or "",
        }
        try:
            event = self._client.execute(
                self._service.events().insert(calendarId=self.calendar_id, body=event_body)
            )
        except AuthError:
            raise
        except Exception as e:
            raise CalendarError(f"Failed to create event: {e}") from e
        return {
            "id": event.get("id"),
            "summary": event.get("summary"),
            "html_link": event.get("htmlLink"),
        }

    def schedule(
        self,
        title: str,
        start: str | datetime,
        duration_minutes: int | None = None,
        description: str | None = None,
        location: str | None = None,
        now: datetime | None = None,
    ) -> EventOutcome:
        """Create an event unless its start is already in the past.

        A past start is reported as skipped and never sent upstream.
        """
        start_dt = parse_start(start) if isinstance(start, str) else start
        if start_dt.tzinfo is None:
            start_dt = start_dt.astimezone()
        skipped = check_past(title, start_dt, now)
        if skipped is not None:
            return skipped

        minutes = DEFAULT_DURATION_MINUTES if duration_minutes is None else duration_minutes
        end_dt = start_dt + timedelta(minutes=minutes)
        event = self.create_event(title, start_dt, end_dt, description, location)

        logger.info(f'Created calendar event "{title}" ({event["id"]})')
        return EventOutcome(
            status="created",
            title=title,
            start=start_dt,
            end=end_dt,
            event_id=event["id"],
            html_link=event["html_link"],
        )
