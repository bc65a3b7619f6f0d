"""Tests for calendar client."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from inbox_assistant.calendar.client import CalendarClient, check_past, parse_start
from inbox_assistant.exceptions import CalendarError

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def calendar_client():
    service = MagicMock()
    client = MagicMock()
    client.calendar.return_value = service
    client.execute.side_effect = lambda request: request.execute()
    return CalendarClient(client, "primary"), service


def test_create_event(calendar_client):
    client, service = calendar_client
    service.events().insert().execute.return_value = {
        "id": "new-evt",
        "summary": "Lunch",
        "htmlLink": "https://calendar.google.com/event?id=new-evt",
    }
    start = datetime(2026, 10, 20, 12, 0, tzinfo=timezone.utc)
    result = client.create_event("Lunch", start, start + timedelta(hours=1))
    assert result["id"] == "new-evt"
    body = service.events().insert.call_args.kwargs["body"]
    assert body["start"] == {"dateTime": "2026-10-20T12:00:00+00:00"}
    assert body["end"] == {"dateTime": "2026-10-20T13:00:00+00:00"}
    assert body["description"] == ""


def test_schedule_uses_default_duration(calendar_client):
    client, service = calendar_client
    service.events().insert().execute.return_value = {"id": "e1", "htmlLink": "link"}

    outcome = client.schedule("[Interview] Acme - SWE", "2026-10-21T14:00:00-05:00", now=NOW)

    assert outcome.status == "created"
    assert outcome.end - outcome.start == timedelta(minutes=60)
    assert outcome.event_id == "e1"
    assert "Start: 2026-10-21T19:00:00.000Z" in outcome.describe()
    assert "End: 2026-10-21T20:00:00.000Z" in outcome.describe()


def test_schedule_custom_duration(calendar_client):
    client, service = calendar_client
    service.events().insert().execute.return_value = {"id": "e2"}
    outcome = client.schedule("Call", "2026-10-21T14:00:00Z", duration_minutes=30, now=NOW)
    body = service.events().insert.call_args.kwargs["body"]
    assert body["end"] == {"dateTime": "2026-10-21T14:30:00+00:00"}
    assert outcome.status == "created"


def test_schedule_in_past_is_skipped(calendar_client):
    client, service = calendar_client
    service.events().insert.reset_mock()

    outcome = client.schedule("Old call", "2026-10-01T09:00:00Z", now=NOW)

    assert outcome.status == "skipped"
    assert outcome.describe().startswith('Skipped calendar event "Old call"')
    service.events().insert.assert_not_called()


def test_check_past():
    assert check_past("x", NOW + timedelta(minutes=1), NOW) is None
    assert check_past("x", NOW - timedelta(seconds=1), NOW).status == "skipped"


def test_parse_start_naive_is_local():
    parsed = parse_start("2026-10-21T14:00:00")
    assert parsed.tzinfo is not None
    assert parsed.replace(tzinfo=None) == datetime(2026, 10, 21, 14, 0)


def test_parse_start_invalid():
    with pytest.raises(CalendarError, match="Invalid start"):
        parse_start("next tuesday")


def test_create_event_error(calendar_client):
    client, service = calendar_client
    service.events().insert().execute.side_effect = Exception("API error")
    start = datetime(2026, 10, 20, 12, 0, tzinfo=timezone.utc)
    with pytest.raises(CalendarError, match="Failed to create event"):
        client.create_event("x", start, start)
