"""Tests for Gmail body extraction and message parsing."""

import base64

from inbox_assistant.gmail.models import FetchedEmail
from inbox_assistant.gmail.parser import decode_body, format_email, get_header, parse_message


def _b64(text):
    return base64.urlsafe_b64encode(text.encode()).decode()


def _part(mime_type, text):
    return {"mimeType": mime_type, "body": {"data": _b64(text)}}


def test_prefers_plain_part():
    message = {"payload": {"parts": [
        _part("text/html", "<p>html</p>"),
        _part("text/plain", "plain"),
    ]}}
    assert decode_body(message) == "plain"


def test_first_plain_part_wins():
    message = {"payload": {"parts": [
        _part("text/plain", "first"),
        _part("text/plain", "second"),
    ]}}
    assert decode_body(message) == "first"


def test_html_only_returns_raw_markup():
    message = {"payload": {"parts": [_part("text/html", "<b>Next steps</b>")]}}
    assert decode_body(message) == "<b>Next steps</b>"


def test_empty_plain_part_falls_through_to_html():
    message = {"payload": {"parts": [
        {"mimeType": "text/plain", "body": {"size": 0}},
        _part("text/html", "<i>hi</i>"),
    ]}}
    assert decode_body(message) == "<i>hi</i>"


def test_inline_body():
    message = {"payload": {"mimeType": "text/plain", "body": {"data": _b64("inline")}}}
    assert decode_body(message) == "inline"


def test_unpadded_base64url():
    data = _b64("héllo?>").rstrip("=")
    message = {"payload": {"body": {"data": data}}}
    assert decode_body(message) == "héllo?>"


def test_empty_body_falls_back_to_snippet():
    message = {"snippet": "Thanks for applying", "payload": {"body": {"size": 0}}}
    assert decode_body(message) == "Thanks for applying"


def test_parts_without_text_fall_back_to_snippet():
    message = {
        "snippet": "see attached",
        "payload": {"parts": [{"mimeType": "application/pdf", "body": {"attachmentId": "a1"}}]},
    }
    assert decode_body(message) == "see attached"


def test_nothing_returns_empty_string():
    assert decode_body({"payload": {"body": {}}}) == ""
    assert decode_body({}) == ""


def test_get_header_is_case_insensitive():
    headers = [{"name": "SUBJECT", "value": "Interview"}]
    assert get_header(headers, "Subject") == "Interview"
    assert get_header(headers, "From") == ""
    assert get_header(None, "From") == ""


def test_parse_message():
    raw = {
        "id": "msg123",
        "snippet": "snip",
        "payload": {
            "mimeType": "text/plain",
            "headers": [
                {"name": "From", "value": "Alice <alice@example.com>"},
                {"name": "Subject", "value": "Test Subject"},
                {"name": "Date", "value": "Mon, 1 Jan 2024 12:00:00 +0000"},
            ],
            "body": {"data": _b64("Hello world")},
        },
    }
    email = parse_message(raw)
    assert email == FetchedEmail(
        message_id="msg123",
        sender="Alice <alice@example.com>",
        date="Mon, 1 Jan 2024 12:00:00 +0000",
        subject="Test Subject",
        body="Hello world",
    )


def test_format_email_truncates_body():
    email = FetchedEmail("m1", "a@b.c", "today", "Hi", "x" * 2500)
    text = format_email(email)
    assert text.startswith("MESSAGE_ID: m1\nFROM: a@b.c\nDATE: today\nSUBJECT: Hi\nBODY:\n")
    assert text.endswith("x" * 2000 + "\n[...truncated]")


def test_empty_parts_list_skips_inline_body():
    message = {
        "snippet": "snip",
        "payload": {"parts": [], "body": {"data": _b64("inline")}},
    }
    assert decode_body(message) == "snip"
