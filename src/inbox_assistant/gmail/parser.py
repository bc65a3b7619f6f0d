"""Parse Gmail API message payloads into the canonical body and headers."""

from __future__ import annotations

import base64
import binascii

from inbox_assistant.gmail.models import FetchedEmail

TRUNCATION_MARKER = "\n[...truncated]"


def decode_body(message: dict) -> str:
    """Return the canonical body text of a Gmail API message (format=full).

    Priority: first text/plain part, then first text/html part, then the
    inline payload body, then the message snippet, then "". HTML is
    returned as raw markup.
    """
    payload = message.get("payload") or {}
    parts = payload.get("parts")

    if parts is not None:
        text = _decode_first_part(parts, "text/plain")
        if not text:
            text = _decode_first_part(parts, "text/html")
    else:
        text = _decode_data((payload.get("body") or {}).get("data", ""))

    if not text:
        return message.get("snippet") or ""
    return text


def _decode_first_part(parts: list[dict], mime_type: str) -> str:
    for part in parts:
        if part.get("mimeType") == mime_type:
            return _decode_data((part.get("body") or {}).get("data", ""))
    return ""


def _decode_data(data: str) -> str:
    """base64url -> UTF-8. Tolerates missing padding."""
    if not data:
        return ""
    padded = data + "=" * (-len(data) % 4)
    try:
        return base64.urlsafe_b64decode(padded).decode("utf-8", errors="replace")
    except (binascii.Error, ValueError):
        return ""


def get_header(headers: list[dict] | None, name: str) -> str:
    """Case-insensitive header lookup. Returns "" when absent."""
    if not headers:
        return ""
    wanted = name.lower()
    for header in headers:
        if (header.get("name") or "").lower() == wanted:
            return header.get("value") or ""
    return ""


def parse_message(raw_message: dict) -> FetchedEmail:
    """Extract sender, date, subject and canonical body. No network calls."""
    headers = (raw_message.get("payload") or {}).get("headers")
    return FetchedEmail(
        message_id=raw_message.get("id", ""),
        sender=get_header(headers, "From"),
        date=get_header(headers, "Date"),
        subject=get_header(headers, "Subject"),
        body=decode_body(raw_message),
    )


def format_email(email: FetchedEmail, max_body_length: int = 2000) -> str:
    body = email.body
    if len(body) > max_body_length:
        body = body[:max_body_length] + TRUNCATION_MARKER
    return "\n".join([
        f"MESSAGE_ID: {email.message_id}",
        f"FROM: {email.sender}",
        f"DATE: {email.date}",
        f"SUBJECT: {email.subject}",
        f"BODY:\n{body}",
    ])
