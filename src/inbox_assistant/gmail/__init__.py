"""Gmail triage: canonical body extraction and unread/trash operations.

Heavy imports are deferred. Use explicit imports:
    from inbox_assistant.gmail.client import Mailbox
    from inbox_assistant.gmail.parser import decode_body
"""

# Light imports only (no external deps)
from inbox_assistant.gmail.models import FetchedEmail, TrashOutcome
from inbox_assistant.gmail.parser import decode_body, format_email, get_header, parse_message


def __getattr__(name):
    """Lazy imports for classes that require the Google client libraries."""
    if name == "Mailbox":
        from inbox_assistant.gmail.client import Mailbox
        return Mailbox
    raise AttributeError(f"module 'inbox_assistant.gmail' has no attribute {name!r}")


__all__ = [
    "Mailbox",
    "FetchedEmail",
    "TrashOutcome",
    "decode_body",
    "format_email",
    "get_header",
    "parse_message",
]
