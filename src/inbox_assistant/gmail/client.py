"""Mailbox operations over an authorized Gmail service."""

from __future__ import annotations

import logging

from inbox_assistant.auth import AuthorizedClient
from inbox_assistant.exceptions import AuthError, GmailError, PerItemExternalError
from inbox_assistant.gmail.models import FetchedEmail, TrashOutcome
from inbox_assistant.gmail.parser import parse_message

logger = logging.getLogger(__name__)

UNREAD_QUERY = "is:unread"


class Mailbox:
    """Unread-message triage for one account.

    Args:
        client: AuthorizedClient for the account. All requests go through
            ``client.execute`` so token refreshes are persisted.
        user_id: Gmail user id, "me" for the authorized account.
    """

    def __init__(self, client: AuthorizedClient, user_id: str = "me"):
        self._client = client
        self._service = client.gmail()
        self.user_id = user_id

    def list_unread_ids(self, max_results: int) -> list[str]:
        try:
            response = self._client.execute(
                self._service.users().messages().list(
                    userId=self.user_id, q=UNREAD_QUERY, maxResults=max_results,
                )
            )
        except AuthError:
            raise
        except Exception as e:
            raise GmailError(f"Failed to list messages: {e}") from e
        return [msg["id"] for msg in response.get("messages", [])]

    def get_message(self, message_id: str) -> dict:
        try:
            return self._client.execute(
                self._service.users().messages().get(
                    userId=self.user_id, id=message_id, format="full",
                )
            )
        except AuthError:
            raise
        except Exception as e:
            raise GmailError(f"Failed to fetch message {message_id}: {e}") from e

    def fetch_unread(self, max_results: int) -> list[FetchedEmail]:
        """Fetch unread messages one at a time, in list order."""
        message_ids = self.list_unread_ids(max_results)
        logger.info(f"Found {len(message_ids)} unread messages")
        return [parse_message(self.get_message(msg_id)) for msg_id in message_ids]

    def trash_message(self, message_id: str) -> None:
        try:
            self._client.execute(
                self._service.users().messages().trash(
                    userId=self.user_id, id=message_id,
                )
            )
        except Exception as e:
            raise PerItemExternalError(message_id, str(e)) from e

    def trash_messages(self, message_ids: list[str]) -> list[TrashOutcome]:
        """Move messages to trash sequentially. A failed id never aborts the batch."""
        outcomes = []
        for message_id in message_ids:
            try:
                self.trash_message(message_id)
                outcomes.append(TrashOutcome(message_id, ok=True))
            except PerItemExternalError as e:
                logger.warning(f"Failed to trash {message_id}: {e}")
                outcomes.append(TrashOutcome(message_id, ok=False, error=str(e)))
        return outcomes
