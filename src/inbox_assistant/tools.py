"""Agent-facing tool operations.

Each operation validates its input (raising ValidationError before any core
logic runs), then resolves the account, performs the Google API call on a
worker thread and renders the outcome as text. Failures past validation are
caught and returned as ``"Error <operation>: <message>"``.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Annotated, Callable, Literal

from pydantic import Field
from typing_extensions import TypedDict

from inbox_assistant.auth import CredentialStore
from inbox_assistant.calendar.client import CalendarClient, check_past, parse_start
from inbox_assistant.config import AppConfig
from inbox_assistant.gmail.client import Mailbox
from inbox_assistant.gmail.parser import format_email
from inbox_assistant.sheets.client import RecruiterLog
from inbox_assistant.sheets.models import SheetRow
from inbox_assistant.summary.retention import RetentionLogFile
from inbox_assistant import validation

logger = logging.getLogger(__name__)

AccountKey = Annotated[
    Literal["work", "secondary"],
    Field(description="Which email account to use"),
]
OptionalText = str | None



class SummaryEntryInput(TypedDict):
    """One classified email as submitted by the agent. ``addedAt`` is stamped on append."""

    senderName: Annotated[str, Field(description="Name of the sender")]
    senderEmail: Annotated[str, Field(description="Email address of the sender")]
    dateReceived: Annotated[str, Field(description="Date and time the email was received")]
    subject: Annotated[str, Field(description="Email subject line")]
    category: Annotated[
        Literal["B", "D"],
        Field(description="Category: B = advancement to next step, D = other/uncategorized"),
    ]


SEPARATOR = "=" * 60

TOOL_DESCRIPTIONS = {
    "fetch_new_emails": (
        "Fetch unread emails from a Gmail inbox. Returns sender, date, subject, "
        "message ID, and body text for each message. The message IDs can be "
        "passed to delete_emails later. Specify which account to fetch from."
    ),
    "delete_emails": (
        "Move emails to trash by their Gmail message IDs. Use this for category A "
        "(acknowledgements) and category C (rejections) emails."
    ),
    "append_to_summary": (
        "Append classified email entries to the local summary file. Use this for "
        "category B (advancement to next step) and category D (other) emails. "
        "Entries older than 30 days are purged on every append."
    ),
    "log_recruiter_contact": (
        "Log or update recruiter contact info in the tracking spreadsheet. If a row "
        "already exists for the same recruiter_email + company_role, it updates that "
        "row (merging non-empty fields). Otherwise appends a new row."
    ),
    "create_calendar_event": (
        "Create a Google Calendar event for a scheduled recruiter call or company "
        "interview. Events whose start is in the past are skipped."
    ),
}


def render_error(operation: str, error: Exception) -> str:
    logger.error(f"Error {operation}: {error}")
    return f"Error {operation}: {error}"


class AssistantTools:
    """The tool operations, bound to injected configuration and credentials.

    Args:
        config: Application configuration.
        credentials: CredentialStore used to authorize every call.
        clock: Returns the current aware datetime. Injected for tests.
    """

    def __init__(
        self,
        config: AppConfig,
        credentials: CredentialStore,
        clock: Callable[[], datetime] | None = None,
    ):
        self._config = config
        self._credentials = credentials
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def account_description(self) -> str:
        return self._config.describe_accounts()

    # ---- Mailbox ----

    async def fetch_new_emails(
        self,
        account: AccountKey,
        max_results: Annotated[
            int, Field(description="Maximum number of unread emails to fetch (1-100)", ge=1, le=100),
        ],
    ) -> str:
        """Fetch unread emails (1-100) with their canonical body text."""
        validation.validate_account(account)
        max_results = validation.validate_max_results(max_results)
        try:
            emails = await asyncio.to_thread(self._fetch_unread, account, max_results)
        except Exception as e:
            return render_error("fetching emails", e)

        if not emails:
            return "No unread emails found."
        blocks = f"\n{SEPARATOR}\n".join(format_email(email) for email in emails)
        return f"Found {len(emails)} unread email(s):\n\n{SEPARATOR}\n{blocks}"

    def _fetch_unread(self, account: str, max_results: int):
        mailbox = Mailbox(self._credentials.get_client(account))
        return mailbox.fetch_unread(max_results)

    async def delete_emails(
        self,
        account: AccountKey,
        message_ids: Annotated[list[str], Field(description="Gmail message IDs to move to trash")],
    ) -> str:
        """Move messages to trash. Each id succeeds or fails on its own."""
        validation.validate_account(account)
        message_ids = validation.validate_message_ids(message_ids)
        try:
            outcomes = await asyncio.to_thread(self._trash, account, message_ids)
        except Exception as e:
            return render_error("deleting emails", e)
        lines = "\n".join(outcome.describe() for outcome in outcomes)
        return f"Delete results:\n{lines}"

    def _trash(self, account: str, message_ids: list[str]):
        mailbox = Mailbox(self._credentials.get_client(account))
        return mailbox.trash_messages(message_ids)

    # ---- Summary log ----

    async def append_to_summary(
        self,
        account: AccountKey,
        entries: Annotated[
            list[SummaryEntryInput], Field(description="Email summary entries to append"),
        ],
    ) -> str:
        """Append B/D entries to the account's summary log and purge stale ones."""
        validation.validate_account(account)
        new_entries = validation.validate_summary_entries(entries)
        try:
            path = self._config.summary_path(account)
            result = await asyncio.to_thread(
                RetentionLogFile(path).append, new_entries, self._clock(),
            )
        except Exception as e:
            return render_error("appending to summary", e)

        text = (
            f"Appended {result.appended_count} entry/entries to summary.\n"
            f"Total entries in summary: {len(result.entries)}\n"
            f"Summary file: {path}"
        )
        if result.purged_count:
            text += f"\nPurged {result.purged_count} entry/entries older than 30 days."
        return text

    # ---- Recruiter sheet ----

    async def log_recruiter_contact(
        self,
        account: AccountKey,
        recruiter_name: Annotated[str, Field(description="Recruiter's full name")],
        recruiter_email: Annotated[str, Field(description="Recruiter's email address")],
        company_role: Annotated[
            str, Field(description="Company name and role the recruiter seeks to fill"),
        ],
        first_contact: Annotated[
            str, Field(description="Date/time of first contact (from the email's Date header)"),
        ],
        recruiter_tel: Annotated[
            OptionalText, Field(description="Recruiter's phone number, if mentioned in the email"),
        ] = None,
        subsequent_contacts: Annotated[
            OptionalText, Field(description="Any follow-up contact context mentioned in the email"),
        ] = None,
        recruiter_call_scheduled: Annotated[
            OptionalText,
            Field(
                description=(
                    "Scheduled call details: date, time, platform (Zoom/Teams), meeting "
                    "link or phone, and whether they have your cell number"
                ),
            ),
        ] = None,
        company_contact_info: Annotated[
            OptionalText,
            Field(description="Company interviewer name/email/tel if advancing to company interview"),
        ] = None,
        company_first_interview: Annotated[
            OptionalText,
            Field(description="Company first interview: date, time, platform, link/phone, cell number note"),
        ] = None,
        company_second_interview: Annotated[
            OptionalText,
            Field(description="Company second interview: date, time, platform, link/phone, cell number note"),
        ] = None,
    ) -> str:
        """Update the matching (email, company/role) row or append a new one."""
        validation.validate_account(account)
        incoming = SheetRow(
            recruiter_name=validation.require_text("recruiter_name", recruiter_name),
            recruiter_email=validation.require_text("recruiter_email", recruiter_email),
            recruiter_tel=validation.optional_text("recruiter_tel", recruiter_tel),
            company_role=validation.require_text("company_role", company_role),
            first_contact=validation.require_text("first_contact", first_contact),
            subsequent_contacts=validation.optional_text(
                "subsequent_contacts", subsequent_contacts,
            ),
            recruiter_call_scheduled=validation.optional_text(
                "recruiter_call_scheduled", recruiter_call_scheduled,
            ),
            company_contact_info=validation.optional_text(
                "company_contact_info", company_contact_info,
            ),
            company_first_interview=validation.optional_text(
                "company_first_interview", company_first_interview,
            ),
            company_second_interview=validation.optional_text(
                "company_second_interview", company_second_interview,
            ),
        )
        try:
            result = await asyncio.to_thread(self._log_contact, account, incoming)
        except Exception as e:
            return render_error("logging recruiter contact", e)

        if result.action == "update":
            return (
                f"Updated existing row {result.row_index + 1} for "
                f"{recruiter_name} / {company_role}."
            )
        return f"Appended new row for {recruiter_name} / {company_role}."

    def _log_contact(self, account: str, incoming: SheetRow):
        spreadsheet_id = self._config.spreadsheet_id(account)
        log = RecruiterLog(self._credentials.get_client(account), spreadsheet_id)
        return log.log_contact(incoming)

    # ---- Calendar ----

    async def create_calendar_event(
        self,
        account: AccountKey,
        title: Annotated[
            str,
            Field(
                description=(
                    "Event title, e.g. '[Recruiter Call] Acme Corp - Sr Engineer' "
                    "or '[Interview] Acme Corp - Sr Engineer'"
                ),
            ),
        ],
        start_date_time: Annotated[
            str, Field(description="Event start in ISO 8601 format, e.g. 2026-02-20T14:00:00-06:00"),
        ],
        duration_minutes: Annotated[
            int | None, Field(description="Duration in minutes (default 60)", ge=5, le=480),
        ] = None,
        description: Annotated[
            OptionalText,
            Field(
                description=(
                    "Event description: recruiter/company contact info, notes, "
                    "whether they have your cell number, etc."
                ),
            ),
        ] = None,
        location: Annotated[
            OptionalText, Field(description="Video meeting link (Zoom/Teams URL) or phone number"),
        ] = None,
    ) -> str:
        """Create an event (default 60 minutes). Past starts are skipped locally."""
        validation.validate_account(account)
        validation.require_text("title", title)
        validation.require_text("start_date_time", start_date_time)
        duration_minutes = validation.validate_duration(duration_minutes)
        try:
            now = self._clock()
            start = parse_start(start_date_time)
            skipped = check_past(title, start, now)
            if skipped is not None:
                return skipped.describe()
            outcome = await asyncio.to_thread(
                self._schedule, account, title, start, duration_minutes,
                description, location, now,
            )
        except Exception as e:
            return render_error("creating calendar event", e)
        return outcome.describe()

    def _schedule(self, account, title, start, duration_minutes, description, location, now):
        calendar = CalendarClient(
            self._credentials.get_client(account), self._config.calendar_id(account),
        )
        return calendar.schedule(
            title, start, duration_minutes, description, location, now=now,
        )


def register_tools(server, tools: AssistantTools) -> None:
    """Register every tool operation on a FastMCP-style server.

    Called once from the composition root.
    """
    accounts = tools.account_description
    for name, description in TOOL_DESCRIPTIONS.items():
        server.tool(
            getattr(tools, name),
            name=name,
            description=f"{description} Which account to use: {accounts}.",
        )
        logger.debug(f"Registered tool {name}")
