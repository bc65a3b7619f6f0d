"""Recruiter log backed by a Google Sheets range."""

from __future__ import annotations

import logging

from inbox_assistant.auth import AuthorizedClient
from inbox_assistant.exceptions import AuthError, SheetsError
from inbox_assistant.sheets.models import SHEET_COLUMNS, SHEET_RANGE, SheetRow
from inbox_assistant.sheets.upsert import UpsertResult, upsert

logger = logging.getLogger(__name__)

VALUE_INPUT_OPTION = "USER_ENTERED"

_LAST_COLUMN = chr(ord("A") + len(SHEET_COLUMNS) - 1)


class RecruiterLog:
    """Upserts rows into one spreadsheet's log range.

    Args:
        client: AuthorizedClient for the account owning the spreadsheet.
        spreadsheet_id: Target spreadsheet.
        sheet_range: Sheet (or range) holding the rows.
    """

    def __init__(
        self,
        client: AuthorizedClient,
        spreadsheet_id: str,
        sheet_range: str = SHEET_RANGE,
    ):
        self._client = client
        self._values = client.sheets().spreadsheets().values()
        self.spreadsheet_id = spreadsheet_id
        self.sheet_range = sheet_range

    def _execute(self, request, action: str):
        try:
            return self._client.execute(request)
        except AuthError:
            raise
        except Exception as e:
            raise SheetsError(f"Failed to {action}: {e}") from e

    def read_rows(self) -> list[SheetRow]:
        response = self._execute(
            self._values.get(spreadsheetId=self.spreadsheet_id, range=self.sheet_range),
            "read rows",
        )
        return [SheetRow.from_values(values) for values in response.get("values", [])]

    def update_row(self, row_index: int, row: SheetRow) -> None:
        row_number = row_index + 1
        self._execute(
            self._values.update(
                spreadsheetId=self.spreadsheet_id,
                range=f"{self.sheet_range}!A{row_number}:{_LAST_COLUMN}{row_number}",
                valueInputOption=VALUE_INPUT_OPTION,
                body={"values": [row.to_values()]},
            ),
            f"update row {row_number}",
        )

    def append_row(self, row: SheetRow) -> None:
        self._execute(
            self._values.append(
                spreadsheetId=self.spreadsheet_id,
                range=self.sheet_range,
                valueInputOption=VALUE_INPUT_OPTION,
                body={"values": [row.to_values()]},
            ),
            "append row",
        )

    def log_contact(self, incoming: SheetRow) -> UpsertResult:
        """Read the range wholesale, then update the matching row or append."""
        result = upsert(self.read_rows(), incoming)
        if result.action == "update":
            self.update_row(result.row_index, result.row)
            logger.info(f"Updated row {result.row_index + 1} in {self.spreadsheet_id}")
        else:
            self.append_row(result.row)
            logger.info(f"Appended row to {self.spreadsheet_id}")
        return result
