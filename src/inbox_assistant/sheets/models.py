"""Row layout of the recruiter communication log sheet."""

from __future__ import annotations

from dataclasses import astuple, dataclass, fields

SHEET_RANGE = "Sheet1"

SHEET_COLUMNS = [
    "Recruiter Name",            # A
    "Recruiter Email",           # B
    "Recruiter Tel",             # C
    "Company/Role",              # D
    "First Contact",             # E
    "Subsequent Contact(s)",     # F
    "Recruiter Call Scheduled",  # G
    "Company Contact Info",      # H
    "Company First Interview",   # I
    "Company Second Interview",  # J
]


@dataclass(frozen=True)
class SheetRow:
    """One row of the log, in column order A..J."""

    recruiter_name: str = ""
    recruiter_email: str = ""
    recruiter_tel: str = ""
    company_role: str = ""
    first_contact: str = ""
    subsequent_contacts: str = ""
    recruiter_call_scheduled: str = ""
    company_contact_info: str = ""
    company_first_interview: str = ""
    company_second_interview: str = ""

    def to_values(self) -> list[str]:
        return list(astuple(self))

    @classmethod
    def from_values(cls, values: list) -> SheetRow:
        """Build from a raw sheet row. Short (ragged) rows are padded with ""."""
        cells = ["" if v is None else str(v) for v in values[: len(SHEET_COLUMNS)]]
        cells += [""] * (len(SHEET_COLUMNS) - len(cells))
        return cls(*cells)

    def identity_key(self) -> tuple[str, str]:
        return normalize(self.recruiter_email), normalize(self.company_role)


def normalize(value: str) -> str:
    return (value or "").strip().lower()


FIELD_NAMES = [f.name for f in fields(SheetRow)]
