from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date as date_cls
from typing import Literal

from causelist.controller import DocketResult, Failed, Loaded, LevelStatus, Loading
from causelist.types import Case, Court

ViewKind = Literal["idle", "loading", "error", "empty", "courts"]

LOADING_MESSAGE = "Generating Cause List... This may take a moment."
ERROR_TITLE = "An Error Occurred"
RETRY_LABEL = "Try Again"
EMPTY_TITLE = "No Results Found"
EMPTY_MESSAGE = "No cause list data could be generated for the selected criteria."
NOT_AVAILABLE = "N/A"

CASE_COLUMNS = (
    "S.No.",
    "Case No.",
    "Parties",
    "Petitioner Advocate",
    "Respondent Advocate",
    "Action",
)


@dataclass
class Accordion:
    """Which court section is expanded. At most one is open; the first one starts open."""

    size: int
    open_index: int | None = 0

    def __post_init__(self) -> None:
        if self.size <= 0:
            self.open_index = None

    def is_open(self, index: int) -> bool:
        return self.open_index == index

    def toggle(self, index: int) -> None:
        if not 0 <= index < self.size:
            raise IndexError(f"No court section at index {index}")
        self.open_index = None if self.open_index == index else index


@dataclass(frozen=True)
class ResultsView:
    kind: ViewKind
    message: str | None = None
    complex: str = ""
    date: str = ""
    courts: tuple[Court, ...] = field(default_factory=tuple)

    @property
    def title(self) -> str:
        return f"Cause List for {self.complex}"

    @property
    def display_date(self) -> str:
        return format_long_date(self.date)


def build_results_view(status: LevelStatus) -> ResultsView:
    """Map the docket level status onto what the results area shows."""

    if isinstance(status, Loading):
        return ResultsView(kind="loading", message=LOADING_MESSAGE)
    if isinstance(status, Failed):
        return ResultsView(kind="error", message=status.message)
    if isinstance(status, Loaded):
        result: DocketResult = status.data
        if not result.courts:
            return ResultsView(kind="empty", message=EMPTY_MESSAGE, complex=result.complex, date=result.date)
        return ResultsView(kind="courts", complex=result.complex, date=result.date, courts=result.courts)
    return ResultsView(kind="idle")


def case_row(case: Case) -> dict[str, str | int]:
    return {
        "S.No.": case.serial_number,
        "Case No.": case.case_number,
        "Parties": case.parties,
        "Petitioner Advocate": case.petitioner_advocate,
        "Respondent Advocate": case.respondent_advocate,
        "Action": "Download" if case.pdf_available else NOT_AVAILABLE,
    }


def format_long_date(value: str) -> str:
    """`2024-05-01` -> `1 May 2024`; anything unparseable is returned unchanged."""

    try:
        parsed = date_cls.fromisoformat(value)
    except ValueError:
        return value
    return f"{parsed.day} {parsed.strftime('%B')} {parsed.year}"
