from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Sequence

from causelist.types import Case, Court

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[/\s]")

_DASHES = "-" * 41
_EQUALS = "=" * 41
_STARS = "*" * 51


def safe_filename_part(value: str) -> str:
    """Replace each `/` and whitespace character with `_`."""

    return _UNSAFE_FILENAME_CHARS.sub("_", value)


def case_filename(case: Case) -> str:
    return f"{safe_filename_part(case.case_number)}.txt"


def cause_list_filename(complex_name: str, date: str) -> str:
    return f"Complete_Cause_List_{safe_filename_part(complex_name)}_{safe_filename_part(date)}.txt"


def render_case(court_name: str, case: Case) -> str:
    return (
        "\n"
        f"{_DASHES}\n"
        f"COURT: {court_name}\n"
        f"{_DASHES}\n"
        f"Serial Number: {case.serial_number}\n"
        f"Case Number:   {case.case_number}\n"
        f"Parties:       {case.parties}\n"
        f"Petitioner Advocate: {case.petitioner_advocate}\n"
        f"Respondent Advocate: {case.respondent_advocate}\n"
        f"{_DASHES}\n"
    )


def render_court(court: Court) -> str:
    header = f"\n{_EQUALS}\n      CAUSE LIST FOR: {court.court_name}\n{_EQUALS}\n"
    return header + "".join(render_case(court.court_name, case) for case in court.cases)


def render_cause_list(cause_list: Sequence[Court], complex_name: str, date: str) -> str:
    header = (
        "\n"
        f"{_STARS}\n"
        f"  COMPLETE CAUSE LIST FOR {complex_name.upper()}\n"
        f"  DATE: {date}\n"
        f"{_STARS}\n"
    )
    return header + "".join(render_court(court) for court in cause_list)


def export_case(court_name: str, case: Case, out_dir: Path) -> Path:
    """Write one case as plain text into `out_dir` and return the file path."""

    return _save_text(render_case(court_name, case), out_dir / case_filename(case))


def export_cause_list(cause_list: Sequence[Court], complex_name: str, date: str, out_dir: Path) -> Path:
    """Write the whole docket (header block, then every case of every court) into `out_dir`."""

    content = render_cause_list(cause_list, complex_name, date)
    return _save_text(content, out_dir / cause_list_filename(complex_name, date))


def _save_text(content: str, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.info("Saved export", extra={"path": str(path), "bytes": len(content.encode("utf-8"))})
    return path
