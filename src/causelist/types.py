from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence


@dataclass(frozen=True, slots=True)
class Case:
    serial_number: int
    case_number: str
    parties: str
    petitioner_advocate: str
    respondent_advocate: str
    pdf_available: bool


@dataclass(frozen=True, slots=True)
class Court:
    court_name: str
    cases: tuple[Case, ...] = field(default_factory=tuple)


CauseList = tuple[Court, ...]


def case_from_payload(raw: Mapping[str, Any]) -> Case:
    """Build a :class:`Case` from the camelCase payload the AI service returns."""

    if not isinstance(raw, Mapping):
        raise ValueError(f"Case payload must be an object, got {type(raw).__name__}")
    serial_number = _require(raw, "serialNumber", int)
    if serial_number < 1:
        raise ValueError(f"serialNumber must be positive, got {serial_number}")
    return Case(
        serial_number=serial_number,
        case_number=_require(raw, "caseNumber", str),
        parties=_require(raw, "parties", str),
        petitioner_advocate=_require(raw, "petitionerAdvocate", str),
        respondent_advocate=_require(raw, "respondentAdvocate", str),
        pdf_available=_require(raw, "pdfAvailable", bool),
    )


def court_from_payload(raw: Mapping[str, Any]) -> Court:
    if not isinstance(raw, Mapping):
        raise ValueError(f"Court payload must be an object, got {type(raw).__name__}")
    cases = _require(raw, "cases", list)
    return Court(
        court_name=_require(raw, "courtName", str),
        cases=tuple(case_from_payload(item) for item in cases),
    )


def cause_list_from_payload(raw: Any) -> CauseList:
    if not isinstance(raw, list):
        raise ValueError(f"Cause list payload must be an array, got {type(raw).__name__}")
    return tuple(court_from_payload(item) for item in raw)


def string_list_from_payload(raw: Any) -> list[str]:
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        raise ValueError("Expected a JSON array of strings")
    return list(raw)


def _require(raw: Mapping[str, Any], key: str, expected: type) -> Any:
    if key not in raw:
        raise ValueError(f"Missing required field {key!r}")
    value = raw[key]
    # bool is a subclass of int; a serial number of `true` is still malformed.
    if expected is int and isinstance(value, bool):
        raise ValueError(f"Field {key!r} must be int, got bool")
    if not isinstance(value, expected):
        raise ValueError(f"Field {key!r} must be {expected.__name__}, got {type(value).__name__}")
    return value


def flatten_cases(cause_list: Sequence[Court]) -> list[tuple[str, Case]]:
    """Every (court name, case) pair in docket order."""

    return [(court.court_name, case) for court in cause_list for case in court.cases]
