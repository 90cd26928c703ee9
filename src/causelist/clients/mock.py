from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from causelist.clients.base import CauseListSource
from causelist.types import CauseList, cause_list_from_payload

ANY_DATE = "*"


class FixtureCauseListClient(CauseListSource):
    """Deterministic source backed by a static JSON fixture."""

    def __init__(self, fixture_path: Path):
        with fixture_path.open("r", encoding="utf-8") as fh:
            payload = json.load(fh)

        self._states: list[str] = list(payload.get("states", []))
        self._districts: dict[str, list[str]] = dict(payload.get("districts", {}))
        self._complexes: dict[str, list[str]] = dict(payload.get("court_complexes", {}))
        self._cause_lists: dict[str, dict[str, CauseList]] = {}

        for complex_name, by_date in payload.get("cause_lists", {}).items():
            self._cause_lists[complex_name] = {
                date: cause_list_from_payload(courts) for date, courts in _as_dict(by_date).items()
            }

    def fetch_state_list(self) -> list[str]:
        return list(self._states)

    def fetch_district_list(self, state: str) -> list[str]:
        return list(self._districts.get(state, []))

    def fetch_court_complex_list(self, district: str) -> list[str]:
        return list(self._complexes.get(district, []))

    def fetch_docket(self, complex_name: str, date: str) -> CauseList:
        by_date = self._cause_lists.get(complex_name, {})
        if date in by_date:
            return by_date[date]
        return by_date.get(ANY_DATE, ())


def _as_dict(value: Any) -> dict[str, Any]:
    # A bare list of courts applies to every date.
    if isinstance(value, list):
        return {ANY_DATE: value}
    return dict(value)
