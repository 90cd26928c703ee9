from __future__ import annotations

from pathlib import Path

import pytest

from causelist.clients import FetchError, FixtureCauseListClient

FIXTURE_PATH = Path(__file__).resolve().parent.parent / "data" / "fixtures" / "cause_lists.json"


class RecordingSource:
    """Fixture-backed source that records every call and can be told to fail per operation."""

    def __init__(self, fail: set[str] | None = None) -> None:
        self._inner = FixtureCauseListClient(FIXTURE_PATH)
        self.calls: list[tuple[str, ...]] = []
        self.fail = fail if fail is not None else set()

    def _record(self, name: str, *args: str) -> None:
        self.calls.append((name, *args))
        if name in self.fail:
            raise FetchError()

    def fetch_state_list(self):
        self._record("states")
        return self._inner.fetch_state_list()

    def fetch_district_list(self, state):
        self._record("districts", state)
        return self._inner.fetch_district_list(state)

    def fetch_court_complex_list(self, district):
        self._record("complexes", district)
        return self._inner.fetch_court_complex_list(district)

    def fetch_docket(self, complex_name, date):
        self._record("docket", complex_name, date)
        return self._inner.fetch_docket(complex_name, date)

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)


@pytest.fixture
def fixture_path() -> Path:
    return FIXTURE_PATH


@pytest.fixture
def source() -> RecordingSource:
    return RecordingSource()
