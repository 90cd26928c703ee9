from __future__ import annotations

from typing import Protocol

from causelist.types import CauseList

FETCH_FAILED_MESSAGE = "Failed to fetch data from AI. Please check your API key and network."


class FetchError(Exception):
    """The single error a cause-list source raises, whatever went wrong underneath."""

    def __init__(self, message: str = FETCH_FAILED_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


class CauseListSource(Protocol):
    """Interface for retrieving the state/district/complex hierarchy and cause lists."""

    def fetch_state_list(self) -> list[str]:
        """Return Indian state and union territory names."""

    def fetch_district_list(self, state: str) -> list[str]:
        """Return district names for the given state."""

    def fetch_court_complex_list(self, district: str) -> list[str]:
        """Return court complex names for the given district."""

    def fetch_docket(self, complex_name: str, date: str) -> CauseList:
        """Return the cause list for a court complex on a date (YYYY-MM-DD)."""
