from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field, replace
from datetime import date as date_cls
from enum import Enum
from typing import Any, Union

from causelist.clients import CauseListSource, FetchError
from causelist.types import CauseList

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "Please select a state, district, court complex and a date."


class Level(str, Enum):
    STATES = "states"
    DISTRICTS = "districts"
    COMPLEXES = "complexes"
    DOCKET = "docket"


@dataclass(frozen=True, slots=True)
class Selection:
    state: str = ""
    district: str = ""
    complex: str = ""
    date: str = ""

    @property
    def complete(self) -> bool:
        return bool(self.state and self.district and self.complex and self.date)


@dataclass(frozen=True, slots=True)
class FetchTicket:
    """Identifies one in-flight fetch and the selection it was issued for."""

    level: Level
    serial: int
    scope: tuple[str, ...]
    params: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class DocketResult:
    complex: str
    date: str
    courts: CauseList


@dataclass(frozen=True, slots=True)
class Idle:
    pass


@dataclass(frozen=True, slots=True)
class Loading:
    ticket: FetchTicket


@dataclass(frozen=True, slots=True)
class Loaded:
    data: Any


@dataclass(frozen=True, slots=True)
class Failed:
    message: str
    ticket: FetchTicket | None = None


LevelStatus = Union[Idle, Loading, Loaded, Failed]


@dataclass
class _Levels:
    states: LevelStatus = field(default_factory=Idle)
    districts: LevelStatus = field(default_factory=Idle)
    complexes: LevelStatus = field(default_factory=Idle)
    docket: LevelStatus = field(default_factory=Idle)


class CauseListController:
    """
    Owns the selection and the four dependent fetches (states, districts, complexes, docket).

    Each level holds a tagged status so loaded data never coexists with an error. Fetches are
    split into `begin_*` (issues a ticket and marks the level loading) and `resolve`/`reject`
    (applies the outcome). A ticket whose level has since been cleared, re-fetched, or whose
    parent selection changed is discarded, so a superseded response can never overwrite a
    newer selection. The plain methods (`select_state`, `search`, ...) run both halves
    synchronously against the source.
    """

    def __init__(self, source: CauseListSource, *, initial_date: str | None = None) -> None:
        self.source = source
        self.selection = Selection(date=initial_date if initial_date is not None else date_cls.today().isoformat())
        self.levels = _Levels()
        self.error: str | None = None
        self.validation_error: str | None = None
        self._serials = itertools.count(1)
        self._last_failed: FetchTicket | None = None

    # -- read-only views -------------------------------------------------------------------

    @property
    def states(self) -> list[str]:
        return _loaded_or(self.levels.states, [])

    @property
    def districts(self) -> list[str]:
        return _loaded_or(self.levels.districts, [])

    @property
    def complexes(self) -> list[str]:
        return _loaded_or(self.levels.complexes, [])

    @property
    def docket(self) -> DocketResult | None:
        return _loaded_or(self.levels.docket, None)

    @property
    def states_loading(self) -> bool:
        return isinstance(self.levels.states, Loading)

    @property
    def districts_loading(self) -> bool:
        return isinstance(self.levels.districts, Loading)

    @property
    def complexes_loading(self) -> bool:
        return isinstance(self.levels.complexes, Loading)

    @property
    def docket_loading(self) -> bool:
        return isinstance(self.levels.docket, Loading)

    @property
    def busy(self) -> bool:
        return any(
            (self.states_loading, self.districts_loading, self.complexes_loading, self.docket_loading)
        )

    @property
    def can_search(self) -> bool:
        return self.selection.complete and not self.busy

    @property
    def can_retry(self) -> bool:
        return self._last_failed is not None and not self.busy

    # -- user actions ----------------------------------------------------------------------

    def load_states(self) -> None:
        self._run(self.begin_states())

    def select_state(self, state: str) -> None:
        self.selection = Selection(state=state, date=self.selection.date)
        self.levels.districts = Idle()
        self.levels.complexes = Idle()
        self.levels.docket = Idle()
        self._forget_failure(Level.DISTRICTS, Level.COMPLEXES, Level.DOCKET)
        if state:
            self._run(self.begin_districts())

    def select_district(self, district: str) -> None:
        self.selection = replace(self.selection, district=district, complex="")
        self.levels.complexes = Idle()
        self.levels.docket = Idle()
        self._forget_failure(Level.COMPLEXES, Level.DOCKET)
        if district:
            self._run(self.begin_complexes())

    def select_complex(self, complex_name: str) -> None:
        self.selection = replace(self.selection, complex=complex_name)

    def set_date(self, value: str) -> None:
        self.selection = replace(self.selection, date=value)

    def search(self) -> bool:
        """Fetch the docket for the current selection. Returns False when nothing was fetched."""

        if not self.selection.complete:
            self.validation_error = VALIDATION_MESSAGE
            logger.info("Search rejected, incomplete selection", extra={"selection": self.selection})
            return False
        if self.busy:
            return False
        self.validation_error = None
        self._run(self.begin_docket())
        return True

    def retry(self) -> bool:
        """Re-run the fetch that failed most recently."""

        failed = self._last_failed
        if failed is None or self.busy:
            return False
        if failed.level is Level.STATES:
            self._run(self.begin_states())
        elif failed.level is Level.DISTRICTS:
            self._run(self.begin_districts())
        elif failed.level is Level.COMPLEXES:
            self._run(self.begin_complexes())
        else:
            complex_name, day = failed.params
            self._run(self.begin_docket(complex_name, day))
        return True

    # -- fetch lifecycle -------------------------------------------------------------------

    def begin_states(self) -> FetchTicket:
        return self._begin(Level.STATES)

    def begin_districts(self) -> FetchTicket:
        return self._begin(Level.DISTRICTS)

    def begin_complexes(self) -> FetchTicket:
        return self._begin(Level.COMPLEXES)

    def begin_docket(self, complex_name: str | None = None, day: str | None = None) -> FetchTicket:
        params = (
            complex_name if complex_name is not None else self.selection.complex,
            day if day is not None else self.selection.date,
        )
        return self._begin(Level.DOCKET, params)

    def resolve(self, ticket: FetchTicket, data: Any) -> bool:
        """Apply fetched data. Returns False when the ticket was superseded and the data dropped."""

        if not self._is_current(ticket):
            return False
        if ticket.level is Level.DOCKET:
            complex_name, day = ticket.params
            data = DocketResult(complex=complex_name, date=day, courts=tuple(data))
        else:
            data = list(data)
        self._set(ticket.level, Loaded(data))
        if self._last_failed is not None and self._last_failed.level is ticket.level:
            self._last_failed = None
        logger.info("Fetch completed", extra={"level": ticket.level.value, "serial": ticket.serial})
        return True

    def reject(self, ticket: FetchTicket, exc: FetchError) -> bool:
        """Record a failed fetch. The dependent chain stops here; upstream selections stay."""

        if not self._is_current(ticket):
            return False
        message = exc.message
        self._set(ticket.level, Failed(message, ticket))
        self._last_failed = ticket
        if ticket.level is not Level.DOCKET:
            self.error = message
        logger.warning(
            "Fetch failed",
            extra={"level": ticket.level.value, "serial": ticket.serial, "error": message},
        )
        return True

    def _begin(self, level: Level, params: tuple[str, ...] = ()) -> FetchTicket:
        ticket = FetchTicket(level=level, serial=next(self._serials), scope=self._scope(level), params=params)
        self.error = None
        self._set(level, Loading(ticket))
        logger.info(
            "Fetch started",
            extra={"level": level.value, "serial": ticket.serial, "scope": ticket.scope, "params": params},
        )
        return ticket

    def _run(self, ticket: FetchTicket) -> None:
        try:
            data = self._call_source(ticket)
        except FetchError as exc:
            self.reject(ticket, exc)
            return
        self.resolve(ticket, data)

    def _call_source(self, ticket: FetchTicket) -> Any:
        if ticket.level is Level.STATES:
            return self.source.fetch_state_list()
        if ticket.level is Level.DISTRICTS:
            (state,) = ticket.scope
            return self.source.fetch_district_list(state)
        if ticket.level is Level.COMPLEXES:
            _, district = ticket.scope
            return self.source.fetch_court_complex_list(district)
        complex_name, day = ticket.params
        return self.source.fetch_docket(complex_name, day)

    def _scope(self, level: Level) -> tuple[str, ...]:
        if level is Level.STATES:
            return ()
        if level is Level.DISTRICTS:
            return (self.selection.state,)
        return (self.selection.state, self.selection.district)

    def _is_current(self, ticket: FetchTicket) -> bool:
        status = self._get(ticket.level)
        if not isinstance(status, Loading) or status.ticket != ticket:
            logger.warning(
                "Discarding superseded fetch result",
                extra={"level": ticket.level.value, "serial": ticket.serial},
            )
            return False
        if ticket.scope != self._scope(ticket.level):
            self._set(ticket.level, Idle())
            logger.warning(
                "Discarding fetch result for a stale selection",
                extra={"level": ticket.level.value, "serial": ticket.serial, "scope": ticket.scope},
            )
            return False
        return True

    def _forget_failure(self, *levels: Level) -> None:
        failed = self._last_failed
        if failed is None or failed.level not in levels:
            return
        self._last_failed = None
        # List failures are the ones shown in the banner.
        if failed.level is not Level.DOCKET:
            self.error = None

    def _get(self, level: Level) -> LevelStatus:
        return getattr(self.levels, level.value)

    def _set(self, level: Level, status: LevelStatus) -> None:
        setattr(self.levels, level.value, status)


def _loaded_or(status: LevelStatus, default: Any) -> Any:
    if isinstance(status, Loaded):
        return status.data
    return default
