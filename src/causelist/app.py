"""Streamlit front-end: cascading state/district/complex/date form and the cause-list viewer."""

from __future__ import annotations

import logging
from datetime import date

import streamlit as st

from causelist.clients import build_source
from causelist.config import Settings
from causelist.controller import CauseListController, DocketResult
from causelist.export import case_filename, cause_list_filename, render_case, render_cause_list
from causelist.types import Court
from causelist.viewer import (
    CASE_COLUMNS,
    EMPTY_TITLE,
    ERROR_TITLE,
    NOT_AVAILABLE,
    RETRY_LABEL,
    Accordion,
    build_results_view,
    case_row,
)

logger = logging.getLogger(__name__)


def get_controller(settings: Settings) -> CauseListController:
    """One controller per browser session; the state list is fetched once, on first render."""

    if "controller" not in st.session_state:
        try:
            source = build_source(settings)
        except ValueError as exc:
            st.error(f"{exc}. Set API_KEY in the environment or .env file.")
            st.stop()
        logger.info("Starting session", extra={"data_source": settings.data_source, "model": settings.model})
        controller = CauseListController(source)
        with st.spinner("Loading states..."):
            controller.load_states()
        st.session_state["controller"] = controller
    return st.session_state["controller"]


def render_header() -> None:
    st.title("eCourts Cause List Scraper")
    st.caption("AI-Powered Simulation of eCourts Data Retrieval")
    st.divider()


def _select(label: str, options: list[str], current: str, placeholder: str, *, disabled: bool, loading: bool) -> str:
    choices = [""] + options
    index = choices.index(current) if current in choices else 0
    return st.selectbox(
        label,
        choices,
        index=index,
        format_func=lambda value: value or ("Loading..." if loading else placeholder),
        disabled=disabled or loading,
    )


def render_form(controller: CauseListController) -> None:
    sel = controller.selection
    col_state, col_district, col_complex, col_date = st.columns(4)

    with col_state:
        state = _select(
            "State",
            controller.states,
            sel.state,
            "Select a State",
            disabled=False,
            loading=controller.states_loading,
        )
    with col_district:
        district = _select(
            "District",
            controller.districts,
            sel.district,
            "Select a District",
            disabled=not sel.state,
            loading=controller.districts_loading,
        )
    with col_complex:
        complex_name = _select(
            "Court Complex",
            controller.complexes,
            sel.complex,
            "Select a Court Complex",
            disabled=not sel.district,
            loading=controller.complexes_loading,
        )
    with col_date:
        picked = st.date_input(
            "Date",
            value=date.fromisoformat(sel.date) if sel.date else date.today(),
            disabled=not sel.complex,
        )

    if state != sel.state:
        with st.spinner("Loading districts..."):
            controller.select_state(state)
        st.rerun()
    if district != sel.district:
        with st.spinner("Loading court complexes..."):
            controller.select_district(district)
        st.rerun()
    if complex_name != sel.complex:
        controller.select_complex(complex_name)
        st.rerun()
    if picked.isoformat() != sel.date:
        controller.set_date(picked.isoformat())
        st.rerun()

    if controller.error:
        st.error(controller.error)
        if controller.can_retry and st.button(RETRY_LABEL, key="retry_list"):
            controller.retry()
            st.rerun()
    if controller.validation_error:
        st.warning(controller.validation_error)

    if st.button("Search Cause List", type="primary", disabled=not controller.can_search):
        with st.spinner("Generating..."):
            controller.search()
        st.rerun()


def _accordion_for(docket: DocketResult) -> Accordion:
    """Each loaded docket gets a fresh accordion, even when a re-search returns equal data."""

    if st.session_state.get("accordion_for") is not docket:
        st.session_state["accordion"] = Accordion(size=len(docket.courts))
        st.session_state["accordion_for"] = docket
    return st.session_state["accordion"]


def render_results(controller: CauseListController) -> None:
    view = build_results_view(controller.levels.docket)

    if view.kind == "idle":
        return
    if view.kind == "loading":
        st.info(view.message)
        return
    if view.kind == "error":
        st.error(f"**{ERROR_TITLE}**\n\n{view.message}")
        if st.button(RETRY_LABEL, key="retry_docket", disabled=not controller.can_retry):
            with st.spinner("Generating..."):
                controller.retry()
            st.rerun()
        return
    if view.kind == "empty":
        st.subheader(EMPTY_TITLE)
        st.write(view.message)
        return

    head, action = st.columns([3, 1])
    with head:
        st.subheader(view.title)
        st.caption(f"Date: {view.display_date}")
    with action:
        st.download_button(
            "Download Complete List",
            data=render_cause_list(view.courts, view.complex, view.date),
            file_name=cause_list_filename(view.complex, view.date),
            mime="text/plain",
        )

    accordion = _accordion_for(controller.docket)
    for index, court in enumerate(view.courts):
        arrow = "▾" if accordion.is_open(index) else "▸"
        if st.button(f"{arrow} {court.court_name}", key=f"court_{index}"):
            accordion.toggle(index)
            st.rerun()
        if accordion.is_open(index):
            _render_case_table(index, court)


def _render_case_table(court_index: int, court: Court) -> None:
    widths = [1, 2, 4, 3, 3, 2]
    for col, name in zip(st.columns(widths), CASE_COLUMNS):
        col.markdown(f"**{name}**")
    for case in court.cases:
        row = case_row(case)
        cols = st.columns(widths)
        for col, name in zip(cols[:-1], CASE_COLUMNS[:-1]):
            col.write(row[name])
        with cols[-1]:
            if case.pdf_available:
                st.download_button(
                    "Download",
                    data=render_case(court.court_name, case),
                    file_name=case_filename(case),
                    mime="text/plain",
                    key=f"dl_{court_index}_{case.serial_number}",
                )
            else:
                st.caption(NOT_AVAILABLE)


def main() -> None:
    settings = Settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    st.set_page_config(page_title="eCourts Cause List Scraper", layout="wide")

    render_header()
    controller = get_controller(settings)
    render_form(controller)
    st.divider()
    render_results(controller)
    st.divider()
    st.caption(
        f"© {date.today().year} eCourts Scraper. All data is AI-generated for demonstration purposes."
    )


if __name__ == "__main__":
    main()
