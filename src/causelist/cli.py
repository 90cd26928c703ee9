from __future__ import annotations

import logging
import subprocess
import sys
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Iterator, Optional

import typer

from causelist.clients import CauseListSource, FetchError, build_source
from causelist.config import Settings
from causelist.export import export_case, export_cause_list
from causelist.types import CauseList, flatten_cases

app = typer.Typer(help="eCourts cause-list simulator CLI")

FixtureOption = typer.Option(
    None,
    "--fixture",
    help="Serve data from a JSON fixture instead of the AI service",
)


@app.callback()
def configure_logging(verbose: bool = typer.Option(False, "--verbose", "-v")) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s %(message)s")


@app.command("states")
def states(fixture: Optional[Path] = FixtureOption) -> None:
    """List Indian states and union territories."""
    with _open_source(fixture) as source:
        _echo_lines(_fetch(source.fetch_state_list))


@app.command("districts")
def districts(state: str, fixture: Optional[Path] = FixtureOption) -> None:
    """List districts of STATE."""
    with _open_source(fixture) as source:
        _echo_lines(_fetch(source.fetch_district_list, state))


@app.command("complexes")
def complexes(district: str, fixture: Optional[Path] = FixtureOption) -> None:
    """List court complexes of DISTRICT."""
    with _open_source(fixture) as source:
        _echo_lines(_fetch(source.fetch_court_complex_list, district))


@app.command("cause-list")
def cause_list(
    complex_name: str = typer.Argument(..., metavar="COMPLEX"),
    on: Optional[str] = typer.Option(None, "--date", help="Cause list date (YYYY-MM-DD). Defaults to today."),
    export: bool = typer.Option(False, "--export", help="Save the complete cause list as a text file"),
    export_cases: bool = typer.Option(
        False,
        "--export-cases",
        help="Save one text file per case that has a document available",
    ),
    out_dir: Optional[Path] = typer.Option(None, envvar="CAUSELIST_OUTPUT_DIR", help="Directory for exports"),
    fixture: Optional[Path] = FixtureOption,
) -> None:
    """Print the cause list of COMPLEX for a date, optionally exporting it as text."""
    day = _parse_date(on)
    target_dir = out_dir or Settings().output_dir

    with _open_source(fixture) as source:
        docket = _fetch(source.fetch_docket, complex_name, day)

    _echo_cause_list(docket, complex_name, day)

    if export:
        path = export_cause_list(docket, complex_name, day, target_dir)
        typer.echo(f"Saved complete cause list: {path}")
    if export_cases:
        saved = [
            export_case(court_name, case, target_dir)
            for court_name, case in flatten_cases(docket)
            if case.pdf_available
        ]
        typer.echo(f"Saved {len(saved)} case file(s) to {target_dir}")


@app.command("export-case")
def export_single_case(
    complex_name: str = typer.Argument(..., metavar="COMPLEX"),
    case_number: str = typer.Argument(..., metavar="CASE_NUMBER"),
    on: Optional[str] = typer.Option(None, "--date", help="Cause list date (YYYY-MM-DD). Defaults to today."),
    out_dir: Optional[Path] = typer.Option(None, envvar="CAUSELIST_OUTPUT_DIR", help="Directory for exports"),
    fixture: Optional[Path] = FixtureOption,
) -> None:
    """Save the text document of one case listed in the cause list of COMPLEX."""
    day = _parse_date(on)
    target_dir = out_dir or Settings().output_dir

    with _open_source(fixture) as source:
        docket = _fetch(source.fetch_docket, complex_name, day)

    for court_name, case in flatten_cases(docket):
        if case.case_number == case_number:
            if not case.pdf_available:
                typer.echo(f"ERROR: No document available for case {case_number}", err=True)
                raise typer.Exit(code=1)
            path = export_case(court_name, case, target_dir)
            typer.echo(f"Saved case file: {path}")
            return

    typer.echo(f"ERROR: Case {case_number} not found in the cause list of {complex_name} ({day})", err=True)
    raise typer.Exit(code=1)


@app.command("ui")
def ui(port: int = typer.Option(8501, help="Port for the Streamlit server")) -> None:
    """Launch the Streamlit front-end."""
    script = Path(__file__).with_name("app.py")
    command = [sys.executable, "-m", "streamlit", "run", str(script), "--server.port", str(port)]
    raise typer.Exit(subprocess.call(command))


@contextmanager
def _open_source(fixture: Optional[Path]) -> Iterator[CauseListSource]:
    settings = Settings()
    if fixture is not None:
        settings = settings.model_copy(update={"data_source": "fixture", "fixture_path": fixture})
    try:
        source = build_source(settings)
    except ValueError as exc:
        raise typer.BadParameter(f"{exc}; set API_KEY or pass --fixture") from exc
    try:
        yield source
    finally:
        close = getattr(source, "close", None)
        if close is not None:
            close()


def _fetch(operation, *args):
    try:
        return operation(*args)
    except FetchError as exc:
        typer.echo(f"ERROR: {exc.message}", err=True)
        raise typer.Exit(code=1) from exc


def _echo_lines(values: list[str]) -> None:
    for value in values:
        typer.echo(value)


def _echo_cause_list(docket: CauseList, complex_name: str, day: str) -> None:
    typer.echo(f"Cause List for {complex_name} ({day})")
    if not docket:
        typer.echo("No Results Found")
        return
    for court in docket:
        typer.echo("")
        typer.echo(court.court_name)
        for case in court.cases:
            marker = "PDF" if case.pdf_available else "N/A"
            typer.echo(
                f"  {case.serial_number:>3}. {case.case_number} | {case.parties} | "
                f"{case.petitioner_advocate} / {case.respondent_advocate} [{marker}]"
            )


def _parse_date(value: Optional[str]) -> str:
    if not value:
        return date.today().isoformat()
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid date {value!r}; expected YYYY-MM-DD") from exc


if __name__ == "__main__":
    app()
