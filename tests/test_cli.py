from __future__ import annotations

from typer.testing import CliRunner

from causelist import cli
from causelist.clients import FetchError

runner = CliRunner()


def test_states_command_lists_fixture_states(fixture_path):
    result = runner.invoke(cli.app, ["states", "--fixture", str(fixture_path)])

    assert result.exit_code == 0
    assert result.output.splitlines() == ["Delhi", "Maharashtra", "Punjab"]


def test_districts_and_complexes_commands(fixture_path):
    districts = runner.invoke(cli.app, ["districts", "Delhi", "--fixture", str(fixture_path)])
    complexes = runner.invoke(cli.app, ["complexes", "New Delhi", "--fixture", str(fixture_path)])

    assert districts.output.splitlines() == ["New Delhi", "South Delhi"]
    assert "Patiala House Courts" in complexes.output


def test_cause_list_command_prints_and_exports(fixture_path, tmp_path):
    result = runner.invoke(
        cli.app,
        [
            "cause-list",
            "Patiala House Courts",
            "--date",
            "2024-05-01",
            "--export",
            "--export-cases",
            "--out-dir",
            str(tmp_path),
            "--fixture",
            str(fixture_path),
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Cause List for Patiala House Courts (2024-05-01)" in result.output
    assert "CS(OS) 45/2023" in result.output
    assert (tmp_path / "Complete_Cause_List_Patiala_House_Courts_2024-05-01.txt").exists()
    assert (tmp_path / "CS(OS)_45_2023.txt").exists()
    assert (tmp_path / "SC_78_2022.txt").exists()
    assert not (tmp_path / "Crl.A._123_2024.txt").exists()


def test_cause_list_empty_docket(fixture_path):
    result = runner.invoke(
        cli.app,
        ["cause-list", "Patiala House Courts", "--date", "2024-05-02", "--fixture", str(fixture_path)],
    )

    assert result.exit_code == 0
    assert "No Results Found" in result.output


def test_cause_list_rejects_bad_date(fixture_path):
    result = runner.invoke(
        cli.app,
        ["cause-list", "Patiala House Courts", "--date", "01/05/2024", "--fixture", str(fixture_path)],
    )

    assert result.exit_code == 2


def test_missing_api_key_is_a_usage_error(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("API_KEY", raising=False)
    monkeypatch.delenv("CAUSELIST_DATA_SOURCE", raising=False)

    result = runner.invoke(cli.app, ["states"])

    assert result.exit_code == 2


def test_fetch_error_exits_with_status_one(monkeypatch):
    class FailingSource:
        def fetch_state_list(self):
            raise FetchError()

    monkeypatch.setattr(cli, "build_source", lambda settings: FailingSource())

    result = runner.invoke(cli.app, ["states"])

    assert result.exit_code == 1


def _export_case(fixture_path, tmp_path, case_number: str):
    return runner.invoke(
        cli.app,
        [
            "export-case",
            "Patiala House Courts",
            case_number,
            "--date",
            "2024-05-01",
            "--out-dir",
            str(tmp_path),
            "--fixture",
            str(fixture_path),
        ],
    )


def test_export_case_writes_one_case_file(fixture_path, tmp_path):
    result = _export_case(fixture_path, tmp_path, "CS(OS) 45/2023")

    assert result.exit_code == 0, result.output
    saved = tmp_path / "CS(OS)_45_2023.txt"
    assert f"Saved case file: {saved}" in result.output
    text = saved.read_text(encoding="utf-8")
    assert "COURT: Hon'ble Mr. Justice R.K. Singh, Court No. 5" in text
    assert "Parties:       Anita Sharma vs. Rajesh Verma" in text
    assert [path.name for path in tmp_path.iterdir()] == ["CS(OS)_45_2023.txt"]


def test_export_case_unknown_case_exits_with_status_one(fixture_path, tmp_path):
    result = _export_case(fixture_path, tmp_path, "CS(OS) 99/2099")

    assert result.exit_code == 1
    assert list(tmp_path.iterdir()) == []


def test_export_case_without_document_exits_with_status_one(fixture_path, tmp_path):
    result = _export_case(fixture_path, tmp_path, "Crl.A. 123/2024")

    assert result.exit_code == 1
    assert list(tmp_path.iterdir()) == []
