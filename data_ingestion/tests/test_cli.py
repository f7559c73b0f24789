import json
import logging
from pathlib import Path

import pytest

from data_ingestion.cli import EXIT_INGESTION_ERROR, EXIT_SUCCESS, main


@pytest.fixture(autouse=True)
def restore_root_logger():
    # main() reconfigures the root logger onto the captured stderr
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_cli_summary_and_output(tmp_path: Path, capsys):
    csv_path = tmp_path / "scores.csv"
    csv_path.write_text("name,score,notes\nAnn,90,\nBen,80,\n", encoding="utf-8")
    out_path = tmp_path / "payload.json"

    code = main([str(csv_path), "--output", str(out_path)])

    assert code == EXIT_SUCCESS
    stdout = capsys.readouterr().out
    assert "Rows: 2  Columns: 3" in stdout
    assert "Empty columns detected: notes" in stdout
    assert "score: numeric" in stdout

    payload = json.loads(out_path.read_text(encoding="utf-8"))
    assert payload["dataset"]["name"] == "scores"
    assert payload["columns"][1]["median"] == 90


def test_cli_explicit_format_and_json(tmp_path: Path, capsys):
    script = tmp_path / "queries.txt"
    script.write_text("SELECT 1;\n-- skip\nSELECT 2;\n", encoding="utf-8")

    code = main([str(script), "--format", "sql", "--json", "--id", "ds-cli"])

    assert code == EXIT_SUCCESS
    stdout = capsys.readouterr().out
    assert "Id: ds-cli" in stdout
    assert '"SQL_Statement": "SELECT 2;"' in stdout


def test_cli_reports_ingestion_errors(tmp_path: Path, capsys):
    assert main([str(tmp_path / "absent.csv")]) == EXIT_INGESTION_ERROR
    assert "File not found" in capsys.readouterr().err

    unknown = tmp_path / "notes.md"
    unknown.write_text("# hi\n", encoding="utf-8")
    assert main([str(unknown)]) == EXIT_INGESTION_ERROR
    assert "Unsupported format" in capsys.readouterr().err
