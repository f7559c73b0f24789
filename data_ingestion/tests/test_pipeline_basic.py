import json
from pathlib import Path

import pandas as pd
import pytest

from data_ingestion import (
    FormatError,
    UnsupportedFormatError,
    analyze_source,
    ingest,
)


def test_pipeline_delimited_counts(tmp_path: Path):
    df = pd.DataFrame(
        {
            "Name": ["Alice", "Bob", "Charlie", "Dana"],
            "Age": [30, 25, 35, 40],
            "Joined": ["2024-01-01", "2024-02-15", "2024-03-10", "2024-04-05"],
        }
    )
    csv_path = tmp_path / "people.csv"
    df.to_csv(csv_path, index=False)

    result = ingest(csv_path, "delimited")
    dataset = result.dataset

    assert dataset.row_count == 4
    assert dataset.column_count == 3
    assert dataset.column_names == ["Name", "Age", "Joined"]
    assert dataset.rows[0] == {"Name": "Alice", "Age": "30", "Joined": "2024-01-01"}
    assert dataset.source_format == "delimited"
    assert dataset.source_file_name == "people.csv"
    assert dataset.name == "people"
    assert dataset.file_size_bytes == csv_path.stat().st_size

    age = result.column_profiles[1]
    assert age.kind == "numeric"
    assert age.median == 35
    assert age.mean == 32.5
    assert not result.quality_report.has_issues


def test_pipeline_pads_short_rows(tmp_path: Path):
    csv_path = tmp_path / "ragged.csv"
    csv_path.write_text("a,b,c\n1,2\n4,5,6,7\n", encoding="utf-8")

    result = ingest(csv_path, "csv")

    assert result.dataset.row_count == 2
    assert result.dataset.rows[0] == {"a": "1", "b": "2", "c": None}
    assert result.dataset.rows[1] == {"a": "4", "b": "5", "c": "6"}
    assert all(len(r) == 3 for r in result.table.rows)


def test_pipeline_spreadsheet_keeps_native_types(tmp_path: Path):
    df = pd.DataFrame(
        {
            "Region": ["North", "South", "East"],
            "Units": [10, 20, 30],
            "Active": [True, False, True],
        }
    )
    xlsx_path = tmp_path / "sales.xlsx"
    df.to_excel(xlsx_path, index=False)

    result = ingest(xlsx_path, "spreadsheet", name="Sales")

    assert result.dataset.name == "Sales"
    assert result.dataset.row_count == 3
    assert result.dataset.rows[1]["Units"] == 20
    assert result.dataset.rows[1]["Active"] is False

    units, active = result.column_profiles[1], result.column_profiles[2]
    assert units.kind == "numeric"
    assert units.min == 10 and units.max == 30
    assert active.kind == "categorical"
    assert active.top_values == [True, False]


def test_pipeline_sql_script(tmp_path: Path):
    sql_path = tmp_path / "setup.sql"
    sql_path.write_text(
        "-- create things\nCREATE TABLE t (id INT);\n\nINSERT INTO t VALUES (1);\n",
        encoding="utf-8",
    )

    result = ingest(sql_path, "sql", dataset_id="ds-42")

    assert result.dataset.id == "ds-42"
    assert result.dataset.column_names == ["SQL_Statement", "Line_Number"]
    assert result.dataset.rows == [
        {"SQL_Statement": "CREATE TABLE t (id INT);", "Line_Number": 1},
        {"SQL_Statement": "INSERT INTO t VALUES (1);", "Line_Number": 2},
    ]


def test_schema_stays_default_string(tmp_path: Path):
    csv_path = tmp_path / "nums.csv"
    csv_path.write_text("x,y\n1,a\n2,b\n", encoding="utf-8")

    result = ingest(csv_path, "delimited")

    assert result.column_profiles[0].kind == "numeric"
    for column in result.dataset.columns:
        assert column.type == "string"
        assert column.nullable is True
        assert column.unique is False
        assert column.sample_values == []


def test_concurrent_profiling_matches_sequential(tmp_path: Path):
    csv_path = tmp_path / "mixed.csv"
    csv_path.write_text("a,b,c\n1,,x\n2,,y\n3,,\n", encoding="utf-8")

    sequential = ingest(csv_path, "delimited")
    concurrent = ingest(csv_path, "delimited", config={"profile_concurrently": True})

    assert sequential.quality_report == concurrent.quality_report
    assert sequential.column_profiles == concurrent.column_profiles
    assert sequential.dataset.id == concurrent.dataset.id


def test_analyze_source_without_assembly(tmp_path: Path):
    csv_path = tmp_path / "blank.csv"
    csv_path.write_text("a,b\n1,\n2,\n", encoding="utf-8")

    table, report, profiles = analyze_source(csv_path, "delimited")

    assert table.row_count == 2
    assert report.issues[0] == "Empty columns detected: b"
    assert [p.column for p in profiles] == ["a", "b"]


def test_payload_is_json_serializable(tmp_path: Path):
    csv_path = tmp_path / "simple.csv"
    csv_path.write_text("A,B\n1,x\n2,y\n", encoding="utf-8")

    payload = ingest(csv_path, "delimited").to_dict()
    text = json.dumps(payload)

    assert json.loads(text)["dataset"]["row_count"] == 2
    assert payload["columns"][0]["kind"] == "numeric"
    assert payload["quality"] == {"issues": [], "suggestions": []}


def test_missing_file_raises_format_error(tmp_path: Path):
    with pytest.raises(FormatError) as excinfo:
        ingest(tmp_path / "nope.csv", "delimited")
    assert excinfo.value.source_file_name == "nope.csv"


def test_unknown_format_rejected(tmp_path: Path):
    csv_path = tmp_path / "simple.csv"
    csv_path.write_text("A\n1\n", encoding="utf-8")

    with pytest.raises(UnsupportedFormatError):
        ingest(csv_path, "parquet")
