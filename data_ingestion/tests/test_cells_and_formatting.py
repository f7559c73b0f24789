import datetime as dt

import numpy as np
import pytest

from data_ingestion.cells import CellKind, coerce_number, is_missing, kind_of, to_cell
from data_ingestion.config import DEFAULT_CONFIG, resolve_config
from data_ingestion.errors import FormatError, UnsupportedFormatError
from data_ingestion.formatting import format_file_size, format_number


@pytest.mark.parametrize(
    "value,kind",
    [
        (None, CellKind.MISSING),
        (1, CellKind.NUMBER),
        (1.5, CellKind.NUMBER),
        (True, CellKind.BOOLEAN),
        ("", CellKind.TEXT),
        ("1", CellKind.TEXT),
    ],
)
def test_kind_of(value, kind):
    assert kind_of(value) is kind


def test_is_missing():
    assert is_missing(None)
    assert is_missing("")
    assert not is_missing(" ")
    assert not is_missing(0)
    assert not is_missing(False)


def test_to_cell_folds_reader_values():
    assert to_cell(np.int64(3)) == 3 and type(to_cell(np.int64(3))) is int
    assert to_cell(np.float64("nan")) is None
    assert to_cell(np.bool_(True)) is True
    assert to_cell(dt.datetime(2024, 1, 2, 3, 4)) == "2024-01-02T03:04:00"
    assert to_cell(dt.date(2024, 1, 2)) == "2024-01-02"
    assert to_cell("text") == "text"


@pytest.mark.parametrize(
    "value,expected",
    [
        ("12", 12),
        (" -3.5 ", -3.5),
        ("1e3", 1000.0),
        (".5", 0.5),
        ("+7", 7),
        (4, 4),
        (2.25, 2.25),
    ],
)
def test_coerce_number_accepts(value, expected):
    assert coerce_number(value) == expected


@pytest.mark.parametrize(
    "value", ["", "abc", "1,000", "nan", "inf", "0x10", True, None, float("inf")]
)
def test_coerce_number_rejects(value):
    assert coerce_number(value) is None


def test_format_file_size():
    assert format_file_size(0) == "0 Bytes"
    assert format_file_size(500) == "500 Bytes"
    assert format_file_size(1024) == "1 KB"
    assert format_file_size(1536) == "1.5 KB"
    assert format_file_size(1048576) == "1 MB"
    assert format_file_size(3 * 1024**3) == "3 GB"


def test_format_number():
    assert format_number(999) == "999"
    assert format_number(1500) == "1.5K"
    assert format_number(2_300_000) == "2.3M"


def test_resolve_config_merges_defaults():
    cfg = resolve_config({"delimiter": ";"})

    assert cfg["delimiter"] == ";"
    assert cfg["high_missing_threshold"] == DEFAULT_CONFIG["high_missing_threshold"]


def test_resolve_config_rejects_unknown_keys():
    with pytest.raises(ValueError):
        resolve_config({"sample_size": 10})
    with pytest.raises(ValueError):
        resolve_config({"delimiter": "::"})


def test_error_messages():
    err = FormatError("bad quote", "a.csv", line_number=4)
    assert str(err) == "a.csv: bad quote (line 4)"
    assert str(FormatError("missing")) == "missing"

    unsupported = UnsupportedFormatError("xml", "a.xml")
    assert unsupported.declared_format == "xml"
    assert str(unsupported).startswith("a.xml: Unsupported format: 'xml'")
