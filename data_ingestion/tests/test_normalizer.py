from data_ingestion.models import RawTable
from data_ingestion.normalizer import normalize_table


def test_short_rows_padded_long_rows_truncated():
    raw = RawTable(
        headers=["a", "b", "c"],
        rows=[["1"], ["1", "2", "3"], ["1", "2", "3", "4", "5"]],
        raw_byte_size=30,
    )

    table = normalize_table(raw, "ragged.csv")

    assert table.rows == (
        ("1", None, None),
        ("1", "2", "3"),
        ("1", "2", "3"),
    )
    assert table.row_count == 3
    assert table.column_count == 3
    assert table.file_size_bytes == 30
    assert table.source_file_name == "ragged.csv"


def test_rows_never_dropped():
    raw = RawTable(headers=["a", "b"], rows=[[], [None], ["x", "y"]], raw_byte_size=0)

    table = normalize_table(raw)

    assert table.row_count == 3
    assert table.rows[0] == (None, None)


def test_reader_input_not_mutated():
    rows = [["1"], ["1", "2", "3"]]
    raw = RawTable(headers=["a", "b"], rows=rows, raw_byte_size=0)

    normalize_table(raw)

    assert rows == [["1"], ["1", "2", "3"]]


def test_headers_duplicates_preserved_and_stringified():
    raw = RawTable(headers=["x", "x", 3], rows=[[1, 2, 3]], raw_byte_size=0)

    table = normalize_table(raw)

    assert table.headers == ("x", "x", "3")
    assert table.column(1) == [2]


def test_to_frame_is_positional():
    raw = RawTable(headers=["x", "x"], rows=[[1, None]], raw_byte_size=0)

    frame = normalize_table(raw).to_frame()

    assert frame.shape == (1, 2)
    assert list(frame.columns) == [0, 1]
    assert frame.iloc[0, 1] is None
