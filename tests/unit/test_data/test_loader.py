# tests/unit/test_data/test_loader.py
from backend.core.isocheck.test_data import TestDataLoader, EncodingResolver, ErrorSeverity

CSV_TEXT = (
    "case_id,field,value,type\n"
    "A,processingCode,000000,n\n"
    "A,transactionAmount,000000001000,n\n"
    "\n"
    "B,MTI,0200,\n"
    "A,11,123456,n\n"
)


def test_rows_are_grouped_by_case_in_first_seen_order():
    cases, errors = TestDataLoader.load_text(CSV_TEXT)

    assert errors == []
    assert [c.case_id for c in cases] == ["A", "B"]
    assert [e.field_name for e in cases[0].entries] == ["processingCode", "transactionAmount", "11"]
    assert cases[0].source_row == 2
    assert cases[1].entries[0].data_type is None


def test_three_column_header_is_accepted():
    cases, errors = TestDataLoader.load_text("case_id,field,value\nA,3,000000\n")

    assert errors == []
    assert cases[0].entries[0].data_type is None


def test_invalid_header():
    cases, errors = TestDataLoader.load_text("id,name,val\nA,3,1\n")

    assert cases == []
    assert errors[0].code == "MISSING_HEADER_ROW"
    assert errors[0].severity is ErrorSeverity.FATAL


def test_column_mismatch_is_reported_per_row():
    cases, errors = TestDataLoader.load_text("case_id,field,value,type\nA,3,000000\nA,4,1,n\n")

    assert len(cases[0].entries) == 1
    assert errors[0].code == "ROW_COLUMN_COUNT_MISMATCH"
    assert errors[0].row_index == 2


def test_empty_input():
    assert TestDataLoader.load_bytes(b"")[1][0].code == "EMPTY_FILE"
    assert TestDataLoader.load_text("")[1][0].code == "EMPTY_FILE"


def test_load_bytes_handles_bom_and_latin1():
    cases, _ = TestDataLoader.load_bytes(b"\xef\xbb\xbf" + CSV_TEXT.encode("utf-8"))
    assert [c.case_id for c in cases] == ["A", "B"]

    raw = "case_id,field,value,type\nA,43,CAF\xc9 CENTRAL,ans\n".encode("latin-1")
    cases, errors = TestDataLoader.load_bytes(raw)
    assert errors == []
    assert cases[0].entries[0].value.endswith("CENTRAL")


def test_load_csv_from_disk(tmp_path):
    path = tmp_path / "cases.csv"
    path.write_text(CSV_TEXT, encoding="utf-8")

    cases, errors = TestDataLoader.load_csv(path)

    assert len(cases) == 2
    assert errors == []


def test_load_csv_missing_file(tmp_path):
    cases, errors = TestDataLoader.load_csv(tmp_path / "nope.csv")

    assert cases == []
    assert errors[0].code == "FILE_IO_ERROR"


def test_encoding_resolver_prefers_bom():
    assert EncodingResolver.detect_encoding(b"\xef\xbb\xbfcase_id")[0] == "utf-8-sig"
