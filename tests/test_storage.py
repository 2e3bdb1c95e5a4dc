import pytest

from sheets_csv_v1.errors import CsvFileNotFoundError
from sheets_csv_v1.storage import is_write_permission_granted, read_csv_lines, write_csv_text


def test_read_missing_file_raises_not_found(tmp_path) -> None:
    with pytest.raises(CsvFileNotFoundError) as exc_info:
        read_csv_lines(str(tmp_path / "missing.csv"))
    assert exc_info.value.message == "CSV file not found."


def test_read_normalizes_line_endings(tmp_path) -> None:
    path = tmp_path / "data.csv"
    path.write_bytes(b"id,name\r\n1,Alice\r\n2,Bob")

    assert read_csv_lines(str(path)) == ["id,name", "1,Alice", "2,Bob"]


def test_read_empty_file_gives_no_lines(tmp_path) -> None:
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")

    assert read_csv_lines(str(path)) == []


def test_write_overwrites_existing_content(tmp_path) -> None:
    path = tmp_path / "out.csv"
    path.write_text("old,content\nmore\n", encoding="utf-8")

    write_csv_text(str(path), "x\n")

    assert path.read_text(encoding="utf-8") == "x\n"


def test_write_permission_for_new_file_uses_parent(tmp_path) -> None:
    assert is_write_permission_granted(str(tmp_path / "new.csv")) is True


def test_missing_parent_directory_is_not_a_permission_refusal(tmp_path) -> None:
    # the write itself fails later with an OSError
    assert is_write_permission_granted(str(tmp_path / "missing-dir" / "new.csv")) is True


def test_read_only_file_is_refused(tmp_path, monkeypatch) -> None:
    path = tmp_path / "locked.csv"
    path.write_text("a\n", encoding="utf-8")
    monkeypatch.setattr("sheets_csv_v1.storage.os.access", lambda target, mode: False)

    assert is_write_permission_granted(str(path)) is False
