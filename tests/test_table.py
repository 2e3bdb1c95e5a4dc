from sheets_csv_v1.table import CsvTable, cell_at, escape_field, format_row, load, serialize


def test_empty_table_returns_empty_cell() -> None:
    assert cell_at(load([]), 1, 1) == ""
    assert len(load([])) == 0


def test_out_of_range_indices_return_empty_string() -> None:
    table = load(["a,b,c", "d,e"])

    assert cell_at(table, 0, 1) == ""
    assert cell_at(table, -1, 1) == ""
    assert cell_at(table, 3, 1) == ""
    assert cell_at(table, 1, 0) == ""
    assert cell_at(table, 2, 3) == ""
    assert cell_at(table, 1, 4) == ""


def test_cell_value_is_trimmed() -> None:
    assert cell_at(load(["a, b ,c"]), 1, 2) == "b"


def test_trailing_delimiter_counts_as_empty_field() -> None:
    table = load(["a,b,"])

    assert cell_at(table, 1, 3) == ""
    assert cell_at(table, 1, 4) == ""


def test_split_ignores_quotes() -> None:
    table = load(['"x,y",z'])

    assert cell_at(table, 1, 1) == '"x'
    assert cell_at(table, 1, 2) == 'y"'
    assert cell_at(table, 1, 3) == "z"


def test_load_preserves_order_and_duplicates() -> None:
    lines = ["id,name", "1,Alice", "1,Alice", "2,Bob"]
    table = load(lines)

    assert table.to_list() == lines
    assert table[2] == "1,Alice"
    assert [cell_at(table, i, 1) for i in range(1, len(table) + 1)] == ["id", "1", "1", "2"]


def test_table_is_not_affected_by_source_mutation() -> None:
    lines = ["a,b"]
    table = load(lines)
    lines.append("c,d")

    assert len(table) == 1
    assert table == CsvTable(["a,b"])
    assert table.cell_at(1, 2) == "b"


def test_escape_field() -> None:
    assert escape_field("a,b") == '"a,b"'
    assert escape_field('a"b') == '"a""b"'
    assert escape_field("line\nbreak") == '"line\nbreak"'
    assert escape_field("plain") == "plain"
    assert escape_field("") == ""


def test_serialize_writes_rows_verbatim() -> None:
    assert serialize(["x", "y"]) == "x\ny\n"
    assert serialize([]) == ""
    assert serialize(['a,"b"']) == 'a,"b"\n'


def test_format_row_escapes_each_field() -> None:
    assert format_row(["a,b", "c"]) == '"a,b",c'
    assert format_row(['say "hi"', "ok"]) == '"say ""hi""",ok'
    assert serialize([format_row(["1", "x,y"])]) == '1,"x,y"\n'
