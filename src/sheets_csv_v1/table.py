from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence, Tuple

DELIMITER = ","
QUOTE = '"'
LINE_TERMINATOR = "\n"


class CsvTable(Sequence[str]):
    """Ordered, read-only sequence of raw CSV lines.

    Rows are kept unsplit; fields are only split on lookup. Indices exposed by
    ``cell_at`` are 1-based and never raise for out-of-range values.
    """

    __slots__ = ("_rows",)

    def __init__(self, rows: Iterable[str] = ()) -> None:
        self._rows: Tuple[str, ...] = tuple(rows)

    @property
    def rows(self) -> Tuple[str, ...]:
        return self._rows

    def __len__(self) -> int:
        return len(self._rows)

    def __getitem__(self, index):  # type: ignore[no-untyped-def]
        return self._rows[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rows)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CsvTable):
            return self._rows == other._rows
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._rows)

    def __repr__(self) -> str:
        return f"CsvTable(rows={len(self._rows)})"

    def cell_at(self, row: int, column: int) -> str:
        return cell_at(self, row, column)

    def to_list(self) -> List[str]:
        return list(self._rows)


def load(lines: Iterable[str]) -> CsvTable:
    return CsvTable(lines)


def cell_at(table: Sequence[str], row: int, column: int) -> str:
    if row < 1 or row > len(table) or column < 1:
        return ""

    fields = table[row - 1].split(DELIMITER)
    if column > len(fields):
        return ""
    return fields[column - 1].strip()


def serialize(rows: Iterable[str]) -> str:
    # rows are written as given; callers escape fields beforehand if needed
    return "".join(f"{row}{LINE_TERMINATOR}" for row in rows)


def escape_field(field: str) -> str:
    if DELIMITER in field or "\n" in field or QUOTE in field:
        return QUOTE + field.replace(QUOTE, QUOTE * 2) + QUOTE
    return field


def format_row(fields: Iterable[str]) -> str:
    return DELIMITER.join(escape_field(field) for field in fields)
