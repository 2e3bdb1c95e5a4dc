from __future__ import annotations

import os
from pathlib import Path
from typing import List

from .errors import CsvFileNotFoundError


def read_csv_lines(path: str) -> List[str]:
    csv_path = Path(path)
    if not csv_path.is_file():
        raise CsvFileNotFoundError()

    with csv_path.open("r", encoding="utf-8", newline=None) as f:
        return [line.rstrip("\n") for line in f]


def write_csv_text(path: str, text: str) -> None:
    # "w" truncates: existing content is fully replaced
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def is_write_permission_granted(path: str) -> bool:
    """Refuse only when an existing file or directory is not writable.

    A missing parent directory is not a permission problem; the write itself
    fails and is reported as an I/O failure.
    """
    csv_path = Path(path)
    if csv_path.exists():
        return os.access(csv_path, os.W_OK)
    if csv_path.parent.is_dir():
        return os.access(csv_path.parent, os.W_OK)
    return True
