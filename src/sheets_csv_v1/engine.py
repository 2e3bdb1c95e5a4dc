from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional, Sequence

from . import storage
from .errors import CsvError, EmptyResultError, IOFailureError, PermissionDeniedError
from .fetcher import fetch_csv_lines
from .security import is_safe_public_http_url
from .table import CsvTable, cell_at, load, serialize


logger = logging.getLogger("sheets_csv_v1.engine")

DataReadHandler = Callable[[List[str]], None]
ErrorHandler = Callable[[str], None]


def _log_permission_request(path: str) -> None:
    logger.warning("write permission required for path=%s; write skipped", path)


class SheetsCsvEngine:
    """Reads CSV rows from a URL or a local file and writes rows back.

    There are two layers. ``fetch_url_table``, ``load_file_table`` and
    ``write_rows`` raise ``CsvError`` subclasses. ``read_data_from_csv_url``,
    ``read_csv_file`` and ``write_csv_file`` catch those errors and report
    through the registered DataRead / ErrorOccurred handlers instead.

    No locking is done: callers must not run two loads against the same
    instance concurrently.
    """

    def __init__(
        self,
        timeout_seconds: float = 20.0,
        user_agent: str = "sheets-csv-v1/0.1",
        max_csv_bytes: int = 10 * 1024 * 1024,
        permission_checker: Callable[[str], bool] = storage.is_write_permission_granted,
        permission_requester: Callable[[str], None] = _log_permission_request,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._user_agent = user_agent
        self._max_csv_bytes = max_csv_bytes
        self._permission_checker = permission_checker
        self._permission_requester = permission_requester

        self.csv_url: Optional[str] = None
        self._table = CsvTable()
        self._data_read_handlers: List[DataReadHandler] = []
        self._error_handlers: List[ErrorHandler] = []

    @property
    def table(self) -> CsvTable:
        return self._table

    def on_data_read(self, handler: DataReadHandler) -> DataReadHandler:
        self._data_read_handlers.append(handler)
        return handler

    def on_error(self, handler: ErrorHandler) -> ErrorHandler:
        self._error_handlers.append(handler)
        return handler

    async def fetch_url_table(self, url: Optional[str] = None) -> CsvTable:
        target = (url if url is not None else self.csv_url) or ""
        target = target.strip()
        if not target:
            raise IOFailureError("CSV URL is not set.")

        if not is_safe_public_http_url(target):
            raise IOFailureError(
                f"Error reading data from CSV URL: url is not allowed (non-public or local): {target}"
            )

        try:
            lines = await fetch_csv_lines(
                url=target,
                timeout_seconds=self._timeout_seconds,
                max_attempts=4,
                user_agent=self._user_agent,
                max_csv_bytes=self._max_csv_bytes,
            )
        except Exception as exc:
            raise IOFailureError(f"Error reading data from CSV URL: {exc}") from exc

        if not lines:
            raise EmptyResultError()

        table = load(lines)
        self._table = table
        logger.info("loaded %d rows from url=%s", len(table), target)
        return table

    def load_file_table(self, path: str) -> CsvTable:
        try:
            lines = storage.read_csv_lines(path)
        except (OSError, UnicodeDecodeError) as exc:
            raise IOFailureError(f"Error reading data from CSV file: {exc}") from exc

        table = load(lines)
        self._table = table
        logger.info("loaded %d rows from file=%s", len(table), path)
        return table

    def write_rows(self, rows: Sequence[str], path: str) -> int:
        if not self._permission_checker(path):
            raise PermissionDeniedError(path)

        try:
            storage.write_csv_text(path, serialize(rows))
        except OSError as exc:
            raise IOFailureError(f"Error writing data to CSV file: {exc}") from exc

        logger.info("wrote %d rows to file=%s", len(rows), path)
        return len(rows)

    async def read_data_from_csv_url(self) -> Optional[CsvTable]:
        try:
            table = await self.fetch_url_table()
        except CsvError as exc:
            self._emit_error(exc)
            return None

        self._emit_data_read(table)
        return table

    def start_read_data_from_csv_url(self) -> "asyncio.Task[Optional[CsvTable]]":
        return asyncio.get_running_loop().create_task(self.read_data_from_csv_url())

    def read_csv_file(self, path: str) -> Optional[CsvTable]:
        try:
            table = self.load_file_table(path)
        except CsvError as exc:
            self._emit_error(exc)
            return None

        self._emit_data_read(table)
        return table

    def write_csv_file(self, rows: Sequence[str], path: str) -> bool:
        try:
            self.write_rows(rows, path)
        except PermissionDeniedError:
            self._permission_requester(path)
            return False
        except CsvError as exc:
            self._emit_error(exc)
            return False
        return True

    def get_value_by_row_and_column(self, row: int, column: int, data: Optional[Sequence[str]] = None) -> str:
        return cell_at(self._table if data is None else data, row, column)

    def _emit_data_read(self, table: CsvTable) -> None:
        for handler in list(self._data_read_handlers):
            try:
                handler(table.to_list())
            except Exception:
                logger.exception("DataRead handler failed")

    def _emit_error(self, exc: CsvError) -> None:
        logger.warning("operation failed: %s", exc.message)
        for handler in list(self._error_handlers):
            try:
                handler(exc.message)
            except Exception:
                logger.exception("ErrorOccurred handler failed")
