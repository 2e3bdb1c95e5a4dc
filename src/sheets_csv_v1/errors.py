from __future__ import annotations


class CsvError(Exception):
    """Base class for failures surfaced through ErrorOccurred."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EmptyResultError(CsvError):
    def __init__(self, message: str = "CSV data is empty.") -> None:
        super().__init__(message)


class CsvFileNotFoundError(CsvError):
    def __init__(self, message: str = "CSV file not found.") -> None:
        super().__init__(message)


class IOFailureError(CsvError):
    pass


class PermissionDeniedError(CsvError):
    def __init__(self, path: str) -> None:
        super().__init__(f"write permission denied: {path}")
        self.path = path
