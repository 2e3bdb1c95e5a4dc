from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _non_empty(value: str, name: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise ValueError(f"{name} must be non-empty")
    return cleaned


class CsvUrlInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    url: str

    @field_validator("url")
    @classmethod
    def _validate_url(cls, value: str) -> str:
        return _non_empty(value, "url")


class CsvFileInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    file_path: str

    @field_validator("file_path")
    @classmethod
    def _validate_file_path(cls, value: str) -> str:
        return _non_empty(value, "file_path")


class CsvWriteInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    rows: List[str]
    file_path: str

    @field_validator("file_path")
    @classmethod
    def _validate_file_path(cls, value: str) -> str:
        return _non_empty(value, "file_path")


class CellLookupInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # out-of-range indices are allowed and resolve to ""
    row: int
    column: int
    # None looks up in the most recently loaded table
    data: Optional[List[str]] = None


class RowFormatInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    fields: List[str]


class CsvDataOutput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    total_rows: int = Field(ge=0)
    data: List[str]


class CellValueOutput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    value: str


class CsvWriteOutput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    file_path: str
    rows_written: int = Field(ge=0)


class RowFormatOutput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    row: str
