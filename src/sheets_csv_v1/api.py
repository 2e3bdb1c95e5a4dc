from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
import uvicorn

from .engine import SheetsCsvEngine
from .errors import CsvFileNotFoundError, EmptyResultError, IOFailureError, PermissionDeniedError
from .models import (
    CellLookupInput,
    CellValueOutput,
    CsvDataOutput,
    CsvFileInput,
    CsvUrlInput,
    CsvWriteInput,
    CsvWriteOutput,
    RowFormatInput,
    RowFormatOutput,
)
from .table import format_row


SERVICE_HOST = os.getenv("SERVICE_HOST", "0.0.0.0")
SERVICE_PORT = int(os.getenv("SERVICE_PORT", "8080"))
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "20"))
USER_AGENT = os.getenv("USER_AGENT", "sheets-csv-v1/0.1")
MAX_CSV_BYTES = int(os.getenv("MAX_CSV_BYTES", str(10 * 1024 * 1024)))
INTERNAL_API_KEY = (os.getenv("INTERNAL_API_KEY") or "").strip()
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

app = FastAPI(title="sheets_csv_v1", version="0.1.0")
engine = SheetsCsvEngine(
    timeout_seconds=HTTP_TIMEOUT_SECONDS,
    user_agent=USER_AGENT,
    max_csv_bytes=MAX_CSV_BYTES,
)
# loads replace the held table; one at a time per engine
_load_lock = asyncio.Lock()


@app.middleware("http")
async def _run_guard(request: Request, call_next):  # type: ignore[no-untyped-def]
    if request.method.upper() == "POST":
        try:
            _validate_internal_api_key(request.headers.get("X-INTERNAL-API-KEY"))
        except HTTPException as exc:
            return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
    return await call_next(request)


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/read-url", response_model=CsvDataOutput)
async def read_url(payload: CsvUrlInput) -> CsvDataOutput:
    try:
        async with _load_lock:
            table = await engine.fetch_url_table(payload.url)
    except EmptyResultError as exc:
        raise HTTPException(status_code=422, detail=exc.message) from exc
    except IOFailureError as exc:
        raise HTTPException(status_code=502, detail=exc.message) from exc

    return CsvDataOutput(total_rows=len(table), data=table.to_list())


@app.post("/read-file", response_model=CsvDataOutput)
async def read_file(payload: CsvFileInput) -> CsvDataOutput:
    try:
        async with _load_lock:
            table = engine.load_file_table(payload.file_path)
    except CsvFileNotFoundError as exc:
        raise HTTPException(status_code=404, detail=exc.message) from exc
    except IOFailureError as exc:
        raise HTTPException(status_code=500, detail=exc.message) from exc

    return CsvDataOutput(total_rows=len(table), data=table.to_list())


@app.post("/write-file", response_model=CsvWriteOutput)
async def write_file(payload: CsvWriteInput) -> CsvWriteOutput:
    try:
        written = engine.write_rows(payload.rows, payload.file_path)
    except PermissionDeniedError as exc:
        raise HTTPException(status_code=403, detail=exc.message) from exc
    except IOFailureError as exc:
        raise HTTPException(status_code=500, detail=exc.message) from exc

    return CsvWriteOutput(file_path=payload.file_path, rows_written=written)


@app.post("/value", response_model=CellValueOutput)
async def get_value(payload: CellLookupInput) -> CellValueOutput:
    return CellValueOutput(value=engine.get_value_by_row_and_column(payload.row, payload.column, payload.data))


@app.post("/format-row", response_model=RowFormatOutput)
async def format_fields(payload: RowFormatInput) -> RowFormatOutput:
    return RowFormatOutput(row=format_row(payload.fields))


def _validate_internal_api_key(provided_key: Optional[str]) -> None:
    if not INTERNAL_API_KEY:
        raise HTTPException(status_code=503, detail="INTERNAL_API_KEY is not configured")
    if provided_key != INTERNAL_API_KEY:
        raise HTTPException(status_code=401, detail="invalid internal api key")


def main() -> None:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    uvicorn.run("sheets_csv_v1.api:app", host=SERVICE_HOST, port=SERVICE_PORT, reload=False)


if __name__ == "__main__":
    main()
