from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

import httpx

MAX_DEFAULT_CSV_BYTES = 10 * 1024 * 1024
RETRY_BASE_DELAY_SECONDS = 0.35

logger = logging.getLogger("sheets_csv_v1.fetcher")


class CsvFetchError(RuntimeError):
    pass


async def fetch_csv_lines(
    url: str,
    timeout_seconds: float = 20.0,
    max_attempts: int = 4,
    user_agent: str = "sheets-csv-v1/0.1",
    max_csv_bytes: int = MAX_DEFAULT_CSV_BYTES,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[str]:
    """GET ``url`` and return the body as lines, in response order.

    Line terminators (``\\n``, ``\\r\\n``, ``\\r``) are dropped and a final
    terminator does not add an empty line, so an empty body gives ``[]``.
    Transport errors and 5xx responses are retried with exponential backoff.
    """
    timeout = httpx.Timeout(connect=5.0, read=timeout_seconds, write=5.0, pool=5.0)
    headers = {
        "User-Agent": user_agent,
        "Accept": "text/csv,text/plain,*/*;q=0.8",
    }

    async with httpx.AsyncClient(
        timeout=timeout,
        headers=headers,
        follow_redirects=True,
        transport=transport,
    ) as client:
        last_exc: Optional[Exception] = None
        for attempt in range(1, max_attempts + 1):
            try:
                async with client.stream("GET", url) as response:
                    if response.status_code >= 500 and attempt < max_attempts:
                        logger.warning("csv fetch attempt=%d got status=%d", attempt, response.status_code)
                        await _backoff(attempt)
                        continue
                    if response.status_code != 200:
                        raise CsvFetchError(f"csv fetch failed: status={response.status_code}")
                    return await _read_lines(response, max_csv_bytes)
            except httpx.TransportError as exc:
                last_exc = exc
                logger.warning("csv fetch attempt=%d failed: %s", attempt, exc)
                if attempt < max_attempts:
                    await _backoff(attempt)

    raise CsvFetchError(f"request failed after retries: GET {url}") from last_exc


async def _read_lines(response: httpx.Response, max_csv_bytes: int) -> List[str]:
    declared = response.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > max_csv_bytes:
        raise CsvFetchError("csv exceeds maximum allowed bytes")

    lines: List[str] = []
    async for line in response.aiter_lines():
        if response.num_bytes_downloaded > max_csv_bytes:
            raise CsvFetchError("csv exceeds maximum allowed bytes")
        lines.append(line)
    return lines


async def _backoff(attempt: int) -> None:
    await asyncio.sleep(RETRY_BASE_DELAY_SECONDS * (2 ** (attempt - 1)))
