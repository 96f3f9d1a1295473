"""Response handlers that turn raw HTTP responses into caller-facing values."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from .exceptions import RequestError, ResponseWriteError, UnexpectedResponseError
from .http import RawResponse

ResponseHandler = Callable[[RawResponse], Any]


def ensure_success(response: RawResponse) -> None:
    """Raise `RequestError` if the response signals a failure."""

    if 200 <= response.status_code < 300:
        return
    message = f"Bad response from Criteo API: status {response.status_code} | {response.body}"
    raise RequestError(message, status_code=response.status_code, details=response.body)


def process_json(response: RawResponse) -> Any:
    """Parse the body as JSON; an empty body means plain success."""

    ensure_success(response)
    body = response.body.strip()
    if not body:
        return True
    try:
        return json.loads(body)
    except ValueError as exc:
        raise UnexpectedResponseError(
            f"Error parsing JSON response: {exc}",
            status_code=response.status_code,
            details=response.body,
        ) from exc


def process_raw(response: RawResponse) -> str | bool:
    """Return the body text unchanged; an empty body means plain success."""

    ensure_success(response)
    body = response.body.strip()
    return body or True


class FileHandler:
    """Write the response body verbatim to ``filepath``."""

    def __init__(self, filepath: str | Path) -> None:
        self.filepath = Path(filepath)

    def __call__(self, response: RawResponse) -> str:
        ensure_success(response)
        try:
            self.filepath.write_bytes(response.content)
        except OSError as exc:
            raise ResponseWriteError(
                f"Error saving response to file {self.filepath}: {exc}",
                status_code=response.status_code,
                details=str(exc),
            ) from exc
        return f"Results saved to {self.filepath}."

    def __repr__(self) -> str:
        return f"FileHandler({str(self.filepath)!r})"


def select_report_handler(filepath: str | Path | None) -> ResponseHandler:
    if filepath:
        return FileHandler(filepath)
    return process_raw


def select_stats_handler(fmt: str | None, filepath: str | Path | None) -> ResponseHandler:
    """Pick a handler for report-like payloads.

    A target file always wins; otherwise JSON formats are parsed and every
    other format (CSV, XML, Excel) is returned as text.
    """
    if filepath:
        return FileHandler(filepath)
    if fmt and fmt.lower() == "json":
        return process_json
    return process_raw
