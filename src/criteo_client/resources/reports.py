"""Asynchronous campaign and line item reporting."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..handlers import select_report_handler
from ..pipeline import Callback
from .base import ResourceBase, envelope

REPORT_REQUEST_TYPE = "RetailMediaReportRequest"
REPORT_TYPES = ("campaigns", "line-items")


class ReportsResource(ResourceBase):
    """Request reports, poll their status and download the output.

    Reports are generated server-side: `request` returns a status envelope
    whose ``data.id`` is then polled with `status` until it reads
    ``success``, after which `output` returns (or saves) the rows.
    """

    def request(
        self,
        report_type: str,
        query: Mapping[str, Any],
        *,
        callback: Callback | None = None,
    ) -> dict[str, Any]:
        if report_type not in REPORT_TYPES:
            raise ValueError(
                f"Unsupported report type '{report_type}'. Use one of: {', '.join(REPORT_TYPES)}."
            )
        return self._post(
            f"/reports/{report_type}",
            envelope(REPORT_REQUEST_TYPE, query),
            callback=callback,
        )

    def status(self, report_id: str, *, callback: Callback | None = None) -> dict[str, Any]:
        return self._get(f"/reports/{report_id}/status", callback=callback)

    def output(
        self,
        report_id: str,
        filepath: str | Path | None = None,
        *,
        callback: Callback | None = None,
    ) -> str | bool:
        return self._get(
            f"/reports/{report_id}/output",
            handler=select_report_handler(filepath),
            callback=callback,
        )
