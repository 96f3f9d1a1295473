"""Marketing solutions statistics reports."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from ..handlers import select_stats_handler
from ..pipeline import Callback
from .base import ResourceBase


def iso_timestamp(value: str | date | datetime) -> str:
    """Render a report boundary as a UTC timestamp with millisecond precision.

    Naive values are taken as UTC, so ``"2021-01-01"`` becomes
    ``"2021-01-01T00:00:00.000Z"``.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = f"{text[:-1]}+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ValueError(f"Invalid report date '{value}'.") from exc
    elif isinstance(value, datetime):
        moment = value
    else:
        moment = datetime(value.year, value.month, value.day)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


class StatisticsResource(ResourceBase):
    """Ad set performance reports from the versioned statistics API."""

    @property
    def path_prefix(self) -> str:
        return f"/{self._client.config.api_version}"

    def report(
        self,
        query: Mapping[str, Any],
        filepath: str | Path | None = None,
        *,
        callback: Callback | None = None,
    ) -> Any:
        """Request a statistics report.

        ``startDate`` and ``endDate`` are converted to ISO timestamps. JSON
        reports are parsed, other formats (CSV, Excel, XML) come back as text,
        and a ``filepath`` saves the body to disk instead.
        """
        payload = dict(query)
        for key in ("startDate", "endDate"):
            if key not in payload:
                raise ValueError(f"Statistics reports require '{key}'.")
            payload[key] = iso_timestamp(payload[key])
        return self._post(
            "/statistics/report",
            payload,
            handler=select_stats_handler(payload.get("format"), filepath),
            callback=callback,
        )
