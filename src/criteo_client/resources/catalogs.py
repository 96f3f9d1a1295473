"""Catalog export helpers."""

from __future__ import annotations

from ..handlers import process_raw
from ..pipeline import Callback
from .base import ResourceBase


class CatalogsResource(ResourceBase):
    """Download catalog exports."""

    def output(self, catalog_id: str, *, callback: Callback | None = None) -> str | bool:
        # Newline-delimited JSON: each line parses, the whole body does not.
        return self._get(f"/catalogs/{catalog_id}/output", handler=process_raw, callback=callback)
