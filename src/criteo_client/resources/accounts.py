"""Retail media account helpers."""

from __future__ import annotations

from typing import Any

from ..pipeline import Callback
from .base import ResourceBase


class AccountsResource(ResourceBase):
    """List retail media accounts and their catalogs."""

    def list(self, *, callback: Callback | None = None) -> dict[str, Any]:
        return self._get("/accounts", callback=callback)

    def catalogs(self, account_id: str, *, callback: Callback | None = None) -> dict[str, Any]:
        """Request a catalog export for an account.

        The API answers with the catalog status; fetch the finished export
        with `CatalogsResource.output`.
        """
        return self._post(
            f"/accounts/{account_id}/catalogs",
            {},
            headers={"Content-Type": "application/json"},
            callback=callback,
        )
