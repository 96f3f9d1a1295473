"""Retail media campaign helpers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..pipeline import Callback
from .base import ResourceBase, envelope, page_query

CAMPAIGN_TYPE = "RetailMediaCampaign"


class CampaignsResource(ResourceBase):
    """Work with retail media campaigns."""

    def list(
        self,
        account_id: str,
        *,
        page_index: int | None = None,
        page_size: int | None = None,
        callback: Callback | None = None,
    ) -> dict[str, Any]:
        return self._get(
            f"/accounts/{account_id}/campaigns",
            query=page_query(page_index, page_size),
            callback=callback,
        )

    def get(self, campaign_id: str, *, callback: Callback | None = None) -> dict[str, Any]:
        return self._get(f"/campaigns/{campaign_id}", callback=callback)

    def create(
        self,
        account_id: str,
        attributes: Mapping[str, Any],
        *,
        callback: Callback | None = None,
    ) -> dict[str, Any]:
        return self._post(
            f"/accounts/{account_id}/campaigns",
            envelope(CAMPAIGN_TYPE, attributes),
            callback=callback,
        )

    def update(
        self,
        campaign_id: str,
        attributes: Mapping[str, Any],
        *,
        callback: Callback | None = None,
    ) -> dict[str, Any]:
        return self._put(
            f"/campaigns/{campaign_id}",
            envelope(CAMPAIGN_TYPE, attributes, resource_id=campaign_id),
            callback=callback,
        )
