"""Retail media line item helpers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..pipeline import Callback
from .base import ResourceBase, envelope, page_query

LINE_ITEM_TYPE = "RetailMediaLineItem"


class LineItemsResource(ResourceBase):
    """Work with the line items of a campaign."""

    def list(
        self,
        campaign_id: str,
        *,
        page_index: int | None = None,
        page_size: int | None = None,
        callback: Callback | None = None,
    ) -> dict[str, Any]:
        return self._get(
            f"/campaigns/{campaign_id}/line-items",
            query=page_query(page_index, page_size),
            callback=callback,
        )

    def get(self, line_item_id: str, *, callback: Callback | None = None) -> dict[str, Any]:
        return self._get(f"/line-items/{line_item_id}", callback=callback)

    def create(
        self,
        campaign_id: str,
        attributes: Mapping[str, Any],
        *,
        callback: Callback | None = None,
    ) -> dict[str, Any]:
        return self._post(
            f"/campaigns/{campaign_id}/line-items",
            envelope(LINE_ITEM_TYPE, attributes),
            callback=callback,
        )

    def update(
        self,
        line_item_id: str,
        attributes: Mapping[str, Any],
        *,
        callback: Callback | None = None,
    ) -> dict[str, Any]:
        return self._put(
            f"/line-items/{line_item_id}",
            envelope(LINE_ITEM_TYPE, attributes, resource_id=line_item_id),
            callback=callback,
        )
