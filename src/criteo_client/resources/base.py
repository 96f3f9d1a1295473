"""Common helpers for resource wrappers."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..handlers import ResponseHandler, process_json
from ..pipeline import Callback, RequestDescriptor

if TYPE_CHECKING:  # pragma: no cover - import-time guard
    from ..client import CriteoClient

RETAIL_MEDIA_PREFIX = "/preview/retail-media"


class ResourceBase:
    """Provide shared helpers for resource modules."""

    path_prefix = RETAIL_MEDIA_PREFIX

    def __init__(self, client: CriteoClient) -> None:
        self._client = client

    def _get(
        self,
        path: str,
        *,
        query: Mapping[str, Any] | None = None,
        handler: ResponseHandler = process_json,
        callback: Callback | None = None,
    ) -> Any:
        return self._submit("GET", path, query=query, handler=handler, callback=callback)

    def _post(
        self,
        path: str,
        payload: Mapping[str, Any],
        *,
        headers: Mapping[str, str] | None = None,
        handler: ResponseHandler = process_json,
        callback: Callback | None = None,
    ) -> Any:
        return self._submit(
            "POST",
            path,
            body=json.dumps(payload),
            headers=headers,
            handler=handler,
            callback=callback,
        )

    def _put(
        self,
        path: str,
        payload: Mapping[str, Any],
        *,
        callback: Callback | None = None,
    ) -> Any:
        return self._submit("PUT", path, body=json.dumps(payload), callback=callback)

    def _submit(
        self,
        method: str,
        path: str,
        *,
        query: Mapping[str, Any] | None = None,
        body: str | None = None,
        headers: Mapping[str, str] | None = None,
        handler: ResponseHandler = process_json,
        callback: Callback | None = None,
    ) -> Any:
        descriptor = RequestDescriptor(
            method=method,
            path=f"{self.path_prefix}{path}",
            query=query,
            body=body,
            headers=dict(headers or {}),
            handler=handler,
            callback=callback,
        )
        return self._client.submit(descriptor)


def page_query(page_index: int | None, page_size: int | None) -> dict[str, int] | None:
    query: dict[str, int] = {}
    if page_index is not None:
        query["pageIndex"] = page_index
    if page_size is not None:
        query["pageSize"] = page_size
    return query or None


def envelope(
    resource_type: str,
    attributes: Mapping[str, Any],
    *,
    resource_id: str | None = None,
) -> dict[str, Any]:
    """Wrap attributes in the JSON:API style ``data`` envelope."""
    data: dict[str, Any] = {"type": resource_type, "attributes": dict(attributes)}
    if resource_id is not None:
        data = {"id": resource_id, **data}
    return {"data": data}
