"""High-level Criteo REST client."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import requests

from .auth.client_credentials import ClientCredentialsAuth
from .auth.token_store import TokenStore
from .config import ClientConfig, Credentials
from .handlers import ResponseHandler, process_json
from .http import HttpTransport
from .pipeline import Callback, RequestDescriptor, RequestPipeline
from .resources import (
    AccountsResource,
    CampaignsResource,
    CatalogsResource,
    LineItemsResource,
    ReportsResource,
    StatisticsResource,
)


class CriteoClient:
    """Wrap Criteo retail media endpoints with helper methods."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        *,
        config: ClientConfig | None = None,
        session: requests.Session | None = None,
        token: str = "",
    ) -> None:
        self.credentials = Credentials(client_id=client_id, client_secret=client_secret)
        self.config = config or ClientConfig()
        self.token_store = TokenStore(token)
        self._transport = HttpTransport(self.config, session=session)
        self._authenticator = ClientCredentialsAuth(
            self.credentials,
            self._transport,
            self.token_store,
            config=self.config,
        )
        self._pipeline = RequestPipeline(
            self._transport,
            self.token_store,
            self._authenticator,
            config=self.config,
        )
        self.accounts = AccountsResource(self)
        self.catalogs = CatalogsResource(self)
        self.campaigns = CampaignsResource(self)
        self.line_items = LineItemsResource(self)
        self.reports = ReportsResource(self)
        self.statistics = StatisticsResource(self)

    @classmethod
    def from_env(cls, *, session: requests.Session | None = None) -> CriteoClient:
        credentials = Credentials.from_env()
        return cls(
            credentials.client_id,
            credentials.client_secret,
            config=ClientConfig.from_env(),
            session=session,
        )

    # Context manager helpers -------------------------------------------------
    def __enter__(self) -> CriteoClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - passthrough
        self.close()

    # Public API --------------------------------------------------------------
    @property
    def token(self) -> str:
        return self.token_store.token

    def authenticate(self, *, callback: Callback | None = None) -> str | None:
        """Fetch an access token now instead of on the first request."""
        return self.submit(self._authenticator.descriptor(callback))

    def submit(self, descriptor: RequestDescriptor) -> Any:
        return self._pipeline.submit(descriptor)

    def request(
        self,
        method: str,
        path: str,
        *,
        query: Mapping[str, Any] | None = None,
        json_payload: Mapping[str, Any] | list[Any] | None = None,
        body: str | None = None,
        headers: Mapping[str, str] | None = None,
        handler: ResponseHandler | None = None,
        callback: Callback | None = None,
    ) -> Any:
        """Submit an arbitrary request; responses are parsed as JSON by default."""
        if json_payload is not None and body is not None:
            raise ValueError("Pass either json_payload or body, not both.")
        if json_payload is not None:
            body = json.dumps(json_payload)
        descriptor = RequestDescriptor(
            method=method,
            path=path,
            query=query,
            body=body,
            headers=dict(headers or {}),
            handler=handler or process_json,
            callback=callback,
        )
        return self.submit(descriptor)

    def close(self) -> None:
        self._transport.close()
