"""OAuth2 client-credentials exchange."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING
from urllib.parse import urlencode

from ..config import TOKEN_PATH, ClientConfig, Credentials
from ..exceptions import AuthenticationError, RequestError
from ..handlers import ensure_success
from ..http import HttpTransport, RawResponse
from .token_store import TokenStore

if TYPE_CHECKING:  # pragma: no cover - import-time guard
    from ..pipeline import RequestDescriptor

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class ClientCredentialsAuth:
    """Exchange a client id/secret pair for a bearer token."""

    def __init__(
        self,
        credentials: Credentials,
        transport: HttpTransport,
        token_store: TokenStore,
        *,
        config: ClientConfig | None = None,
        token_path: str = TOKEN_PATH,
    ) -> None:
        self.credentials = credentials
        self.token_path = token_path
        self._transport = transport
        self._store = token_store
        self._config = config or transport.config

    def authenticate(self) -> str:
        """Fetch a fresh token and store it.

        Raises:
            AuthenticationError: the exchange failed or returned no token.
                The token store is left untouched in that case.
        """
        headers = self._config.resolved_headers()
        headers.update(self.form_headers())
        response = self._transport.post(self.token_path, body=self.form_body(), headers=headers)
        return self.process_auth(response)

    def form_body(self) -> str:
        return urlencode(
            {
                "client_id": self.credentials.client_id,
                "client_secret": self.credentials.client_secret,
                "grant_type": "client_credentials",
            }
        )

    @staticmethod
    def form_headers() -> dict[str, str]:
        return {"Content-Type": FORM_CONTENT_TYPE}

    def process_auth(self, response: RawResponse) -> str:
        """Response handler for the token endpoint."""
        try:
            ensure_success(response)
        except RequestError as exc:
            raise AuthenticationError(
                f"Authentication failed: {exc}",
                status_code=exc.status_code,
                details=exc.details,
            ) from exc

        try:
            payload = json.loads(response.body)
        except ValueError as exc:
            raise AuthenticationError(
                "Error retrieving session token from authentication response.",
                status_code=response.status_code,
                details=response.body,
            ) from exc

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            raise AuthenticationError(
                "Error retrieving session token from authentication response.",
                status_code=response.status_code,
                details=response.body,
            )

        self._store.update_token(token)
        logger.info("Criteo access token obtained (client_id=%s)", self.credentials.client_id)
        return token

    def descriptor(self, callback=None) -> RequestDescriptor:
        """Describe the token request so it can travel through the pipeline."""
        from ..pipeline import RequestDescriptor

        return RequestDescriptor(
            method="POST",
            path=self.token_path,
            body=self.form_body(),
            headers=self.form_headers(),
            handler=self.process_auth,
            callback=callback,
        )
