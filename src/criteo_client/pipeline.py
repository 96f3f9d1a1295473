"""Request pipeline: authenticate, execute, retry once on 401, settle.

Every call made by the client travels through `RequestPipeline.submit`:

1. gate: pass when a token is stored and this is not a retry pass, or when
   the request targets the token endpoint itself;
2. authenticate: only when the gate did not pass; failures are terminal;
3. execute: send through the transport and run the response handler;
4. retry decision: a 401 on the first pass marks the descriptor as retried
   and runs it again from the gate, which now forces a fresh token;
5. settle: deliver the outcome to the callback (at most once) and to the
   caller (return value or raised error).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .auth.client_credentials import ClientCredentialsAuth
from .auth.token_store import TokenStore
from .config import ClientConfig
from .exceptions import CriteoError, RequestError
from .handlers import ResponseHandler, process_json
from .http import HttpTransport

logger = logging.getLogger(__name__)

Callback = Callable[[CriteoError | None, Any], Any]


@dataclass(slots=True)
class RequestDescriptor:
    """In-flight record of one logical API call."""

    method: str
    path: str
    query: Mapping[str, Any] | None = None
    body: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    handler: ResponseHandler = process_json
    callback: Callback | None = None
    retry: bool = False
    callback_executed: bool = False


class RequestPipeline:
    """Run request descriptors through the five-stage chain."""

    def __init__(
        self,
        transport: HttpTransport,
        token_store: TokenStore,
        authenticator: ClientCredentialsAuth,
        *,
        config: ClientConfig | None = None,
    ) -> None:
        self._transport = transport
        self._store = token_store
        self._authenticator = authenticator
        self._config = config or transport.config

    def submit(self, descriptor: RequestDescriptor) -> Any:
        try:
            result = self._run(descriptor)
        except CriteoError as exc:
            return self._reject(descriptor, exc)
        return self._resolve(descriptor, result)

    # Stages ----------------------------------------------------------------
    def _run(self, descriptor: RequestDescriptor) -> Any:
        if not self._check_authentication(descriptor):
            self._authenticator.authenticate()
        try:
            return self._execute(descriptor)
        except CriteoError as exc:
            return self._decide_whether_to_retry(descriptor, exc)

    def _check_authentication(self, descriptor: RequestDescriptor) -> bool:
        if self._is_token_request(descriptor):
            return True
        return bool(self._store) and not descriptor.retry

    def _execute(self, descriptor: RequestDescriptor) -> Any:
        headers = self._config.resolved_headers()
        self._store.apply(headers)
        headers.update(descriptor.headers)
        logger.info(
            "Criteo request %s %s (retry=%s)",
            descriptor.method.upper(),
            self._transport.url_for(descriptor.path),
            descriptor.retry,
        )
        response = self._transport.request(
            descriptor.method,
            descriptor.path,
            query=descriptor.query,
            body=descriptor.body,
            headers=headers,
        )
        return descriptor.handler(response)

    def _decide_whether_to_retry(self, descriptor: RequestDescriptor, exc: CriteoError) -> Any:
        expired = isinstance(exc, RequestError) and exc.is_unauthorized
        if expired and not descriptor.retry and not self._is_token_request(descriptor):
            descriptor.retry = True
            logger.info(
                "Criteo rejected the access token for %s %s; re-authenticating",
                descriptor.method.upper(),
                descriptor.path,
            )
            return self._run(descriptor)
        raise exc

    # Settlement ------------------------------------------------------------
    def _resolve(self, descriptor: RequestDescriptor, result: Any) -> Any:
        if descriptor.callback is not None and not descriptor.callback_executed:
            descriptor.callback_executed = True
            descriptor.callback(None, result)
        return result

    def _reject(self, descriptor: RequestDescriptor, exc: CriteoError) -> None:
        if descriptor.callback is not None and not descriptor.callback_executed:
            descriptor.callback_executed = True
            logger.warning(
                "Criteo request %s %s failed: %s",
                descriptor.method.upper(),
                descriptor.path,
                exc,
            )
            descriptor.callback(exc, None)
            return None
        raise exc

    def _is_token_request(self, descriptor: RequestDescriptor) -> bool:
        return descriptor.path == self._authenticator.token_path
