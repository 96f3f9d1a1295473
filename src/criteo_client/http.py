"""HTTP transport for Criteo API access."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from .config import ClientConfig
from .exceptions import TransportError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RawResponse:
    """Status, decoded text and raw bytes of one HTTP exchange.

    ``content`` defaults to the UTF-8 encoding of ``body`` when omitted.
    """

    status_code: int
    body: str
    headers: Mapping[str, str] = field(default_factory=dict)
    content: bytes = b""

    def __post_init__(self) -> None:
        if not self.content and self.body:
            self.content = self.body.encode("utf-8")


class HttpTransport:
    """Issue single HTTP requests against the configured Criteo host.

    The transport never inspects status codes; that is left to the response
    handlers. Only failures of the exchange itself raise `TransportError`.
    """

    def __init__(self, config: ClientConfig, *, session: requests.Session | None = None) -> None:
        self.config = config
        self._session = session or requests.Session()
        self._suppress_insecure_warning_if_needed()

    def get(self, path: str, **kwargs: Any) -> RawResponse:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> RawResponse:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> RawResponse:
        return self.request("PUT", path, **kwargs)

    def patch(self, path: str, **kwargs: Any) -> RawResponse:
        return self.request("PATCH", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> RawResponse:
        return self.request("DELETE", path, **kwargs)

    def request(
        self,
        method: str,
        path: str,
        *,
        query: Mapping[str, Any] | None = None,
        body: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> RawResponse:
        url = self.url_for(path)
        try:
            response = self._session.request(
                method=method.upper(),
                url=url,
                params=query,
                data=body.encode("utf-8") if body is not None else None,
                headers=dict(headers or {}),
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        except requests.Timeout as exc:
            message = f"Request timed out after {self.config.timeout:g} seconds."
            raise TransportError(message, details=str(exc)) from exc
        except requests.RequestException as exc:
            reason = str(exc).strip() or exc.__class__.__name__
            raise TransportError(
                f"Failed to communicate with Criteo API: {reason}", details=reason
            ) from exc
        return RawResponse(
            status_code=response.status_code,
            body=decode_body(response),
            headers=response.headers,
            content=response.content,
        )

    def url_for(self, path: str) -> str:
        normalized = path if path.startswith("/") else f"/{path}"
        return f"{self.config.base_url}{normalized}"

    def close(self) -> None:
        self._session.close()

    def _suppress_insecure_warning_if_needed(self) -> None:
        if isinstance(self.config.verify_ssl, bool) and not self.config.verify_ssl:
            urllib3.disable_warnings(InsecureRequestWarning)


def decode_body(response: requests.Response) -> str:
    """Decode the payload, assuming UTF-8 unless the server names a charset.

    ``requests`` guesses ISO-8859-1 for ``text/*`` without a charset, while
    CSV reports and catalog exports are sent as UTF-8.
    """
    content_type = response.headers.get("Content-Type", "")
    encoding = response.encoding if "charset" in content_type.lower() else None
    try:
        return response.content.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        return response.content.decode("utf-8", errors="replace")
