"""Configuration helpers for the Criteo client."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_HOST = "api.criteo.com"
DEFAULT_API_VERSION = "2021-01"
DEFAULT_TIMEOUT = 12.0
TOKEN_PATH = "/oauth2/token"
USER_AGENT_PREFIX = "criteo-api-python-client"

_FALSEY = {"0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class Credentials:
    """Client-credentials pair issued for a Criteo API application."""

    client_id: str
    client_secret: str

    def __post_init__(self) -> None:
        if not self.client_id or not self.client_secret:
            raise ValueError("Credentials require both client_id and client_secret.")

    @classmethod
    def from_env(cls) -> Credentials:
        return cls(
            client_id=_read_env("CRITEO_CLIENT_ID"),
            client_secret=_read_env("CRITEO_CLIENT_SECRET"),
        )


@dataclass(slots=True)
class ClientConfig:
    """Typed configuration for `CriteoClient`."""

    host: str = DEFAULT_HOST
    protocol: str = "https"
    endpoint: str = ""
    api_version: str = DEFAULT_API_VERSION
    timeout: float = DEFAULT_TIMEOUT
    verify_ssl: bool | str = True
    default_headers: Mapping[str, str] | None = None

    def __post_init__(self) -> None:
        protocol = self.protocol.rstrip(":/").lower()
        if protocol not in {"http", "https"}:
            raise ValueError(f"Unsupported protocol '{self.protocol}'. Use 'http' or 'https'.")
        self.protocol = protocol
        self.endpoint = self.endpoint.rstrip("/")

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.host}{self.endpoint}"

    @property
    def user_agent(self) -> str:
        return f"{USER_AGENT_PREFIX}/v{self.api_version}"

    def resolved_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "Accept": "application/json, text/xml",
            "Content-Type": "application/*+json",
            "User-Agent": self.user_agent,
        }
        if self.default_headers:
            headers.update(self.default_headers)
        return headers

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Build a config from ``CRITEO_*`` environment variables.

        Unset variables fall back to the dataclass defaults.
        """
        timeout = os.getenv("CRITEO_TIMEOUT")
        return cls(
            host=os.getenv("CRITEO_HOST") or DEFAULT_HOST,
            api_version=os.getenv("CRITEO_API_VERSION") or DEFAULT_API_VERSION,
            timeout=float(timeout) if timeout else DEFAULT_TIMEOUT,
            verify_ssl=parse_bool(os.getenv("CRITEO_VERIFY_SSL"), default=True),
        )


def parse_bool(value: str | None, *, default: bool) -> bool:
    # Accept common truthy/falsey representations (1/0, true/false, yes/no).
    if value is None or not value.strip():
        return default
    return value.strip().lower() not in _FALSEY


def _read_env(var_name: str) -> str:
    value = os.getenv(var_name)
    if not value:
        raise ValueError(f"Missing required environment variable '{var_name}'.")
    return value
