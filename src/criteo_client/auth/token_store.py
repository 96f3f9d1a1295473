"""Bearer token storage shared by every request of a client."""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass


@dataclass(slots=True)
class TokenStore:
    """Hold the current bearer token.

    The slot starts empty and is only ever overwritten by a successful
    authentication; staleness is discovered through a 401, never through an
    expiry timestamp. No lock is taken: two requests that both observe an
    empty store may each authenticate, and the last token written wins.
    """

    token: str = ""

    def __bool__(self) -> bool:
        return bool(self.token)

    def update_token(self, token: str) -> None:
        self.token = token

    def apply(self, headers: MutableMapping[str, str]) -> None:
        """Mutate headers in-place with the bearer credentials, if any."""
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
