"""Authentication helpers for the Criteo API."""
from .client_credentials import ClientCredentialsAuth
from .token_store import TokenStore

__all__ = ["ClientCredentialsAuth", "TokenStore"]
