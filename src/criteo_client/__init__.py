"""High-level Criteo client entrypoints."""
from .client import CriteoClient
from .config import ClientConfig, Credentials
from .exceptions import CriteoError
from .pipeline import RequestDescriptor

__all__ = ["CriteoClient", "ClientConfig", "Credentials", "CriteoError", "RequestDescriptor"]
