"""Registry backends and the lookup client."""

from pyalpr.registry.base import AsyncRegistry, Registry
from pyalpr.registry.http import HttpRegistry
from pyalpr.registry.lookup import AsyncLookupClient, LookupClient
from pyalpr.registry.memory import InMemoryRegistry
from pyalpr.registry.sqlite import SqliteRegistry

__all__ = [
    "AsyncLookupClient",
    "AsyncRegistry",
    "HttpRegistry",
    "InMemoryRegistry",
    "LookupClient",
    "Registry",
    "SqliteRegistry",
]
