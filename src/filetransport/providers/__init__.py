"""Repository transport providers."""

from .provider import EntryKind
from .provider import LocalRepositoryProvider
from .provider import TransportProvider
from .provider import create_provider


__all__ = [
    "TransportProvider",
    "LocalRepositoryProvider",
    "EntryKind",
    "create_provider",
]
