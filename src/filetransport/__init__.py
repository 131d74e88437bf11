"""filetransport - Local filesystem repository transport."""

__version__ = "0.1.0"
__license__ = "GPL-3.0-or-later"

from filetransport.providers import LocalRepositoryProvider
from filetransport.providers import TransportProvider
from filetransport.providers import create_provider
from filetransport.repository import InputData
from filetransport.repository import OutputData
from filetransport.repository import Repository
from filetransport.repository import Resource
from filetransport.utils.errors import ResourceNotFoundError
from filetransport.utils.errors import TransferError
from filetransport.utils.errors import TransportError


__all__ = [
    "Repository",
    "Resource",
    "InputData",
    "OutputData",
    "TransportProvider",
    "LocalRepositoryProvider",
    "create_provider",
    "TransportError",
    "TransferError",
    "ResourceNotFoundError",
    "__version__",
]
