"""Custom exceptions for filetransport."""


class TransportError(Exception):
    """Base exception for filetransport errors."""
    pass


class ConnectionError(TransportError):
    """Repository cannot be used: missing, uncreatable or unreadable."""
    pass


class TransferError(TransportError):
    """Reading, writing or copying failed, or no base directory is configured."""
    pass


class ResourceNotFoundError(TransportError):
    """Resource or directory is absent, or is not of the expected kind."""
    pass
