"""Repository configuration and transfer descriptors."""

import re
from dataclasses import dataclass
from dataclasses import field
from typing import BinaryIO
from urllib.parse import unquote
from urllib.parse import urlparse


_DRIVE_PATH = re.compile(r"^[A-Za-z]:([\\/]|$)")
_DRIVE_URL_PATH = re.compile(r"^/[A-Za-z]:")


@dataclass
class Repository:
    """Where a provider stores resources.

    ``base_directory`` may be ``None``: connections then open without any
    checks, and every other operation fails.
    """

    base_directory: str | None
    id: str = ""
    url: str | None = None

    @classmethod
    def from_url(cls, url: str, id: str = "") -> "Repository":
        """Build a repository from a ``file://`` URL or a plain path."""
        return cls(base_directory=basedir_from_url(url), id=id, url=url)


def basedir_from_url(url: str) -> str:
    """Extract the base directory from a ``file://`` URL or a plain path."""
    if _DRIVE_PATH.match(url):
        return url

    parsed = urlparse(url)
    if not parsed.scheme:
        return url

    if parsed.scheme != "file":
        raise ValueError(f"Unsupported repository URL scheme '{parsed.scheme}': {url}")

    path = unquote(parsed.path)
    host = parsed.netloc
    if host and host != "localhost":
        return f"//{host}{path}"

    if _DRIVE_URL_PATH.match(path):
        path = path[1:]

    return path or "/"


@dataclass
class Resource:
    """A named artifact in a repository.

    ``content_length`` is -1 until known; ``last_modified`` is in epoch
    milliseconds, 0 when unknown.
    """

    name: str
    content_length: int = -1
    last_modified: int = 0


@dataclass
class InputData:
    """Resource being fetched and the stream to read it from."""

    resource: Resource
    input_stream: BinaryIO | None = field(default=None, repr=False)


@dataclass
class OutputData:
    """Resource being stored and the stream to write it to."""

    resource: Resource
    output_stream: BinaryIO | None = field(default=None, repr=False)
