"""Transport provider abstraction and the local filesystem implementation."""

import logging
import os
import shutil
from abc import ABC
from abc import abstractmethod
from enum import Enum
from pathlib import Path

from filetransport.repository import InputData
from filetransport.repository import OutputData
from filetransport.repository import Repository
from filetransport.repository import Resource
from filetransport.utils.errors import ConnectionError
from filetransport.utils.errors import ResourceNotFoundError
from filetransport.utils.errors import TransferError
from filetransport.utils.events import LoggingSessionListener
from filetransport.utils.events import SessionListener
from filetransport.utils.streams import open_lazy_output


logger = logging.getLogger(__name__)


class EntryKind(Enum):
    """What a resolved path points at."""

    MISSING = "missing"
    FILE = "file"
    DIRECTORY = "directory"


def entry_kind(path: str | Path) -> EntryKind:
    """Classify a path, following symlinks."""
    if os.path.isdir(path):
        return EntryKind.DIRECTORY
    if os.path.exists(path):
        return EntryKind.FILE
    return EntryKind.MISSING


class TransportProvider(ABC):
    """Abstract repository transport.

    Subclasses supply stream setup, listing and existence checks; whole-file
    ``get``/``put`` are built on top of the stream operations.
    """

    def __init__(self, repository: Repository | None, listener: SessionListener | None = None):
        self.repository = repository
        self.listener = listener or LoggingSessionListener()
        self.connected = False

    def __enter__(self):
        self.open_connection()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close_connection()

    @abstractmethod
    def open_connection(self) -> None:
        """Validate the repository and prepare it for use."""
        pass

    @abstractmethod
    def close_connection(self) -> None:
        """Release the connection."""
        pass

    @abstractmethod
    def fill_input_data(self, input_data: InputData) -> None:
        """Attach a readable stream and fill in resource metadata."""
        pass

    @abstractmethod
    def fill_output_data(self, output_data: OutputData) -> None:
        """Attach a writable stream for the resource."""
        pass

    @abstractmethod
    def get_file_list(self, destination_directory: str) -> list[str]:
        """List a directory; subdirectory names end with ``/``."""
        pass

    @abstractmethod
    def resource_exists(self, resource_name: str) -> bool:
        """Check whether a resource exists (a trailing ``/`` asks for a directory)."""
        pass

    @abstractmethod
    def supports_directory_copy(self) -> bool:
        """Whether put_directory is available."""
        pass

    @abstractmethod
    def put_directory(self, source_directory: str | Path, destination_directory: str) -> None:
        """Copy a local directory tree into the repository."""
        pass

    def get_resource(self, resource_name: str) -> Resource:
        """Fetch resource metadata without transferring content."""
        input_data = InputData(Resource(resource_name))
        self.fill_input_data(input_data)
        input_data.input_stream.close()
        return input_data.resource

    def get(self, resource_name: str, destination: str | Path) -> Resource:
        """Download a resource into a local file.

        The local file gets the resource's modification time.
        """
        destination = Path(destination)
        input_data = InputData(Resource(resource_name))
        self.fill_input_data(input_data)
        resource = input_data.resource

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            with input_data.input_stream as source, open(destination, "wb") as target:
                shutil.copyfileobj(source, target)
            if resource.last_modified > 0:
                mtime_ns = resource.last_modified * 1_000_000
                os.utime(destination, ns=(mtime_ns, mtime_ns))
        except OSError as err:
            raise TransferError(f"Could not transfer {resource_name} to {destination}") from err
        finally:
            input_data.input_stream.close()

        return resource

    def get_if_newer(self, resource_name: str, destination: str | Path, timestamp: int) -> bool:
        """Download only when the resource is newer than ``timestamp`` (epoch ms).

        A ``timestamp`` of 0 always downloads.
        """
        resource = self.get_resource(resource_name)
        if timestamp != 0 and resource.last_modified <= timestamp:
            logger.debug("Skipping %s: not newer than %d", resource_name, timestamp)
            return False

        self.get(resource_name, destination)
        return True

    def put(self, source: str | Path, destination_name: str) -> None:
        """Upload a local file as ``destination_name``."""
        source = Path(source)
        if not source.is_file():
            raise ResourceNotFoundError(f"Specified source file does not exist: {source}")

        stat = source.stat()
        output_data = OutputData(Resource(destination_name, stat.st_size, stat.st_mtime_ns // 1_000_000))
        self.fill_output_data(output_data)

        try:
            with output_data.output_stream as target, open(source, "rb") as reader:
                shutil.copyfileobj(reader, target)
        except OSError as err:
            raise TransferError(f"Could not transfer {source} to {destination_name}") from err


class LocalRepositoryProvider(TransportProvider):
    """Repository backed by a directory on the local filesystem.

    Resource names are slash-separated paths relative to the repository's
    base directory. One instance serves one session; nothing is cached
    between operations.
    """

    @property
    def base_directory(self) -> str | None:
        if self.repository is None or not self.repository.base_directory:
            return None
        return self.repository.base_directory

    def _require_basedir(self, message: str) -> str:
        basedir = self.base_directory
        if basedir is None:
            raise TransferError(message)
        return basedir

    def _join(self, relative_path: str) -> str:
        # Names are relative to the base directory even with a leading slash
        return os.path.join(self.base_directory, relative_path.lstrip("/" + os.sep))

    def resolve_destination_path(self, relative_path: str) -> str:
        """Absolute, normalized path of ``relative_path`` under the base directory."""
        self._require_basedir("Unable to resolve a path with a null basedir.")
        return os.path.abspath(self._join(relative_path.replace("\\", "/")))

    def open_connection(self) -> None:
        if self.repository is None:
            raise ConnectionError("Unable to operate with a null repository.")

        basedir = self.base_directory
        if basedir is None:
            # Tolerated for bootstrapping and tests: nothing to validate
            self.listener.debug("Using a null basedir.")
            self.connected = True
            return

        if not os.path.exists(basedir):
            logger.debug("Creating repository directory %s", basedir)
            try:
                os.makedirs(basedir, exist_ok=True)
            except OSError as err:
                raise ConnectionError(
                    f"Repository path {basedir} does not exist, and cannot be created."
                ) from err

        if not os.access(basedir, os.R_OK):
            raise ConnectionError(f"Repository path {basedir} cannot be read")

        self.connected = True

    def close_connection(self) -> None:
        self.connected = False

    def fill_input_data(self, input_data: InputData) -> None:
        self._require_basedir("Unable to operate with a null basedir.")

        resource = input_data.resource
        path = self._join(resource.name)

        if not os.path.exists(path):
            raise ResourceNotFoundError(f"File: {path} does not exist")

        stream = None
        try:
            stream = open(path, "rb")
            stat = os.stat(path)
        except OSError as err:
            if stream is not None:
                stream.close()
            raise TransferError(f"Could not read from file: {os.path.abspath(path)}") from err

        input_data.input_stream = stream
        resource.content_length = stat.st_size
        resource.last_modified = stat.st_mtime_ns // 1_000_000

    def fill_output_data(self, output_data: OutputData) -> None:
        self._require_basedir("Unable to operate with a null basedir.")

        path = self._join(output_data.resource.name)
        parent = os.path.dirname(path)
        try:
            if parent:
                os.makedirs(parent, exist_ok=True)
        except OSError as err:
            raise TransferError(f"Could not create parent directories for {path}") from err

        output_data.output_stream = open_lazy_output(path)

    def put(self, source: str | Path, destination_name: str) -> None:
        self._require_basedir("Unable to operate with a null basedir.")

        source = Path(source)
        super().put(source, destination_name)

        if source.stat().st_size == 0:
            # An empty source never triggers the lazy open
            target = Path(self._join(destination_name))
            try:
                target.write_bytes(b"")
            except OSError as err:
                raise TransferError(f"Could not transfer {source} to {destination_name}") from err

    def supports_directory_copy(self) -> bool:
        return True

    def _ensure_directory(self, normalized: str, raw: str) -> bool:
        """Create a directory chain, retrying with the un-normalized path.

        Returns whether either attempt succeeded; callers still check the
        directory afterwards.
        """
        try:
            os.makedirs(normalized, exist_ok=True)
            return True
        except OSError as err:
            logger.debug("Could not create %s (%s), retrying with %s", normalized, err, raw)

        try:
            os.makedirs(raw, exist_ok=True)
            return True
        except OSError:
            return False

    def put_directory(self, source_directory: str | Path, destination_directory: str) -> None:
        basedir = self._require_basedir("Unable to putDirectory() with a null basedir.")

        source = Path(source_directory)
        if not source.is_dir():
            raise ResourceNotFoundError(f"Source directory does not exist: {source}")

        path = self.resolve_destination_path(destination_directory)
        raw = self._join(destination_directory.replace("\\", "/"))
        self._ensure_directory(path, raw)

        if entry_kind(path) is not EntryKind.DIRECTORY:
            message = f"Could not make directory '{path}'."
            if not os.access(basedir, os.W_OK):
                message += f"  The base directory {basedir} is read-only."
            raise TransferError(message)

        logger.debug("Copying %s into %s", source, path)
        try:
            shutil.copytree(source, path, dirs_exist_ok=True)
        except OSError as err:
            raise TransferError(f"Error copying directory structure from {source} to {path}") from err

    def get_file_list(self, destination_directory: str) -> list[str]:
        self._require_basedir("Unable to getFileList() with a null basedir.")

        path = self.resolve_destination_path(destination_directory)
        kind = entry_kind(path)
        if kind is EntryKind.MISSING:
            raise ResourceNotFoundError(f"Directory does not exist: {destination_directory}")
        if kind is EntryKind.FILE:
            raise ResourceNotFoundError(f"Path is not a directory: {destination_directory}")

        try:
            scanner = os.scandir(path)
        except OSError as err:
            raise TransferError(f"Could not list directory: {path}") from err

        names = []
        try:
            for entry in scanner:
                name = entry.name
                if entry.is_dir() and not name.endswith("/"):
                    name += "/"
                names.append(name)
        except OSError as err:
            _close_quietly(scanner)
            raise TransferError(f"Could not list directory: {path}") from err

        _close_quietly(scanner)
        return names

    def resource_exists(self, resource_name: str) -> bool:
        self._require_basedir("Unable to check resource existence with a null basedir.")

        kind = entry_kind(self.resolve_destination_path(resource_name))
        if resource_name.endswith("/"):
            return kind is EntryKind.DIRECTORY
        return kind is not EntryKind.MISSING


def _close_quietly(scanner) -> None:
    """Close a directory scan; the entries already read stay valid."""
    try:
        scanner.close()
    except OSError as err:
        logger.debug("Ignoring error closing directory scan: %s", err)


def create_provider(url: str, listener: SessionListener | None = None) -> TransportProvider:
    """Create the provider for a repository URL or plain path."""
    return LocalRepositoryProvider(Repository.from_url(url), listener=listener)
