"""Stream helpers for repository transfers."""

import io
import os
from pathlib import Path


class LazyFileOutputStream(io.RawIOBase):
    """Raw output stream that opens its file on the first byte written.

    Until data arrives nothing touches the filesystem, so a transfer that is
    aborted before producing output leaves no empty file behind. Wrap it in
    ``io.BufferedWriter`` for buffered writes.
    """

    def __init__(self, path: str | Path):
        super().__init__()
        self.path = os.fspath(path)
        self._file: io.FileIO | None = None

    @property
    def opened(self) -> bool:
        """Whether the backing file has been created."""
        return self._file is not None

    def writable(self) -> bool:
        return True

    def write(self, b) -> int:
        if self.closed:
            raise ValueError("write to closed file")

        data = memoryview(b)
        if data.nbytes == 0:
            return 0

        if self._file is None:
            self._file = io.FileIO(self.path, "wb")

        return self._file.write(data) or 0

    def flush(self) -> None:
        if self._file is not None and not self._file.closed:
            self._file.flush()
        super().flush()

    def close(self) -> None:
        if self.closed:
            return

        try:
            super().close()
        finally:
            if self._file is not None:
                self._file.close()


def open_lazy_output(path: str | Path, buffer_size: int = io.DEFAULT_BUFFER_SIZE) -> io.BufferedWriter:
    """Buffered writer over a LazyFileOutputStream."""
    return io.BufferedWriter(LazyFileOutputStream(path), buffer_size=buffer_size)
