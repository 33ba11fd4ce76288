"""Formats component port definitions - protocols for dependencies."""

from contextlib import AbstractContextManager
from typing import BinaryIO, Protocol


class FileStorePort(Protocol):
    """Protocol for read access to the bytes behind a file reference."""

    def open_stream(self, path: str) -> AbstractContextManager[BinaryIO]:
        """Open a file for reading, released when the block exits. Raises FileNotFoundError."""
        ...

    def exists(self, path: str) -> bool:
        """Check whether a file exists at path."""
        ...
