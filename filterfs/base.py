"""
Filesystem Capability Interface

Abstract filesystem and file handle types shared by the filter chain,
its filters, and the source filesystem it delegates to.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class FSOperationType(str, Enum):
    """Gated filesystem operations. Values match the ``Fs`` method names."""

    # Read operations
    OPEN = "open"
    OPEN_FILE = "open_file"
    STAT = "stat"

    # Write operations
    CREATE = "create"

    # Modification operations
    CHMOD = "chmod"
    CHTIMES = "chtimes"
    RENAME = "rename"

    # Delete operations
    REMOVE = "remove"
    REMOVE_ALL = "remove_all"

    # Directory operations
    MKDIR = "mkdir"
    MKDIR_ALL = "mkdir_all"


class FileInfo(BaseModel):
    """Metadata returned by ``Fs.stat``."""

    name: str = Field(
        description="Base name of the file or directory"
    )

    size: int = Field(
        default=0,
        description="Size in bytes (0 for directories)"
    )

    mode: int = Field(
        default=0o644,
        description="Permission bits (e.g. 0o755)"
    )

    mod_time: datetime = Field(
        description="Last modification time"
    )

    is_dir: bool = Field(
        default=False,
        description="Whether the entry is a directory"
    )


class File(ABC):
    """
    An open file handle returned by ``Fs.create``, ``Fs.open`` and
    ``Fs.open_file``.

    The filter chain never looks inside a handle; it is owned by
    whoever receives it.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Path the handle was opened with."""

    @abstractmethod
    def read(self, size: int = -1) -> bytes: ...

    @abstractmethod
    def write(self, data: bytes) -> int: ...

    @abstractmethod
    def seek(self, offset: int, whence: int = 0) -> int: ...

    @abstractmethod
    def tell(self) -> int: ...

    @abstractmethod
    def close(self) -> None: ...

    def __enter__(self) -> "File":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class Fs(ABC):
    """
    A filesystem.

    Implementations report failure by raising, usually an ``OSError``
    subclass such as ``PermissionError`` or ``FileNotFoundError``.
    Filters in a ``FilterChain`` implement this same interface: a filter
    that returns normally lets the call through, a filter that raises
    rejects it.
    """

    @abstractmethod
    def create(self, name: str) -> File:
        """Create or truncate ``name`` and open it for reading and writing."""

    @abstractmethod
    def open(self, name: str) -> File:
        """Open ``name`` for reading."""

    @abstractmethod
    def open_file(self, name: str, flag: int, perm: int) -> File:
        """
        Open ``name`` with ``os.O_*`` flags.

        Args:
            name: Path to open.
            flag: Bitwise OR of ``os.O_*`` constants.
            perm: Permission bits used if the file is created.
        """

    @abstractmethod
    def mkdir(self, name: str, perm: int) -> None:
        """Create a single directory."""

    @abstractmethod
    def mkdir_all(self, path: str, perm: int) -> None:
        """Create a directory along with any missing parents."""

    @abstractmethod
    def remove(self, name: str) -> None:
        """Remove a file or an empty directory."""

    @abstractmethod
    def remove_all(self, path: str) -> None:
        """Remove ``path`` and everything below it."""

    @abstractmethod
    def rename(self, oldname: str, newname: str) -> None: ...

    @abstractmethod
    def stat(self, name: str) -> FileInfo: ...

    @abstractmethod
    def name(self) -> str:
        """Name of this filesystem implementation."""

    @abstractmethod
    def chmod(self, name: str, mode: int) -> None: ...

    @abstractmethod
    def chtimes(self, name: str, atime: datetime, mtime: datetime) -> None: ...
