"""
Filesystem abstraction for the run-log manager.

Every mutating operation returns an FsResult instead of raising, so the
"best effort, never throw" contract of the manager is visible in the types.
LocalFileSystem is the production implementation; tests inject an in-memory
one.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol


@dataclass(frozen=True)
class FsResult:
    """
    Outcome of a single filesystem operation.

    Truthy when the operation succeeded. On success ``value`` carries the
    operation's payload (file text for reads, the target path for writes);
    on failure ``error`` carries the exception that was caught.
    """

    ok: bool
    value: Any = None
    error: BaseException | None = None

    @classmethod
    def success(cls, value: Any = None) -> FsResult:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: BaseException, value: Any = None) -> FsResult:
        return cls(ok=False, value=value, error=error)

    def __bool__(self) -> bool:
        return self.ok


class FileSystem(Protocol):
    """Protocol for the filesystem operations used by the run-log manager."""

    def exists(self, path: Path) -> bool:
        """Return True if path exists."""
        ...

    def make_dirs(self, path: Path) -> FsResult:
        """Create a directory including parents."""
        ...

    def read_text(self, path: Path) -> FsResult:
        """Read a whole text file; value is the content."""
        ...

    def write_text(self, path: Path, text: str) -> FsResult:
        """Create or overwrite a text file."""
        ...

    def append_text(self, path: Path, text: str) -> FsResult:
        """Append to a text file, creating it if needed."""
        ...

    def rename(self, src: Path, dst: Path) -> FsResult:
        """Rename src to dst."""
        ...

    def copy(self, src: Path, dst: Path) -> FsResult:
        """Copy src to dst, overwriting dst."""
        ...

    def remove(self, path: Path) -> FsResult:
        """Delete a file."""
        ...


class LocalFileSystem:
    """
    FileSystem implementation backed by the local disk.

    Each method catches OSError, and text operations also catch encoding
    errors, reporting them as a failed FsResult. Other exceptions
    (programming errors) propagate.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        """
        Initialize the filesystem.

        Args:
            encoding: Text encoding used for reads and writes
        """
        self._encoding = encoding

    def exists(self, path: Path) -> bool:
        try:
            return Path(path).exists()
        except OSError:
            return False

    def make_dirs(self, path: Path) -> FsResult:
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return FsResult.failure(e)
        return FsResult.success(Path(path))

    def read_text(self, path: Path) -> FsResult:
        try:
            return FsResult.success(Path(path).read_text(encoding=self._encoding))
        except (OSError, UnicodeError) as e:
            return FsResult.failure(e)

    def write_text(self, path: Path, text: str) -> FsResult:
        try:
            Path(path).write_text(text, encoding=self._encoding)
        except (OSError, UnicodeError) as e:
            return FsResult.failure(e)
        return FsResult.success(Path(path))

    def append_text(self, path: Path, text: str) -> FsResult:
        try:
            with open(path, "a", encoding=self._encoding) as f:
                f.write(text)
        except (OSError, UnicodeError) as e:
            return FsResult.failure(e)
        return FsResult.success(Path(path))

    def rename(self, src: Path, dst: Path) -> FsResult:
        try:
            Path(src).rename(dst)
        except OSError as e:
            return FsResult.failure(e)
        return FsResult.success(Path(dst))

    def copy(self, src: Path, dst: Path) -> FsResult:
        try:
            shutil.copyfile(src, dst)
        except OSError as e:
            return FsResult.failure(e)
        return FsResult.success(Path(dst))

    def remove(self, path: Path) -> FsResult:
        try:
            Path(path).unlink()
        except OSError as e:
            return FsResult.failure(e)
        return FsResult.success(Path(path))
