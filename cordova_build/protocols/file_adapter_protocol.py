"""Protocol definition for file system operations."""

import os
from collections.abc import Iterator
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileAdapterProtocol(Protocol):
    """Protocol for the file system operations used during artifact export."""

    def exists(self, path: Path) -> bool:
        """Check if a path exists (following symlinks)."""
        ...

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory (following symlinks)."""
        ...

    def is_symlink(self, path: Path) -> bool:
        """Check if a path is a symbolic link."""
        ...

    def lstat(self, path: Path) -> os.stat_result:
        """Stat a path without following symlinks.

        Raises:
            FileSystemError: If the path cannot be stat'ed
        """
        ...

    def read_link(self, path: Path) -> Path:
        """Return the target of a symbolic link, as stored in the link.

        Raises:
            FileSystemError: If the link cannot be read
        """
        ...

    def walk(self, root: Path) -> Iterator[Path]:
        """Yield every entry below ``root`` recursively, without following symlinks.

        Raises:
            FileSystemError: If any directory cannot be traversed
        """
        ...

    def mkdir(self, path: Path, parents: bool = True, exist_ok: bool = True) -> None:
        """Create a directory.

        Raises:
            FileSystemError: If directory cannot be created
        """
        ...

    def copy_file(self, src: Path, dst: Path) -> None:
        """Copy a file from source to destination.

        Raises:
            FileSystemError: If file cannot be copied
        """
        ...

    def copy_dir(self, src: Path, dst: Path, content_only: bool = False) -> None:
        """Copy a directory recursively.

        With ``content_only`` the contents of ``src`` are merged into ``dst``.
        Otherwise ``src`` itself is copied: to ``dst`` when it does not exist
        yet, or inside ``dst`` when ``dst`` is an existing directory.

        Raises:
            FileSystemError: If the directory cannot be copied
        """
        ...

    def zip_dir(self, src: Path, zip_path: Path) -> None:
        """Archive a directory, entries rooted at the directory's own name.

        Raises:
            FileSystemError: If the archive cannot be written
        """
        ...
