"""File adapter for abstracting file system operations."""

import logging
import os
import shutil
import stat
import zipfile
from collections.abc import Iterator
from pathlib import Path

from cordova_build.core.errors import FileSystemError
from cordova_build.protocols.file_adapter_protocol import FileAdapterProtocol
from cordova_build.utils.error_utils import create_file_error


logger = logging.getLogger(__name__)


class FileSystemAdapter:
    """File system adapter implementation."""

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory."""
        return path.is_dir()

    def is_symlink(self, path: Path) -> bool:
        """Check if a path is a symbolic link."""
        return path.is_symlink()

    def lstat(self, path: Path) -> os.stat_result:
        """Stat a path without following symlinks."""
        try:
            return path.lstat()
        except OSError as e:
            logger.error("Failed to stat %s: %s", path, e)
            raise create_file_error(path, "lstat", e) from e

    def read_link(self, path: Path) -> Path:
        """Return the stored target of a symbolic link."""
        try:
            return Path(os.readlink(path))
        except OSError as e:
            logger.error("Failed to read symlink %s: %s", path, e)
            raise create_file_error(path, "read_link", e) from e

    def walk(self, root: Path) -> Iterator[Path]:
        """Yield every entry below ``root`` recursively."""
        logger.debug("Walking directory: %s", root)

        def on_error(error: OSError) -> None:
            failed_path = error.filename or root
            logger.error("Failed to traverse %s: %s", failed_path, error)
            raise create_file_error(
                failed_path, "walk", error, {"root": str(root)}, phase="discovery"
            ) from error

        if not root.is_dir():
            raise create_file_error(
                root,
                "walk",
                NotADirectoryError("Not a directory"),
                phase="discovery",
            )

        for dirpath, dirnames, filenames in os.walk(
            root, onerror=on_error, followlinks=False
        ):
            base = Path(dirpath)
            for name in dirnames:
                yield base / name
            for name in filenames:
                yield base / name

    def mkdir(self, path: Path, parents: bool = True, exist_ok: bool = True) -> None:
        """Create a directory."""
        try:
            logger.debug("Creating directory: %s", path)
            path.mkdir(parents=parents, exist_ok=exist_ok)
        except OSError as e:
            error = create_file_error(
                path, "mkdir", e, {"parents": parents, "exist_ok": exist_ok}
            )
            logger.error("Error creating directory %s: %s", path, e)
            raise error from e

    def copy_file(self, src: Path, dst: Path) -> None:
        """Copy a file from source to destination."""
        try:
            self.mkdir(dst.parent)

            logger.debug("Copying file: %s -> %s", src, dst)
            shutil.copy2(src, dst)
        except FileSystemError:
            # Let FileSystemError from mkdir pass through
            raise
        except OSError as e:
            error = create_file_error(
                src, "copy_file", e, {"source": str(src), "destination": str(dst)}
            )
            logger.error("Error copying file %s to %s: %s", src, dst, e)
            raise error from e

    def copy_dir(self, src: Path, dst: Path, content_only: bool = False) -> None:
        """Copy a directory recursively."""
        target = dst
        if not content_only and dst.is_dir():
            # Same as `cp -R src dst` when dst already exists
            target = dst / src.name

        try:
            self.mkdir(target.parent)

            logger.debug(
                "Copying directory: %s -> %s (content_only=%s)",
                src,
                target,
                content_only,
            )
            shutil.copytree(src, target, symlinks=True, dirs_exist_ok=True)
        except FileSystemError:
            raise
        except (OSError, shutil.Error) as e:
            error = create_file_error(
                src,
                "copy_dir",
                e,
                {
                    "source": str(src),
                    "destination": str(target),
                    "content_only": content_only,
                },
            )
            logger.error("Error copying directory %s to %s: %s", src, target, e)
            raise error from e

    def zip_dir(self, src: Path, zip_path: Path) -> None:
        """Archive a directory into ``zip_path``.

        Symbolic links inside ``src`` are stored as links, never followed.
        """
        try:
            self.mkdir(zip_path.parent)

            logger.debug("Archiving directory: %s -> %s", src, zip_path)
            with zipfile.ZipFile(zip_path, "w", zipfile.ZIP_DEFLATED) as zip_file:
                zip_file.write(src, src.name)
                for dirpath, dirnames, filenames in os.walk(src, followlinks=False):
                    dirnames.sort()
                    current = Path(dirpath)
                    for name in dirnames + sorted(filenames):
                        entry = current / name
                        arcname = Path(src.name) / entry.relative_to(src)
                        if entry.is_symlink():
                            _write_symlink(zip_file, entry, arcname)
                        else:
                            zip_file.write(entry, arcname)
        except FileSystemError:
            raise
        except (OSError, zipfile.BadZipFile) as e:
            error = create_file_error(
                src, "zip_dir", e, {"source": str(src), "destination": str(zip_path)}
            )
            logger.error("Error archiving %s to %s: %s", src, zip_path, e)
            raise error from e


def _write_symlink(zip_file: zipfile.ZipFile, link: Path, arcname: Path) -> None:
    info = zipfile.ZipInfo(str(arcname))
    info.create_system = 3
    info.external_attr = (stat.S_IFLNK | 0o777) << 16
    zip_file.writestr(info, os.readlink(link))


def create_file_adapter() -> FileAdapterProtocol:
    """Create a file adapter instance.

    Returns:
        FileAdapterProtocol: File system adapter
    """
    return FileSystemAdapter()
