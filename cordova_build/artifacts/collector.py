"""Artifact collector: discovers fresh build outputs and copies them to the deploy dir."""

import logging
import stat
from collections.abc import Iterable
from pathlib import Path

from cordova_build.adapters.file_adapter import create_file_adapter
from cordova_build.artifacts.models import ArtifactKind, ArtifactRecord
from cordova_build.core.errors import FileSystemError, UnresolvedSymlinkError
from cordova_build.protocols import FileAdapterProtocol


logger = logging.getLogger(__name__)


class ArtifactCollector:
    """Discover and relocate build outputs.

    Discovery is keyed by (root, extension, cutoff): only entries modified at
    or after the cutoff count, which keeps stale artifacts of an earlier build
    in the same workspace out of the result.
    """

    def __init__(self, file_adapter: FileAdapterProtocol | None = None) -> None:
        """Initialize artifact collector.

        Args:
            file_adapter: File operations adapter
        """
        self.file_adapter = file_adapter or create_file_adapter()

    def discover(self, root: Path, extension: str, cutoff: float) -> list[Path]:
        """Find entries below ``root`` with the given extension, not older than ``cutoff``.

        Files and directories both match; the extension comparison is case
        sensitive. The order of the result is unspecified.

        Args:
            root: Directory to search recursively
            extension: Extension without the leading dot (e.g. "ipa", "dSYM")
            cutoff: POSIX timestamp; entries modified strictly before it are skipped

        Returns:
            list[Path]: Matching paths

        Raises:
            FileSystemError: If ``root`` or an entry below it cannot be traversed
        """
        suffix = f".{extension}"
        matches: list[Path] = []

        try:
            for path in self.file_adapter.walk(root):
                if path.suffix != suffix:
                    continue
                info = self.file_adapter.lstat(path)
                if info.st_mtime < cutoff:
                    logger.debug("Skipping stale artifact: %s", path)
                    continue
                matches.append(path)
        except FileSystemError as e:
            e.phase = "discovery"
            raise

        logger.debug("Found %d *%s entries in %s", len(matches), suffix, root)
        return matches

    def discover_records(
        self, root: Path, kind: ArtifactKind, cutoff: float
    ) -> list[ArtifactRecord]:
        """Discover artifacts of one kind and classify them."""
        records = []
        for path in self.discover(root, kind.extension, cutoff):
            info = self.file_adapter.lstat(path)
            records.append(
                ArtifactRecord(
                    path=path,
                    kind=kind,
                    platform=kind.platform,
                    is_directory=stat.S_ISDIR(info.st_mode),
                )
            )
        return records

    def resolve_symlink(self, path: Path) -> Path:
        """Resolve exactly one level of symbolic link.

        Relative link targets are taken relative to the link's directory.

        Raises:
            UnresolvedSymlinkError: If the target is missing or is itself a symlink
        """
        if not self.file_adapter.is_symlink(path):
            return path

        target = self.file_adapter.read_link(path)
        if not target.is_absolute():
            target = path.parent / target

        if not self.file_adapter.is_symlink(target) and not self.file_adapter.exists(
            target
        ):
            raise UnresolvedSymlinkError(
                f"resolved path: {target} does not exist",
                path=path,
                operation="resolve_symlink",
                context={"target": str(target)},
            )

        if self.file_adapter.is_symlink(target):
            raise UnresolvedSymlinkError(
                f"resolved path: {target} is still symlink",
                path=path,
                operation="resolve_symlink",
                context={"target": str(target)},
            )

        logger.debug("Resolved symlink %s -> %s", path, target)
        return target

    def export(
        self,
        paths: Iterable[Path],
        deploy_dir: Path,
        slot: ArtifactKind | str,
        content_only: bool = False,
    ) -> Path | None:
        """Copy artifacts into ``deploy_dir``.

        Each path lands at ``deploy_dir / <name>``. When several paths are given
        for one slot they are all copied, and the last destination is the one
        reported.

        Args:
            paths: Artifacts to export
            deploy_dir: Destination directory
            slot: Slot being filled, used for logging
            content_only: Merge directory contents into the destination instead
                of copying the directory itself

        Returns:
            Path | None: Last destination written, None if ``paths`` was empty

        Raises:
            FileSystemError: On stat or copy failures
            UnresolvedSymlinkError: On dangling or chained symlinks
        """
        slot_name = slot.value if isinstance(slot, ArtifactKind) else slot
        exported: Path | None = None

        for path in paths:
            self.file_adapter.lstat(path)
            source = self.resolve_symlink(path)
            destination = deploy_dir / source.name

            if self.file_adapter.is_dir(source):
                self.file_adapter.copy_dir(source, destination, content_only)
            else:
                self.file_adapter.copy_file(source, destination)

            logger.info("Exported %s: %s -> %s", slot_name, source, destination)
            exported = destination

        return exported


def create_artifact_collector(
    file_adapter: FileAdapterProtocol | None = None,
) -> ArtifactCollector:
    """Create artifact collector instance.

    Args:
        file_adapter: File operations adapter

    Returns:
        ArtifactCollector: New artifact collector instance
    """
    return ArtifactCollector(file_adapter)
