"""Tests for ArtifactCollector."""

import os
import time
from pathlib import Path
from unittest.mock import Mock

import pytest

from cordova_build.artifacts.collector import ArtifactCollector, create_artifact_collector
from cordova_build.artifacts.models import ArtifactKind
from cordova_build.core.errors import FileSystemError, UnresolvedSymlinkError


@pytest.fixture
def collector() -> ArtifactCollector:
    return create_artifact_collector()


@pytest.fixture
def cutoff() -> float:
    return time.time() - 100


class TestDiscover:
    """Test ArtifactCollector.discover."""

    def test_finds_files_by_extension(self, tmp_path, collector, cutoff):
        """Test files with the extension are found recursively."""
        (tmp_path / "app" / "build" / "outputs").mkdir(parents=True)
        apk = tmp_path / "app" / "build" / "outputs" / "app-debug.apk"
        apk.write_bytes(b"apk")
        (tmp_path / "app" / "build" / "outputs" / "output.json").write_text("{}")

        assert collector.discover(tmp_path, "apk", cutoff) == [apk]

    def test_directories_match(self, tmp_path, collector, cutoff):
        """Test bundle directories match like files."""
        bundle = tmp_path / "device" / "HelloCordova.app"
        (bundle / "www").mkdir(parents=True)

        assert collector.discover(tmp_path, "app", cutoff) == [bundle]

    def test_extension_is_case_sensitive(self, tmp_path, collector, cutoff):
        """Test dSYM does not match a dsym search."""
        (tmp_path / "App.app.dSYM").mkdir()

        assert collector.discover(tmp_path, "dsym", cutoff) == []
        assert collector.discover(tmp_path, "dSYM", cutoff) == [tmp_path / "App.app.dSYM"]

    def test_stale_entries_excluded(self, tmp_path, collector, set_mtime):
        """Test entries modified strictly before the cutoff are skipped."""
        cutoff = 1_700_000_000.0
        stale = tmp_path / "old.ipa"
        stale.write_bytes(b"")
        set_mtime(stale, cutoff - 1)
        exact = tmp_path / "exact.ipa"
        exact.write_bytes(b"")
        set_mtime(exact, cutoff)
        fresh = tmp_path / "fresh.ipa"
        fresh.write_bytes(b"")
        set_mtime(fresh, cutoff + 1)

        found = collector.discover(tmp_path, "ipa", cutoff)

        assert stale not in found
        assert sorted(found) == sorted([exact, fresh])

    def test_stale_directory_still_traversed(self, tmp_path, collector, set_mtime):
        """Test a fresh file inside an old directory is found."""
        cutoff = 1_700_000_000.0
        fresh = tmp_path / "old_dir" / "app.apk"
        fresh.parent.mkdir()
        fresh.write_bytes(b"")
        set_mtime(fresh, cutoff + 10)
        set_mtime(fresh.parent, cutoff - 10)

        assert collector.discover(tmp_path, "apk", cutoff) == [fresh]

    def test_root_itself_not_reported(self, tmp_path, collector, cutoff):
        """Test the search root is not a candidate even if its name matches."""
        root = tmp_path / "Release.app"
        root.mkdir()

        assert collector.discover(root, "app", cutoff) == []

    def test_symlink_uses_link_mtime(self, tmp_path, collector, set_mtime):
        """Test a fresh symlink to an old file is found."""
        cutoff = 1_700_000_000.0
        target = tmp_path / "real" / "app.ipa"
        target.parent.mkdir()
        target.write_bytes(b"")
        set_mtime(target, cutoff - 100)
        link = tmp_path / "link.ipa"
        link.symlink_to(target)
        set_mtime(link, cutoff + 1)

        assert collector.discover(tmp_path, "ipa", cutoff) == [link]

    def test_missing_root_raises(self, tmp_path, collector, cutoff):
        """Test a missing root is a discovery error."""
        with pytest.raises(FileSystemError, match="File operation 'walk' failed") as exc:
            collector.discover(tmp_path / "missing", "apk", cutoff)

        assert exc.value.phase == "discovery"

    def test_walk_error_tagged_with_discovery_phase(self, cutoff):
        """Test adapter errors raised during traversal carry the discovery phase."""
        file_adapter = Mock()
        file_adapter.walk.side_effect = FileSystemError("boom", path="/x", operation="walk")
        collector = ArtifactCollector(file_adapter)

        with pytest.raises(FileSystemError) as exc:
            collector.discover(Path("/x"), "apk", cutoff)

        assert exc.value.phase == "discovery"

    def test_discover_records(self, tmp_path, collector, cutoff):
        """Test records carry kind, platform and directory flag."""
        (tmp_path / "App.app").mkdir()
        (tmp_path / "App.ipa").write_bytes(b"")

        apps = collector.discover_records(tmp_path, ArtifactKind.APP, cutoff)
        ipas = collector.discover_records(tmp_path, ArtifactKind.IPA, cutoff)

        assert len(apps) == 1
        assert apps[0].is_directory is True
        assert apps[0].platform == "ios"
        assert ipas[0].is_directory is False
        assert ipas[0].kind is ArtifactKind.IPA


class TestResolveSymlink:
    """Test ArtifactCollector.resolve_symlink."""

    def test_regular_path_unchanged(self, tmp_path, collector):
        path = tmp_path / "a.apk"
        path.write_bytes(b"")

        assert collector.resolve_symlink(path) == path

    def test_absolute_target(self, tmp_path, collector):
        target = tmp_path / "a.apk"
        target.write_bytes(b"")
        link = tmp_path / "link.apk"
        link.symlink_to(target)

        assert collector.resolve_symlink(link) == target

    def test_relative_target_resolved_against_link_dir(self, tmp_path, collector):
        """Test relative link targets are taken relative to the link's directory."""
        (tmp_path / "out").mkdir()
        (tmp_path / "real").mkdir()
        target = tmp_path / "real" / "a.apk"
        target.write_bytes(b"")
        link = tmp_path / "out" / "a.apk"
        link.symlink_to(Path("..") / "real" / "a.apk")

        resolved = collector.resolve_symlink(link)

        assert resolved.resolve() == target.resolve()

    def test_dangling_symlink_raises(self, tmp_path, collector):
        link = tmp_path / "link.ipa"
        link.symlink_to(tmp_path / "missing.ipa")

        with pytest.raises(UnresolvedSymlinkError, match="does not exist"):
            collector.resolve_symlink(link)

    def test_symlink_chain_raises(self, tmp_path, collector):
        """Test a symlink to a symlink is an error, never followed further."""
        target = tmp_path / "a.ipa"
        target.write_bytes(b"")
        middle = tmp_path / "middle.ipa"
        middle.symlink_to(target)
        link = tmp_path / "link.ipa"
        link.symlink_to(middle)

        with pytest.raises(UnresolvedSymlinkError, match="is still symlink"):
            collector.resolve_symlink(link)


class TestExport:
    """Test ArtifactCollector.export."""

    def test_empty_input_returns_none(self, tmp_path, collector):
        deploy = tmp_path / "deploy"

        assert collector.export([], deploy, ArtifactKind.APK) is None
        assert not deploy.exists()

    def test_copies_file(self, tmp_path, collector):
        source = tmp_path / "build" / "app-release.apk"
        source.parent.mkdir()
        source.write_bytes(b"apk-bytes")
        deploy = tmp_path / "deploy"

        exported = collector.export([source], deploy, ArtifactKind.APK)

        assert exported == deploy / "app-release.apk"
        assert exported.read_bytes() == b"apk-bytes"

    def test_last_wins(self, tmp_path, collector):
        """Test every artifact is copied and the last destination is reported."""
        first = tmp_path / "a" / "first.apk"
        second = tmp_path / "b" / "second.apk"
        for path in (first, second):
            path.parent.mkdir()
            path.write_bytes(path.name.encode())
        deploy = tmp_path / "deploy"

        exported = collector.export([first, second], deploy, ArtifactKind.APK)

        assert exported == deploy / "second.apk"
        assert (deploy / "first.apk").exists()

    def test_symlink_exports_target_name(self, tmp_path, collector):
        """Test a symlink is exported as its target under the target's name."""
        target = tmp_path / "real" / "HelloCordova.ipa"
        target.parent.mkdir()
        target.write_bytes(b"ipa")
        link = tmp_path / "latest.ipa"
        link.symlink_to(target)
        deploy = tmp_path / "deploy"

        exported = collector.export([link], deploy, ArtifactKind.IPA)

        assert exported == deploy / "HelloCordova.ipa"
        assert not exported.is_symlink()
        assert exported.read_bytes() == b"ipa"

    def test_symlink_chain_fails_export(self, tmp_path, collector):
        target = tmp_path / "a.ipa"
        target.write_bytes(b"")
        middle = tmp_path / "m.ipa"
        middle.symlink_to(target)
        link = tmp_path / "l.ipa"
        link.symlink_to(middle)

        with pytest.raises(UnresolvedSymlinkError):
            collector.export([link], tmp_path / "deploy", ArtifactKind.IPA)

    def test_directory_content_only(self, tmp_path, collector):
        """Test content-only copy places the bundle contents under its name."""
        bundle = tmp_path / "build" / "HelloCordova.app"
        (bundle / "www").mkdir(parents=True)
        (bundle / "Info.plist").write_text("plist")
        (bundle / "www" / "index.html").write_text("html")
        deploy = tmp_path / "deploy"

        exported = collector.export([bundle], deploy, ArtifactKind.APP, content_only=True)

        assert exported == deploy / "HelloCordova.app"
        assert (exported / "Info.plist").read_text() == "plist"
        assert (exported / "www" / "index.html").read_text() == "html"

    def test_directory_not_content_only_nests_into_existing(self, tmp_path, collector):
        """Test a plain directory copy into an existing destination nests it."""
        bundle = tmp_path / "build" / "App.app"
        bundle.mkdir(parents=True)
        (bundle / "file").write_text("x")
        deploy = tmp_path / "deploy"
        (deploy / "App.app").mkdir(parents=True)

        collector.export([bundle], deploy, ArtifactKind.APP, content_only=False)

        assert (deploy / "App.app" / "App.app" / "file").exists()

    def test_missing_source_raises(self, tmp_path, collector):
        with pytest.raises(FileSystemError, match="File operation 'lstat' failed"):
            collector.export([tmp_path / "gone.apk"], tmp_path / "deploy", "apk")

    def test_export_uses_file_adapter(self, mock_file_adapter):
        """Test file copies go through the injected adapter."""
        mock_file_adapter.is_symlink.return_value = False
        mock_file_adapter.is_dir.return_value = False
        collector = ArtifactCollector(mock_file_adapter)

        exported = collector.export(
            [Path("/build/a.apk")], Path("/deploy"), ArtifactKind.APK
        )

        assert exported == Path("/deploy/a.apk")
        mock_file_adapter.copy_file.assert_called_once_with(
            Path("/build/a.apk"), Path("/deploy/a.apk")
        )


def test_create_artifact_collector_uses_given_adapter(mock_file_adapter):
    """Test factory wires the file adapter."""
    collector = create_artifact_collector(mock_file_adapter)

    assert isinstance(collector, ArtifactCollector)
    assert collector.file_adapter is mock_file_adapter


def test_os_walk_error_surfaces(tmp_path, collector, cutoff):
    """Test unreadable directories surface as FileSystemError."""
    if os.geteuid() == 0:
        pytest.skip("permission checks do not apply to root")
    locked = tmp_path / "locked"
    locked.mkdir()
    locked.chmod(0)
    try:
        with pytest.raises(FileSystemError):
            collector.discover(tmp_path, "apk", cutoff)
    finally:
        locked.chmod(0o755)
