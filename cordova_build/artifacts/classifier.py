"""Output classification: collect per-platform artifacts and enforce completeness."""

from collections.abc import Sequence
from pathlib import Path

from cordova_build.adapters.file_adapter import create_file_adapter
from cordova_build.adapters.output_exporter import MemoryExporter
from cordova_build.artifacts.collector import ArtifactCollector, create_artifact_collector
from cordova_build.artifacts.layout import android_output_root, ios_output_dirs
from cordova_build.artifacts.models import ArtifactKind, CollectedOutputs
from cordova_build.config.build_config import Platform
from cordova_build.core.errors import MissingArtifactError
from cordova_build.core.logging import get_struct_logger
from cordova_build.protocols import FileAdapterProtocol, OutputExporterProtocol


logger = get_struct_logger(__name__)

IOS_KINDS = (ArtifactKind.IPA, ArtifactKind.APP, ArtifactKind.DSYM)


def _platform_value(platform: Platform | str) -> str:
    return platform.value if isinstance(platform, Platform) else str(platform)


def check_completeness(
    apks: Sequence[Path],
    aabs: Sequence[Path],
    apps: Sequence[Path],
    ipas: Sequence[Path],
    requested_platforms: Sequence[Platform | str],
    target: str,
) -> None:
    """Verify every requested platform produced a usable package.

    Android needs at least one apk or aab. iOS needs an app bundle for
    emulator builds and an ipa for device builds. Platforms that were not
    requested are not checked.

    Raises:
        MissingArtifactError: For the first requested platform without output
    """
    requested = {_platform_value(p) for p in requested_platforms}

    if Platform.ANDROID.value in requested and not apks and not aabs:
        raise MissingArtifactError(
            "no android package produced", context={"platform": "android"}
        )

    if Platform.IOS.value in requested:
        if target == "emulator" and not apps:
            raise MissingArtifactError(
                "no app bundle produced",
                context={"platform": "ios", "target": target},
            )
        if target == "device" and not ipas:
            raise MissingArtifactError(
                "no installable package produced",
                context={"platform": "ios", "target": target},
            )


class OutputClassifier:
    """Collects fresh outputs of a build, exports them and checks completeness."""

    def __init__(
        self,
        collector: ArtifactCollector | None = None,
        file_adapter: FileAdapterProtocol | None = None,
        exporter: OutputExporterProtocol | None = None,
        emit_aab: bool = True,
    ) -> None:
        self.file_adapter = file_adapter or create_file_adapter()
        self.collector = collector or create_artifact_collector(self.file_adapter)
        self.exporter = exporter or MemoryExporter()
        self.emit_aab = emit_aab

    def collect_ios(
        self,
        output_dirs: Sequence[Path],
        deploy_dir: Path,
        cutoff: float,
        outputs: CollectedOutputs,
    ) -> None:
        """Discover and export ipa, app and dSYM outputs below ``output_dirs``."""
        for kind in IOS_KINDS:
            for output_dir in output_dirs:
                outputs.add_records(
                    self.collector.discover_records(output_dir, kind, cutoff)
                )
            self._export_kind(kind, outputs.paths_for(kind), deploy_dir, outputs)

    def collect_android(
        self,
        output_root: Path,
        deploy_dir: Path,
        cutoff: float,
        outputs: CollectedOutputs,
    ) -> None:
        """Discover and export apk (and, if enabled, aab) outputs."""
        kinds = [ArtifactKind.APK]
        if self.emit_aab:
            kinds.append(ArtifactKind.AAB)

        for kind in kinds:
            outputs.add_records(
                self.collector.discover_records(output_root, kind, cutoff)
            )
            self._export_kind(kind, outputs.paths_for(kind), deploy_dir, outputs)

    def classify(
        self,
        workdir: Path,
        deploy_dir: Path,
        cutoff: float,
        platforms: Sequence[Platform | str],
        target: str,
        configuration: str,
        ios_platform_version: str | None = None,
    ) -> CollectedOutputs:
        """Collect the outputs of a build that started at ``cutoff``.

        Args:
            workdir: Cordova project root
            deploy_dir: Directory receiving exported artifacts
            cutoff: Build start timestamp
            platforms: Requested platforms
            target: "device" or "emulator"
            configuration: Build configuration, used for the Xcode output layout
            ios_platform_version: cordova-ios version, narrows the iOS layout

        Returns:
            CollectedOutputs: Discovered paths and export results

        Raises:
            MissingArtifactError: If no platform output root exists or a
                requested platform produced nothing usable
        """
        outputs = CollectedOutputs()
        self.file_adapter.mkdir(deploy_dir)

        ios_dirs = [
            d
            for d in ios_output_dirs(workdir, target, configuration, ios_platform_version)
            if self.file_adapter.is_dir(d)
        ]
        if ios_dirs:
            outputs.ios_output_found = True
            logger.info("collecting_ios_outputs", dirs=[str(d) for d in ios_dirs])
            self.collect_ios(ios_dirs, deploy_dir, cutoff, outputs)

        android_root = android_output_root(workdir)
        if self.file_adapter.is_dir(android_root):
            outputs.android_output_found = True
            logger.info("collecting_android_outputs", root=str(android_root))
            self.collect_android(android_root, deploy_dir, cutoff, outputs)

        logger.debug(
            "outputs_discovered",
            files=[str(r.path) for r in outputs.records if not r.is_directory],
            directories=[str(r.path) for r in outputs.records if r.is_directory],
        )

        if not outputs.ios_output_found and not outputs.android_output_found:
            raise MissingArtifactError(
                "no output directory produced for any platform",
                context={"workdir": str(workdir)},
            )

        check_completeness(
            outputs.apks, outputs.aabs, outputs.apps, outputs.ipas, platforms, target
        )
        return outputs

    def _export_kind(
        self,
        kind: ArtifactKind,
        paths: list[Path],
        deploy_dir: Path,
        outputs: CollectedOutputs,
    ) -> None:
        if not paths:
            logger.debug("no_outputs_found", kind=kind.value)
            return

        exported = self.collector.export(
            paths, deploy_dir, kind, content_only=kind.is_bundle
        )
        if exported is None:
            return

        outputs.export.paths[kind.value] = exported
        self._publish(kind.env_key, exported, outputs)

        archive_key = kind.archive_env_key
        if kind.is_bundle and archive_key:
            archive = Path(f"{exported}.zip")
            self.file_adapter.zip_dir(exported, archive)
            outputs.export.archives[kind.value] = archive
            self._publish(archive_key, archive, outputs)

    def _publish(self, key: str, path: Path, outputs: CollectedOutputs) -> None:
        self.exporter.export(key, str(path))
        outputs.export.exported_values[key] = str(path)
        logger.info("output_exported", key=key, value=str(path))


def create_output_classifier(
    collector: ArtifactCollector | None = None,
    file_adapter: FileAdapterProtocol | None = None,
    exporter: OutputExporterProtocol | None = None,
    emit_aab: bool = True,
) -> OutputClassifier:
    """Create output classifier instance."""
    return OutputClassifier(collector, file_adapter, exporter, emit_aab)
