"""Artifact domain models."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import Field

from cordova_build.config.build_config import Platform
from cordova_build.models.base import CordovaBuildBaseModel


class ArtifactKind(str, Enum):
    """Logical output slots a build can fill."""

    IPA = "ipa"
    APP = "app"
    DSYM = "dsym"
    APK = "apk"
    AAB = "aab"

    @property
    def extension(self) -> str:
        """File extension (without dot) as produced by the build tools."""
        return _EXTENSIONS[self]

    @property
    def platform(self) -> Platform:
        return Platform.IOS if self in _IOS_KINDS else Platform.ANDROID

    @property
    def is_bundle(self) -> bool:
        """Bundle kinds are directories, exported content-only and zipped."""
        return self in (ArtifactKind.APP, ArtifactKind.DSYM)

    @property
    def env_key(self) -> str:
        """Key under which the exported deploy path is published."""
        return _ENV_KEYS[self]

    @property
    def archive_env_key(self) -> str | None:
        """Key under which the zipped bundle path is published."""
        return _ARCHIVE_ENV_KEYS.get(self)


_EXTENSIONS = {
    ArtifactKind.IPA: "ipa",
    ArtifactKind.APP: "app",
    ArtifactKind.DSYM: "dSYM",
    ArtifactKind.APK: "apk",
    ArtifactKind.AAB: "aab",
}

_IOS_KINDS = (ArtifactKind.IPA, ArtifactKind.APP, ArtifactKind.DSYM)

_ENV_KEYS = {
    ArtifactKind.IPA: "BITRISE_IPA_PATH",
    ArtifactKind.APP: "BITRISE_APP_DIR_PATH",
    ArtifactKind.DSYM: "BITRISE_DSYM_DIR_PATH",
    ArtifactKind.APK: "BITRISE_APK_PATH",
    ArtifactKind.AAB: "BITRISE_AAB_PATH",
}

_ARCHIVE_ENV_KEYS = {
    ArtifactKind.APP: "BITRISE_APP_PATH",
    ArtifactKind.DSYM: "BITRISE_DSYM_PATH",
}


@dataclass(frozen=True)
class ArtifactRecord:
    """One discovered candidate output of a single discovery pass."""

    path: Path
    kind: ArtifactKind
    platform: Platform
    is_directory: bool


class ExportResult(CordovaBuildBaseModel):
    """Final deploy paths per slot plus the values published for them.

    Slots without an artifact are absent from ``paths``.
    """

    paths: dict[str, Path] = Field(default_factory=dict)
    archives: dict[str, Path] = Field(default_factory=dict)
    exported_values: dict[str, str] = Field(default_factory=dict)

    def get(self, kind: ArtifactKind) -> Path | None:
        return self.paths.get(kind.value)

    def get_archive(self, kind: ArtifactKind) -> Path | None:
        return self.archives.get(kind.value)


@dataclass
class CollectedOutputs:
    """Discovered artifact paths per kind, plus which platform roots existed."""

    ipas: list[Path] = field(default_factory=list)
    apps: list[Path] = field(default_factory=list)
    dsyms: list[Path] = field(default_factory=list)
    apks: list[Path] = field(default_factory=list)
    aabs: list[Path] = field(default_factory=list)
    ios_output_found: bool = False
    android_output_found: bool = False
    records: list[ArtifactRecord] = field(default_factory=list)
    export: ExportResult = field(default_factory=ExportResult)

    def add_records(self, records: list[ArtifactRecord]) -> None:
        self.records.extend(records)
        for record in records:
            self.paths_for(record.kind).append(record.path)

    def paths_for(self, kind: ArtifactKind) -> list[Path]:
        return {
            ArtifactKind.IPA: self.ipas,
            ArtifactKind.APP: self.apps,
            ArtifactKind.DSYM: self.dsyms,
            ArtifactKind.APK: self.apks,
            ArtifactKind.AAB: self.aabs,
        }[kind]


__all__ = [
    "ArtifactKind",
    "ArtifactRecord",
    "CollectedOutputs",
    "ExportResult",
]
