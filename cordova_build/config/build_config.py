"""Build configuration value object consumed by the command builder."""

from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ConfigDict, Field

from cordova_build.models.base import CordovaBuildBaseModel


if TYPE_CHECKING:
    from cordova_build.config.settings import BuildSettings


class Platform(str, Enum):
    """Mobile platforms Cordova can build for."""

    IOS = "ios"
    ANDROID = "android"


class AndroidPackageType(str, Enum):
    """Android output package formats."""

    APK = "apk"
    AAB = "aab"


class PrepareMode(str, Enum):
    """How platforms are readied before compiling."""

    PREPARE = "prepare"
    ADD_PLATFORM = "add_platform"
    READD_PLATFORM = "readd_platform"
    SKIP = "skip"


class BuildConfiguration(CordovaBuildBaseModel):
    """Immutable description of one Cordova build invocation.

    Constructed once per run and passed to the pure argument synthesis
    functions in :mod:`cordova_build.cordova.command_builder`.
    """

    # Tokens are passed to the tool verbatim, so whitespace is not stripped
    model_config = ConfigDict(frozen=True, str_strip_whitespace=False)

    tool_name: str = "cordova"
    platforms: tuple[str, ...] = ()
    build_variant: str = ""
    target: str = ""
    build_config_path: str = ""
    android_package_type: AndroidPackageType | None = None
    extra_arguments: tuple[str, ...] = Field(default=())

    @property
    def has_android(self) -> bool:
        return Platform.ANDROID.value in self.platforms

    @property
    def has_ios(self) -> bool:
        return Platform.IOS.value in self.platforms

    @classmethod
    def from_settings(cls, settings: "BuildSettings") -> "BuildConfiguration":
        """Build the configuration from loaded step settings."""
        return cls(
            tool_name=settings.tool_name,
            platforms=tuple(settings.platform),
            build_variant=settings.configuration,
            target=settings.target,
            build_config_path=str(settings.build_config)
            if settings.build_config
            else "",
            android_package_type=settings.android_app_type,
            extra_arguments=tuple(settings.options),
        )


__all__ = [
    "AndroidPackageType",
    "BuildConfiguration",
    "Platform",
    "PrepareMode",
]
