"""Step settings loaded from environment variables and CLI flags.

Environment variable names match the step inputs (``platform``,
``configuration``, ``target``, ...) and are case-insensitive. Explicit
keyword arguments (CLI flags) take precedence over the environment.
"""

import shlex
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import AliasChoices, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from cordova_build.config.build_config import AndroidPackageType, Platform, PrepareMode
from cordova_build.core.errors import ConfigError
from cordova_build.core.logging import get_struct_logger


logger = get_struct_logger(__name__)

VALID_TARGETS = ("device", "emulator")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class BuildSettings(BaseSettings):
    """Settings for one cordova-build run."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
        populate_by_name=True,
        validate_default=True,
    )

    platform: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: [Platform.IOS.value, Platform.ANDROID.value],
        description="Comma separated platforms to build (ios, android)",
    )
    configuration: str = Field(description="Build variant, e.g. debug or release")
    target: str = Field(description="Deployment target: device or emulator")
    build_config: Path | None = Field(
        default=None, description="Path to a Cordova build.json file"
    )
    android_app_type: AndroidPackageType | None = Field(
        default=None, description="Android package type: apk or aab"
    )
    emit_aab: bool = Field(
        default=True, description="Collect and export Android App Bundles"
    )

    run_prepare: bool = Field(
        default=True, description="Ready the platforms before compiling"
    )
    add_platform: bool = Field(
        default=False, description="Use 'platform add' instead of 'prepare'"
    )
    readd_platform: bool = Field(
        default=False, description="Remove platforms before adding them again"
    )

    tool_name: str = Field(default="cordova", description="Cordova executable")
    cordova_version: str | None = Field(
        default=None, description="Cordova version to install before building"
    )
    ios_platform_version: str | None = Field(
        default=None,
        description="cordova-ios version, selects the matching iOS output layout",
    )

    workdir: Path = Field(
        default_factory=Path.cwd, description="Root directory of the Cordova project"
    )
    options: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Extra compile arguments (shell syntax), '--' starts platform options",
    )
    deploy_dir: Path = Field(
        default_factory=lambda: Path.cwd() / "deploy",
        validation_alias=AliasChoices("deploy_dir", "BITRISE_DEPLOY_DIR"),
        description="Directory receiving exported artifacts",
    )

    command_timeout: float | None = Field(
        default=None, gt=0, description="Seconds before a Cordova command is killed"
    )
    output_exporter: Literal["envman", "env_file", "none"] = Field(
        default="envman", description="How output paths are exported"
    )
    output_env_file: Path | None = Field(
        default=None, description="File receiving KEY=VALUE lines (env_file exporter)"
    )
    log_level: str = "INFO"

    @field_validator("platform", mode="before")
    @classmethod
    def decode_platforms(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if isinstance(v, str):
            items = [item.strip() for item in v.split(",")]
        else:
            items = [str(item).strip() for item in v]
        platforms = [item.lower() for item in items if item]

        valid = {p.value for p in Platform}
        invalid = [p for p in platforms if p not in valid]
        if invalid:
            raise ValueError(
                f"Unsupported platform(s) {', '.join(invalid)}; "
                f"expected a subset of {', '.join(sorted(valid))}"
            )
        return platforms

    @field_validator("options", mode="before")
    @classmethod
    def split_options(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if isinstance(v, str):
            try:
                return shlex.split(v)
            except ValueError as e:
                raise ValueError(f"Failed to shell split options ({v}): {e}") from e
        return [str(item) for item in v]

    @field_validator("configuration")
    @classmethod
    def validate_configuration(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("configuration must not be empty")
        return v.strip()

    @field_validator("target")
    @classmethod
    def validate_target(cls, v: str) -> str:
        target = v.strip().lower()
        if target not in VALID_TARGETS:
            raise ValueError(f"target must be one of {', '.join(VALID_TARGETS)}")
        return target

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper_v = v.strip().upper()
        if upper_v not in VALID_LOG_LEVELS:
            raise ValueError(f"Log level must be one of {list(VALID_LOG_LEVELS)}")
        return upper_v

    @field_validator("workdir", mode="after")
    @classmethod
    def validate_workdir(cls, v: Path) -> Path:
        workdir = v.expanduser().resolve()
        if not workdir.is_dir():
            raise ValueError(f"workdir is not a directory: {workdir}")
        return workdir

    @field_validator("deploy_dir", "output_env_file", "build_config", mode="after")
    @classmethod
    def expand_path(cls, v: Path | None) -> Path | None:
        return v.expanduser() if v is not None else None

    @model_validator(mode="after")
    def validate_exporter(self) -> "BuildSettings":
        if self.output_exporter == "env_file" and self.output_env_file is None:
            raise ValueError("output_env_file is required for the env_file exporter")
        return self

    @property
    def prepare_mode(self) -> PrepareMode:
        """Preparation strategy derived from the prepare/add/readd flags."""
        if not self.run_prepare:
            return PrepareMode.SKIP
        if self.add_platform:
            if self.readd_platform:
                return PrepareMode.READD_PLATFORM
            return PrepareMode.ADD_PLATFORM
        return PrepareMode.PREPARE

    def summary(self) -> dict[str, Any]:
        """Settings as a flat dictionary for logging."""
        return {
            "platform": ",".join(self.platform),
            "configuration": self.configuration,
            "target": self.target,
            "build_config": str(self.build_config) if self.build_config else "",
            "android_app_type": self.android_app_type.value
            if self.android_app_type
            else "",
            "prepare_mode": self.prepare_mode.value,
            "cordova_version": self.cordova_version or "",
            "workdir": str(self.workdir),
            "options": " ".join(shlex.quote(o) for o in self.options),
            "deploy_dir": str(self.deploy_dir),
        }


def load_settings(**overrides: Any) -> BuildSettings:
    """Load settings from the environment, applying explicit overrides.

    Overrides whose value is None are ignored so unset CLI flags fall back to
    the environment.

    Raises:
        ConfigError: If a value is missing or invalid
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        settings = BuildSettings(**values)
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(part) for part in err['loc']) or 'settings'}: {err['msg']}"
            for err in e.errors()
        ]
        raise ConfigError(
            "Invalid configuration: " + "; ".join(problems),
            context={"errors": problems},
        ) from e

    logger.debug("settings_loaded", **settings.summary())
    return settings


__all__ = ["BuildSettings", "load_settings"]
