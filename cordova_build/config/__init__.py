"""Configuration models and settings loading."""

from .build_config import AndroidPackageType, BuildConfiguration, Platform, PrepareMode
from .settings import BuildSettings, load_settings


__all__ = [
    "AndroidPackageType",
    "BuildConfiguration",
    "BuildSettings",
    "Platform",
    "PrepareMode",
    "load_settings",
]
