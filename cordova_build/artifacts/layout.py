"""Where Cordova places build outputs inside a project.

cordova-ios 7 moved iOS outputs from ``platforms/ios/build/<target>`` to
Xcode's ``<Configuration>-<sdk>`` directory names, so depending on the
platform version one or the other layout is produced.
"""

import re
from pathlib import Path


IOS_LAYOUT_CHANGE_MAJOR = 7

_SDK_BY_TARGET = {
    "device": "iphoneos",
    "emulator": "iphonesimulator",
}


def ios_build_root(workdir: Path) -> Path:
    return workdir / "platforms" / "ios" / "build"


def android_output_root(workdir: Path) -> Path:
    """Root of Android outputs.

    Depending on the cordova-android version packages land in e.g.
    ``platforms/android/app/build/outputs/apk/debug/app-debug.apk`` or
    ``platforms/android/build/outputs/apk/debug/app-debug.apk``; the whole
    platform directory is searched.
    """
    return workdir / "platforms" / "android"


def xcode_configuration_dir(target: str, configuration: str) -> str:
    """Xcode style output directory name, e.g. ``Release-iphoneos``."""
    sdk = _SDK_BY_TARGET.get(target, "iphoneos")
    return f"{configuration.capitalize()}-{sdk}"


def major_version(version: str) -> int | None:
    """Major component of a version string such as ``7.0.0`` or ``v6.3.0``."""
    match = re.match(r"^\s*v?(\d+)", version)
    return int(match.group(1)) if match else None


def ios_target_path_component(
    target: str, configuration: str, cordova_ios_version: str
) -> str:
    """Directory below ``platforms/ios/build`` used by the given cordova-ios version."""
    major = major_version(cordova_ios_version)
    if major is not None and major >= IOS_LAYOUT_CHANGE_MAJOR:
        return xcode_configuration_dir(target, configuration)
    return target


def ios_output_candidate_dirs(
    workdir: Path, target: str, configuration: str
) -> list[Path]:
    """Every directory iOS outputs may be found in, legacy layout first."""
    build_root = ios_build_root(workdir)
    return [
        build_root / target,
        build_root / xcode_configuration_dir(target, configuration),
    ]


def ios_output_dirs(
    workdir: Path,
    target: str,
    configuration: str,
    cordova_ios_version: str | None = None,
) -> list[Path]:
    """iOS output directories to search.

    A known cordova-ios version selects its single layout; otherwise all
    candidates are returned.
    """
    if cordova_ios_version:
        component = ios_target_path_component(target, configuration, cordova_ios_version)
        return [ios_build_root(workdir) / component]
    return ios_output_candidate_dirs(workdir, target, configuration)
