"""Cordova CLI argument synthesis.

All functions are pure: they read a :class:`BuildConfiguration` and return a
fresh list of tokens, the first of which is the executable name.
"""

from typing import Literal

from cordova_build.config.build_config import AndroidPackageType, BuildConfiguration


ArgumentPlan = list[str]

SEPARATOR = "--"


def build_version_args(cfg: BuildConfiguration) -> ArgumentPlan:
    """Arguments printing the installed Cordova version."""
    return [cfg.tool_name, "-v"]


def build_prepare_args(cfg: BuildConfiguration) -> ArgumentPlan:
    """Arguments for ``cordova prepare``.

    Only the platforms are passed; variant, target and extra arguments apply
    to compilation alone.
    """
    return [cfg.tool_name, "prepare", *cfg.platforms]


def build_platform_args(
    cfg: BuildConfiguration, action: Literal["add", "rm"]
) -> ArgumentPlan:
    """Arguments for ``cordova platform add|rm``."""
    return [cfg.tool_name, "platform", action, *cfg.platforms]


def build_compile_args(cfg: BuildConfiguration) -> ArgumentPlan:
    """Arguments for ``cordova compile``.

    Token order follows Cordova's convention rather than field order::

        cordova compile [--<variant>] [--<target>] <platforms...>
            [--buildConfig <path>] <general options...> [-- <platform options...>]

    Platform-scoped options go after a single ``--`` separator. They are made
    of the synthesized Android ``--packageType`` option (always first) and
    every user token after the first ``--`` in the extra arguments.
    """
    args = [cfg.tool_name, "compile"]

    if cfg.build_variant:
        args.append(SEPARATOR + cfg.build_variant)
    if cfg.target:
        args.append(SEPARATOR + cfg.target)

    args.extend(cfg.platforms)

    if cfg.build_config_path:
        args.extend(["--buildConfig", cfg.build_config_path])

    general_options, platform_options = split_extra_arguments(cfg.extra_arguments)

    package_type_option = android_package_type_option(cfg)
    if package_type_option:
        platform_options.insert(0, package_type_option)

    args.extend(general_options)
    if platform_options:
        args.append(SEPARATOR)
        args.extend(platform_options)

    return args


def split_extra_arguments(
    extra_arguments: tuple[str, ...] | list[str],
) -> tuple[list[str], list[str]]:
    """Split user tokens into general and platform options around the first ``--``.

    Later ``--`` tokens are kept as ordinary platform options.

    Returns:
        tuple: (general options, platform options)
    """
    tokens = list(extra_arguments)
    try:
        separator_index = tokens.index(SEPARATOR)
    except ValueError:
        return tokens, []

    return tokens[:separator_index], tokens[separator_index + 1 :]


def android_package_type_option(cfg: BuildConfiguration) -> str | None:
    """The ``--packageType`` platform option, if one applies."""
    if not cfg.android_package_type or not cfg.has_android:
        return None

    package_type = AndroidPackageType(cfg.android_package_type)
    value = "bundle" if package_type is AndroidPackageType.AAB else package_type.value
    return f"--packageType={value}"


class CommandBuilder:
    """Builds Cordova argument plans for one configuration."""

    def __init__(self, config: BuildConfiguration) -> None:
        self.config = config

    def version_args(self) -> ArgumentPlan:
        return build_version_args(self.config)

    def prepare_args(self) -> ArgumentPlan:
        return build_prepare_args(self.config)

    def platform_args(self, action: Literal["add", "rm"]) -> ArgumentPlan:
        return build_platform_args(self.config, action)

    def compile_args(self) -> ArgumentPlan:
        return build_compile_args(self.config)


def create_command_builder(config: BuildConfiguration) -> CommandBuilder:
    """Create command builder instance.

    Args:
        config: Build configuration the plans are derived from

    Returns:
        CommandBuilder: New command builder instance
    """
    return CommandBuilder(config)


__all__ = [
    "ArgumentPlan",
    "CommandBuilder",
    "SEPARATOR",
    "android_package_type_option",
    "build_compile_args",
    "build_platform_args",
    "build_prepare_args",
    "build_version_args",
    "create_command_builder",
    "split_extra_arguments",
]
