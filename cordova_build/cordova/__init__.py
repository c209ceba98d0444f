"""Cordova CLI argument synthesis."""

from .command_builder import (
    ArgumentPlan,
    CommandBuilder,
    build_compile_args,
    build_platform_args,
    build_prepare_args,
    build_version_args,
    create_command_builder,
    split_extra_arguments,
)


__all__ = [
    "ArgumentPlan",
    "CommandBuilder",
    "build_compile_args",
    "build_platform_args",
    "build_prepare_args",
    "build_version_args",
    "create_command_builder",
    "split_extra_arguments",
]
