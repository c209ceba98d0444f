"""Services package for build orchestration."""

from .build_service import BuildService, create_build_service


__all__ = [
    "BuildService",
    "create_build_service",
]
