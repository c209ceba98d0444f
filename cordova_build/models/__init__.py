"""Shared model base classes and results."""

from .base import CordovaBuildBaseModel
from .results import BuildResult


__all__ = ["BuildResult", "CordovaBuildBaseModel"]
