"""Result model of a build run."""

from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator

from cordova_build.core.logging import get_struct_logger
from cordova_build.models.base import CordovaBuildBaseModel


logger = get_struct_logger(__name__)


class BuildResult(CordovaBuildBaseModel):
    """Outcome of a successful build run.

    Failed runs raise instead of returning a result.
    """

    success: bool = True
    timestamp: datetime = Field(default_factory=datetime.now)
    messages: list[str] = Field(default_factory=list)

    cordova_version: str = ""
    platforms: list[str] = Field(default_factory=list)
    compile_started_at: float | None = None
    build_time_seconds: float | None = None

    artifacts: dict[str, Path] = Field(default_factory=dict)
    archives: dict[str, Path] = Field(default_factory=dict)
    exported_values: dict[str, str] = Field(default_factory=dict)

    @field_validator("build_time_seconds")
    @classmethod
    def validate_build_time(cls, v: float | None) -> float | None:
        if v is not None and v < 0:
            raise ValueError("Build time must be a non-negative number")
        return v

    def add_message(self, message: str) -> None:
        """Add an informational message."""
        self.messages.append(message)
        logger.info("result_message_added", message=message)

    def get_summary(self) -> dict[str, Any]:
        """Get a summary of the result."""
        return {
            "success": self.success,
            "timestamp": self.timestamp.isoformat(),
            "cordova_version": self.cordova_version,
            "platforms": ",".join(self.platforms),
            "build_time_seconds": self.build_time_seconds,
            "exported": dict(self.exported_values),
        }


__all__ = ["BuildResult"]
