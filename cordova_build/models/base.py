"""Base model for all cordova-build Pydantic models.

This module provides a base model class that enforces consistent serialization
behavior across all cordova-build models.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class CordovaBuildBaseModel(BaseModel):
    """Base model class for all cordova-build Pydantic models.

    Serialization helpers always use:
    - by_alias=True: Use field aliases for serialization
    - mode="json": Use JSON-compatible serialization (e.g., Path -> str)
    """

    model_config = ConfigDict(
        extra="forbid",
        str_strip_whitespace=True,
        use_enum_values=True,
        validate_assignment=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert model to dictionary, excluding fields that were never set."""
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")

    def to_dict_full(self) -> dict[str, Any]:
        """Convert model to dictionary including all fields (even unset ones)."""
        return self.model_dump(by_alias=True, exclude_unset=False, mode="json")
