"""Protocol definition for exporting named output values."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class OutputExporterProtocol(Protocol):
    """Records key/value pairs into the surrounding CI environment."""

    def export(self, key: str, value: str) -> None:
        """Export ``value`` under ``key``.

        Raises:
            ExportError: If the value could not be recorded
        """
        ...
