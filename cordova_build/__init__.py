"""cordova-build - Build Cordova projects and export their packages."""

from importlib.metadata import distribution

from .models.results import BuildResult


__version__ = distribution(__package__ or "cordova_build").version

__all__ = [
    "BuildResult",
    "__version__",
]

# Import CLI after setting __version__ to avoid circular imports
from .cli import app, main


__all__ += ["app", "main"]
