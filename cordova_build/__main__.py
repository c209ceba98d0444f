"""Allow running cordova-build as ``python -m cordova_build``."""

import sys

from cordova_build.cli import main


if __name__ == "__main__":
    sys.exit(main())
