"""Allow running tagcheck as ``python -m tagcheck``."""

import sys

from tagcheck.cli import main

if __name__ == "__main__":
    sys.exit(main())
