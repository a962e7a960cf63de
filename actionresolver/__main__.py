"""Allow ``python -m actionresolver``."""

import sys

from actionresolver.cli import main

if __name__ == "__main__":
    sys.exit(main() or 0)
