"""Entry point for running the linter as a module: python -m semantic_linter"""

import sys

from semantic_linter.cli import main

if __name__ == "__main__":
    sys.exit(main())
