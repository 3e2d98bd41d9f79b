"""
Entry point for running codestructure as a module.

Usage:
    python -m codestructure analyze ./src
    python -m codestructure --help
"""

import sys
from codestructure.cli import main

if __name__ == "__main__":
    sys.exit(main())
