"""
Module execution entry point.

Allows running with: python -m forest_cli
"""

import sys
from forest_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
