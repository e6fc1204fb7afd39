"""
Merkle Forest CLI

Command-line interface for building forests, proving and verifying keys.

Usage:
    python -m forest_cli root keys.txt
    python -m forest_cli prove keys.txt <key> --out proof.json
    python -m forest_cli verify proof.json --root 0x...
    python -m forest_cli config --init
"""

__version__ = "0.1.0"

# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2
