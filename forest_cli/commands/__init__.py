"""
CLI command modules.
"""

from forest_cli.commands import root, prove, verify

__all__ = ["root", "prove", "verify"]
