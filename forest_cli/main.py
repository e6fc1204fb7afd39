"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m forest_cli root <keys_file> [--stream] [--hex] [--json]
    python -m forest_cli prove <keys_file> <key> [--stream] [--hex] [--out PATH] [--json]
    python -m forest_cli verify <proof_file> [--root HEX] [--key KEY] [--hex] [--json]
    python -m forest_cli config --init

Environment Variables:
    FOREST_HASH_ALGORITHM       Hash algorithm (default: sha256)
    FOREST_LOG_LEVEL            Log level (default: INFO)
    FOREST_LOG_FILE             Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from core.schemas.errors import ForestException
from forest_cli import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    __version__,
)
from forest_cli.commands import root, prove, verify
from forest_cli.config import load_config, get_default_config_template


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_keys_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "keys_file",
        type=str,
        help="File with one key per line",
    )
    parser.add_argument(
        "--stream",
        action="store_true",
        default=False,
        help="Lay keys out as if appended one at a time (default: batch layout)",
    )
    parser.add_argument(
        "--hex",
        action="store_true",
        default=False,
        help="Keys are hex strings instead of UTF-8 text",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="forest",
        description="Merkle forest CLI - Build incremental Merkle roots, prove and verify keys.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./forest.json or ~/.config/merkle-forest/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the forest root of a keys file",
        description="Build a forest from a keys file and print its root and slots.",
    )
    _add_keys_arguments(root_parser)
    root_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    root_parser.set_defaults(func=root.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Produce an inclusion proof for a key",
        description="Build a forest from a keys file and emit a proof for one key.",
    )
    _add_keys_arguments(prove_parser)
    prove_parser.add_argument(
        "key",
        type=str,
        help="Key to prove (hex when --hex is given)",
    )
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof JSON to this path",
    )
    prove_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print the proof JSON",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a saved proof offline",
        description="Replay a proof file and compare with its root or a trusted one.",
    )
    verify_parser.add_argument(
        "proof_file",
        type=str,
        help="Path to a proof JSON file",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Trusted 0x-prefixed root (default: the root stored in the proof)",
    )
    verify_parser.add_argument(
        "--key",
        type=str,
        default=None,
        help="Also check the proof is for this key",
    )
    verify_parser.add_argument(
        "--hex",
        action="store_true",
        default=False,
        help="--key is a hex string",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="forest.json",
        help="Path for config file (default: forest.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (FOREST_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: forest config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ForestException) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(args.log_level or config.logging.level, config.logging.file)
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        logging.getLogger(__name__).exception("Unhandled error")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
