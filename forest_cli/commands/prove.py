"""
CLI Prove Command

Build a forest from a keys file and emit an inclusion proof for one key.

Usage:
    forest prove keys.txt <key> [--stream] [--hex] [--out proof.json] [--json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from pathlib import Path

from core.merkle import MerkleProver
from core.schemas.errors import ForestException
from forest_cli import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, EXIT_VERIFICATION_FAILED
from forest_cli.commands.root import build_forest
from forest_cli.keys import load_keys, parse_key


logger = logging.getLogger(__name__)


def prove_cmd(args: Namespace) -> int:
    """Handle prove command."""
    config = args.runtime_config
    try:
        digest = config.get_hash_function()
        keys = load_keys(args.keys_file, hex_mode=args.hex)
        key = parse_key(args.key, hex_mode=args.hex)
    except ForestException as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    forest = build_forest(keys, args.stream, digest)
    proof = MerkleProver.prove(forest, key)
    if not proof.found:
        print(f"Key not found: {args.key}", file=sys.stderr)
        return EXIT_VERIFICATION_FAILED

    proof_json = proof.model_dump_json(indent=2)
    if args.out:
        out_path = Path(args.out)
        out_path.write_text(proof_json + "\n")
        logger.info(f"Wrote proof to {out_path}")

    if args.json:
        print(proof_json)
    elif not args.out:
        print(f"Root:   {proof.root}")
        print(f"Slot:   {proof.slot} (leaf {proof.leaf_index})")
        for step in proof.steps:
            print(f"  {step.layer:<7} {step.position:<5} {step.sibling}")
    else:
        print(f"Proof written to {args.out} ({len(proof.steps)} steps)")
    return EXIT_SUCCESS
