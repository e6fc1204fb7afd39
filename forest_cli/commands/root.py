"""
CLI Root Command

Build a forest from a keys file and print its root and slot layout.

Usage:
    forest root keys.txt [--stream] [--hex] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from typing import Sequence

from core.crypto.hashing import HashFunction
from core.merkle import MerkleForest, MerkleProver
from core.schemas.errors import ForestException
from forest_cli import EXIT_RUNTIME_ERROR, EXIT_SUCCESS
from forest_cli.keys import load_keys


logger = logging.getLogger(__name__)


def build_forest(keys: Sequence[bytes], stream: bool, digest: HashFunction) -> MerkleForest:
    """Build a forest with the batch layout, or the append layout when stream is set."""
    if stream:
        return MerkleForest.from_stream(keys, digest=digest)
    return MerkleForest(keys, digest=digest)


def root_cmd(args: Namespace) -> int:
    """Handle root command."""
    config = args.runtime_config
    try:
        digest = config.get_hash_function()
        keys = load_keys(args.keys_file, hex_mode=args.hex)
    except ForestException as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    logger.info(f"Building forest over {len(keys)} keys with {config.hash.algorithm}")
    forest = build_forest(keys, args.stream, digest)
    summary = MerkleProver.summarize(forest)

    if args.json:
        print(json.dumps(summary.model_dump(), indent=2))
        return EXIT_SUCCESS

    print(f"Root:       {summary.root}")
    print(f"Leaves:     {summary.leaf_count}")
    print(f"Complete:   {'yes' if summary.is_complete else 'no'}")
    print(f"Hash:       {summary.hash_algorithm}")
    for slot in summary.slots:
        if slot.root is None:
            print(f"  slot {slot.index}: empty")
        else:
            print(f"  slot {slot.index}: {slot.size} leaves, root {slot.root}")
    return EXIT_SUCCESS
