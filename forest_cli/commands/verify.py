"""
CLI Verify Command

Verify a saved ForestProof offline, optionally against a trusted root
and a claimed key.

Usage:
    forest verify proof.json [--root 0x...] [--key KEY] [--hex] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, asdict
from pathlib import Path

from pydantic import ValidationError

from core.crypto.hashing import from_hex
from core.merkle import MerkleVerifier
from core.schemas.errors import ForestException
from core.schemas.proof import ForestProof
from forest_cli import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, EXIT_VERIFICATION_FAILED
from forest_cli.keys import KeyFileError, parse_key


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    key_hash: str = ""
    root: str = ""
    found: bool = False
    ok: bool = False
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict:
        d = asdict(self)
        if self.error is None:
            del d["error"]
        if self.error_code is None:
            del d["error_code"]
        return d


def load_proof(path: Path) -> ForestProof:
    """Load and validate a ForestProof JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Proof file not found: {path}")
    return ForestProof.model_validate_json(path.read_text())


def verify_cmd(args: Namespace) -> int:
    """Handle verify command."""
    proof_path = Path(args.proof_file)
    try:
        proof = load_proof(proof_path)
        root = from_hex(args.root) if args.root else None
        key = parse_key(args.key, hex_mode=args.hex) if args.key is not None else None
    except (FileNotFoundError, ValidationError, ValueError, KeyFileError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = VerifySummary(
        proof_path=str(proof_path),
        key_hash=proof.key_hash,
        root=args.root or proof.root,
        found=proof.found,
    )

    try:
        if key is not None:
            MerkleVerifier.require_key(key, proof)
        MerkleVerifier.require_valid(proof, root=root)
        summary.ok = True
    except ForestException as e:
        logger.debug(f"Verification failed: {e!r}")
        error = e.to_error_model()
        summary.error = error.message
        summary.error_code = error.code

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    elif summary.ok:
        print(f"OK: proof for {summary.key_hash} reproduces {summary.root}")
    else:
        print(f"FAILED: {summary.error}")

    return EXIT_SUCCESS if summary.ok else EXIT_VERIFICATION_FAILED
