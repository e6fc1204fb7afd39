"""
Key file loading for CLI commands.

A keys file holds one key per line. Lines are UTF-8 text by default or
hex strings (with or without 0x) when hex mode is on. Blank lines are
skipped.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from core.schemas.errors import ErrorCodes, ForestException


class KeyFileError(ForestException):
    """Raised when a keys file cannot be read or parsed."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if path:
            full_details["path"] = path
        super().__init__(
            message=message,
            code=ErrorCodes.KEY_FILE_ERROR,
            details=full_details,
            retryable=False,
        )


def parse_key(text: str, hex_mode: bool = False) -> bytes:
    """Convert one textual key to bytes."""
    if not hex_mode:
        return text.encode("utf-8")
    content = text[2:] if text.startswith("0x") else text
    try:
        return bytes.fromhex(content)
    except ValueError as e:
        raise KeyFileError(f"Invalid hex key {text!r}: {e}") from e


def load_keys(path: str | Path, hex_mode: bool = False) -> list[bytes]:
    """Read keys from path in file order."""
    path = Path(path)
    if not path.exists():
        raise KeyFileError(f"Keys file not found: {path}", path=str(path))

    keys: list[bytes] = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.rstrip("\r\n")
            if not line.strip():
                continue
            keys.append(parse_key(line.strip() if hex_mode else line, hex_mode))
    return keys
