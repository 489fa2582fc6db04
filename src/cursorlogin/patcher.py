"""Write a fresh Cursor session token into local config.yaml files.

The files are patched as plain text: the quoted placeholder cookie is
swapped for the real token and everything else is left untouched.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable

from .config import DEFAULT_CONFIG_PATHS

PLACEHOLDERS = (
    'cookie: "YOUR_CURSOR_TOKEN_HERE"',
    'cookie: "your_cursor_session_token_here"',
)


def patch_text(text: str, token: str) -> str:
    """Replace every placeholder cookie line in *text* with *token*."""
    replacement = f'cookie: "{token}"'
    for placeholder in PLACEHOLDERS:
        text = text.replace(placeholder, replacement)
    return text


def patch_config_files(
    token: str,
    paths: Iterable[str] = DEFAULT_CONFIG_PATHS,
    base_dir: Path | None = None,
) -> list[Path]:
    """Patch each existing config file and return the ones that changed.

    Relative paths resolve against *base_dir* (default: the working
    directory).  Bytes that are not UTF-8 pass through unchanged.  A path
    that cannot be read or written is reported on stderr and skipped.
    """
    patched: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
        if not path.exists():
            continue

        try:
            original = path.read_bytes().decode("utf-8", "surrogateescape")
        except OSError as e:
            print(f"⚠ Warning: Could not read config file {raw}: {e}", file=sys.stderr)
            continue

        updated = patch_text(original, token)
        if updated == original:
            print(f"No placeholder cookie found in {raw}, left unchanged.")
            continue

        try:
            path.write_bytes(updated.encode("utf-8", "surrogateescape"))
        except OSError as e:
            print(f"⚠ Warning: Could not update config file {raw}: {e}", file=sys.stderr)
            continue

        print(f"Updated token in {raw}")
        patched.append(path)
    return patched
