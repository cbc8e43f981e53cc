"""File-system side of schema discovery.

The extractor never touches the disk; these helpers find collection files
and turn each into the ``(raw_text, source_name)`` pair it consumes.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


def discover_schema_documents(
    directory: str | Path,
    extensions: Sequence[str] = (".ts",),
    exclude: Sequence[str] = ("index.ts",),
) -> list[Path]:
    """Return collection files directly inside *directory*, sorted by name.

    Returns an empty list when the directory does not exist.
    """
    root = Path(directory)
    if not root.is_dir():
        return []
    return sorted(
        p for p in root.iterdir()
        if p.is_file() and p.suffix in extensions and p.name not in exclude
    )


def read_schema_document(path: str | Path) -> tuple[str, str]:
    """Read one collection file as ``(raw_text, source_name)``.

    Undecodable bytes are replaced rather than raising.
    """
    file_path = Path(path)
    text = file_path.read_text(encoding="utf-8", errors="replace")
    return text, file_path.name

