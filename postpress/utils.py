"""Utility functions for postpress.

This module contains the filesystem and path helpers used by the builder.

Key functions:
    output_filename: Map a post file name to its HTML file name.
    clearable_entries: List output entries that a rebuild should remove.
    remove_path: Delete a file or directory tree.
    write_file: Write text to a file, creating parent directories.
"""

from __future__ import annotations

import shutil
from pathlib import Path


def output_filename(name: str) -> str:
    """Map a source file name to the name of its rendered page.

    Args:
        name: Source file name.

    Returns:
        File name with the markdown extension replaced by ``.html``.

    Examples:
        >>> output_filename("2020-01-01-title.md")
        '2020-01-01-title.html'
    """
    return Path(name).with_suffix(".html").name


def is_hidden(path: Path) -> bool:
    """Check if a path names a hidden entry (leading dot).

    Args:
        path: Path to check.

    Returns:
        True if the final component starts with a dot.
    """
    return path.name.startswith(".")


def clearable_entries(path: Path) -> list[Path]:
    """List the top-level entries of a directory that may be deleted.

    Hidden entries such as ``.git`` are kept. A directory that cannot be
    listed, for instance because it does not exist, has nothing to clear.

    Args:
        path: Output directory.

    Returns:
        Paths of the non-hidden entries, sorted by name.
    """
    try:
        entries = list(path.iterdir())
    except OSError:
        return []
    return sorted((p for p in entries if not is_hidden(p)), key=lambda p: p.name)


def remove_path(path: Path) -> None:
    """Delete a file, symlink or directory tree.

    Args:
        path: Entry to remove.
    """
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def write_file(path: Path, text: str) -> None:
    """Write UTF-8 text to a file, creating parent directories.

    Args:
        path: Target file.
        text: Content to write.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
