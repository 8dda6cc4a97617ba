"""Media file discovery under a directory tree."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from mpv_probe.config.models import DEFAULT_EXTENSIONS

logger = logging.getLogger(__name__)


def normalize_extensions(extensions: Iterable[str]) -> frozenset[str]:
    """Normalize extensions to lowercase with a leading dot.

    Example:
        normalize_extensions(["MP4", ".mkv"]) == {".mp4", ".mkv"}
    """
    result = set()
    for ext in extensions:
        ext = ext.strip().lower().lstrip(".")
        if ext:
            result.add(f".{ext}")
    return frozenset(result)


def _is_hidden(path: Path, root: Path) -> bool:
    return any(part.startswith(".") for part in path.relative_to(root).parts[:-1])


def discover_media_files(
    root: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS
) -> list[Path]:
    """Find media files below root.

    Matching is case-insensitive on the file extension. Files inside hidden
    directories are skipped.

    Args:
        root: Directory to search recursively.
        extensions: Extensions to accept, with or without a leading dot.

    Returns:
        Sorted list of matching files.

    Raises:
        NotADirectoryError: If root is not a directory.
    """
    root = Path(root).expanduser()
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    wanted = normalize_extensions(extensions)
    files = [
        path
        for path in root.rglob("*")
        if path.suffix.lower() in wanted
        and path.is_file()
        and not _is_hidden(path, root)
    ]

    logger.debug("Discovered %d media files under %s", len(files), root)
    return sorted(files)
