"""Recursive discovery of candidate files."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import fnmatch
import logging
import pathlib

logger = logging.getLogger(__name__)


def _matches_any(name: str, patterns: Iterable[str]) -> bool:
    """Check if name matches any of the glob patterns (case-insensitive)."""
    name_lower = name.lower()
    return any(fnmatch.fnmatch(name_lower, p.lower()) for p in patterns)


def walk(
    directory: pathlib.Path,
    *,
    exclude: Iterable[str] = (),
    exclude_dir: Iterable[str] = (),
) -> Iterator[pathlib.Path]:
    """Yield every regular file below *directory*.

    Files of a directory come first (sorted by name), then each subdirectory
    is descended into in turn.  A directory that cannot be listed, or whose entries
    cannot be inspected, is logged and skipped as a whole.
    """
    exclude = list(exclude)
    exclude_dir = list(exclude_dir)
    files: list[pathlib.Path] = []
    dirs: list[pathlib.Path] = []
    try:
        for entry in sorted(directory.iterdir()):
            if entry.is_dir():
                if not _matches_any(entry.name, exclude_dir):
                    dirs.append(entry)
            elif entry.is_file():
                if not _matches_any(entry.name, exclude):
                    files.append(entry)
    except OSError:
        logger.warning(f"Directory {directory} not found.  Skipped.")
        return

    yield from files
    for d in dirs:
        yield from walk(d, exclude=exclude, exclude_dir=exclude_dir)


def walk_all(
    directories: Iterable[pathlib.Path],
    *,
    exclude: Iterable[str] = (),
    exclude_dir: Iterable[str] = (),
) -> Iterator[pathlib.Path]:
    """Walk each directory in order, chaining the results."""
    exclude = list(exclude)
    exclude_dir = list(exclude_dir)
    for directory in directories:
        logger.info(f"Scanning {directory} ...")
        yield from walk(directory, exclude=exclude, exclude_dir=exclude_dir)
