"""Extraction and printing of duplicate groups."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from dupfold.classifier import Empty, Largish, SizeIndex, Smallish, Various

import pathlib
import sys
from typing import TextIO

EMPTY_HEADER = "Empty files"
GROUP_HEADER = "Found a group of duplicates"


@dataclass
class DuplicateGroup:
    """A group of two or more files with identical content."""

    file_size: int
    paths: list[pathlib.Path]
    digest: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.file_size == 0

    @property
    def wasted_bytes(self) -> int:
        """Bytes that would be freed by keeping a single copy."""
        return self.file_size * (len(self.paths) - 1)


@dataclass
class Summary:
    groups: int = 0
    files: int = 0
    wasted_bytes: int = 0


def _group(size: int, paths: set[pathlib.Path], digest: str | None = None) -> DuplicateGroup | None:
    if len(paths) < 2:
        return None
    return DuplicateGroup(file_size=size, paths=sorted(paths), digest=digest)


def iter_groups(index: SizeIndex) -> Iterator[DuplicateGroup]:
    """Yield every group with more than one member.

    Sizes are visited in ascending order, groups within a size in insertion
    order, and paths within a group sorted.  Single large files are skipped
    without inspection.
    """
    for size in sorted(index.buckets):
        state = index.buckets[size]
        if isinstance(state, Empty):
            candidates = [_group(size, state.paths)]
        elif isinstance(state, Smallish):
            candidates = [_group(size, paths) for paths in state.by_content.values()]
        elif isinstance(state, Largish):
            candidates = [
                _group(size, paths, digest)
                for entry in state.by_content.values()
                if isinstance(entry, Various)
                for digest, paths in entry.by_digest.items()
            ]
        else:
            raise TypeError(f"Unexpected classification state: {state!r}")

        for group in candidates:
            if group is not None:
                yield group


def print_report(groups: Iterable[DuplicateGroup], stream: TextIO | None = None) -> None:
    """Print each group as a header line followed by one indented line per path."""
    if stream is None:
        stream = sys.stdout
    for group in groups:
        title = EMPTY_HEADER if group.is_empty else GROUP_HEADER
        print(f"{title}:", file=stream)
        for p in group.paths:
            print(f"  {p}", file=stream)


def summarize(groups: Iterable[DuplicateGroup]) -> Summary:
    """Count groups, grouped files and reclaimable bytes."""
    summary = Summary()
    for group in groups:
        summary.groups += 1
        summary.files += len(group.paths)
        summary.wasted_bytes += group.wasted_bytes
    return summary


def format_size(size_bytes: int) -> str:
    """Format bytes as human-readable string."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 ** 2:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 ** 3:
        return f"{size_bytes / (1024 ** 2):.1f} MB"
    return f"{size_bytes / (1024 ** 3):.1f} GB"
