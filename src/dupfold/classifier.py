"""Progressive duplicate classification: size, then content, then digest.

Every file is folded into a :class:`SizeIndex`.  Files are first bucketed by
size.  Zero-length files share a single group.  Files up to
``small_file_size`` bytes are grouped directly by their raw content.  Larger
files are keyed by raw content as well, but once a second file with the same
content turns up the entry is promoted from :class:`Single` to
:class:`Various`, which tracks members by digest.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from tqdm import tqdm

from dupfold.hasher import DEFAULT_ALGORITHM, check_algorithm, hash_bytes, hash_file

import logging
import pathlib

logger = logging.getLogger(__name__)

DEFAULT_SMALL_FILE_SIZE = 64


@dataclass
class Empty:
    """All zero-length files seen so far."""

    paths: set[pathlib.Path] = field(default_factory=set)


@dataclass
class Smallish:
    """Files at or below the threshold, keyed by full content."""

    by_content: dict[bytes, set[pathlib.Path]] = field(default_factory=dict)


@dataclass
class Single:
    """The only large file seen so far with a given content."""

    path: pathlib.Path


@dataclass
class Various:
    """Two or more large files with the same content, keyed by digest."""

    by_digest: dict[str, set[pathlib.Path]] = field(default_factory=dict)


LargeFileEntry = Single | Various


@dataclass
class Largish:
    """Files above the threshold, keyed by full content."""

    by_content: dict[bytes, LargeFileEntry] = field(default_factory=dict)


ClassificationState = Empty | Smallish | Largish


@dataclass
class SizeIndex:
    """Mapping from file size to the classification state of that size."""

    small_file_size: int = DEFAULT_SMALL_FILE_SIZE
    algorithm: str = DEFAULT_ALGORITHM
    skip_unreadable: bool = False
    buckets: dict[int, ClassificationState] = field(default_factory=lambda: {0: Empty()})
    files: int = 0
    skipped: list[pathlib.Path] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.small_file_size < 0:
            raise ValueError(f"small_file_size must not be negative: {self.small_file_size}")
        check_algorithm(self.algorithm)

    def state_for(self, size: int) -> ClassificationState:
        """Return the state for *size*, creating a fresh one if needed."""
        state = self.buckets.get(size)
        if state is None:
            state = Smallish() if size <= self.small_file_size else Largish()
            logger.debug(f"new {type(state).__name__.lower()} bucket for size {size}")
            self.buckets[size] = state
        return state


def read_content(path: pathlib.Path, size: int) -> bytes:
    """Read up to *size* bytes of *path* in one pass."""
    with path.open("rb") as f:
        return f.read(size)


def group_small(by_content: dict[bytes, set[pathlib.Path]], path: pathlib.Path, size: int) -> None:
    """Add *path* to the set of small files sharing its exact content."""
    content = read_content(path, size)
    by_content.setdefault(content, set()).add(path)


def group_large(
    by_content: dict[bytes, LargeFileEntry],
    path: pathlib.Path,
    size: int,
    algorithm: str = DEFAULT_ALGORITHM,
    *,
    skip_unreadable: bool = False,
) -> pathlib.Path | None:
    """Add *path* to the large-file mapping of its size bucket.

    The first file with a given content is stored as :class:`Single` without
    computing a digest.  A second one promotes the entry to :class:`Various`,
    hashing the earlier file from disk and the new one from the bytes already
    read.

    If the earlier file can no longer be read and *skip_unreadable* is set,
    it is dropped and *path* takes its place as the :class:`Single` entry.
    The dropped path is returned.
    """
    content = read_content(path, size)
    entry = by_content.get(content)

    if entry is None:
        by_content[content] = Single(path)
        return None

    if isinstance(entry, Single):
        previous = entry.path
        try:
            entry = Various({hash_file(previous, algorithm): {previous}})
        except OSError as e:
            if not skip_unreadable:
                raise
            logger.warning(f"Cannot read {previous}: {e.strerror or e}.  Skipped.")
            by_content[content] = Single(path)
            return previous
        logger.debug(f"promoted {previous} to digest tracking ({size} bytes)")

    digest = hash_bytes(content, algorithm)
    entry.by_digest.setdefault(digest, set()).add(path)
    by_content[content] = entry
    return None


def classify(index: SizeIndex, path: pathlib.Path) -> SizeIndex:
    """Fold a single file into *index* and return it."""
    size = path.stat().st_size
    state = index.state_for(size)

    if isinstance(state, Empty):
        state.paths.add(path)
    elif isinstance(state, Smallish):
        group_small(state.by_content, path, size)
    else:
        dropped = group_large(
            state.by_content, path, size, index.algorithm, skip_unreadable=index.skip_unreadable,
        )
        if dropped is not None:
            index.skipped.append(dropped)
            index.files -= 1

    index.files += 1
    return index


def build_index(
    paths: Iterable[pathlib.Path],
    *,
    small_file_size: int = DEFAULT_SMALL_FILE_SIZE,
    algorithm: str = DEFAULT_ALGORITHM,
    skip_unreadable: bool = False,
    progress: bool = False,
) -> SizeIndex:
    """Classify every path into a fresh index.

    An ``OSError`` while reading a file aborts the whole run unless
    *skip_unreadable* is set, in which case the file is logged and left out.
    """
    index = SizeIndex(small_file_size=small_file_size, algorithm=algorithm, skip_unreadable=skip_unreadable)
    for path in tqdm(paths, desc="Classifying", unit="file", disable=not progress):
        try:
            classify(index, path)
        except OSError as e:
            if not skip_unreadable:
                raise
            logger.warning(f"Cannot read {path}: {e.strerror or e}.  Skipped.")
            index.skipped.append(path)

    logger.debug(f"classified {index.files} files into {len(index.buckets)} size bucket(s)")
    return index
