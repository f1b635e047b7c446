"""Content digests used as the second-tier key for large files."""

from __future__ import annotations

import hashlib
import pathlib

DEFAULT_ALGORITHM = "sha256"


def check_algorithm(algorithm: str) -> str:
    """Return *algorithm* if hashlib provides it, else raise ValueError."""
    # shake_* digests need an explicit length
    if algorithm not in hashlib.algorithms_available or algorithm.startswith("shake_"):
        raise ValueError(f"Unknown digest algorithm: {algorithm}")
    return algorithm


def hash_bytes(data: bytes, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Compute the hex digest of an in-memory buffer."""
    return hashlib.new(algorithm, data).hexdigest()


def hash_file(path: pathlib.Path, algorithm: str = DEFAULT_ALGORITHM, chunk_size: int = 8192) -> str:
    """Compute the hex digest of a file, reading it in chunks."""
    h = hashlib.new(algorithm)
    with path.open("rb") as f:
        while chunk := f.read(chunk_size):
            h.update(chunk)
    return h.hexdigest()
