"""Shared fixtures for dupfold tests."""

import logging
import pathlib

import pytest


@pytest.fixture
def tmp_source(tmp_path: pathlib.Path) -> pathlib.Path:
    """Create a temporary source directory."""
    source = tmp_path / "source"
    source.mkdir()
    return source


@pytest.fixture
def large_content() -> bytes:
    """Content well above the default small-file threshold."""
    return bytes(range(256)) * 4


@pytest.fixture
def make_file(tmp_source: pathlib.Path):
    """Return a helper writing *content* to a file below the source dir."""

    def _make(name: str, content: bytes) -> pathlib.Path:
        p = tmp_source / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(content)
        return p

    return _make


@pytest.fixture(autouse=True)
def reset_dupfold_logger():
    """Drop handlers installed by configure_logging() during a test."""
    yield
    logger = logging.getLogger("dupfold")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
