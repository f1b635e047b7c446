"""Logging setup for the dupfold command line."""

from __future__ import annotations

from typing import TextIO

import logging
import sys

_PLAIN = "%(message)s"
_TAGGED = "%(levelname)s: %(message)s"


def configure_logging(
    verbose: bool = False,
    quiet: bool = False,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Attach a single handler to the ``dupfold`` logger and return it.

    Messages go to *stream* (stderr by default) so the report on stdout stays
    clean.  Normal runs print bare INFO messages; ``verbose`` and ``quiet``
    tag each line with its level.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr if stream is None else stream)
    handler.setFormatter(logging.Formatter(_PLAIN if level == logging.INFO else _TAGGED))

    logger = logging.getLogger("dupfold")
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.setLevel(level)
    logger.addHandler(handler)
    return logger
