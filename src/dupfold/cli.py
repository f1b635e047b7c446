"""CLI argument parsing and scan dispatch."""

from __future__ import annotations

from dupfold.classifier import DEFAULT_SMALL_FILE_SIZE
from dupfold.classifier import build_index
from dupfold.hasher import DEFAULT_ALGORITHM
from dupfold.hasher import check_algorithm
from dupfold.logging import configure_logging
from dupfold.report import format_size
from dupfold.report import iter_groups
from dupfold.report import print_report
from dupfold.report import summarize
from dupfold.scanner import walk_all

import argparse
import logging
import pathlib
import sys


logger = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid size: {value!r}")
    if n < 0:
        raise argparse.ArgumentTypeError(f"size must not be negative: {n}")
    return n


def _digest(value: str) -> str:
    try:
        return check_algorithm(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="dupfold",
        description="Find groups of files with identical content under one or more directories.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors")
    parser.add_argument(
        "directories", nargs="*", type=pathlib.Path, metavar="DIR",
        help="Directories to scan, in order",
    )
    parser.add_argument(
        "--small-file-size", type=_non_negative_int, default=DEFAULT_SMALL_FILE_SIZE, metavar="BYTES",
        help="Files up to this size are compared by content only (default: %(default)s)",
    )
    parser.add_argument(
        "--digest", type=_digest, default=DEFAULT_ALGORITHM, metavar="ALGORITHM",
        help="Digest algorithm for large files (default: %(default)s)",
    )
    parser.add_argument(
        "--skip-unreadable", action="store_true",
        help="Skip files that cannot be read instead of aborting",
    )
    parser.add_argument(
        "--progress", action="store_true",
        help="Show a progress bar while classifying",
    )
    parser.add_argument(
        "--exclude", action="append", default=[], metavar="PATTERN",
        help="Glob pattern to exclude files (e.g., '*.tmp'). Repeatable.",
    )
    parser.add_argument(
        "--exclude-dir", action="append", default=[], metavar="PATTERN",
        help="Glob pattern to exclude directories (e.g., '.git'). Repeatable.",
    )
    return parser


def cmd_scan(args: argparse.Namespace) -> None:
    """Scan the given directories and print every duplicate group."""
    paths = walk_all(args.directories, exclude=args.exclude, exclude_dir=args.exclude_dir)
    index = build_index(
        paths,
        small_file_size=args.small_file_size,
        algorithm=args.digest,
        skip_unreadable=args.skip_unreadable,
        progress=args.progress,
    )
    groups = list(iter_groups(index))
    print_report(groups)

    msg = f"Classified {index.files} file(s)"
    if index.skipped:
        msg += f", skipped {len(index.skipped)} unreadable"
    logger.info(msg + ".")

    if not groups:
        logger.info("No duplicates found.")
        return
    summary = summarize(groups)
    logger.info(
        f"Found {summary.groups} duplicate group(s) with {summary.files} files, "
        f"{format_size(summary.wasted_bytes)} reclaimable."
    )


def main() -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args()
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    if not args.directories:
        parser.error("at least one directory is required")

    try:
        cmd_scan(args)
    except OSError as e:
        logger.error(f"Cannot read {e.filename}: {e.strerror or e}")
        sys.exit(1)
