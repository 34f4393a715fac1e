"""Command-line interface for generating JavaScript bindings for bound backend methods.

Notes:
    - Inputs are binding metadata files as described by `bindings.capnp` (JSON, binary or packed).
"""

from __future__ import annotations

import argparse
import logging
import os.path
from collections.abc import Sequence

from binding_stub_generator.loader import BindingsLoadError
from binding_stub_generator.run import run

logger = logging.getLogger(__name__)


def _add_recursive_argument(parser: argparse.ArgumentParser):
    """Add a recursive argument to a parser.

    Args:
        parser (argparse.ArgumentParser): The parser to add the argument to.
    """
    parser.add_argument(
        "-r",
        "--recursive",
        dest="recursive",
        default=False,
        action="store_true",
        help="descend into subdirectories of directory inputs and expand `**` in glob expressions.",
    )


def setup_parser() -> argparse.ArgumentParser:
    """Setup for the parser.

    Returns:
        argparse.ArgumentParser: The parser after setup.
    """
    parser = argparse.ArgumentParser(
        description="Generate JavaScript call-forwarding stubs (one `<package>/bindings.js` per backend package) "
        "from bound method metadata.",
        epilog="Metadata files follow `bindings.capnp` and are read as JSON (*.json), "
        "binary Cap'n Proto messages (*.bin) or packed messages (*.packed).",
    )

    parser.add_argument(
        "-c",
        "--clean",
        type=str,
        nargs="+",
        default=[],
        help="stale bindings.js files (paths or globs) to delete before generation; directories are skipped.",
    )

    parser.add_argument(
        "-p",
        "--paths",
        type=str,
        nargs="+",
        default=["**/*.bindings.json"],
        help="bound method metadata files, directories or globs (*.json, *.bin, *.packed).",
    )

    parser.add_argument(
        "-e",
        "--excludes",
        type=str,
        nargs="+",
        default=[],
        help="metadata files or globs to leave out, even if --paths matches them.",
    )

    parser.add_argument(
        "-o",
        "--output-dir",
        type=str,
        default="",
        help="root of the frontend bindings tree; each package is written to <dir>/<package>/bindings.js, "
        "next to its ./models import. Defaults to the working directory.",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        default=False,
        action="store_true",
        help="log package display names and removed files.",
    )

    _add_recursive_argument(parser)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the binding generator.

    Args:
        argv (Sequence[str] | None, optional): Run arguments. Defaults to None.

    Returns:
        int: Error code.
    """
    parser = setup_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    root_directory = os.getcwd()
    logger.info("Working from root directory: %s", root_directory)

    try:
        run(args, root_directory)
    except BindingsLoadError:
        return 1

    return 0
