"""Top-level module for binding generation."""

from __future__ import annotations

import argparse
import glob
import logging
import os.path
from collections.abc import Mapping

from binding_stub_generator.js_types import OUTPUT_FILE_NAME
from binding_stub_generator.loader import load_bindings, merge_bindings
from binding_stub_generator.writer import generate_bindings

logger = logging.getLogger(__name__)


def write_bindings(outputs: Mapping[str, str], output_directory: str) -> list[str]:
    """Write generated binding modules to disk.

    Args:
        outputs (Mapping[str, str]): Display name of each package -> module source.
        output_directory (str): The directory to write the modules to. Every package gets its own
            subdirectory, named after its display name, so that no module is mistaken for the
            `./models` module that the bindings import.

    Returns:
        list[str]: The paths of the written files, in sorted order.
    """
    written: list[str] = []

    for package_name in sorted(outputs):
        package_directory = os.path.join(output_directory, package_name)
        os.makedirs(package_directory, exist_ok=True)
        output_file_path = os.path.join(package_directory, OUTPUT_FILE_NAME)

        with open(output_file_path, "w", encoding="utf8") as output_file:
            output_file.write(outputs[package_name])

        logger.info("Wrote bindings to '%s'.", output_file_path)
        written.append(output_file_path)

    return written


def _find_input_paths(patterns: list[str], root_directory: str, recursive: bool) -> set[str]:
    """Expand paths, directories and glob expressions into metadata files."""
    search_paths: set[str] = set()

    for pattern in patterns:
        search_path = os.path.join(root_directory, pattern)

        if os.path.isdir(search_path):
            if recursive:
                for root, _, files in os.walk(search_path):
                    search_paths.update(os.path.join(root, file) for file in files)
            else:
                for file in os.listdir(search_path):
                    file_path = os.path.join(search_path, file)
                    if os.path.isfile(file_path):
                        search_paths.add(file_path)
        else:
            search_paths.update(glob.glob(search_path, recursive=recursive))

    return search_paths


def run(args: argparse.Namespace, root_directory: str) -> list[str]:
    """Run the binding generator on a set of binding metadata files.

    All inputs are merged into one bindings collection, so that package display names
    are unique across every written module.

    Args:
        args (argparse.Namespace): The arguments that were passed when calling the generator.
        root_directory (str): The directory, from which the generator is executed.

    Returns:
        list[str]: The paths of the written files.
    """
    paths: list[str] = args.paths
    excludes: list[str] = args.excludes
    clean: list[str] = args.clean
    output_dir: str = getattr(args, "output_dir", "")

    cleanup_paths: set[str] = set()
    for c in clean:
        cleanup_directory = os.path.join(root_directory, c)
        cleanup_paths = cleanup_paths.union(glob.glob(cleanup_directory, recursive=args.recursive))

    for cleanup_path in sorted(cleanup_paths):
        if os.path.isdir(cleanup_path):
            logger.warning("Not removing directory '%s' matched by --clean.", cleanup_path)
            continue
        logger.debug("Removing '%s'.", cleanup_path)
        os.remove(cleanup_path)

    excluded_paths: set[str] = set()
    for exclude in excludes:
        exclude_path = os.path.join(root_directory, exclude)
        if os.path.isfile(exclude_path):
            excluded_paths.add(exclude_path)
        else:
            excluded_paths = excluded_paths.union(glob.glob(exclude_path, recursive=args.recursive))

    # The `valid_paths` contain the automatically detected search paths, except for specifically excluded paths.
    valid_paths = _find_input_paths(paths, root_directory, args.recursive) - excluded_paths

    if not valid_paths:
        logger.warning("No binding metadata found for paths: %s", ", ".join(paths))
        return []

    bindings = merge_bindings(load_bindings(path) for path in sorted(valid_paths))
    outputs = generate_bindings(bindings)

    output_directory = os.path.join(root_directory, output_dir) if output_dir else root_directory
    return write_bindings(outputs, output_directory)
