"""Read bound method metadata from Cap'n Proto messages or JSON documents.

Both input formats are described by `bindings.capnp`. JSON documents are turned
into a message of that schema, so that they are checked the same way.
"""

from __future__ import annotations

import json
import logging
import os.path
from collections.abc import Iterable
from functools import cache
from pathlib import Path
from typing import Any

import capnp

from binding_stub_generator.js_types import InputFormat
from binding_stub_generator.writer_dto import BoundMethod, Parameter, TypeDescriptor

if hasattr(capnp, "remove_import_hook"):
    capnp.remove_import_hook()

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("bindings.capnp")

# Package identifier -> service name -> bound methods, as built while loading.
LoadedBindings = dict[str, dict[str, list[BoundMethod]]]


class BindingsLoadError(Exception):
    """Raised when binding metadata cannot be read or does not match the schema."""

    pass


@cache
def load_schema() -> Any:
    """Load the schema module of the binding metadata."""
    return capnp.load(str(SCHEMA_PATH))


def _parameter_from_message(parameter: Any) -> Parameter:
    return Parameter(
        name=parameter.name,
        type=TypeDescriptor(
            annotation=parameter.type.jsType,
            is_struct=parameter.type.isStruct,
            package=parameter.type.packageName,
        ),
    )


def _method_from_message(method: Any) -> BoundMethod:
    return BoundMethod(
        name=method.name,
        doc_comment=method.docComment,
        inputs=tuple(_parameter_from_message(p) for p in method.inputs),
        outputs=tuple(_parameter_from_message(p) for p in method.outputs),
    )


def bindings_from_message(message: Any) -> LoadedBindings:
    """Convert a `Bindings` message (reader or builder) into a bindings collection.

    Services and methods that appear more than once are merged, in message order.

    Args:
        message (Any): The `Bindings` message.

    Returns:
        LoadedBindings: Package identifier -> service name -> bound methods.
    """
    bindings: LoadedBindings = {}

    for package in message.packages:
        services = bindings.setdefault(package.name, {})
        for service in package.services:
            methods = services.setdefault(service.name, [])
            methods.extend(_method_from_message(method) for method in service.methods)

    return bindings


def message_from_dict(data: dict[str, Any]) -> Any:
    """Build a `Bindings` message from its dictionary form.

    Args:
        data (dict[str, Any]): The message content, using the field names of `bindings.capnp`.

    Raises:
        BindingsLoadError: If the content does not match the schema.

    Returns:
        Any: The `Bindings` message builder.
    """
    schema = load_schema()

    if not isinstance(data, dict):
        raise BindingsLoadError(f"Expected a JSON object at the top level, found '{type(data).__name__}'.")

    try:
        return schema.Bindings.new_message(**data)
    except (capnp.KjException, AttributeError, TypeError, ValueError) as e:
        raise BindingsLoadError(f"Binding metadata does not match the schema: {e}") from e


def read_message(path: str) -> Any:
    """Read a `Bindings` message from a file.

    The format is chosen by the file suffix: JSON (`.json`), a binary message (`.bin`),
    or a packed message (`.packed`).

    Args:
        path (str): The file to read.

    Raises:
        BindingsLoadError: If the file has an unknown suffix or cannot be decoded.

    Returns:
        Any: The `Bindings` message.
    """
    schema = load_schema()
    suffix = os.path.splitext(path)[1]

    if suffix == InputFormat.JSON:
        try:
            with open(path, encoding="utf8") as input_file:
                data = json.load(input_file)
        except json.JSONDecodeError as e:
            raise BindingsLoadError(f"Invalid JSON in '{path}': {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise BindingsLoadError(f"Could not read '{path}': {e}") from e

        return message_from_dict(data)

    if suffix not in (InputFormat.BINARY, InputFormat.PACKED):
        raise BindingsLoadError(f"Unsupported binding metadata format '{suffix}' for '{path}'.")

    try:
        with open(path, "rb") as input_file:
            if suffix == InputFormat.PACKED:
                return schema.Bindings.read_packed(input_file).as_builder()
            return schema.Bindings.read(input_file).as_builder()
    except OSError as e:
        raise BindingsLoadError(f"Could not read '{path}': {e}") from e
    except capnp.KjException as e:
        raise BindingsLoadError(f"Could not decode message in '{path}': {e}") from e


def load_bindings(path: str) -> LoadedBindings:
    """Load the bindings collection stored in a file.

    Args:
        path (str): The file to read.

    Returns:
        LoadedBindings: Package identifier -> service name -> bound methods.
    """
    try:
        message = read_message(path)
    except BindingsLoadError as e:
        logger.error("Failed to load binding metadata: %s", e)
        raise

    bindings = bindings_from_message(message)
    logger.info("Loaded %d package(s) from '%s'.", len(bindings), path)
    return bindings


def merge_bindings(collections: Iterable[LoadedBindings]) -> LoadedBindings:
    """Merge several bindings collections into one.

    Methods of the same package and service are concatenated, in the order of the collections.

    Args:
        collections (Iterable[LoadedBindings]): The collections to merge.

    Returns:
        LoadedBindings: The merged collection.
    """
    merged: LoadedBindings = {}

    for bindings in collections:
        for package, services in bindings.items():
            merged_services = merged.setdefault(package, {})
            for service, methods in services.items():
                merged_services.setdefault(service, []).extend(methods)

    return merged
