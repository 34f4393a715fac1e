"""Helper functionality that is used in other modules of this package."""

from __future__ import annotations

from collections.abc import Iterable

from binding_stub_generator.js_types import DEFAULT_PACKAGE, JS_RESERVED_WORDS, PACKAGE_SEPARATOR
from binding_stub_generator.writer_dto import Parameter


def sanitize_name(name: str) -> str:
    """Sanitize a name to avoid JavaScript reserved words.

    If the name is a reserved word, prepend an underscore.
    E.g. 'delete' becomes '_delete', 'class' becomes '_class'.

    Args:
        name (str): The original name.

    Returns:
        str: The sanitized name.
    """
    if name in JS_RESERVED_WORDS:
        return f"_{name}"
    return name


def get_package_name(parameter: Parameter) -> str:
    """Get the origin package of a parameter's model type.

    Args:
        parameter (Parameter): The parameter to inspect.

    Returns:
        str: The origin package, or an empty string, if the parameter is not a struct.
    """
    if not parameter.type.is_struct:
        return ""

    return parameter.type.package or DEFAULT_PACKAGE


def unique(items: Iterable[str]) -> list[str]:
    """Remove duplicates, keeping the first occurrence of each item in place."""
    return list(dict.fromkeys(items))


def normalize_package_names(package_names: Iterable[str]) -> dict[str, str]:
    """Map package identifiers to short, unique display names.

    Path-like identifiers (e.g. 'github.com/x/models') are reduced to their last
    segment. If that name was already handed out, a number is appended. The number
    comes from a counter that is shared by all collisions of one call, so the second
    collision gets '3', even if it happens for a different name than the first one.

    Args:
        package_names (Iterable[str]): Package identifiers, in the order they should be assigned.

    Returns:
        dict[str, str]: Mapping of every given identifier to its display name.
    """
    result: dict[str, str] = {}
    converted: set[str] = set()
    count = 1

    for original_name in package_names:
        if original_name in result:
            continue

        base_name = original_name.split(PACKAGE_SEPARATOR)[-1]
        package_name = base_name

        # A suffixed name can itself be taken (e.g. by a package called 'models2').
        while package_name in converted:
            count += 1
            package_name = f"{base_name}{count}"

        converted.add(package_name)
        result[original_name] = package_name

    return result
