"""Pytest configuration and fixtures for binding stub generator tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from binding_stub_generator.writer_dto import BoundMethod, Parameter, TypeDescriptor

TESTS_DIR = Path(__file__).parent

HEADER_LINES = [
    "// @ts-check",
    "// Cynhyrchwyd y ffeil hon yn awtomatig. PEIDIWCH Â MODIWL",
    "// This file is automatically generated. DO NOT EDIT",
    "",
]


# Helper functions for tests
def param(name: str, annotation: str = "string") -> Parameter:
    """Create a parameter of a plain (non-struct) type."""
    return Parameter(name=name, type=TypeDescriptor(annotation=annotation))


def model_param(name: str, package: str, type_name: str) -> Parameter:
    """Create a parameter whose type is a struct from `package`."""
    short_name = package.split("/")[-1] if package else "main"
    return Parameter(
        name=name,
        type=TypeDescriptor(annotation=f"{short_name}.{type_name}", is_struct=True, package=package),
    )


def method(
    name: str,
    inputs: list[Parameter] | None = None,
    outputs: list[Parameter] | None = None,
    doc: str = "",
) -> BoundMethod:
    """Create a bound method."""
    return BoundMethod(name=name, doc_comment=doc, inputs=tuple(inputs or ()), outputs=tuple(outputs or ()))


def bindings_dict(packages: dict[str, dict[str, list[dict[str, Any]]]]) -> dict[str, Any]:
    """Build the JSON form of a `Bindings` message.

    Args:
        packages: Package name -> service name -> list of method dictionaries.

    Returns:
        The dictionary that matches `bindings.capnp`.
    """
    return {
        "packages": [
            {
                "name": package_name,
                "services": [{"name": service_name, "methods": methods} for service_name, methods in services.items()],
            }
            for package_name, services in packages.items()
        ]
    }


def method_dict(
    name: str,
    inputs: list[dict[str, Any]] | None = None,
    outputs: list[dict[str, Any]] | None = None,
    doc: str = "",
) -> dict[str, Any]:
    """Build the JSON form of a `Method`."""
    return {"name": name, "docComment": doc, "inputs": inputs or [], "outputs": outputs or []}


def param_dict(name: str, js_type: str, is_struct: bool = False, package: str = "") -> dict[str, Any]:
    """Build the JSON form of a `Parameter`."""
    return {"name": name, "type": {"jsType": js_type, "isStruct": is_struct, "packageName": package}}


def write_json(path: Path, data: dict[str, Any]) -> Path:
    """Write a JSON document and return its path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf8")
    return path


@pytest.fixture
def greet_bindings() -> dict[str, dict[str, list[BoundMethod]]]:
    """One package with one service and one method."""
    return {
        "main": {
            "App": [
                method("Greet", [param("name")], [param("result")], doc="  Greet returns a greeting.\n"),
            ]
        }
    }


@pytest.fixture
def shop_bindings() -> dict[str, dict[str, list[BoundMethod]]]:
    """Two packages that reference models of several packages."""
    return {
        "github.com/acme/shop": {
            "Orders": [
                method(
                    "Place",
                    [model_param("order", "github.com/acme/models", "Order")],
                    [model_param("receipt", "github.com/acme/models", "Receipt"), param("err", "error")],
                ),
                method("Cancel", [param("id", "number")], [param("err", "error")]),
            ],
            "Catalog": [
                method("List", [], [model_param("items", "github.com/other/models", "Item")]),
            ],
        },
        "main": {
            "App": [
                method("Ping"),
            ],
        },
    }


@pytest.fixture
def greet_json(tmp_path) -> Path:
    """A JSON binding metadata file with the greet scenario."""
    data = bindings_dict(
        {
            "main": {
                "App": [
                    method_dict(
                        "Greet",
                        [param_dict("name", "string")],
                        [param_dict("result", "string")],
                        doc="Greet returns a greeting.",
                    )
                ]
            }
        }
    )
    return write_json(tmp_path / "input" / "app.bindings.json", data)
