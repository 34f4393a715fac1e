"""Type and keyword definitions that are common in generated JavaScript bindings."""

from __future__ import annotations

HEADER = """// @ts-check
// Cynhyrchwyd y ffeil hon yn awtomatig. PEIDIWCH Â MODIWL
// This file is automatically generated. DO NOT EDIT

"""

JS_RESERVED_WORDS = frozenset(
    {
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "debugger",
        "default",
        "delete",
        "do",
        "else",
        "enum",
        "export",
        "extends",
        "false",
        "finally",
        "for",
        "function",
        "if",
        "implements",
        "import",
        "in",
        "instanceof",
        "interface",
        "let",
        "new",
        "null",
        "package",
        "private",
        "protected",
        "public",
        "return",
        "static",
        "super",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typeof",
        "var",
        "void",
        "while",
        "with",
        "yield",
    }
)

# Outputs of this type signal failure and never describe a resolved value.
FAILURE_TYPE = "error"
VOID_TYPE = "void"

# Origin package assumed for struct types that do not name one.
DEFAULT_PACKAGE = "main"
PACKAGE_SEPARATOR = "/"

MODELS_MODULE = "./models"
NAMESPACE = "window.go"
RUNTIME_CALL = "wails.Call"
# Each package is written to its own directory, next to the models module it imports.
OUTPUT_FILE_NAME = "bindings.js"


class InputFormat:
    """File suffixes of supported binding metadata inputs."""

    JSON = ".json"
    BINARY = ".bin"
    PACKED = ".packed"
