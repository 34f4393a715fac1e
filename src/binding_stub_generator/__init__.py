"""Generate JavaScript call-forwarding stubs for bound backend methods."""

from __future__ import annotations

from binding_stub_generator.writer import Writer, generate_bindings
from binding_stub_generator.writer_dto import BoundMethod, Parameter, RenderedMethod, TypeDescriptor

__all__ = [
    "BoundMethod",
    "Parameter",
    "RenderedMethod",
    "TypeDescriptor",
    "Writer",
    "generate_bindings",
]
