from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from binding_stub_generator.js_types import FAILURE_TYPE


@dataclass(frozen=True)
class TypeDescriptor:
    """Describes the type of a bound method parameter.

    Attributes:
        annotation: The JavaScript type annotation used in JSDoc (e.g. "string", "models.Person").
        is_struct: Whether the type is a structured (model) type.
        package: The package a struct type originates from. Empty for non-struct types.
    """

    annotation: str
    is_struct: bool = False
    package: str = ""

    def js_type(self) -> str:
        """The type annotation to use in generated doc blocks."""
        return self.annotation

    @property
    def is_failure(self) -> bool:
        """Whether this type is the failure indicator, which never carries a value."""
        return self.annotation == FAILURE_TYPE


@dataclass(frozen=True)
class Parameter:
    """A named input or output of a bound method."""

    name: str
    type: TypeDescriptor

    def js_type(self) -> str:
        return self.type.js_type()


@dataclass(frozen=True)
class BoundMethod:
    """A backend method that is exposed to the frontend.

    Inputs and outputs are stored as tuples, so that a method stays immutable
    after construction, even if lists were passed in.
    """

    name: str
    doc_comment: str = ""
    inputs: tuple[Parameter, ...] = field(default_factory=tuple)
    outputs: tuple[Parameter, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "inputs", tuple(self.inputs))
        object.__setattr__(self, "outputs", tuple(self.outputs))


@dataclass(frozen=True)
class RenderedMethod:
    """The result of rendering a single bound method.

    Attributes:
        text: The JavaScript source of the method stub.
        models: Origin packages of all struct types the method references, without duplicates.
    """

    text: str
    models: tuple[str, ...] = ()


# Package identifier -> service name -> bound methods of that service.
BindingsType = Mapping[str, Mapping[str, Sequence[BoundMethod]]]
