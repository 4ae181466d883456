"""Declaration specs handed from the emitter to the renderer.

These are the language-level building blocks of one generated module. They
hold resolved :class:`TargetType` values and raw schema text, never rendered
Python source.
"""

from dataclasses import dataclass
from enum import Enum

from .types import ClassRef, TargetType


class DeclarationKind(Enum):
    """Shape of a generated declaration, one per GraphQL construct."""
    CLASS = "class"
    SEALED_INTERFACE = "sealed_interface"
    ENUM = "enum"
    DATA_CLASS = "data_class"
    SCALAR = "scalar"


@dataclass(frozen=True)
class AnnotationSpec:
    """An annotation: a class plus positional string arguments."""
    ref: ClassRef
    arguments: tuple[str, ...] = ()


@dataclass(frozen=True)
class ParameterSpec:
    """A parameter of an operation or constructor."""
    name: str
    type: TargetType
    description: str | None = None
    default_value: str | None = None  # raw schema text, documentation only
    annotations: tuple[AnnotationSpec, ...] = ()


@dataclass(frozen=True)
class PropertySpec:
    """A stored (or, on interfaces, abstract) property."""
    name: str
    type: TargetType
    description: str | None = None
    override: bool = False
    abstract: bool = False
    default_value: str | None = None
    annotations: tuple[AnnotationSpec, ...] = ()

    @classmethod
    def from_parameter(cls, parameter: ParameterSpec) -> "PropertySpec":
        return cls(
            name=parameter.name,
            type=parameter.type,
            description=parameter.description,
            default_value=parameter.default_value,
            annotations=parameter.annotations,
        )


@dataclass(frozen=True)
class OperationSpec:
    """A method stub whose body is left to the implementer."""
    name: str
    parameters: tuple[ParameterSpec, ...]
    return_type: TargetType
    description: str | None = None
    override: bool = False
    abstract: bool = False


@dataclass(frozen=True)
class EnumConstantSpec:
    name: str
    description: str | None = None


@dataclass(frozen=True)
class TypeDeclaration:
    """One generated top-level declaration."""
    kind: DeclarationKind
    name: str
    description: str | None = None
    supertypes: tuple[ClassRef, ...] = ()
    properties: tuple[PropertySpec, ...] = ()
    operations: tuple[OperationSpec, ...] = ()
    constructor_parameters: tuple[ParameterSpec, ...] = ()
    enum_constants: tuple[EnumConstantSpec, ...] = ()
    annotations: tuple[AnnotationSpec, ...] = ()
    file_comment: str | None = None


@dataclass(frozen=True)
class EmissionRequest:
    """A declaration together with where it is written.

    ``name`` is the schema type name, which is also the module name inside
    ``namespace``.
    """
    namespace: str
    name: str
    declaration: TypeDeclaration

    @property
    def module(self) -> str:
        return f"{self.namespace}.{self.name}"

    @property
    def class_ref(self) -> ClassRef:
        return ClassRef(self.module, self.declaration.name)
