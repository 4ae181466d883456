"""Immutable schema model consumed by the declaration generator.

This module defines dataclasses that represent a validated GraphQL schema:
recursive type references, the six kinds of type definitions and the
schema-wide lookups (root operation types, scalars) the generator needs.
"""

from dataclasses import dataclass, field
from typing import Mapping, Union

from .errors import SchemaInconsistencyError

# Scalars every GraphQL schema provides without declaring them
BUILTIN_SCALARS = ("String", "Int", "Float", "Boolean", "ID")

ROOT_OPERATIONS = ("query", "mutation", "subscription")


@dataclass(frozen=True)
class NamedType:
    """Reference to a type by name, the leaf of every type reference."""
    name: str


@dataclass(frozen=True)
class ListType:
    """List wrapper (``[T]`` in SDL)."""
    of_type: "TypeRef"


@dataclass(frozen=True)
class NonNullType:
    """Non-null wrapper (``T!`` in SDL)."""
    of_type: "TypeRef"

    def __post_init__(self):
        if isinstance(self.of_type, NonNullType):
            raise ValueError("NonNullType cannot wrap another NonNullType")


TypeRef = Union[NamedType, ListType, NonNullType]


def named_type(ref: TypeRef) -> NamedType:
    """Unwrap list and non-null wrappers down to the named leaf."""
    while not isinstance(ref, NamedType):
        ref = ref.of_type
    return ref


@dataclass(frozen=True)
class InputValueDefinition:
    """An argument of a field, or a field of an input object.

    ``default_value`` holds the default as single-line SDL text, e.g. ``10``
    or ``{first: 5}``, exactly as it would appear in the schema.
    """
    name: str
    type: TypeRef
    default_value: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class FieldDefinition:
    """A field of an object or interface type."""
    name: str
    type: TypeRef
    arguments: tuple[InputValueDefinition, ...] = ()
    description: str | None = None


@dataclass(frozen=True)
class EnumValueDefinition:
    """A single value of an enum type."""
    name: str
    description: str | None = None


@dataclass(frozen=True)
class TypeDefinition:
    """Common base of all named type definitions."""
    name: str

    @property
    def is_introspection(self) -> bool:
        return self.name.startswith("__")


@dataclass(frozen=True)
class ObjectTypeDefinition(TypeDefinition):
    fields: tuple[FieldDefinition, ...] = ()
    interfaces: tuple[str, ...] = ()
    description: str | None = None


@dataclass(frozen=True)
class InterfaceTypeDefinition(TypeDefinition):
    fields: tuple[FieldDefinition, ...] = ()
    interfaces: tuple[str, ...] = ()
    description: str | None = None


@dataclass(frozen=True)
class UnionTypeDefinition(TypeDefinition):
    member_types: tuple[str, ...] = ()
    description: str | None = None


@dataclass(frozen=True)
class EnumTypeDefinition(TypeDefinition):
    values: tuple[EnumValueDefinition, ...] = ()
    description: str | None = None


@dataclass(frozen=True)
class InputObjectTypeDefinition(TypeDefinition):
    input_fields: tuple[InputValueDefinition, ...] = ()
    description: str | None = None


@dataclass(frozen=True)
class ScalarTypeDefinition(TypeDefinition):
    description: str | None = None


@dataclass(frozen=True)
class SchemaModel:
    """Complete, validated schema.

    ``types`` keeps the order definitions were collected in. ``root_types``
    maps an operation kind (``query``, ``mutation``, ``subscription``) to the
    name of its root object type.
    """
    types: Mapping[str, TypeDefinition] = field(default_factory=dict)
    root_types: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def of(cls, *definitions: TypeDefinition, **root_types: str) -> "SchemaModel":
        """Build a model from definitions, e.g. ``SchemaModel.of(q, query="Query")``."""
        return cls(
            types={d.name: d for d in definitions},
            root_types=root_types,
        )

    def type_definition(self, name: str) -> TypeDefinition:
        """Look up a definition by name."""
        try:
            return self.types[name]
        except KeyError:
            raise SchemaInconsistencyError(
                "type is not defined in the schema", type_name=name
            ) from None

    def root_type_name_for(self, operation: str) -> str | None:
        """Return the root type name for ``query``, ``mutation`` or ``subscription``."""
        if operation not in ROOT_OPERATIONS:
            raise ValueError(f"Unknown operation kind: {operation!r}")
        return self.root_types.get(operation)

    def is_scalar(self, name: str) -> bool:
        """Check if a name refers to a declared or built-in scalar."""
        if name in BUILTIN_SCALARS:
            return True
        return isinstance(self.types.get(name), ScalarTypeDefinition)

    @property
    def unions(self) -> list[UnionTypeDefinition]:
        """Return all union definitions."""
        return [d for d in self.types.values() if isinstance(d, UnionTypeDefinition)]
