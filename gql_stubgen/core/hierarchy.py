"""Supertype and inherited-field resolution for objects and interfaces."""

from .context import GenerationContext
from .errors import SchemaInconsistencyError
from .model import (
    InterfaceTypeDefinition,
    ObjectTypeDefinition,
    TypeDefinition,
)


class HierarchyResolver:
    """Computes supertypes from ``implements`` clauses and union membership."""

    def __init__(self, context: GenerationContext):
        self.context = context

    def super_types_of(self, definition: TypeDefinition) -> tuple[str, ...]:
        """Return the names of the direct supertypes of an object or interface.

        Objects also get every union that lists them as a member, after their
        declared interfaces.
        """
        if not isinstance(definition, (ObjectTypeDefinition, InterfaceTypeDefinition)):
            raise ValueError(f"'{definition.name}' cannot have supertypes")

        names = list(definition.interfaces)
        for name in definition.interfaces:
            self._implemented_definition(definition, name)
        if isinstance(definition, ObjectTypeDefinition):
            names.extend(
                union.name
                for union in self.context.schema.unions
                if definition.name in union.member_types
            )
        return tuple(dict.fromkeys(names))

    def inherited_field_names(self, definition: TypeDefinition) -> frozenset[str]:
        """Return field names declared on the direct supertypes.

        Only one level is considered: fields a supertype itself inherits are
        not included unless the supertype redeclares them.
        """
        names = set()
        for super_name in self.super_types_of(definition):
            super_definition = self.context.schema.type_definition(super_name)
            names.update(f.name for f in getattr(super_definition, "fields", ()))
        return frozenset(names)

    def _implemented_definition(self, definition: TypeDefinition, name: str) -> TypeDefinition:
        implemented = self.context.schema.type_definition(name)
        if not isinstance(implemented, (InterfaceTypeDefinition, ObjectTypeDefinition)):
            raise SchemaInconsistencyError(
                f"cannot implement '{name}' because it is neither an interface nor an object",
                type_name=definition.name,
            )
        return implemented
