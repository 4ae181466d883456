"""Builds one emission request per top-level type definition."""

import logging
from typing import Iterator

from .annotations import AnnotationPolicy
from .arguments import ArgumentBinder
from .context import GenerationContext
from .declarations import (
    DeclarationKind,
    EmissionRequest,
    EnumConstantSpec,
    ParameterSpec,
    PropertySpec,
    TypeDeclaration,
)
from .hierarchy import HierarchyResolver
from .mapper import TypeMapper
from .members import MemberShapeDecider
from .model import (
    EnumTypeDefinition,
    InputObjectTypeDefinition,
    InterfaceTypeDefinition,
    ObjectTypeDefinition,
    ScalarTypeDefinition,
    TypeDefinition,
    UnionTypeDefinition,
)
from .naming import to_class_name

logger = logging.getLogger(__name__)

SCALAR_FILE_COMMENT = "Put your scalar definition and coercion here"


class TypeDeclarationEmitter:
    """Turns schema definitions into declarations.

    Example:
        context = GenerationContext.create(schema, config)
        for request in TypeDeclarationEmitter(context).emit():
            ...

    Requests are produced lazily and independently of each other. The first
    inconsistency raises and ends the iteration.
    """

    def __init__(self, context: GenerationContext):
        self.context = context
        self.mapper = TypeMapper(context)
        self.policy = AnnotationPolicy(context.config.annotations, context.schema)
        self.binder = ArgumentBinder(self.mapper, self.policy)
        self.hierarchy = HierarchyResolver(context)
        self.members = MemberShapeDecider(context, self.mapper, self.binder)

    def emit(self) -> Iterator[EmissionRequest]:
        """Yield a request for every non-introspection definition."""
        for definition in self.context.schema.types.values():
            if definition.is_introspection:
                logger.debug("Skipping introspection type %s", definition.name)
                continue
            yield self.request_for(definition)

    def request_for(self, definition: TypeDefinition) -> EmissionRequest:
        if isinstance(definition, ObjectTypeDefinition):
            declaration = self._object(definition)
        elif isinstance(definition, InterfaceTypeDefinition):
            declaration = self._interface(definition)
        elif isinstance(definition, UnionTypeDefinition):
            declaration = self._union(definition)
        elif isinstance(definition, EnumTypeDefinition):
            declaration = self._enum(definition)
        elif isinstance(definition, InputObjectTypeDefinition):
            declaration = self._input_object(definition)
        elif isinstance(definition, ScalarTypeDefinition):
            declaration = self._scalar(definition)
        else:
            raise TypeError(f"Unsupported definition: {definition!r}")

        logger.debug("Built %s declaration for %s", declaration.kind.value, definition.name)
        return EmissionRequest(self.context.namespace, definition.name, declaration)

    def _supertypes(self, definition):
        return tuple(
            self.mapper.declaration_ref(name)
            for name in self.hierarchy.super_types_of(definition)
        )

    def _object(self, definition: ObjectTypeDefinition) -> TypeDeclaration:
        supertypes = self._supertypes(definition)
        members = self.members.decide(
            definition.name,
            definition.fields,
            inherited=self.hierarchy.inherited_field_names(definition),
        )
        return TypeDeclaration(
            kind=DeclarationKind.CLASS,
            name=to_class_name(definition.name),
            description=definition.description,
            supertypes=supertypes,
            properties=members.properties,
            operations=members.operations,
            constructor_parameters=tuple(
                self._constructor_parameter(p) for p in members.properties
            ),
            annotations=self.policy.root_operation(definition.name),
        )

    def _interface(self, definition: InterfaceTypeDefinition) -> TypeDeclaration:
        supertypes = self._supertypes(definition)
        members = self.members.decide(
            definition.name,
            definition.fields,
            inherited=self.hierarchy.inherited_field_names(definition),
            abstract=True,
        )
        return TypeDeclaration(
            kind=DeclarationKind.SEALED_INTERFACE,
            name=to_class_name(definition.name),
            description=definition.description,
            supertypes=supertypes,
            properties=members.properties,
            operations=members.operations,
        )

    def _union(self, definition: UnionTypeDefinition) -> TypeDeclaration:
        return TypeDeclaration(
            kind=DeclarationKind.SEALED_INTERFACE,
            name=to_class_name(definition.name),
            description=definition.description,
        )

    def _enum(self, definition: EnumTypeDefinition) -> TypeDeclaration:
        return TypeDeclaration(
            kind=DeclarationKind.ENUM,
            name=to_class_name(definition.name),
            description=definition.description,
            enum_constants=tuple(
                EnumConstantSpec(v.name, v.description) for v in definition.values
            ),
        )

    def _input_object(self, definition: InputObjectTypeDefinition) -> TypeDeclaration:
        parameters = self.binder.bind_all(definition.input_fields, owner=definition.name)
        return TypeDeclaration(
            kind=DeclarationKind.DATA_CLASS,
            name=to_class_name(definition.name),
            description=definition.description,
            properties=tuple(PropertySpec.from_parameter(p) for p in parameters),
            constructor_parameters=parameters,
        )

    def _scalar(self, definition: ScalarTypeDefinition) -> TypeDeclaration:
        return TypeDeclaration(
            kind=DeclarationKind.SCALAR,
            name=to_class_name(definition.name),
            description=definition.description,
            file_comment=SCALAR_FILE_COMMENT,
        )

    @staticmethod
    def _constructor_parameter(prop: PropertySpec) -> ParameterSpec:
        return ParameterSpec(name=prop.name, type=prop.type)
