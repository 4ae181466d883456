"""Decides whether a field becomes stored state or an operation stub.

Only a plain ``id`` field is cheap, always-available state. Every other field
models a resolution step that may be expensive, so it becomes a method that
receives the execution context.
"""

from dataclasses import dataclass, replace

from .arguments import ArgumentBinder
from .context import GenerationContext
from .declarations import OperationSpec, ParameterSpec, PropertySpec
from .errors import SchemaInconsistencyError
from .mapper import TypeMapper
from .model import FieldDefinition, named_type
from .naming import safe_identifier

CONTEXT_PARAMETER = "context"
IDENTITY_FIELD = "id"


@dataclass(frozen=True)
class Members:
    """Fields of one type split by shape, each in declaration order."""
    properties: tuple[PropertySpec, ...] = ()
    operations: tuple[OperationSpec, ...] = ()


class MemberShapeDecider:
    """Classifies the fields of objects and interfaces."""

    def __init__(self, context: GenerationContext, mapper: TypeMapper, binder: ArgumentBinder):
        self.context = context
        self.mapper = mapper
        self.binder = binder

    def is_stored_property(self, field: FieldDefinition, *, is_subscription: bool) -> bool:
        return (
            not is_subscription
            and not field.arguments
            and field.name == IDENTITY_FIELD
            and self.context.schema.is_scalar(named_type(field.type).name)
        )

    def decide(
        self,
        type_name: str,
        fields: tuple[FieldDefinition, ...],
        *,
        inherited: frozenset[str] = frozenset(),
        abstract: bool = False,
    ) -> Members:
        """Split ``fields`` of ``type_name`` into properties and operations.

        Members named in ``inherited`` are marked as overrides. With
        ``abstract`` set (interfaces) no member carries state or a body.
        """
        is_subscription = self.context.is_subscription_root(type_name)
        properties = []
        operations = []
        for field in fields:
            try:
                if self.is_stored_property(field, is_subscription=is_subscription):
                    properties.append(self._property(field, inherited, abstract))
                else:
                    operations.append(
                        self._operation(field, inherited, abstract, is_subscription)
                    )
            except SchemaInconsistencyError as e:
                if e.field_name is not None:
                    raise
                raise SchemaInconsistencyError(
                    str(e), type_name=type_name, field_name=field.name
                ) from e
        return Members(tuple(properties), tuple(operations))

    def _property(self, field: FieldDefinition, inherited: frozenset[str], abstract: bool) -> PropertySpec:
        return PropertySpec(
            name=field.name,
            type=self.mapper.resolve_output_type(field.type),
            description=field.description,
            override=field.name in inherited,
            abstract=abstract,
        )

    def _operation(
        self,
        field: FieldDefinition,
        inherited: frozenset[str],
        abstract: bool,
        is_subscription: bool,
    ) -> OperationSpec:
        context_parameter = ParameterSpec(
            name=CONTEXT_PARAMETER,
            type=self.mapper.context_type(),
        )
        return OperationSpec(
            name=field.name,
            parameters=(context_parameter, *self._unique(self.binder.bind_all(field.arguments))),
            return_type=self.mapper.resolve_output_type(field.type, is_subscription),
            description=field.description,
            override=field.name in inherited,
            abstract=abstract,
        )

    @staticmethod
    def _unique(parameters: tuple[ParameterSpec, ...]) -> tuple[ParameterSpec, ...]:
        """Rename arguments that would clash with ``self``, the context or each other."""
        taken = {"self", CONTEXT_PARAMETER}
        result = []
        for parameter in parameters:
            name = parameter.name
            while safe_identifier(name) in taken:
                name += "_"
            taken.add(safe_identifier(name))
            result.append(replace(parameter, name=name) if name != parameter.name else parameter)
        return tuple(result)
