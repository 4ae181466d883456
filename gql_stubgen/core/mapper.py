"""Maps GraphQL type references to Python target types.

Nullability is decided per nesting level: every named or list level is
nullable unless directly wrapped in ``NonNull``. So ``[String!]`` becomes
``list[str] | None`` and ``[String]!`` becomes ``list[str | None]``.
"""

from .context import GenerationContext
from .errors import SchemaInconsistencyError
from .model import ListType, NamedType, NonNullType, TypeRef
from .naming import to_class_name
from .types import LIST_CLASS, STREAM_CLASS, ClassRef, TargetType, Wrapper


class TypeMapper:
    """Resolves type references against the schema and scalar mapping."""

    def __init__(self, context: GenerationContext):
        self.context = context

    def declaration_ref(self, name: str) -> ClassRef:
        """Return the class generated for the schema type ``name``.

        Each declaration lives in its own module named after the schema type.
        """
        return ClassRef(f"{self.context.namespace}.{name}", to_class_name(name))

    def context_type(self) -> TargetType:
        """Type of the execution context every operation receives first."""
        return TargetType(self.context.execution_context_class, nullable=False)

    def resolve(self, ref: TypeRef) -> TargetType:
        """Resolve a reference with the nullability rules and no outer wrapper."""
        if isinstance(ref, NonNullType):
            return self.resolve(ref.of_type).copy(nullable=False)
        if isinstance(ref, ListType):
            return TargetType(
                LIST_CLASS,
                nullable=True,
                wrapper=Wrapper.LIST,
                inner=self.resolve(ref.of_type),
            )
        if isinstance(ref, NamedType):
            return TargetType(self._named_class(ref.name), nullable=True)
        raise TypeError(f"Not a type reference: {ref!r}")

    def resolve_output_type(self, ref: TypeRef, is_streaming_field: bool = False) -> TargetType:
        """Resolve the return type of a field.

        Fields of the subscription root are wrapped in an async stream.
        """
        resolved = self.resolve(ref)
        if is_streaming_field:
            return resolved.wrap(Wrapper.STREAM, STREAM_CLASS)
        return resolved

    def resolve_input_type(self, ref: TypeRef, has_default_value: bool = False) -> TargetType:
        """Resolve the type of an argument or input field.

        A value that may be omitted entirely is wrapped in the optional class.
        Non-null values and values with a default are always present.
        """
        resolved = self.resolve(ref)
        if isinstance(ref, NonNullType) or has_default_value:
            return resolved
        return resolved.wrap(Wrapper.OPTIONAL, self.context.optional_class)

    def _named_class(self, name: str) -> ClassRef:
        schema = self.context.schema
        if schema.is_scalar(name):
            try:
                return self.context.scalar_classes[name]
            except KeyError:
                raise SchemaInconsistencyError(
                    "unknown scalar, add it to the scalar mapping", type_name=name
                ) from None
        definition = schema.type_definition(name)
        return self.declaration_ref(definition.name)
