"""Rules for the round-trip annotations attached to generated code."""

from .declarations import AnnotationSpec
from .model import ROOT_OPERATIONS, SchemaModel
from .types import ClassRef

RUNTIME_MODULE = "gql_stubgen.runtime"

DEFAULT_VALUE_ANNOTATION = ClassRef(RUNTIME_MODULE, "GraphQLDefault")


class AnnotationPolicy:
    """Decides which annotations get attached, behind a single switch."""

    def __init__(self, enabled: bool, schema: SchemaModel):
        self.enabled = enabled
        self.schema = schema

    def default_value(self, raw_value: str | None) -> tuple[AnnotationSpec, ...]:
        """Annotation carrying a default value as raw schema text."""
        if not self.enabled or raw_value is None:
            return ()
        return (AnnotationSpec(DEFAULT_VALUE_ANNOTATION, (raw_value,)),)

    def root_operation(self, type_name: str) -> tuple[AnnotationSpec, ...]:
        """Root markers for an object serving as query, mutation or subscription root."""
        if not self.enabled:
            return ()
        return tuple(
            AnnotationSpec(ClassRef(RUNTIME_MODULE, f"graphql_{operation}"))
            for operation in ROOT_OPERATIONS
            if type_name == self.schema.root_type_name_for(operation)
        )
