"""Binds arguments and input fields to parameter specs."""

from .annotations import AnnotationPolicy
from .declarations import ParameterSpec
from .errors import SchemaInconsistencyError
from .mapper import TypeMapper
from .model import InputValueDefinition


class ArgumentBinder:
    """Resolves how an argument or input field is represented.

    Default values are forwarded untouched as schema text, both in the
    documentation and, when annotations are enabled, in a default-value
    annotation. Consumers of that annotation parse the schema syntax
    themselves.
    """

    def __init__(self, mapper: TypeMapper, policy: AnnotationPolicy):
        self.mapper = mapper
        self.policy = policy

    def bind(self, value: InputValueDefinition) -> ParameterSpec:
        has_default = value.default_value is not None
        return ParameterSpec(
            name=value.name,
            type=self.mapper.resolve_input_type(value.type, has_default),
            description=value.description,
            default_value=value.default_value,
            annotations=self.policy.default_value(value.default_value),
        )

    def bind_all(self, values, *, owner: str | None = None) -> tuple[ParameterSpec, ...]:
        """Bind values in order. Errors name ``owner`` and the value when given."""
        parameters = []
        for value in values:
            try:
                parameters.append(self.bind(value))
            except SchemaInconsistencyError as e:
                if owner is None or e.field_name is not None:
                    raise
                raise SchemaInconsistencyError(
                    str(e), type_name=owner, field_name=value.name
                ) from e
        return tuple(parameters)
