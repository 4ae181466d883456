"""Exceptions raised while loading schemas and generating declarations."""


class StubgenError(Exception):
    """Base class for errors raised by gql-stubgen."""


class SchemaLoadError(StubgenError):
    """Raised when schema files cannot be read, parsed or validated."""


class SchemaInconsistencyError(StubgenError):
    """Raised when the schema model references something the generator cannot map.

    Examples are a scalar without a mapping entry, a field whose type is not
    declared, or an ``implements`` clause naming a union or enum.
    """

    def __init__(
        self,
        message: str,
        *,
        type_name: str | None = None,
        field_name: str | None = None,
    ):
        self.message = message
        self.type_name = type_name
        self.field_name = field_name
        super().__init__(self._format())

    def _format(self) -> str:
        if self.type_name and self.field_name:
            return f"{self.type_name}.{self.field_name}: {self.message}"
        if self.type_name:
            return f"{self.type_name}: {self.message}"
        return self.message
