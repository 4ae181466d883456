"""GraphQL schema loader using graphql-core.

Parses .graphql/.graphqls files, validates the resulting schema and produces
a SchemaModel.
"""

import logging
import os

from graphql import (
    DocumentNode,
    GraphQLEnumType,
    GraphQLError,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLList,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLSchema,
    GraphQLUnionType,
    Source,
    Undefined,
    assert_valid_schema,
    ast_from_value,
    build_ast_schema,
    is_specified_scalar_type,
    parse,
    print_ast,
)

from .errors import SchemaLoadError
from .model import (
    EnumTypeDefinition,
    EnumValueDefinition,
    FieldDefinition,
    InputObjectTypeDefinition,
    InputValueDefinition,
    InterfaceTypeDefinition,
    ListType,
    NamedType,
    NonNullType,
    ObjectTypeDefinition,
    ScalarTypeDefinition,
    SchemaModel,
    TypeDefinition,
    TypeRef,
    UnionTypeDefinition,
)

logger = logging.getLogger(__name__)

SCHEMA_EXTENSIONS = (".graphql", ".graphqls")


class SchemaParser:
    """Parses GraphQL schema files into a SchemaModel."""

    def __init__(self, schema_path: str):
        """Initialize a parser with a path to a schema file or directory."""
        self.schema_path = schema_path

    def parse_all(self) -> SchemaModel:
        """Parse all schema files and return the complete model."""
        schema_files = self._collect_schema_files()
        if not schema_files:
            raise SchemaLoadError(f"No schema files found in {self.schema_path}")

        definitions = []
        for file_path in schema_files:
            logger.debug("Parsing %s", file_path)
            try:
                with open(file_path, encoding="utf-8") as f:
                    content = f.read()
            except OSError as e:
                raise SchemaLoadError(f"Cannot read {file_path}: {e}") from e
            definitions.extend(self._parse(Source(content, file_path)).definitions)

        return self.build(DocumentNode(definitions=tuple(definitions)))

    @classmethod
    def parse_sdl(cls, sdl: str) -> SchemaModel:
        """Parse schema text into a model."""
        return cls.build(cls._parse(Source(sdl)))

    @classmethod
    def build(cls, document: DocumentNode) -> SchemaModel:
        """Build and validate a schema from a parsed document."""
        try:
            schema = build_ast_schema(document)
            assert_valid_schema(schema)
        except (GraphQLError, TypeError) as e:
            raise SchemaLoadError(f"Invalid schema: {e}") from e
        return cls._convert(schema)

    def _collect_schema_files(self) -> list[str]:
        """Collect all schema files from path."""
        files = []
        if os.path.isfile(self.schema_path):
            if self.schema_path.endswith(SCHEMA_EXTENSIONS):
                files.append(self.schema_path)
        else:
            for root, _, filenames in os.walk(self.schema_path):
                for filename in filenames:
                    if filename.endswith(SCHEMA_EXTENSIONS):
                        files.append(os.path.join(root, filename))
        return sorted(files)

    @staticmethod
    def _parse(source: Source) -> DocumentNode:
        try:
            return parse(source)
        except GraphQLError as e:
            raise SchemaLoadError(f"Error parsing {source.name}: {e}") from e

    @classmethod
    def _convert(cls, schema: GraphQLSchema) -> SchemaModel:
        types: dict[str, TypeDefinition] = {}
        for name, graphql_type in schema.type_map.items():
            if isinstance(graphql_type, GraphQLScalarType) and is_specified_scalar_type(graphql_type):
                continue
            types[name] = cls._convert_type(graphql_type)

        root_types = {}
        for operation, root in (
            ("query", schema.query_type),
            ("mutation", schema.mutation_type),
            ("subscription", schema.subscription_type),
        ):
            if root is not None:
                root_types[operation] = root.name

        logger.debug("Loaded %d type definitions", len(types))
        return SchemaModel(types=types, root_types=root_types)

    @classmethod
    def _convert_type(cls, graphql_type) -> TypeDefinition:
        name = graphql_type.name
        description = graphql_type.description
        if isinstance(graphql_type, GraphQLObjectType):
            return ObjectTypeDefinition(
                name=name,
                fields=cls._convert_fields(graphql_type.fields),
                interfaces=tuple(i.name for i in graphql_type.interfaces),
                description=description,
            )
        if isinstance(graphql_type, GraphQLInterfaceType):
            return InterfaceTypeDefinition(
                name=name,
                fields=cls._convert_fields(graphql_type.fields),
                interfaces=tuple(i.name for i in graphql_type.interfaces),
                description=description,
            )
        if isinstance(graphql_type, GraphQLUnionType):
            return UnionTypeDefinition(
                name=name,
                member_types=tuple(t.name for t in graphql_type.types),
                description=description,
            )
        if isinstance(graphql_type, GraphQLEnumType):
            return EnumTypeDefinition(
                name=name,
                values=tuple(
                    EnumValueDefinition(name=value_name, description=value.description)
                    for value_name, value in graphql_type.values.items()
                ),
                description=description,
            )
        if isinstance(graphql_type, GraphQLInputObjectType):
            return InputObjectTypeDefinition(
                name=name,
                input_fields=cls._convert_input_values(graphql_type.fields),
                description=description,
            )
        if isinstance(graphql_type, GraphQLScalarType):
            return ScalarTypeDefinition(name=name, description=description)
        raise SchemaLoadError(f"Unsupported type {name}: {graphql_type!r}")

    @classmethod
    def _convert_fields(cls, fields) -> tuple[FieldDefinition, ...]:
        return tuple(
            FieldDefinition(
                name=field_name,
                type=cls._type_ref(field.type),
                arguments=cls._convert_input_values(field.args),
                description=field.description,
            )
            for field_name, field in fields.items()
        )

    @classmethod
    def _convert_input_values(cls, values) -> tuple[InputValueDefinition, ...]:
        return tuple(
            InputValueDefinition(
                name=value_name,
                type=cls._type_ref(value.type),
                default_value=cls._default_value_text(value),
                description=value.description,
            )
            for value_name, value in values.items()
        )

    @staticmethod
    def _default_value_text(value) -> str | None:
        """Return the default value as single-line SDL text, or None."""
        ast_node = getattr(value, "ast_node", None)
        value_node = ast_node.default_value if ast_node is not None else None
        if value_node is None and value.default_value is not Undefined:
            value_node = ast_from_value(value.default_value, value.type)
        if value_node is None:
            return None
        return print_ast(value_node).replace("\n", "")

    @classmethod
    def _type_ref(cls, graphql_type) -> TypeRef:
        if isinstance(graphql_type, GraphQLNonNull):
            return NonNullType(cls._type_ref(graphql_type.of_type))
        if isinstance(graphql_type, GraphQLList):
            return ListType(cls._type_ref(graphql_type.of_type))
        return NamedType(graphql_type.name)
