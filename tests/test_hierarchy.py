"""Tests for supertype and inherited-field resolution."""

import pytest

from gql_stubgen.core.errors import SchemaInconsistencyError
from gql_stubgen.core.hierarchy import HierarchyResolver
from gql_stubgen.core.model import (
    EnumTypeDefinition,
    FieldDefinition,
    InterfaceTypeDefinition,
    NamedType,
    ObjectTypeDefinition,
    SchemaModel,
    UnionTypeDefinition,
)


def field(name):
    return FieldDefinition(name=name, type=NamedType("String"))


@pytest.fixture
def resolver(starwars_context):
    return HierarchyResolver(starwars_context)


class TestSuperTypes:
    """Tests for super_types_of."""

    def test_object_interfaces_then_unions(self, resolver, starwars_schema):
        human = starwars_schema.type_definition("Human")
        assert resolver.super_types_of(human) == ("Node", "Character", "SearchResult")

    def test_object_only_in_union(self, resolver, starwars_schema):
        starship = starwars_schema.type_definition("Starship")
        assert resolver.super_types_of(starship) == ("SearchResult",)

    def test_object_without_supertypes(self, resolver, starwars_schema):
        assert resolver.super_types_of(starwars_schema.type_definition("Query")) == ()

    def test_interface_supertypes(self, resolver, starwars_schema):
        character = starwars_schema.type_definition("Character")
        assert resolver.super_types_of(character) == ("Node",)

    def test_interfaces_ignore_unions(self, make_context):
        schema = SchemaModel.of(
            InterfaceTypeDefinition("Named", fields=(field("name"),)),
            UnionTypeDefinition("Everything", member_types=("Named",)),
        )
        resolver = HierarchyResolver(make_context(schema))
        assert resolver.super_types_of(schema.type_definition("Named")) == ()

    def test_object_in_several_unions(self, make_context):
        schema = SchemaModel.of(
            ObjectTypeDefinition("Photo", fields=(field("url"),)),
            UnionTypeDefinition("Media", member_types=("Photo",)),
            UnionTypeDefinition("Attachment", member_types=("Photo",)),
        )
        resolver = HierarchyResolver(make_context(schema))
        assert resolver.super_types_of(schema.type_definition("Photo")) == ("Media", "Attachment")

    def test_implementing_an_object_is_allowed(self, make_context):
        schema = SchemaModel.of(
            ObjectTypeDefinition("Base", fields=(field("a"),)),
            ObjectTypeDefinition("Derived", fields=(field("a"),), interfaces=("Base",)),
        )
        resolver = HierarchyResolver(make_context(schema))
        assert resolver.super_types_of(schema.type_definition("Derived")) == ("Base",)

    def test_implementing_a_union_is_fatal(self, make_context):
        schema = SchemaModel.of(
            ObjectTypeDefinition("Thing", fields=(field("a"),), interfaces=("Result",)),
            UnionTypeDefinition("Result", member_types=()),
        )
        resolver = HierarchyResolver(make_context(schema))
        with pytest.raises(SchemaInconsistencyError, match="neither an interface nor an object") as exc_info:
            resolver.super_types_of(schema.type_definition("Thing"))
        assert exc_info.value.type_name == "Thing"

    def test_implementing_an_enum_is_fatal(self, make_context):
        schema = SchemaModel.of(
            InterfaceTypeDefinition("Shape", fields=(field("a"),), interfaces=("Color",)),
            EnumTypeDefinition("Color"),
        )
        resolver = HierarchyResolver(make_context(schema))
        with pytest.raises(SchemaInconsistencyError):
            resolver.super_types_of(schema.type_definition("Shape"))

    def test_other_kinds_have_no_supertypes(self, resolver, starwars_schema):
        with pytest.raises(ValueError):
            resolver.super_types_of(starwars_schema.type_definition("Episode"))


class TestInheritedFields:
    """Tests for inherited_field_names."""

    def test_fields_from_all_direct_interfaces(self, resolver, starwars_schema):
        human = starwars_schema.type_definition("Human")
        assert resolver.inherited_field_names(human) == {"id", "name", "friends"}

    def test_union_contributes_nothing(self, resolver, starwars_schema):
        starship = starwars_schema.type_definition("Starship")
        assert resolver.inherited_field_names(starship) == frozenset()

    def test_interface_inherits_from_its_interfaces(self, resolver, starwars_schema):
        character = starwars_schema.type_definition("Character")
        assert resolver.inherited_field_names(character) == {"id"}

    def test_only_direct_supertypes_count(self, make_context):
        schema = SchemaModel.of(
            InterfaceTypeDefinition("A", fields=(field("a"),)),
            InterfaceTypeDefinition("B", fields=(field("b"),), interfaces=("A",)),
            ObjectTypeDefinition("Leaf", fields=(field("a"), field("b")), interfaces=("B",)),
        )
        resolver = HierarchyResolver(make_context(schema))
        assert resolver.inherited_field_names(schema.type_definition("Leaf")) == {"b"}
