"""Tests for the annotation policy."""

from gql_stubgen.core.annotations import (
    DEFAULT_VALUE_ANNOTATION,
    RUNTIME_MODULE,
    AnnotationPolicy,
)
from gql_stubgen.core.declarations import AnnotationSpec
from gql_stubgen.core.parser import SchemaParser
from gql_stubgen.core.types import ClassRef


def marker(operation):
    return AnnotationSpec(ClassRef(RUNTIME_MODULE, f"graphql_{operation}"))


class TestAnnotationPolicy:
    """Tests for AnnotationPolicy."""

    def test_disabled_emits_nothing(self, starwars_schema):
        policy = AnnotationPolicy(False, starwars_schema)
        assert policy.default_value("10") == ()
        assert policy.root_operation("Query") == ()

    def test_default_value(self, starwars_schema):
        policy = AnnotationPolicy(True, starwars_schema)
        assert policy.default_value("{first: 5}") == (
            AnnotationSpec(DEFAULT_VALUE_ANNOTATION, ("{first: 5}",)),
        )
        assert policy.default_value(None) == ()

    def test_root_markers(self, starwars_schema):
        policy = AnnotationPolicy(True, starwars_schema)
        assert policy.root_operation("Query") == (marker("query"),)
        assert policy.root_operation("Mutation") == (marker("mutation"),)
        assert policy.root_operation("Subscription") == (marker("subscription"),)
        assert policy.root_operation("Human") == ()

    def test_custom_root_names(self):
        schema = SchemaParser.parse_sdl(
            "schema { query: Root mutation: Root } type Root { ping: String }"
        )
        policy = AnnotationPolicy(True, schema)
        assert policy.root_operation("Root") == (marker("query"), marker("mutation"))
