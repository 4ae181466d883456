"""Tests for rendering declarations to Python source."""

import ast

import pytest

from gql_stubgen.core.declarations import (
    DeclarationKind,
    EmissionRequest,
    TypeDeclaration,
)
from gql_stubgen.core.emitter import TypeDeclarationEmitter
from gql_stubgen.core.render import (
    ImportCollector,
    ModuleRenderer,
    ancestry,
    docblock,
    safe_docstring,
    value_doc,
)
from gql_stubgen.core.types import ClassRef


@pytest.fixture
def renderer():
    return ModuleRenderer()


def render_all(context):
    requests = list(TypeDeclarationEmitter(context).emit())
    ancestors = ancestry(requests)
    renderer = ModuleRenderer()
    return {r.name: renderer.render(r, ancestors) for r in requests}


@pytest.fixture
def modules(starwars_context):
    return render_all(starwars_context)


@pytest.fixture
def annotated_modules(make_context, starwars_schema):
    return render_all(make_context(
        starwars_schema, scalar_mapping={"DateTime": "datetime.datetime"}, annotations=True
    ))


class TestDocstrings:
    """Tests for docstring helpers."""

    def test_escapes_triple_quotes(self):
        assert safe_docstring('say """hi"""') == 'say \\"\\"\\"hi\\"\\"\\"'

    def test_escapes_backslashes(self):
        assert safe_docstring("a\\b") == "a\\\\b"

    def test_trailing_quote(self):
        assert safe_docstring('the "end"') == 'the "end" '

    @pytest.mark.parametrize("text", ['He said """no"""', "C:\\path", 'ends with "', "two\nlines"])
    def test_docblock_round_trip(self, text):
        tree = ast.parse(docblock(text))
        assert ast.literal_eval(tree.body[0].value).rstrip() == text.strip()

    def test_multiline_closes_on_own_line(self):
        assert docblock("one\ntwo") == '"""one\ntwo\n"""'

    def test_value_doc(self):
        assert value_doc("Page size", "10") == "Page size\nDefault value: 10"
        assert value_doc(None, "10") == "Default value: 10"
        assert value_doc("Page size", None) == "Page size"


class TestImportCollector:
    """Tests for ImportCollector."""

    def test_groups_and_sorting(self):
        imports = ImportCollector("api.User", "api", "User")
        imports.runtime_name(ClassRef("typing_extensions", "override"))
        imports.runtime_name(ClassRef("abc", "ABC"))
        imports.runtime_name(ClassRef("builtins", "str"))
        assert imports.render() == (
            "from __future__ import annotations\n"
            "\n"
            "from abc import ABC\n"
            "\n"
            "from typing_extensions import override"
        )

    def test_generated_annotations_are_deferred(self):
        imports = ImportCollector("api.User", "api", "User")
        assert imports.annotation_name(ClassRef("api.Post", "Post")) == "Post"
        assert imports.render() == (
            "from __future__ import annotations\n"
            "\n"
            "from typing import TYPE_CHECKING\n"
            "\n"
            "if TYPE_CHECKING:\n"
            "    from api.Post import Post"
        )

    def test_runtime_use_wins_over_deferred(self):
        imports = ImportCollector("api.User", "api", "User")
        imports.annotation_name(ClassRef("api.Node", "Node"))
        imports.runtime_name(ClassRef("api.Node", "Node"))
        rendered = imports.render()
        assert "from api.Node import Node" in rendered
        assert "TYPE_CHECKING" not in rendered

    def test_own_class_is_not_imported(self):
        imports = ImportCollector("api.User", "api", "User")
        assert imports.annotation_name(ClassRef("api.User", "User")) == "User"
        assert imports.render() == "from __future__ import annotations"

    def test_name_clash_gets_alias(self):
        imports = ImportCollector("api.Event", "api", "Event")
        assert imports.runtime_name(ClassRef("datetime", "date")) == "date"
        alias = imports.runtime_name(ClassRef("mylib.types", "date"))
        assert alias == "mylib_types_date"
        assert "from mylib.types import date as mylib_types_date" in imports.render()

    def test_clash_with_own_class(self):
        imports = ImportCollector("api.Decimal", "api", "Decimal")
        assert imports.runtime_name(ClassRef("decimal", "Decimal")) == "decimal_Decimal"

    def test_private_decorator_names(self):
        imports = ImportCollector("api.User", "api", "User")
        assert imports.private_name(ClassRef("builtins", "property")) == "_property"
        assert imports.private_name(ClassRef("typing_extensions", "override")) == "_override"
        assert imports.render() == (
            "from __future__ import annotations\n"
            "\n"
            "from builtins import property as _property\n"
            "\n"
            "from typing_extensions import override as _override"
        )


class TestAncestry:
    """Tests for transitive supertypes."""

    def test_transitive(self, starwars_context):
        requests = list(TypeDeclarationEmitter(starwars_context).emit())
        ancestors = ancestry(requests)
        node = ClassRef("starwars.Node", "Node")
        character = ClassRef("starwars.Character", "Character")
        assert ancestors[character] == {node}
        assert ancestors[ClassRef("starwars.Droid", "Droid")] == {
            node,
            character,
            ClassRef("starwars.SearchResult", "SearchResult"),
        }
        assert ancestors[node] == frozenset()


class TestObjects:
    """Rendering of concrete classes."""

    def test_all_modules_parse(self, modules, annotated_modules):
        for source in [*modules.values(), *annotated_modules.values()]:
            ast.parse(source)

    def test_module_header(self, modules):
        assert modules["Human"].startswith(
            '"""Generated from GraphQL type ``Human``."""\n\nfrom __future__ import annotations\n'
        )

    def test_redundant_bases_are_pruned(self, modules):
        assert "class Human(Character, SearchResult):" in modules["Human"]
        assert "from starwars.Node import Node" not in modules["Human"]

    def test_bases_without_ancestry(self, starwars_context, renderer):
        request = TypeDeclarationEmitter(starwars_context).request_for(
            starwars_context.schema.type_definition("Human")
        )
        assert "class Human(Node, Character, SearchResult):" in renderer.render(request)

    def test_constructor_and_stored_property(self, modules):
        source = modules["Human"]
        assert "    def __init__(self, id: str) -> None:\n        self._id = id\n" in source
        assert (
            "    @_property\n"
            "    @_override\n"
            "    def id(self) -> str:\n"
            "        return self._id\n"
        ) in source
        assert "from typing_extensions import override as _override" in source
        assert "from builtins import property as _property" in source

    def test_operation_stub(self, modules):
        source = modules["Query"]
        assert "    def hero(self, context: ExecutionContext, id: str) -> Character | None:\n" in source
        assert "        raise NotImplementedError\n" in source
        assert "from gql_stubgen.runtime import ExecutionContext" in source

    def test_cross_references_are_type_checking_only(self, modules):
        source = modules["Query"]
        assert "if TYPE_CHECKING:\n" in source
        assert "    from starwars.Character import Character\n" in source
        assert "    from starwars.SearchResult import SearchResult\n" in source

    def test_list_types(self, modules):
        assert "def search(self, context: ExecutionContext, text: str) -> list[SearchResult]:" in modules["Query"]

    def test_arguments_with_defaults_are_documented(self, modules):
        source = modules["Human"]
        assert (
            "def friends(self, context: ExecutionContext, first: int | None, "
            "after: Omittable[str | None]) -> list[Character | None] | None:"
        ) in source
        assert '        """Args:\n            first: Default value: 10\n        """\n' in source

    def test_subscription_stream(self, modules):
        source = modules["Subscription"]
        assert (
            "def reviewAdded(self, context: ExecutionContext, episode: Omittable[Episode | None]) "
            "-> AsyncIterator[Review | None]:"
        ) in source
        assert "from collections.abc import AsyncIterator" in source

    def test_custom_scalar_import(self, modules):
        assert "from datetime import datetime" in modules["Review"]
        assert "def createdAt(self, context: ExecutionContext) -> datetime | None:" in modules["Review"]

    def test_root_decorators(self, annotated_modules):
        assert "@graphql_query\nclass Query:" in annotated_modules["Query"]
        assert "from gql_stubgen.runtime import ExecutionContext, Omittable, graphql_query" in annotated_modules["Query"]


class TestInterfaces:
    """Rendering of abstract classes."""

    def test_root_interface_extends_abc(self, modules):
        source = modules["Node"]
        assert "class Node(ABC):" in source
        assert (
            "    @_property\n"
            "    @_abstractmethod\n"
            "    def id(self) -> str:\n"
            "        ...\n"
        ) in source

    def test_interface_docstring(self, modules):
        assert 'class Character(Node):\n    """A character in the saga"""\n\n    @_property' in modules["Character"]

    def test_abstract_override(self, modules):
        assert (
            "    @_override\n"
            "    @_abstractmethod\n"
            "    def name(self, context: ExecutionContext) -> str:\n"
            "        ...\n"
        ) not in modules["Character"]
        assert (
            "    @_abstractmethod\n"
            "    def name(self, context: ExecutionContext) -> str:\n"
            "        ...\n"
        ) in modules["Character"]

    def test_empty_union(self, modules):
        assert "class SearchResult(ABC):\n    pass\n" in modules["SearchResult"]


class TestEnumsInputsScalars:
    """Rendering of enums, dataclasses and scalar placeholders."""

    def test_enum(self, modules):
        source = modules["Episode"]
        assert "from enum import Enum" in source
        assert (
            "class Episode(Enum):\n"
            "    #: Released in 1977.\n"
            "    NEWHOPE = 'NEWHOPE'\n"
            "\n"
            "    EMPIRE = 'EMPIRE'\n"
        ) in source

    def test_dataclass_fields(self, modules):
        source = modules["ReviewInput"]
        assert "@dataclass\nclass ReviewInput:" in source
        assert "    stars: int\n" in source
        assert "    commentary: Omittable[str | None]\n" in source
        assert '    limit: int | None\n    """Default value: 10"""\n' in source

    def test_dataclass_default_annotation(self, annotated_modules):
        source = annotated_modules["ReviewInput"]
        assert "    limit: Annotated[int | None, GraphQLDefault('10')]\n" in source
        assert "from typing import Annotated" in source

    def test_argument_default_annotation(self, annotated_modules):
        assert "unit: Annotated[LengthUnit | None, GraphQLDefault('METER')]" in annotated_modules["Starship"]

    def test_scalar_placeholder(self, modules):
        assert modules["DateTime"] == (
            '"""Generated from GraphQL type ``DateTime``.\n'
            "\n"
            "An ISO 8601 timestamp.\n"
            '"""\n'
            "\n"
            "# Put your scalar definition and coercion here\n"
        )

    def test_keyword_names(self, make_context):
        context = make_context("input Range { from: Int, to: Int } type Query { a(r: Range): Int }")
        source = render_all(context)["Range"]
        assert "    from_: Omittable[int | None]\n" in source
        ast.parse(source)

    def test_reserved_enum_members(self, make_context):
        context = make_context("enum Method { mro GET _POST_ } type Query { a: Method }")
        source = render_all(context)["Method"]
        assert "    mro_ = 'mro'\n" in source
        assert "    GET = 'GET'\n" in source
        assert "    _POST__ = '_POST_'\n" in source


class TestCustomTemplates:
    """User templates override the built-in ones."""

    def test_override_single_template(self, tmp_path, starwars_context):
        (tmp_path / "operation.py.j2").write_text(
            "def {{ name }}(self, *args) -> {{ returns }}:\n    return None\n"
        )
        renderer = ModuleRenderer(str(tmp_path))
        request = TypeDeclarationEmitter(starwars_context).request_for(
            starwars_context.schema.type_definition("Query")
        )
        source = renderer.render(request)
        assert "def hero(self, *args) -> Character | None:\n        return None" in source
        ast.parse(source)

    def test_missing_directory_uses_defaults(self, tmp_path):
        renderer = ModuleRenderer(str(tmp_path / "missing"))
        request = EmissionRequest(
            "api", "Empty", TypeDeclaration(kind=DeclarationKind.SEALED_INTERFACE, name="Empty")
        )
        assert "class Empty(ABC):\n    pass" in renderer.render(request)
