"""Renders emission requests to Python source.

Renders Jinja2 templates to produce one module per declaration.

Supports custom templates via the template_dir parameter:
    renderer = ModuleRenderer(template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import sys
from collections import defaultdict
from pathlib import Path
from typing import Iterable, Mapping, Optional

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .declarations import (
    AnnotationSpec,
    DeclarationKind,
    EmissionRequest,
    OperationSpec,
    ParameterSpec,
    PropertySpec,
    TypeDeclaration,
)
from .naming import safe_enum_member, safe_identifier
from .types import ClassRef, TargetType

ABC_CLASS = ClassRef("abc", "ABC")
PROPERTY = ClassRef("builtins", "property")
ABSTRACT_METHOD = ClassRef("abc", "abstractmethod")
ANNOTATED = ClassRef("typing", "Annotated")
DATACLASS = ClassRef("dataclasses", "dataclass")
ENUM_CLASS = ClassRef("enum", "Enum")
OVERRIDE = ClassRef("typing_extensions", "override")
TYPE_CHECKING = ClassRef("typing", "TYPE_CHECKING")


def safe_docstring(text: str) -> str:
    """Escape text for use in docstrings."""
    if not text:
        return ""
    text = text.replace("\\", "\\\\")
    text = text.replace('"""', '\\"\\"\\"')
    if text.endswith('"'):
        text += " "
    return text


def docblock(text: str) -> str:
    """Format text as a triple-quoted docstring."""
    text = safe_docstring(text.strip())
    if "\n" in text:
        return f'"""{text}\n"""'
    return f'"""{text}"""'


def comment_block(text: str) -> str:
    """Format text as ``#:`` documentation comments, one per line."""
    return "\n".join(f"#: {line}".rstrip() for line in text.strip().splitlines())


def value_doc(description: str | None, default_value: str | None) -> str:
    """Describe an argument or input field, including its raw default."""
    parts = [description.strip()] if description else []
    if default_value is not None:
        parts.append(f"Default value: {default_value}")
    return "\n".join(parts)


def ancestry(requests: Iterable[EmissionRequest]) -> dict[ClassRef, frozenset[ClassRef]]:
    """Map every declared class to all of its transitive supertypes."""
    direct = {r.class_ref: r.declaration.supertypes for r in requests}
    result: dict[ClassRef, frozenset[ClassRef]] = {}

    def visit(ref: ClassRef) -> frozenset[ClassRef]:
        if ref not in result:
            found = set()
            for parent in direct.get(ref, ()):
                found.add(parent)
                found |= visit(parent)
            result[ref] = frozenset(found)
        return result[ref]

    for ref in direct:
        visit(ref)
    return result


class ImportCollector:
    """Collects the imports a generated module needs.

    Classes from the generated namespace that only appear in annotations are
    imported under ``if TYPE_CHECKING:`` so modules referring to each other
    do not import each other at runtime.
    """

    def __init__(self, module: str, namespace: str, own_name: str | None = None):
        self.module = module
        self.namespace = namespace
        self._bound: dict[str, ClassRef] = {}
        if own_name:
            self._bound[own_name] = ClassRef(module, own_name)
        self._runtime: dict[ClassRef, str] = {}
        self._deferred: dict[ClassRef, str] = {}

    def runtime_name(self, ref: ClassRef) -> str:
        """Name to use for a class needed when the module executes."""
        name = self._local_name(ref)
        if not self._is_local(ref):
            self._deferred.pop(ref, None)
            self._runtime[ref] = name
        return name

    def private_name(self, ref: ClassRef) -> str:
        """Underscored alias for a decorator applied inside a class body.

        Members of the class are defined in the same namespace and could
        otherwise shadow a decorator named like a schema field.
        """
        name = f"_{ref.name}"
        self._bound[name] = ref
        self._deferred.pop(ref, None)
        self._runtime[ref] = name
        return name

    def annotation_name(self, ref: ClassRef) -> str:
        """Name to use for a class that only appears in annotations."""
        if self._is_generated(ref) and ref not in self._runtime:
            name = self._local_name(ref)
            if not self._is_local(ref):
                self._deferred[ref] = name
            return name
        return self.runtime_name(ref)

    def render(self) -> str:
        if self._deferred:
            self.runtime_name(TYPE_CHECKING)

        stdlib: dict[str, list[str]] = defaultdict(list)
        other: dict[str, list[str]] = defaultdict(list)
        for ref, name in self._runtime.items():
            top_level = ref.module.split(".")[0]
            group = stdlib if top_level in sys.stdlib_module_names else other
            group[ref.module].append(self._import_name(ref, name))

        lines = ["from __future__ import annotations"]
        for group in (stdlib, other):
            if group:
                lines.append("")
                lines.extend(
                    f"from {module} import {', '.join(sorted(names))}"
                    for module, names in sorted(group.items())
                )
        if self._deferred:
            lines.extend(["", "if TYPE_CHECKING:"])
            lines.extend(
                f"    from {ref.module} import {self._import_name(ref, name)}"
                for ref, name in sorted(self._deferred.items(), key=lambda i: i[0].dotted)
            )
        return "\n".join(lines)

    def _is_local(self, ref: ClassRef) -> bool:
        return ref.module in ("builtins", self.module)

    def _is_generated(self, ref: ClassRef) -> bool:
        return ref.module.startswith(self.namespace + ".")

    def _local_name(self, ref: ClassRef) -> str:
        if ref.module == "builtins":
            return ref.name
        bound = self._bound.get(ref.name)
        if bound is None or bound == ref:
            self._bound[ref.name] = ref
            return ref.name
        alias = f"{ref.module.replace('.', '_')}_{ref.name}"
        self._bound[alias] = ref
        return alias

    @staticmethod
    def _import_name(ref: ClassRef, name: str) -> str:
        return ref.name if name == ref.name else f"{ref.name} as {name}"


class ModuleRenderer:
    """Renders one Python module per emission request.

    Available templates to override:
        - module.py.j2: module layout (docstring, imports, body)
        - class.py.j2: class statement with decorators and members
        - init.py.j2: constructor storing the stored properties
        - property.py.j2: stored or abstract property
        - operation.py.j2: operation stub
        - field.py.j2: dataclass field of an input object
        - enum_constant.py.j2: enum member
    """

    def __init__(self, template_dir: Optional[str] = None):
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_stubgen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["docblock"] = docblock
        self.env.filters["comment_block"] = comment_block
        self.env.filters["repr"] = repr

    def render(
        self,
        request: EmissionRequest,
        ancestors: Optional[Mapping[ClassRef, frozenset[ClassRef]]] = None,
    ) -> str:
        """Render a request to module source.

        ``ancestors`` (see :func:`ancestry`) lets the renderer drop bases that
        another base already inherits, keeping the MRO consistent.
        """
        declaration = request.declaration
        imports = ImportCollector(request.module, request.namespace, declaration.name)
        summary = f"Generated from GraphQL type ``{request.name}``."

        if declaration.kind is DeclarationKind.SCALAR:
            if declaration.description:
                summary = f"{summary}\n\n{declaration.description.strip()}"
            return self._snippet(
                "module.py.j2",
                summary=summary,
                file_comment=declaration.file_comment,
                imports="",
                body="",
            ) + "\n"

        body = self._class(declaration, imports, ancestors or {})
        return self._snippet(
            "module.py.j2",
            summary=summary,
            file_comment=declaration.file_comment,
            imports=imports.render(),
            body=body,
        ) + "\n"

    def _snippet(self, template_name: str, **context) -> str:
        return self.env.get_template(template_name).render(context).rstrip("\n")

    def _class(
        self,
        declaration: TypeDeclaration,
        imports: ImportCollector,
        ancestors: Mapping[ClassRef, frozenset[ClassRef]],
    ) -> str:
        kind = declaration.kind
        bases = [imports.runtime_name(ref) for ref in self._bases(declaration, ancestors)]
        decorators = [self._annotation(a, imports) for a in declaration.annotations]
        members = []

        if kind is DeclarationKind.SEALED_INTERFACE and not bases:
            bases = [imports.runtime_name(ABC_CLASS)]
        elif kind is DeclarationKind.ENUM:
            bases = [imports.runtime_name(ENUM_CLASS)]
        elif kind is DeclarationKind.DATA_CLASS:
            decorators.append(imports.runtime_name(DATACLASS))

        if kind is DeclarationKind.DATA_CLASS:
            members.extend(self._field(p, imports) for p in declaration.properties)
        elif kind is DeclarationKind.ENUM:
            members.extend(
                self._snippet(
                    "enum_constant.py.j2",
                    name=safe_enum_member(c.name),
                    value=c.name,
                    docstring=c.description,
                )
                for c in declaration.enum_constants
            )
        else:
            if declaration.constructor_parameters:
                members.append(self._snippet(
                    "init.py.j2",
                    parameters=self._parameters(declaration.constructor_parameters, imports),
                ))
            members.extend(self._property(p, imports) for p in declaration.properties)
            members.extend(self._operation(o, imports) for o in declaration.operations)

        return self._snippet(
            "class.py.j2",
            name=declaration.name,
            bases=bases,
            decorators=decorators,
            docstring=declaration.description,
            members=members,
        )

    @staticmethod
    def _bases(declaration: TypeDeclaration, ancestors) -> list[ClassRef]:
        supertypes = declaration.supertypes
        return [
            ref for ref in supertypes
            if not any(ref in ancestors.get(other, ()) for other in supertypes if other != ref)
        ]

    def _annotation(self, annotation: AnnotationSpec, imports: ImportCollector) -> str:
        name = imports.runtime_name(annotation.ref)
        if not annotation.arguments:
            return name
        return f"{name}({', '.join(repr(a) for a in annotation.arguments)})"

    def _type(self, target: TargetType, imports: ImportCollector) -> str:
        text = imports.annotation_name(target.ref)
        if target.inner is not None:
            text = f"{text}[{self._type(target.inner, imports)}]"
        if target.nullable:
            text = f"{text} | None"
        return text

    def _annotated(self, target: TargetType, annotations, imports: ImportCollector) -> str:
        text = self._type(target, imports)
        if annotations:
            metadata = ", ".join(self._annotation(a, imports) for a in annotations)
            text = f"{imports.runtime_name(ANNOTATED)}[{text}, {metadata}]"
        return text

    def _parameters(self, parameters, imports: ImportCollector) -> list[dict]:
        return [
            {
                "name": safe_identifier(p.name),
                "annotation": self._annotated(p.type, p.annotations, imports),
            }
            for p in parameters
        ]

    def _decorators(self, member, imports: ImportCollector) -> list[str]:
        decorators = []
        if isinstance(member, PropertySpec):
            decorators.append(imports.private_name(PROPERTY))
        if member.override:
            decorators.append(imports.private_name(OVERRIDE))
        if member.abstract:
            decorators.append(imports.private_name(ABSTRACT_METHOD))
        return decorators

    def _property(self, prop: PropertySpec, imports: ImportCollector) -> str:
        return self._snippet(
            "property.py.j2",
            decorators=self._decorators(prop, imports),
            name=safe_identifier(prop.name),
            annotation=self._type(prop.type, imports),
            docstring=prop.description,
            abstract=prop.abstract,
        )

    def _field(self, prop: PropertySpec, imports: ImportCollector) -> str:
        return self._snippet(
            "field.py.j2",
            name=safe_identifier(prop.name),
            annotation=self._annotated(prop.type, prop.annotations, imports),
            docstring=value_doc(prop.description, prop.default_value),
        )

    def _operation(self, operation: OperationSpec, imports: ImportCollector) -> str:
        return self._snippet(
            "operation.py.j2",
            decorators=self._decorators(operation, imports),
            name=safe_identifier(operation.name),
            parameters=self._parameters(operation.parameters, imports),
            returns=self._type(operation.return_type, imports),
            docstring=self._operation_doc(operation),
            abstract=operation.abstract,
        )

    @staticmethod
    def _operation_doc(operation: OperationSpec) -> str:
        parts = [operation.description.strip()] if operation.description else []
        documented: list[ParameterSpec] = [
            p for p in operation.parameters
            if p.description or p.default_value is not None
        ]
        if documented:
            lines = ["Args:"]
            for parameter in documented:
                first, *rest = value_doc(parameter.description, parameter.default_value).splitlines() or [""]
                lines.append(f"    {safe_identifier(parameter.name)}: {first}")
                lines.extend(f"        {line}" if line else "" for line in rest)
            parts.append("\n".join(lines))
        return "\n\n".join(parts)
