"""Core modules for GraphQL declaration generation."""

from .annotations import AnnotationPolicy
from .arguments import ArgumentBinder
from .config import Configuration
from .context import GenerationContext
from .declarations import (
    AnnotationSpec,
    DeclarationKind,
    EmissionRequest,
    EnumConstantSpec,
    OperationSpec,
    ParameterSpec,
    PropertySpec,
    TypeDeclaration,
)
from .emitter import TypeDeclarationEmitter
from .errors import SchemaInconsistencyError, SchemaLoadError, StubgenError
from .generator import CodeGenerator
from .hierarchy import HierarchyResolver
from .hooks import (
    AddHeaderHook,
    FilterTypesHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
)
from .mapper import TypeMapper
from .members import MemberShapeDecider
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
    UnionTypeDefinition,
)
from .parser import SchemaParser
from .render import ModuleRenderer
from .types import ClassRef, TargetType, Wrapper

__all__ = [
    # Schema model
    "EnumTypeDefinition",
    "EnumValueDefinition",
    "FieldDefinition",
    "InputObjectTypeDefinition",
    "InputValueDefinition",
    "InterfaceTypeDefinition",
    "ListType",
    "NamedType",
    "NonNullType",
    "ObjectTypeDefinition",
    "ScalarTypeDefinition",
    "SchemaModel",
    "TypeDefinition",
    "UnionTypeDefinition",
    # Parser
    "SchemaParser",
    # Settings
    "Configuration",
    "GenerationContext",
    # Target types
    "ClassRef",
    "TargetType",
    "Wrapper",
    # Decision engine
    "AnnotationPolicy",
    "ArgumentBinder",
    "HierarchyResolver",
    "MemberShapeDecider",
    "TypeDeclarationEmitter",
    "TypeMapper",
    # Declarations
    "AnnotationSpec",
    "DeclarationKind",
    "EmissionRequest",
    "EnumConstantSpec",
    "OperationSpec",
    "ParameterSpec",
    "PropertySpec",
    "TypeDeclaration",
    # Output
    "CodeGenerator",
    "ModuleRenderer",
    # Hooks
    "AddHeaderHook",
    "FilterTypesHook",
    "HookRunner",
    "PostGenerateHook",
    "PreGenerateHook",
    # Errors
    "SchemaInconsistencyError",
    "SchemaLoadError",
    "StubgenError",
]
