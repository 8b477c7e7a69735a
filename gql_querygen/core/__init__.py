"""Core modules for generating typed result classes from GraphQL operations."""

from .classes import DefinedClass, EnumClass, InputClass, LeafClass, RootClass
from .container import QueryContainer, QueryDeclaration
from .context import GeneratorContext
from .errors import (
    CodegenError,
    InvariantError,
    NamingError,
    QueryValidationError,
    RenderError,
    UnsupportedTypeError,
)
from .expressions import build_expression, build_serializer
from .generator import CodeGenerator
from .hooks import AddHeaderHook, HookRunner, PostGenerateHook, PreRenderHook
from .inputs import InputResolver
from .ir import TypedInput, TypedOutput, VariableDefinition
from .methods import DefinedMethod, FieldAccessMethod, FieldAccessPath, FragmentBranch, SimpleMethod
from .registry import ClassRegistry
from .renderer import ModuleRenderer
from .scalars import BUILTIN_SCALARS, ScalarBinding, ScalarRegistry
from .schema_loader import load_schema
from .type_wrapper import TypeWrapper, UnwrappedType, rewrap, unwrap
from .validation import InterfacesAndUnionsHaveTypename, validate_query

__all__ = [
    # Errors
    "CodegenError",
    "InvariantError",
    "NamingError",
    "QueryValidationError",
    "RenderError",
    "UnsupportedTypeError",
    # Types and expressions
    "TypeWrapper",
    "UnwrappedType",
    "unwrap",
    "rewrap",
    "TypedInput",
    "TypedOutput",
    "VariableDefinition",
    "build_expression",
    "build_serializer",
    # Scalars
    "BUILTIN_SCALARS",
    "ScalarBinding",
    "ScalarRegistry",
    # Methods and classes
    "DefinedMethod",
    "SimpleMethod",
    "FieldAccessPath",
    "FragmentBranch",
    "FieldAccessMethod",
    "DefinedClass",
    "EnumClass",
    "InputClass",
    "LeafClass",
    "RootClass",
    "ClassRegistry",
    # Generation
    "GeneratorContext",
    "InputResolver",
    "CodeGenerator",
    "QueryContainer",
    "QueryDeclaration",
    "InterfacesAndUnionsHaveTypename",
    "validate_query",
    "load_schema",
    # Rendering
    "ModuleRenderer",
    "PreRenderHook",
    "PostGenerateHook",
    "AddHeaderHook",
    "HookRunner",
]
