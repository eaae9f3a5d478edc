"""
Core compilation components.

Provides the component model, the compiler and the base classes used by
all language generators.
"""

from .compiler import CompilationResult, ComponentCompiler, compile_component
from .config import CompilerConfig, ConfigError, ConfigManager, load_config
from .definition import (
    ComponentDefinition,
    DefinitionError,
    Discriminator,
    FieldDefinition,
    TypeDescriptor,
    load_components,
)
from .descriptors import (
    ClassDescriptor,
    EnumDescriptor,
    ResolvedField,
    SingleClassDescriptor,
    UnionClassDescriptor,
)
from .errors import CompilerError, IllegalOperationError, SchemaValidationError
from .generator import CodeGenerator, GenerationResult, generate_code
from .naming import DefaultNamingStrategy, NameSanitizer, NamingCase, NamingStrategy
from .provided_types import ProvidedTypeError, ProvidedTypeFileReader, ProvidedTypeReader
from .templates import TemplateEngine, TemplateError

__all__ = [
    # Component model - compiler input
    "TypeDescriptor",
    "FieldDefinition",
    "Discriminator",
    "ComponentDefinition",
    "DefinitionError",
    "load_components",
    # Class descriptors - compiler output
    "ClassDescriptor",
    "EnumDescriptor",
    "ResolvedField",
    "SingleClassDescriptor",
    "UnionClassDescriptor",
    # Compiler
    "ComponentCompiler",
    "CompilationResult",
    "compile_component",
    "CompilerError",
    "IllegalOperationError",
    "SchemaValidationError",
    # Naming
    "NamingStrategy",
    "DefaultNamingStrategy",
    "NameSanitizer",
    "NamingCase",
    # Configuration
    "CompilerConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    "ProvidedTypeReader",
    "ProvidedTypeFileReader",
    "ProvidedTypeError",
    # Generation
    "CodeGenerator",
    "GenerationResult",
    "generate_code",
    "TemplateEngine",
    "TemplateError",
]
