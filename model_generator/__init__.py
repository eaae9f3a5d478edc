"""
model_generator: compiles schema components into target-language class models.

Components (fields, types and discriminated oneOf unions) are compiled into
class descriptor trees through a pluggable naming strategy, then rendered
by a language generator.
"""

from .core import (
    ClassDescriptor,
    CodeGenerator,
    CompilationResult,
    CompilerConfig,
    CompilerError,
    ComponentCompiler,
    ComponentDefinition,
    DefaultNamingStrategy,
    Discriminator,
    EnumDescriptor,
    FieldDefinition,
    GenerationResult,
    IllegalOperationError,
    NamingStrategy,
    ResolvedField,
    SchemaValidationError,
    SingleClassDescriptor,
    TypeDescriptor,
    UnionClassDescriptor,
    compile_component,
    generate_code,
    load_components,
    load_config,
)
from .loader import JSONLoaderError, load_component_document
from .registry import (
    GeneratorRegistry,
    get_generator,
    get_language_info,
    list_supported_languages,
)

__version__ = "0.1.0"


def generate_from_document(
    document, component_name, language="kotlin", config=None, with_inheritance=None
):
    """
    Generate code for one component of a component document.

    Args:
        document: Parsed component document (see load_components)
        component_name: Name of the component to generate
        language: Target language name or alias
        config: Generator configuration (CompilerConfig, dict or file path)
        with_inheritance: Override of the configured inheritance mode

    Returns:
        GenerationResult with generated code
    """
    components = load_components(document)
    if component_name not in components:
        raise KeyError(
            f"Unknown component '{component_name}'. "
            f"Available: {', '.join(components)}"
        )

    generator = get_generator(language, config)
    return generate_code(generator, components[component_name], with_inheritance)


__all__ = [
    "TypeDescriptor",
    "FieldDefinition",
    "Discriminator",
    "ComponentDefinition",
    "load_components",
    "load_component_document",
    "JSONLoaderError",
    "ClassDescriptor",
    "EnumDescriptor",
    "ResolvedField",
    "SingleClassDescriptor",
    "UnionClassDescriptor",
    "ComponentCompiler",
    "CompilationResult",
    "compile_component",
    "CompilerError",
    "IllegalOperationError",
    "SchemaValidationError",
    "NamingStrategy",
    "DefaultNamingStrategy",
    "CompilerConfig",
    "load_config",
    "CodeGenerator",
    "GenerationResult",
    "generate_code",
    "GeneratorRegistry",
    "get_generator",
    "get_language_info",
    "list_supported_languages",
    "generate_from_document",
]
