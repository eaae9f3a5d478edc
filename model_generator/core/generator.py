"""
Base generator interface for all code generation targets.

A generator owns the naming strategy of its language, compiles components
with it and renders the resulting descriptor tree into source text.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from ..logging_config import get_logger
from .compiler import ComponentCompiler
from .config import CompilerConfig
from .definition import ComponentDefinition
from .descriptors import ClassDescriptor, EnumDescriptor, ResolvedField
from .errors import CompilerError, SchemaValidationError
from .naming import NamingStrategy
from .provided_types import ProvidedTypeError, ProvidedTypeFileReader
from .templates import TemplateEngine, TemplateError

logger = get_logger(__name__)


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[CompilerConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or CompilerConfig()
        self.naming = self.create_naming_strategy()
        self._template_engine = None
        self._provided_types = None

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'kotlin', 'python')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.kt', '.py')."""
        pass

    @abstractmethod
    def create_naming_strategy(self) -> NamingStrategy:
        """Return the naming strategy used when compiling for this language."""
        pass

    @abstractmethod
    def render(self, descriptor: ClassDescriptor) -> str:
        """
        Render a compiled descriptor tree into source code.

        Args:
            descriptor: Single or union class descriptor

        Returns:
            Generated code as a string
        """
        pass

    def get_templates(self) -> Dict[str, str]:
        """In-memory templates of this generator, keyed by name."""
        return {}

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._template_engine = TemplateEngine(self.get_templates())
        return self._template_engine

    @property
    def provided_types(self) -> Dict[str, str]:
        """Provided type mapping from the configured file, loaded once."""
        if self._provided_types is None:
            if self.config.provided_types_file:
                reader = ProvidedTypeFileReader(self.config.provided_types_file)
                self._provided_types = reader.get_mapping()
            else:
                self._provided_types = {}
        return self._provided_types

    def create_compiler(self) -> ComponentCompiler:
        """Create a compiler wired with this generator's naming and provided types."""
        return ComponentCompiler(self.naming, self.provided_types, self.config.meta_prefix)

    def compile(
        self, component: ComponentDefinition, with_inheritance: Optional[bool] = None
    ) -> ClassDescriptor:
        """Compile a component, inheritance defaults to the configured mode."""
        if with_inheritance is None:
            with_inheritance = self.config.with_inheritance
        return self.create_compiler().compile(component, with_inheritance)

    def generate(
        self, component: ComponentDefinition, with_inheritance: Optional[bool] = None
    ) -> str:
        """Compile and render a component."""
        return self.format_code(self.render(self.compile(component, with_inheritance)))

    def validate_descriptor(self, descriptor: ClassDescriptor) -> List[str]:
        """
        Check a compiled descriptor for suspicious but legal results.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []
        if not descriptor.is_union:
            if not descriptor.fields:
                warnings.append(f"Class '{descriptor.name}' has no fields")
            return warnings

        for subclass in descriptor.subclasses:
            warnings.extend(self.validate_descriptor(subclass))
        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply language-specific formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        # Basic cleanup - remove excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:  # Allow max 2 consecutive blank lines
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render one of this generator's templates."""
        return self.template_engine.render_template(template_name, context)

    def indent(self, level: int = 1) -> str:
        return " " * (self.config.indent_size * level)

    def header_comment(self, descriptor: ClassDescriptor) -> str:
        """Text of the generated-file header, empty when comments are disabled."""
        if not self.config.add_comments:
            return ""
        return f"Generated by model-generator from component {descriptor.name}.\nDo not edit."

    def collect_enums(
        self, fields: Iterable[ResolvedField], enums: Dict[str, EnumDescriptor]
    ):
        """
        Add the enums of fields to a file-wide enum table keyed by name.

        Raises:
            SchemaValidationError: If an enum name is reused with other literals
        """
        for field in fields:
            if field.enum is None:
                continue
            existing = enums.setdefault(field.enum.name, field.enum)
            if existing != field.enum:
                raise SchemaValidationError(
                    f"Enum '{field.enum.name}' declared with different values: "
                    f"{list(existing.literals)} and {list(field.enum.literals)}",
                    field_name=field.name,
                    first=existing,
                    second=field.enum,
                )


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def _count_classes(descriptor: ClassDescriptor) -> int:
    if not descriptor.is_union:
        return 1
    return 1 + sum(_count_classes(subclass) for subclass in descriptor.subclasses)


def generate_code(
    generator: CodeGenerator,
    component: ComponentDefinition,
    with_inheritance: Optional[bool] = None,
) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        component: Root component to generate code for
        with_inheritance: Override of the configured inheritance mode

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    if with_inheritance is None:
        with_inheritance = generator.config.with_inheritance

    try:
        descriptor = generator.compile(component, with_inheritance)
        warnings = generator.validate_descriptor(descriptor)
        code = generator.format_code(generator.render(descriptor))
    except (CompilerError, ProvidedTypeError, TemplateError) as e:
        logger.error("Generation of %s failed: %s", component.name, e)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)

    metadata = {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
        "component": component.name,
        "is_union": descriptor.is_union,
        "with_inheritance": with_inheritance,
        "class_count": _count_classes(descriptor),
        "import_count": len(descriptor.imports),
    }
    return GenerationResult(code, warnings, metadata)
