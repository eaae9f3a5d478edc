"""
Kotlin code generator implementation.

Renders data classes for plain components and sealed class hierarchies
with Jackson polymorphic type annotations for oneOf components.
"""

from typing import Dict, List, Optional

from ...core.config import CompilerConfig
from ...core.descriptors import (
    ClassDescriptor,
    EnumDescriptor,
    ResolvedField,
    SingleClassDescriptor,
    UnionClassDescriptor,
)
from ...core.generator import CodeGenerator
from ...core.naming import NamingCase, NamingStrategy
from ...logging_config import get_logger
from .naming import (
    KOTLIN_DEFAULT_PACKAGES,
    KotlinNamingStrategy,
    create_kotlin_sanitizer,
    escape_enum_literal,
)

logger = get_logger(__name__)

JSON_TYPE_INFO = "com.fasterxml.jackson.annotation.JsonTypeInfo"
JSON_SUB_TYPES = "com.fasterxml.jackson.annotation.JsonSubTypes"

FILE_TEMPLATE = """\
{% if header %}
{{ header | comment("//") }}

{% endif %}
{% if package %}
package {{ package }}

{% endif %}
{% for import in imports %}
import {{ import }}
{% endfor %}
{% if imports %}

{% endif %}
{{ body }}
"""

DATA_CLASS_TEMPLATE = """\
{% if fields %}
data class {{ name }}(
{% for field in fields %}
{{ indent }}{{ field }}{{ "," if not loop.last else "" }}
{% endfor %}
){{ supertype }}
{% else %}
class {{ name }}{{ supertype }}
{% endif %}
"""

SEALED_CLASS_TEMPLATE = """\
{% for annotation in annotations %}
{{ annotation }}
{% endfor %}
sealed class {{ name }}{{ supertype }}{{ " {" if fields else "" }}
{% for field in fields %}
{{ indent }}{{ field }}
{% endfor %}
{% if fields %}
}
{% endif %}
"""

ENUM_TEMPLATE = """\
enum class {{ name }} {
{% for literal in literals %}
{{ indent }}{{ literal }}{{ "," if not loop.last else "" }}
{% endfor %}
}
"""


class KotlinGenerator(CodeGenerator):
    """Code generator for Kotlin data classes and sealed hierarchies."""

    def __init__(self, config: Optional[CompilerConfig] = None):
        """Initialize Kotlin generator with configuration."""
        super().__init__(config)
        self.sanitizer = create_kotlin_sanitizer()
        self.jackson_annotations = self.config.custom.get("jackson_annotations", True)

    @property
    def language_name(self) -> str:
        return "kotlin"

    @property
    def file_extension(self) -> str:
        return ".kt"

    def create_naming_strategy(self) -> NamingStrategy:
        return KotlinNamingStrategy()

    def get_templates(self) -> Dict[str, str]:
        return {
            "file.kt.j2": FILE_TEMPLATE,
            "data_class.kt.j2": DATA_CLASS_TEMPLATE,
            "sealed_class.kt.j2": SEALED_CLASS_TEMPLATE,
            "enum.kt.j2": ENUM_TEMPLATE,
        }

    def render(self, descriptor: ClassDescriptor) -> str:
        """Render a descriptor tree as a single Kotlin file."""
        package = descriptor.qualifier or self.config.package_name
        blocks: List[str] = []
        enums: Dict[str, EnumDescriptor] = {}

        if descriptor.is_union:
            self._render_union(descriptor, None, blocks, enums, root=True)
        else:
            blocks.append(self._render_data_class(descriptor, None))
            self.collect_enums(descriptor.fields, enums)

        for enum in enums.values():
            blocks.append(self._render_enum(enum))

        logger.debug("Rendered %d Kotlin declarations for %s", len(blocks), descriptor.name)
        return self.render_template(
            "file.kt.j2",
            {
                "header": self.header_comment(descriptor),
                "package": package,
                "imports": self._get_imports(descriptor, package),
                "body": "\n".join(blocks),
            },
        )

    def _render_union(
        self,
        union: UnionClassDescriptor,
        parent: Optional[str],
        blocks: List[str],
        enums: Dict[str, EnumDescriptor],
        root: bool = False,
    ):
        annotations = []
        if root and self.jackson_annotations:
            annotations = self._type_annotations(union)

        blocks.append(
            self.render_template(
                "sealed_class.kt.j2",
                {
                    "annotations": annotations,
                    "name": union.name,
                    "supertype": self._supertype(parent),
                    "fields": [self._property(f) for f in union.common_fields],
                    "indent": self.indent(),
                },
            )
        )
        self.collect_enums(union.common_fields, enums)

        for subclass in union.subclasses:
            if subclass.is_union:
                self._render_union(subclass, union.name, blocks, enums)
            else:
                blocks.append(self._render_data_class(subclass, union.name))
                self.collect_enums(subclass.fields, enums)

    def _render_data_class(self, descriptor: SingleClassDescriptor, parent: Optional[str]) -> str:
        return self.render_template(
            "data_class.kt.j2",
            {
                "name": descriptor.name,
                "supertype": self._supertype(parent),
                "fields": [self._property(f) for f in descriptor.fields],
                "indent": self.indent(),
            },
        )

    def _render_enum(self, enum: EnumDescriptor) -> str:
        return self.render_template(
            "enum.kt.j2",
            {
                "name": enum.name,
                "literals": [escape_enum_literal(literal) for literal in enum.literals],
                "indent": self.indent(),
            },
        )

    def _property(self, field: ResolvedField) -> str:
        """Kotlin property declaration for a field."""
        name = self.sanitizer.sanitize_name(field.name, NamingCase.ORIGINAL)
        field_type = field.resolved_type if field.is_required else f"{field.resolved_type}?"

        if field.abstract:
            return f"abstract val {name}: {field_type}"

        modifier = "override val" if field.overridden else "val"
        default = "" if field.is_required else " = null"
        return f"{modifier} {name}: {field_type}{default}"

    def _type_annotations(self, union: UnionClassDescriptor) -> List[str]:
        sub_types = [
            f'{self.indent()}JsonSubTypes.Type(value = {name}::class, name = "{literal}")'
            for name, literal in union.variant_mapping.items()
        ]
        return [
            "@JsonTypeInfo(use = JsonTypeInfo.Id.NAME, include = JsonTypeInfo.As.PROPERTY, "
            f'property = "{union.discriminator_field_name}")',
            "@JsonSubTypes(\n" + ",\n".join(sub_types) + "\n)",
        ]

    def _supertype(self, parent: Optional[str]) -> str:
        return f" : {parent}()" if parent else ""

    def _get_imports(self, descriptor: ClassDescriptor, package: str) -> List[str]:
        """Imports that Kotlin does not provide implicitly."""
        imports = set()
        for qualifier in descriptor.imports:
            if "." not in qualifier:
                continue
            qualifier_package = qualifier.rsplit(".", 1)[0]
            if qualifier_package in KOTLIN_DEFAULT_PACKAGES or qualifier_package == package:
                continue
            imports.add(qualifier)

        if descriptor.is_union and self.jackson_annotations:
            imports.update({JSON_TYPE_INFO, JSON_SUB_TYPES})

        return sorted(imports)


def create_kotlin_generator(package_name: str = "", **custom) -> KotlinGenerator:
    """Create a Kotlin generator with the given package and custom options."""
    from ...core.config import load_config

    overrides = {"custom": custom}
    if package_name:
        overrides["package_name"] = package_name
    return KotlinGenerator(load_config("kotlin", overrides))
