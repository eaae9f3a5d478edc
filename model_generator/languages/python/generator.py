"""
Python code generator implementation.

Renders keyword-only dataclasses; oneOf components become base classes
whose leaf subclasses carry their discriminator literal as a ClassVar.
"""

import json
from collections import defaultdict
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
from .naming import PYTHON_IMPLICIT_MODULES, PythonNamingStrategy, create_python_sanitizer

logger = get_logger(__name__)

FILE_TEMPLATE = """\
{% if header %}
{{ header | comment("#") }}

{% endif %}
{% for import in imports %}
{{ import }}
{% endfor %}


{{ body }}
"""

CLASS_TEMPLATE = """\
{{ decorator }}
class {{ name }}{{ "(" ~ parent ~ ")" if parent else "" }}:
{% for line in class_vars %}
{{ indent }}{{ line }}
{% endfor %}
{% for field in fields %}
{{ indent }}{{ field }}
{% endfor %}
{% if not class_vars and not fields %}
{{ indent }}pass
{% endif %}
"""

ENUM_TEMPLATE = """\
class {{ name }}(str, Enum):
{% for member, value in members %}
{{ indent }}{{ member }} = {{ value }}
{% endfor %}
"""


class PythonGenerator(CodeGenerator):
    """Code generator for Python dataclasses."""

    def __init__(self, config: Optional[CompilerConfig] = None):
        """Initialize Python generator with configuration."""
        super().__init__(config)
        self.sanitizer = create_python_sanitizer()
        self.kw_only = self.config.custom.get("kw_only", True)
        self.frozen = self.config.custom.get("frozen", False)

    @property
    def language_name(self) -> str:
        return "python"

    @property
    def file_extension(self) -> str:
        return ".py"

    def create_naming_strategy(self) -> NamingStrategy:
        return PythonNamingStrategy()

    def get_templates(self) -> Dict[str, str]:
        return {
            "file.py.j2": FILE_TEMPLATE,
            "class.py.j2": CLASS_TEMPLATE,
            "enum.py.j2": ENUM_TEMPLATE,
        }

    def render(self, descriptor: ClassDescriptor) -> str:
        """Render a descriptor tree as a single Python module."""
        enums: Dict[str, EnumDescriptor] = {}
        classes: List[str] = []

        if descriptor.is_union:
            self._render_union(descriptor, None, classes, enums)
        else:
            classes.append(self._render_class(descriptor.name, None, [], descriptor.fields))
            self.collect_enums(descriptor.fields, enums)

        blocks = [self._render_enum(enum) for enum in enums.values()] + classes
        logger.debug("Rendered %d Python declarations for %s", len(blocks), descriptor.name)
        return self.render_template(
            "file.py.j2",
            {
                "header": self.header_comment(descriptor),
                "imports": self._get_imports(descriptor, bool(enums)),
                "body": "\n\n".join(blocks),
            },
        )

    def _render_union(
        self,
        union: UnionClassDescriptor,
        parent: Optional[str],
        classes: List[str],
        enums: Dict[str, EnumDescriptor],
    ):
        class_vars = [f"__discriminator__: ClassVar[str] = {json.dumps(union.discriminator_field_name)}"]
        classes.append(self._render_class(union.name, parent, class_vars, union.common_fields))
        self.collect_enums(union.common_fields, enums)

        tag_name = self.sanitizer.sanitize_name(union.discriminator_field_name, NamingCase.SNAKE_CASE)
        for subclass in union.subclasses:
            if subclass.is_union:
                self._render_union(subclass, union.name, classes, enums)
                continue
            literal = union.variant_mapping[subclass.name]
            own_fields = [f for f in subclass.fields if not f.overridden]
            class_vars = [f"{tag_name}: ClassVar[str] = {json.dumps(literal)}"]
            classes.append(self._render_class(subclass.name, union.name, class_vars, own_fields))
            self.collect_enums(subclass.fields, enums)

    def _render_class(self, name, parent, class_vars, fields) -> str:
        options = []
        if self.kw_only:
            options.append("kw_only=True")
        if self.frozen:
            options.append("frozen=True")
        decorator = f"@dataclass({', '.join(options)})" if options else "@dataclass"

        # Without kw_only, fields with defaults must follow required ones
        if not self.kw_only:
            fields = sorted(fields, key=lambda f: not f.is_required)

        return self.render_template(
            "class.py.j2",
            {
                "decorator": decorator,
                "name": name,
                "parent": parent,
                "class_vars": class_vars,
                "fields": [self._attribute(f) for f in fields],
                "indent": self.indent(),
            },
        )

    def _render_enum(self, enum: EnumDescriptor) -> str:
        members = [
            (self.sanitizer.sanitize_name(literal, NamingCase.SCREAMING_SNAKE), json.dumps(literal))
            for literal in enum.literals
        ]
        return self.render_template(
            "enum.py.j2", {"name": enum.name, "members": members, "indent": self.indent()}
        )

    def _attribute(self, field: ResolvedField) -> str:
        name = self.sanitizer.sanitize_name(field.name, NamingCase.SNAKE_CASE)
        if field.is_required:
            return f"{name}: {field.resolved_type}"
        return f"{name}: {field.resolved_type} | None = None"

    def _get_imports(self, descriptor: ClassDescriptor, has_enums: bool) -> List[str]:
        """Import statements, standard library first."""
        statements = ["from dataclasses import dataclass"]
        if has_enums:
            statements.append("from enum import Enum")
        if descriptor.is_union:
            statements.append("from typing import ClassVar")

        by_module = defaultdict(set)
        for qualifier in descriptor.imports:
            if "." not in qualifier:
                continue
            module, name = qualifier.rsplit(".", 1)
            if module in PYTHON_IMPLICIT_MODULES or module == self.config.package_name:
                continue
            by_module[module].add(name)

        third_party = [
            f"from {module} import {', '.join(sorted(names))}"
            for module, names in sorted(by_module.items())
        ]
        if third_party:
            statements.append("")
            statements.extend(third_party)
        return statements


def create_python_generator(package_name: str = "", **custom) -> PythonGenerator:
    """Create a Python generator with the given module path and custom options."""
    from ...core.config import load_config

    overrides = {"custom": custom}
    if package_name:
        overrides["package_name"] = package_name
    return PythonGenerator(load_config("python", overrides))
