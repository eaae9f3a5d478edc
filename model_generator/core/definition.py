"""
Component definitions: the input side of the compiler.

A component definition graph describes named schema entities, their fields
and, for discriminated unions (oneOf), the discriminator mapping that ties
a union to its variants. Definitions are immutable once built.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Set, Tuple

from ..logging_config import get_logger

logger = get_logger(__name__)

ARRAY_TYPE_NAME = "array"


class DefinitionError(Exception):
    """Raised when a component document cannot be turned into definitions."""

    pass


@dataclass(frozen=True)
class TypeDescriptor:
    """A declared type: fully-qualified name plus optional generic parameters."""

    qualifier: str
    name: str = ""  # schema-level type name, "array" for collections
    generics: Tuple["TypeDescriptor", ...] = ()

    @property
    def is_array(self) -> bool:
        return self.name == ARRAY_TYPE_NAME


@dataclass(frozen=True)
class FieldDefinition:
    """A single field of a component."""

    name: str
    type: TypeDescriptor
    generic_types: Tuple[TypeDescriptor, ...] = ()
    enum_values: Tuple[str, ...] = ()
    is_required: bool = False

    @property
    def is_enum(self) -> bool:
        return bool(self.enum_values)


@dataclass(frozen=True, eq=False)
class Discriminator:
    """Discriminator field name and the literal -> variant mapping of a union."""

    field_name: str
    mapping: Mapping[str, "ComponentDefinition"] = field(default_factory=dict)


@dataclass(frozen=True, eq=False)
class ComponentDefinition:
    """A named schema component; a oneOf union when it has a discriminator."""

    name: str
    qualifier: str
    fields: Mapping[str, FieldDefinition] = field(default_factory=dict)
    discriminator: Optional[Discriminator] = None

    @property
    def is_union(self) -> bool:
        return self.discriminator is not None

    def get_field(self, name: str) -> Optional[FieldDefinition]:
        """Get field by name."""
        return self.fields.get(name)

    def __repr__(self) -> str:
        kind = "union" if self.is_union else "component"
        return f"<{kind} {self.qualifier}.{self.name}>" if self.qualifier else f"<{kind} {self.name}>"


def _convert_type(data: Any, where: str) -> TypeDescriptor:
    if isinstance(data, str):
        return TypeDescriptor(qualifier=data)
    if not isinstance(data, dict) or "qualifier" not in data:
        raise DefinitionError(f"{where}: type must be a string or an object with 'qualifier'")
    generics = tuple(
        _convert_type(item, f"{where}<{index}>")
        for index, item in enumerate(data.get("generics", []))
    )
    return TypeDescriptor(
        qualifier=data["qualifier"], name=data.get("type", ""), generics=generics
    )


def _convert_field(name: str, data: Dict[str, Any], where: str) -> FieldDefinition:
    if not isinstance(data, dict):
        raise DefinitionError(f"{where}: field definition must be an object")

    field_type = _convert_type(data, where)
    enum_values = data.get("enum", [])
    if not isinstance(enum_values, list) or not all(
        isinstance(value, str) for value in enum_values
    ):
        raise DefinitionError(f"{where}: 'enum' must be a list of strings")

    return FieldDefinition(
        name=name,
        type=TypeDescriptor(qualifier=field_type.qualifier, name=field_type.name),
        generic_types=field_type.generics,
        enum_values=tuple(enum_values),
        is_required=bool(data.get("required", False)),
    )


def load_components(document: Dict[str, Any]) -> Dict[str, ComponentDefinition]:
    """
    Build component definitions from a JSON component document.

    Discriminator mappings refer to other components by name. The whole
    graph is built bottom-up, so every referenced component is created
    before the union that references it.

    Args:
        document: Parsed JSON with a top-level "components" object

    Returns:
        Dict mapping component name to ComponentDefinition, in document order

    Raises:
        DefinitionError: On malformed input, unknown references or cycles
    """
    raw_components = document.get("components") if isinstance(document, dict) else None
    if not isinstance(raw_components, dict):
        raise DefinitionError("Document must contain a 'components' object")

    built: Dict[str, ComponentDefinition] = {}
    building: Set[str] = set()

    def build(name: str, path: Tuple[str, ...]) -> ComponentDefinition:
        if name in built:
            return built[name]
        if name in building:
            cycle = " -> ".join(path + (name,))
            raise DefinitionError(f"Cyclic discriminator mapping: {cycle}")
        if name not in raw_components:
            raise DefinitionError(
                f"Component '{path[-1]}' references unknown component '{name}'"
            )

        data = raw_components[name]
        if not isinstance(data, dict):
            raise DefinitionError(f"Component '{name}' must be an object")

        building.add(name)
        fields = {
            field_name: _convert_field(field_name, field_data, f"{name}.{field_name}")
            for field_name, field_data in data.get("fields", {}).items()
        }

        discriminator = None
        if "discriminator" in data:
            raw_discriminator = data["discriminator"]
            if not isinstance(raw_discriminator, dict) or "field" not in raw_discriminator:
                raise DefinitionError(
                    f"Component '{name}': discriminator needs a 'field' entry"
                )
            mapping = {
                literal: build(target, path + (name,))
                for literal, target in raw_discriminator.get("mapping", {}).items()
            }
            discriminator = Discriminator(raw_discriminator["field"], mapping)

        building.discard(name)
        component = ComponentDefinition(
            name=name,
            qualifier=data.get("qualifier", ""),
            fields=fields,
            discriminator=discriminator,
        )
        built[name] = component
        return component

    for component_name in raw_components:
        build(component_name, ())

    logger.debug("Loaded %d component definitions", len(built))
    return {name: built[name] for name in raw_components}
