"""
Type and field resolution.

Turns declared field types into target-language type strings, synthesizes
enums for fields with literal values and collects the qualifiers a class
has to import.
"""

from typing import Dict, List, Mapping, Optional, Sequence, Set

from .definition import ComponentDefinition, FieldDefinition, TypeDescriptor
from .descriptors import EnumDescriptor, ResolvedField
from .naming import DefaultNamingStrategy, NamingStrategy

META_PREFIX = "@"


class TypeResolver:
    """Resolves type descriptors through a naming strategy."""

    def __init__(
        self,
        naming: Optional[NamingStrategy] = None,
        provided_types: Optional[Mapping[str, str]] = None,
    ):
        """
        Args:
            naming: Naming strategy of the target language
            provided_types: Qualifier overrides, consulted before the strategy
        """
        self.naming = naming or DefaultNamingStrategy()
        self.provided_types: Dict[str, str] = dict(provided_types or {})

    def qualifier_of(self, type_descriptor: TypeDescriptor) -> str:
        """Qualifier after applying provided-type overrides."""
        return self.provided_types.get(
            type_descriptor.qualifier, type_descriptor.qualifier
        )

    def resolve(
        self,
        type_descriptor: TypeDescriptor,
        generic_types: Sequence[TypeDescriptor] = (),
    ) -> str:
        """Render a type and its generic parameters, e.g. ``Map<String, Long>``."""
        base = self.naming.simple_name(self.qualifier_of(type_descriptor))
        if not generic_types:
            return base
        parameters = [self.resolve(generic, generic.generics) for generic in generic_types]
        return self.naming.parameterize(base, parameters)

    def imports_of(self, field: FieldDefinition) -> Set[str]:
        """Qualifiers referenced by a field, generic parameters included."""
        result = {self.qualifier_of(field.type)}
        pending = list(field.generic_types)
        while pending:
            generic = pending.pop()
            result.add(self.qualifier_of(generic))
            pending.extend(generic.generics)
        return result


def synthesize_enum(field: FieldDefinition, naming: NamingStrategy) -> EnumDescriptor:
    """Build the enum descriptor for a field carrying literal values."""
    return EnumDescriptor(naming.enum_name(field.name), tuple(field.enum_values))


class FieldResolver:
    """Maps component field definitions to resolved fields."""

    def __init__(self, type_resolver: TypeResolver, meta_prefix: str = META_PREFIX):
        self.type_resolver = type_resolver
        self.meta_prefix = meta_prefix

    @property
    def naming(self) -> NamingStrategy:
        return self.type_resolver.naming

    def resolve_fields(
        self,
        component: ComponentDefinition,
        discriminator_field_name: Optional[str] = None,
    ) -> List[ResolvedField]:
        """
        Resolve the fields of a component in declaration order.

        Meta fields and the active discriminator field are left out. The
        discriminator is never turned into an enum, its literal is the
        variant tag instead.
        """
        result = []
        for field in component.fields.values():
            if self.meta_prefix and field.name.startswith(self.meta_prefix):
                continue
            if field.name == discriminator_field_name:
                continue

            enum = None
            if field.is_enum:
                enum = synthesize_enum(field, self.naming)
                if field.type.is_array:
                    collection = self.naming.simple_name(
                        self.type_resolver.qualifier_of(field.type)
                    )
                    field_type = self.naming.parameterize(collection, [enum.name])
                else:
                    field_type = enum.name
            else:
                field_type = self.type_resolver.resolve(field.type, field.generic_types)

            result.append(
                ResolvedField(
                    name=field.name,
                    resolved_type=field_type,
                    enum=enum,
                    is_required=field.is_required,
                )
            )
        return result

    def component_imports(self, component: ComponentDefinition) -> Set[str]:
        """Qualifiers referenced by any declared field of a component."""
        result: Set[str] = set()
        for field in component.fields.values():
            result.update(self.type_resolver.imports_of(field))
        return result
