"""
Discriminated union (oneOf) helpers.

Flattens the variant graph of a union and computes the fields shared by
all of its leaf variants.
"""

from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .definition import ComponentDefinition, Discriminator
from .descriptors import ResolvedField
from .errors import IllegalOperationError, SchemaValidationError
from .resolver import FieldResolver


def require_discriminator(
    component: ComponentDefinition, operation: str = "this operation"
) -> Discriminator:
    """Return the discriminator of a union, fail for plain components."""
    if component.discriminator is None:
        raise IllegalOperationError(component.name, operation)
    return component.discriminator


def immediate_variants(component: ComponentDefinition) -> List[ComponentDefinition]:
    """Variants listed in the discriminator mapping, in mapping order."""
    discriminator = require_discriminator(component, "listing variants")
    if not discriminator.mapping:
        raise SchemaValidationError(
            f"OneOf component '{component.name}' has an empty discriminator mapping"
        )
    return list(discriminator.mapping.values())


def all_leaf_variants(component: ComponentDefinition) -> List[ComponentDefinition]:
    """
    Collect every non-union variant reachable from a union.

    Nested unions contribute their own leaves instead of themselves. The
    result is de-duplicated by component name and keeps depth-first mapping
    order.

    Raises:
        IllegalOperationError: If the component is not a union
        SchemaValidationError: On an empty mapping or a cyclic variant graph
    """
    require_discriminator(component, "leaf flattening")
    leaves: Dict[str, ComponentDefinition] = {}

    def visit(union: ComponentDefinition, path: Tuple[str, ...]):
        for variant in immediate_variants(union):
            if not variant.is_union:
                leaves.setdefault(variant.name, variant)
            elif variant.name in path:
                cycle = " -> ".join(path + (variant.name,))
                raise SchemaValidationError(f"Cyclic discriminator mapping: {cycle}")
            else:
                visit(variant, path + (variant.name,))

    visit(component, (component.name,))
    return list(leaves.values())


def variant_tag(variant: ComponentDefinition, discriminator_field_name: str) -> str:
    """The single discriminator literal declared by a leaf variant."""
    field = variant.get_field(discriminator_field_name)
    if field is None:
        raise SchemaValidationError(
            f"Variant '{variant.name}' does not declare discriminator field "
            f"'{discriminator_field_name}'",
            field_name=discriminator_field_name,
        )
    if len(field.enum_values) != 1:
        raise SchemaValidationError(
            f"Discriminator field '{discriminator_field_name}' of variant "
            f"'{variant.name}' must declare exactly one enum value, "
            f"got {list(field.enum_values)}",
            field_name=discriminator_field_name,
        )
    return field.enum_values[0]


def extract_common_fields(
    leaf_variants: Sequence[ComponentDefinition],
    discriminator_field_name: Optional[str],
    field_resolver: FieldResolver,
) -> Dict[str, ResolvedField]:
    """
    Find the fields declared by every leaf variant.

    Returns:
        Dict of field name to abstract ResolvedField, in first-seen order

    Raises:
        SchemaValidationError: If a common field has different shapes
    """
    resolved = [
        field_resolver.resolve_fields(variant, discriminator_field_name)
        for variant in leaf_variants
    ]
    if not resolved:
        return {}

    common_names: Set[str] = {f.name for f in resolved[0]}
    for fields in resolved[1:]:
        common_names &= {f.name for f in fields}

    common_fields: Dict[str, ResolvedField] = {}
    for fields in resolved:
        for field in fields:
            if field.name not in common_names:
                continue
            existing = common_fields.get(field.name)
            if existing is None:
                common_fields[field.name] = replace(field, abstract=True)
            elif existing.shape != field.shape:
                raise SchemaValidationError(
                    f"Common field '{field.name}' type defined differently "
                    f"in oneOf DTOs: {existing.describe()} != {field.describe()}",
                    field_name=field.name,
                    first=existing,
                    second=field,
                )
    return common_fields
