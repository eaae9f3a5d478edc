"""
Component compiler.

Compiles a component definition into a class descriptor tree: a single
class for plain components, a union class with subclasses for oneOf
components. Common fields of union variants can be lifted into the union
as abstract declarations (inheritance mode).
"""

from dataclasses import replace
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from ..logging_config import get_logger
from .definition import ComponentDefinition
from .descriptors import (
    ClassDescriptor,
    ResolvedField,
    SingleClassDescriptor,
    UnionClassDescriptor,
)
from .errors import CompilerError
from .naming import NamingStrategy
from .resolver import META_PREFIX, FieldResolver, TypeResolver
from .union import (
    all_leaf_variants,
    extract_common_fields,
    immediate_variants,
    require_discriminator,
    variant_tag,
)

logger = get_logger(__name__)


class ComponentCompiler:
    """Compiles component definitions into class descriptors.

    The compiler keeps no state between calls; one instance can be reused
    for any number of components.
    """

    def __init__(
        self,
        naming: Optional[NamingStrategy] = None,
        provided_types: Optional[Mapping[str, str]] = None,
        meta_prefix: str = META_PREFIX,
    ):
        """
        Args:
            naming: Naming strategy of the target language
            provided_types: Qualifier overrides applied during type resolution
            meta_prefix: Fields whose name starts with it are not emitted
        """
        self.type_resolver = TypeResolver(naming, provided_types)
        self.field_resolver = FieldResolver(self.type_resolver, meta_prefix)

    @property
    def naming(self) -> NamingStrategy:
        return self.type_resolver.naming

    def compile(
        self, component: ComponentDefinition, with_inheritance: bool = False
    ) -> ClassDescriptor:
        """
        Compile a component, dispatching on its kind.

        Args:
            component: Root component definition
            with_inheritance: Lift fields shared by all union leaves into the union

        Returns:
            SingleClassDescriptor or UnionClassDescriptor

        Raises:
            SchemaValidationError: If the component graph cannot be compiled
        """
        if component.is_union:
            return self.compile_union(component, with_inheritance)
        return self.compile_single(component)

    def compile_single(self, component: ComponentDefinition) -> SingleClassDescriptor:
        """Compile a component without a discriminator."""
        logger.debug("Compiling class %s", component.name)
        return self._build_single(component, self.field_resolver.resolve_fields(component))

    def compile_union(
        self,
        component: ComponentDefinition,
        with_inheritance: bool,
        parent_common_fields: Optional[Mapping[str, ResolvedField]] = None,
    ) -> UnionClassDescriptor:
        """
        Compile a oneOf component and, recursively, its nested unions.

        Args:
            component: Union component definition
            with_inheritance: Lift common leaf fields into the union
            parent_common_fields: Common fields already declared by the enclosing union

        Raises:
            IllegalOperationError: If the component has no discriminator
        """
        discriminator = require_discriminator(component, "union compilation")
        discriminator_field_name = discriminator.field_name
        parent_common_fields = parent_common_fields or {}
        logger.debug(
            "Compiling union %s (discriminator=%s, inheritance=%s)",
            component.name,
            discriminator_field_name,
            with_inheritance,
        )

        leaf_variants = all_leaf_variants(component)
        common_fields: Dict[str, ResolvedField] = (
            extract_common_fields(
                leaf_variants, discriminator_field_name, self.field_resolver
            )
            if with_inheritance
            else {}
        )

        imports = set()
        subclasses: List[ClassDescriptor] = []
        variant_mapping: Dict[str, str] = {}

        for variant in immediate_variants(component):
            imports.update(self.field_resolver.component_imports(variant))

            if variant.is_union:
                nested = self.compile_union(variant, with_inheritance, common_fields)
                imports.update(nested.imports)
                variant_mapping.update(nested.variant_mapping)
                subclasses.append(nested)
            else:
                leaf = self._compile_leaf_variant(
                    variant, discriminator_field_name, common_fields
                )
                variant_mapping[leaf.name] = variant_tag(variant, discriminator_field_name)
                subclasses.append(leaf)

        own_common_fields = [
            field for name, field in common_fields.items()
            if name not in parent_common_fields
        ]

        return UnionClassDescriptor(
            name=component.name,
            qualifier=component.qualifier,
            imports=tuple(sorted(imports)),
            common_fields=tuple(own_common_fields),
            subclasses=tuple(subclasses),
            discriminator_field_name=discriminator_field_name,
            variant_mapping=MappingProxyType(variant_mapping),
        )

    def _compile_leaf_variant(
        self,
        variant: ComponentDefinition,
        discriminator_field_name: str,
        common_fields: Mapping[str, ResolvedField],
    ) -> SingleClassDescriptor:
        fields = [
            replace(field, overridden=field.name in common_fields)
            for field in self.field_resolver.resolve_fields(
                variant, discriminator_field_name
            )
        ]
        # Inherited fields go first, own fields last
        ordered = [f for f in fields if f.overridden] + [f for f in fields if not f.overridden]
        return self._build_single(variant, ordered)

    def _build_single(
        self, component: ComponentDefinition, fields: List[ResolvedField]
    ) -> SingleClassDescriptor:
        return SingleClassDescriptor(
            name=component.name,
            qualifier=component.qualifier,
            imports=tuple(sorted(self.field_resolver.component_imports(component))),
            fields=tuple(fields),
        )


class CompilationResult:
    """Outcome of a compilation: a descriptor or the error that stopped it."""

    def __init__(
        self,
        descriptor: Optional[ClassDescriptor] = None,
        error: Optional[CompilerError] = None,
    ):
        self.descriptor = descriptor
        self.error = error

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, error: CompilerError) -> "CompilationResult":
        """Create a failed compilation result."""
        return cls(error=error)


def compile_component(
    component: ComponentDefinition,
    with_inheritance: bool = False,
    naming: Optional[NamingStrategy] = None,
    provided_types: Optional[Mapping[str, str]] = None,
    meta_prefix: str = META_PREFIX,
) -> CompilationResult:
    """
    Compile a component and capture compiler errors in the result.

    Args:
        component: Root component definition
        with_inheritance: Lift common union fields into the union class
        naming: Naming strategy of the target language
        provided_types: Qualifier overrides
        meta_prefix: Prefix of fields that are never emitted

    Returns:
        CompilationResult holding the descriptor or the error
    """
    compiler = ComponentCompiler(naming, provided_types, meta_prefix)
    try:
        return CompilationResult(compiler.compile(component, with_inheritance))
    except CompilerError as e:
        logger.error("Compilation of %s failed: %s", component.name, e)
        return CompilationResult.failure(e)
